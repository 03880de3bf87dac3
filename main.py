from __future__ import annotations

import logging
import sys

import ui
from game_engine import GameEngine


def main() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    presenter = ui.ConsolePresenter()
    game = GameEngine(presenter)
    ui.clear_terminal()
    try:
        game.start_game()
    except (EOFError, KeyboardInterrupt):
        print()
        presenter.announce("You leave the battlefield. Farewell!", "yellow")
        sys.exit(0)


if __name__ == "__main__":
    main()
