from __future__ import annotations

import sys
from typing import List, Sequence

from rich.console import Console

from models import Monster, Player

# Global Rich console instance
console = Console()


def clear_terminal() -> None:
    """Clear the terminal screen using ANSI escape codes (cross-platform)."""
    print("\033[2J\033[H", end="", flush=True)


def hp_style(hp: int, max_hp: int) -> str:
    """Pick the HP color from how much health is left."""
    hp_percentage = (hp / max_hp) * 100 if max_hp > 0 else 0
    if hp_percentage >= 75:
        return "bold green"
    if hp_percentage >= 50:
        return "bold yellow"
    return "bold red"


def format_status(stage: int, player: Player, monster: Monster) -> List[str]:
    """Build the status block shown above the battle log.

    Args:
        stage: Current stage number
        player: Player instance to display status for
        monster: Current Monster

    Returns:
        Status lines using rich console markup
    """
    style = hp_style(player.hp, player.max_hp)
    return [
        "[bold magenta]=== Current Status ===[/bold magenta]",
        (
            f"[cyan]| Stage: {stage} [/cyan]"
            f"[blue]| Player HP: [/blue][{style}]{player.hp}[/{style}][blue]/{player.max_hp} "
            f"| Attack: {player.attack_power} | Defense: {player.defense_power} [/blue]"
            f"[red]| Monster HP: {monster.hp} | Monster Attack: {monster.attack_power} |[/red]"
        ),
        "[bold magenta]======================[/bold magenta]",
        "",
    ]


class ConsolePresenter:
    """Presenter that draws battles on the terminal with rich."""

    def __init__(self, output: Console = console, clear_screen: bool = True) -> None:
        self.console = output
        self.clear_screen = clear_screen

    def render(self, lines: Sequence[str]) -> None:
        if self.clear_screen:
            clear_terminal()
        for line in lines:
            self.console.print(line)

    def read_choice(self, prompt: str) -> str:
        """Read one line of input; raises EOFError when stdin is closed."""
        self.console.print()
        sys.stdout.write(prompt)
        sys.stdout.flush()
        user_input = sys.stdin.readline()
        if not user_input:
            raise EOFError("End of input")
        return user_input.strip()

    def announce(self, message: str, style: str = "") -> None:
        if style:
            self.console.print(f"[{style}]{message}[/{style}]")
        else:
            self.console.print(message)
