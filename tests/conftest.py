from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import pytest


class ScriptedRandomProvider:
    """Random provider that replays fixed draws, failing on any unexpected one."""

    def __init__(self, randoms: Iterable[float] = (), ints: Iterable[int] = ()) -> None:
        self.randoms: List[float] = list(randoms)
        self.ints: List[int] = list(ints)

    def random(self) -> float:
        assert self.randoms, "unexpected random() draw"
        return self.randoms.pop(0)

    def randint(self, a: int, b: int) -> int:
        assert self.ints, f"unexpected randint({a}, {b}) draw"
        value = self.ints.pop(0)
        assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
        return value

    def exhausted(self) -> bool:
        return not self.randoms and not self.ints


class ScriptedPresenter:
    """Presenter that records screens and replays prepared input lines."""

    def __init__(self, choices: Iterable[str] = (), repeat: Optional[str] = None) -> None:
        self.choices: List[str] = list(choices)
        self.repeat = repeat
        self.screens: List[List[str]] = []
        self.prompts: List[str] = []
        self.announcements: List[str] = []

    def render(self, lines: Sequence[str]) -> None:
        self.screens.append(list(lines))

    def read_choice(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.choices:
            return self.choices.pop(0)
        if self.repeat is not None:
            return self.repeat
        raise EOFError("No more scripted input")

    def announce(self, message: str, style: str = "") -> None:
        self.announcements.append(message)


@pytest.fixture
def presenter() -> ScriptedPresenter:
    return ScriptedPresenter()
