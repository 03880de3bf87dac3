"""Battle log narration for the stage battle game.

This module turns combat events into short, styled log lines. Lines use
rich console markup so the console presenter can colorize them; any other
presenter can strip or ignore the tags.
"""

from __future__ import annotations

import logging
from typing import List

from rich.markup import escape

from models import AttackResult, MultiAttackResult

logger = logging.getLogger(__name__)


class NarrativeEngine:
    """Collects the append-only event log of one battle.

    The log is replayed in full before every turn, so lines are never
    edited or removed once written.
    """

    def __init__(self) -> None:
        self.logs: List[str] = []

    def _push(self, style: str, message: str) -> None:
        logger.debug(message)
        self.logs.append(f"[{style}]{message}[/{style}]")

    @staticmethod
    def _critical_tag(is_critical: bool) -> str:
        return " Critical hit!" if is_critical else ""

    def describe_attack(self, result: AttackResult) -> None:
        self._push(
            "green",
            f"You dealt {result.damage} damage to the monster.{self._critical_tag(result.is_critical)}",
        )

    def describe_multi_attack(self, result: MultiAttackResult) -> None:
        self._push(
            "green",
            f"You struck {result.num_attacks} time(s), dealing {result.total_damage} damage to the monster.",
        )

    def describe_kill(self) -> None:
        self._push("yellow", "You defeated the monster!")

    def describe_defend_attempt(self) -> None:
        self._push("blue", "You raise your guard.")

    def describe_counter_success(self, result: AttackResult) -> None:
        self._push(
            "blue",
            "Counter succeeded! You dealt "
            f"{result.damage} damage to the monster.{self._critical_tag(result.is_critical)}",
        )

    def describe_counter_failure(self, damage: int) -> None:
        self._push("red", f"Counter failed! The monster dealt {damage} damage to you.")

    def describe_flee(self, succeeded: bool) -> None:
        if succeeded:
            self._push("yellow", "You fled from the battle.")
        else:
            self._push("red", "You failed to flee.")

    def describe_invalid_choice(self, choice: str) -> None:
        # Raw input must not be parsed as markup
        self._push("red", f"Invalid choice: {escape(repr(choice))}.")

    def describe_reflected_counter(self, damage: int) -> None:
        self._push("blue", f"You turned the monster's blow back on it for {damage} damage.")

    def describe_perfect_block(self, healed: int, hp: int) -> None:
        self._push("blue", "You blocked the attack completely and drank a potion.")
        self._push("green", f"The potion restored {healed} HP. Current HP: {hp}")

    def describe_partial_block(self) -> None:
        self._push("blue", "You blocked part of the monster's attack.")

    def describe_monster_hit(self, damage: int) -> None:
        self._push("red", f"The monster dealt {damage} damage to you.")

    def describe_persist(self, hp: int) -> None:
        self._push("yellow", f"Your fighting spirit flares! Your HP recovers to {hp}.")

    def describe_defeat(self) -> None:
        self._push("red", "You have been defeated.")
