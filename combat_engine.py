"""Combat system engine for the stage battle game.

This module handles all combat-related logic: per-turn action chances,
resolution of the five player actions, monster retaliation, the
persistence check and the battle loop for a single stage.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

import config
import ui
from models import Action, BattleOutcome, Monster, Player
from narrative_engine import NarrativeEngine
from utils import RandomProvider, random_between

logger = logging.getLogger(__name__)

CHOICE_PROMPT = "Your choice? "


class Presenter(Protocol):
    """I/O boundary for the battle: draw a screen, read one line of input."""
    def render(self, lines: Sequence[str]) -> None: ...
    def read_choice(self, prompt: str) -> str: ...
    def announce(self, message: str, style: str = "") -> None: ...


def _percent(chance: float) -> int:
    return math.floor(chance * 100 + 0.5)


@dataclass(frozen=True)
class StageChances:
    attack: float
    multi_attack: float
    flee: float
    counter: float

    def menu_line(self) -> str:
        """Action menu with the live percentages, as shown before each turn."""
        return (
            f"1. Attack ({_percent(self.attack)}%, double damage) "
            f"2. Multi-attack ({_percent(self.multi_attack)}%, 1-3 hits) "
            f"3. Defend and recover ({_percent(config.DEFEND_CHANCE)}%) "
            f"4. Counter ({_percent(self.counter)}%, 1.5x damage) "
            f"5. Flee ({_percent(self.flee)}%)"
        )


def compute_stage_chances(stage: int, random_provider: RandomProvider) -> StageChances:
    """Compute the four action chances for one turn at ``stage``.

    Each chance gets its own fresh increment in [0.01, 0.03) per stage above
    the first, and is capped at its ceiling.

    Args:
        stage: Current stage (>= 1)
        random_provider: Source for the per-turn increments

    Returns:
        StageChances for this turn
    """
    if stage < 1:
        raise ValueError(f"Stage must be at least 1, got {stage}")
    chances = {}
    for name, (base, cap) in config.ACTION_CHANCES.items():
        increment = random_between(
            random_provider, config.STAGE_INCREMENT_MIN, config.STAGE_INCREMENT_MAX
        )
        chances[name] = min(base + increment * (stage - 1), cap)
    return StageChances(**chances)


@dataclass
class RetaliationResult:
    damage_to_player: int = 0
    damage_to_monster: int = 0
    healed: int = 0
    blocked: bool = False
    reflected: bool = False


@dataclass
class TurnResult:
    """Effects of one resolved turn, as seen from the player's side."""
    choice: str
    action: Optional[Action]
    outcome: BattleOutcome = BattleOutcome.ONGOING
    damage_dealt: int = 0
    damage_taken: int = 0
    hp_healed: int = 0
    mitigation: int = 0
    hits: int = 0
    is_critical: bool = False
    counter_success: bool = False
    persisted: bool = False


@dataclass
class BattleResult:
    outcome: BattleOutcome
    logs: List[str] = field(default_factory=list)
    turns: int = 0


class CombatEngine:
    """Resolves battles between the player and one stage's monster."""

    def __init__(self, random_provider: RandomProvider, presenter: Presenter) -> None:
        """Initialize the combat engine.

        Args:
            random_provider: Random number generator for flee and counter rolls
            presenter: Screen/input port used by the battle loop
        """
        self.random_provider = random_provider
        self.presenter = presenter

    def compute_chances(self, stage: int) -> StageChances:
        return compute_stage_chances(stage, self.random_provider)

    def build_screen(
        self,
        stage: int,
        player: Player,
        monster: Monster,
        logs: Sequence[str],
        chances: Optional[StageChances] = None,
    ) -> List[str]:
        lines = ui.format_status(stage, player, monster)
        lines.extend(logs)
        if chances is not None:
            lines.append("")
            lines.append(f"[green]{chances.menu_line()}[/green]")
        return lines

    def run_battle(self, stage: int, player: Player, monster: Monster) -> BattleResult:
        """Run the complete battle for ``stage`` until it is won, lost or fled.

        Args:
            stage: Current stage number
            player: The player, mutated in place
            monster: This stage's monster, mutated in place

        Returns:
            BattleResult with the terminal outcome and the full battle log
        """
        narrative = NarrativeEngine()
        outcome = BattleOutcome.ONGOING
        turns = 0
        logger.info("Stage %d battle started: player hp=%d, monster hp=%d", stage, player.hp, monster.hp)
        while not outcome.is_terminal:
            chances = self.compute_chances(stage)
            self.presenter.render(self.build_screen(stage, player, monster, narrative.logs, chances))
            choice = self.presenter.read_choice(CHOICE_PROMPT).strip()
            turn = self.execute_turn(choice, stage, player, monster, chances, narrative)
            outcome = turn.outcome
            turns += 1

        self.presenter.render(self.build_screen(stage, player, monster, narrative.logs))
        logger.info("Stage %d battle ended after %d turn(s): %s", stage, turns, outcome.name)
        return BattleResult(outcome=outcome, logs=list(narrative.logs), turns=turns)

    def execute_turn(
        self,
        choice: str,
        stage: int,
        player: Player,
        monster: Monster,
        chances: StageChances,
        narrative: NarrativeEngine,
    ) -> TurnResult:
        """Resolve one player choice and everything that follows from it.

        Args:
            choice: Raw input; "1".."5" select an action, anything else is
                logged as invalid and costs nothing
            stage: Current stage number
            player: The acting player
            monster: The current monster
            chances: This turn's action chances
            narrative: Battle log to append to

        Returns:
            TurnResult describing the effects of the turn
        """
        action = Action.from_choice(choice)
        turn = TurnResult(choice=choice, action=action)
        # Drawn every turn, whatever the player picked
        turn.counter_success = self.random_provider.random() < chances.counter
        logger.debug("Stage %d turn: choice=%r action=%s", stage, choice, action)

        if action is Action.ATTACK:
            result = player.attack(monster, stage)
            turn.damage_dealt += result.damage
            turn.is_critical = result.is_critical
            turn.hits = 1
            narrative.describe_attack(result)
            if self._check_victory(player, monster, narrative, turn):
                return turn
            self._apply_retaliation(player, monster, 0, narrative, turn)

        elif action is Action.MULTI_ATTACK:
            multi = player.multi_attack(monster, stage)
            turn.damage_dealt += multi.total_damage
            turn.hits = multi.num_attacks
            narrative.describe_multi_attack(multi)
            if self._check_victory(player, monster, narrative, turn):
                return turn
            self._apply_retaliation(player, monster, 0, narrative, turn)

        elif action is Action.DEFEND:
            turn.mitigation = player.defend()
            narrative.describe_defend_attempt()
            self._apply_retaliation(player, monster, turn.mitigation, narrative, turn)

        elif action is Action.COUNTER:
            # The counter strike lands either way
            result = player.counter_attack(monster, stage)
            turn.damage_dealt += result.damage
            turn.is_critical = result.is_critical
            turn.hits = 1
            if turn.counter_success:
                narrative.describe_counter_success(result)
            else:
                # A failed counter also turns the same roll against the player
                turn.damage_taken += player.take_damage(result.damage)
                narrative.describe_counter_failure(result.damage)
            if self._check_victory(player, monster, narrative, turn):
                return turn

        elif action is Action.FLEE:
            if self.random_provider.random() < chances.flee:
                narrative.describe_flee(True)
                turn.outcome = BattleOutcome.PLAYER_FLED
                return turn
            narrative.describe_flee(False)
            self._apply_retaliation(player, monster, 0, narrative, turn)

        else:
            narrative.describe_invalid_choice(choice)

        self._check_persistence(stage, player, narrative, turn)
        return turn

    def handle_monster_attack(
        self,
        player: Player,
        monster: Monster,
        narrative: NarrativeEngine,
        defense: int = 0,
        counter_success: bool = False,
    ) -> RetaliationResult:
        """Resolve the monster's blow against the player.

        Args:
            player: The defending player
            monster: The attacking monster
            narrative: Battle log to append to
            defense: Mitigation rolled by the player this turn (0 if none)
            counter_success: Whether a pre-rolled counter reflects the blow

        Returns:
            RetaliationResult with the damage and healing that landed
        """
        blow = monster.attack()

        if counter_success:
            reflected = math.floor(blow.damage * config.REFLECTED_COUNTER_MULTIPLIER)
            monster.take_damage(reflected)
            narrative.describe_reflected_counter(reflected)
            return RetaliationResult(damage_to_monster=reflected, reflected=True)

        damage = blow.damage
        if defense > 0:
            if defense >= damage:
                healed = player.restore(config.PERFECT_BLOCK_HEAL_AMOUNT)
                narrative.describe_perfect_block(healed, player.hp)
                return RetaliationResult(healed=healed, blocked=True)
            narrative.describe_partial_block()
            damage -= defense

        player.take_damage(damage)
        narrative.describe_monster_hit(damage)
        return RetaliationResult(damage_to_player=damage)

    def _apply_retaliation(
        self,
        player: Player,
        monster: Monster,
        defense: int,
        narrative: NarrativeEngine,
        turn: TurnResult,
    ) -> None:
        retaliation = self.handle_monster_attack(player, monster, narrative, defense=defense)
        turn.damage_taken += retaliation.damage_to_player
        turn.hp_healed += retaliation.healed

    def _check_victory(
        self, player: Player, monster: Monster, narrative: NarrativeEngine, turn: TurnResult
    ) -> bool:
        if monster.is_alive():
            return False
        narrative.describe_kill()
        turn.hp_healed += player.heal()
        turn.outcome = BattleOutcome.PLAYER_WON
        return True

    def _check_persistence(
        self, stage: int, player: Player, narrative: NarrativeEngine, turn: TurnResult
    ) -> None:
        if player.is_alive():
            return
        if player.try_persist(stage):
            turn.persisted = True
            narrative.describe_persist(player.hp)
            logger.debug("Persistence check passed at stage %d: hp=%d", stage, player.hp)
        else:
            narrative.describe_defeat()
            turn.outcome = BattleOutcome.PLAYER_LOST
            logger.debug("Persistence check failed at stage %d", stage)
