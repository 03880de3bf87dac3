from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

import config
from utils import DefaultRandomProvider, RandomProvider

logger = logging.getLogger(__name__)


class Action(Enum):
    # Player intents, keyed by the literal text typed at the prompt.
    ATTACK = "1"
    MULTI_ATTACK = "2"
    DEFEND = "3"
    COUNTER = "4"
    FLEE = "5"

    @classmethod
    def from_choice(cls, choice: str) -> Optional["Action"]:
        """Map raw prompt input to an Action; returns None for anything else."""
        try:
            return cls(choice)
        except ValueError:
            return None


class BattleOutcome(Enum):
    ONGOING = auto()
    PLAYER_WON = auto()
    PLAYER_LOST = auto()
    PLAYER_FLED = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not BattleOutcome.ONGOING


@dataclass(frozen=True)
class AttackResult:
    damage: int
    is_critical: bool


@dataclass(frozen=True)
class MultiAttackResult:
    total_damage: int
    num_attacks: int


@dataclass(frozen=True)
class MonsterAttackResult:
    damage: int
    counter: bool


def validate_stage(stage: int) -> None:
    if stage < 1:
        raise ValueError(f"Stage must be at least 1, got {stage}")


def critical_chance(stage: int) -> float:
    """Chance that a player attack lands as a critical hit at ``stage``."""
    return config.CRITICAL_BASE_CHANCE + config.CRITICAL_CHANCE_PER_STAGE * stage


def persist_floor(stage: int) -> int:
    """HP the player is restored to when the persistence check succeeds."""
    return math.floor(config.PERSIST_BASE_HP + stage * config.PERSIST_HP_PER_STAGE)


@dataclass
class Actor:
    """Shared health bookkeeping for both sides of a battle."""
    hp: int
    attack_power: int

    def take_damage(self, amount: int) -> int:
        """Subtract ``amount`` from hp (never below zero); returns ``amount``."""
        if amount < 0:
            raise ValueError(f"Damage must be non-negative, got {amount}")
        self.hp = max(0, self.hp - amount)
        return amount

    def is_alive(self) -> bool:
        return self.hp > 0


@dataclass
class Player(Actor):
    hp: int = config.PLAYER_BASE_HP
    attack_power: int = config.PLAYER_BASE_ATTACK
    defense_power: int = config.PLAYER_BASE_DEFENSE
    stage_clear_count: int = 0
    random_provider: RandomProvider = field(
        default_factory=DefaultRandomProvider, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.attack_power < 1:
            raise ValueError(f"Attack power must be at least 1, got {self.attack_power}")
        if self.defense_power < 1:
            raise ValueError(f"Defense power must be at least 1, got {self.defense_power}")

    @property
    def max_hp(self) -> int:
        return config.PLAYER_BASE_HP + config.PLAYER_MAX_HP_PER_CLEAR * self.stage_clear_count

    def roll_attack(self, stage: int) -> AttackResult:
        """Roll a single (possibly critical) hit without applying it.

        Args:
            stage: Current stage; raises the critical chance by 1% per stage

        Returns:
            AttackResult with the final damage and whether it was critical
        """
        validate_stage(stage)
        base_damage = self.random_provider.randint(1, self.attack_power)
        is_critical = self.random_provider.random() < critical_chance(stage)
        damage = base_damage * config.CRITICAL_MULTIPLIER if is_critical else base_damage
        return AttackResult(damage=damage, is_critical=is_critical)

    def attack(self, monster: "Monster", stage: int) -> AttackResult:
        result = self.roll_attack(stage)
        monster.take_damage(result.damage)
        return result

    def counter_attack(self, monster: "Monster", stage: int) -> AttackResult:
        result = self.roll_attack(stage)
        monster.take_damage(result.damage)
        return result

    def multi_attack(self, monster: "Monster", stage: int) -> MultiAttackResult:
        """Strike once, or 2-3 times when the flurry roll succeeds.

        Each hit is an independent, non-critical roll applied separately.
        """
        validate_stage(stage)
        if self.random_provider.random() < config.MULTI_ATTACK_CHANCE:
            num_attacks = self.random_provider.randint(
                config.MULTI_ATTACK_MIN_HITS, config.MULTI_ATTACK_MAX_HITS
            )
        else:
            num_attacks = 1
        total_damage = 0
        for _ in range(num_attacks):
            hit = self.random_provider.randint(1, self.attack_power)
            monster.take_damage(hit)
            total_damage += hit
        return MultiAttackResult(total_damage=total_damage, num_attacks=num_attacks)

    def defend(self) -> int:
        """Returns the mitigation for the incoming blow (0 when the guard fails)."""
        if self.random_provider.random() < config.DEFEND_CHANCE:
            return self.random_provider.randint(1, self.defense_power)
        return 0

    def restore(self, amount: int) -> int:
        """Heal by ``amount`` capped at max_hp; returns hp actually gained."""
        if amount < 0:
            raise ValueError(f"Heal amount must be non-negative, got {amount}")
        before = self.hp
        self.hp = min(self.hp + amount, self.max_hp)
        return max(0, self.hp - before)

    def heal(self) -> int:
        return self.restore(config.VICTORY_HEAL_AMOUNT)

    def increase_stats(self) -> None:
        self.attack_power += self.random_provider.randint(
            config.ATTACK_GROWTH_MIN, config.ATTACK_GROWTH_MAX
        )
        self.defense_power += self.random_provider.randint(
            config.DEFENSE_GROWTH_MIN, config.DEFENSE_GROWTH_MAX
        )
        self.stage_clear_count += 1
        # Uses the max_hp raised by the clear above
        self.restore(config.VICTORY_HEAL_AMOUNT)
        logger.debug(
            "Player grew: atk=%d def=%d clears=%d hp=%d/%d",
            self.attack_power, self.defense_power, self.stage_clear_count, self.hp, self.max_hp,
        )

    def try_persist(self, stage: int) -> bool:
        """Roll the persistence check after a lethal blow.

        Returns:
            True if the player clings on (hp raised to the stage floor),
            False if the player is defeated
        """
        validate_stage(stage)
        if self.random_provider.random() < config.PERSIST_CHANCE:
            self.hp = max(self.hp, persist_floor(stage))
            return True
        return False


@dataclass
class Monster(Actor):
    counter_chance: float = config.MONSTER_COUNTER_BASE_CHANCE
    random_provider: RandomProvider = field(
        default_factory=DefaultRandomProvider, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.attack_power < 1:
            raise ValueError(f"Attack power must be at least 1, got {self.attack_power}")
        if not 0.0 <= self.counter_chance <= 1.0:
            raise ValueError(f"Counter chance must be within [0, 1], got {self.counter_chance}")

    def attack(self) -> MonsterAttackResult:
        """Roll the monster's blow. The caller decides how it lands."""
        damage = self.random_provider.randint(1, self.attack_power)
        counter = self.random_provider.random() < self.counter_chance
        return MonsterAttackResult(damage=damage, counter=counter)

    def increase_stats(self, stage: int) -> None:
        validate_stage(stage)
        self.hp += self.random_provider.randint(0, stage * config.MONSTER_HP_PER_STAGE - 1)
        self.hp += config.MONSTER_GROWTH_FLAT_HP
        self.attack_power += self.random_provider.randint(1, stage)
