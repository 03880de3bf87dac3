"""Monster generation for the stage battle game.

Every stage gets a brand new monster whose stats grow linearly with the
stage number.
"""

from __future__ import annotations

import logging

import config
from models import Monster, validate_stage
from utils import RandomProvider

logger = logging.getLogger(__name__)


class MonsterGenerator:
    """Builds fully-formed Monster instances for a given stage."""

    def __init__(self, random_provider: RandomProvider) -> None:
        self.random_provider = random_provider

    def generate_monster(self, stage: int) -> Monster:
        """Generate the monster guarding ``stage``.

        Args:
            stage: Stage number, starting at 1

        Returns:
            Monster with hp 50 + 10 x stage, attack 5 + stage and a counter
            chance of 10% + 1% per stage (capped at 50%)

        Raises:
            ValueError: If ``stage`` is below 1
        """
        validate_stage(stage)
        monster = Monster(
            hp=config.MONSTER_BASE_HP + config.MONSTER_HP_PER_STAGE * stage,
            attack_power=config.MONSTER_BASE_ATTACK + config.MONSTER_ATTACK_PER_STAGE * stage,
            counter_chance=self.counter_chance_for(stage),
            random_provider=self.random_provider,
        )
        logger.debug("Generated monster for stage %d: %r", stage, monster)
        return monster

    @staticmethod
    def counter_chance_for(stage: int) -> float:
        return min(
            config.MONSTER_COUNTER_BASE_CHANCE + config.MONSTER_COUNTER_CHANCE_PER_STAGE * stage,
            config.MONSTER_COUNTER_CHANCE_CAP,
        )
