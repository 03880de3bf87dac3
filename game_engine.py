from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import config
from combat_engine import BattleResult, CombatEngine, Presenter
from models import Monster, Player
from monster_generator import MonsterGenerator
from utils import DefaultRandomProvider, RandomProvider

logger = logging.getLogger(__name__)


@dataclass
class CampaignResult:
    final_stage: int
    stages_completed: int
    cleared_all: bool


class GameEngine:
    """Main orchestrator for the stage-by-stage campaign."""

    def __init__(
        self,
        presenter: Presenter,
        random_provider: Optional[RandomProvider] = None,
        combat_engine: Optional[CombatEngine] = None,
    ) -> None:
        """Initialize the campaign with a fresh player.

        Args:
            presenter: Screen/input port shared with the combat engine
            random_provider: Random source; defaults to the global random module
            combat_engine: Battle resolver; built from the other arguments if omitted
        """
        self.presenter = presenter
        self.random_provider: RandomProvider = random_provider or DefaultRandomProvider()
        self.combat_engine = combat_engine or CombatEngine(self.random_provider, presenter)
        self.monster_generator = MonsterGenerator(self.random_provider)
        self.player = Player(random_provider=self.random_provider)
        self.stage: int = 1
        self.current_monster: Optional[Monster] = None
        self.last_battle: Optional[BattleResult] = None

    def start_game(self) -> CampaignResult:
        logger.info("Campaign started: %d stages", config.FINAL_STAGE)
        while self.stage <= config.FINAL_STAGE:
            self.current_monster = self.monster_generator.generate_monster(self.stage)
            self.last_battle = self.combat_engine.run_battle(
                self.stage, self.player, self.current_monster
            )

            if not self.player.is_alive():
                self.presenter.announce("Game over!", "bold red")
                logger.info("Campaign lost at stage %d", self.stage)
                return CampaignResult(
                    final_stage=self.stage,
                    stages_completed=self.stage - 1,
                    cleared_all=False,
                )

            self.player.increase_stats()
            # The monster is discarded right after this; the next stage builds a new one
            self.current_monster.increase_stats(self.stage)
            self.stage += 1

        self.presenter.announce("Congratulations! You cleared every stage.", "bold green")
        logger.info("Campaign cleared all %d stages", config.FINAL_STAGE)
        return CampaignResult(
            final_stage=config.FINAL_STAGE,
            stages_completed=config.FINAL_STAGE,
            cleared_all=True,
        )
