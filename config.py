# Tuning constants for the stage battle campaign
from __future__ import annotations

# Campaign length
FINAL_STAGE: int = 100

# Player base values
PLAYER_BASE_HP: int = 100
PLAYER_BASE_ATTACK: int = 10
PLAYER_BASE_DEFENSE: int = 5
PLAYER_MAX_HP_PER_CLEAR: int = 30

# Player growth after each stage (inclusive ranges)
ATTACK_GROWTH_MIN: int = 5
ATTACK_GROWTH_MAX: int = 9
DEFENSE_GROWTH_MIN: int = 3
DEFENSE_GROWTH_MAX: int = 6

# Healing
VICTORY_HEAL_AMOUNT: int = 20
PERFECT_BLOCK_HEAL_AMOUNT: int = 30

# Player combat rolls
CRITICAL_BASE_CHANCE: float = 0.10
CRITICAL_CHANCE_PER_STAGE: float = 0.01
CRITICAL_MULTIPLIER: int = 2
MULTI_ATTACK_CHANCE: float = 0.20
MULTI_ATTACK_MIN_HITS: int = 2
MULTI_ATTACK_MAX_HITS: int = 3
DEFEND_CHANCE: float = 0.50

# Persistence check (surviving a lethal blow)
PERSIST_CHANCE: float = 0.50
PERSIST_BASE_HP: int = 50
PERSIST_HP_PER_STAGE: float = 7.5

# Monster scaling
MONSTER_BASE_HP: int = 50
MONSTER_HP_PER_STAGE: int = 10
MONSTER_BASE_ATTACK: int = 5
MONSTER_ATTACK_PER_STAGE: int = 1
MONSTER_COUNTER_BASE_CHANCE: float = 0.10
MONSTER_COUNTER_CHANCE_PER_STAGE: float = 0.01
MONSTER_COUNTER_CHANCE_CAP: float = 0.50
MONSTER_GROWTH_FLAT_HP: int = 10
REFLECTED_COUNTER_MULTIPLIER: float = 1.5

# Per-turn action chances: (base, cap). A fresh increment in
# [STAGE_INCREMENT_MIN, STAGE_INCREMENT_MAX] is added per stage above 1.
STAGE_INCREMENT_MIN: float = 0.01
STAGE_INCREMENT_MAX: float = 0.03
ACTION_CHANCES = {
    "attack": (0.20, 0.35),
    "multi_attack": (0.15, 0.30),
    "flee": (0.03, 0.10),
    "counter": (0.25, 0.40),
}
