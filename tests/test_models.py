import pytest

from models import Action, BattleOutcome, Monster, Player, critical_chance, persist_floor
from tests.conftest import ScriptedRandomProvider
from utils import SeededRandomProvider


def make_monster(rng, hp=60, attack_power=6, counter_chance=0.11):
    return Monster(hp=hp, attack_power=attack_power, counter_chance=counter_chance, random_provider=rng)


def test_player_defaults():
    player = Player(random_provider=SeededRandomProvider(1))
    assert player.hp == 100
    assert player.attack_power == 10
    assert player.defense_power == 5
    assert player.stage_clear_count == 0
    assert player.max_hp == 100


@pytest.mark.parametrize("clears", [0, 1, 5, 99])
def test_max_hp_tracks_stage_clear_count(clears):
    player = Player(stage_clear_count=clears)
    assert player.max_hp == 100 + 30 * clears


def test_player_rejects_non_positive_stats():
    with pytest.raises(ValueError):
        Player(attack_power=0)
    with pytest.raises(ValueError):
        Player(defense_power=0)


def test_action_from_choice():
    assert Action.from_choice("1") is Action.ATTACK
    assert Action.from_choice("2") is Action.MULTI_ATTACK
    assert Action.from_choice("3") is Action.DEFEND
    assert Action.from_choice("4") is Action.COUNTER
    assert Action.from_choice("5") is Action.FLEE
    assert Action.from_choice("6") is None
    assert Action.from_choice("attack") is None
    assert Action.from_choice("") is None


def test_battle_outcome_terminal_flags():
    assert not BattleOutcome.ONGOING.is_terminal
    assert BattleOutcome.PLAYER_WON.is_terminal
    assert BattleOutcome.PLAYER_LOST.is_terminal
    assert BattleOutcome.PLAYER_FLED.is_terminal


def test_take_damage_floors_at_zero():
    monster = make_monster(ScriptedRandomProvider(), hp=5)
    assert monster.take_damage(8) == 8
    assert monster.hp == 0
    assert not monster.is_alive()
    with pytest.raises(ValueError):
        monster.take_damage(-1)


def test_attack_critical_doubles_damage():
    rng = ScriptedRandomProvider(randoms=[0.05], ints=[7])
    player = Player(random_provider=rng)
    monster = make_monster(rng)
    result = player.attack(monster, stage=1)
    assert result.is_critical
    assert result.damage == 14
    assert monster.hp == 46


def test_attack_without_critical():
    rng = ScriptedRandomProvider(randoms=[0.5], ints=[7])
    player = Player(random_provider=rng)
    monster = make_monster(rng)
    result = player.attack(monster, stage=1)
    assert not result.is_critical
    assert result.damage == 7
    assert monster.hp == 53


def test_critical_chance_grows_with_stage():
    assert critical_chance(1) == pytest.approx(0.11)
    assert critical_chance(50) == pytest.approx(0.60)
    # 0.20 is a critical at stage 20 (chance 0.30) but not at stage 1
    rng = ScriptedRandomProvider(randoms=[0.20, 0.20], ints=[3, 3])
    player = Player(random_provider=rng)
    assert not player.roll_attack(1).is_critical
    assert player.roll_attack(20).is_critical


def test_attack_damage_bounds_seeded():
    rng = SeededRandomProvider(1234)
    player = Player(attack_power=12, random_provider=rng)
    for stage in (1, 10, 50):
        for _ in range(2000):
            result = player.roll_attack(stage)
            assert 1 <= result.damage <= 2 * player.attack_power
            if result.is_critical:
                assert result.damage % 2 == 0
                assert 1 <= result.damage // 2 <= player.attack_power
            else:
                assert result.damage <= player.attack_power


def test_counter_attack_uses_attack_formula():
    rng = ScriptedRandomProvider(randoms=[0.01], ints=[4])
    player = Player(random_provider=rng)
    monster = make_monster(rng)
    result = player.counter_attack(monster, stage=1)
    assert result.is_critical
    assert result.damage == 8
    assert monster.hp == 52


def test_roll_attack_rejects_invalid_stage():
    with pytest.raises(ValueError):
        Player(random_provider=ScriptedRandomProvider()).roll_attack(0)


def test_multi_attack_flurry():
    rng = ScriptedRandomProvider(randoms=[0.1], ints=[3, 4, 5, 6])
    player = Player(random_provider=rng)
    monster = make_monster(rng)
    result = player.multi_attack(monster, stage=1)
    assert result.num_attacks == 3
    assert result.total_damage == 15
    assert monster.hp == 45
    assert rng.exhausted()


def test_multi_attack_single_hit():
    rng = ScriptedRandomProvider(randoms=[0.5], ints=[8])
    player = Player(random_provider=rng)
    monster = make_monster(rng)
    result = player.multi_attack(monster, stage=1)
    assert result.num_attacks == 1
    assert result.total_damage == 8
    assert monster.hp == 52


def test_multi_attack_hits_seeded():
    rng = SeededRandomProvider(99)
    player = Player(random_provider=rng)
    counts = {1: 0, 2: 0, 3: 0}
    for _ in range(5000):
        monster = make_monster(rng, hp=10_000)
        result = player.multi_attack(monster, stage=1)
        counts[result.num_attacks] += 1
        assert result.num_attacks <= result.total_damage <= result.num_attacks * player.attack_power
        assert monster.hp == 10_000 - result.total_damage
    assert 0.76 <= counts[1] / 5000 <= 0.84


def test_defend_distribution_seeded():
    rng = SeededRandomProvider(42)
    player = Player(random_provider=rng)
    samples = [player.defend() for _ in range(10_000)]
    zeros = sum(1 for value in samples if value == 0)
    assert 0.47 <= zeros / len(samples) <= 0.53
    assert all(1 <= value <= player.defense_power for value in samples if value != 0)


def test_heal_caps_at_max_hp():
    player = Player(hp=50)
    assert player.heal() == 20
    assert player.hp == 70
    player.hp = 95
    assert player.heal() == 5
    assert player.hp == player.max_hp


def test_heal_is_noop_at_full_health():
    player = Player()
    assert player.hp == player.max_hp
    assert player.heal() == 0
    assert player.hp == player.max_hp


def test_restore_rejects_negative_amount():
    with pytest.raises(ValueError):
        Player().restore(-5)


def test_increase_stats_uses_new_max_hp():
    rng = ScriptedRandomProvider(ints=[5, 3])
    player = Player(random_provider=rng)
    player.increase_stats()
    assert player.attack_power == 15
    assert player.defense_power == 8
    assert player.stage_clear_count == 1
    assert player.max_hp == 130
    assert player.hp == 120


def test_increase_stats_growth_ranges_seeded():
    rng = SeededRandomProvider(7)
    player = Player(random_provider=rng)
    for clears in range(1, 101):
        attack_before = player.attack_power
        defense_before = player.defense_power
        player.increase_stats()
        assert 5 <= player.attack_power - attack_before <= 9
        assert 3 <= player.defense_power - defense_before <= 6
        assert player.stage_clear_count == clears
        assert player.hp <= player.max_hp


@pytest.mark.parametrize("stage, expected", [(1, 57), (3, 72), (4, 80), (100, 800)])
def test_try_persist_success_restores_floor(stage, expected):
    assert persist_floor(stage) == expected
    player = Player(hp=0, random_provider=ScriptedRandomProvider(randoms=[0.3]))
    assert player.try_persist(stage)
    assert player.hp == expected


def test_try_persist_failure_leaves_player_down():
    player = Player(hp=0, random_provider=ScriptedRandomProvider(randoms=[0.7]))
    assert not player.try_persist(5)
    assert player.hp == 0


def test_try_persist_never_exceeds_max_hp():
    for stage in range(1, 101):
        # The player has cleared stage - 1 stages by the time they fight ``stage``
        player = Player(hp=0, stage_clear_count=stage - 1,
                        random_provider=ScriptedRandomProvider(randoms=[0.0]))
        assert player.try_persist(stage)
        assert player.hp <= player.max_hp


def test_monster_attack_does_not_touch_player():
    rng = ScriptedRandomProvider(randoms=[0.05], ints=[4])
    monster = make_monster(rng)
    result = monster.attack()
    assert result.damage == 4
    assert result.counter


def test_monster_attack_counter_follows_chance():
    rng = ScriptedRandomProvider(randoms=[0.5], ints=[6])
    result = make_monster(rng).attack()
    assert result.damage == 6
    assert not result.counter


def test_monster_increase_stats():
    rng = ScriptedRandomProvider(ints=[12, 2])
    monster = make_monster(rng, hp=80, attack_power=8)
    monster.increase_stats(3)
    assert monster.hp == 80 + 12 + 10
    assert monster.attack_power == 10


def test_monster_validation():
    with pytest.raises(ValueError):
        Monster(hp=10, attack_power=0)
    with pytest.raises(ValueError):
        Monster(hp=10, attack_power=3, counter_chance=1.5)
