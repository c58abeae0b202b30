from typing import Optional

from clicker_quest.constants import MAX_LEVEL
from clicker_quest.data.items import get_item_info
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import Ability, EventKind
from clicker_quest.progression import ProgressionManager, experience_to_next_level
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils.mon_factory import create_combatant


def make_mon(species_id: str, level: int, moves: Optional[list[str]] = None, experience: int = 0) -> Combatant:
    return create_combatant(get_species_info(species_id), level, moves=moves, experience=experience)


def test_threshold_table():
    assert experience_to_next_level(1) == 1
    assert experience_to_next_level(5) == 125
    assert experience_to_next_level(99) == 99**3
    assert experience_to_next_level(MAX_LEVEL) == 0


def test_level_up_recomputes_stats_and_keeps_damage_taken():
    mon = make_mon("pikachu", 5)
    mon.currentHp -= 4
    bs = BattleState(roster=[mon])

    outcome = ProgressionManager(bs).gain_experience(mon, 125)

    assert outcome.levels_gained == 1
    assert mon.level == 6
    assert mon.experience == 0
    assert mon.currentHp == mon.maxHp - 4


def test_negative_and_zero_experience_is_ignored():
    mon = make_mon("pikachu", 5, experience=10)
    manager = ProgressionManager(BattleState(roster=[mon]))

    manager.gain_experience(mon, -50)
    manager.gain_experience(mon, 0)

    assert mon.experience == 10
    assert mon.level == 5


def test_max_level_never_advances():
    mon = make_mon("snorlax", MAX_LEVEL, experience=3)
    manager = ProgressionManager(BattleState(roster=[mon]))

    outcome = manager.gain_experience(mon, 10**9)

    assert mon.level == MAX_LEVEL
    assert mon.experience == 3
    assert outcome.experience_gained == 0


def test_experience_never_goes_negative_across_many_gains():
    mon = make_mon("rattata", 1)
    manager = ProgressionManager(BattleState(roster=[mon]))

    for amount in (1, 7, 300, 0, -5, 12345, 999999):
        manager.gain_experience(mon, amount)
        assert mon.experience >= 0
        assert mon.level <= MAX_LEVEL


def test_level_up_learns_new_moves():
    mon = make_mon("pikachu", 4)
    bs = BattleState(roster=[mon])

    outcome = ProgressionManager(bs).gain_experience(mon, 64)

    assert outcome.learned_moves == ["quick-attack"]
    assert [move.moveId for move in mon.moves] == ["thundershock", "growl", "quick-attack"]
    assert any(event.kind == EventKind.MOVE_LEARNED for event in bs.events)


def test_full_move_list_skips_learning_with_log():
    mon = make_mon("pikachu", 4, moves=["thundershock", "growl", "tackle", "bite"])
    bs = BattleState(roster=[mon])

    outcome = ProgressionManager(bs).gain_experience(mon, 64)

    assert outcome.learned_moves == []
    assert len(mon.moves) == 4
    assert "can't learn more than 4 moves" in bs.log[-1].message


def test_level_evolution_stops_further_level_ups():
    mon = make_mon("bulbasaur", 15)
    manager = ProgressionManager(BattleState(roster=[mon]))

    outcome = manager.gain_experience(mon, 15**3 + 16**3 + 17**3)

    assert outcome.pending_evolution == "ivysaur"
    assert mon.level == 16
    assert mon.species == "bulbasaur"
    assert mon.experience == 16**3 + 17**3
    assert outcome.learned_moves == []


def test_evolve_merges_new_species_moves_first():
    mon = make_mon("bulbasaur", 16, moves=["tackle", "growl", "sleep-powder", "razor-leaf"], experience=40)
    mon.currentHp = 1
    bs = BattleState(roster=[mon])

    evolved = ProgressionManager(bs).evolve(0, "ivysaur", acquired_at=2500)

    assert bs.roster[0] is evolved
    assert evolved.species == "ivysaur"
    assert [move.moveId for move in evolved.moves] == ["tackle", "growl", "vine-whip", "sleep-powder"]
    assert evolved.level == 16
    assert evolved.experience == 40
    assert evolved.currentHp == evolved.maxHp
    assert evolved.ability == Ability.OVERGROW
    assert bs.first_caught_at["ivysaur"] == 2500
    assert bs.events[-1].kind == EventKind.EVOLVED


def test_item_evolution_requires_matching_species():
    manager = ProgressionManager(BattleState())
    stone = get_item_info("thunder-stone")

    assert manager.item_evolution_target(make_mon("pikachu", 10), stone) == "raichu"
    assert manager.item_evolution_target(make_mon("bulbasaur", 10), stone) is None
    assert manager.item_evolution_target(make_mon("pikachu", 10), get_item_info("potion")) is None


def test_acquire_starts_fresh_with_level_one_moves():
    bs = BattleState()

    mon = ProgressionManager(bs).acquire("charmander", 12, acquired_at=50)

    assert bs.roster == [mon]
    assert mon.level == 12
    assert mon.experience == 0
    assert [move.moveId for move in mon.moves] == ["scratch", "growl"]
    assert bs.first_caught_at == {"charmander": 50}


def test_acquire_unknown_species_is_skipped():
    bs = BattleState()

    assert ProgressionManager(bs).acquire("missingno", 5) is None
    assert bs.roster == []
