from typing import Optional

from clicker_quest.data.species import get_species_info
from clicker_quest.enums import EventKind, LogCategory, Side, StatName, StatusCondition
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.status_processor import StatusEffectProcessor
from clicker_quest.utils.mon_factory import create_combatant


def make_mon(species_id: str, *, level: int = 50, side: Side = Side.PLAYER, status: StatusCondition = StatusCondition.NONE, hp: Optional[int] = None) -> Combatant:
    mon = create_combatant(get_species_info(species_id), level, side=side)
    mon.status = status
    if hp is not None:
        mon.currentHp = hp
    return mon


def make_state(player: Combatant, enemy: Optional[Combatant] = None) -> BattleState:
    return BattleState(roster=[player], enemy=enemy, rng_seed=99)


def force_rolls(monkeypatch, value: float) -> None:
    monkeypatch.setattr("clicker_quest.utils.rng.random", lambda battle_state: value)


def test_sleep_forfeits_until_it_wears_off_and_on_the_waking_turn():
    mon = make_mon("pikachu", status=StatusCondition.SLEEP)
    mon.statusTurns = 2
    bs = make_state(mon)
    processor = StatusEffectProcessor(bs)

    first = processor.process_turn_start(mon)
    assert first.can_act is False
    assert mon.status == StatusCondition.SLEEP
    assert mon.statusTurns == 1

    second = processor.process_turn_start(mon)
    assert second.can_act is False
    assert mon.status == StatusCondition.NONE
    assert bs.log[-1].message == "Pikachu woke up!"

    assert processor.process_turn_start(mon).can_act is True


def test_full_paralysis_depends_on_roll(monkeypatch):
    mon = make_mon("pikachu", status=StatusCondition.PARALYSIS)
    processor = StatusEffectProcessor(make_state(mon))

    force_rolls(monkeypatch, 0.1)
    assert processor.process_turn_start(mon).can_act is False

    force_rolls(monkeypatch, 0.9)
    assert processor.process_turn_start(mon).can_act is True
    assert mon.status == StatusCondition.PARALYSIS


def test_confusion_self_hit_costs_the_turn(monkeypatch):
    mon = make_mon("pikachu")
    mon.confusionTurns = 3
    bs = make_state(mon)
    force_rolls(monkeypatch, 0.1)

    result = StatusEffectProcessor(bs).process_turn_start(mon)

    assert result.can_act is False
    assert mon.confusionTurns == 2
    assert mon.currentHp < mon.maxHp
    assert "It hurt itself in its confusion!" in [entry.message for entry in bs.log]


def test_confusion_running_out_lets_the_creature_act():
    mon = make_mon("pikachu")
    mon.confusionTurns = 1
    bs = make_state(mon)

    result = StatusEffectProcessor(bs).process_turn_start(mon)

    assert result.can_act is True
    assert mon.is_confused() is False
    assert bs.log[-1].category == LogCategory.STATUS_CURED


def test_confusion_self_hit_can_faint(monkeypatch):
    mon = make_mon("pikachu", hp=1)
    mon.confusionTurns = 4
    force_rolls(monkeypatch, 0.1)

    result = StatusEffectProcessor(make_state(mon)).process_turn_start(mon)

    assert result.fainted is True
    assert mon.confusionTurns == 0


def test_end_turn_damage_hits_enemy_before_player():
    player = make_mon("bulbasaur", status=StatusCondition.POISON)
    enemy = make_mon("rattata", side=Side.ENEMY, status=StatusCondition.BURN)
    bs = make_state(player, enemy)

    fainted = StatusEffectProcessor(bs).process_end_turn()

    assert fainted == []
    assert [entry.message for entry in bs.log] == [
        "Wild Rattata is hurt by its burn!",
        "Bulbasaur is hurt by its poison!",
    ]
    assert player.currentHp == player.maxHp - player.maxHp // 16
    assert enemy.currentHp == enemy.maxHp - enemy.maxHp // 16


def test_end_turn_damage_is_at_least_one():
    mon = make_mon("pikachu", level=1, status=StatusCondition.POISON)
    StatusEffectProcessor(make_state(mon)).process_end_turn()

    assert mon.maxHp // 16 == 0
    assert mon.currentHp == mon.maxHp - 1


def test_end_turn_faint_resets_battle_state_and_reports():
    mon = make_mon("pikachu", status=StatusCondition.POISON, hp=1)
    mon.confusionTurns = 2
    mon.statStages.set(StatName.ATTACK, 3)
    bs = make_state(mon)
    reported = []

    fainted = StatusEffectProcessor(bs).process_end_turn(on_faint=reported.append)

    assert fainted == [mon]
    assert reported == [mon]
    assert mon.currentHp == 0
    assert mon.status == StatusCondition.NONE
    assert mon.confusionTurns == 0
    assert mon.statStages.is_neutral()
    assert bs.events[-1].kind == EventKind.FAINTED


def test_no_end_turn_damage_without_poison_or_burn():
    mon = make_mon("pikachu", status=StatusCondition.PARALYSIS)
    StatusEffectProcessor(make_state(mon)).process_end_turn()

    assert mon.currentHp == mon.maxHp
