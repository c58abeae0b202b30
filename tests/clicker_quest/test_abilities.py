from typing import Optional

import pytest
from pydantic import ValidationError

from clicker_quest import abilities
from clicker_quest.data.moves import get_move_data
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import Ability, EventKind, MoveCategory, Side, StatName, StatusCondition, Type
from clicker_quest.schema.battle_move import BattleMove
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils.mon_factory import create_combatant


def make_mon(species_id: str, *, level: int = 50, side: Side = Side.PLAYER, ability: Optional[Ability] = None) -> Combatant:
    return create_combatant(get_species_info(species_id), level, side=side, ability=ability)


MUD_SLAP = BattleMove(id="mud-slap", name="Mud-Slap", type=Type.GROUND, category=MoveCategory.SPECIAL, power=20, accuracy=100, pp=10)


def test_intimidate_lowers_opponent_attack_on_switch_in():
    bs = BattleState()
    owner = make_mon("gyarados")
    opponent = make_mon("rattata", side=Side.ENEMY)

    abilities.trigger_switch_in(bs, owner, opponent)

    assert opponent.statStages.attack == -1
    assert bs.log[0].message == "Gyarados's Intimidate!"
    assert bs.events[0].kind == EventKind.ABILITY_ACTIVATED


def test_intimidate_ignores_fainted_opponent():
    bs = BattleState()
    opponent = make_mon("rattata", side=Side.ENEMY)
    opponent.currentHp = 0

    abilities.trigger_switch_in(bs, make_mon("gyarados"), opponent)

    assert opponent.statStages.attack == 0
    assert bs.log == []


def test_levitate_blocks_ground_moves_only():
    bs = BattleState()
    defender = make_mon("gastly", side=Side.ENEMY)
    attacker = make_mon("rattata")

    assert abilities.trigger_damage_received(bs, defender, attacker, MUD_SLAP) is True
    assert abilities.trigger_damage_received(bs, defender, attacker, get_move_data("bite")) is False


def test_flash_fire_absorbs_fire_and_sets_flag():
    bs = BattleState()
    defender = make_mon("rattata", side=Side.ENEMY, ability=Ability.FLASH_FIRE)
    attacker = make_mon("charmander")

    blocked = abilities.trigger_damage_received(bs, defender, attacker, get_move_data("ember"))

    assert blocked is True
    assert defender.flashFireActive is True


def test_static_paralyzes_contact_attacker_on_successful_roll(monkeypatch):
    monkeypatch.setattr("clicker_quest.utils.rng.random", lambda battle_state: 0.0)
    bs = BattleState()
    defender = make_mon("pikachu", side=Side.ENEMY)
    attacker = make_mon("rattata")

    abilities.trigger_contact_received(bs, defender, attacker, get_move_data("tackle"))

    assert attacker.status == StatusCondition.PARALYSIS


def test_static_does_nothing_on_failed_roll(monkeypatch):
    monkeypatch.setattr("clicker_quest.utils.rng.random", lambda battle_state: 0.5)
    bs = BattleState()
    attacker = make_mon("rattata")

    abilities.trigger_contact_received(bs, make_mon("pikachu", side=Side.ENEMY), attacker, get_move_data("tackle"))

    assert attacker.status == StatusCondition.NONE
    assert bs.log == []


def test_moxie_raises_attack_after_a_knockout():
    bs = BattleState()
    attacker = make_mon("lucario", ability=Ability.MOXIE)
    fainted = make_mon("rattata", side=Side.ENEMY)
    fainted.currentHp = 0

    abilities.trigger_kill(bs, attacker, fainted)

    assert attacker.statStages.get(StatName.ATTACK) == 1


def test_abilities_without_hooks_are_inert():
    hooks = abilities.get_hooks(Ability.NONE)

    assert hooks.on_switch_in is None
    assert hooks.on_damage_received is None
    assert hooks.on_kill is None
    assert hooks.modify_power is None


def test_registered_hooks_cannot_be_reassigned():
    hooks = abilities.get_hooks(Ability.LEVITATE)

    with pytest.raises(ValidationError):
        hooks.on_damage_received = None
    assert abilities.get_hooks(Ability.LEVITATE).on_damage_received is not None
