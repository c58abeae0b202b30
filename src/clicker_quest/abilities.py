"""
Ability registry.

Each ability maps to a set of named hook points that the engine invokes
uniformly:

- on_switch_in(battle_state, owner, opponent): owner entered battle facing opponent
- on_damage_received(battle_state, defender, attacker, move) -> bool: True blocks the hit
- on_kill(battle_state, attacker, fainted): attacker knocked out fainted
- on_contact_received(battle_state, defender, attacker, move): defender survived a contact move
- modify_power(battle_state, attacker, move, power) -> int: adjust base power before the formula

Abilities with no entry in ABILITY_HOOKS have no effect.
"""

import math
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from clicker_quest.constants import PINCH_ABILITY_HP_RATIO, PINCH_ABILITY_POWER_MULTIPLIER
from clicker_quest.enums import Ability, EventKind, LogCategory, StatName, StatusCondition, Type
from clicker_quest.move_effects import stat_changes
from clicker_quest.move_effects.status_effects import inflict_status
from clicker_quest.schema.battle_move import BattleMove, StatusEffect
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils import rng

ABILITY_NAMES = {
    Ability.NONE: "None",
    Ability.INTIMIDATE: "Intimidate",
    Ability.STATIC: "Static",
    Ability.LEVITATE: "Levitate",
    Ability.MOXIE: "Moxie",
    Ability.FLASH_FIRE: "Flash Fire",
    Ability.OVERGROW: "Overgrow",
    Ability.BLAZE: "Blaze",
    Ability.TORRENT: "Torrent",
}


class AbilityHooks(BaseModel):
    on_switch_in: Optional[Callable[[BattleState, Combatant, Combatant], None]] = None
    on_damage_received: Optional[Callable[[BattleState, Combatant, Combatant, BattleMove], bool]] = None
    on_kill: Optional[Callable[[BattleState, Combatant, Combatant], None]] = None
    on_contact_received: Optional[Callable[[BattleState, Combatant, Combatant, BattleMove], None]] = None
    modify_power: Optional[Callable[[BattleState, Combatant, BattleMove, int], int]] = None

    model_config = ConfigDict(frozen=True)


def _announce(battle_state: BattleState, owner: Combatant) -> None:
    battle_state.add_log(LogCategory.ABILITY_ACTIVATION, f"{owner.display_name}'s {ABILITY_NAMES[owner.ability]}!")
    battle_state.emit(EventKind.ABILITY_ACTIVATED, owner.side, ability=owner.ability.value)


# =============================================================================
# HOOK IMPLEMENTATIONS
# =============================================================================


def _intimidate_switch_in(battle_state: BattleState, owner: Combatant, opponent: Combatant) -> None:
    if opponent.is_fainted():
        return
    _announce(battle_state, owner)
    stat_changes.change_stage(battle_state, opponent, StatName.ATTACK, -1)


def _levitate_damage_received(battle_state: BattleState, defender: Combatant, attacker: Combatant, move: BattleMove) -> bool:
    if move.type != Type.GROUND:
        return False
    _announce(battle_state, defender)
    battle_state.add_log(LogCategory.INFO, f"{defender.display_name} is floating and avoids {move.name}!")
    return True


def _flash_fire_damage_received(battle_state: BattleState, defender: Combatant, attacker: Combatant, move: BattleMove) -> bool:
    if move.type != Type.FIRE:
        return False
    _announce(battle_state, defender)
    defender.flashFireActive = True
    battle_state.add_log(LogCategory.BUFF, f"{defender.display_name}'s fire-type moves were powered up!")
    return True


def _static_contact_received(battle_state: BattleState, defender: Combatant, attacker: Combatant, move: BattleMove) -> None:
    if attacker.is_fainted() or not rng.chance(battle_state, battle_state.config.static_paralysis_chance):
        return
    _announce(battle_state, defender)
    inflict_status(battle_state, attacker, StatusEffect(condition=StatusCondition.PARALYSIS, chance=1.0))


def _moxie_kill(battle_state: BattleState, attacker: Combatant, fainted: Combatant) -> None:
    if attacker.is_fainted():
        return
    _announce(battle_state, attacker)
    stat_changes.change_stage(battle_state, attacker, StatName.ATTACK, 1)


def _pinch_power(boosted_type: Type) -> Callable[[BattleState, Combatant, BattleMove, int], int]:
    def modify_power(battle_state: BattleState, attacker: Combatant, move: BattleMove, power: int) -> int:
        if move.type == boosted_type and attacker.currentHp <= attacker.maxHp * PINCH_ABILITY_HP_RATIO:
            return math.floor(power * PINCH_ABILITY_POWER_MULTIPLIER)
        return power

    return modify_power


ABILITY_HOOKS: dict[Ability, AbilityHooks] = {
    Ability.INTIMIDATE: AbilityHooks(on_switch_in=_intimidate_switch_in),
    Ability.LEVITATE: AbilityHooks(on_damage_received=_levitate_damage_received),
    Ability.FLASH_FIRE: AbilityHooks(on_damage_received=_flash_fire_damage_received),
    Ability.STATIC: AbilityHooks(on_contact_received=_static_contact_received),
    Ability.MOXIE: AbilityHooks(on_kill=_moxie_kill),
    Ability.OVERGROW: AbilityHooks(modify_power=_pinch_power(Type.GRASS)),
    Ability.BLAZE: AbilityHooks(modify_power=_pinch_power(Type.FIRE)),
    Ability.TORRENT: AbilityHooks(modify_power=_pinch_power(Type.WATER)),
}

_NO_HOOKS = AbilityHooks()


def get_hooks(ability: Ability) -> AbilityHooks:
    return ABILITY_HOOKS.get(ability, _NO_HOOKS)


# =============================================================================
# DISPATCH
# =============================================================================


def trigger_switch_in(battle_state: BattleState, owner: Combatant, opponent: Combatant) -> None:
    hook = get_hooks(owner.ability).on_switch_in
    if hook is not None and not owner.is_fainted():
        hook(battle_state, owner, opponent)


def trigger_damage_received(battle_state: BattleState, defender: Combatant, attacker: Combatant, move: BattleMove) -> bool:
    hook = get_hooks(defender.ability).on_damage_received
    return hook is not None and hook(battle_state, defender, attacker, move)


def trigger_kill(battle_state: BattleState, attacker: Combatant, fainted: Combatant) -> None:
    hook = get_hooks(attacker.ability).on_kill
    if hook is not None:
        hook(battle_state, attacker, fainted)


def trigger_contact_received(battle_state: BattleState, defender: Combatant, attacker: Combatant, move: BattleMove) -> None:
    hook = get_hooks(defender.ability).on_contact_received
    if hook is not None and not defender.is_fainted():
        hook(battle_state, defender, attacker, move)


def modify_power(battle_state: BattleState, attacker: Combatant, move: BattleMove, power: int) -> int:
    hook = get_hooks(attacker.ability).modify_power
    return hook(battle_state, attacker, move, power) if hook is not None else power
