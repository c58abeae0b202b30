from clicker_quest.enums import EventKind, LogCategory, StatusCondition
from clicker_quest.schema.battle_move import StatusEffect
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils import rng

STATUS_NAMES = {
    StatusCondition.POISON: "poisoned",
    StatusCondition.PARALYSIS: "paralyzed",
    StatusCondition.BURN: "burned",
    StatusCondition.SLEEP: "asleep",
    StatusCondition.CONFUSION: "confused",
}

INFLICTED_MESSAGES = {
    StatusCondition.POISON: "{name} was poisoned!",
    StatusCondition.PARALYSIS: "{name} is paralyzed! It may be unable to move!",
    StatusCondition.BURN: "{name} was burned!",
    StatusCondition.SLEEP: "{name} fell asleep!",
    StatusCondition.CONFUSION: "{name} became confused!",
}


def _roll_turns(battle_state: BattleState, effect: StatusEffect) -> int:
    config = battle_state.config
    if effect.condition == StatusCondition.SLEEP:
        low, high = config.sleep_min_turns, config.sleep_max_turns
    else:
        low, high = config.confusion_min_turns, config.confusion_max_turns
    low = effect.minTurns if effect.minTurns is not None else low
    high = effect.maxTurns if effect.maxTurns is not None else high
    return rng.randint(battle_state, low, max(low, high))


def is_blocked(target: Combatant, condition: StatusCondition) -> bool:
    """Incompatible with what the target already has"""
    if condition == StatusCondition.CONFUSION:
        return target.is_confused()
    return target.status != StatusCondition.NONE


def inflict_status(battle_state: BattleState, target: Combatant, effect: StatusEffect, secondary: bool = False) -> bool:
    """Try to give the target the effect's condition; returns True when applied.

    Primary effects (status moves) announce why they fail and roll the chance
    after the compatibility check. Secondary effects (riders on damaging moves)
    roll the chance first and fail silently.
    """
    if target.is_fainted():
        return False
    condition = effect.condition

    if secondary:
        if rng.random(battle_state) >= effect.chance or is_blocked(target, condition):
            return False
    else:
        if is_blocked(target, condition):
            current = condition if condition == StatusCondition.CONFUSION else target.status
            battle_state.add_log(LogCategory.INFO, f"{target.display_name} is already {STATUS_NAMES[current]}!")
            return False
        if rng.random(battle_state) >= effect.chance:
            return False

    if condition == StatusCondition.CONFUSION:
        target.confusionTurns = _roll_turns(battle_state, effect)
    else:
        target.status = condition
        target.statusTurns = _roll_turns(battle_state, effect) if condition == StatusCondition.SLEEP else 0

    battle_state.add_log(LogCategory.STATUS_INFLICTED, INFLICTED_MESSAGES[condition].format(name=target.display_name))
    battle_state.emit(EventKind.STATUS_CHANGED, target.side, status=condition.value)
    return True


def cure_status(battle_state: BattleState, target: Combatant, condition: StatusCondition | None = None) -> bool:
    """Cure the given condition (or any major status when None); returns True if something was cured"""
    if condition == StatusCondition.CONFUSION:
        if not target.is_confused():
            return False
        target.confusionTurns = 0
        cured = condition
    elif target.status != StatusCondition.NONE and condition in (None, target.status):
        cured = target.status
        target.clear_status()
    else:
        return False

    battle_state.add_log(LogCategory.STATUS_CURED, f"{target.display_name} is no longer {STATUS_NAMES[cured]}!")
    battle_state.emit(EventKind.STATUS_CHANGED, target.side, status=StatusCondition.NONE.value, cured=cured.value)
    return True
