from clicker_quest.enums import EventKind, LogCategory, Side
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant


def apply_damage(battle_state: BattleState, target: Combatant, amount: int) -> bool:
    """Subtract HP (clamped at 0) and return True if this hit made the target faint.

    Fainting resets status, confusion, stages and transient flags immediately.
    """
    before = target.currentHp
    target.currentHp = max(0, before - max(0, amount))
    if target.currentHp != before:
        battle_state.emit(EventKind.HP_CHANGED, target.side, before=before, after=target.currentHp, maxHp=target.maxHp)
    if before > 0 and target.currentHp == 0:
        faint(battle_state, target)
        return True
    return False


def faint(battle_state: BattleState, target: Combatant) -> None:
    target.reset_after_faint()
    category = LogCategory.DEFEAT if target.side == Side.PLAYER else LogCategory.VICTORY
    battle_state.add_log(category, f"{target.display_name} fainted!")
    battle_state.emit(EventKind.FAINTED, target.side, species=target.species)


def heal(battle_state: BattleState, target: Combatant, amount: int) -> int:
    """Restore HP up to maxHp; fainted combatants are not revived. Returns HP restored."""
    if target.is_fainted():
        return 0
    before = target.currentHp
    target.currentHp = min(target.maxHp, before + max(0, amount))
    if target.currentHp != before:
        battle_state.emit(EventKind.HP_CHANGED, target.side, before=before, after=target.currentHp, maxHp=target.maxHp)
    return target.currentHp - before
