from clicker_quest.constants import MAX_STAT_STAGE, MIN_STAT_STAGE
from clicker_quest.enums import EventKind, LogCategory, StatName
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant


def change_stage(battle_state: BattleState, mon: Combatant, stat: StatName, delta: int) -> bool:
    """Apply a bounded stage change to a combatant's stat.

    A change pushing against the clamp is a logged no-op; otherwise the new
    stage is clamped within MIN_STAT_STAGE .. MAX_STAT_STAGE. Returns whether
    the stage moved.
    """
    if delta == 0 or mon.is_fainted():
        return False

    current = mon.statStages.get(stat)
    if delta > 0 and current >= MAX_STAT_STAGE:
        battle_state.add_log(LogCategory.INFO, f"{mon.display_name}'s {stat.label} won't go any higher!")
        return False
    if delta < 0 and current <= MIN_STAT_STAGE:
        battle_state.add_log(LogCategory.INFO, f"{mon.display_name}'s {stat.label} won't go any lower!")
        return False

    mon.statStages.set(stat, current + delta)
    new_stage = mon.statStages.get(stat)

    verb = "rose" if delta > 0 else "fell"
    adverb = " sharply" if abs(delta) >= 2 else ""
    category = LogCategory.BUFF if delta > 0 else LogCategory.DEBUFF
    battle_state.add_log(category, f"{mon.display_name}'s {stat.label} {verb}{adverb}!")
    battle_state.emit(EventKind.STAGE_CHANGED, mon.side, stat=stat.value, before=current, after=new_stage)
    return True
