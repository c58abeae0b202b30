import math
from typing import Callable, Optional

from pydantic import BaseModel

from clicker_quest.damage_calculator import DamageCalculator
from clicker_quest.enums import EventKind, LogCategory, MoveCategory, Side, StatusCondition, Type
from clicker_quest.move_effects.damage import apply_damage
from clicker_quest.move_effects.status_effects import STATUS_NAMES
from clicker_quest.schema.battle_move import BattleMove
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils import rng

# Order end-of-turn damage is applied in, independent of whose turn it was
END_TURN_ORDER = (Side.ENEMY, Side.PLAYER)


class TurnStartResult(BaseModel):
    can_act: bool
    fainted: bool = False


class StatusEffectProcessor:
    """
    Start-of-turn and end-of-turn status behavior.

    Start of turn runs confusion, then sleep, then paralysis, and stops at the
    first check that costs the combatant its turn. End of turn applies poison
    and burn damage to both sides, enemy first.
    """

    def __init__(self, battle_state: BattleState, damage_calculator: Optional[DamageCalculator] = None):
        self.battle_state = battle_state
        self.damage_calculator = damage_calculator or DamageCalculator(battle_state)

    def _confusion_self_hit_move(self) -> BattleMove:
        return BattleMove(
            id="confusion-self-hit",
            name="Confusion",
            type=Type.NORMAL,
            category=MoveCategory.PHYSICAL,
            power=self.battle_state.config.confusion_self_attack_power,
            pp=1,
        )

    def process_turn_start(self, mon: Combatant) -> TurnStartResult:
        config = self.battle_state.config
        name = mon.display_name

        if mon.confusionTurns > 0:
            mon.confusionTurns -= 1
            if mon.confusionTurns == 0:
                self.battle_state.add_log(LogCategory.STATUS_CURED, f"{name} snapped out of its confusion!")
                self.battle_state.emit(EventKind.STATUS_CHANGED, mon.side, status=StatusCondition.NONE.value, cured=StatusCondition.CONFUSION.value)
            else:
                self.battle_state.add_log(LogCategory.STATUS_EFFECT, f"{name} is confused!")
                if rng.chance(self.battle_state, config.confusion_self_attack_chance):
                    self.battle_state.add_log(LogCategory.STATUS_EFFECT, "It hurt itself in its confusion!")
                    result = self.damage_calculator.calculate_damage(mon, mon, self._confusion_self_hit_move())
                    fainted = apply_damage(self.battle_state, mon, result.damage)
                    return TurnStartResult(can_act=False, fainted=fainted)

        if mon.status == StatusCondition.SLEEP:
            mon.statusTurns = max(0, mon.statusTurns - 1)
            if mon.statusTurns == 0:
                mon.clear_status()
                self.battle_state.add_log(LogCategory.STATUS_CURED, f"{name} woke up!")
                self.battle_state.emit(EventKind.STATUS_CHANGED, mon.side, status=StatusCondition.NONE.value, cured=StatusCondition.SLEEP.value)
            else:
                self.battle_state.add_log(LogCategory.STATUS_EFFECT, f"{name} is fast asleep.")
            return TurnStartResult(can_act=False)

        if mon.status == StatusCondition.PARALYSIS and rng.chance(self.battle_state, config.paralysis_skip_chance):
            self.battle_state.add_log(LogCategory.STATUS_EFFECT, f"{name} is paralyzed! It can't move!")
            return TurnStartResult(can_act=False)

        return TurnStartResult(can_act=True)

    def apply_end_turn_damage(self, mon: Combatant) -> bool:
        """Poison/burn damage for one combatant; returns True if it fainted"""
        if mon.is_fainted() or not mon.status.deals_end_turn_damage():
            return False
        damage = max(1, math.floor(mon.maxHp * self.battle_state.config.status_damage_fraction))
        category = LogCategory.PLAYER_DAMAGE if mon.side == Side.PLAYER else LogCategory.ENEMY_DAMAGE
        self.battle_state.add_log(category, f"{mon.display_name} is hurt by its {STATUS_NAMES[mon.status].removesuffix('ed')}!")
        return apply_damage(self.battle_state, mon, damage)

    def process_end_turn(self, on_faint: Optional[Callable[[Combatant], None]] = None) -> list[Combatant]:
        """Apply end-of-turn damage to both sides and return the combatants that fainted.

        on_faint runs as soon as a combatant faints, before the next side is
        processed, so an enemy defeat is settled before the player takes damage.
        """
        fainted = []
        for side in END_TURN_ORDER:
            mon = self.battle_state.combatant_for(side)
            if mon is not None and self.apply_end_turn_damage(mon):
                fainted.append(mon)
                if on_faint is not None:
                    on_faint(mon)
        return fainted
