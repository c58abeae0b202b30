from typing import Callable, Optional

from pydantic import BaseModel

from clicker_quest.constants import CATCH_STATUS_BONUS_STRONG, CATCH_STATUS_BONUS_WEAK
from clicker_quest.data.items import get_item_info
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import EventKind, LogCategory, Side, StatusCondition
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.utils import rng


class CaptureOutcome(BaseModel):
    success: bool
    attempts: int
    chance: float


def status_bonus(status: StatusCondition) -> float:
    if status in (StatusCondition.SLEEP, StatusCondition.PARALYSIS):
        return CATCH_STATUS_BONUS_STRONG
    if status != StatusCondition.NONE:
        return CATCH_STATUS_BONUS_WEAK
    return 1.0


class CaptureSimulator:
    """Multi-attempt capture sequence against the current enemy"""

    def __init__(self, battle_state: BattleState):
        self.battle_state = battle_state

    def catch_chance(self, enemy: Combatant, catch_modifier: float = 1.0) -> float:
        """Per-attempt success chance, clamped to the configured bounds"""
        config = self.battle_state.config
        base_rate = enemy.encounter.baseCatchRate if enemy.encounter is not None else 0.0
        info = get_species_info(enemy.species)
        species_bonus = info.catchRateBonus if info is not None else 1.0

        raw_rate = base_rate * (enemy.maxHp / max(1, enemy.currentHp)) * config.catch_hp_factor * status_bonus(enemy.status)
        return max(config.min_catch_chance, min(config.max_catch_chance, raw_rate * species_bonus * catch_modifier))

    def check_preconditions(self, ball_id: str) -> Optional[str]:
        """Reason the capture cannot start, or None if it can"""
        enemy = self.battle_state.enemy
        if enemy is None or enemy.is_fainted():
            return "There is nothing to catch!"
        if enemy.is_gym_leader:
            return "You can't catch a gym leader's creature!"
        if self.battle_state.all_fainted:
            return "You have no creatures able to battle!"
        item = get_item_info(ball_id)
        if item is None or not item.is_capture_item():
            return f"{ball_id} can't be used to catch creatures."
        if self.battle_state.item_count(ball_id) <= 0:
            return f"You don't have any {item.name}s left!"
        return None

    def attempt(self, ball_id: str, on_shake: Optional[Callable[[int], None]] = None) -> CaptureOutcome:
        """Consume one capture item and run the shake attempts.

        Preconditions must already hold (see check_preconditions). on_shake is
        called with the attempt number before each roll so the caller can pace
        the sequence.
        """
        enemy = self.battle_state.enemy
        item = get_item_info(ball_id)
        self.battle_state.remove_item(ball_id)
        self.battle_state.add_log(LogCategory.INFO, f"You threw a {item.name}!")

        chance = self.catch_chance(enemy, item.catchModifier)
        attempts = self.battle_state.config.capture_shake_attempts
        for attempt in range(1, attempts + 1):
            if on_shake is not None:
                on_shake(attempt)
            self.battle_state.add_log(LogCategory.INFO, f"...shake ({attempt}/{attempts})")
            self.battle_state.emit(EventKind.CAPTURE_SHAKE, Side.ENEMY, attempt=attempt, chance=chance)
            if rng.random(self.battle_state) <= chance:
                self.battle_state.add_log(LogCategory.CATCH_SUCCESS, f"Gotcha! {enemy.name} was caught!")
                self.battle_state.emit(EventKind.CAPTURE_SUCCESS, Side.ENEMY, species=enemy.species, attempts=attempt)
                return CaptureOutcome(success=True, attempts=attempt, chance=chance)

        self.battle_state.add_log(LogCategory.CATCH_FAIL, f"Oh no! {enemy.display_name} broke free!")
        self.battle_state.emit(EventKind.CAPTURE_FAILED, Side.ENEMY, species=enemy.species, attempts=attempts)
        return CaptureOutcome(success=False, attempts=attempts, chance=chance)
