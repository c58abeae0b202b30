import logging
import time
from typing import Callable, Optional

from clicker_quest import abilities
from clicker_quest.capture import CaptureSimulator
from clicker_quest.config import BattleConfig
from clicker_quest.constants import DEFAULT_CAPTURE_ITEM_ID, GAME_TICK_MS, INITIAL_ITEMS, MAX_LEARNED_MOVES, MAX_LEVEL
from clicker_quest.damage_calculator import DamageCalculator
from clicker_quest.data.areas import get_map_area
from clicker_quest.data.items import get_item_info
from clicker_quest.data.moves import get_move_data
from clicker_quest.encounter_generator import EncounterGenerator
from clicker_quest.enums import EffectTarget, EventKind, ItemEffectType, LogCategory, Side, StatusCondition, UnlockConditionType
from clicker_quest.move_effects.damage import apply_damage, heal
from clicker_quest.move_effects.stat_changes import change_stage
from clicker_quest.move_effects.status_effects import cure_status, inflict_status
from clicker_quest.progression import ProgressionManager
from clicker_quest.scheduler import ScheduledAction, Scheduler
from clicker_quest.schema.battle_log import ActionResult
from clicker_quest.schema.battle_move import BattleMove
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant, LearnedMove
from clicker_quest.schema.item_info import ItemInfo
from clicker_quest.schema.map_area import AreaProgress
from clicker_quest.schema.saved_combatant import SavedCombatant
from clicker_quest.status_processor import StatusEffectProcessor
from clicker_quest.type_effectiveness import TypeEffectiveness
from clicker_quest.utils import rng
from clicker_quest.utils.mon_factory import restore_combatant, to_saved

logger = logging.getLogger(__name__)


class BattleEngine:
    """
    Main battle engine: owns the command surface of the game.

    Every public operation validates its preconditions before touching
    state, marks the context busy for the whole exchange, and returns the
    log entries and events it produced as an ActionResult.

    Turn flow for one player command:
    1. Player turn (start-of-turn status, move, end-of-turn damage, cleanup)
    2. Pacing delay on the virtual clock
    3. Enemy turn with the same steps, if both sides are still standing
    4. Any evolution earned along the way
    """

    def __init__(self, battle_state: Optional[BattleState] = None, scheduler: Optional[Scheduler] = None):
        self.battle_state = battle_state or BattleState()
        self.scheduler = scheduler or Scheduler()
        self._pending_evolutions: list[tuple[int, str]] = []
        self._background_action: Optional[ScheduledAction] = None
        self._bind_components()

    def _bind_components(self) -> None:
        self.damage_calculator = DamageCalculator(self.battle_state)
        self.status_processor = StatusEffectProcessor(self.battle_state, self.damage_calculator)
        self.encounter_generator = EncounterGenerator(self.battle_state)
        self.capture_simulator = CaptureSimulator(self.battle_state)
        self.progression = ProgressionManager(self.battle_state)

    # =========================================================================
    # SESSION
    # =========================================================================

    def new_game(
        self,
        starter_species: str = "pikachu",
        level: int = 5,
        seed: Optional[int] = None,
        config: Optional[BattleConfig] = None,
    ) -> ActionResult:
        """Replace the context with a fresh game holding only the starter"""
        if seed is None:
            seed = int(time.time())
        self.battle_state = BattleState(rng_seed=seed & 0xFFFFFFFF, config=config or BattleConfig())
        self._pending_evolutions = []
        self._bind_components()

        state = self.battle_state
        for item_id, quantity in INITIAL_ITEMS.items():
            item = get_item_info(item_id)
            state.add_item(item_id, quantity, item.maxStack if item is not None else quantity)

        starter = self.progression.acquire(starter_species, level, self.scheduler.now_ms)
        if starter is None:
            return self._finish(False, 0, 0)
        state.add_log(LogCategory.SYSTEM, f"{starter.name} (Lv. {starter.level}) joined your team!")
        return self._finish(True, 0, 0)

    def export_roster(self) -> list[SavedCombatant]:
        return [to_saved(member) for member in self.battle_state.roster]

    def import_roster(self, saved: list[SavedCombatant]) -> int:
        """Replace the roster with restored creatures; returns how many were restored"""
        roster = []
        for entry in saved:
            mon = restore_combatant(entry)
            if mon is None:
                self.battle_state.add_log(LogCategory.SYSTEM, f"Could not restore {entry.speciesId}.")
                continue
            roster.append(mon)
        self.battle_state.roster = roster
        self.battle_state.active_index = 0
        self._refresh_all_fainted()
        return len(roster)

    def _refresh_all_fainted(self) -> None:
        roster = self.battle_state.roster
        self.battle_state.all_fainted = bool(roster) and all(member.is_fainted() for member in roster)

    # =========================================================================
    # ACTION BOOKKEEPING
    # =========================================================================

    def _mark(self) -> tuple[int, int]:
        return len(self.battle_state.log), len(self.battle_state.events)

    def _finish(self, accepted: bool, log_start: int, event_start: int) -> ActionResult:
        state = self.battle_state
        result = ActionResult(accepted=accepted, logs=state.log[log_start:], events=state.events[event_start:])
        del state.events[event_start:]
        overflow = len(state.log) - state.config.battle_log_max_entries
        if overflow > 0:
            del state.log[:overflow]
        return result

    def _reject(self, message: str, log_start: int, event_start: int) -> ActionResult:
        self.battle_state.add_log(LogCategory.SYSTEM, message)
        return self._finish(False, log_start, event_start)

    def _idle_rejection(self) -> Optional[str]:
        if self.battle_state.busy:
            return "Please wait..."
        if self.battle_state.evolving:
            return "Please wait until the evolution is over."
        return None

    def _battle_rejection(self) -> Optional[str]:
        """Reason the player cannot act in battle right now, or None"""
        state = self.battle_state
        reason = self._idle_rejection()
        if reason is not None:
            return reason
        if state.all_fainted:
            return "You have no creatures able to battle!"
        if state.enemy is None or state.enemy.is_fainted():
            return "There is no opponent to battle!"
        if state.active is None or state.active.is_fainted():
            return "Your creature can't battle right now!"
        return None

    # =========================================================================
    # ENCOUNTERS
    # =========================================================================

    def start_encounter(self, area_id: Optional[str] = None) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection()
        if reason is None and state.all_fainted:
            reason = "You have no creatures able to battle!"
        if reason is None and state.enemy is not None and not state.enemy.is_fainted():
            reason = "You are already in a battle!"
        area_id = area_id or state.current_area_id
        if reason is None and area_id != state.current_area_id:
            reason = "You can only battle in the area you are in."
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            enemy = self.encounter_generator.generate(area_id)
            if enemy is not None:
                state.enemy = enemy
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    def background_tick(self) -> Optional[ActionResult]:
        """Respawn an enemy when idle; returns None when the tick was skipped"""
        state = self.battle_state
        if state.busy or state.evolving or state.all_fainted or state.enemy is not None:
            return None
        return self.start_encounter()

    def start_background_tick(
        self,
        interval_ms: int = GAME_TICK_MS,
        on_result: Optional[Callable[[ActionResult], None]] = None,
    ) -> ScheduledAction:
        """Register background_tick on the scheduler, replacing any earlier registration"""
        self.stop_background_tick()

        def tick() -> None:
            result = self.background_tick()
            if result is not None and on_result is not None:
                on_result(result)

        self._background_action = self.scheduler.call_every(interval_ms, tick)
        return self._background_action

    def stop_background_tick(self) -> None:
        if self._background_action is not None:
            self._background_action.cancel()
            self._background_action = None

    # =========================================================================
    # BATTLE COMMANDS
    # =========================================================================

    def submit_player_move(self, move_id: str) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._battle_rejection()
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        player = state.active
        learned = player.get_learned_move(move_id)
        if learned is None:
            return self._reject(f"{player.name} doesn't know that move!", log_start, event_start)
        if learned.currentPP <= 0:
            return self._reject("There's no PP left for this move!", log_start, event_start)

        state.busy = True
        try:
            state.turn_count += 1
            self._take_turn(player, move_id, learned)
            if self._enemy_may_respond(player):
                self.scheduler.advance(state.config.turn_pacing_ms)
                self._run_enemy_turn()
            self._run_pending_evolutions()
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    def attempt_capture(self, ball_id: str = DEFAULT_CAPTURE_ITEM_ID) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection() or self.capture_simulator.check_preconditions(ball_id)
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            player = state.active
            enemy = state.enemy
            outcome = self.capture_simulator.attempt(
                ball_id, on_shake=lambda attempt: self.scheduler.advance(state.config.capture_shake_interval_ms)
            )
            if outcome.success:
                self._handle_capture_success(enemy)
            elif self._enemy_may_respond(player):
                self.scheduler.advance(state.config.turn_pacing_ms)
                self._run_enemy_turn()
            self._run_pending_evolutions()
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    def attempt_flee(self) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._battle_rejection()
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            player = state.active
            if rng.chance(state, state.config.flee_success_chance):
                state.add_log(LogCategory.INFO, "Got away safely!")
                state.emit(EventKind.FLEE_SUCCESS, Side.PLAYER)
                self._despawn_enemy()
            else:
                state.add_log(LogCategory.INFO, "Couldn't get away!")
                state.emit(EventKind.FLEE_FAILED, Side.PLAYER)
                if self._enemy_may_respond(player):
                    self.scheduler.advance(state.config.turn_pacing_ms)
                    self._run_enemy_turn()
            self._run_pending_evolutions()
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    def switch_active(self, index: int) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection()
        if reason is None and not 0 <= index < len(state.roster):
            reason = "There is no creature in that slot."
        if reason is None and index == state.active_index:
            reason = f"{state.roster[index].name} is already out!"
        if reason is None and state.roster[index].is_fainted():
            reason = f"{state.roster[index].name} has no energy left to battle!"
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            self._switch_to(index, forced=False)
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    # =========================================================================
    # ITEMS / WORLD
    # =========================================================================

    def use_item(self, item_id: str, roster_index: Optional[int] = None) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection()
        item = get_item_info(item_id)
        if reason is None and item is None:
            logger.warning("Unknown item id %r", item_id)
            reason = f"Item {item_id} does not exist."
        if reason is None and state.item_count(item_id) <= 0:
            reason = f"You don't have any {item.name} left!"
        if reason is None and item.effect is None:
            reason = f"{item.name} can't be used here."
        index = state.active_index if roster_index is None else roster_index
        if reason is None and not 0 <= index < len(state.roster):
            reason = "There is no creature in that slot."
        if reason is None:
            reason = self._item_rejection(item, state.roster[index])
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            self._apply_item(item, index)
            state.remove_item(item_id)
            state.emit(EventKind.ITEM_USED, Side.PLAYER, itemId=item_id, rosterIndex=index)
            self._run_pending_evolutions()
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    def _item_rejection(self, item: ItemInfo, mon: Combatant) -> Optional[str]:
        """Why this item would have no effect on this creature, or None"""
        effect = item.effect
        if effect.type == ItemEffectType.HEAL_HP_FLAT:
            if mon.is_fainted():
                return f"{item.name} can't revive a fainted creature."
            if mon.currentHp >= mon.maxHp:
                return f"{mon.name}'s HP is already full!"
        elif effect.type == ItemEffectType.EXP_GAIN:
            if mon.level >= MAX_LEVEL:
                return f"{mon.name} can't grow any further."
        elif effect.type == ItemEffectType.EVOLVE:
            if self.progression.item_evolution_target(mon, item) is None:
                return f"{item.name} had no effect on {mon.name}."
        elif effect.type == ItemEffectType.CURE_STATUS:
            if effect.condition == StatusCondition.CONFUSION:
                cured = mon.is_confused()
            else:
                cured = mon.status != StatusCondition.NONE and effect.condition in (None, mon.status)
            if not cured:
                return f"{item.name} had no effect on {mon.name}."
        elif effect.type == ItemEffectType.CURE_ALL_MAJOR_STATUS:
            if mon.status == StatusCondition.NONE and not mon.is_confused():
                return f"{item.name} had no effect on {mon.name}."
        elif effect.type == ItemEffectType.TEACH_MOVE:
            move = get_move_data(effect.moveId) if effect.moveId else None
            if move is None:
                logger.warning("Item %r teaches unknown move %r", item.id, effect.moveId)
                return f"{item.name} doesn't contain a valid move."
            if effect.compatibleTypes and not any(mon.has_type(type_) for type_ in effect.compatibleTypes):
                return f"{mon.name} is not compatible with {move.name}."
            if mon.knows_move(move.id):
                return f"{mon.name} already knows {move.name}!"
            if len(mon.moves) >= MAX_LEARNED_MOVES:
                return f"{mon.name} can't learn more than {MAX_LEARNED_MOVES} moves."
        return None

    def _apply_item(self, item: ItemInfo, index: int) -> None:
        state = self.battle_state
        mon = state.roster[index]
        effect = item.effect
        state.add_log(LogCategory.ITEM, f"You used {item.name} on {mon.name}.")

        if effect.type == ItemEffectType.HEAL_HP_FLAT:
            restored = heal(state, mon, effect.amount)
            state.add_log(LogCategory.ITEM, f"{mon.name} recovered {restored} HP!")
        elif effect.type == ItemEffectType.EXP_GAIN:
            outcome = self.progression.gain_experience(mon, effect.amount)
            if outcome.pending_evolution is not None:
                self._pending_evolutions.append((index, outcome.pending_evolution))
        elif effect.type == ItemEffectType.EVOLVE:
            self._pending_evolutions.append((index, self.progression.item_evolution_target(mon, item)))
        elif effect.type == ItemEffectType.CURE_STATUS:
            cure_status(state, mon, effect.condition)
        elif effect.type == ItemEffectType.CURE_ALL_MAJOR_STATUS:
            cure_status(state, mon)
            cure_status(state, mon, StatusCondition.CONFUSION)
        elif effect.type == ItemEffectType.TEACH_MOVE:
            self.progression.teach_move(mon, effect.moveId)

    def heal_all(self) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection()
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        for member in state.roster:
            before = member.currentHp
            member.currentHp = member.maxHp
            member.clear_status()
            member.confusionTurns = 0
            member.reset_battle_modifiers()
            member.restore_pp()
            if member.currentHp != before:
                state.emit(EventKind.HP_CHANGED, Side.PLAYER, before=before, after=member.currentHp, maxHp=member.maxHp)
        state.all_fainted = False
        state.add_log(LogCategory.SYSTEM, "Your creatures were fully healed!")
        return self._finish(True, log_start, event_start)

    def is_area_cleared(self) -> bool:
        state = self.battle_state
        area = get_map_area(state.current_area_id)
        if area is None:
            return False
        if area.isGym and state.defeated_gyms.get(area.id, False):
            return True
        condition = area.unlockConditionToNext
        if condition.type == UnlockConditionType.DEFEAT_COUNT:
            return state.area_progress.defeatCount >= (condition.count or 0)
        return state.area_progress.bossDefeated

    def move_to_next_area(self) -> ActionResult:
        state = self.battle_state
        log_start, event_start = self._mark()
        reason = self._idle_rejection()
        area = get_map_area(state.current_area_id)
        if reason is None and area is None:
            logger.warning("Unknown current area %r", state.current_area_id)
            reason = f"Area {state.current_area_id} does not exist."
        if reason is None and area.nextAreaId is None:
            reason = "There is nowhere further to go."
        if reason is None and not self.is_area_cleared():
            reason = f"You need to clear {area.name} first!"
        next_area = get_map_area(area.nextAreaId) if reason is None else None
        if reason is None and next_area is None:
            logger.warning("Area %r points at unknown area %r", area.id, area.nextAreaId)
            reason = f"Area {area.nextAreaId} does not exist."
        if reason is not None:
            return self._reject(reason, log_start, event_start)

        state.busy = True
        try:
            if state.enemy is not None:
                self._despawn_enemy()
            state.current_area_id = next_area.id
            state.area_progress = AreaProgress()
            state.add_log(LogCategory.MAP_PROGRESS, f"You moved on to {next_area.name}!")
            state.emit(EventKind.AREA_CHANGED, fromArea=area.id, toArea=next_area.id)
        finally:
            state.busy = False
        return self._finish(True, log_start, event_start)

    # =========================================================================
    # TURN RESOLUTION
    # =========================================================================

    def _enemy_may_respond(self, acting_player: Optional[Combatant]) -> bool:
        state = self.battle_state
        return (
            state.enemy is not None
            and not state.enemy.is_fainted()
            and acting_player is not None
            and state.active is acting_player
            and not acting_player.is_fainted()
            and not state.all_fainted
        )

    def _run_enemy_turn(self) -> None:
        enemy = self.battle_state.enemy
        if not enemy.moves:
            self.battle_state.add_log(LogCategory.SYSTEM, f"{enemy.display_name} has no moves!")
            self.battle_state.emit(EventKind.TURN_FORFEITED, Side.ENEMY)
            self._end_of_turn()
            return
        index = rng.choice_index(self.battle_state, len(enemy.moves))
        self._take_turn(enemy, enemy.moves[index].moveId)

    def _take_turn(self, actor: Combatant, move_id: str, learned: Optional[LearnedMove] = None) -> None:
        """One actor's full turn: start-of-turn effects, the move, end-of-turn effects"""
        state = self.battle_state
        start = self.status_processor.process_turn_start(actor)
        if start.fainted:
            self._handle_faint(actor, killer=None)
        if not start.can_act:
            state.emit(EventKind.TURN_FORFEITED, actor.side)
            self._end_of_turn()
            return

        move = get_move_data(move_id)
        if move is None:
            logger.warning("Unknown move id %r used by %s", move_id, actor.species)
            state.add_log(LogCategory.SYSTEM, f"Move {move_id} does not exist. The turn was skipped.")
            state.emit(EventKind.TURN_FORFEITED, actor.side)
            self._end_of_turn()
            return

        # PP only drops for the player's creature
        if learned is not None:
            learned.currentPP = max(0, learned.currentPP - 1)

        try:
            self._execute_move(actor, move)
        except Exception:
            logger.exception("Error executing move %s", move.id)
            state.add_log(LogCategory.SYSTEM, f"Something went wrong with {move.name}. The turn was skipped.")
            state.emit(EventKind.TURN_FORFEITED, actor.side)
        self._end_of_turn()

    def _execute_move(self, attacker: Combatant, move: BattleMove) -> None:
        state = self.battle_state
        defender = state.opponent_of(attacker)
        category = LogCategory.PLAYER_ATTACK if attacker.side == Side.PLAYER else LogCategory.ENEMY_ATTACK
        state.add_log(category, f"{attacker.display_name} used {move.name}!")
        state.emit(EventKind.MOVE_USED, attacker.side, moveId=move.id)

        if defender is None or defender.is_fainted():
            state.add_log(LogCategory.INFO, "But there was no target...")
            return

        if move.accuracy is not None and rng.random(state) >= move.accuracy / 100:
            state.add_log(LogCategory.INFO, f"{attacker.display_name}'s attack missed!")
            state.emit(EventKind.MOVE_MISSED, attacker.side, moveId=move.id)
            return

        if move.is_status_move():
            self._apply_status_move(attacker, defender, move)
        else:
            self._apply_damaging_move(attacker, defender, move)

    def _apply_status_move(self, attacker: Combatant, defender: Combatant, move: BattleMove) -> None:
        state = self.battle_state
        for stat_change in move.statChanges:
            target = attacker if stat_change.target == EffectTarget.SELF else defender
            if stat_change.chance is not None and rng.random(state) >= stat_change.chance:
                continue
            change_stage(state, target, stat_change.stat, stat_change.delta)

        if move.statusEffect is not None:
            target = attacker if move.statusEffect.target == EffectTarget.SELF else defender
            inflict_status(state, target, move.statusEffect)

    def _apply_damaging_move(self, attacker: Combatant, defender: Combatant, move: BattleMove) -> None:
        state = self.battle_state
        if abilities.trigger_damage_received(state, defender, attacker, move):
            return

        result = self.damage_calculator.calculate_damage(attacker, defender, move)
        if result.type_multiplier == 0:
            state.add_log(LogCategory.INFO, TypeEffectiveness.get_effectiveness_description(0, defender.display_name))
            return
        if result.critical:
            state.add_log(LogCategory.INFO, "A critical hit!")
        description = TypeEffectiveness.get_effectiveness_description(result.type_multiplier, defender.display_name)
        if description:
            state.add_log(LogCategory.INFO, description)

        category = LogCategory.ENEMY_DAMAGE if defender.side == Side.ENEMY else LogCategory.PLAYER_DAMAGE
        state.add_log(category, f"{defender.display_name} took {result.damage} damage!")
        if apply_damage(state, defender, result.damage):
            self._handle_faint(defender, killer=attacker)
            return

        if move.isContactMove:
            abilities.trigger_contact_received(state, defender, attacker, move)
        if move.statusEffect is not None:
            target = defender if move.statusEffect.target == EffectTarget.OPPONENT else attacker
            inflict_status(state, target, move.statusEffect, secondary=True)

    def _end_of_turn(self) -> None:
        self.status_processor.process_end_turn(on_faint=lambda mon: self._handle_faint(mon, killer=None))
        self._replace_fainted_player()

    # =========================================================================
    # FAINTING / DEFEAT
    # =========================================================================

    def _handle_faint(self, fainted: Combatant, killer: Optional[Combatant]) -> None:
        if fainted.side == Side.ENEMY:
            self._handle_enemy_defeated(fainted)
        if killer is not None and not killer.is_fainted():
            abilities.trigger_kill(self.battle_state, killer, fainted)

    def _handle_enemy_defeated(self, enemy: Combatant) -> None:
        state = self.battle_state
        encounter = enemy.encounter
        was_cleared = self.is_area_cleared()
        state.enemy = None
        state.emit(EventKind.VICTORY, Side.PLAYER, species=enemy.species)

        player = state.active
        if player is not None:
            player.reset_battle_modifiers()

        if encounter is not None and encounter.rewardMoney > 0:
            state.money += encounter.rewardMoney
            state.add_log(LogCategory.VICTORY, f"You got ${encounter.rewardMoney} for winning!")

        if enemy.is_gym_leader:
            area = get_map_area(state.current_area_id)
            state.defeated_gyms[state.current_area_id] = True
            area_name = area.name if area is not None else state.current_area_id
            state.add_log(LogCategory.GYM_LEADER_DEFEAT, f"You defeated the gym leader of {area_name}!")

        if encounter is not None:
            self._roll_drops(enemy)

        if player is not None and not player.is_fainted() and encounter is not None:
            outcome = self.progression.gain_experience(player, encounter.givesExperience)
            if outcome.pending_evolution is not None:
                self._pending_evolutions.append((state.active_index, outcome.pending_evolution))

        self._record_area_progress(enemy, was_cleared)
        state.emit(EventKind.ENEMY_DESPAWNED, Side.ENEMY, species=enemy.species)

    def _roll_drops(self, enemy: Combatant) -> None:
        state = self.battle_state
        for drop in enemy.encounter.drops:
            if rng.random(state) >= drop.dropRate:
                continue
            item = get_item_info(drop.itemId)
            if item is None:
                logger.warning("Drop table of %r references unknown item %r", enemy.species, drop.itemId)
                state.add_log(LogCategory.SYSTEM, f"Item {drop.itemId} does not exist.")
                continue
            quantity = rng.randint(state, drop.minQuantity, max(drop.minQuantity, drop.maxQuantity))
            added = state.add_item(item.id, quantity, item.maxStack)
            if added:
                suffix = f" x{added}" if added > 1 else ""
                state.add_log(LogCategory.ITEM, f"{enemy.display_name} dropped {item.name}{suffix}!")
                state.emit(EventKind.ITEM_RECEIVED, Side.PLAYER, itemId=item.id, quantity=added)

    def _record_area_progress(self, enemy: Combatant, was_cleared: bool) -> None:
        state = self.battle_state
        area = get_map_area(state.current_area_id)
        if area is None:
            return
        condition = area.unlockConditionToNext
        if condition.type == UnlockConditionType.DEFEAT_COUNT:
            state.area_progress.defeatCount += 1
        elif enemy.species == condition.bossSpeciesId and (enemy.is_boss or enemy.is_gym_leader):
            state.area_progress.bossDefeated = True

        if not was_cleared and self.is_area_cleared() and area.nextAreaId is not None:
            state.add_log(LogCategory.MAP_PROGRESS, f"{area.name} is cleared! You can move on.")
            state.emit(EventKind.AREA_CLEARED, areaId=area.id, nextAreaId=area.nextAreaId)

    def _replace_fainted_player(self) -> None:
        """Forced switch after the active creature faints, round-robin from its slot"""
        state = self.battle_state
        player = state.active
        if player is None or not player.is_fainted():
            return
        count = len(state.roster)
        for offset in range(1, count):
            index = (state.active_index + offset) % count
            if not state.roster[index].is_fainted():
                self._switch_to(index, forced=True)
                return
        if not state.all_fainted:
            state.all_fainted = True
            state.add_log(LogCategory.DEFEAT, "All your creatures have fainted! Heal up before battling again.")
            state.emit(EventKind.ALL_FAINTED, Side.PLAYER)
        if state.enemy is not None:
            self._despawn_enemy()

    def _switch_to(self, index: int, forced: bool) -> None:
        state = self.battle_state
        previous_index = state.active_index
        outgoing = state.active
        if outgoing is not None:
            outgoing.reset_battle_modifiers()
        state.active_index = index
        incoming = state.active
        incoming.reset_battle_modifiers()
        state.add_log(LogCategory.INFO, f"Go! {incoming.name}!")
        state.emit(EventKind.PLAYER_SWITCHED, Side.PLAYER, fromIndex=previous_index, toIndex=index, forced=forced)
        if state.enemy is not None and not state.enemy.is_fainted():
            abilities.trigger_switch_in(state, incoming, state.enemy)

    def _despawn_enemy(self) -> None:
        state = self.battle_state
        enemy = state.enemy
        state.enemy = None
        if state.active is not None:
            state.active.reset_battle_modifiers()
        if enemy is not None:
            state.emit(EventKind.ENEMY_DESPAWNED, Side.ENEMY, species=enemy.species)

    # =========================================================================
    # CAPTURE / EVOLUTION
    # =========================================================================

    def _handle_capture_success(self, enemy: Combatant) -> None:
        state = self.battle_state
        reward = enemy.encounter.rewardMoney / 2 if enemy.encounter is not None else 0
        self._despawn_enemy()
        if reward > 0:
            state.money += reward
            state.add_log(LogCategory.CATCH_SUCCESS, f"You got ${reward:g} for the catch!")

        if not state.owns_species(enemy.species):
            if self.progression.acquire(enemy.species, enemy.level, self.scheduler.now_ms) is not None:
                state.add_log(LogCategory.CATCH_SUCCESS, f"{enemy.name} was added to your team!")
            return

        state.add_log(LogCategory.INFO, f"You already have {enemy.name}.")
        player = state.active
        if player is not None and not player.is_fainted() and enemy.encounter is not None:
            outcome = self.progression.gain_experience(player, enemy.encounter.givesExperience)
            if outcome.pending_evolution is not None:
                self._pending_evolutions.append((state.active_index, outcome.pending_evolution))

    def _run_pending_evolutions(self) -> None:
        state = self.battle_state
        while self._pending_evolutions:
            index, target = self._pending_evolutions.pop(0)
            if not 0 <= index < len(state.roster):
                continue
            mon = state.roster[index]
            state.evolving = True
            try:
                state.add_log(LogCategory.EVOLUTION, f"What? {mon.name} is evolving!")
                state.emit(EventKind.EVOLUTION_STARTED, Side.PLAYER, species=mon.species, toSpecies=target, rosterIndex=index)
                if state.enemy is not None:
                    self._despawn_enemy()
                self.scheduler.advance(state.config.evolution_duration_ms)
                self.progression.evolve(index, target, acquired_at=self.scheduler.now_ms)
                self._refresh_all_fainted()
                if state.active is not None and state.active.is_fainted() and not state.roster[index].is_fainted():
                    self._switch_to(index, forced=True)
            finally:
                state.evolving = False
