import logging
from typing import Optional

from pydantic import BaseModel, Field

from clicker_quest.constants import EXPERIENCE_FOR_LEVEL_UP, MAX_LEARNED_MOVES, MAX_LEVEL
from clicker_quest.data.moves import get_move_data
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import EventKind, ItemEffectType, LogCategory, Side
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.schema.item_info import ItemInfo
from clicker_quest.stat_calculator import calculate_stats
from clicker_quest.utils.mon_factory import create_combatant, create_player_combatant, initial_moves, make_learned_move

logger = logging.getLogger(__name__)


class ProgressionOutcome(BaseModel):
    experience_gained: int = 0
    levels_gained: int = 0
    learned_moves: list[str] = Field(default_factory=list)
    pending_evolution: Optional[str] = None  # target species id


def experience_to_next_level(level: int) -> int:
    """Experience a creature at this level needs to reach the next one (0 at max level)"""
    if level >= MAX_LEVEL:
        return 0
    return EXPERIENCE_FOR_LEVEL_UP[level]


class ProgressionManager:
    """
    Experience, level-ups, move learning and evolution for player creatures.

    Experience is stored as progress within the current level: each level-up
    subtracts that level's threshold. A level-based evolution found during a
    level-up stops the loop and is returned as pending; the caller runs the
    evolution as its own sequence through evolve().
    """

    def __init__(self, battle_state: BattleState):
        self.battle_state = battle_state

    def gain_experience(self, mon: Combatant, amount: int) -> ProgressionOutcome:
        outcome = ProgressionOutcome()
        if amount <= 0 or mon.level >= MAX_LEVEL:
            return outcome
        info = get_species_info(mon.species)
        if info is None:
            logger.warning("Cannot level unknown species %r", mon.species)
            self.battle_state.add_log(LogCategory.SYSTEM, f"Could not find data for {mon.species}.")
            return outcome

        mon.experience += amount
        outcome.experience_gained = amount
        self.battle_state.add_log(LogCategory.INFO, f"{mon.display_name} gained {amount} EXP!")
        self.battle_state.emit(EventKind.EXPERIENCE_GAINED, mon.side, species=mon.species, amount=amount)

        while mon.level < MAX_LEVEL and mon.experience >= EXPERIENCE_FOR_LEVEL_UP[mon.level]:
            mon.experience -= EXPERIENCE_FOR_LEVEL_UP[mon.level]
            self._level_up(mon)
            outcome.levels_gained += 1
            outcome.learned_moves.extend(self._learn_level_moves(mon, info.moves_learned_at(mon.level)))

            evolution = info.evolution
            if evolution is not None and evolution.level is not None and evolution.itemId is None and mon.level >= evolution.level:
                outcome.pending_evolution = evolution.evolvesTo
                break

        return outcome

    def _level_up(self, mon: Combatant) -> None:
        mon.level += 1
        previous_max = mon.maxHp
        mon.stats = calculate_stats(mon.baseStats, mon.level)
        mon.maxHp = mon.stats.hp
        if mon.currentHp > 0:
            mon.currentHp = max(0, min(mon.maxHp, mon.currentHp + mon.maxHp - previous_max))
        self.battle_state.add_log(LogCategory.INFO, f"{mon.display_name} grew to Lv. {mon.level}!")
        self.battle_state.emit(EventKind.LEVEL_UP, mon.side, species=mon.species, level=mon.level)

    def _learn_level_moves(self, mon: Combatant, move_ids: list[str]) -> list[str]:
        learned = []
        for move_id in move_ids:
            if mon.knows_move(move_id):
                continue
            move = get_move_data(move_id)
            move_name = move.name if move is not None else move_id
            if len(mon.moves) >= MAX_LEARNED_MOVES:
                self.battle_state.add_log(LogCategory.INFO, f"{mon.display_name} wants to learn {move_name}, but can't learn more than {MAX_LEARNED_MOVES} moves.")
                continue
            mon.moves.append(make_learned_move(move_id))
            learned.append(move_id)
            self.battle_state.add_log(LogCategory.BUFF, f"{mon.display_name} learned {move_name}!")
            self.battle_state.emit(EventKind.MOVE_LEARNED, mon.side, species=mon.species, moveId=move_id)
        return learned

    def teach_move(self, mon: Combatant, move_id: str) -> bool:
        """Teach one move outside of level-up (TMs); False if unknown, known or full"""
        move = get_move_data(move_id)
        if move is None:
            logger.warning("Cannot teach unknown move %r", move_id)
            self.battle_state.add_log(LogCategory.SYSTEM, "The move to teach could not be found!")
            return False
        if mon.knows_move(move_id):
            self.battle_state.add_log(LogCategory.INFO, f"{mon.display_name} already knows {move.name}!")
            return False
        return bool(self._learn_level_moves(mon, [move_id]))

    # =========================================================================
    # EVOLUTION & ACQUISITION
    # =========================================================================

    def item_evolution_target(self, mon: Combatant, item: ItemInfo) -> Optional[str]:
        """Species the item evolves this creature into, if species and item both match"""
        effect = item.effect
        if effect is None or effect.type != ItemEffectType.EVOLVE or effect.evolvesTo is None:
            return None
        if effect.requiredSpeciesId != mon.species:
            return None
        info = get_species_info(mon.species)
        if info is not None and info.evolution is not None and info.evolution.itemId not in (None, item.id):
            return None
        return effect.evolvesTo

    def evolve(self, roster_index: int, target_species_id: str, acquired_at: int = 0) -> Optional[Combatant]:
        """Replace a roster creature with its evolved form.

        The new creature keeps level and experience, is fully healed, and
        starts from the new species' level-1 moves with the old moves filling
        any remaining slots.
        """
        if not 0 <= roster_index < len(self.battle_state.roster):
            return None
        old = self.battle_state.roster[roster_index]
        info = get_species_info(target_species_id)
        if info is None:
            logger.warning("Evolution target %r does not exist", target_species_id)
            self.battle_state.add_log(LogCategory.SYSTEM, f"Could not find data for {target_species_id}.")
            return None

        merged = initial_moves(info)
        for move in old.moves:
            if len(merged) >= MAX_LEARNED_MOVES:
                break
            if move.moveId not in merged:
                merged.append(move.moveId)

        evolved = create_combatant(info, old.level, side=Side.PLAYER, moves=merged, experience=old.experience)
        self.battle_state.roster[roster_index] = evolved
        self._record_acquisition(info.id, acquired_at)

        self.battle_state.add_log(LogCategory.EVOLUTION, f"Congratulations! {old.name} evolved into {evolved.name}!")
        self.battle_state.emit(EventKind.EVOLVED, Side.PLAYER, fromSpecies=old.species, toSpecies=evolved.species, rosterIndex=roster_index)
        return evolved

    def acquire(self, species_id: str, level: int, acquired_at: int = 0) -> Optional[Combatant]:
        """Add a fresh creature of this species to the roster"""
        mon = create_player_combatant(species_id, level)
        if mon is None:
            self.battle_state.add_log(LogCategory.SYSTEM, f"Could not find data for {species_id}.")
            return None
        self.battle_state.roster.append(mon)
        self._record_acquisition(species_id, acquired_at)
        return mon

    def _record_acquisition(self, species_id: str, acquired_at: int) -> None:
        if species_id not in self.battle_state.first_caught_at:
            self.battle_state.first_caught_at[species_id] = acquired_at
