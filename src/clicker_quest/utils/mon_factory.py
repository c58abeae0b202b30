import logging
from typing import Iterable, Optional

from clicker_quest.constants import DEFAULT_MOVE_ID, MAX_LEARNED_MOVES
from clicker_quest.data.moves import get_move_data
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import Ability, Side
from clicker_quest.schema.combatant import Combatant, EncounterInfo, LearnedMove
from clicker_quest.schema.saved_combatant import SavedCombatant, SavedMove
from clicker_quest.schema.species_info import SpeciesInfo
from clicker_quest.stat_calculator import calculate_stats

logger = logging.getLogger(__name__)

# PP recorded for move ids that have no move data; the move still forfeits the turn when used
UNKNOWN_MOVE_PP = 1


def make_learned_move(move_id: str) -> LearnedMove:
    move = get_move_data(move_id)
    max_pp = move.pp if move is not None else UNKNOWN_MOVE_PP
    return LearnedMove(moveId=move_id, currentPP=max_pp, maxPP=max_pp)


def initial_moves(info: SpeciesInfo) -> list[str]:
    """A freshly acquired creature starts with its level-1 moves"""
    moves = list(dict.fromkeys(info.moves_learned_at(1)))[:MAX_LEARNED_MOVES]
    return moves or [DEFAULT_MOVE_ID]


def spawn_moves(info: SpeciesInfo, level: int) -> list[str]:
    """Most recently learnable moves at a level, keeping the last MAX_LEARNED_MOVES"""
    moves = list(dict.fromkeys(info.moves_learnable_by(level)))[-MAX_LEARNED_MOVES:]
    return moves or [DEFAULT_MOVE_ID]


def create_combatant(
    info: SpeciesInfo,
    level: int,
    side: Side = Side.PLAYER,
    moves: Optional[Iterable[str]] = None,
    experience: int = 0,
    ability: Optional[Ability] = None,
    encounter: Optional[EncounterInfo] = None,
) -> Combatant:
    """Build a full-HP, status-free combatant with stats derived for its level"""
    stats = calculate_stats(info.baseStats, level)
    move_ids = list(moves) if moves is not None else initial_moves(info)
    return Combatant(
        side=side,
        species=info.id,
        name=info.name,
        types=list(info.types),
        level=level,
        experience=experience,
        baseStats=info.baseStats.model_copy(),
        stats=stats,
        maxHp=stats.hp,
        currentHp=stats.hp,
        ability=ability if ability is not None else info.default_ability,
        moves=[make_learned_move(move_id) for move_id in move_ids[:MAX_LEARNED_MOVES]],
        encounter=encounter,
    )


def create_player_combatant(species_id: str, level: int, moves: Optional[Iterable[str]] = None) -> Optional[Combatant]:
    info = get_species_info(species_id)
    if info is None:
        logger.warning("Unknown species id %r", species_id)
        return None
    return create_combatant(info, level, side=Side.PLAYER, moves=moves)


# =============================================================================
# PERSISTENCE SNAPSHOT
# =============================================================================


def to_saved(combatant: Combatant) -> SavedCombatant:
    return SavedCombatant(
        speciesId=combatant.species,
        level=combatant.level,
        experience=combatant.experience,
        currentHp=combatant.currentHp,
        moves=[SavedMove(moveId=move.moveId, currentPP=move.currentPP) for move in combatant.moves],
        status=combatant.status,
        statusTurns=combatant.statusTurns,
        confusionTurns=combatant.confusionTurns,
        ability=combatant.ability,
    )


def restore_combatant(saved: SavedCombatant) -> Optional[Combatant]:
    """Rebuild a player creature from its persisted fields.

    Stats are re-derived for the saved level, HP is clamped to the new max and
    stat stages / transient flags start neutral. Returns None when the species
    no longer exists.
    """
    info = get_species_info(saved.speciesId)
    if info is None:
        logger.warning("Saved creature references unknown species %r", saved.speciesId)
        return None

    combatant = create_combatant(
        info,
        saved.level,
        side=Side.PLAYER,
        moves=[move.moveId for move in saved.moves],
        experience=saved.experience,
        ability=saved.ability,
    )
    for learned, saved_move in zip(combatant.moves, saved.moves):
        learned.currentPP = min(saved_move.currentPP, learned.maxPP)
    combatant.currentHp = min(saved.currentHp, combatant.maxHp)
    if combatant.currentHp > 0:
        combatant.status = saved.status
        combatant.statusTurns = saved.statusTurns
        combatant.confusionTurns = saved.confusionTurns
    return combatant
