import logging
from typing import Optional

from clicker_quest import abilities
from clicker_quest.constants import DEFAULT_BASE_CATCH_RATE
from clicker_quest.data.areas import get_map_area
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import EventKind, LogCategory, Side
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant, EncounterInfo
from clicker_quest.schema.map_area import MapArea, SpawnEntry
from clicker_quest.utils import rng
from clicker_quest.utils.mon_factory import create_combatant, spawn_moves

logger = logging.getLogger(__name__)


class EncounterGenerator:
    """
    Picks and builds the next enemy for an area.

    An undefeated gym always sends out its leader. Everywhere else the
    leader entries are skipped and the rest are drawn by spawn weight.
    """

    def __init__(self, battle_state: BattleState):
        self.battle_state = battle_state

    def select_entry(self, area: MapArea) -> Optional[SpawnEntry]:
        if area.isGym and not self.battle_state.defeated_gyms.get(area.id, False):
            leader = area.gym_leader_entry()
            if leader is not None:
                return leader

        candidates = [entry for entry in area.enemyDefinitions if not entry.isGymLeader]
        if not candidates:
            return None

        total_weight = sum(entry.spawnWeight for entry in candidates)
        roll = rng.random(self.battle_state) * total_weight
        for entry in candidates:
            if roll < entry.spawnWeight:
                return entry
            roll -= entry.spawnWeight
        # Floating-point rounding can leave the roll past the last bucket
        return candidates[0]

    def build_enemy(self, area: MapArea, entry: SpawnEntry) -> Optional[Combatant]:
        info = get_species_info(entry.speciesId)
        if info is None:
            logger.warning("Area %r references unknown species %r", area.id, entry.speciesId)
            self.battle_state.add_log(LogCategory.SYSTEM, f"Could not find data for {entry.speciesId}.")
            return None

        encounter = EncounterInfo(
            rewardMoney=entry.rewardMoney if entry.rewardMoney is not None else area.defaultRewardMoney,
            baseCatchRate=entry.baseCatchRate if entry.baseCatchRate is not None else DEFAULT_BASE_CATCH_RATE,
            givesExperience=entry.givesExperience if entry.givesExperience is not None else area.defaultGivesExperience,
            isBoss=entry.isBoss,
            isGymLeader=entry.isGymLeader,
            drops=[drop.model_copy() for drop in entry.drops],
        )
        moves = entry.moves if entry.moves else spawn_moves(info, entry.level)
        return create_combatant(info, entry.level, side=Side.ENEMY, moves=moves, encounter=encounter)

    def generate(self, area_id: str) -> Optional[Combatant]:
        """Select, build and announce the next enemy; also fires on-spawn abilities.

        The caller is responsible for installing the returned combatant as the
        current enemy. Returns None when nothing can spawn.
        """
        area = get_map_area(area_id)
        if area is None:
            logger.warning("Unknown area id %r", area_id)
            self.battle_state.add_log(LogCategory.SYSTEM, f"Area {area_id} does not exist.")
            return None

        entry = self.select_entry(area)
        if entry is None:
            self.battle_state.add_log(LogCategory.MAP_PROGRESS, f"There are no more opponents in {area.name}.")
            self.battle_state.emit(EventKind.NO_MORE_TARGETS, area_id=area.id)
            return None

        enemy = self.build_enemy(area, entry)
        if enemy is None:
            return None

        if enemy.is_gym_leader:
            self.battle_state.add_log(LogCategory.GYM_LEADER_INTRO, f"The gym leader sent out {enemy.name} (Lv. {enemy.level})!")
        elif enemy.is_boss:
            self.battle_state.add_log(LogCategory.INFO, f"A powerful {enemy.name} (Lv. {enemy.level}) blocks the way!")
        else:
            self.battle_state.add_log(LogCategory.INFO, f"A wild {enemy.name} (Lv. {enemy.level}) appeared!")
        self.battle_state.emit(
            EventKind.ENEMY_SPAWNED,
            Side.ENEMY,
            species=enemy.species,
            level=enemy.level,
            isBoss=enemy.is_boss,
            isGymLeader=enemy.is_gym_leader,
        )

        # On-spawn abilities run in both directions, player's creature first
        player = self.battle_state.active
        if player is not None and not player.is_fainted():
            abilities.trigger_switch_in(self.battle_state, player, enemy)
            abilities.trigger_switch_in(self.battle_state, enemy, player)
        return enemy
