from typing import Optional

from clicker_quest.battle_engine import BattleEngine
from clicker_quest.constants import INITIAL_ITEMS
from clicker_quest.data.species import get_species_info
from clicker_quest.enums import Ability, EventKind, LogCategory, Side, StatName, StatusCondition
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant, EncounterInfo
from clicker_quest.schema.map_area import ItemDrop
from clicker_quest.utils.mon_factory import create_combatant


def make_mon(species_id: str, *, level: int = 50, moves: Optional[list[str]] = None, experience: int = 0) -> Combatant:
    return create_combatant(get_species_info(species_id), level, side=Side.PLAYER, moves=moves, experience=experience)


def make_enemy(species_id: str, *, level: int = 5, moves: Optional[list[str]] = None, reward: int = 5, experience: int = 8, drops: Optional[list[ItemDrop]] = None) -> Combatant:
    encounter = EncounterInfo(rewardMoney=reward, baseCatchRate=0.2, givesExperience=experience, drops=drops or [])
    return create_combatant(get_species_info(species_id), level, side=Side.ENEMY, moves=moves, encounter=encounter)


def make_engine(*roster: Combatant, enemy: Optional[Combatant] = None, seed: int = 1234, **state_fields) -> BattleEngine:
    state = BattleState(roster=list(roster), enemy=enemy, rng_seed=seed, inventory=dict(INITIAL_ITEMS), **state_fields)
    return BattleEngine(state)


def force_rolls(monkeypatch, value: float) -> None:
    monkeypatch.setattr("clicker_quest.utils.rng.random", lambda battle_state: value)


# =============================================================================
# SESSION
# =============================================================================


def test_new_game_starts_with_starter_and_items():
    engine = BattleEngine()

    result = engine.new_game("pikachu", 5, seed=42)

    state = engine.battle_state
    assert result.accepted
    assert [member.species for member in state.roster] == ["pikachu"]
    assert state.roster[0].level == 5
    assert state.inventory == {"poke-ball": 10, "potion": 5, "oran-berry-seed": 3}
    assert state.current_area_id == "tokiwa-forest"
    assert "pikachu" in state.first_caught_at
    assert state.rng_seed == 42


def test_new_game_with_unknown_starter_is_rejected():
    engine = BattleEngine()

    assert engine.new_game("missingno", 5, seed=1).accepted is False
    assert engine.battle_state.roster == []


def test_roster_export_and_import():
    engine = make_engine(make_mon("pikachu", level=12), make_mon("squirtle", level=9))
    engine.battle_state.roster[1].currentHp = 3

    saved = engine.export_roster()
    restored = BattleEngine()
    count = restored.import_roster(saved)

    assert count == 2
    assert [member.species for member in restored.battle_state.roster] == ["pikachu", "squirtle"]
    assert restored.battle_state.roster[1].currentHp == 3


# =============================================================================
# PLAYER MOVES
# =============================================================================


def test_stat_boost_applied_twice_caps_at_plus_six():
    player = make_mon("lucario", moves=["swords-dance", "quick-attack"])
    player.statStages.set(StatName.ATTACK, 4)
    engine = make_engine(player, enemy=make_enemy("magikarp", level=20, moves=["agility"]))

    first = engine.submit_player_move("swords-dance")
    assert player.statStages.attack == 6
    assert "Lucario's Attack rose sharply!" in first.messages

    second = engine.submit_player_move("swords-dance")
    assert second.accepted
    assert player.statStages.attack == 6
    assert "Lucario's Attack won't go any higher!" in second.messages


def test_enemy_responds_after_pacing_delay():
    player = make_mon("lucario", moves=["swords-dance"])
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    engine = make_engine(player, enemy=enemy)

    result = engine.submit_player_move("swords-dance")

    assert [event.side for event in result.events_of(EventKind.MOVE_USED)] == [Side.PLAYER, Side.ENEMY]
    assert engine.scheduler.now_ms == 1000
    assert player.get_learned_move("swords-dance").currentPP == 19
    assert enemy.moves[0].currentPP == enemy.moves[0].maxPP
    assert engine.battle_state.turn_count == 1
    assert engine.battle_state.busy is False


def test_invalid_moves_are_rejected_without_changes():
    player = make_mon("lucario", moves=["swords-dance", "quick-attack"])
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    engine = make_engine(player, enemy=enemy)
    player.get_learned_move("quick-attack").currentPP = 0

    no_pp = engine.submit_player_move("quick-attack")
    assert no_pp.accepted is False
    assert no_pp.messages == ["There's no PP left for this move!"]
    assert enemy.currentHp == enemy.maxHp
    assert engine.scheduler.now_ms == 0

    unknown = engine.submit_player_move("hydro-pump")
    assert unknown.accepted is False
    assert unknown.messages == ["Lucario doesn't know that move!"]
    assert engine.battle_state.turn_count == 0


def test_busy_flag_rejects_actions_and_skips_ticks():
    engine = make_engine(make_mon("lucario", moves=["swords-dance"]), enemy=make_enemy("magikarp", moves=["agility"]))
    engine.battle_state.busy = True

    result = engine.submit_player_move("swords-dance")

    assert result.accepted is False
    assert result.messages == ["Please wait..."]
    engine.battle_state.enemy = None
    assert engine.background_tick() is None
    assert engine.battle_state.enemy is None


def test_move_without_opponent_is_rejected():
    engine = make_engine(make_mon("lucario", moves=["swords-dance"]))

    assert engine.submit_player_move("swords-dance").accepted is False


def test_move_missing_from_move_data_forfeits_the_turn():
    player = make_mon("lucario", moves=["splash", "quick-attack"])
    engine = make_engine(player, enemy=make_enemy("magikarp", level=20, moves=["agility"]))

    result = engine.submit_player_move("splash")

    assert result.accepted
    assert [event.side for event in result.events_of(EventKind.TURN_FORFEITED)] == [Side.PLAYER]
    assert any(entry.category == LogCategory.SYSTEM for entry in result.logs)
    assert result.events_of(EventKind.MOVE_USED)[0].side == Side.ENEMY


def test_end_of_turn_poison_runs_after_each_actor():
    player = make_mon("lucario", moves=["swords-dance"])
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    enemy.status = StatusCondition.POISON
    engine = make_engine(player, enemy=enemy)

    result = engine.submit_player_move("swords-dance")

    assert enemy.currentHp == enemy.maxHp - 2 * (enemy.maxHp // 16)
    assert result.messages.count("Wild Magikarp is hurt by its poison!") == 2


# =============================================================================
# MOVE RESOLUTION
# =============================================================================


def test_missed_move_leaves_the_defender_untouched(monkeypatch):
    force_rolls(monkeypatch, 0.9)
    enemy = make_enemy("rattata", moves=["growl"])
    engine = make_engine(make_mon("pikachu", moves=["hydro-pump"]), enemy=enemy)

    result = engine.submit_player_move("hydro-pump")

    assert [event.side for event in result.events_of(EventKind.MOVE_MISSED)] == [Side.PLAYER]
    assert "Pikachu's attack missed!" in result.messages
    assert enemy.currentHp == enemy.maxHp


def test_status_move_on_already_statused_target_does_nothing(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    enemy = make_enemy("rattata", moves=["growl"])
    enemy.status = StatusCondition.POISON
    engine = make_engine(make_mon("pikachu", moves=["thunder-wave"]), enemy=enemy)

    result = engine.submit_player_move("thunder-wave")

    assert "Wild Rattata is already poisoned!" in result.messages
    assert enemy.status == StatusCondition.POISON
    assert result.events_of(EventKind.STATUS_CHANGED) == []


def test_confusing_move_on_confused_target_does_nothing(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    enemy = make_enemy("snorlax", level=50, moves=["growl"])
    enemy.confusionTurns = 3
    engine = make_engine(make_mon("pikachu", level=10, moves=["supersonic"]), enemy=enemy)

    result = engine.submit_player_move("supersonic")

    assert "Wild Snorlax is already confused!" in result.messages
    assert result.events_of(EventKind.STATUS_CHANGED) == []


def test_flash_fire_absorbs_the_hit_without_damage(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    enemy = make_enemy("rattata", moves=["growl"])
    enemy.ability = Ability.FLASH_FIRE
    engine = make_engine(make_mon("pikachu", moves=["ember"]), enemy=enemy)

    result = engine.submit_player_move("ember")

    assert enemy.currentHp == enemy.maxHp
    assert enemy.flashFireActive
    assert result.has_event(EventKind.ABILITY_ACTIVATED)
    assert not any(event.side == Side.ENEMY for event in result.events_of(EventKind.HP_CHANGED))


def test_damaging_move_can_inflict_its_secondary_status(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    enemy = make_enemy("snorlax", level=50, moves=["growl"])
    engine = make_engine(make_mon("pikachu", level=5, moves=["ember"]), enemy=enemy)

    result = engine.submit_player_move("ember")

    assert enemy.status == StatusCondition.BURN
    assert "Wild Snorlax was burned!" in result.messages
    changed = result.events_of(EventKind.STATUS_CHANGED)
    assert [(event.side, event.data["status"]) for event in changed] == [(Side.ENEMY, StatusCondition.BURN.value)]
    assert 0 < enemy.currentHp < enemy.maxHp


# =============================================================================
# VICTORY / DEFEAT
# =============================================================================


def test_defeating_a_wild_enemy_pays_out():
    player = make_mon("lucario", moves=["quick-attack"])
    enemy = make_enemy("pidgey", level=2, reward=5, experience=8, drops=[ItemDrop(itemId="potion", dropRate=1.0)])
    engine = make_engine(player, enemy=enemy)

    result = engine.submit_player_move("quick-attack")

    state = engine.battle_state
    assert state.enemy is None
    assert state.money == 5
    assert state.inventory["potion"] == 6
    assert player.experience == 8
    assert state.area_progress.defeatCount == 1
    for kind in (EventKind.VICTORY, EventKind.ENEMY_DESPAWNED, EventKind.EXPERIENCE_GAINED, EventKind.ITEM_RECEIVED):
        assert result.has_event(kind)
    assert engine.scheduler.now_ms == 0


def test_clearing_an_area_unlocks_the_next_one():
    player = make_mon("lucario", moves=["quick-attack"])
    engine = make_engine(player, enemy=make_enemy("pidgey", level=2))
    state = engine.battle_state
    state.area_progress.defeatCount = 9

    assert engine.move_to_next_area().accepted is False

    result = engine.submit_player_move("quick-attack")
    assert result.has_event(EventKind.AREA_CLEARED)

    moved = engine.move_to_next_area()
    assert moved.accepted
    assert moved.has_event(EventKind.AREA_CHANGED)
    assert state.current_area_id == "route-3"
    assert state.area_progress.defeatCount == 0


def test_gym_leader_defeat_awards_badge_and_opens_the_way():
    player = make_mon("lucario", moves=["quick-attack"])
    engine = make_engine(player, current_area_id="pewter-city-gym")
    state = engine.battle_state

    engine.start_encounter()
    leader = state.enemy
    assert leader.is_gym_leader
    assert engine.attempt_capture().accepted is False

    leader.currentHp = 1
    result = engine.submit_player_move("quick-attack")

    assert state.defeated_gyms == {"pewter-city-gym": True}
    assert state.inventory["boulder-badge"] == 1
    assert any(entry.category == LogCategory.GYM_LEADER_DEFEAT for entry in result.logs)
    assert result.has_event(EventKind.AREA_CLEARED)
    assert engine.move_to_next_area().accepted
    assert state.current_area_id == "mt-moon-entrance"


def test_fainted_player_is_replaced_by_next_living_creature():
    pikachu = make_mon("pikachu", level=10, moves=["growl"])
    pikachu.currentHp = 1
    squirtle = make_mon("squirtle", level=10)
    engine = make_engine(pikachu, squirtle, enemy=make_enemy("lucario", level=50, moves=["quick-attack"]))

    result = engine.submit_player_move("growl")

    state = engine.battle_state
    assert pikachu.is_fainted()
    assert state.active_index == 1
    assert result.events_of(EventKind.PLAYER_SWITCHED)[0].data["forced"] is True
    assert state.all_fainted is False


def test_losing_every_creature_blocks_battle_until_healed():
    pikachu = make_mon("pikachu", level=10, moves=["growl"])
    pikachu.currentHp = 1
    engine = make_engine(pikachu, enemy=make_enemy("lucario", level=50, moves=["quick-attack"]))
    state = engine.battle_state

    result = engine.submit_player_move("growl")
    assert state.all_fainted
    assert result.has_event(EventKind.ALL_FAINTED)
    assert result.has_event(EventKind.ENEMY_DESPAWNED)
    assert state.enemy is None
    assert engine.submit_player_move("growl").accepted is False

    healed = engine.heal_all()
    assert healed.accepted
    assert state.all_fainted is False
    assert state.enemy is None
    assert pikachu.currentHp == pikachu.maxHp
    assert pikachu.get_learned_move("growl").currentPP == pikachu.get_learned_move("growl").maxPP


# =============================================================================
# CAPTURE / FLEE
# =============================================================================


def test_capturing_a_new_species_adds_it_to_the_roster(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    engine = make_engine(make_mon("lucario", moves=["quick-attack"]), enemy=make_enemy("pidgey", level=3, reward=5))
    state = engine.battle_state

    result = engine.attempt_capture()

    assert result.accepted
    assert [member.species for member in state.roster] == ["lucario", "pidgey"]
    assert state.roster[1].level == 3
    assert state.money == 2.5
    assert state.enemy is None
    assert state.inventory["poke-ball"] == 9
    assert len(result.events_of(EventKind.CAPTURE_SHAKE)) == 1
    assert engine.scheduler.now_ms == 800


def test_capturing_an_owned_species_grants_experience(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    player = make_mon("pikachu", level=10)
    engine = make_engine(player, enemy=make_enemy("pikachu", level=6, experience=8))

    engine.attempt_capture()

    assert len(engine.battle_state.roster) == 1
    assert player.experience == 8


def test_failed_capture_lets_the_enemy_act(monkeypatch):
    force_rolls(monkeypatch, 0.99)
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    engine = make_engine(make_mon("lucario", moves=["quick-attack"]), enemy=enemy)

    result = engine.attempt_capture()

    assert result.has_event(EventKind.CAPTURE_FAILED)
    assert result.events_of(EventKind.MOVE_USED)[0].side == Side.ENEMY
    assert engine.battle_state.enemy is enemy
    assert engine.scheduler.now_ms == 3 * 800 + 1000


def test_successful_flee_despawns_and_resets_stages(monkeypatch):
    force_rolls(monkeypatch, 0.0)
    player = make_mon("lucario", moves=["quick-attack"])
    player.statStages.set(StatName.ATTACK, 2)
    engine = make_engine(player, enemy=make_enemy("magikarp", moves=["agility"]))

    result = engine.attempt_flee()

    assert result.has_event(EventKind.FLEE_SUCCESS)
    assert engine.battle_state.enemy is None
    assert player.statStages.is_neutral()


def test_failed_flee_lets_the_enemy_act(monkeypatch):
    force_rolls(monkeypatch, 0.99)
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    engine = make_engine(make_mon("lucario", moves=["quick-attack"]), enemy=enemy)

    result = engine.attempt_flee()

    assert result.has_event(EventKind.FLEE_FAILED)
    assert [event.side for event in result.events_of(EventKind.MOVE_USED)] == [Side.ENEMY]
    assert engine.battle_state.enemy is enemy


# =============================================================================
# EVOLUTION / ITEMS / SWITCHING
# =============================================================================


def test_level_evolution_runs_after_the_victory():
    bulbasaur = make_mon("bulbasaur", level=15, moves=["tackle"], experience=15**3 - 1)
    engine = make_engine(bulbasaur, enemy=make_enemy("pidgey", level=2, experience=8))

    result = engine.submit_player_move("tackle")

    state = engine.battle_state
    evolved = state.roster[0]
    assert evolved.species == "ivysaur"
    assert evolved.level == 16
    assert [move.moveId for move in evolved.moves] == ["tackle", "growl", "vine-whip"]
    assert result.has_event(EventKind.EVOLUTION_STARTED)
    assert result.has_event(EventKind.EVOLVED)
    assert state.evolving is False
    assert state.first_caught_at["ivysaur"] == engine.scheduler.now_ms == 2500


def test_potion_heals_and_is_consumed():
    player = make_mon("pikachu", level=10)
    player.currentHp = 5
    engine = make_engine(player)

    result = engine.use_item("potion")

    assert result.accepted
    assert player.currentHp == min(player.maxHp, 25)
    assert engine.battle_state.inventory["potion"] == 4


def test_item_without_effect_is_not_consumed():
    engine = make_engine(make_mon("pikachu", level=10))

    result = engine.use_item("potion")

    assert result.accepted is False
    assert engine.battle_state.inventory["potion"] == 5


def test_evolution_stone_only_works_on_its_species():
    engine = make_engine(make_mon("pikachu", level=10), make_mon("bulbasaur", level=10))
    state = engine.battle_state
    state.add_item("thunder-stone", 1)

    assert engine.use_item("thunder-stone", roster_index=1).accepted is False
    assert state.inventory["thunder-stone"] == 1

    result = engine.use_item("thunder-stone", roster_index=0)
    assert result.has_event(EventKind.EVOLVED)
    assert state.roster[0].species == "raichu"
    assert "thunder-stone" not in state.inventory


def test_evolving_a_fainted_team_lets_it_battle_again():
    pikachu = make_mon("pikachu", level=10)
    pikachu.currentHp = 0
    engine = make_engine(pikachu, all_fainted=True)
    state = engine.battle_state
    state.add_item("thunder-stone", 1)

    assert engine.start_encounter().accepted is False

    assert engine.use_item("thunder-stone").accepted
    assert state.roster[0].species == "raichu"
    assert state.roster[0].currentHp == state.roster[0].maxHp
    assert state.all_fainted is False
    assert engine.start_encounter().accepted
    assert state.enemy is not None


def test_evolving_a_fainted_bench_creature_sends_it_out():
    bulbasaur = make_mon("bulbasaur", level=10)
    pikachu = make_mon("pikachu", level=10)
    bulbasaur.currentHp = 0
    pikachu.currentHp = 0
    engine = make_engine(bulbasaur, pikachu, all_fainted=True)
    state = engine.battle_state
    state.add_item("thunder-stone", 1)

    result = engine.use_item("thunder-stone", roster_index=1)

    assert state.all_fainted is False
    assert state.active_index == 1
    assert state.active.species == "raichu"
    assert result.has_event(EventKind.PLAYER_SWITCHED)


def test_technical_machine_respects_type_compatibility():
    pikachu = make_mon("pikachu", level=10)
    engine = make_engine(pikachu, make_mon("bulbasaur", level=10))
    state = engine.battle_state
    state.add_item("tm24-thunderbolt", 2)

    assert engine.use_item("tm24-thunderbolt").accepted
    assert pikachu.knows_move("thunderbolt")

    rejected = engine.use_item("tm24-thunderbolt", roster_index=1)
    assert rejected.accepted is False
    assert state.inventory["tm24-thunderbolt"] == 1


def test_rare_candy_grants_experience():
    player = make_mon("pikachu", level=5)
    engine = make_engine(player)
    engine.battle_state.add_item("rare-candy", 1)

    engine.use_item("rare-candy")

    assert player.level == 6
    assert player.experience == 125


def test_status_cure_item_only_cures_its_condition():
    player = make_mon("pikachu", level=10)
    player.status = StatusCondition.BURN
    engine = make_engine(player)
    engine.battle_state.add_item("antidote", 1)
    engine.battle_state.add_item("burn-heal", 1)

    assert engine.use_item("antidote").accepted is False
    assert engine.use_item("burn-heal").accepted
    assert player.status == StatusCondition.NONE


def test_manual_switch_resets_stages_and_triggers_intimidate():
    pikachu = make_mon("pikachu", level=10)
    pikachu.statStages.set(StatName.ATTACK, 2)
    enemy = make_enemy("rattata", moves=["growl"])
    engine = make_engine(pikachu, make_mon("gyarados", level=20), enemy=enemy)

    result = engine.switch_active(1)

    assert result.accepted
    assert engine.battle_state.active_index == 1
    assert pikachu.statStages.is_neutral()
    assert enemy.statStages.attack == -1
    assert engine.switch_active(1).accepted is False
    pikachu.currentHp = 0
    assert engine.switch_active(0).accepted is False
    assert engine.switch_active(5).accepted is False


# =============================================================================
# ENCOUNTERS / BACKGROUND TICK
# =============================================================================


def test_start_encounter_rejects_when_already_battling():
    engine = make_engine(make_mon("pikachu", level=10), enemy=make_enemy("pidgey"))

    assert engine.start_encounter().accepted is False
    engine.battle_state.enemy = None
    assert engine.start_encounter("route-3").accepted is False
    assert engine.start_encounter().accepted
    assert engine.battle_state.enemy is not None


def test_background_tick_spawns_once_when_idle():
    engine = make_engine(make_mon("pikachu", level=10))
    results = []

    engine.start_background_tick(100, on_result=results.append)
    engine.scheduler.advance(100)

    assert engine.battle_state.enemy is not None
    assert results[0].has_event(EventKind.ENEMY_SPAWNED)

    engine.scheduler.advance(300)
    assert len(results) == 1


def test_background_ticks_during_pacing_see_the_busy_flag():
    enemy = make_enemy("magikarp", level=20, moves=["agility"])
    engine = make_engine(make_mon("lucario", moves=["swords-dance"]), enemy=enemy)
    results = []
    engine.start_background_tick(100, on_result=results.append)

    result = engine.submit_player_move("swords-dance")

    assert results == []
    assert engine.battle_state.enemy is enemy
    assert not result.has_event(EventKind.ENEMY_SPAWNED)


def test_log_is_capped_after_each_operation():
    engine = make_engine(make_mon("pikachu", level=10))

    for _ in range(40):
        engine.heal_all()

    assert len(engine.battle_state.log) == engine.battle_state.config.battle_log_max_entries
