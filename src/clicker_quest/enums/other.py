from enum import Enum


class Side(str, Enum):
    """Which side of the field a combatant belongs to"""

    PLAYER = "player"
    ENEMY = "enemy"

    def opposite(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class LogCategory(str, Enum):
    INFO = "info"
    PLAYER_ATTACK = "player_attack"
    ENEMY_ATTACK = "enemy_attack"
    PLAYER_DAMAGE = "player_damage"
    ENEMY_DAMAGE = "enemy_damage"
    BUFF = "buff"
    DEBUFF = "debuff"
    SYSTEM = "system"
    VICTORY = "victory"
    DEFEAT = "defeat"
    CATCH_SUCCESS = "catch_success"
    CATCH_FAIL = "catch_fail"
    MAP_PROGRESS = "map_progress"
    GYM_LEADER_INTRO = "gym_leader_intro"
    GYM_LEADER_DEFEAT = "gym_leader_defeat"
    EVOLUTION = "evolution"
    STATUS_INFLICTED = "status_inflicted"
    STATUS_EFFECT = "status_effect"
    STATUS_CURED = "status_cured"
    ABILITY_ACTIVATION = "ability_activation"
    ITEM = "item"


class EventKind(str, Enum):
    """Structured events emitted alongside log entries"""

    # Encounters
    ENEMY_SPAWNED = "enemy_spawned"
    NO_MORE_TARGETS = "no_more_targets"
    ENEMY_DESPAWNED = "enemy_despawned"

    # State deltas
    HP_CHANGED = "hp_changed"
    STATUS_CHANGED = "status_changed"
    STAGE_CHANGED = "stage_changed"

    # Turn flow
    MOVE_USED = "move_used"
    MOVE_MISSED = "move_missed"
    TURN_FORFEITED = "turn_forfeited"
    ABILITY_ACTIVATED = "ability_activated"
    FAINTED = "fainted"
    VICTORY = "victory"
    PLAYER_SWITCHED = "player_switched"
    ALL_FAINTED = "all_fainted"

    # Progression
    EXPERIENCE_GAINED = "experience_gained"
    LEVEL_UP = "level_up"
    MOVE_LEARNED = "move_learned"
    EVOLUTION_STARTED = "evolution_started"
    EVOLVED = "evolved"

    # Capture / flee
    CAPTURE_SHAKE = "capture_shake"
    CAPTURE_SUCCESS = "capture_success"
    CAPTURE_FAILED = "capture_failed"
    FLEE_SUCCESS = "flee_success"
    FLEE_FAILED = "flee_failed"

    # World
    ITEM_RECEIVED = "item_received"
    ITEM_USED = "item_used"
    AREA_CLEARED = "area_cleared"
    AREA_CHANGED = "area_changed"


class UnlockConditionType(str, Enum):
    DEFEAT_COUNT = "defeatCount"
    DEFEAT_BOSS = "defeatBoss"


class ItemEffectType(str, Enum):
    HEAL_HP_FLAT = "heal_hp_flat"
    EXP_GAIN = "exp_gain"
    EVOLVE = "evolve"
    CURE_STATUS = "cure_status"
    CURE_ALL_MAJOR_STATUS = "cure_all_major_status"
    TEACH_MOVE = "teach_move"
