# =============================================================================
# CREATURE LIMITS
# =============================================================================
MIN_LEVEL = 1
MAX_LEVEL = 100
MAX_LEARNED_MOVES = 4

# Fallback move for spawns whose species knows nothing at their level
DEFAULT_MOVE_ID = "tackle"

# =============================================================================
# STAT STAGES
# =============================================================================
MIN_STAT_STAGE = -6
DEFAULT_STAT_STAGE = 0
MAX_STAT_STAGE = 6

# Stage -> (numerator, denominator); negative stages 2/(2+|s|), positive (2+s)/2
STAT_STAGE_RATIOS = {
    -6: (2, 8),
    -5: (2, 7),
    -4: (2, 6),
    -3: (2, 5),
    -2: (2, 4),
    -1: (2, 3),
    0: (2, 2),
    1: (3, 2),
    2: (4, 2),
    3: (5, 2),
    4: (6, 2),
    5: (7, 2),
    6: (8, 2),
}

# =============================================================================
# DAMAGE
# =============================================================================
BASE_CRITICAL_HIT_CHANCE = 0.0625
CRITICAL_HIT_MULTIPLIER = 1.5
SAME_TYPE_ATTACK_BONUS = 1.5
DAMAGE_VARIATION = 0.15
PINCH_ABILITY_HP_RATIO = 1 / 3
PINCH_ABILITY_POWER_MULTIPLIER = 1.5
FLASH_FIRE_POWER_MULTIPLIER = 1.5
STATIC_PARALYSIS_CHANCE = 0.3

# =============================================================================
# STATUS CONDITIONS
# =============================================================================
STATUS_DAMAGE_FRACTION = 1 / 16
PARALYSIS_CHANCE_TO_SKIP_TURN = 0.25
BURN_ATTACK_MODIFIER = 0.5

SLEEP_MIN_TURNS = 1
SLEEP_MAX_TURNS = 3
CONFUSION_MIN_TURNS = 2
CONFUSION_MAX_TURNS = 5
CONFUSION_SELF_ATTACK_CHANCE = 0.33
CONFUSION_SELF_ATTACK_POWER = 40

# =============================================================================
# CAPTURE & FLEE
# =============================================================================
MIN_CATCH_CHANCE = 0.01
MAX_CATCH_CHANCE = 0.95
CATCH_CHANCE_HP_FACTOR = 2.5
CATCH_STATUS_BONUS_STRONG = 1.5  # sleep, paralysis
CATCH_STATUS_BONUS_WEAK = 1.2  # any other major status
CAPTURE_SHAKE_ATTEMPTS = 3
DEFAULT_BASE_CATCH_RATE = 0.2
DEFAULT_CAPTURE_ITEM_ID = "poke-ball"

FLEE_SUCCESS_CHANCE = 0.6

# =============================================================================
# EXPERIENCE - index 0 is 0, index L needs L^3 to reach L + 1
# =============================================================================
EXPERIENCE_FOR_LEVEL_UP = [0] + [level**3 for level in range(1, MAX_LEVEL)]

# =============================================================================
# ECONOMY & INVENTORY
# =============================================================================
DEFAULT_ITEM_MAX_STACK = 99
INITIAL_ITEMS = {
    "poke-ball": 10,
    "potion": 5,
    "oran-berry-seed": 3,
}
INITIAL_AREA_ID = "tokiwa-forest"

# =============================================================================
# PACING (virtual clock, milliseconds)
# =============================================================================
TURN_PACING_MS = 1000
CAPTURE_SHAKE_INTERVAL_MS = 800
EVOLUTION_ANIMATION_DURATION_MS = 2500
GAME_TICK_MS = 100

BATTLE_LOG_MAX_ENTRIES = 25
