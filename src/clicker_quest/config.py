from pydantic import BaseModel, Field

from clicker_quest import constants as c


class BattleConfig(BaseModel):
    """
    Tunable rule numbers for one game session.

    Defaults mirror clicker_quest.constants; callers override individual values
    with BattleConfig(**overrides) or BattleConfig.model_validate(mapping) and
    hand the result to the BattleState they own.
    """

    # Damage
    critical_hit_chance: float = Field(default=c.BASE_CRITICAL_HIT_CHANCE, ge=0.0, le=1.0)
    critical_hit_multiplier: float = Field(default=c.CRITICAL_HIT_MULTIPLIER, ge=1.0)
    damage_variation: float = Field(default=c.DAMAGE_VARIATION, ge=0.0, lt=1.0)
    static_paralysis_chance: float = Field(default=c.STATIC_PARALYSIS_CHANCE, ge=0.0, le=1.0)

    # Status
    status_damage_fraction: float = Field(default=c.STATUS_DAMAGE_FRACTION, gt=0.0, le=1.0)
    paralysis_skip_chance: float = Field(default=c.PARALYSIS_CHANCE_TO_SKIP_TURN, ge=0.0, le=1.0)
    burn_attack_modifier: float = Field(default=c.BURN_ATTACK_MODIFIER, gt=0.0, le=1.0)
    confusion_self_attack_chance: float = Field(default=c.CONFUSION_SELF_ATTACK_CHANCE, ge=0.0, le=1.0)
    confusion_self_attack_power: int = Field(default=c.CONFUSION_SELF_ATTACK_POWER, ge=1)
    sleep_min_turns: int = Field(default=c.SLEEP_MIN_TURNS, ge=1)
    sleep_max_turns: int = Field(default=c.SLEEP_MAX_TURNS, ge=1)
    confusion_min_turns: int = Field(default=c.CONFUSION_MIN_TURNS, ge=1)
    confusion_max_turns: int = Field(default=c.CONFUSION_MAX_TURNS, ge=1)

    # Capture / flee
    min_catch_chance: float = Field(default=c.MIN_CATCH_CHANCE, ge=0.0, le=1.0)
    max_catch_chance: float = Field(default=c.MAX_CATCH_CHANCE, ge=0.0, le=1.0)
    catch_hp_factor: float = Field(default=c.CATCH_CHANCE_HP_FACTOR, gt=0.0)
    capture_shake_attempts: int = Field(default=c.CAPTURE_SHAKE_ATTEMPTS, ge=1)
    flee_success_chance: float = Field(default=c.FLEE_SUCCESS_CHANCE, ge=0.0, le=1.0)

    # Pacing (virtual milliseconds)
    turn_pacing_ms: int = Field(default=c.TURN_PACING_MS, ge=0)
    capture_shake_interval_ms: int = Field(default=c.CAPTURE_SHAKE_INTERVAL_MS, ge=0)
    evolution_duration_ms: int = Field(default=c.EVOLUTION_ANIMATION_DURATION_MS, ge=0)

    battle_log_max_entries: int = Field(default=c.BATTLE_LOG_MAX_ENTRIES, ge=1)
