import math

from clicker_quest.constants import STAT_STAGE_RATIOS, MIN_STAT_STAGE, MAX_STAT_STAGE
from clicker_quest.schema.species_info import StatBlock


def compute_stat(base: int, level: int, is_hp: bool) -> int:
    """floor(base*2*level/100 + level + 10) for HP, floor(base*2*level/100 + 5) otherwise"""
    if is_hp:
        return math.floor(base * 2 * level / 100 + level + 10)
    return math.floor(base * 2 * level / 100 + 5)


def calculate_stats(base_stats: StatBlock, level: int) -> StatBlock:
    """Derive all six stats for a level; derived hp is the combatant's maxHp"""
    return StatBlock(
        hp=compute_stat(base_stats.hp, level, is_hp=True),
        attack=compute_stat(base_stats.attack, level, is_hp=False),
        defense=compute_stat(base_stats.defense, level, is_hp=False),
        specialAttack=compute_stat(base_stats.specialAttack, level, is_hp=False),
        specialDefense=compute_stat(base_stats.specialDefense, level, is_hp=False),
        speed=compute_stat(base_stats.speed, level, is_hp=False),
    )


def stage_multiplier(stage: int) -> float:
    """Multiplier for a stat stage; out-of-range stages are clamped first"""
    stage = max(MIN_STAT_STAGE, min(MAX_STAT_STAGE, stage))
    numerator, denominator = STAT_STAGE_RATIOS[stage]
    return numerator / denominator


def apply_stat_mod(value: int, stage: int) -> int:
    """Apply a stat stage to a raw stat, rounding down"""
    return math.floor(value * stage_multiplier(stage))
