import math

from pydantic import BaseModel

from clicker_quest import abilities
from clicker_quest.constants import FLASH_FIRE_POWER_MULTIPLIER, SAME_TYPE_ATTACK_BONUS
from clicker_quest.enums import StatName, StatusCondition, Type
from clicker_quest.schema.battle_move import BattleMove
from clicker_quest.schema.battle_state import BattleState
from clicker_quest.schema.combatant import Combatant
from clicker_quest.stat_calculator import apply_stat_mod
from clicker_quest.type_effectiveness import TYPE_MUL_NO_EFFECT, TypeEffectiveness
from clicker_quest.utils import rng


class DamageResult(BaseModel):
    damage: int
    critical: bool = False
    type_multiplier: float = 1.0


class DamageCalculator:
    """
    Damage formula for physical and special moves.

    Order of operations:
    1. Effective attack/defense from raw stats and stages (burn halves physical attack)
    2. Move power adjusted by pinch abilities and an active flash-fire boost
    3. Base damage from level, power and the attack/defense ratio
    4. Same-type bonus, type chart product, critical hit, random variance, each floored
    """

    def __init__(self, battle_state: BattleState):
        self.battle_state = battle_state

    def effective_stats(self, attacker: Combatant, defender: Combatant, move: BattleMove) -> tuple[int, int]:
        """Attack and defense the formula uses for this move"""
        if move.is_physical():
            attack_stat, defense_stat = StatName.ATTACK, StatName.DEFENSE
        else:
            attack_stat, defense_stat = StatName.SPECIAL_ATTACK, StatName.SPECIAL_DEFENSE

        attack = apply_stat_mod(getattr(attacker.stats, attack_stat.value), attacker.statStages.get(attack_stat))
        if move.is_physical() and attacker.status == StatusCondition.BURN:
            attack = attack * self.battle_state.config.burn_attack_modifier
        attack = max(1, math.floor(attack))

        defense = max(1, apply_stat_mod(getattr(defender.stats, defense_stat.value), defender.statStages.get(defense_stat)))
        return attack, defense

    def move_power(self, attacker: Combatant, move: BattleMove) -> int:
        power = move.power or 0
        power = abilities.modify_power(self.battle_state, attacker, move, power)
        if attacker.flashFireActive and move.type == Type.FIRE:
            power = math.floor(power * FLASH_FIRE_POWER_MULTIPLIER)
        return power

    def calculate_base_damage(self, attacker: Combatant, defender: Combatant, move: BattleMove) -> int:
        """Deterministic part of the formula, before any bonus or random factor"""
        attack, defense = self.effective_stats(attacker, defender, move)
        power = self.move_power(attacker, move)
        level_factor = 2 * attacker.level / 5 + 2
        return math.floor(level_factor * power * attack / defense / 50 + 2)

    def calculate_damage(self, attacker: Combatant, defender: Combatant, move: BattleMove) -> DamageResult:
        """Full damage roll; draws the critical-hit roll and then the variance roll"""
        config = self.battle_state.config
        damage = self.calculate_base_damage(attacker, defender, move)

        if attacker.has_type(move.type):
            damage = math.floor(damage * SAME_TYPE_ATTACK_BONUS)

        type_multiplier = TypeEffectiveness.get_effectiveness_multiplier(move.type, defender.types)
        damage = math.floor(damage * type_multiplier)

        critical = rng.random(self.battle_state) < config.critical_hit_chance
        if critical:
            damage = math.floor(damage * config.critical_hit_multiplier)

        variance = 1 + rng.random(self.battle_state) * 2 * config.damage_variation - config.damage_variation
        damage = math.floor(damage * variance)

        if type_multiplier == TYPE_MUL_NO_EFFECT:
            return DamageResult(damage=0, critical=False, type_multiplier=type_multiplier)
        return DamageResult(damage=max(1, damage), critical=critical, type_multiplier=type_multiplier)
