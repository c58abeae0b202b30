from clicker_quest.enums import Type

TYPE_MUL_NO_EFFECT = 0.0
TYPE_MUL_NORMAL = 1.0

MSG_SUPER_EFFECTIVE = "It's super effective!"
MSG_NOT_VERY_EFFECTIVE = "It's not very effective..."
MSG_NO_EFFECT = "It doesn't affect {name}..."

# Attacking type -> defending type -> multiplier; missing pairs are x1.0
TYPE_CHART: dict[Type, dict[Type, float]] = {
    Type.NORMAL: {Type.ROCK: 0.5, Type.GHOST: 0.0, Type.STEEL: 0.5},
    Type.FIRE: {
        Type.FIRE: 0.5,
        Type.WATER: 0.5,
        Type.GRASS: 2.0,
        Type.ICE: 2.0,
        Type.BUG: 2.0,
        Type.ROCK: 0.5,
        Type.DRAGON: 0.5,
        Type.STEEL: 2.0,
    },
    Type.WATER: {Type.FIRE: 2.0, Type.WATER: 0.5, Type.GRASS: 0.5, Type.GROUND: 2.0, Type.ROCK: 2.0, Type.DRAGON: 0.5},
    Type.GRASS: {
        Type.FIRE: 0.5,
        Type.WATER: 2.0,
        Type.GRASS: 0.5,
        Type.POISON: 0.5,
        Type.GROUND: 2.0,
        Type.FLYING: 0.5,
        Type.BUG: 0.5,
        Type.ROCK: 2.0,
        Type.DRAGON: 0.5,
        Type.STEEL: 0.5,
    },
    Type.ELECTRIC: {Type.WATER: 2.0, Type.GRASS: 0.5, Type.ELECTRIC: 0.5, Type.GROUND: 0.0, Type.FLYING: 2.0, Type.DRAGON: 0.5},
    Type.ICE: {
        Type.FIRE: 0.5,
        Type.WATER: 0.5,
        Type.GRASS: 2.0,
        Type.ICE: 0.5,
        Type.GROUND: 2.0,
        Type.FLYING: 2.0,
        Type.DRAGON: 2.0,
        Type.STEEL: 0.5,
    },
    Type.FIGHTING: {
        Type.NORMAL: 2.0,
        Type.ICE: 2.0,
        Type.POISON: 0.5,
        Type.FLYING: 0.5,
        Type.PSYCHIC: 0.5,
        Type.BUG: 0.5,
        Type.ROCK: 2.0,
        Type.GHOST: 0.0,
        Type.DARK: 2.0,
        Type.STEEL: 2.0,
        Type.FAIRY: 0.5,
    },
    Type.POISON: {Type.GRASS: 2.0, Type.POISON: 0.5, Type.GROUND: 0.5, Type.ROCK: 0.5, Type.GHOST: 0.5, Type.STEEL: 0.0, Type.FAIRY: 2.0},
    Type.GROUND: {
        Type.FIRE: 2.0,
        Type.GRASS: 0.5,
        Type.ELECTRIC: 2.0,
        Type.POISON: 2.0,
        Type.FLYING: 0.0,
        Type.BUG: 0.5,
        Type.ROCK: 2.0,
        Type.STEEL: 2.0,
    },
    Type.FLYING: {Type.GRASS: 2.0, Type.ELECTRIC: 0.5, Type.FIGHTING: 2.0, Type.BUG: 2.0, Type.ROCK: 0.5, Type.STEEL: 0.5},
    Type.PSYCHIC: {Type.FIGHTING: 2.0, Type.POISON: 2.0, Type.PSYCHIC: 0.5, Type.DARK: 0.0, Type.STEEL: 0.5},
    Type.BUG: {
        Type.FIRE: 0.5,
        Type.GRASS: 2.0,
        Type.FIGHTING: 0.5,
        Type.POISON: 0.5,
        Type.FLYING: 0.5,
        Type.PSYCHIC: 2.0,
        Type.GHOST: 0.5,
        Type.DARK: 2.0,
        Type.STEEL: 0.5,
        Type.FAIRY: 0.5,
    },
    Type.ROCK: {Type.FIRE: 2.0, Type.ICE: 2.0, Type.FIGHTING: 0.5, Type.GROUND: 0.5, Type.FLYING: 2.0, Type.BUG: 2.0, Type.STEEL: 0.5},
    Type.GHOST: {Type.NORMAL: 0.0, Type.PSYCHIC: 2.0, Type.GHOST: 2.0, Type.DARK: 0.5},
    Type.DRAGON: {Type.DRAGON: 2.0, Type.STEEL: 0.5, Type.FAIRY: 0.0},
    Type.DARK: {Type.FIGHTING: 0.5, Type.PSYCHIC: 2.0, Type.GHOST: 2.0, Type.DARK: 0.5, Type.FAIRY: 0.5},
    Type.STEEL: {Type.FIRE: 0.5, Type.WATER: 0.5, Type.ELECTRIC: 0.5, Type.ICE: 2.0, Type.ROCK: 2.0, Type.STEEL: 0.5, Type.FAIRY: 2.0},
    Type.FAIRY: {Type.FIRE: 0.5, Type.FIGHTING: 2.0, Type.POISON: 0.5, Type.DRAGON: 2.0, Type.DARK: 2.0, Type.STEEL: 0.5},
}


class TypeEffectiveness:
    """Type matchup lookups against single or dual-type defenders"""

    @staticmethod
    def get_effectiveness(attacking_type: Type, defending_type: Type) -> float:
        return TYPE_CHART.get(attacking_type, {}).get(defending_type, TYPE_MUL_NORMAL)

    @staticmethod
    def get_effectiveness_multiplier(attacking_type: Type, defending_types: list[Type]) -> float:
        """
        Product of the chart multipliers over every defending type.

        A duplicated type only counts once, so a [FIRE, FIRE] entry behaves
        like a single FIRE type.
        """
        multiplier = TYPE_MUL_NORMAL
        for defending_type in dict.fromkeys(defending_types):
            multiplier *= TypeEffectiveness.get_effectiveness(attacking_type, defending_type)
        return multiplier

    @staticmethod
    def is_immune(attacking_type: Type, defending_types: list[Type]) -> bool:
        return TypeEffectiveness.get_effectiveness_multiplier(attacking_type, defending_types) == TYPE_MUL_NO_EFFECT

    @staticmethod
    def get_effectiveness_description(multiplier: float, defender_name: str = "") -> str:
        """Get human-readable description of a multiplier (empty for x1.0)"""
        if multiplier == TYPE_MUL_NO_EFFECT:
            return MSG_NO_EFFECT.format(name=defender_name)
        elif multiplier < TYPE_MUL_NORMAL:
            return MSG_NOT_VERY_EFFECTIVE
        elif multiplier > TYPE_MUL_NORMAL:
            return MSG_SUPER_EFFECTIVE
        else:
            return ""
