from enum import Enum


class MoveCategory(str, Enum):
    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class StatName(str, Enum):
    """The six stats; field names match StatBlock / StatStages"""

    HP = "hp"
    ATTACK = "attack"
    DEFENSE = "defense"
    SPECIAL_ATTACK = "specialAttack"
    SPECIAL_DEFENSE = "specialDefense"
    SPEED = "speed"

    @property
    def label(self) -> str:
        return _STAT_LABELS[self]


_STAT_LABELS = {
    StatName.HP: "HP",
    StatName.ATTACK: "Attack",
    StatName.DEFENSE: "Defense",
    StatName.SPECIAL_ATTACK: "Sp. Atk",
    StatName.SPECIAL_DEFENSE: "Sp. Def",
    StatName.SPEED: "Speed",
}


class EffectTarget(str, Enum):
    SELF = "self"
    OPPONENT = "opponent"
