from pydantic import BaseModel, Field

from clicker_quest.constants import MAX_LEARNED_MOVES, MAX_LEVEL, MIN_LEVEL
from clicker_quest.enums import Ability, StatusCondition


class SavedMove(BaseModel):
    moveId: str
    currentPP: int = Field(ge=0)


class SavedCombatant(BaseModel):
    """Persisted fields of a player creature.

    Derived stats, stat stages and transient flags are intentionally absent;
    they are re-derived (stats) or reset to neutral (everything else) on load.
    """

    speciesId: str
    level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    experience: int = Field(ge=0)
    currentHp: int = Field(ge=0)
    moves: list[SavedMove] = Field(default_factory=list, max_length=MAX_LEARNED_MOVES)
    status: StatusCondition = StatusCondition.NONE
    statusTurns: int = Field(default=0, ge=0)
    confusionTurns: int = Field(default=0, ge=0)
    ability: Ability = Ability.NONE
