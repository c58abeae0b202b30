from typing import Optional

from pydantic import BaseModel, Field

from clicker_quest.enums import Type, MoveCategory, StatName, StatusCondition, EffectTarget


class StatChangeEffect(BaseModel):
    """One stage change a status move applies"""

    stat: StatName
    delta: int = Field(ge=-12, le=12)
    target: EffectTarget = EffectTarget.OPPONENT
    chance: Optional[float] = Field(default=None, ge=0.0, le=1.0)  # None = always


class StatusEffect(BaseModel):
    """Status a move may inflict; turn range only matters for sleep and confusion"""

    condition: StatusCondition
    chance: float = Field(default=1.0, ge=0.0, le=1.0)
    target: EffectTarget = EffectTarget.OPPONENT
    minTurns: Optional[int] = Field(default=None, ge=1)
    maxTurns: Optional[int] = Field(default=None, ge=1)


class BattleMove(BaseModel):
    """Static move data"""

    id: str
    name: str
    type: Type
    category: MoveCategory
    power: Optional[int] = Field(default=None, ge=0)  # None for status moves
    accuracy: Optional[int] = Field(default=None, ge=0, le=100)  # None = never misses
    pp: int = Field(ge=1, le=64)
    priority: int = Field(default=0, ge=-7, le=7)
    statChanges: list[StatChangeEffect] = Field(default_factory=list)
    statusEffect: Optional[StatusEffect] = None
    isContactMove: bool = False

    def is_status_move(self) -> bool:
        return self.category == MoveCategory.STATUS

    def is_physical(self) -> bool:
        return self.category == MoveCategory.PHYSICAL
