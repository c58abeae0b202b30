from typing import Optional

from pydantic import BaseModel, Field

from clicker_quest.enums import Type, Ability


class StatBlock(BaseModel):
    """The six named stats, used for both base and derived values"""

    hp: int = Field(ge=0)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    specialAttack: int = Field(ge=0)
    specialDefense: int = Field(ge=0)
    speed: int = Field(ge=0)


class LevelUpMove(BaseModel):
    moveId: str
    level: int = Field(ge=1, le=100)


class EvolutionInfo(BaseModel):
    """Evolution target; exactly one of level / itemId is expected to be set"""

    evolvesTo: str
    level: Optional[int] = Field(default=None, ge=1, le=100)
    itemId: Optional[str] = None


class SpeciesInfo(BaseModel):
    """Species data - base stats, learnset, capture tuning and evolution"""

    id: str
    name: str
    types: list[Type] = Field(min_length=1, max_length=2)
    baseStats: StatBlock
    levelUpMoves: list[LevelUpMove] = Field(default_factory=list)
    catchRateBonus: float = Field(default=1.0, gt=0.0)
    abilities: list[Ability] = Field(default_factory=lambda: [Ability.NONE])
    evolution: Optional[EvolutionInfo] = None

    def moves_learned_at(self, level: int) -> list[str]:
        return [entry.moveId for entry in self.levelUpMoves if entry.level == level]

    def moves_learnable_by(self, level: int) -> list[str]:
        return [entry.moveId for entry in self.levelUpMoves if entry.level <= level]

    @property
    def default_ability(self) -> Ability:
        return self.abilities[0] if self.abilities else Ability.NONE
