from typing import Optional

from pydantic import BaseModel, Field

from clicker_quest.enums import UnlockConditionType


class ItemDrop(BaseModel):
    itemId: str
    dropRate: float = Field(ge=0.0, le=1.0)
    minQuantity: int = Field(default=1, ge=1)
    maxQuantity: int = Field(default=1, ge=1)


class SpawnEntry(BaseModel):
    """One row of an area's encounter table; unset overrides fall back to area defaults"""

    speciesId: str
    level: int = Field(ge=1, le=100)
    spawnWeight: float = Field(ge=0.0)
    moves: Optional[list[str]] = None
    rewardMoney: Optional[int] = Field(default=None, ge=0)
    baseCatchRate: Optional[float] = Field(default=None, ge=0.0)
    givesExperience: Optional[int] = Field(default=None, ge=0)
    drops: list[ItemDrop] = Field(default_factory=list)
    isBoss: bool = False
    isGymLeader: bool = False


class UnlockCondition(BaseModel):
    type: UnlockConditionType
    count: Optional[int] = Field(default=None, ge=1)  # defeatCount
    bossSpeciesId: Optional[str] = None  # defeatBoss


class MapArea(BaseModel):
    id: str
    name: str
    enemyDefinitions: list[SpawnEntry]
    defaultRewardMoney: int = Field(ge=0)
    defaultGivesExperience: int = Field(ge=0)
    unlockConditionToNext: UnlockCondition
    nextAreaId: Optional[str] = None
    isGym: bool = False

    def gym_leader_entry(self) -> Optional[SpawnEntry]:
        return next((entry for entry in self.enemyDefinitions if entry.isGymLeader), None)


class AreaProgress(BaseModel):
    defeatCount: int = Field(default=0, ge=0)
    bossDefeated: bool = False
