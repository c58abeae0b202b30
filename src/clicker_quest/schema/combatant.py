from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from clicker_quest.constants import DEFAULT_STAT_STAGE, MAX_LEVEL, MIN_LEVEL, MAX_LEARNED_MOVES, MIN_STAT_STAGE, MAX_STAT_STAGE
from clicker_quest.enums import Ability, Side, StatName, StatusCondition, Type
from clicker_quest.schema.map_area import ItemDrop
from clicker_quest.schema.species_info import StatBlock


class StatStages(BaseModel):
    """Per-stat stage modifiers, neutral at 0"""

    hp: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)
    attack: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)
    defense: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)
    specialAttack: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)
    specialDefense: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)
    speed: int = Field(default=DEFAULT_STAT_STAGE, ge=MIN_STAT_STAGE, le=MAX_STAT_STAGE)

    def get(self, stat: StatName) -> int:
        return getattr(self, stat.value)

    def set(self, stat: StatName, value: int) -> None:
        setattr(self, stat.value, max(MIN_STAT_STAGE, min(MAX_STAT_STAGE, value)))

    def is_neutral(self) -> bool:
        return all(self.get(stat) == DEFAULT_STAT_STAGE for stat in StatName)


class LearnedMove(BaseModel):
    moveId: str
    currentPP: int = Field(ge=0)
    maxPP: int = Field(ge=1)


class EncounterInfo(BaseModel):
    """Enemy-only data resolved from the spawn entry and its area"""

    rewardMoney: int = Field(default=0, ge=0)
    baseCatchRate: float = Field(default=0.2, ge=0.0)
    givesExperience: int = Field(default=0, ge=0)
    isBoss: bool = False
    isGymLeader: bool = False
    drops: list[ItemDrop] = Field(default_factory=list)


class Combatant(BaseModel):
    """
    A creature instance in battle, either the player's or the current enemy.

    Both sides share this one shape; `side` tells them apart. Enemies carry an
    EncounterInfo, player creatures never do. Derived stats are always the
    StatCalculator output for (baseStats, level) and are recomputed on level-up
    and evolution, never edited directly.
    """

    side: Side
    species: str
    name: str
    types: list[Type] = Field(min_length=1, max_length=2)

    level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    experience: int = Field(default=0, ge=0)

    baseStats: StatBlock
    stats: StatBlock
    maxHp: int = Field(ge=1)
    currentHp: int = Field(ge=0)

    # Major status (mutually exclusive) and its counter; confusion is independent
    status: StatusCondition = StatusCondition.NONE
    statusTurns: int = Field(default=0, ge=0)
    confusionTurns: int = Field(default=0, ge=0)

    statStages: StatStages = Field(default_factory=StatStages)
    ability: Ability = Ability.NONE

    # Transient per-battle flags
    flashFireActive: bool = False

    moves: list[LearnedMove] = Field(default_factory=list, max_length=MAX_LEARNED_MOVES)
    encounter: Optional[EncounterInfo] = None

    @field_validator("status")
    @classmethod
    def _major_status_only(cls, value: StatusCondition) -> StatusCondition:
        if value == StatusCondition.CONFUSION:
            raise ValueError("confusion is tracked through confusionTurns, not status")
        return value

    @model_validator(mode="after")
    def _hp_within_max(self) -> "Combatant":
        if self.currentHp > self.maxHp:
            raise ValueError(f"currentHp {self.currentHp} exceeds maxHp {self.maxHp}")
        return self

    def is_fainted(self) -> bool:
        return self.currentHp <= 0

    def is_confused(self) -> bool:
        return self.confusionTurns > 0

    def has_type(self, type_: Type) -> bool:
        return type_ in self.types

    def get_learned_move(self, move_id: str) -> Optional[LearnedMove]:
        return next((move for move in self.moves if move.moveId == move_id), None)

    def knows_move(self, move_id: str) -> bool:
        return self.get_learned_move(move_id) is not None

    @property
    def is_gym_leader(self) -> bool:
        return self.encounter is not None and self.encounter.isGymLeader

    @property
    def is_boss(self) -> bool:
        return self.encounter is not None and self.encounter.isBoss

    def clear_status(self) -> None:
        self.status = StatusCondition.NONE
        self.statusTurns = 0

    def reset_battle_modifiers(self) -> None:
        """Wipe stat stages and transient flags (switch-in/out, despawn)"""
        self.statStages = StatStages()
        self.flashFireActive = False

    def reset_after_faint(self) -> None:
        self.currentHp = 0
        self.clear_status()
        self.confusionTurns = 0
        self.reset_battle_modifiers()

    def restore_pp(self) -> None:
        for move in self.moves:
            move.currentPP = move.maxPP

    @property
    def display_name(self) -> str:
        if self.side == Side.PLAYER:
            return self.name
        if self.is_gym_leader:
            return f"Leader's {self.name}"
        return f"Wild {self.name}"
