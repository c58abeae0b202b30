from typing import Optional

from pydantic import BaseModel, Field

from clicker_quest.constants import DEFAULT_ITEM_MAX_STACK
from clicker_quest.enums import ItemEffectType, StatusCondition, Type


class ItemEffect(BaseModel):
    type: ItemEffectType
    amount: int = Field(default=0, ge=0)  # heal_hp_flat, exp_gain
    requiredSpeciesId: Optional[str] = None  # evolve
    evolvesTo: Optional[str] = None  # evolve
    condition: Optional[StatusCondition] = None  # cure_status
    moveId: Optional[str] = None  # teach_move
    compatibleTypes: list[Type] = Field(default_factory=list)  # teach_move, empty = any


class ItemInfo(BaseModel):
    id: str
    name: str
    maxStack: int = Field(default=DEFAULT_ITEM_MAX_STACK, ge=1)
    catchModifier: Optional[float] = Field(default=None, gt=0.0)  # set only on capture items
    effect: Optional[ItemEffect] = None

    def is_capture_item(self) -> bool:
        return self.catchModifier is not None
