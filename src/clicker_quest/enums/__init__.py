from clicker_quest.enums.type import Type
from clicker_quest.enums.ability import Ability
from clicker_quest.enums.status import StatusCondition
from clicker_quest.enums.move import MoveCategory, StatName, EffectTarget
from clicker_quest.enums.other import Side, LogCategory, EventKind, UnlockConditionType, ItemEffectType
