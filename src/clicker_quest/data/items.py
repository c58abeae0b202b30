from typing import Optional

from clicker_quest.enums import ItemEffectType, StatusCondition, Type
from clicker_quest.schema.item_info import ItemEffect, ItemInfo


def _heal(amount: int) -> ItemEffect:
    return ItemEffect(type=ItemEffectType.HEAL_HP_FLAT, amount=amount)


def _cure(condition: StatusCondition) -> ItemEffect:
    return ItemEffect(type=ItemEffectType.CURE_STATUS, condition=condition)


def _teach(move_id: str, *compatible: Type) -> ItemEffect:
    return ItemEffect(type=ItemEffectType.TEACH_MOVE, moveId=move_id, compatibleTypes=list(compatible))


_ITEM_LIST = [
    # =============================================================================
    # CAPTURE ITEMS
    # =============================================================================
    ItemInfo(id="poke-ball", name="Poke Ball", catchModifier=1.0),
    ItemInfo(id="super-ball", name="Great Ball", catchModifier=1.5),
    ItemInfo(id="hyper-ball", name="Ultra Ball", catchModifier=2.0),
    # =============================================================================
    # MEDICINE & BERRIES
    # =============================================================================
    ItemInfo(id="potion", name="Potion", effect=_heal(20)),
    ItemInfo(id="good-potion", name="Good Potion", effect=_heal(50)),
    ItemInfo(id="super-potion", name="Super Potion", effect=_heal(120)),
    ItemInfo(id="max-potion", name="Max Potion", effect=_heal(9999)),
    ItemInfo(id="oran-berry", name="Oran Berry", effect=_heal(10)),
    ItemInfo(id="antidote", name="Antidote", effect=_cure(StatusCondition.POISON)),
    ItemInfo(id="pecha-berry", name="Pecha Berry", effect=_cure(StatusCondition.POISON)),
    ItemInfo(id="paralyze-heal", name="Paralyze Heal", effect=_cure(StatusCondition.PARALYSIS)),
    ItemInfo(id="cheri-berry", name="Cheri Berry", effect=_cure(StatusCondition.PARALYSIS)),
    ItemInfo(id="burn-heal", name="Burn Heal", effect=_cure(StatusCondition.BURN)),
    ItemInfo(id="awakening", name="Awakening", effect=_cure(StatusCondition.SLEEP)),
    ItemInfo(id="full-heal", name="Full Heal", effect=ItemEffect(type=ItemEffectType.CURE_ALL_MAJOR_STATUS)),
    # =============================================================================
    # PROGRESSION
    # =============================================================================
    ItemInfo(id="rare-candy", name="Rare Candy", effect=ItemEffect(type=ItemEffectType.EXP_GAIN, amount=250)),
    ItemInfo(
        id="thunder-stone",
        name="Thunder Stone",
        effect=ItemEffect(type=ItemEffectType.EVOLVE, requiredSpeciesId="pikachu", evolvesTo="raichu"),
    ),
    ItemInfo(id="tm01-headbutt", name="TM01 Headbutt", effect=_teach("headbutt")),
    ItemInfo(id="tm24-thunderbolt", name="TM24 Thunderbolt", effect=_teach("thunderbolt", Type.ELECTRIC)),
    ItemInfo(id="tm35-flamethrower", name="TM35 Flamethrower", effect=_teach("flamethrower", Type.FIRE)),
    # =============================================================================
    # KEY ITEMS & VALUABLES (no effect)
    # =============================================================================
    ItemInfo(id="boulder-badge", name="Boulder Badge", maxStack=1),
    ItemInfo(id="nugget", name="Nugget"),
    ItemInfo(id="oran-berry-seed", name="Oran Berry Seed"),
]

ITEMS: dict[str, ItemInfo] = {item.id: item for item in _ITEM_LIST}


def get_item_info(item_id: str) -> Optional[ItemInfo]:
    return ITEMS.get(item_id)
