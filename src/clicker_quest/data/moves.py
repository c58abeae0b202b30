from typing import Optional

from clicker_quest.constants import CONFUSION_MAX_TURNS, CONFUSION_MIN_TURNS, SLEEP_MAX_TURNS, SLEEP_MIN_TURNS
from clicker_quest.enums import EffectTarget, MoveCategory, StatName, StatusCondition, Type
from clicker_quest.schema.battle_move import BattleMove, StatChangeEffect, StatusEffect

PHYSICAL = MoveCategory.PHYSICAL
SPECIAL = MoveCategory.SPECIAL
STATUS = MoveCategory.STATUS


def _inflict(condition: StatusCondition, chance: float, min_turns: Optional[int] = None, max_turns: Optional[int] = None) -> StatusEffect:
    return StatusEffect(condition=condition, chance=chance, target=EffectTarget.OPPONENT, minTurns=min_turns, maxTurns=max_turns)


def _stage(stat: StatName, delta: int, target: EffectTarget) -> list[StatChangeEffect]:
    return [StatChangeEffect(stat=stat, delta=delta, target=target)]


_MOVE_LIST = [
    # =============================================================================
    # DAMAGING MOVES
    # =============================================================================
    BattleMove(id="tackle", name="Tackle", type=Type.NORMAL, category=PHYSICAL, power=40, accuracy=100, pp=35, isContactMove=True),
    BattleMove(id="scratch", name="Scratch", type=Type.NORMAL, category=PHYSICAL, power=40, accuracy=100, pp=35, isContactMove=True),
    BattleMove(id="quick-attack", name="Quick Attack", type=Type.NORMAL, category=PHYSICAL, power=40, accuracy=100, pp=30, priority=1, isContactMove=True),
    BattleMove(id="headbutt", name="Headbutt", type=Type.NORMAL, category=PHYSICAL, power=70, accuracy=100, pp=15, isContactMove=True),
    BattleMove(id="ember", name="Ember", type=Type.FIRE, category=SPECIAL, power=40, accuracy=100, pp=25, statusEffect=_inflict(StatusCondition.BURN, 0.1)),
    BattleMove(id="flamethrower", name="Flamethrower", type=Type.FIRE, category=SPECIAL, power=90, accuracy=100, pp=15, statusEffect=_inflict(StatusCondition.BURN, 0.1)),
    BattleMove(
        id="flame-wheel",
        name="Flame Wheel",
        type=Type.FIRE,
        category=PHYSICAL,
        power=60,
        accuracy=100,
        pp=25,
        statusEffect=_inflict(StatusCondition.BURN, 0.1),
        isContactMove=True,
    ),
    BattleMove(id="water-gun", name="Water Gun", type=Type.WATER, category=SPECIAL, power=40, accuracy=100, pp=25),
    BattleMove(id="hydro-pump", name="Hydro Pump", type=Type.WATER, category=SPECIAL, power=110, accuracy=80, pp=5),
    BattleMove(id="water-pulse", name="Water Pulse", type=Type.WATER, category=SPECIAL, power=60, accuracy=100, pp=20, statusEffect=_inflict(StatusCondition.CONFUSION, 0.2)),
    BattleMove(id="vine-whip", name="Vine Whip", type=Type.GRASS, category=PHYSICAL, power=45, accuracy=100, pp=25, isContactMove=True),
    BattleMove(id="razor-leaf", name="Razor Leaf", type=Type.GRASS, category=PHYSICAL, power=55, accuracy=95, pp=25),
    BattleMove(id="absorb", name="Absorb", type=Type.GRASS, category=SPECIAL, power=20, accuracy=100, pp=25),
    BattleMove(id="thundershock", name="Thunder Shock", type=Type.ELECTRIC, category=SPECIAL, power=40, accuracy=100, pp=30, statusEffect=_inflict(StatusCondition.PARALYSIS, 0.1)),
    BattleMove(id="thunderbolt", name="Thunderbolt", type=Type.ELECTRIC, category=SPECIAL, power=90, accuracy=100, pp=15, statusEffect=_inflict(StatusCondition.PARALYSIS, 0.1)),
    BattleMove(id="rock-throw", name="Rock Throw", type=Type.ROCK, category=PHYSICAL, power=50, accuracy=90, pp=15),
    BattleMove(id="rock-slide", name="Rock Slide", type=Type.ROCK, category=PHYSICAL, power=75, accuracy=90, pp=10),
    BattleMove(id="bite", name="Bite", type=Type.DARK, category=PHYSICAL, power=60, accuracy=100, pp=25, isContactMove=True),
    BattleMove(id="peck", name="Peck", type=Type.FLYING, category=PHYSICAL, power=35, accuracy=100, pp=35, isContactMove=True),
    BattleMove(
        id="lick",
        name="Lick",
        type=Type.GHOST,
        category=PHYSICAL,
        power=30,
        accuracy=100,
        pp=30,
        statusEffect=_inflict(StatusCondition.PARALYSIS, 0.3),
        isContactMove=True,
    ),
    # =============================================================================
    # STATUS MOVES
    # =============================================================================
    BattleMove(id="growl", name="Growl", type=Type.NORMAL, category=STATUS, accuracy=100, pp=40, statChanges=_stage(StatName.ATTACK, -1, EffectTarget.OPPONENT)),
    BattleMove(id="screech", name="Screech", type=Type.NORMAL, category=STATUS, accuracy=85, pp=40, statChanges=_stage(StatName.DEFENSE, -2, EffectTarget.OPPONENT)),
    BattleMove(id="swords-dance", name="Swords Dance", type=Type.NORMAL, category=STATUS, pp=20, statChanges=_stage(StatName.ATTACK, 2, EffectTarget.SELF)),
    BattleMove(id="barrier", name="Barrier", type=Type.PSYCHIC, category=STATUS, pp=20, statChanges=_stage(StatName.DEFENSE, 2, EffectTarget.SELF)),
    BattleMove(id="agility", name="Agility", type=Type.PSYCHIC, category=STATUS, pp=30, statChanges=_stage(StatName.SPEED, 2, EffectTarget.SELF)),
    BattleMove(
        id="sleep-powder",
        name="Sleep Powder",
        type=Type.GRASS,
        category=STATUS,
        accuracy=75,
        pp=15,
        statusEffect=_inflict(StatusCondition.SLEEP, 1.0, SLEEP_MIN_TURNS, SLEEP_MAX_TURNS),
    ),
    BattleMove(
        id="hypnosis",
        name="Hypnosis",
        type=Type.PSYCHIC,
        category=STATUS,
        accuracy=60,
        pp=20,
        statusEffect=_inflict(StatusCondition.SLEEP, 1.0, SLEEP_MIN_TURNS, SLEEP_MAX_TURNS),
    ),
    BattleMove(id="poison-powder", name="Poison Powder", type=Type.POISON, category=STATUS, accuracy=75, pp=35, statusEffect=_inflict(StatusCondition.POISON, 1.0)),
    BattleMove(id="thunder-wave", name="Thunder Wave", type=Type.ELECTRIC, category=STATUS, accuracy=90, pp=20, statusEffect=_inflict(StatusCondition.PARALYSIS, 1.0)),
    BattleMove(id="will-o-wisp", name="Will-O-Wisp", type=Type.FIRE, category=STATUS, accuracy=85, pp=15, statusEffect=_inflict(StatusCondition.BURN, 1.0)),
    BattleMove(
        id="supersonic",
        name="Supersonic",
        type=Type.NORMAL,
        category=STATUS,
        accuracy=55,
        pp=20,
        statusEffect=_inflict(StatusCondition.CONFUSION, 1.0, CONFUSION_MIN_TURNS, CONFUSION_MAX_TURNS),
    ),
]

MOVES: dict[str, BattleMove] = {move.id: move for move in _MOVE_LIST}


def get_move_data(move_id: str) -> Optional[BattleMove]:
    """Look up static move data; None for unknown ids"""
    return MOVES.get(move_id)
