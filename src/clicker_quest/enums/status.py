from enum import Enum


class StatusCondition(str, Enum):
    """Status conditions a move can inflict.

    NONE through SLEEP are the mutually exclusive major statuses stored on a
    combatant. CONFUSION is only ever an effect payload; the combatant tracks
    it through its own turn counter so it can coexist with a major status.
    """

    NONE = "none"
    POISON = "poison"
    PARALYSIS = "paralysis"
    BURN = "burn"
    SLEEP = "sleep"
    CONFUSION = "confusion"

    def is_major(self) -> bool:
        """True for the four major statuses (not NONE, not CONFUSION)"""
        return self not in (StatusCondition.NONE, StatusCondition.CONFUSION)

    def deals_end_turn_damage(self) -> bool:
        return self in (StatusCondition.POISON, StatusCondition.BURN)
