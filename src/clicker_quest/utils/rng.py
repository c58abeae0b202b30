from clicker_quest.schema.battle_state import BattleState


def advance(battle_state: BattleState) -> int:
    """Advance the LCG RNG and return the new 32-bit seed.

    seed = (seed * 1664525 + 1013904223) mod 2^32
    """
    battle_state.rng_seed = (battle_state.rng_seed * 1664525 + 1013904223) & 0xFFFFFFFF
    return battle_state.rng_seed


def rand16(battle_state: BattleState) -> int:
    """Advance RNG and return upper 16 bits (0..65535)."""
    advance(battle_state)
    return (battle_state.rng_seed >> 16) & 0xFFFF


def random(battle_state: BattleState) -> float:
    """Advance RNG and return a uniform float in [0, 1)."""
    return advance(battle_state) / 0x100000000


def chance(battle_state: BattleState, probability: float) -> bool:
    """True with the given probability (draw < probability)."""
    return random(battle_state) < probability


def randint(battle_state: BattleState, low: int, high: int) -> int:
    """Uniform integer in [low, high], both ends inclusive."""
    if high <= low:
        return low
    return low + min(high - low, int(random(battle_state) * (high - low + 1)))


def choice_index(battle_state: BattleState, count: int) -> int:
    """Return a random index in range [0, count).

    Caller must ensure count > 0.
    """
    if count <= 0:
        return -1
    return rand16(battle_state) % count
