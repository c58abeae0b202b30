from typing import Any, Optional

from pydantic import BaseModel, Field

from clicker_quest.config import BattleConfig
from clicker_quest.constants import DEFAULT_ITEM_MAX_STACK, INITIAL_AREA_ID
from clicker_quest.enums import EventKind, LogCategory, Side
from clicker_quest.schema.battle_log import BattleEvent, LogEntry
from clicker_quest.schema.combatant import Combatant
from clicker_quest.schema.map_area import AreaProgress


class BattleState(BaseModel):
    """
    Complete engine context for one game session.

    The caller owns this object and hands it to the engine and its components;
    nothing in the engine keeps state of its own outside of it.

    Key design principles:
    - No presentation state (selected menus, modal flags, animations)
    - Log and events are the only output channels
    - Every random draw goes through rng_seed
    """

    # =================================================================
    # COMBATANTS
    # =================================================================

    # Player creatures in acquisition order; active_index points at the one in battle
    roster: list[Combatant] = Field(default_factory=list)
    active_index: int = Field(default=0, ge=0)

    # Current opponent, None between encounters
    enemy: Optional[Combatant] = None

    # Species id -> virtual clock time of first acquisition
    first_caught_at: dict[str, int] = Field(default_factory=dict)

    # =================================================================
    # WORLD / ECONOMY
    # =================================================================

    current_area_id: str = INITIAL_AREA_ID
    area_progress: AreaProgress = Field(default_factory=AreaProgress)
    defeated_gyms: dict[str, bool] = Field(default_factory=dict)
    inventory: dict[str, int] = Field(default_factory=dict)
    money: float = Field(default=0.0, ge=0.0)

    # =================================================================
    # FLOW CONTROL
    # =================================================================

    # Mutex for player actions and background ticks
    busy: bool = False
    all_fainted: bool = False
    evolving: bool = False
    turn_count: int = Field(default=0, ge=0)

    # Random number seed state (for deterministic testing)
    rng_seed: int = Field(default=0, ge=0, le=0xFFFFFFFF)

    # =================================================================
    # OUTPUT
    # =================================================================

    # Headless message log, trimmed by the engine after each operation
    log: list[LogEntry] = Field(default_factory=list)
    # Events not yet handed to the caller
    events: list[BattleEvent] = Field(default_factory=list)

    config: BattleConfig = Field(default_factory=BattleConfig)

    # =================================================================
    # HELPERS
    # =================================================================

    @property
    def active(self) -> Optional[Combatant]:
        if 0 <= self.active_index < len(self.roster):
            return self.roster[self.active_index]
        return None

    def combatant_for(self, side: Side) -> Optional[Combatant]:
        return self.active if side == Side.PLAYER else self.enemy

    def opponent_of(self, combatant: Combatant) -> Optional[Combatant]:
        return self.combatant_for(combatant.side.opposite())

    def owns_species(self, species_id: str) -> bool:
        return any(member.species == species_id for member in self.roster)

    def add_log(self, category: LogCategory, message: str) -> None:
        self.log.append(LogEntry(category=category, message=message))

    def emit(self, kind: EventKind, side: Optional[Side] = None, **data: Any) -> None:
        self.events.append(BattleEvent(kind=kind, side=side, data=data))

    def item_count(self, item_id: str) -> int:
        return self.inventory.get(item_id, 0)

    def add_item(self, item_id: str, quantity: int = 1, max_stack: int = DEFAULT_ITEM_MAX_STACK) -> int:
        """Add up to max_stack and return how many were actually added"""
        current = self.item_count(item_id)
        added = max(0, min(quantity, max_stack - current))
        if added:
            self.inventory[item_id] = current + added
        return added

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        current = self.item_count(item_id)
        if current < quantity:
            return False
        if current == quantity:
            del self.inventory[item_id]
        else:
            self.inventory[item_id] = current - quantity
        return True
