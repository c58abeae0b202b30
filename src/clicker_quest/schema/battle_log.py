from typing import Any, Optional

from pydantic import BaseModel, Field

from clicker_quest.enums import EventKind, LogCategory, Side


class LogEntry(BaseModel):
    category: LogCategory
    message: str


class BattleEvent(BaseModel):
    """Structured notification for the presentation layer"""

    kind: EventKind
    side: Optional[Side] = None
    data: dict[str, Any] = Field(default_factory=dict)


class ActionResult(BaseModel):
    """Outcome of one engine operation: its log entries and events in order"""

    accepted: bool
    logs: list[LogEntry] = Field(default_factory=list)
    events: list[BattleEvent] = Field(default_factory=list)

    def has_event(self, kind: EventKind) -> bool:
        return any(event.kind == kind for event in self.events)

    def events_of(self, kind: EventKind) -> list[BattleEvent]:
        return [event for event in self.events if event.kind == kind]

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.logs]
