import heapq
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


class VirtualClock(BaseModel):
    """Millisecond clock that only moves when told to"""

    now_ms: int = Field(default=0, ge=0)

    def advance(self, ms: int) -> int:
        self.now_ms += max(0, ms)
        return self.now_ms


class ScheduledAction(BaseModel):
    due_ms: int
    callback: Callable[[], Any]
    interval_ms: Optional[int] = None  # set for repeating actions
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """
    Queue of pending actions driven by a virtual clock.

    Nothing runs on its own: time only passes through advance() (pacing
    delays inside the engine, or the caller stepping the game loop), and every
    action due by the new time runs in due order, ties in scheduling order.
    """

    def __init__(self, clock: Optional[VirtualClock] = None):
        self.clock = clock or VirtualClock()
        self._queue: list[tuple[int, int, ScheduledAction]] = []
        self._sequence = 0

    @property
    def now_ms(self) -> int:
        return self.clock.now_ms

    def _push(self, action: ScheduledAction) -> ScheduledAction:
        heapq.heappush(self._queue, (action.due_ms, self._sequence, action))
        self._sequence += 1
        return action

    def call_later(self, delay_ms: int, callback: Callable[..., Any], *args: Any) -> ScheduledAction:
        return self._push(ScheduledAction(due_ms=self.now_ms + max(0, delay_ms), callback=lambda: callback(*args)))

    def call_every(self, interval_ms: int, callback: Callable[..., Any], *args: Any) -> ScheduledAction:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        return self._push(ScheduledAction(due_ms=self.now_ms + interval_ms, callback=lambda: callback(*args), interval_ms=interval_ms))

    def pending(self) -> int:
        return sum(1 for _, _, action in self._queue if not action.cancelled)

    def advance(self, ms: int) -> None:
        """Move the clock forward by ms, running every action that comes due"""
        target = self.now_ms + max(0, ms)
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, action = heapq.heappop(self._queue)
            if action.cancelled:
                continue
            self.clock.now_ms = max(self.clock.now_ms, due_ms)
            if action.interval_ms is not None:
                action.due_ms = due_ms + action.interval_ms
                self._push(action)
            action.callback()
        self.clock.now_ms = max(self.clock.now_ms, target)

    def run_until_idle(self) -> None:
        """Run all pending one-shot actions; repeating actions only fire as time passes"""
        while True:
            one_shots = [due for due, _, action in self._queue if action.interval_ms is None and not action.cancelled]
            if not one_shots:
                return
            self.advance(max(0, min(one_shots) - self.now_ms))
