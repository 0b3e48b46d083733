"""Game notifications and the event log."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class EventType(Enum):
    GAME_STARTED = "game_started"
    ROUND_STARTED = "round_started"
    TILE_PLAYED = "tile_played"
    PLAYER_SKIPPED = "player_skipped"
    ROUND_OVER = "round_over"
    GAME_OVER = "game_over"


@dataclass
class GameEvent:
    """A recorded game event."""
    event_type: EventType
    player_index: Optional[int] = None
    details: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        who = f"P{self.player_index}" if self.player_index is not None else "Table"
        return f"[{who}] {self.event_type.value}: {self.details}"


Listener = Callable[[GameEvent], None]


class EventLog:
    """Records events and forwards each one to subscribed listeners.

    Listeners run synchronously, in subscription order, before log()
    returns.
    """

    def __init__(self):
        self.events: list[GameEvent] = []
        self._listeners: list[tuple[Optional[EventType], Listener]] = []

    def subscribe(self, listener: Listener,
                  event_type: Optional[EventType] = None) -> None:
        """Call ``listener`` for every event, or only for ``event_type``."""
        self._listeners.append((event_type, listener))

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners = [(et, fn) for et, fn in self._listeners if fn != listener]

    def log(self, event_type: EventType, player_index: Optional[int] = None,
            **details: Any) -> GameEvent:
        event = GameEvent(event_type, player_index, details)
        self.events.append(event)
        for wanted, listener in list(self._listeners):
            if wanted is None or wanted == event_type:
                listener(event)
        return event

    def get_events(self, event_type: Optional[EventType] = None) -> list[GameEvent]:
        if event_type is None:
            return self.events.copy()
        return [e for e in self.events if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> list[GameEvent]:
        return self.events[-count:]

    def clear(self) -> None:
        """Forget recorded events. Listeners stay subscribed."""
        self.events.clear()
