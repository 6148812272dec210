"""Event log entries. The log is append-only and spans every hand of a match."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from .deal import Seat
from .state import EventType, GameEvent, GameState


def make_event(
    event_type: EventType,
    *,
    seat: Seat | None = None,
    payload: Any = None,
    hand: int = 1,
) -> GameEvent:
    return GameEvent(
        id=f"event_{uuid.uuid4().hex}",
        type=event_type,
        timestamp=datetime.now(timezone.utc).isoformat(),
        seat=seat,
        payload=payload,
        hand=hand,
    )


def append_event(
    state: GameState,
    event_type: EventType,
    *,
    seat: Seat | None = None,
    payload: Any = None,
) -> GameState:
    """Return ``state`` with one more event, tagged with the current hand number."""
    return state.with_event(make_event(event_type, seat=seat, payload=payload, hand=state.hand_number))


def events_of_type(state: GameState, event_type: EventType, *, current_hand: bool = True) -> list[GameEvent]:
    events = state.hand_events() if current_hand else state.events
    return [e for e in events if e.type == event_type]
