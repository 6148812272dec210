"""
Event-log and state serialization for replay and UI hand-off.

Cards are written with the text encoding (``10H``, ``AS``); seats, teams,
suits and phases by their lower-case names.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from .config import GameConfig
from .deal import Seat
from .deck import Suit, card_from_str, card_to_str
from .scoring import HandResult
from .state import EventType, GameEvent, GameState, TrickResult, TrumpCall

SCHEMA_VERSION = 1


def _seat_to_str(seat: Seat | None) -> str | None:
    return seat.label if seat is not None else None


def _seat_from_str(s: str | None) -> Seat | None:
    return Seat[s.upper()] if s is not None else None


def _payload_to_dict(event_type: EventType, payload: Any) -> Any:
    if payload is None:
        return None
    if event_type == EventType.BID:
        return {"suit": payload.suit.label, "seat": payload.seat.label, "level": payload.level}
    if event_type == EventType.PLAY_CARD:
        return card_to_str(payload)
    if event_type == EventType.TRICK_COMPLETE:
        return {"winner": payload.winner.label, "points": payload.points}
    if event_type == EventType.HAND_COMPLETE:
        return {
            "hand_scores": list(payload.hand_scores),
            "match_scores": list(payload.match_scores),
            "contract_bonus": payload.contract_bonus,
            "contract_made": payload.contract_made,
        }
    raise ValueError(f"No payload expected for event type {event_type.value!r}")


def _payload_from_dict(event_type: EventType, d: Any) -> Any:
    if d is None:
        return None
    if event_type == EventType.BID:
        return TrumpCall(suit=Suit[d["suit"].upper()], seat=_seat_from_str(d["seat"]), level=int(d["level"]))
    if event_type == EventType.PLAY_CARD:
        return card_from_str(d)
    if event_type == EventType.TRICK_COMPLETE:
        return TrickResult(winner=_seat_from_str(d["winner"]), points=int(d["points"]))
    if event_type == EventType.HAND_COMPLETE:
        return HandResult(
            hand_scores=tuple(d["hand_scores"]),
            match_scores=tuple(d["match_scores"]),
            contract_bonus=int(d["contract_bonus"]),
            contract_made=bool(d["contract_made"]),
        )
    raise ValueError(f"No payload expected for event type {event_type.value!r}")


def event_to_dict(event: GameEvent) -> Dict[str, Any]:
    return {
        "id": event.id,
        "type": event.type.value,
        "timestamp": event.timestamp,
        "seat": _seat_to_str(event.seat),
        "payload": _payload_to_dict(event.type, event.payload),
        "hand": event.hand,
    }


def event_from_dict(d: Dict[str, Any]) -> GameEvent:
    event_type = EventType(d["type"])
    return GameEvent(
        id=d["id"],
        type=event_type,
        timestamp=d["timestamp"],
        seat=_seat_from_str(d.get("seat")),
        payload=_payload_from_dict(event_type, d.get("payload")),
        hand=int(d.get("hand", 1)),
    )


def events_to_json(events: Iterable[GameEvent]) -> str:
    """Serialize an event log to a JSON string."""
    return json.dumps(
        {
            "schema_version": SCHEMA_VERSION,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "events": [event_to_dict(e) for e in events],
        },
        indent=2,
    )


def events_from_json(s: str) -> List[GameEvent]:
    """Deserialize an event log produced by :func:`events_to_json`."""
    d = json.loads(s)
    version = d.get("schema_version", SCHEMA_VERSION)
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")
    return [event_from_dict(e) for e in d.get("events", [])]


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """
    Snapshot of a state for display or hand-off. One-way: states are rebuilt
    by replaying transitions, not loaded.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "phase": state.phase.value,
        "hand_number": state.hand_number,
        "dealer": state.dealer.label,
        "current_player": state.current_player.label,
        "trump": state.trump.label if state.trump is not None else None,
        "declarer": _seat_to_str(state.declarer),
        "players": {
            p.seat.label: {
                "name": p.name,
                "team": p.team.label,
                "hand": [card_to_str(c) for c in p.hand],
                "is_declarer": p.is_declarer,
            }
            for p in state.players
        },
        "talon": [card_to_str(c) for c in state.talon],
        "current_trick": [[s.label, card_to_str(c)] for s, c in state.current_trick.cards],
        "tricks": [
            {
                "cards": [[s.label, card_to_str(c)] for s, c in t.cards],
                "winner": _seat_to_str(t.winner),
                "points": t.points,
            }
            for t in state.tricks
        ],
        "declarations": [
            {
                "type": d.type.value,
                "seat": d.seat.label,
                "cards": [card_to_str(c) for c in d.cards],
                "points": d.points,
            }
            for d in state.declarations
        ],
        "hand_scores": list(state.hand_scores),
        "match_scores": list(state.match_scores),
        "config": state.config.to_dict(),
        "events": [event_to_dict(e) for e in state.events],
    }


def config_from_json(s: str) -> GameConfig:
    return GameConfig.from_dict(json.loads(s))


def config_to_json(config: GameConfig) -> str:
    return json.dumps(config.to_dict(), indent=2)


__all__ = [
    "SCHEMA_VERSION",
    "event_to_dict",
    "event_from_dict",
    "events_to_json",
    "events_from_json",
    "state_to_dict",
    "config_to_json",
    "config_from_json",
]
