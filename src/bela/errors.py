"""Exceptions raised when a caller breaks the engine's contract."""
from __future__ import annotations


class BelaError(Exception):
    """Base class for all engine errors."""


class IllegalMoveError(BelaError):
    """Card is not in the acting seat's hand or not in its legal-move set."""

    def __init__(self, seat, card, reason: str):
        self.seat = seat
        self.card = card
        self.reason = reason
        super().__init__(f"{_seat_label(seat)} cannot play {card}: {reason}")


class WrongTurnError(BelaError):
    """Action submitted by a seat other than the current player."""

    def __init__(self, seat, expected):
        self.seat = seat
        self.expected = expected
        super().__init__(f"It is {_seat_label(expected)}'s turn, not {_seat_label(seat)}'s")


class WrongPhaseError(BelaError):
    """Action type not allowed in the current phase."""

    def __init__(self, action: str, phase):
        self.action = action
        self.phase = phase
        super().__init__(f"Cannot {action} during phase {getattr(phase, 'value', phase)!r}")


class IllegalBidError(BelaError):
    """Bid that is not among the calls currently available, or bad talon discards."""


class EmptyTrickError(BelaError):
    """Trick evaluation attempted with no cards."""

    def __init__(self) -> None:
        super().__init__("Cannot evaluate an empty trick")


class ConfigError(BelaError, ValueError):
    """Unknown or invalid configuration option."""


class InvariantError(BelaError):
    """A game state violates one of the engine invariants."""


def _seat_label(seat) -> str:
    return getattr(seat, "label", str(seat))


__all__ = [
    "BelaError",
    "IllegalMoveError",
    "WrongTurnError",
    "WrongPhaseError",
    "EmptyTrickError",
    "IllegalBidError",
    "ConfigError",
    "InvariantError",
]
