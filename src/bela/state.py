"""
Canonical game state and its value types.

Every type here is a frozen dataclass holding tuples, so a transition builds a
new ``GameState`` with ``dataclasses.replace`` and the previous state stays
valid and inspectable (hints and analysis read old states freely).
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from .config import GameConfig, DEFAULT_CONFIG
from .deal import SEAT_ORDER, Seat, Team, team_of
from .deck import Card, Suit, make_deck_32
from .errors import InvariantError


class Phase(str, Enum):
    DEAL = "deal"
    BIDDING = "bidding"
    DEALER_CHOICE = "dealerChoice"
    PLAY = "play"
    SCORING = "scoring"
    GAME_OVER = "gameOver"


class EventType(str, Enum):
    BID = "bid"
    PASS = "pass"
    PLAY_CARD = "play_card"
    TRICK_COMPLETE = "trick_complete"
    HAND_COMPLETE = "hand_complete"


class DeclarationType(str, Enum):
    BELA = "bela"
    TIERCE = "tierce"
    QUARTE = "quarte"
    QUINT = "quint"
    BELOT = "belot"  # not detected by the current rule set


@dataclass(frozen=True)
class TrumpCall:
    """A bid: trump suit, bidding seat and level (1 unless raising is enabled)."""

    suit: Suit
    seat: Seat
    level: int = 1


@dataclass(frozen=True)
class Declaration:
    type: DeclarationType
    seat: Seat
    cards: tuple[Card, ...]
    points: int


@dataclass(frozen=True)
class TrickResult:
    """Payload of a trick_complete event."""

    winner: Seat
    points: int


@dataclass(frozen=True)
class Trick:
    """Cards played in order; ``winner`` and ``points`` are set once 4 cards are in."""

    cards: tuple[tuple[Seat, Card], ...] = ()
    winner: Optional[Seat] = None
    points: Optional[int] = None

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def is_complete(self) -> bool:
        return len(self.cards) == 4

    @property
    def lead_card(self) -> Card | None:
        return self.cards[0][1] if self.cards else None

    @property
    def lead_suit(self) -> Suit | None:
        return self.cards[0][1].suit if self.cards else None

    def played_cards(self) -> list[Card]:
        return [c for _, c in self.cards]

    def with_card(self, seat: Seat, card: Card) -> "Trick":
        if len(self.cards) >= 4:
            raise ValueError("Trick already holds 4 cards")
        return Trick(cards=self.cards + ((seat, card),))


@dataclass(frozen=True)
class GameEvent:
    """One committed transition. Never mutated or removed once appended."""

    id: str
    type: EventType
    timestamp: str
    seat: Optional[Seat] = None
    payload: Any = None
    hand: int = 1


@dataclass(frozen=True)
class PlayerState:
    seat: Seat
    name: str
    hand: tuple[Card, ...] = ()
    is_declarer: bool = False

    @property
    def team(self) -> Team:
        return team_of(self.seat)


DEFAULT_NAMES = {
    Seat.NORTH: "North",
    Seat.EAST: "East",
    Seat.SOUTH: "You",
    Seat.WEST: "West",
}


@dataclass(frozen=True)
class GameState:
    """Single source of truth for one hand of a match."""

    phase: Phase
    players: tuple[PlayerState, PlayerState, PlayerState, PlayerState]
    current_player: Seat
    dealer: Seat
    trump: Optional[Suit] = None
    declarer: Optional[Seat] = None
    current_trick: Trick = field(default_factory=Trick)
    tricks: tuple[Trick, ...] = ()
    current_bid: Optional[TrumpCall] = None
    bids: tuple[TrumpCall, ...] = ()
    declarations: tuple[Declaration, ...] = ()
    hand_scores: tuple[int, int] = (0, 0)  # indexed by Team
    match_scores: tuple[int, int] = (0, 0)
    events: tuple[GameEvent, ...] = ()
    config: GameConfig = DEFAULT_CONFIG
    talon: tuple[Card, ...] = ()
    remainder: tuple[Card, ...] = ()
    hand_number: int = 1
    consecutive_passes: int = 0

    def player(self, seat: Seat) -> PlayerState:
        return self.players[seat]

    def hand(self, seat: Seat) -> tuple[Card, ...]:
        return self.players[seat].hand

    def with_hand(self, seat: Seat, hand: tuple[Card, ...]) -> "GameState":
        players = list(self.players)
        players[seat] = replace(players[seat], hand=tuple(hand))
        return replace(self, players=tuple(players))

    def with_declarer_flag(self, declarer: Seat | None) -> "GameState":
        players = tuple(replace(p, is_declarer=(p.seat == declarer)) for p in self.players)
        return replace(self, players=players)

    def with_event(self, event: GameEvent) -> "GameState":
        return replace(self, events=self.events + (event,))

    def hand_events(self) -> tuple[GameEvent, ...]:
        """Events of the current hand only (the log spans the whole match)."""
        return tuple(e for e in self.events if e.hand == self.hand_number)


def check_invariants(state: GameState) -> None:
    """Raise InvariantError if ``state`` breaks a structural invariant."""
    seen: Counter[Card] = Counter()
    for p in state.players:
        seen.update(p.hand)
    seen.update(state.talon)
    seen.update(state.remainder)
    seen.update(state.current_trick.played_cards())
    for t in state.tricks:
        seen.update(t.played_cards())
    deck = set(make_deck_32())
    dupes = [c for c, n in seen.items() if n > 1]
    if dupes:
        raise InvariantError(f"Duplicated cards: {dupes}")
    if set(seen) != deck:
        missing = sorted(deck - set(seen), key=lambda c: (c.suit, c.rank))
        raise InvariantError(f"Cards missing from the game: {missing}")

    trick = state.current_trick
    if len(trick) > 4:
        raise InvariantError("Current trick holds more than 4 cards")
    complete = len(trick) == 4
    if (trick.winner is not None) != complete or (trick.points is not None) != complete:
        raise InvariantError("Trick winner/points must be set exactly when it is complete")
    for t in state.tricks:
        if not t.is_complete or t.winner is None or t.points is None:
            raise InvariantError("Completed tricks must hold 4 cards, a winner and points")

    if (state.trump is None) != (state.declarer is None):
        raise InvariantError("trump and declarer must be set together")
    if state.phase in (Phase.PLAY, Phase.SCORING, Phase.GAME_OVER) and state.trump is None:
        raise InvariantError(f"trump must be fixed in phase {state.phase.value}")
    if state.phase == Phase.PLAY and not state.hand(state.current_player):
        raise InvariantError("Current player has no cards during play")
    if len(state.talon) not in (0, 2):
        raise InvariantError(f"Talon holds {len(state.talon)} cards")


__all__ = [
    "Phase",
    "EventType",
    "DeclarationType",
    "TrumpCall",
    "Declaration",
    "TrickResult",
    "Trick",
    "GameEvent",
    "PlayerState",
    "GameState",
    "DEFAULT_NAMES",
    "SEAT_ORDER",
    "check_invariants",
]
