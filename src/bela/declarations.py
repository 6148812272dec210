"""
Declarations (zvanja), detected once for every seat when trump is fixed.

Bela: King + Queen of trump, 20 points.
Runs of consecutive ranks in one suit: 3 = tierce (20), 4 = quarte (50),
5 or more = quint (100). Each maximal run is declared once, at its full
length; the shorter runs inside it are not declared separately.
"""
from __future__ import annotations

from typing import Sequence

from .config import GameConfig
from .deal import SEAT_ORDER, Seat
from .deck import Card, Rank, Suit
from .state import Declaration, DeclarationType

BELA_POINTS = 20
TIERCE_POINTS = 20
QUARTE_POINTS = 50
QUINT_POINTS = 100

MIN_RUN = 3


def _run_declaration(run: list[Card], seat: Seat) -> Declaration | None:
    n = len(run)
    if n >= 5:
        return Declaration(DeclarationType.QUINT, seat, tuple(run), QUINT_POINTS)
    if n == 4:
        return Declaration(DeclarationType.QUARTE, seat, tuple(run), QUARTE_POINTS)
    if n == MIN_RUN:
        return Declaration(DeclarationType.TIERCE, seat, tuple(run), TIERCE_POINTS)
    return None


def runs_in_suit(hand: Sequence[Card], suit: Suit) -> list[list[Card]]:
    """Maximal runs of consecutive ranks in ``suit``, low to high, each at least MIN_RUN long."""
    cards = sorted((c for c in hand if c.suit == suit), key=lambda c: c.rank)
    runs: list[list[Card]] = []
    current: list[Card] = []
    for c in cards:
        if current and c.rank == current[-1].rank + 1:
            current.append(c)
        else:
            if len(current) >= MIN_RUN:
                runs.append(current)
            current = [c]
    if len(current) >= MIN_RUN:
        runs.append(current)
    return runs


def detect_declarations(
    hand: Sequence[Card],
    seat: Seat,
    trump: Suit,
    config: GameConfig,
) -> list[Declaration]:
    """All declarations for one seat's hand. Same hand in, same list out."""
    if not config.declarations_enabled:
        return []

    found: list[Declaration] = []
    king = Card(trump, Rank.KING)
    queen = Card(trump, Rank.QUEEN)
    if king in hand and queen in hand:
        found.append(Declaration(DeclarationType.BELA, seat, (king, queen), BELA_POINTS))

    for suit in Suit:
        for run in runs_in_suit(hand, suit):
            decl = _run_declaration(run, seat)
            if decl is not None:
                found.append(decl)
    return found


def detect_all(hands: Sequence[Sequence[Card]], trump: Suit, config: GameConfig) -> tuple[Declaration, ...]:
    """Declarations for the four seats, in seat order. ``hands`` is indexed by Seat."""
    out: list[Declaration] = []
    for seat in SEAT_ORDER:
        out.extend(detect_declarations(hands[seat], seat, trump, config))
    return tuple(out)


def declaration_points(declarations: Sequence[Declaration], seats: Sequence[Seat]) -> int:
    return sum(d.points for d in declarations if d.seat in seats)
