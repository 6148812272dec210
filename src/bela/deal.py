"""
Seats, teams and the initial distribution.
Four seats in fixed rotation north -> east -> south -> west; north/south play
against east/west. Cards are dealt 4 at a time, two passes, starting with the
seat after the dealer. The last two cards of the dealer's second packet stay
face down as the talon.
"""
from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

from .deck import Card, Suit, make_deck_32

CARDS_PER_HAND = 8
CARDS_PER_PACKET = 4
TALON_SIZE = 2


class Seat(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def team(self) -> "Team":
        return team_of(self)


class Team(IntEnum):
    TEAM1 = 0  # north, south
    TEAM2 = 1  # east, west

    @property
    def label(self) -> str:
        return self.name.lower()


SEAT_ORDER = (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST)

HUMAN_SEAT = Seat.SOUTH
DEFAULT_DEALER = Seat.SOUTH


def team_of(seat: Seat) -> Team:
    return Team.TEAM1 if seat in (Seat.NORTH, Seat.SOUTH) else Team.TEAM2


def other_team(team: Team) -> Team:
    return Team.TEAM2 if team == Team.TEAM1 else Team.TEAM1


def next_seat(seat: Seat) -> Seat:
    """Rotation order (north -> east -> south -> west -> north)."""
    return Seat((seat + 1) % 4)


def next_dealer(dealer: Seat) -> Seat:
    """Dealer rotates in play direction."""
    return next_seat(dealer)


def first_to_bid(dealer: Seat) -> Seat:
    """Player after the dealer speaks first."""
    return next_seat(dealer)


def rotation_from(seat: Seat) -> list[Seat]:
    """All four seats in rotation order, starting with ``seat``."""
    return [Seat((seat + i) % 4) for i in range(4)]


def sort_hand(cards) -> tuple[Card, ...]:
    """
    Display order: suits grouped alphabetically by name, descending rank.
    Cosmetic only; nothing in the rules depends on it.
    """
    return tuple(sorted(cards, key=lambda c: (c.suit.label, -c.rank)))


class Deal(NamedTuple):
    """Result of a deal. ``remainder`` holds any cards left undealt."""
    hands: tuple[tuple[Card, ...], tuple[Card, ...], tuple[Card, ...], tuple[Card, ...]]  # indexed by Seat
    talon: tuple[Card, ...]
    remainder: tuple[Card, ...]
    dealer: Seat


def deal_initial(deck: list[Card], dealer: Seat = DEFAULT_DEALER) -> Deal:
    """
    Deal a full 32-card deck. Each seat is dealt 8 cards (two packets of 4);
    the dealer's last 2 cards form the hidden talon, so the dealer holds 6
    cards in hand until the talon is resolved by bidding.
    """
    if len(deck) != 32 or set(deck) != set(make_deck_32()):
        raise ValueError("deal_initial needs the 32 distinct cards of a Bela deck")

    cards = list(deck)
    hands: list[list[Card]] = [[], [], [], []]

    idx = 0
    for _ in range(CARDS_PER_HAND // CARDS_PER_PACKET):
        for seat in rotation_from(first_to_bid(dealer)):
            packet = cards[idx:idx + CARDS_PER_PACKET]
            idx += CARDS_PER_PACKET
            hands[seat].extend(packet)

    # Dealer's final two cards are the talon.
    talon = hands[dealer][-TALON_SIZE:]
    del hands[dealer][-TALON_SIZE:]

    return Deal(
        hands=(
            sort_hand(hands[0]),
            sort_hand(hands[1]),
            sort_hand(hands[2]),
            sort_hand(hands[3]),
        ),
        talon=tuple(talon),
        remainder=tuple(cards[idx:]),
        dealer=dealer,
    )


def suit_counts(hand) -> dict[Suit, int]:
    counts = {s: 0 for s in Suit}
    for c in hand:
        counts[c.suit] += 1
    return counts
