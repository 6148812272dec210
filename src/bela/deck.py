"""
Bela deck: 32 cards (4 suits × 7, 8, 9, 10, J, Q, K, A).
Card values for counting are the same for trump and non-trump in this variant.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Hearts, diamonds, clubs, spades. Order used when scanning suits."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def letter(self) -> str:
        return self.name[0]

    @property
    def symbol(self) -> str:
        return "♥♦♣♠"[self]

    @classmethod
    def from_letter(cls, letter: str) -> "Suit":
        for s in cls:
            if s.letter == letter.upper():
                return s
        raise ValueError(f"Unknown suit letter: {letter!r}")


class Rank(IntEnum):
    """Ranks in comparison order: 7 < 8 < 9 < 10 < J < Q < K < A."""
    SEVEN = 0
    EIGHT = 1
    NINE = 2
    TEN = 3
    JACK = 4
    QUEEN = 5
    KING = 6
    ACE = 7

    @property
    def text(self) -> str:
        return RANK_TEXT[self]

    @classmethod
    def from_text(cls, text: str) -> "Rank":
        for r, t in RANK_TEXT.items():
            if t == text.upper():
                return r
        raise ValueError(f"Unknown rank: {text!r}")


RANK_TEXT = {
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

RANK_NAMES = {
    Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight",
    Rank.NINE: "Nine",
    Rank.TEN: "Ten",
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}

# Point table. Trump uses an identical table in this rule variant; kept
# separate so a conventional Belote trump table can replace it.
CARD_VALUES = {
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.TEN: 10,
    Rank.JACK: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.ACE: 11,
}
TRUMP_CARD_VALUES = dict(CARD_VALUES)


@dataclass(frozen=True)
class Card:
    """A single Bela card. Immutable; equality by (suit, rank)."""

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit) or not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid card: suit={self.suit!r} rank={self.rank!r}")

    def is_trump(self, trump: Suit | None) -> bool:
        return trump is not None and self.suit == trump

    def point_value(self, trump: Suit | None = None) -> int:
        table = TRUMP_CARD_VALUES if self.is_trump(trump) else CARD_VALUES
        return table[self.rank]

    def __str__(self) -> str:
        return card_to_str(self)

    def __repr__(self) -> str:
        return f"{self.rank.text}{self.suit.symbol}"


def card_to_str(card: Card) -> str:
    """Text encoding: rank followed by the suit's first letter, e.g. ``10H``."""
    return f"{card.rank.text}{card.suit.letter}"


def card_from_str(text: str) -> Card:
    """Inverse of :func:`card_to_str`."""
    text = text.strip()
    if len(text) < 2:
        raise ValueError(f"Invalid card text: {text!r}")
    return Card(suit=Suit.from_letter(text[-1]), rank=Rank.from_text(text[:-1]))


def make_deck_32() -> list[Card]:
    """Build the full 32-card deck in suit/rank order (unshuffled)."""
    return [Card(s, r) for s in Suit for r in Rank]


def generate_deck(rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled 32-card deck. Pass a seeded ``rng`` for repeatable deals."""
    if rng is None:
        rng = random.Random()
    deck = make_deck_32()
    rng.shuffle(deck)
    return deck

