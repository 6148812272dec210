"""
Heuristic bots and the shared strategy interface.

Two tiers implement the small ``Strategy`` protocol:

- ``BeginnerBot``: simple rules a new player can follow (lowest winning card,
  cheapest discard).
- ``AdvancedBot``: scores every legal card with a handful of heuristics and
  plays the best one.

Both only ever return cards from ``legal_moves`` and attach a short
explanation to every move, so the UI can show why the bot played it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Protocol, Sequence

from .deal import Seat, suit_counts
from .deck import Card, Rank, Suit, RANK_NAMES
from .play import can_win, legal_moves, trump_in_trick
from .state import GameState, TrumpCall

logger = logging.getLogger(__name__)


class BotMove(NamedTuple):
    card: Card
    explanation: str


class Strategy(Protocol):
    """Decision surface shared by every bot tier."""

    seat: Seat

    def choose_bid(self, state: GameState) -> TrumpCall | None:
        """Return a call, or None to pass."""

    def choose_dealer_choice(self, state: GameState) -> Suit:
        """Trump suit to name when every seat passed and this bot deals."""

    def choose_move(self, state: GameState) -> BotMove:
        """A legal card for the current trick plus an explanation."""


# ---------------------------------------------------------------------------
# Shared helpers


def card_name(card: Card) -> str:
    return f"{RANK_NAMES[card.rank]} of {card.suit.label}"


def lowest(cards: Sequence[Card]) -> Card:
    """Lowest-ranked card; ties broken by suit order, never by display order."""
    return min(cards, key=lambda c: (c.rank, c.suit))


def suit_strength(hand: Sequence[Card], suit: Suit) -> int:
    """Sum of rank indexes (7 = 0 ... A = 7) of the cards held in ``suit``."""
    return sum(int(c.rank) for c in hand if c.suit == suit)


def longest_suit(cards: Sequence[Card]) -> Suit:
    """Suit with the most cards; ties go to the suit met first in ``cards``."""
    counts: dict[Suit, int] = {}
    for c in cards:
        counts[c.suit] = counts.get(c.suit, 0) + 1
    best = cards[0].suit
    for suit, n in counts.items():
        if n > counts[best]:
            best = suit
    return best


def winning_cards(state: GameState, seat: Seat, legal: Sequence[Card]) -> list[Card]:
    """Legal cards that would currently take the trick for ``seat``."""
    return [c for c in legal if can_win(state.current_trick, seat, c, state.trump)]


# ---------------------------------------------------------------------------
# Tier 1

BEGINNER_MIN_SUIT_CARDS = 3
BEGINNER_MIN_STRENGTH = 10


@dataclass
class BeginnerBot:
    """Rule-based bot meant to model sound beginner play."""

    seat: Seat
    name: str = "Bot"

    def _strongest_suit(self, hand: Sequence[Card]) -> tuple[Suit | None, int]:
        best: Suit | None = None
        best_strength = 0
        for suit in Suit:
            strength = suit_strength(hand, suit)
            if strength > best_strength:
                best, best_strength = suit, strength
        return best, best_strength

    def choose_bid(self, state: GameState) -> TrumpCall | None:
        hand = state.hand(self.seat)
        suit, strength = self._strongest_suit(hand)
        if suit is None:
            return None
        held = sum(1 for c in hand if c.suit == suit)
        if held >= BEGINNER_MIN_SUIT_CARDS and strength >= BEGINNER_MIN_STRENGTH:
            return TrumpCall(suit=suit, seat=self.seat, level=1)
        return None

    def choose_dealer_choice(self, state: GameState) -> Suit:
        suit, _ = self._strongest_suit(state.hand(self.seat))
        return suit if suit is not None else Suit.HEARTS

    def choose_move(self, state: GameState) -> BotMove:
        legal = legal_moves(state, self.seat)
        trump = state.trump

        if state.current_trick.is_empty:
            trumps = [c for c in legal if c.is_trump(trump)]
            if trumps:
                card = lowest(trumps)
                return BotMove(card, f"Leading with {card_name(card)}, the lowest trump.")
            suit = longest_suit(legal)
            card = lowest([c for c in legal if c.suit == suit])
            return BotMove(card, f"Leading with {card_name(card)} from the longest suit.")

        winners = winning_cards(state, self.seat, legal)
        if winners:
            card = lowest(winners)
            return BotMove(card, f"Playing {card_name(card)}, the cheapest card that wins the trick.")

        non_trump = [c for c in legal if not c.is_trump(trump)]
        if non_trump:
            card = lowest(non_trump)
            return BotMove(card, f"Discarding {card_name(card)} - cannot win, lowest card.")
        card = lowest(legal)
        return BotMove(card, f"Discarding {card_name(card)} - cannot win, forced to play trump.")


# ---------------------------------------------------------------------------
# Tier 2

ADVANCED_BID_THRESHOLD = 20
TRUMP_WEIGHT = 1.5
RANK_WEIGHTS = {
    Rank.ACE: 8,
    Rank.KING: 7,
    Rank.QUEEN: 6,
    Rank.JACK: 5,
    Rank.TEN: 4,
    Rank.NINE: 2,
    Rank.EIGHT: 1,
    Rank.SEVEN: 0,
}
# Only honours count when picking a trump suit.
HONOUR_WEIGHTS = {r: RANK_WEIGHTS[r] for r in (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN)}


@dataclass
class AdvancedBot:
    """Heuristic bot: weighted hand evaluation and per-card move scoring."""

    seat: Seat
    name: str = "Advanced Bot"

    def best_suit(self, hand: Sequence[Card]) -> Suit | None:
        """Suit with the most honour weight among suits of 3+ cards."""
        best: Suit | None = None
        best_score = -1
        for suit in Suit:
            cards = [c for c in hand if c.suit == suit]
            if len(cards) < 3:
                continue
            score = sum(HONOUR_WEIGHTS.get(c.rank, 0) for c in cards)
            if score > best_score:
                best, best_score = suit, score
        return best

    def evaluate_hand(self, hand: Sequence[Card], trump: Suit | None = None) -> float:
        if trump is None:
            trump = self.best_suit(hand)
        score = 0.0
        for c in hand:
            value = RANK_WEIGHTS[c.rank]
            score += value * TRUMP_WEIGHT if c.is_trump(trump) else value
        for n in suit_counts(hand).values():
            if n >= 4:
                score += (n - 3) * 3
        return score

    def choose_bid(self, state: GameState) -> TrumpCall | None:
        hand = state.hand(self.seat)
        if self.evaluate_hand(hand, state.trump) < ADVANCED_BID_THRESHOLD:
            return None
        suit = self.best_suit(hand)
        if suit is None:
            return None
        return TrumpCall(suit=suit, seat=self.seat, level=1)

    def choose_dealer_choice(self, state: GameState) -> Suit:
        hand = state.hand(self.seat)
        suit = self.best_suit(hand)
        if suit is None:
            suit = longest_suit(hand) if hand else Suit.HEARTS
        return suit

    def score_move(self, state: GameState, card: Card) -> float:
        trump = state.trump
        trick = state.current_trick
        hand = state.hand(self.seat)
        score = 0.0

        if trick.is_empty:
            if card.is_trump(trump):
                score += 10
            score += sequence_bonus(hand, card)
            score -= int(card.rank) * 2
        else:
            if can_win(trick, self.seat, card, trump):
                score += 20
                score -= int(card.rank) * 3
            else:
                score -= int(card.rank)
            # First trump into the trick.
            if card.is_trump(trump) and not trump_in_trick(trick, trump):
                score += 5

        left_in_suit = sum(1 for c in hand if c.suit == card.suit and c != card)
        if left_in_suit == 1 and not card.is_trump(trump):
            score -= 5  # leaves an unguarded singleton
        return score

    def explain(self, state: GameState, card: Card) -> str:
        trick = state.current_trick
        if trick.is_empty:
            if card.is_trump(state.trump):
                return f"Leading with {card_name(card)} to draw trumps."
            return f"Leading with {card_name(card)}."
        if can_win(trick, self.seat, card, state.trump):
            return f"Playing {card_name(card)} to win the trick!"
        return f"Discarding {card_name(card)} - cannot win."

    def choose_move(self, state: GameState) -> BotMove:
        legal = legal_moves(state, self.seat)
        best = legal[0]
        best_score = self.score_move(state, best)
        for card in legal[1:]:
            score = self.score_move(state, card)
            if score > best_score:
                best, best_score = card, score
        logger.debug(f"{self.seat.label} picks {best} (score {best_score:.1f})")
        return BotMove(best, self.explain(state, best))


def sequence_bonus(hand: Sequence[Card], card: Card) -> int:
    """+5 for each neighbouring rank of the same suit held in ``hand``."""
    ranks = {c.rank for c in hand if c.suit == card.suit}
    bonus = 0
    if card.rank - 1 in ranks:
        bonus += 5
    if card.rank + 1 in ranks:
        bonus += 5
    return bonus


def create_bot(seat: Seat, level: int, name: str | None = None) -> Strategy:
    """Bot factory: level 1 = beginner, level 2 = advanced."""
    if level == 1:
        return BeginnerBot(seat=seat, name=name or "Bot")
    if level == 2:
        return AdvancedBot(seat=seat, name=name or "Advanced Bot")
    raise ValueError(f"Unknown bot level: {level}")


__all__ = [
    "BotMove",
    "Strategy",
    "BeginnerBot",
    "AdvancedBot",
    "create_bot",
    "card_name",
    "lowest",
    "longest_suit",
    "suit_strength",
    "winning_cards",
    "sequence_bonus",
]
