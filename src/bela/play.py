"""
Trick-taking: legal moves, trick winner, trick points.
Follow suit; when void and trump is already in the trick, play trump
(optionally overtrump). Trump beats non-trump; the first trump of a trick
falls to any later trump, after that higher trump wins.
"""
from __future__ import annotations

from typing import Sequence

from .config import GameConfig
from .deal import Seat
from .deck import Card, Suit
from .errors import EmptyTrickError, IllegalMoveError
from .state import GameState, Trick


def cards_of_suit(hand: Sequence[Card], suit: Suit) -> list[Card]:
    return [c for c in hand if c.suit == suit]


def trumps_in_hand(hand: Sequence[Card], trump: Suit) -> list[Card]:
    return cards_of_suit(hand, trump)


def trump_in_trick(trick: Trick, trump: Suit | None) -> bool:
    return trump is not None and any(c.suit == trump for _, c in trick.cards)


def highest_trump_in_trick(trick: Trick, trump: Suit) -> Card | None:
    trumps = [c for _, c in trick.cards if c.suit == trump]
    return max(trumps, key=lambda c: c.rank) if trumps else None


def legal_plays(
    hand: Sequence[Card],
    trick: Trick,
    trump: Suit | None,
    config: GameConfig,
) -> list[Card]:
    """
    Cards from ``hand`` that can legally be played on ``trick``.
    Returned in hand order; never empty for a non-empty hand.
    """
    if trump is None or trick.is_empty:
        return list(hand)

    following = cards_of_suit(hand, trick.lead_suit)
    if following:
        # Not void: the trump obligation never applies.
        return following if config.must_follow_suit else list(hand)

    if config.must_trump_when_void and trump_in_trick(trick, trump):
        trumps = trumps_in_hand(hand, trump)
        if trumps:
            if config.overtrump_required:
                highest = highest_trump_in_trick(trick, trump)
                over = [c for c in trumps if c.rank > highest.rank]
                if over:
                    return over
            return trumps

    return list(hand)


def legal_moves(state: GameState, seat: Seat) -> list[Card]:
    """Legal cards for ``seat`` in ``state``. An empty hand is a caller error."""
    hand = state.hand(seat)
    if not hand:
        raise IllegalMoveError(seat, None, "hand is empty")
    return legal_plays(hand, state.current_trick, state.trump, state.config)


def card_beats(card: Card, best: Card, trump: Suit | None, first_trump_seen: bool) -> bool:
    """
    True if ``card`` beats the current best card ``best``.
    ``first_trump_seen`` is True while ``best`` is the first trump of the trick.
    """
    card_trump = card.is_trump(trump)
    best_trump = best.is_trump(trump)
    if card_trump and not best_trump:
        return True
    if best_trump and not card_trump:
        return False
    if card_trump and best_trump:
        if first_trump_seen:
            return True
        return card.rank > best.rank
    if card.suit == best.suit:
        return card.rank > best.rank
    return False


def evaluate_trick(trick: Trick, trump: Suit | None) -> Seat:
    """Seat whose card wins ``trick`` (any length from 1 to 4)."""
    if trick.is_empty:
        raise EmptyTrickError()
    best_seat, best_card = trick.cards[0]
    first_trump_seen = best_card.is_trump(trump)
    for seat, card in trick.cards[1:]:
        if card_beats(card, best_card, trump, first_trump_seen):
            # A trump replacing a trump ends the "first trump" window.
            first_trump_seen = card.is_trump(trump) and not best_card.is_trump(trump)
            best_seat, best_card = seat, card
    return best_seat


def score_trick(trick: Trick, trump: Suit | None) -> int:
    """Sum of card values in the trick."""
    return sum(card.point_value(trump) for _, card in trick.cards)


def resolve_trick(trick: Trick, trump: Suit) -> Trick:
    """Return the 4-card trick with winner and points filled in."""
    return Trick(cards=trick.cards, winner=evaluate_trick(trick, trump), points=score_trick(trick, trump))


def can_win(trick: Trick, seat: Seat, card: Card, trump: Suit | None) -> bool:
    """Would ``seat`` currently win ``trick`` by adding ``card``? Speculative; no side effects."""
    return evaluate_trick(trick.with_card(seat, card), trump) == seat


__all__ = [
    "legal_plays",
    "legal_moves",
    "card_beats",
    "evaluate_trick",
    "score_trick",
    "resolve_trick",
    "can_win",
    "cards_of_suit",
    "trumps_in_hand",
    "trump_in_trick",
    "highest_trump_in_trick",
]
