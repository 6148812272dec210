"""
Bidding: claim the talon by naming trump, or pass.
First to speak = seat after the dealer. The first bid fixes trump and the
declarer, gives the talon to the bidder and (standard rules) starts play
with the declarer leading. Four passes with no bid send the hand to the
dealer, who must name trump and keeps their own talon.

With ``bid_raising`` enabled a standing bid can be raised (same suit, next
level); three consecutive passes after it close the auction.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from .deal import CARDS_PER_HAND, Seat, first_to_bid, next_seat, sort_hand
from .declarations import detect_all
from .deck import Card, Suit
from .errors import IllegalBidError, WrongPhaseError, WrongTurnError
from .events import append_event
from .state import EventType, GameState, Phase, TrumpCall

logger = logging.getLogger(__name__)

MAX_BID_LEVEL = 4
PASSES_TO_DEALER_CHOICE = 4
PASSES_TO_CLOSE = 3


def available_bids(state: GameState, seat: Seat) -> list[TrumpCall]:
    """Calls ``seat`` may make right now (empty outside bidding)."""
    if state.phase != Phase.BIDDING:
        return []
    if state.current_bid is None:
        return [TrumpCall(suit=s, seat=seat, level=1) for s in Suit]
    if state.config.bid_raising and state.current_bid.level < MAX_BID_LEVEL:
        return [TrumpCall(suit=state.current_bid.suit, seat=seat, level=state.current_bid.level + 1)]
    return []


def choose_discards(hand: Sequence[Card], trump: Suit) -> tuple[Card, Card]:
    """Two cheapest cards to give back after taking the talon; non-trump first."""
    ranked = sorted(hand, key=lambda c: (c.is_trump(trump), c.point_value(trump), c.rank, c.suit))
    return ranked[0], ranked[1]


def _check_turn(state: GameState, seat: Seat, action: str, phase: Phase) -> None:
    if state.phase != phase:
        raise WrongPhaseError(action, state.phase)
    if seat != state.current_player:
        raise WrongTurnError(seat, state.current_player)


def _fix_trump(state: GameState, call: TrumpCall) -> GameState:
    """Record the call and set trump + declarer together, with its bid event."""
    state = replace(
        state,
        bids=state.bids + (call,),
        current_bid=call,
        trump=call.suit,
        declarer=call.seat,
        consecutive_passes=0,
    ).with_declarer_flag(call.seat)
    return append_event(state, EventType.BID, seat=call.seat, payload=call)


def _detect_declarations(state: GameState) -> GameState:
    hands = [p.hand for p in state.players]
    return replace(state, declarations=state.declarations + detect_all(hands, state.trump, state.config))


def _take_talon(state: GameState, seat: Seat, discards: Sequence[Card] | None) -> GameState:
    """
    Move the talon into ``seat``'s hand. A seat other than the dealer then
    holds 10 cards and returns two discards to the dealer, whose talon it took.
    """
    hand = list(state.hand(seat)) + list(state.talon)
    state = replace(state, talon=())
    if len(hand) <= CARDS_PER_HAND:
        if discards:
            raise IllegalBidError(f"{seat.label} holds {len(hand)} cards and has nothing to discard")
        return state.with_hand(seat, sort_hand(hand))

    if discards is None:
        discards = choose_discards(hand, state.trump)
    discards = list(discards)
    if len(discards) != len(hand) - CARDS_PER_HAND or len(set(discards)) != len(discards):
        raise IllegalBidError(f"{seat.label} must discard exactly {len(hand) - CARDS_PER_HAND} distinct cards")
    for card in discards:
        if card not in hand:
            raise IllegalBidError(f"{seat.label} cannot discard {card}: not in hand")
        hand.remove(card)

    dealer_hand = list(state.hand(state.dealer)) + discards
    state = state.with_hand(seat, sort_hand(hand))
    return state.with_hand(state.dealer, sort_hand(dealer_hand))


def apply_bid(state: GameState, call: TrumpCall, discards: Sequence[Card] | None = None) -> GameState:
    """
    ``call.seat`` bids. The first bid claims the talon (``discards`` optionally
    names the two cards handed back to the dealer; chosen automatically if
    omitted) and fixes trump. Returns the new state; ``state`` is untouched.
    """
    _check_turn(state, call.seat, "bid", Phase.BIDDING)
    if call not in available_bids(state, call.seat):
        raise IllegalBidError(f"{call.seat.label} cannot call {call.suit.label} at level {call.level}")

    first_bid = state.current_bid is None
    new = _fix_trump(state, call)
    if first_bid:
        new = _take_talon(new, call.seat, discards)
        new = _detect_declarations(new)
    elif discards:
        raise IllegalBidError("Talon is already claimed; no discards allowed")

    if new.config.bid_raising:
        new = replace(new, current_player=next_seat(call.seat))
    else:
        new = replace(new, phase=Phase.PLAY, current_player=call.seat)
    logger.debug(f"{call.seat.label} bids {call.suit.label} (level {call.level}); phase={new.phase.value}")
    return new


def apply_pass(state: GameState, seat: Seat) -> GameState:
    """``seat`` passes."""
    _check_turn(state, seat, "pass", Phase.BIDDING)
    new = append_event(state, EventType.PASS, seat=seat)
    passes = state.consecutive_passes + 1

    if state.current_bid is None and passes >= PASSES_TO_DEALER_CHOICE:
        logger.debug(f"All seats passed; {state.dealer.label} must choose trump")
        return replace(new, consecutive_passes=passes, phase=Phase.DEALER_CHOICE, current_player=state.dealer)
    if state.current_bid is not None and passes >= PASSES_TO_CLOSE:
        logger.debug(f"Bidding closed; {state.declarer.label} declares {state.trump.label}")
        return replace(new, consecutive_passes=passes, phase=Phase.PLAY, current_player=first_to_bid(state.dealer))
    return replace(new, consecutive_passes=passes, current_player=next_seat(seat))


def apply_dealer_choice(state: GameState, seat: Seat, suit: Suit) -> GameState:
    """After four passes the dealer names trump, keeps their talon and leads."""
    _check_turn(state, seat, "choose trump", Phase.DEALER_CHOICE)
    call = TrumpCall(suit=suit, seat=state.dealer, level=1)
    new = _fix_trump(state, call)
    new = _take_talon(new, state.dealer, None)
    new = _detect_declarations(new)
    logger.debug(f"Dealer {seat.label} chooses {suit.label}")
    return replace(new, phase=Phase.PLAY, current_player=state.dealer)


__all__ = [
    "available_bids",
    "choose_discards",
    "apply_bid",
    "apply_pass",
    "apply_dealer_choice",
    "MAX_BID_LEVEL",
]
