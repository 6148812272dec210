"""
Hand lifecycle: deal -> bid -> play -> score, and the card-play transition.
Every function takes a state and returns a new one; nothing here mutates its
input, blocks, or performs I/O.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace

from .config import GameConfig, DEFAULT_CONFIG
from .deal import DEFAULT_DEALER, SEAT_ORDER, Seat, deal_initial, first_to_bid, next_dealer, next_seat
from .deck import Card, generate_deck
from .errors import IllegalMoveError, WrongPhaseError, WrongTurnError
from .events import append_event
from .play import legal_moves, resolve_trick
from .scoring import is_game_over, score_hand
from .state import DEFAULT_NAMES, EventType, GameEvent, GameState, Phase, PlayerState, TrickResult, Trick

logger = logging.getLogger(__name__)


def create_initial_state(
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    dealer: Seat = DEFAULT_DEALER,
    *,
    match_scores: tuple[int, int] = (0, 0),
    events: tuple[GameEvent, ...] = (),
    hand_number: int = 1,
    names: dict[Seat, str] | None = None,
) -> GameState:
    """Shuffle, deal and open the bidding for one hand."""
    config = config or DEFAULT_CONFIG
    names = names or DEFAULT_NAMES
    deal = deal_initial(generate_deck(rng), dealer)
    players = tuple(
        PlayerState(seat=seat, name=names.get(seat, seat.label.title()), hand=deal.hands[seat])
        for seat in SEAT_ORDER
    )
    logger.debug(f"Hand {hand_number} dealt by {dealer.label}")
    return GameState(
        phase=Phase.BIDDING,
        players=players,
        current_player=first_to_bid(dealer),
        dealer=dealer,
        config=config,
        talon=deal.talon,
        remainder=deal.remainder,
        match_scores=match_scores,
        events=tuple(events),
        hand_number=hand_number,
    )


def new_match(
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    dealer: Seat = DEFAULT_DEALER,
) -> GameState:
    """First hand of a new match."""
    return create_initial_state(config, rng, dealer)


def apply_move(state: GameState, seat: Seat, card: Card) -> GameState:
    """
    ``seat`` plays ``card``. Completes the trick on the fourth card and scores
    the hand after the last trick (phase -> scoring).
    """
    if state.phase != Phase.PLAY:
        raise WrongPhaseError("play a card", state.phase)
    if seat != state.current_player:
        raise WrongTurnError(seat, state.current_player)
    hand = state.hand(seat)
    if card not in hand:
        raise IllegalMoveError(seat, card, "not in hand")
    if card not in legal_moves(state, seat):
        raise IllegalMoveError(seat, card, "not a legal move")

    new = state.with_hand(seat, tuple(c for c in hand if c != card))
    new = replace(new, current_trick=state.current_trick.with_card(seat, card))
    new = append_event(new, EventType.PLAY_CARD, seat=seat, payload=card)

    if not new.current_trick.is_complete:
        return replace(new, current_player=next_seat(seat))

    trick = resolve_trick(new.current_trick, new.trump)
    new = replace(new, tricks=new.tricks + (trick,), current_trick=Trick(), current_player=trick.winner)
    new = append_event(new, EventType.TRICK_COMPLETE, payload=TrickResult(trick.winner, trick.points))
    logger.debug(f"Trick {len(new.tricks)} to {trick.winner.label} for {trick.points} points")

    if any(p.hand for p in new.players):
        return new
    return _end_hand(new)


def _end_hand(state: GameState) -> GameState:
    result = score_hand(state)
    new = replace(
        state,
        phase=Phase.SCORING,
        hand_scores=result.hand_scores,
        match_scores=result.match_scores,
    )
    logger.info(
        f"Hand {state.hand_number} complete: hand={result.hand_scores} match={result.match_scores} "
        f"contract_made={result.contract_made}"
    )
    return append_event(new, EventType.HAND_COMPLETE, payload=result)


def finish_hand(state: GameState) -> GameState:
    """Leave the scoring phase: game over if a team reached the target, else deal the next hand."""
    if state.phase != Phase.SCORING:
        raise WrongPhaseError("finish the hand", state.phase)
    if is_game_over(state):
        logger.info(f"Match over: {state.match_scores}")
        return replace(state, phase=Phase.GAME_OVER)
    return replace(state, phase=Phase.DEAL)


def deal_next_hand(state: GameState, rng: random.Random | None = None) -> GameState:
    """
    Start the next hand of the match: new deal, dealer rotated; match scores
    and the event log carry over.
    """
    if state.phase != Phase.DEAL:
        raise WrongPhaseError("deal", state.phase)
    return create_initial_state(
        state.config,
        rng,
        next_dealer(state.dealer),
        match_scores=state.match_scores,
        events=state.events,
        hand_number=state.hand_number + 1,
        names={p.seat: p.name for p in state.players},
    )


__all__ = [
    "create_initial_state",
    "new_match",
    "apply_move",
    "finish_hand",
    "deal_next_hand",
]
