"""
Bot-vs-bot driver: plays hands and matches by feeding bot decisions into the
engine's transitions, and aggregates results over many matches.

This is the external driver role: the engine itself never loops or schedules.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from .bidding import apply_bid, apply_dealer_choice, apply_pass, available_bids
from .bots import Strategy, create_bot
from .config import GameConfig
from .deal import DEFAULT_DEALER, SEAT_ORDER, Seat, Team, next_dealer, team_of
from .game import apply_move, deal_next_hand, finish_hand, new_match
from .scoring import match_winner
from .state import EventType, GameState, Phase

logger = logging.getLogger(__name__)

MAX_HANDS_PER_MATCH = 200


def make_bots(levels: Sequence[int]) -> Dict[Seat, Strategy]:
    """One bot per seat; ``levels`` is indexed by seat (north, east, south, west)."""
    if len(levels) != 4:
        raise ValueError("Need exactly four bot levels")
    return {seat: create_bot(seat, level, name=f"{seat.label.title()} L{level}") for seat, level in zip(SEAT_ORDER, levels)}


def bot_step(state: GameState, bots: Dict[Seat, Strategy]) -> GameState:
    """Let the bot sitting at ``state.current_player`` take one action."""
    seat = state.current_player
    bot = bots[seat]
    if state.phase == Phase.BIDDING:
        call = bot.choose_bid(state)
        if call is not None and call in available_bids(state, seat):
            return apply_bid(state, call)
        return apply_pass(state, seat)
    if state.phase == Phase.DEALER_CHOICE:
        return apply_dealer_choice(state, seat, bot.choose_dealer_choice(state))
    if state.phase == Phase.PLAY:
        move = bot.choose_move(state)
        logger.debug(f"{seat.label}: {move.card} ({move.explanation})")
        return apply_move(state, seat, move.card)
    raise ValueError(f"No bot action in phase {state.phase.value!r}")


def play_hand(state: GameState, bots: Dict[Seat, Strategy]) -> GameState:
    """Run bidding and play until the hand is scored."""
    while state.phase in (Phase.BIDDING, Phase.DEALER_CHOICE, Phase.PLAY):
        state = bot_step(state, bots)
    return state


@dataclass
class MatchResult:
    final_state: GameState
    hands_played: int
    winner: Team | None
    contracts_made: int
    contracts_played: Dict[Team, int]


def play_match(
    bots: Dict[Seat, Strategy],
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    dealer: Seat = DEFAULT_DEALER,
    max_hands: int = MAX_HANDS_PER_MATCH,
) -> MatchResult:
    """Play hands until a team reaches the match target (or ``max_hands``)."""
    if rng is None:
        rng = random.Random()
    state = new_match(config, rng, dealer)
    hands = 0
    while True:
        state = play_hand(state, bots)
        hands += 1
        state = finish_hand(state)
        if state.phase == Phase.GAME_OVER or hands >= max_hands:
            break
        state = deal_next_hand(state, rng)

    made = 0
    played = {Team.TEAM1: 0, Team.TEAM2: 0}
    bids = {}
    for e in state.events:
        if e.type == EventType.BID:
            bids[e.hand] = e.payload.seat
        elif e.type == EventType.HAND_COMPLETE:
            played[team_of(bids[e.hand])] += 1
            made += int(e.payload.contract_made)
    winner = match_winner(state)
    logger.info(f"Match finished after {hands} hands: {state.match_scores}, winner={winner}")
    return MatchResult(state, hands, winner, made, played)


@dataclass
class MatchSummary:
    matches: int
    team1_wins: int
    team2_wins: int
    mean_hands: float
    mean_scores: tuple[float, float]
    std_scores: tuple[float, float]
    contract_rate: float

    def format(self) -> str:
        return (
            f"matches={self.matches} team1_wins={self.team1_wins} team2_wins={self.team2_wins}\n"
            f"mean_hands={self.mean_hands:.2f} "
            f"mean_scores=({self.mean_scores[0]:.1f}, {self.mean_scores[1]:.1f}) "
            f"std_scores=({self.std_scores[0]:.1f}, {self.std_scores[1]:.1f})\n"
            f"contract_rate={self.contract_rate:.3f}"
        )


def summarize(results: List[MatchResult]) -> MatchSummary:
    if not results:
        raise ValueError("No match results to summarize")
    scores = np.array([r.final_state.match_scores for r in results], dtype=float)
    hands = np.array([r.hands_played for r in results], dtype=float)
    contracts = sum(sum(r.contracts_played.values()) for r in results)
    made = sum(r.contracts_made for r in results)
    mean = scores.mean(axis=0)
    std = scores.std(axis=0)
    return MatchSummary(
        matches=len(results),
        team1_wins=sum(1 for r in results if r.winner == Team.TEAM1),
        team2_wins=sum(1 for r in results if r.winner == Team.TEAM2),
        mean_hands=float(hands.mean()),
        mean_scores=(float(mean[0]), float(mean[1])),
        std_scores=(float(std[0]), float(std[1])),
        contract_rate=made / contracts if contracts else 0.0,
    )


def run_matches(
    levels: Sequence[int],
    num_matches: int,
    seed: int,
    config: GameConfig | None = None,
) -> List[MatchResult]:
    """Play ``num_matches`` seeded matches with the same bot line-up."""
    rng = random.Random(seed)
    bots = make_bots(levels)
    results = []
    dealer = DEFAULT_DEALER
    for _ in range(num_matches):
        results.append(play_match(bots, config, rng, dealer))
        dealer = next_dealer(dealer)
    return results


__all__ = [
    "make_bots",
    "bot_step",
    "play_hand",
    "play_match",
    "MatchResult",
    "MatchSummary",
    "summarize",
    "run_matches",
]
