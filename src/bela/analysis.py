"""
Hints and post-hand analysis.

``get_hint`` suggests a card for the human seat using the same winning-card
test as the bots. ``analyze_game`` replays the card decisions of a hand from
its completed tricks and grades each one with ``grade_decision``. The
"optimal" reference move is a heuristic approximation, not a game-tree search.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Union

from .bots import card_name, longest_suit, lowest
from .deal import SEAT_ORDER, Seat, Team, team_of
from .deck import Card, Suit
from .events import events_of_type
from .play import can_win, legal_moves, legal_plays
from .scoring import MAX_HAND_SCORE
from .state import EventType, GameState, Trick, TrumpCall


class Grade(str, Enum):
    BEST = "best"
    OK = "ok"
    MISTAKE = "mistake"
    BLUNDER = "blunder"


class DecisionType(str, Enum):
    BID = "bid"
    PLAY = "play"


class Hint(NamedTuple):
    card: Card
    explanation: str


class GradeResult(NamedTuple):
    grade: Grade
    explanation: str


@dataclass(frozen=True)
class Decision:
    """
    One decision point. ``move`` is the card played, the call made, or None
    for no action. ``trick`` and ``trump`` give the context of a card play
    when it is known.
    """

    seat: Seat
    move: Union[Card, TrumpCall, None]
    legal_moves: tuple[Card, ...] = ()
    decision_type: DecisionType = DecisionType.PLAY
    trick: Optional[Trick] = None
    trump: Optional[Suit] = None


@dataclass(frozen=True)
class GradedDecision:
    decision: Decision
    grade: Grade
    explanation: str
    optimal_move: Optional[Card] = None


@dataclass(frozen=True)
class GameAnalysis:
    decisions: tuple[GradedDecision, ...] = field(default_factory=tuple)
    total_score: int = 0
    team1_score: int = 0
    team2_score: int = 0
    contract_made: Optional[bool] = None
    mistakes: int = 0
    blunders: int = 0


def _suggest(legal: Sequence[Card], trick: Trick, seat: Seat, trump: Suit | None) -> Hint:
    if trick.is_empty:
        trumps = [c for c in legal if c.is_trump(trump)]
        if trumps:
            return Hint(lowest(trumps), "Consider leading with your lowest trump to control the game.")
        suit = longest_suit(legal)
        return Hint(lowest([c for c in legal if c.suit == suit]), "Lead with your lowest card from your longest suit.")

    winners = [c for c in legal if can_win(trick, seat, c, trump)]
    if winners:
        card = lowest(winners)
        return Hint(card, f"Play the {card_name(card)} to win the trick!")
    return Hint(lowest(legal), "You can't win this trick. Play your lowest card to save high cards for later.")


def get_hint(state: GameState, seat: Seat) -> Hint:
    """Suggested card for ``seat``. Read-only: ``state`` is never modified."""
    return _suggest(legal_moves(state, seat), state.current_trick, seat, state.trump)


def determine_optimal_move(decision: Decision) -> Card | None:
    """Reference move: the hint when the trick context is known, else the highest legal card."""
    legal = decision.legal_moves
    if not legal:
        return None
    if decision.trick is not None:
        return _suggest(legal, decision.trick, decision.seat, decision.trump).card
    return max(legal, key=lambda c: (c.rank, c.suit))


def grade_decision(decision: Decision, optimal_move: Card | None = None) -> GradeResult:
    move = decision.move
    if move is None:
        if decision.legal_moves or decision.decision_type == DecisionType.BID:
            return GradeResult(Grade.MISTAKE, "Passed when a bid or play was available.")
        return GradeResult(Grade.OK, "No move was available.")
    if isinstance(move, TrumpCall):
        return GradeResult(Grade.OK, "Player chose to bid.")

    if optimal_move is None:
        optimal_move = determine_optimal_move(decision)
    if move == optimal_move:
        return GradeResult(Grade.BEST, "This is the optimal move!")

    same_suit = optimal_move is not None and move.suit == optimal_move.suit
    if same_suit and abs(move.rank - optimal_move.rank) <= 1:
        return GradeResult(Grade.OK, f"Good move, though the {card_name(optimal_move)} was slightly better.")

    if decision.trick is not None and not decision.trick.is_empty:
        lead_suit = decision.trick.lead_suit
    else:
        lead_suit = decision.legal_moves[0].suit if decision.legal_moves else None
    if same_suit or move.suit == lead_suit:
        return GradeResult(Grade.MISTAKE, "This move could be better.")
    return GradeResult(Grade.BLUNDER, "This is a poor choice in this situation.")


def _grade(decision: Decision) -> GradedDecision:
    optimal = determine_optimal_move(decision)
    result = grade_decision(decision, optimal)
    return GradedDecision(decision, result.grade, result.explanation, optimal)


def _play_decisions(state: GameState) -> list[Decision]:
    """Rebuild every card decision of the hand from its tricks."""
    tricks = list(state.tricks)
    if not state.current_trick.is_empty:
        tricks.append(state.current_trick)

    hands: dict[Seat, list[Card]] = {seat: list(state.hand(seat)) for seat in SEAT_ORDER}
    for trick in tricks:
        for seat, card in trick.cards:
            hands[seat].append(card)

    decisions: list[Decision] = []
    for trick in tricks:
        partial = Trick()
        for seat, card in trick.cards:
            legal = legal_plays(hands[seat], partial, state.trump, state.config)
            decisions.append(Decision(seat, card, tuple(legal), DecisionType.PLAY, partial, state.trump))
            hands[seat].remove(card)
            partial = partial.with_card(seat, card)
    return decisions


def analyze_game(state: GameState, seat: Seat | None = None) -> GameAnalysis:
    """Grade the bids and card plays of the current hand (optionally one seat's only)."""
    graded: list[GradedDecision] = []
    for event in events_of_type(state, EventType.BID):
        decision = Decision(event.seat, event.payload, (), DecisionType.BID)
        graded.append(GradedDecision(decision, Grade.OK, "Player chose to bid."))
    if state.trump is not None:
        graded.extend(_grade(d) for d in _play_decisions(state))
    if seat is not None:
        graded = [g for g in graded if g.decision.seat == seat]

    hand_results = events_of_type(state, EventType.HAND_COMPLETE)
    contract_made = hand_results[-1].payload.contract_made if hand_results else None

    return GameAnalysis(
        decisions=tuple(graded),
        total_score=compute_game_score(state),
        team1_score=state.match_scores[Team.TEAM1],
        team2_score=state.match_scores[Team.TEAM2],
        contract_made=contract_made,
        mistakes=sum(1 for g in graded if g.grade == Grade.MISTAKE),
        blunders=sum(1 for g in graded if g.grade == Grade.BLUNDER),
    )


def compute_game_score(state: GameState) -> int:
    """0..100 blend of the declaring team's share of match points and its hand efficiency."""
    t1, t2 = state.match_scores
    total = t1 + t2
    if total == 0:
        return 0
    team = team_of(state.declarer) if state.declarer is not None else Team.TEAM1
    share = state.match_scores[team] / total * 100
    efficiency = state.hand_scores[team] / MAX_HAND_SCORE
    score = (share + efficiency * 20) / 2
    return max(0, min(100, round(score)))


def generate_report(analysis: GameAnalysis) -> str:
    lines = [
        "=== Game Analysis ===",
        "",
        f"Overall Score: {analysis.total_score}/100",
        f"Team 1 Score: {analysis.team1_score}",
        f"Team 2 Score: {analysis.team2_score}",
    ]
    if analysis.contract_made is not None:
        lines.append(f"Contract: {'made' if analysis.contract_made else 'failed'}")
    lines += [
        "",
        f"Mistakes: {analysis.mistakes}",
        f"Blunders: {analysis.blunders}",
    ]
    if analysis.decisions:
        lines += ["", "=== Decision Summary ==="]
        for g in analysis.decisions:
            d = g.decision
            move = d.move if isinstance(d.move, Card) else (d.move.suit.label if d.move else "pass")
            lines.append(f"{d.seat.label} [{d.decision_type.value} {move}]: {g.grade.value.upper()} - {g.explanation}")
    return "\n".join(lines) + "\n"


__all__ = [
    "Grade",
    "DecisionType",
    "Hint",
    "GradeResult",
    "Decision",
    "GradedDecision",
    "GameAnalysis",
    "get_hint",
    "determine_optimal_move",
    "grade_decision",
    "analyze_game",
    "compute_game_score",
    "generate_report",
]
