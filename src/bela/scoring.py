"""
Hand and match scoring: trick points, last-trick bonus, declarations and the
contract bonus. The declaring team must score strictly more than 162 (before
the bonus) to keep the 90-point contract bonus; otherwise it goes to the
other team.
"""
from __future__ import annotations

from dataclasses import dataclass

from .deal import Team, other_team, team_of
from .state import GameState, Phase

LAST_TRICK_BONUS = 10
CONTRACT_THRESHOLD = 162  # half of 324
CONTRACT_BONUS = 90
MAX_HAND_SCORE = 256  # used by the analysis score


@dataclass(frozen=True)
class HandResult:
    """Payload of a hand_complete event. Score tuples are indexed by Team."""

    hand_scores: tuple[int, int]
    match_scores: tuple[int, int]
    contract_bonus: int
    contract_made: bool


def trick_points_by_team(state: GameState) -> list[int]:
    points = [0, 0]
    for trick in state.tricks:
        points[team_of(trick.winner)] += trick.points
    return points


def declaration_points_by_team(state: GameState) -> list[int]:
    points = [0, 0]
    for decl in state.declarations:
        points[team_of(decl.seat)] += decl.points
    return points


def contract_made(declarer_team_points: int) -> bool:
    """True if the declaring team cleared the threshold (strictly above 162)."""
    return declarer_team_points > CONTRACT_THRESHOLD


def score_hand(state: GameState) -> HandResult:
    """
    Score a finished hand. Returns the hand totals (bonus included) and the
    updated match totals.
    """
    if state.trump is None or state.declarer is None:
        return HandResult(state.hand_scores, state.match_scores, 0, False)

    points = trick_points_by_team(state)
    if state.config.last_trick_bonus and state.tricks:
        points[team_of(state.tricks[-1].winner)] += LAST_TRICK_BONUS
    decl = declaration_points_by_team(state)
    points = [points[0] + decl[0], points[1] + decl[1]]

    declarer_team = team_of(state.declarer)
    made = contract_made(points[declarer_team])
    bonus_team = declarer_team if made else other_team(declarer_team)
    points[bonus_team] += CONTRACT_BONUS

    hand_scores = (points[Team.TEAM1], points[Team.TEAM2])
    match_scores = (
        state.match_scores[Team.TEAM1] + hand_scores[Team.TEAM1],
        state.match_scores[Team.TEAM2] + hand_scores[Team.TEAM2],
    )
    return HandResult(hand_scores, match_scores, CONTRACT_BONUS, made)


def target_reached(match_scores: tuple[int, int], target: int) -> bool:
    return any(score >= target for score in match_scores)


def is_game_over(state: GameState) -> bool:
    """Match is over once a team reached the target at the end of a hand."""
    if state.phase not in (Phase.SCORING, Phase.GAME_OVER):
        return False
    return target_reached(state.match_scores, state.config.match_target_score)


def match_winner(state: GameState) -> Team | None:
    """Team with the higher match score once the match is over (None if tied or not over)."""
    if not is_game_over(state):
        return None
    t1, t2 = state.match_scores
    if t1 == t2:
        return None
    return Team.TEAM1 if t1 > t2 else Team.TEAM2
