"""Scoring functions for the team point formats (Points Hi/Lo and Stableford)."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import POINTS_HILO_TIE, POINTS_HILO_WIN, STABLEFORD_POINTS
from .hole_results import lookup_player, player_hole_score
from .models import FormatKind, PlayerHoleScore, RoundSnapshot


@dataclass
class HoleFormatResult:
    """Per-hole team points plus the player detail behind them."""
    hole_number: int
    par: int
    team1_points: float
    team2_points: float
    team1_player_scores: List[PlayerHoleScore]
    team2_player_scores: List[PlayerHoleScore]
    complete: bool
    player_points: Dict[str, float] = field(default_factory=dict)


@dataclass
class FormatStandings:
    """Running team totals for a Points Hi/Lo or Stableford round."""
    kind: FormatKind
    round_id: str
    team1: List[str]
    team2: List[str]
    hole_results: List[HoleFormatResult]
    team1_total: float
    team2_total: float
    current_hole: int
    holes_played: int

    @property
    def leader(self) -> Optional[int]:
        """1 or 2 for the team ahead, None when level."""
        if self.team1_total > self.team2_total:
            return 1
        if self.team2_total > self.team1_total:
            return 2
        return None


# ============================================================================
# STABLEFORD
# ============================================================================

def calculate_stableford_points(net_score: int, par: int) -> int:
    """
    Stableford points for a net score.

    Scoring:
        - Albatross or better: 8
        - Eagle: 5
        - Birdie: 3
        - Par: 1
        - Bogey: 0
        - Double bogey or worse: -1
    """
    diff = max(-3, min(2, net_score - par))
    return STABLEFORD_POINTS[diff]


def calculate_team_stableford(player_points: Sequence[int], combine: str = 'best_ball') -> int:
    """
    Team Stableford points for a hole.

    Args:
        player_points: Points of each team member on the hole
        combine: 'best_ball' (best single player) or 'aggregate' (sum)
    """
    if not player_points:
        return 0
    if combine == 'aggregate':
        return sum(player_points)
    return max(player_points)


# ============================================================================
# POINTS HI/LO
# ============================================================================

def _compare(team1_value: int, team2_value: int) -> Tuple[float, float]:
    # Lower net wins the point
    if team1_value < team2_value:
        return POINTS_HILO_WIN, 0
    if team2_value < team1_value:
        return 0, POINTS_HILO_WIN
    return POINTS_HILO_TIE, POINTS_HILO_TIE


def calculate_points_hilo(team1_nets: Sequence[int], team2_nets: Sequence[int]) -> Tuple[float, float]:
    """
    Points Hi/Lo for a single complete hole.

    Scoring:
        - 2 points available per hole
        - Low net vs low net: 1 point, ties split 0.5 each
        - High net vs high net: 1 point, ties split 0.5 each
        - No carryovers

    Returns:
        (team1_points, team2_points)
    """
    low1, low2 = _compare(min(team1_nets), min(team2_nets))
    high1, high2 = _compare(max(team1_nets), max(team2_nets))
    return low1 + high1, low2 + high2


def calculate_points_hilo_partial(
    team1_nets: Sequence[Optional[int]], team2_nets: Sequence[Optional[int]]
) -> Optional[Tuple[float, float]]:
    """Points Hi/Lo, or None while any player is missing a score."""
    if any(n is None for n in team1_nets) or any(n is None for n in team2_nets):
        return None
    if not team1_nets or not team2_nets:
        return None
    return calculate_points_hilo(team1_nets, team2_nets)  # type: ignore[arg-type]


def _share(points: float, scores: Sequence[PlayerHoleScore], target: int, awards: Dict[str, float]):
    holders = [s.player_id for s in scores if s.net == target]
    for pid in holders:
        awards[pid] = awards.get(pid, 0) + points / len(holders)


def hilo_player_awards(
    team1_scores: Sequence[PlayerHoleScore], team2_scores: Sequence[PlayerHoleScore]
) -> Dict[str, float]:
    """
    Attribute a complete hole's Hi/Lo points to the players who earned them.

    A team's low point goes to its low player and its high point to its high
    player; players tied within the team split the share evenly.
    """
    awards = {s.player_id: 0.0 for s in [*team1_scores, *team2_scores]}
    team1_nets = [s.net for s in team1_scores]
    team2_nets = [s.net for s in team2_scores]

    for pick in (min, max):
        value1 = pick(team1_nets)  # type: ignore[type-var]
        value2 = pick(team2_nets)  # type: ignore[type-var]
        points1, points2 = _compare(value1, value2)
        if points1:
            _share(points1, team1_scores, value1, awards)
        if points2:
            _share(points2, team2_scores, value2, awards)

    return awards


# ============================================================================
# FORMAT STATE
# ============================================================================

def compute_format_state(
    kind: FormatKind,
    round_id: str,
    team1_ids: Sequence[str],
    team2_ids: Sequence[str],
    snapshot: RoundSnapshot,
    stableford_combine: str = 'best_ball',
) -> FormatStandings:
    """
    Replay every hole of the round into Points Hi/Lo or Stableford standings.

    A hole counts only once all players on both teams have scored it.

    Args:
        kind: FormatKind.POINTS_HILO or FormatKind.STABLEFORD
        round_id: Round identifier
        team1_ids: Player ids on team 1
        team2_ids: Player ids on team 2
        snapshot: Round holes, players and scores
        stableford_combine: 'best_ball' or 'aggregate' team Stableford

    Returns:
        FormatStandings with per-hole results and running totals
    """
    if kind not in (FormatKind.POINTS_HILO, FormatKind.STABLEFORD):
        raise ValueError(f'compute_format_state does not handle {kind}')

    team1_players = [lookup_player(snapshot, pid) for pid in team1_ids]
    team2_players = [lookup_player(snapshot, pid) for pid in team2_ids]

    hole_results: List[HoleFormatResult] = []
    team1_total = 0.0
    team2_total = 0.0
    holes_played = 0

    for hole in snapshot.sorted_holes():
        team1_scores = [player_hole_score(p, hole, snapshot.scores) for p in team1_players]
        team2_scores = [player_hole_score(p, hole, snapshot.scores) for p in team2_players]
        all_scores = team1_scores + team2_scores
        complete = bool(team1_scores) and bool(team2_scores) and all(
            s.gross is not None for s in all_scores
        )

        team1_points = 0.0
        team2_points = 0.0
        player_points: Dict[str, float] = {}

        if complete:
            holes_played += 1
            if kind == FormatKind.POINTS_HILO:
                team1_points, team2_points = calculate_points_hilo(
                    [s.net for s in team1_scores],  # type: ignore[misc]
                    [s.net for s in team2_scores],  # type: ignore[misc]
                )
                player_points = hilo_player_awards(team1_scores, team2_scores)
            else:
                player_points = {
                    s.player_id: calculate_stableford_points(s.net, hole.par)  # type: ignore[arg-type]
                    for s in all_scores
                }
                team1_points = calculate_team_stableford(
                    [player_points[s.player_id] for s in team1_scores], stableford_combine
                )
                team2_points = calculate_team_stableford(
                    [player_points[s.player_id] for s in team2_scores], stableford_combine
                )

            team1_total += team1_points
            team2_total += team2_points

        hole_results.append(
            HoleFormatResult(
                hole_number=hole.number,
                par=hole.par,
                team1_points=team1_points,
                team2_points=team2_points,
                team1_player_scores=team1_scores,
                team2_player_scores=team2_scores,
                complete=complete,
                player_points=player_points,
            )
        )

    return FormatStandings(
        kind=kind,
        round_id=round_id,
        team1=list(team1_ids),
        team2=list(team2_ids),
        hole_results=hole_results,
        team1_total=team1_total,
        team2_total=team2_total,
        current_hole=current_hole(hole_results),
        holes_played=holes_played,
    )


def current_hole(hole_results: Sequence) -> int:
    """First incomplete hole, or the last hole once everything is scored."""
    for result in hole_results:
        if not result.complete:
            return result.hole_number
    return hole_results[-1].hole_number if hole_results else 1


# ============================================================================
# DISPLAY HELPERS
# ============================================================================

def format_points_hilo_hole_result(
    team1_nets: Sequence[int], team2_nets: Sequence[int]
) -> Tuple[str, str]:
    """(low result, high result) as 'Team 1', 'Team 2' or 'Split'."""
    def label(value1: int, value2: int) -> str:
        if value1 < value2:
            return 'Team 1'
        if value2 < value1:
            return 'Team 2'
        return 'Split'

    return (
        label(min(team1_nets), min(team2_nets)),
        label(max(team1_nets), max(team2_nets)),
    )


def format_stableford_points(points: int) -> str:
    if points > 0:
        return f'+{points}'
    return str(points)


def get_stableford_description(net_score: int, par: int) -> str:
    diff = net_score - par
    if diff <= -3:
        return 'Albatross+'
    return {-2: 'Eagle', -1: 'Birdie', 0: 'Par', 1: 'Bogey', 2: 'Double'}.get(diff, 'Triple+')
