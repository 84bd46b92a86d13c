"""Trip team competition ("the Cup"): fixed 1 / 0.5 / 0 scoring.

- Match play: each completed match between opposing trip teams is worth 1
- Points Hi/Lo: the trip team with more points for the round gets 1
- Scramble: the trip team with fewer strokes for the round gets 1
- Ties split 0.5 / 0.5
"""

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from .constants import CUP_TEAMS, DEFAULT_COMPETITION_NAME
from .format_scoring import FormatStandings
from .models import FormatKind, MatchState, Side
from .scramble import ScrambleStandings

logger = logging.getLogger('golftrip.competition')

TEAM_A, TEAM_B = CUP_TEAMS


@dataclass
class CupTeamRecord:
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    ties: int = 0


@dataclass
class CupRoundResult:
    round_name: str
    round_format: str
    team_a_points: float
    team_b_points: float


@dataclass
class CupTotals:
    competition_name: str
    team_a: CupTeamRecord = field(default_factory=CupTeamRecord)
    team_b: CupTeamRecord = field(default_factory=CupTeamRecord)
    rounds: List[CupRoundResult] = field(default_factory=list)

    @property
    def leader(self) -> Optional[str]:
        if self.team_a.points > self.team_b.points:
            return TEAM_A
        if self.team_b.points > self.team_a.points:
            return TEAM_B
        return None

    def award(self, winner: Optional[str]) -> Tuple[float, float]:
        # winner None = tie
        if winner == TEAM_A:
            self.team_a.points += 1
            self.team_a.wins += 1
            self.team_b.losses += 1
            return 1, 0
        if winner == TEAM_B:
            self.team_b.points += 1
            self.team_b.wins += 1
            self.team_a.losses += 1
            return 0, 1
        self.team_a.points += 0.5
        self.team_b.points += 0.5
        self.team_a.ties += 1
        self.team_b.ties += 1
        return 0.5, 0.5


def majority_trip_team(player_ids: Sequence[str], trip_teams: Mapping[str, str]) -> str:
    """Trip team most of these players belong to; an even split counts as A."""
    teams = [trip_teams[pid] for pid in player_ids if pid in trip_teams]
    return TEAM_A if teams.count(TEAM_A) >= teams.count(TEAM_B) else TEAM_B


def _match_winner_team(state: MatchState, trip_teams: Mapping[str, str]) -> Union[str, None, bool]:
    """Trip team of the match winner, None for a halve, False when it doesn't count."""
    side_a_team = trip_teams.get(state.team_a[0]) if state.team_a else None
    side_b_team = trip_teams.get(state.team_b[0]) if state.team_b else None
    if not side_a_team or not side_b_team or side_a_team == side_b_team:
        return False
    if state.winner == Side.TEAM_A:
        return side_a_team
    if state.winner == Side.TEAM_B:
        return side_b_team
    return None


def compute_cup_totals(
    trip_teams: Mapping[str, str],
    match_rounds: Sequence[Tuple[str, Sequence[MatchState]]] = (),
    format_rounds: Sequence[Tuple[str, Union[FormatStandings, ScrambleStandings]]] = (),
    competition_name: Optional[str] = None,
) -> CupTotals:
    """
    Tally Cup points across the trip.

    Args:
        trip_teams: player_id -> 'A' | 'B'
        match_rounds: (round name, match states) per match-play round;
            only completed matches between opposing trip teams count
        format_rounds: (round name, standings) per Points Hi/Lo or scramble
            round; rounds with no holes played are skipped
        competition_name: Display name, defaults to 'The Cup'

    Returns:
        CupTotals with team records and a per-round breakdown
    """
    totals = CupTotals(competition_name=(competition_name or '').strip() or DEFAULT_COMPETITION_NAME)

    for round_name, states in match_rounds:
        round_a = round_b = 0.0
        counted = 0
        for state in states:
            if not state.completed:
                continue
            winner = _match_winner_team(state, trip_teams)
            if winner is False:
                continue
            a_points, b_points = totals.award(winner)  # type: ignore[arg-type]
            round_a += a_points
            round_b += b_points
            counted += 1
        if counted:
            totals.rounds.append(CupRoundResult(round_name, 'Match Play', round_a, round_b))

    for round_name, standings in format_rounds:
        if isinstance(standings, ScrambleStandings):
            if standings.holes_completed == 0:
                continue
            team1_trip = trip_teams.get(standings.team_a_captain, TEAM_A)
            # Fewer strokes is better: negate so higher wins below
            team1_total, team2_total = -standings.team_a_total, -standings.team_b_total
            label = 'Scramble'
        else:
            if standings.holes_played == 0:
                continue
            team1_trip = majority_trip_team(standings.team1, trip_teams)
            team1_total, team2_total = standings.team1_total, standings.team2_total
            label = 'Points Hi/Lo' if standings.kind == FormatKind.POINTS_HILO else 'Stableford'

        trip_a_total, trip_b_total = (
            (team1_total, team2_total) if team1_trip == TEAM_A else (team2_total, team1_total)
        )
        if trip_a_total > trip_b_total:
            winner = TEAM_A
        elif trip_b_total > trip_a_total:
            winner = TEAM_B
        else:
            winner = None
        a_points, b_points = totals.award(winner)
        totals.rounds.append(CupRoundResult(round_name, label, a_points, b_points))

    logger.debug(
        f'{totals.competition_name}: A {totals.team_a.points} - B {totals.team_b.points}'
    )
    return totals
