"""Scramble: one team score per hole, lowest total team strokes wins.

The captain (first player) of each team carries the team's score in the
regular score map.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from .models import RoundSnapshot


@dataclass
class ScrambleStandings:
    round_id: str
    team_a_captain: str
    team_b_captain: str
    team_a_total: int
    team_b_total: int
    holes_completed: int
    winner: Optional[str]  # 'team_a' | 'team_b' | 'tied' | None before any hole

    @property
    def margin(self) -> int:
        return abs(self.team_a_total - self.team_b_total)


def extract_team_scores(snapshot: RoundSnapshot, captain_id: str) -> Dict[int, Optional[int]]:
    """Team scores live on the captain's score row."""
    return dict(snapshot.scores.get(captain_id, {}))


def compute_scramble_result(
    team_a_scores: Mapping[int, Optional[int]],
    team_b_scores: Mapping[int, Optional[int]],
    hole_numbers: Iterable[int],
) -> tuple[int, int, int]:
    """
    Totals over the round's holes both teams have completed.

    Returns:
        (team_a_total, team_b_total, holes_completed)
    """
    team_a_total = 0
    team_b_total = 0
    holes_completed = 0

    for hole in hole_numbers:
        a_score = team_a_scores.get(hole)
        b_score = team_b_scores.get(hole)
        if a_score is None or b_score is None:
            continue
        team_a_total += a_score
        team_b_total += b_score
        holes_completed += 1

    return team_a_total, team_b_total, holes_completed


def compute_scramble_state(
    round_id: str, team_a_captain: str, team_b_captain: str, snapshot: RoundSnapshot
) -> ScrambleStandings:
    """Scramble standings from the captains' score rows."""
    team_a_total, team_b_total, holes_completed = compute_scramble_result(
        extract_team_scores(snapshot, team_a_captain),
        extract_team_scores(snapshot, team_b_captain),
        [h.number for h in snapshot.sorted_holes()],
    )

    if holes_completed == 0:
        winner = None
    elif team_a_total < team_b_total:
        winner = 'team_a'
    elif team_b_total < team_a_total:
        winner = 'team_b'
    else:
        winner = 'tied'

    return ScrambleStandings(
        round_id=round_id,
        team_a_captain=team_a_captain,
        team_b_captain=team_b_captain,
        team_a_total=team_a_total,
        team_b_total=team_b_total,
        holes_completed=holes_completed,
        winner=winner,
    )
