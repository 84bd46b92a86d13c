"""Nassau: three match-play bets in one round.

- Front 9 (holes 1-9), Back 9 (holes 10-18) and Overall 18, low net wins
- Each sub-match is replayed through the match state machine
- Optional auto-press: once per segment, when a side falls behind by the
  threshold a press starts on the next hole and runs to the end of the segment
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .constants import FRONT_NINE_LAST_HOLE, NASSAU_SEGMENTS
from .format_scoring import current_hole
from .hole_results import compute_hole_results, lead_delta
from .match_play import format_match_status, replay_segment
from .models import HoleResult, MoneyLine, RoundSnapshot, SegmentState, Side

logger = logging.getLogger('golftrip.nassau')


@dataclass
class NassauSubMatch:
    segment: str  # 'front' | 'back' | 'overall'
    label: str
    state: SegmentState

    @property
    def status(self) -> str:
        return format_match_status(self.state.lead, self.state.holes_remaining, self.state.completed)


@dataclass
class NassauPress:
    segment: str
    starting_hole: int
    state: SegmentState


@dataclass
class NassauStandings:
    round_id: str
    stake_per_man: float
    auto_press: bool
    auto_press_threshold: int
    team_a: List[str]
    team_b: List[str]
    sub_matches: List[NassauSubMatch]
    hole_results: List[HoleResult]
    current_hole: int
    holes_played: int
    presses: List[NassauPress] = field(default_factory=list)

    def sub_match(self, segment: str) -> Optional[NassauSubMatch]:
        for sub in self.sub_matches:
            if sub.segment == segment:
                return sub
        return None

    @property
    def front(self) -> Optional[NassauSubMatch]:
        return self.sub_match('front')

    @property
    def back(self) -> Optional[NassauSubMatch]:
        return self.sub_match('back')

    @property
    def overall(self) -> Optional[NassauSubMatch]:
        return self.sub_match('overall')


def segment_bounds(first_hole: int, last_hole: int) -> dict[str, tuple[int, int]]:
    """Hole range of each segment present in the round."""
    bounds = {'overall': (first_hole, last_hole)}
    if first_hole <= FRONT_NINE_LAST_HOLE:
        bounds['front'] = (first_hole, min(FRONT_NINE_LAST_HOLE, last_hole))
    if last_hole > FRONT_NINE_LAST_HOLE:
        bounds['back'] = (max(FRONT_NINE_LAST_HOLE + 1, first_hole), last_hole)
    return bounds


def _auto_presses(
    hole_results: Sequence[HoleResult], bounds: dict[str, tuple[int, int]], threshold: int
) -> List[NassauPress]:
    presses: List[NassauPress] = []
    running = {segment: 0 for segment in bounds}
    pressed: set[str] = set()

    for result in hole_results:
        if not result.complete:
            continue
        for segment, (first, last) in bounds.items():
            if not first <= result.hole_number <= last:
                continue
            running[segment] += lead_delta(result.winner)
            if segment in pressed or abs(running[segment]) < threshold:
                continue
            pressed.add(segment)
            start = result.hole_number + 1
            if start > last:
                continue
            logger.debug(f'Auto-press on {segment} from hole {start}')
            presses.append(
                NassauPress(segment=segment, starting_hole=start, state=replay_segment(hole_results, start, last))
            )

    return presses


def compute_nassau_state(
    round_id: str,
    stake_per_man: float,
    team_a: Sequence[str],
    team_b: Sequence[str],
    snapshot: RoundSnapshot,
    auto_press: bool = False,
    auto_press_threshold: int = 2,
) -> NassauStandings:
    """
    Compute the full Nassau state from scores.

    Args:
        round_id: Round identifier
        stake_per_man: Stake per sub-match per player
        team_a: Player ids on side A (best-ball net for two players)
        team_b: Player ids on side B
        snapshot: Round holes, players and scores
        auto_press: Whether auto-presses trigger
        auto_press_threshold: Holes down that triggers a press

    Returns:
        NassauStandings with front/back/overall sub-matches and presses
    """
    hole_results = compute_hole_results(team_a, team_b, snapshot)
    bounds = segment_bounds(snapshot.first_hole, snapshot.last_hole)

    sub_matches = [
        NassauSubMatch(segment=segment, label=label, state=replay_segment(hole_results, *bounds[segment]))
        for segment, label in NASSAU_SEGMENTS
        if segment in bounds
    ]

    presses = _auto_presses(hole_results, bounds, auto_press_threshold) if auto_press else []

    return NassauStandings(
        round_id=round_id,
        stake_per_man=stake_per_man,
        auto_press=auto_press,
        auto_press_threshold=auto_press_threshold,
        team_a=list(team_a),
        team_b=list(team_b),
        sub_matches=sub_matches,
        hole_results=hole_results,
        current_hole=current_hole(hole_results),
        holes_played=sum(1 for r in hole_results if r.complete),
        presses=presses,
    )


def _decided_lines(
    state: SegmentState, stake: float, team_a: Sequence[str], team_b: Sequence[str], label: str, round_name: str
) -> List[MoneyLine]:
    if not state.completed or state.winner not in (Side.TEAM_A, Side.TEAM_B):
        return []
    winners, losers = (team_a, team_b) if state.winner == Side.TEAM_A else (team_b, team_a)
    return [MoneyLine(pid, stake, f'{label}: Won', round_name) for pid in winners] + [
        MoneyLine(pid, -stake, f'{label}: Lost', round_name) for pid in losers
    ]


def calculate_nassau_settlement(standings: NassauStandings, round_name: str = '') -> List[MoneyLine]:
    """
    Nassau money lines.

    Each decided sub-match and each decided press moves stake_per_man from
    every loser to every winner; halved bets move nothing.
    """
    lines: List[MoneyLine] = []
    for sub in standings.sub_matches:
        lines += _decided_lines(
            sub.state, standings.stake_per_man, standings.team_a, standings.team_b,
            f'Nassau {sub.label}', round_name,
        )
    for number, press in enumerate(standings.presses, start=1):
        lines += _decided_lines(
            press.state, standings.stake_per_man, standings.team_a, standings.team_b,
            f'Nassau press {number} ({press.segment})', round_name,
        )
    return lines


def get_nassau_exposure(standings: NassauStandings) -> float:
    """Exposure per man: stake x (3 sub-matches + presses)."""
    return standings.stake_per_man * (len(standings.sub_matches) + len(standings.presses))
