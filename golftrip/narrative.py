"""Short match-play storylines derived from a MatchState.

Candidates are collected by intensity:
- high: match closed, dormie, the latest lead change
- medium: presses, winning streaks of 3+, the latest hole won by one stroke
- low: all square
The top three are returned, highest intensity first, then latest hole first.
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from .models import MatchState, Side

MAX_NARRATIVES = 3
STREAK_LENGTH = 3

INTENSITY_RANK = {'high': 0, 'medium': 1, 'low': 2}


@dataclass(frozen=True)
class NarrativeEvent:
    hole: int
    text: str
    kind: str  # 'momentum_shift' | 'press' | 'dramatic_hole' | 'match_close' | 'status_update'
    intensity: str  # 'high' | 'medium' | 'low'


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def team_label(player_ids: Sequence[str], names: Optional[Mapping[str, str]] = None) -> str:
    """First names of a side: 'Zach' for singles, 'Zach & Dave' for a pair."""
    names = names or {}
    firsts = [(names.get(pid) or pid).split(' ')[0] for pid in player_ids]
    return ' & '.join(firsts[:2])


def _momentum(completed, team_a: str, team_b: str) -> Optional[NarrativeEvent]:
    # Walk back to the most recent hole where the lead changed direction
    for i in range(len(completed) - 1, -1, -1):
        hole = completed[i]
        prev_lead = completed[i - 1].cumulative_lead if i > 0 else 0
        lead = hole.cumulative_lead
        if _sign(prev_lead) == _sign(lead):
            continue

        n = hole.hole_number
        if prev_lead * lead < 0:
            leader = team_a if lead > 0 else team_b
            return NarrativeEvent(n, f'{leader} takes the lead on {n}, match flipped!', 'momentum_shift', 'high')
        if lead == 0:
            return NarrativeEvent(n, f'Back to All Square after {n}', 'momentum_shift', 'high')

        leader = team_a if lead > 0 else team_b
        led_before = any(_sign(r.cumulative_lead) == _sign(lead) for r in completed[:i])
        text = f'{leader} retakes the lead after {n}' if led_before else f'{leader} leads for the first time after {n}'
        return NarrativeEvent(n, text, 'momentum_shift', 'high')
    return None


def _streak(completed) -> tuple[Optional[Side], int]:
    streak_side: Optional[Side] = None
    count = 0
    for i in range(len(completed) - 1, -1, -1):
        hole = completed[i]
        if i < len(completed) - 1 and completed[i + 1].hole_number - hole.hole_number != 1:
            break
        if hole.winner not in (Side.TEAM_A, Side.TEAM_B):
            break
        if streak_side is None:
            streak_side = hole.winner
        elif hole.winner != streak_side:
            break
        count += 1
    return streak_side, count


def generate_narratives(
    state: MatchState,
    names: Optional[Mapping[str, str]] = None,
    limit: int = MAX_NARRATIVES,
) -> List[NarrativeEvent]:
    """
    Pick the most important storylines of a match.

    Args:
        state: Derived match state (hole results, presses, status)
        names: player_id -> display name; ids are used when missing
        limit: Maximum number of events returned

    Returns:
        NarrativeEvent list sorted by intensity, then latest hole first
    """
    team_a = team_label(state.team_a, names)
    team_b = team_label(state.team_b, names)

    completed = sorted((r for r in state.hole_results if r.complete), key=lambda r: r.hole_number)
    if not completed:
        return []

    latest = completed[-1].hole_number
    candidates: List[NarrativeEvent] = []

    if state.completed and state.winner in (Side.TEAM_A, Side.TEAM_B):
        winner = team_a if state.winner == Side.TEAM_A else team_b
        text = f"It's over! {winner} wins {state.final_result}"
        candidates.append(NarrativeEvent(latest, text, 'match_close', 'high'))
    elif state.completed and state.winner == Side.HALVED:
        candidates.append(NarrativeEvent(latest, "It's over! The match ends All Square", 'match_close', 'high'))

    if state.is_dormie and not state.completed:
        trailing = team_b if state.lead > 0 else team_a
        if state.holes_remaining == 1:
            text = f'DORMIE: {trailing} must win {latest + 1} to stay alive'
        else:
            text = f'DORMIE: {trailing} must win out to survive ({state.holes_remaining} to play)'
        candidates.append(NarrativeEvent(latest, text, 'status_update', 'high'))

    momentum = _momentum(completed, team_a, team_b)
    if momentum is not None:
        candidates.append(momentum)

    leads = {r.hole_number: r.cumulative_lead for r in completed}
    for press in sorted(state.presses, key=lambda p: -p.starting_hole):
        if press.starting_hole > latest + 1:
            continue
        lead_at_press = leads.get(press.starting_hole - 1, 0)
        if lead_at_press > 0:
            who = f'{team_b} doubles down'
        elif lead_at_press < 0:
            who = f'{team_a} doubles down'
        else:
            who = 'New bet'
        active_bets = 1 + sum(1 for p in state.presses if p.starting_hole <= press.starting_hole)
        per_hole = f'{active_bets * state.stake_per_man:g}'
        candidates.append(
            NarrativeEvent(
                press.starting_hole,
                f'Press! {who} from hole {press.starting_hole}, ${per_hole}/hole per man',
                'press',
                'medium',
            )
        )

    streak_side, streak_count = _streak(completed)
    if streak_count >= STREAK_LENGTH:
        leader = team_a if streak_side == Side.TEAM_A else team_b
        text = f"{leader} has won {streak_count} straight, they're rolling"
        candidates.append(NarrativeEvent(latest, text, 'status_update', 'medium'))

    for hole in reversed(completed):
        if hole.winner == Side.HALVED or hole.side_a_net is None or hole.side_b_net is None:
            continue
        if abs(hole.side_a_net - hole.side_b_net) == 1:
            winner = team_a if hole.winner == Side.TEAM_A else team_b
            candidates.append(
                NarrativeEvent(
                    hole.hole_number,
                    f'A tight one on {hole.hole_number}: {winner} takes it by a stroke',
                    'dramatic_hole',
                    'medium',
                )
            )
            break

    back_to_square = any(e.kind == 'momentum_shift' and 'All Square' in e.text for e in candidates)
    if state.lead == 0 and not state.completed and not back_to_square:
        candidates.append(NarrativeEvent(latest, f'All Square through {latest}', 'status_update', 'low'))

    candidates.sort(key=lambda e: (INTENSITY_RANK[e.intensity], -e.hole))
    return candidates[:limit]
