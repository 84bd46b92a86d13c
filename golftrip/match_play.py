"""Match play engine.

All match and press state is derived on the fly from saved scores: the hole
results are replayed in order through the same state machine for the main
match and for every press.
"""

import dataclasses
import logging
from typing import List, Optional, Sequence, Tuple

from .constants import ALL_SQUARE, DOWN, UP
from .hole_results import compute_hole_results, lead_delta
from .models import (
    ExposureInfo,
    HoleMatchInfo,
    HoleResult,
    Match,
    MatchState,
    MatchStatus,
    MoneyLine,
    Press,
    PressExposure,
    PressState,
    RoundSnapshot,
    SegmentState,
    Side,
)

logger = logging.getLogger('golftrip.match_play')


# ============================================================================
# STATUS FORMATTING
# ============================================================================

def format_lead_status(lead: int) -> str:
    """Lead from side A's perspective: '2 UP', '1 DN', 'A/S'."""
    if lead == 0:
        return ALL_SQUARE
    if lead > 0:
        return f'{lead} {UP}'
    return f'{abs(lead)} {DOWN}'


def format_lead_status_for_team(lead: int, team: Side) -> str:
    """Lead from the given side's perspective."""
    return format_lead_status(lead if team == Side.TEAM_A else -lead)


def format_final_result(lead: int, holes_remaining: int) -> str:
    """Result label of a finished match: '3&2', '1 UP' or 'A/S'."""
    if lead == 0:
        return ALL_SQUARE
    if holes_remaining == 0:
        return f'{abs(lead)} {UP}'
    return f'{abs(lead)}&{holes_remaining}'


def format_match_status(lead: int, holes_remaining: int, is_complete: bool = False) -> str:
    """Final label when complete, live lead label otherwise."""
    if is_complete:
        return format_final_result(lead, holes_remaining)
    return format_lead_status(lead)


# ============================================================================
# STATE MACHINE
# ============================================================================

def is_dormie(lead: int, holes_remaining: int) -> bool:
    """Leading side cannot lose: lead equals holes remaining."""
    return lead != 0 and abs(lead) == holes_remaining


def is_match_closed(lead: int, holes_remaining: int) -> bool:
    """Mathematically decided: lead exceeds holes remaining."""
    return abs(lead) > holes_remaining


def replay_segment(
    hole_results: Sequence[HoleResult], first_hole: int, last_hole: int
) -> SegmentState:
    """
    Replay complete holes in [first_hole, last_hole] through the match state machine.

    The segment closes the first time |lead| exceeds the holes remaining;
    holes scored after that point do not change the result.

    Args:
        hole_results: Two-sided hole results for the round
        first_hole: First hole of the segment (inclusive)
        last_hole: Last hole of the segment (inclusive)

    Returns:
        SegmentState with lead, counters, status and result label
    """
    total = last_hole - first_hole + 1
    lead = 0
    played = 0
    closed_on_hole: Optional[int] = None

    for result in sorted(hole_results, key=lambda r: r.hole_number):
        if not first_hole <= result.hole_number <= last_hole or not result.complete:
            continue

        played += 1
        lead += lead_delta(result.winner)

        if is_match_closed(lead, total - played):
            closed_on_hole = result.hole_number
            break

    remaining = total - played
    closed = closed_on_hole is not None
    completed = closed or remaining == 0

    if completed:
        status = MatchStatus.COMPLETED
        if lead > 0:
            winner: Optional[Side] = Side.TEAM_A
        elif lead < 0:
            winner = Side.TEAM_B
        else:
            winner = Side.HALVED
        final_result: Optional[str] = format_final_result(lead, remaining)
    else:
        winner = None
        final_result = None
        if played == 0:
            status = MatchStatus.NOT_STARTED
        elif is_dormie(lead, remaining):
            status = MatchStatus.DORMIE
        else:
            status = MatchStatus.IN_PROGRESS

    if closed:
        logger.debug(f'Segment {first_hole}-{last_hole} closed on hole {closed_on_hole}: {final_result}')

    return SegmentState(
        first_hole=first_hole,
        last_hole=last_hole,
        lead=lead,
        holes_played=played,
        holes_remaining=remaining,
        status=status,
        winner=winner,
        final_result=final_result,
        is_dormie=not completed and is_dormie(lead, remaining),
        is_closed=closed,
        closed_on_hole=closed_on_hole,
    )


def _keep_completed(
    segment: SegmentState,
    persisted_status: MatchStatus,
    persisted_winner: Optional[Side],
    persisted_result: Optional[str],
    label: str,
) -> Tuple[MatchStatus, Optional[Side], Optional[str]]:
    """Status never regresses from completed once a collaborator persisted it."""
    if persisted_status == MatchStatus.COMPLETED and not segment.completed:
        logger.warning(f'{label} was completed ({persisted_result}) but scores no longer decide it')
        return persisted_status, persisted_winner, persisted_result
    return segment.status, segment.winner, segment.final_result


def compute_match_state(
    match: Match,
    presses: Sequence[Press],
    hole_results: Sequence[HoleResult],
    total_holes: int = 18,
    first_hole: int = 1,
) -> MatchState:
    """
    Compute full match state from hole results.

    Args:
        match: Match configuration
        presses: Presses in creation order
        hole_results: Output of compute_hole_results for the match sides
        total_holes: Holes in the round
        first_hole: Number of the first hole played (10 for a back-nine round)

    Returns:
        MatchState with main match and press states
    """
    last_hole = first_hole + total_holes - 1
    main = replay_segment(hole_results, first_hole, last_hole)
    status, winner, final_result = _keep_completed(
        main, match.status, match.winner, match.final_result, f'Match {match.id}'
    )

    press_states: List[PressState] = []
    for index, press in enumerate(presses):
        ending_hole = press.ending_hole or last_hole
        segment = replay_segment(hole_results, press.starting_hole, ending_hole)
        press_status, press_winner, press_result = _keep_completed(
            segment, press.status, press.winner, press.final_result, f'Press {press.id}'
        )
        press_states.append(
            PressState(
                id=press.id,
                press_number=index + 1,
                starting_hole=press.starting_hole,
                ending_hole=ending_hole,
                stake_per_man=press.stake_per_man,
                status=press_status,
                winner=press_winner,
                final_result=press_result,
                lead=segment.lead,
                holes_played=segment.holes_played,
                holes_remaining=segment.holes_remaining,
                is_dormie=segment.is_dormie,
            )
        )

    return MatchState(
        match_id=match.id,
        round_id=match.round_id,
        match_type=match.match_type,
        stake_per_man=match.stake_per_man,
        players_per_side=match.players_per_side,
        team_a=tuple(match.team_a),
        team_b=tuple(match.team_b),
        status=status,
        winner=winner,
        final_result=final_result,
        lead=main.lead,
        holes_played=main.holes_played,
        holes_remaining=main.holes_remaining,
        is_dormie=main.is_dormie,
        is_closed=main.is_closed,
        closed_on_hole=main.closed_on_hole,
        total_holes=total_holes,
        hole_results=list(hole_results),
        presses=press_states,
        first_hole=first_hole,
    )


def compute_round_match_state(
    match: Match, presses: Sequence[Press], snapshot: RoundSnapshot
) -> MatchState:
    """Compute hole results from a round snapshot, then the match state."""
    hole_results = compute_hole_results(match.team_a, match.team_b, snapshot)
    return compute_match_state(match, presses, hole_results, snapshot.total_holes, snapshot.first_hole)


# ============================================================================
# PRESSES AND STAKES
# ============================================================================

def validate_press(
    state: MatchState, starting_hole: int, ending_hole: Optional[int] = None
) -> list[str]:
    """
    Check whether a press can be opened.

    A press may start on any hole up to the first unplayed one while the
    main match is not completed.

    Returns:
        List of error messages (empty if the press is allowed)
    """
    errors = []
    first, last = state.first_hole, state.last_hole
    end = ending_hole or last

    if state.completed:
        errors.append(f'Match {state.match_id} is completed ({state.final_result}), cannot press')
    if not first <= starting_hole <= last:
        errors.append(f'Press starting hole must be {first}-{last}, got {starting_hole}')
    elif starting_hole > first + state.holes_played:
        errors.append(
            f'Press cannot start on hole {starting_hole} after only {state.holes_played} holes played'
        )
    if end < starting_hole or end > last:
        errors.append(f'Press ending hole {end} must be between {starting_hole} and {last}')

    return errors


def add_press(
    match: Match,
    presses: Sequence[Press],
    state: MatchState,
    starting_hole: int,
    ending_hole: Optional[int] = None,
    press_id: Optional[str] = None,
) -> Tuple[List[Press], list[str]]:
    """
    Open a new press; the stake is copied from the current main stake.

    Returns:
        Tuple of (presses, errors). On error the presses are returned unchanged.
    """
    errors = validate_press(state, starting_hole, ending_hole)
    if errors:
        return list(presses), errors

    press = Press(
        id=press_id or f'{match.id}-press-{len(presses) + 1}',
        match_id=match.id,
        starting_hole=starting_hole,
        stake_per_man=match.stake_per_man,
        ending_hole=ending_hole,
    )
    logger.debug(f'Press {press.id} opened on hole {starting_hole} for {press.stake_per_man}')
    return [*presses, press], []


def update_match_stake(match: Match, state: MatchState, stake_per_man: float) -> Tuple[Match, list[str]]:
    """
    Change the main match stake while the match is not completed.

    Existing presses keep the stake they were opened with.

    Returns:
        Tuple of (match, errors). On error the match is returned unchanged.
    """
    errors = []
    if state.completed:
        errors.append(f'Match {match.id} is completed, stake cannot change')
    if stake_per_man < 0:
        errors.append(f'Stake must not be negative, got {stake_per_man}')
    if errors:
        return match, errors
    return dataclasses.replace(match, stake_per_man=stake_per_man), []


# ============================================================================
# EXPOSURE AND HOLE INFO
# ============================================================================

def calculate_exposure(state: MatchState) -> ExposureInfo:
    """
    Money on the line per side from the main match and every open press.

    total_exposure = stake x players per side for the main match plus the
    same for each open press; current_position = lead x stake x players per
    side summed over the same wagers (side A perspective).
    """
    per_side = state.players_per_side
    main_exposure = state.stake_per_man * per_side

    press_exposures = [
        PressExposure(press_number=p.press_number, exposure=p.stake_per_man * per_side)
        for p in state.presses
        if p.is_open
    ]
    total_exposure = main_exposure + sum(p.exposure for p in press_exposures)

    current_position = state.lead * state.stake_per_man * per_side
    current_position += sum(
        p.lead * p.stake_per_man * per_side for p in state.presses if p.is_open
    )

    return ExposureInfo(
        total_exposure=total_exposure,
        main_match_exposure=main_exposure,
        press_exposures=press_exposures,
        current_position=current_position,
    )


def get_hole_match_info(state: MatchState, hole_number: int) -> HoleMatchInfo:
    """What is at stake on a hole: main stake unless closed plus covering open presses."""
    main_stake = 0 if state.completed else state.stake_per_man
    press_stakes = {
        p.press_number: p.stake_per_man
        for p in state.presses
        if p.is_open and p.starting_hole <= hole_number <= p.ending_hole
    }
    return HoleMatchInfo(
        hole_number=hole_number,
        total_at_stake=main_stake + sum(press_stakes.values()),
        main_match_stake=main_stake,
        press_stakes=press_stakes,
        lead=state.lead,
        status_label=format_lead_status(state.lead),
        is_dormie=state.is_dormie,
        is_closed=state.is_closed,
    )


# ============================================================================
# MONEY
# ============================================================================

def _result_lines(
    winner: Optional[Side],
    lead: int,
    stake: float,
    team_a: Sequence[str],
    team_b: Sequence[str],
    label: str,
    final_result: Optional[str],
    round_name: str,
) -> List[MoneyLine]:
    if winner not in (Side.TEAM_A, Side.TEAM_B):
        return []  # halved, nothing changes hands

    amount = abs(lead) * stake
    if amount == 0:
        return []  # persisted result with level scores or a free match
    winners, losers = (team_a, team_b) if winner == Side.TEAM_A else (team_b, team_a)
    lines = [
        MoneyLine(pid, amount, f'{label}: Won {final_result}', round_name) for pid in winners
    ]
    lines += [
        MoneyLine(pid, -amount, f'{label}: Lost {final_result}', round_name) for pid in losers
    ]
    return lines


def match_money_results(state: MatchState, round_name: str = '') -> List[MoneyLine]:
    """
    Per-player money lines for a completed match and its completed presses.

    Each player on the winning side wins |lead| x stake per man; each player
    on the losing side loses the same.
    """
    lines: List[MoneyLine] = []
    if state.completed:
        lines += _result_lines(
            state.winner, state.lead, state.stake_per_man,
            state.team_a, state.team_b, 'Main', state.final_result, round_name,
        )

    for press in state.presses:
        if press.status != MatchStatus.COMPLETED:
            continue
        lines += _result_lines(
            press.winner, press.lead, press.stake_per_man,
            state.team_a, state.team_b, f'Press {press.press_number}', press.final_result, round_name,
        )

    return lines
