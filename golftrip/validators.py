"""Validation functions for round, match and format configuration."""

from typing import Mapping, Sequence

from .config import get_max_gross
from .constants import MATCH_TYPE_PLAYERS, MAX_PAR, MIN_GROSS, MIN_PAR, WOLF_PLAYERS
from .models import FormatKind, FormatRound, HoleSpec, Match, RoundSnapshot
from .wolf import get_wolf_for_hole


def validate_holes(holes: Sequence[HoleSpec]) -> list[str]:
    """
    Validate a tee's holes.

    Checks:
    - At least one hole, unique hole numbers
    - Par between 3 and 5
    - Stroke indices in 1-18, unique, a permutation of 1-18 on a full round

    Args:
        holes: Holes of the tee

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not holes:
        return ['Round has no holes']

    numbers = [h.number for h in holes]
    duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
    if duplicates:
        errors.append(f'Duplicate hole numbers: {", ".join(map(str, duplicates))}')

    for hole in holes:
        if not MIN_PAR <= hole.par <= MAX_PAR:
            errors.append(f'Hole {hole.number} has par {hole.par} (must be {MIN_PAR}-{MAX_PAR})')
        if not 1 <= hole.stroke_index <= 18:
            errors.append(f'Hole {hole.number} has stroke index {hole.stroke_index} (must be 1-18)')

    indices = [h.stroke_index for h in holes]
    if len(set(indices)) != len(indices):
        errors.append('Stroke indices are not unique')
    elif len(holes) == 18 and sorted(indices) != list(range(1, 19)):
        errors.append('Stroke indices must be a permutation of 1-18')

    return errors


def validate_scores(snapshot: RoundSnapshot) -> list[str]:
    """
    Check that recorded gross scores are in range and on real holes.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    max_gross = get_max_gross()
    hole_numbers = {h.number for h in snapshot.holes}

    for player_id, holes in snapshot.scores.items():
        for hole_number, gross in holes.items():
            if hole_number not in hole_numbers:
                errors.append(f'{player_id} has a score on unknown hole {hole_number}')
            if gross is not None and not MIN_GROSS <= gross <= max_gross:
                errors.append(
                    f'{player_id} has gross {gross} on hole {hole_number} (must be {MIN_GROSS}-{max_gross})'
                )

    return errors


def validate_match(match: Match, snapshot: RoundSnapshot) -> list[str]:
    """
    Validate a match configuration against its round.

    Checks:
    - Known match type with the right number of players per side
    - No player on both sides, every player in the round
    - Non-negative stake

    Args:
        match: Match to validate
        snapshot: Round the match is played in

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    per_side = MATCH_TYPE_PLAYERS.get(match.match_type)
    if per_side is None:
        errors.append(f"Match {match.id} has unknown type '{match.match_type}'")
    else:
        for label, side in (('A', match.team_a), ('B', match.team_b)):
            if len(side) != per_side:
                errors.append(
                    f'Match {match.id} side {label} has {len(side)} players (needs {per_side} for {match.match_type})'
                )

    overlap = sorted(set(match.team_a) & set(match.team_b))
    if overlap:
        errors.append(f'Match {match.id} has players on both sides: {", ".join(overlap)}')

    for player_id in [*match.team_a, *match.team_b]:
        if snapshot.player(player_id) is None:
            errors.append(f'Match {match.id} player {player_id} is not in the round')

    if match.stake_per_man < 0:
        errors.append(f'Match {match.id} has negative stake {match.stake_per_man}')

    return errors


def validate_format_round(format_round: FormatRound, snapshot: RoundSnapshot) -> list[str]:
    """
    Validate the configuration a format needs before it can be scored.

    Checks:
    - Team formats: both teams populated, players in the round
    - Wolf: exactly four players in the tee order, decisions name real partners
    - Scramble: captains (when given) belong to their team
    - Skins: at least two players

    Args:
        format_round: Format configuration
        snapshot: Round the format is played in

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    kind = format_round.kind
    team1 = format_round.team_ids(1)
    team2 = format_round.team_ids(2)

    for player_id in format_round.team_assignments:
        if snapshot.player(player_id) is None:
            errors.append(f'{player_id} is assigned to a team but not in the round')

    if kind in (FormatKind.POINTS_HILO, FormatKind.STABLEFORD, FormatKind.NASSAU, FormatKind.SCRAMBLE):
        if not team1 or not team2:
            errors.append(f'{kind.value} needs players on both teams')
        if kind == FormatKind.POINTS_HILO and (len(team1) != 2 or len(team2) != 2):
            errors.append('points_hilo needs two players per team')

    if kind == FormatKind.SCRAMBLE:
        for team, members in ((1, team1), (2, team2)):
            captain = format_round.captains.get(team)
            if captain and captain not in members:
                errors.append(f'Scramble captain {captain} is not on team {team}')

    if kind == FormatKind.SKINS:
        players = list(format_round.team_assignments) or [p.id for p in snapshot.players]
        if len(players) < 2:
            errors.append('skins needs at least two players')

    if kind == FormatKind.WOLF:
        tee_order = list(format_round.tee_order)
        if len(tee_order) != WOLF_PLAYERS or len(set(tee_order)) != WOLF_PLAYERS:
            errors.append(f'wolf needs exactly {WOLF_PLAYERS} distinct players in the tee order')
        for player_id in tee_order:
            if snapshot.player(player_id) is None:
                errors.append(f'Wolf player {player_id} is not in the round')
        seen_holes = set()
        for decision in format_round.wolf_decisions:
            if decision.hole_number in seen_holes:
                errors.append(f'Hole {decision.hole_number} has more than one wolf decision')
            seen_holes.add(decision.hole_number)
            wolf_id = get_wolf_for_hole(tee_order, decision.hole_number) if tee_order else decision.wolf_id
            if decision.wolf_id != wolf_id:
                errors.append(f'Hole {decision.hole_number} wolf is {wolf_id}, not {decision.wolf_id}')
            if decision.partner_id is not None and (
                decision.partner_id not in tee_order or decision.partner_id in (decision.wolf_id, wolf_id)
            ):
                errors.append(f'Hole {decision.hole_number} wolf partner {decision.partner_id} is not valid')

    if format_round.stake_per_man < 0 or format_round.skin_value < 0:
        errors.append('Stakes must not be negative')

    return errors


def validate_settlement_totals(player_totals: Mapping[str, float], tolerance: float = 0.01) -> list[str]:
    """
    Sanity-check per-player money totals before settling.

    Returns:
        List of warning messages (empty if the totals balance)
    """
    warnings = []
    total = sum(player_totals.values())
    if abs(total) > tolerance:
        warnings.append(f'Player totals do not balance: off by {total:.2f}')
    return warnings
