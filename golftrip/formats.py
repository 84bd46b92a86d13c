"""Single dispatch over the closed set of round formats."""

import logging
from typing import Union

from .format_scoring import FormatStandings, compute_format_state
from .models import FormatKind, FormatRound, RoundSnapshot
from .nassau import NassauStandings, compute_nassau_state
from .scramble import ScrambleStandings, compute_scramble_state
from .skins import SkinsStandings, compute_skins_state
from .wolf import WolfStandings, compute_wolf_state

logger = logging.getLogger('golftrip.formats')

AnyStandings = Union[FormatStandings, NassauStandings, SkinsStandings, WolfStandings, ScrambleStandings]


def _captain(format_round: FormatRound, team: int) -> str:
    captain = format_round.captains.get(team)
    if captain:
        return captain
    # Default captain: first player assigned to the team
    return format_round.team_ids(team)[0]


def compute_format_standings(format_round: FormatRound, snapshot: RoundSnapshot) -> AnyStandings:
    """
    Compute standings for a configured format round.

    Team formats read team 1 as side A and team 2 as side B. The
    configuration is assumed valid (see validators.validate_format_round).

    Args:
        format_round: Format configuration for the round
        snapshot: Round holes, players and scores

    Returns:
        The standings type of the format
    """
    kind = FormatKind(format_round.kind)
    team1 = format_round.team_ids(1)
    team2 = format_round.team_ids(2)
    logger.debug(f'Computing {kind.value} standings for round {format_round.round_id}')

    if kind in (FormatKind.POINTS_HILO, FormatKind.STABLEFORD):
        return compute_format_state(
            kind, format_round.round_id, team1, team2, snapshot,
            stableford_combine=format_round.stableford_combine,
        )

    if kind == FormatKind.NASSAU:
        return compute_nassau_state(
            format_round.round_id, format_round.stake_per_man, team1, team2, snapshot,
            auto_press=format_round.auto_press,
            auto_press_threshold=format_round.auto_press_threshold,
        )

    if kind == FormatKind.SKINS:
        player_ids = list(format_round.team_assignments) or [p.id for p in snapshot.players]
        return compute_skins_state(
            format_round.round_id, format_round.skin_value, player_ids, snapshot,
            carryover=format_round.carryover,
        )

    if kind == FormatKind.WOLF:
        return compute_wolf_state(
            format_round.round_id, format_round.stake_per_man, format_round.tee_order,
            format_round.wolf_decisions, snapshot,
            lone_wolf_multiplier=format_round.lone_wolf_multiplier,
        )

    # FormatKind.SCRAMBLE
    return compute_scramble_state(
        format_round.round_id, _captain(format_round, 1), _captain(format_round, 2), snapshot
    )
