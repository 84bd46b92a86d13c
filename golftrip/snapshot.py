"""Round snapshots from JSON files.

A round file carries the tee's holes, the players with their playing
handicaps, the raw score cells and, optionally, the round's match and
format configuration. Files are validated with the pydantic schemas and
converted to the engine's frozen dataclasses.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from .config import (
    get_auto_press_threshold,
    get_default_skin_value,
    get_lone_wolf_multiplier,
    get_stableford_combine,
)
from .hole_results import build_score_map
from .models import (
    FormatKind,
    FormatRound,
    HoleSpec,
    Match,
    MatchStatus,
    PlayerInfo,
    Press,
    RoundSnapshot,
    ScoreEntry,
    Side,
    WolfDecision,
)
from .schemas import FormatRound as FormatRoundSchema
from .schemas import Match as MatchSchema
from .schemas import RoundFile
from .utils import load_json

logger = logging.getLogger('golftrip.snapshot')

T = TypeVar('T')


def _or_default(value: Optional[T], getter: Callable[[], T]) -> T:
    # Format settings left out of the round file come from engine config
    return getter() if value is None else value


def build_round_snapshot(round_file: RoundFile) -> RoundSnapshot:
    """
    Convert a validated round file into a RoundSnapshot.

    Args:
        round_file: Validated RoundFile

    Returns:
        RoundSnapshot with holes, players and the score map
    """
    holes = [
        HoleSpec(number=h.number, par=h.par, stroke_index=h.stroke_index, yardage=h.yardage)
        for h in round_file.holes
    ]
    players = [
        PlayerInfo(id=p.id, name=p.name, playing_handicap=p.playing_handicap, team=p.team)
        for p in round_file.players
    ]
    entries = [
        ScoreEntry(round_file.round_id, s.player_id, s.hole_number, s.gross)
        for s in round_file.scores
    ]
    return RoundSnapshot(
        round_id=round_file.round_id,
        holes=holes,
        players=players,
        scores=build_score_map(entries),
        name=round_file.name,
    )


def _optional_side(value: Optional[str]) -> Optional[Side]:
    return Side(value) if value else None


def build_match(round_id: str, schema: MatchSchema) -> tuple[Match, list[Press]]:
    """Convert a match schema into a Match and its presses."""
    match = Match(
        id=schema.id,
        round_id=round_id,
        match_type=schema.match_type,
        stake_per_man=schema.stake_per_man,
        team_a=tuple(schema.team_a),
        team_b=tuple(schema.team_b),
        status=MatchStatus(schema.status),
        winner=_optional_side(schema.winner),
        final_result=schema.final_result,
    )
    presses = [
        Press(
            id=p.id,
            match_id=schema.id,
            starting_hole=p.starting_hole,
            stake_per_man=p.stake_per_man,
            ending_hole=p.ending_hole,
            status=MatchStatus(p.status),
            winner=_optional_side(p.winner),
            final_result=p.final_result,
        )
        for p in schema.presses
    ]
    return match, presses


def build_format_round(round_id: str, schema: FormatRoundSchema) -> FormatRound:
    """Convert a format schema into a FormatRound."""
    return FormatRound(
        kind=FormatKind(schema.kind),
        round_id=round_id,
        team_assignments=dict(schema.team_assignments),
        stake_per_man=schema.stake_per_man,
        auto_press=schema.auto_press,
        auto_press_threshold=_or_default(schema.auto_press_threshold, get_auto_press_threshold),
        skin_value=_or_default(schema.skin_value, get_default_skin_value),
        carryover=schema.carryover,
        tee_order=tuple(schema.tee_order),
        wolf_decisions=tuple(
            WolfDecision(d.hole_number, d.wolf_id, d.partner_id) for d in schema.wolf_decisions
        ),
        lone_wolf_multiplier=_or_default(schema.lone_wolf_multiplier, get_lone_wolf_multiplier),
        stableford_combine=_or_default(schema.stableford_combine, get_stableford_combine),
        captains=dict(schema.captains),
    )


def load_round(path: str | Path) -> dict[str, Any]:
    """
    Load a round file and convert every section it contains.

    Args:
        path: Path to the round JSON file

    Returns:
        Dict with 'snapshot', 'match', 'presses' and 'format'
        (match/format None when the round has none)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file fails schema validation
    """
    round_file = load_json(path, schema=RoundFile)
    snapshot = build_round_snapshot(round_file)

    match, presses = (None, [])
    if round_file.match is not None:
        match, presses = build_match(round_file.round_id, round_file.match)

    format_round = None
    if round_file.format is not None:
        format_round = build_format_round(round_file.round_id, round_file.format)

    logger.info(
        f'Loaded round {snapshot.round_id}: {len(snapshot.holes)} holes, '
        f'{len(snapshot.players)} players, {len(round_file.scores)} scores'
    )
    return {'snapshot': snapshot, 'match': match, 'presses': presses, 'format': format_round}


def load_round_snapshot(path: str | Path) -> RoundSnapshot:
    """Load only the RoundSnapshot of a round file."""
    return build_round_snapshot(load_json(path, schema=RoundFile))
