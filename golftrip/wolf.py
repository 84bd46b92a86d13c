"""Wolf: a rotating-captain format for exactly four players.

- The tee order rotates each hole; the first player on the tee is the Wolf
- The Wolf picks a partner, or plays Lone Wolf against the other three
- Best-ball net decides the hole; Lone Wolf stakes are multiplied
- Holes score only once every player has scored and the Wolf has decided
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .format_scoring import current_hole as first_open_hole
from .hole_results import lookup_player, player_hole_score
from .models import MoneyLine, PlayerHoleScore, RoundSnapshot, WolfDecision

logger = logging.getLogger('golftrip.wolf')


@dataclass
class WolfHoleResult:
    hole_number: int
    par: int
    wolf_id: str
    partner_id: Optional[str]
    is_lone_wolf: bool
    player_scores: List[PlayerHoleScore]
    wolf_team_net: Optional[int]
    field_team_net: Optional[int]
    winner: Optional[str]  # 'wolf' | 'field' | 'halved' | None
    wolf_points_per_man: float
    complete: bool
    decided: bool


@dataclass
class WolfStandings:
    round_id: str
    stake_per_hole: float
    lone_wolf_multiplier: float
    tee_order: List[str]
    hole_results: List[WolfHoleResult]
    player_totals: Dict[str, float] = field(default_factory=dict)
    current_wolf_id: Optional[str] = None
    current_hole: int = 1
    holes_played: int = 0


def get_wolf_for_hole(tee_order: Sequence[str], hole_number: int) -> str:
    """Hole 1 -> tee_order[0], hole 2 -> tee_order[1], ..."""
    return tee_order[(hole_number - 1) % len(tee_order)]


def get_tee_order_for_hole(tee_order: Sequence[str], hole_number: int) -> List[str]:
    """Rotated tee order with the Wolf hitting first."""
    offset = (hole_number - 1) % len(tee_order)
    return [*tee_order[offset:], *tee_order[:offset]]


def _settle_hole(
    totals: Dict[str, float], winners: Sequence[str], losers: Sequence[str], stake: float
) -> None:
    # Every winner collects stake from every loser
    for pid in winners:
        totals[pid] += stake * len(losers)
    for pid in losers:
        totals[pid] -= stake * len(winners)


def compute_wolf_state(
    round_id: str,
    stake_per_hole: float,
    tee_order: Sequence[str],
    decisions: Sequence[WolfDecision],
    snapshot: RoundSnapshot,
    lone_wolf_multiplier: float = 2,
) -> WolfStandings:
    """
    Compute the full Wolf state from scores and Wolf decisions.

    Args:
        round_id: Round identifier
        stake_per_hole: Stake per man per hole
        tee_order: The four player ids in base rotation order
        decisions: Wolf picks, at most one per hole
        snapshot: Round holes, players and scores
        lone_wolf_multiplier: Stake multiplier when the Wolf goes alone

    Returns:
        WolfStandings with per-hole outcomes and running money per player
    """
    players = [lookup_player(snapshot, pid) for pid in tee_order]
    totals = {p.id: 0.0 for p in players}
    decisions_by_hole = {d.hole_number: d for d in decisions}

    hole_results: List[WolfHoleResult] = []
    holes_played = 0

    for hole in snapshot.sorted_holes():
        wolf_id = get_wolf_for_hole(tee_order, hole.number)
        decision = decisions_by_hole.get(hole.number)
        if decision is not None and decision.wolf_id != wolf_id:
            logger.warning(
                f'Hole {hole.number} decision names {decision.wolf_id} as wolf, rotation says {wolf_id}'
            )
        if decision is not None and decision.partner_id == wolf_id:
            logger.warning(f'Hole {hole.number} decision picks the wolf {wolf_id} as partner, ignoring it')
            decision = None

        scores = [player_hole_score(p, hole, snapshot.scores) for p in players]
        nets = {s.player_id: s.net for s in scores}
        complete = bool(scores) and all(s.gross is not None for s in scores)
        decided = decision is not None
        partner_id = decision.partner_id if decision else None
        is_lone_wolf = decided and partner_id is None

        wolf_team_net: Optional[int] = None
        field_team_net: Optional[int] = None
        winner: Optional[str] = None
        points_per_man = 0.0

        if complete and decided:
            holes_played += 1
            wolf_team = [wolf_id] if is_lone_wolf else [wolf_id, partner_id]
            field_team = [pid for pid in tee_order if pid not in wolf_team]
            stake = stake_per_hole * lone_wolf_multiplier if is_lone_wolf else stake_per_hole

            wolf_team_net = min(nets[pid] for pid in wolf_team)  # type: ignore[type-var]
            field_team_net = min(nets[pid] for pid in field_team)  # type: ignore[type-var]

            if wolf_team_net < field_team_net:  # type: ignore[operator]
                winner = 'wolf'
                points_per_man = stake
                _settle_hole(totals, wolf_team, field_team, stake)  # type: ignore[arg-type]
            elif field_team_net < wolf_team_net:  # type: ignore[operator]
                winner = 'field'
                points_per_man = stake
                _settle_hole(totals, field_team, wolf_team, stake)  # type: ignore[arg-type]
            else:
                winner = 'halved'

        hole_results.append(
            WolfHoleResult(
                hole_number=hole.number,
                par=hole.par,
                wolf_id=wolf_id,
                partner_id=partner_id,
                is_lone_wolf=is_lone_wolf,
                player_scores=scores,
                wolf_team_net=wolf_team_net,
                field_team_net=field_team_net,
                winner=winner,
                wolf_points_per_man=points_per_man,
                complete=complete and decided,
                decided=decided,
            )
        )

    current = first_open_hole(hole_results)
    return WolfStandings(
        round_id=round_id,
        stake_per_hole=stake_per_hole,
        lone_wolf_multiplier=lone_wolf_multiplier,
        tee_order=list(tee_order),
        hole_results=hole_results,
        player_totals=totals,
        current_wolf_id=get_wolf_for_hole(tee_order, current) if tee_order else None,
        current_hole=current,
        holes_played=holes_played,
    )


def calculate_wolf_settlement(standings: WolfStandings, round_name: str = '') -> List[MoneyLine]:
    """Wolf money lines: the running per-player totals."""
    return [
        MoneyLine(pid, amount, 'Wolf', round_name)
        for pid, amount in standings.player_totals.items()
    ]


def get_available_partners(tee_order: Sequence[str], wolf_id: str) -> List[str]:
    return [pid for pid in tee_order if pid != wolf_id]


def format_wolf_points(amount: float) -> str:
    if amount == 0:
        return '$0'
    sign = '+' if amount > 0 else '-'
    return f'{sign}${abs(amount):g}'
