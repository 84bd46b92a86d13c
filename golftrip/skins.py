"""Skins: an individual hole-by-hole game.

- Each hole is worth one skin
- The single lowest net score wins the skin
- A tie for low carries the skin to the next hole (when carryover is on),
  so a hole after three carries is worth four skins
- Settlement: every other player pays the winner the skin value per skin
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .format_scoring import current_hole
from .hole_results import lookup_player, player_hole_score
from .models import MoneyLine, PlayerHoleScore, RoundSnapshot

logger = logging.getLogger('golftrip.skins')


@dataclass
class SkinsHoleResult:
    hole_number: int
    par: int
    player_scores: List[PlayerHoleScore]
    winner_id: Optional[str]  # None = carried or dropped
    carried: bool
    pot_value: float  # this hole's skin plus carryovers
    skins_at_stake: int
    complete: bool


@dataclass
class SkinsStandings:
    round_id: str
    skin_value: float
    carryover: bool
    players: List[str]
    hole_results: List[SkinsHoleResult]
    current_carry_count: int
    skin_counts: Dict[str, int] = field(default_factory=dict)
    skin_values: Dict[str, float] = field(default_factory=dict)
    total_skins_awarded: int = 0
    total_skins_carried: int = 0
    current_hole: int = 1
    holes_played: int = 0

    @property
    def current_carry_value(self) -> float:
        return self.current_carry_count * self.skin_value


def compute_skins_state(
    round_id: str,
    skin_value: float,
    player_ids: Sequence[str],
    snapshot: RoundSnapshot,
    carryover: bool = True,
) -> SkinsStandings:
    """
    Compute the full Skins state from scores.

    Args:
        round_id: Round identifier
        skin_value: Value of one skin
        player_ids: Players in the skins game
        snapshot: Round holes, players and scores
        carryover: Whether tied holes carry their skin forward

    Returns:
        SkinsStandings with per-hole winners, counts and values
    """
    players = [lookup_player(snapshot, pid) for pid in player_ids]
    skin_counts = {p.id: 0 for p in players}
    skin_values = {p.id: 0.0 for p in players}

    hole_results: List[SkinsHoleResult] = []
    carry_count = 0
    total_awarded = 0
    total_carried = 0
    holes_played = 0

    for hole in snapshot.sorted_holes():
        scores = [player_hole_score(p, hole, snapshot.scores) for p in players]
        complete = bool(scores) and all(s.gross is not None for s in scores)
        skins_at_stake = carry_count + 1
        pot_value = skins_at_stake * skin_value

        winner_id: Optional[str] = None
        carried = False

        if complete:
            holes_played += 1
            low = min(s.net for s in scores)  # type: ignore[type-var]
            low_players = [s.player_id for s in scores if s.net == low]

            if len(low_players) == 1:
                winner_id = low_players[0]
                skin_counts[winner_id] += skins_at_stake
                skin_values[winner_id] += pot_value
                total_awarded += skins_at_stake
                carry_count = 0
            elif carryover:
                carried = True
                carry_count += 1
                total_carried += 1
                logger.debug(f'Hole {hole.number} tied, {carry_count} skin(s) carried')
            else:
                # No carryover: the tied skin is dropped
                carry_count = 0

        hole_results.append(
            SkinsHoleResult(
                hole_number=hole.number,
                par=hole.par,
                player_scores=scores,
                winner_id=winner_id,
                carried=carried,
                pot_value=pot_value,
                skins_at_stake=skins_at_stake,
                complete=complete,
            )
        )

    return SkinsStandings(
        round_id=round_id,
        skin_value=skin_value,
        carryover=carryover,
        players=[p.id for p in players],
        hole_results=hole_results,
        current_carry_count=carry_count,
        skin_counts=skin_counts,
        skin_values=skin_values,
        total_skins_awarded=total_awarded,
        total_skins_carried=total_carried,
        current_hole=current_hole(hole_results),
        holes_played=holes_played,
    )


def calculate_skins_settlement(standings: SkinsStandings, round_name: str = '') -> List[MoneyLine]:
    """
    Skins money lines.

    Every other player pays the winner skin_value for each skin won, so a
    player's net is skin_value x (players x own skins - all skins awarded).
    Skins still carried or dropped at the end are never paid.
    """
    player_count = len(standings.players)
    lines = []
    for pid in standings.players:
        count = standings.skin_counts.get(pid, 0)
        amount = standings.skin_value * (player_count * count - standings.total_skins_awarded)
        lines.append(MoneyLine(pid, amount, f'Skins: {format_skin_count(count)}', round_name))
    return lines


def format_carryover_alert(carry_count: int, skin_value: float) -> str:
    if carry_count == 0:
        return ''
    total_value = (carry_count + 1) * skin_value
    plural = 's' if carry_count > 1 else ''
    return f'{carry_count} skin{plural} carried! Next hole worth ${total_value:g}'


def format_skin_count(count: int) -> str:
    return f'{count} skin{"" if count == 1 else "s"}'
