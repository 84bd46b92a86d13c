"""Junk side bets: greenies, sandies, snake and friends.

Payout model:
- Each claim earns its value, paid by every other player in equal shares
- Snake: whoever 3-putted last holds the snake and pays each other player
- Birdies and eagles can be detected from gross scores
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .config import get_junk_values
from .constants import JUNK_TYPES
from .models import MoneyLine, RoundSnapshot

logger = logging.getLogger('golftrip.junk')

SNAKE = 'snake'


@dataclass(frozen=True)
class JunkClaim:
    """One junk event claimed by a player on a hole."""
    player_id: str
    hole_number: int
    junk_type: str
    value: float


@dataclass
class SnakeState:
    holder_id: Optional[str]
    transfers: List[JunkClaim] = field(default_factory=list)
    value_per_player: float = 0.0


@dataclass
class PlayerJunkSummary:
    player_id: str
    claim_counts: Dict[str, int] = field(default_factory=dict)
    earnings: float = 0.0
    paid_out: float = 0.0
    snake_penalty: float = 0.0

    @property
    def net(self) -> float:
        return self.earnings - self.paid_out + self.snake_penalty


def is_junk_relevant_for_hole(junk_type: str, par: int) -> bool:
    """Greenies only happen on par 3s; everything else can happen anywhere."""
    if junk_type == 'greenie':
        return par == 3
    return True


def check_auto_junk(gross: Optional[int], par: int) -> Optional[str]:
    """'eagle', 'birdie' or None for a gross score."""
    if gross is None:
        return None
    diff = gross - par
    if diff <= -2:
        return 'eagle'
    if diff == -1:
        return 'birdie'
    return None


def get_enabled_junk_types(enabled: Mapping[str, float], par: int) -> List[str]:
    """Enabled junk types (type -> value) that apply to a hole of this par."""
    return [junk_type for junk_type in enabled if is_junk_relevant_for_hole(junk_type, par)]


def auto_junk_claims(
    snapshot: RoundSnapshot, enabled: Optional[Mapping[str, float]] = None
) -> List[JunkClaim]:
    """
    Birdie/eagle claims detected from the round's gross scores.

    Only types present in `enabled` are produced; None uses the configured
    junk values.
    """
    if enabled is None:
        enabled = get_junk_values()
    claims = []
    for hole in snapshot.sorted_holes():
        for player in snapshot.players:
            junk_type = check_auto_junk(snapshot.gross(player.id, hole.number), hole.par)
            if junk_type and junk_type in enabled:
                claims.append(JunkClaim(player.id, hole.number, junk_type, enabled[junk_type]))
    return claims


def compute_snake_state(snake_claims: Iterable[JunkClaim], value_per_player: float) -> SnakeState:
    """Replay snake transfers in hole order; the last 3-putter holds it."""
    transfers = sorted(snake_claims, key=lambda c: c.hole_number)
    return SnakeState(
        holder_id=transfers[-1].player_id if transfers else None,
        transfers=transfers,
        value_per_player=value_per_player,
    )


def summarize_junk(
    claims: Sequence[JunkClaim], player_ids: Sequence[str], snake_value: Optional[float] = None
) -> Dict[str, PlayerJunkSummary]:
    """
    Per-player junk summaries for one round.

    Args:
        claims: All junk claims of the round, snake included
        player_ids: Players in the junk game
        snake_value: Snake value per player; None disables the snake

    Returns:
        player_id -> PlayerJunkSummary; nets sum to zero
    """
    summaries = {pid: PlayerJunkSummary(pid) for pid in player_ids}
    others = len(player_ids) - 1

    for claim in claims:
        if claim.junk_type == SNAKE:
            continue
        summary = summaries.get(claim.player_id)
        if summary is None:
            logger.warning(f'Junk claim by {claim.player_id} who is not in the game, ignoring')
            continue
        if others <= 0:
            continue
        summary.claim_counts[claim.junk_type] = summary.claim_counts.get(claim.junk_type, 0) + 1
        summary.earnings += claim.value
        share = claim.value / others
        for pid, other in summaries.items():
            if pid != claim.player_id:
                other.paid_out += share

    if snake_value is not None and others > 0:
        snake = compute_snake_state([c for c in claims if c.junk_type == SNAKE], snake_value)
        if snake.holder_id in summaries:
            summaries[snake.holder_id].snake_penalty -= snake_value * others
            for pid, other in summaries.items():
                if pid != snake.holder_id:
                    other.snake_penalty += snake_value

    return summaries


def calculate_junk_settlement(
    claims: Sequence[JunkClaim],
    player_ids: Sequence[str],
    snake_value: Optional[float] = None,
    round_name: str = '',
) -> List[MoneyLine]:
    """Zero-sum junk money lines, one per player."""
    summaries = summarize_junk(claims, player_ids, snake_value)
    lines = []
    for pid in player_ids:
        summary = summaries[pid]
        counts = ', '.join(
            f'{count} {JUNK_TYPES.get(junk_type, (junk_type,))[0]}'
            for junk_type, count in sorted(summary.claim_counts.items())
        )
        description = f'Junk: {counts}' if counts else 'Junk'
        if summary.snake_penalty < 0:
            description += ' (snake)'
        lines.append(MoneyLine(pid, summary.net, description, round_name))
    return lines


def format_junk_value(value: float) -> str:
    return f'${value:g}'
