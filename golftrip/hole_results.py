"""Per-hole reducers: net scores, best-ball and two-sided hole outcomes."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .constants import MAX_GROSS, MIN_GROSS
from .handicap import get_strokes_for_hole
from .models import (
    HoleResult,
    HoleSpec,
    PlayerHoleScore,
    PlayerInfo,
    RoundSnapshot,
    ScoreEntry,
    ScoreMap,
    Side,
)

logger = logging.getLogger('golftrip.hole_results')


def build_score_map(entries: Iterable[ScoreEntry]) -> ScoreMap:
    """
    Build a player -> hole -> gross map from raw score entries.

    A repeated (player, hole) cell keeps the last entry seen.
    """
    score_map: ScoreMap = {}
    for entry in entries:
        player_scores = score_map.setdefault(entry.player_id, {})
        if entry.hole_number in player_scores:
            logger.debug(
                f'Overwriting score for {entry.player_id} hole {entry.hole_number}: '
                f'{player_scores[entry.hole_number]} -> {entry.gross}'
            )
        player_scores[entry.hole_number] = entry.gross
    return score_map


def build_handicap_map(players: Iterable[PlayerInfo]) -> Dict[str, float]:
    """Map player_id -> playing handicap."""
    return {p.id: p.playing_handicap for p in players}


def lookup_player(snapshot: RoundSnapshot, player_id: str) -> PlayerInfo:
    """Find a player in the snapshot, falling back to a scratch placeholder."""
    player = snapshot.player(player_id)
    if player is None:
        logger.warning(f'Player {player_id} not in round {snapshot.round_id}, treating as scratch')
        return PlayerInfo(id=player_id, name='Unknown')
    return player


def player_hole_score(player: PlayerInfo, hole: HoleSpec, scores: ScoreMap) -> PlayerHoleScore:
    """
    Gross, strokes received, net and net-to-par for one player on one hole.

    Args:
        player: Player with playing handicap
        hole: Hole spec (par and stroke index)
        scores: Score map for the round

    Returns:
        PlayerHoleScore with gross/net/to_par None if the hole is unscored

    Raises:
        ValueError: If a recorded gross score is outside 1-20
    """
    gross = scores.get(player.id, {}).get(hole.number)
    strokes = get_strokes_for_hole(player.playing_handicap, hole.stroke_index)

    if gross is None:
        return PlayerHoleScore(
            player_id=player.id,
            player_name=player.name,
            gross=None,
            strokes=strokes,
            net=None,
            to_par=None,
        )

    if not MIN_GROSS <= gross <= MAX_GROSS:
        raise ValueError(
            f'Gross score for {player.id} on hole {hole.number} must be '
            f'{MIN_GROSS}-{MAX_GROSS}, got {gross}'
        )

    net = gross - strokes
    return PlayerHoleScore(
        player_id=player.id,
        player_name=player.name,
        gross=gross,
        strokes=strokes,
        net=net,
        to_par=net - hole.par,
    )


def best_ball_net(player_scores: Sequence[PlayerHoleScore]) -> Optional[int]:
    """Lowest net on a side, or None unless every player on the side has scored."""
    if not player_scores:
        return None
    nets = [ps.net for ps in player_scores]
    if any(n is None for n in nets):
        return None
    return min(nets)  # type: ignore[type-var]


def decide_hole(side_a_net: Optional[int], side_b_net: Optional[int]) -> Optional[Side]:
    """Lower net wins the hole; None while either side is incomplete."""
    if side_a_net is None or side_b_net is None:
        return None
    if side_a_net < side_b_net:
        return Side.TEAM_A
    if side_b_net < side_a_net:
        return Side.TEAM_B
    return Side.HALVED


def lead_delta(winner: Optional[Side]) -> int:
    """+1 for side A, -1 for side B, 0 otherwise."""
    if winner == Side.TEAM_A:
        return 1
    if winner == Side.TEAM_B:
        return -1
    return 0


def is_hole_complete(snapshot: RoundSnapshot, hole_number: int, player_ids: Iterable[str]) -> bool:
    """True when every listed player has a gross score for the hole."""
    return all(snapshot.gross(pid, hole_number) is not None for pid in player_ids)


def compute_hole_results(
    side_a: Sequence[str],
    side_b: Sequence[str],
    snapshot: RoundSnapshot,
) -> List[HoleResult]:
    """
    Compute two-sided hole results for every hole of the round.

    Each side's score is its best-ball net (the single player's net for 1v1).
    Holes not yet scored by every required player have winner None and do
    not move the cumulative lead.

    Args:
        side_a: Player ids on side A
        side_b: Player ids on side B
        snapshot: Round holes, players and scores

    Returns:
        HoleResult per hole in hole-number order
    """
    side_a_players = [lookup_player(snapshot, pid) for pid in side_a]
    side_b_players = [lookup_player(snapshot, pid) for pid in side_b]

    results: List[HoleResult] = []
    cumulative_lead = 0

    for hole in snapshot.sorted_holes():
        a_scores = [player_hole_score(p, hole, snapshot.scores) for p in side_a_players]
        b_scores = [player_hole_score(p, hole, snapshot.scores) for p in side_b_players]

        side_a_net = best_ball_net(a_scores)
        side_b_net = best_ball_net(b_scores)
        winner = decide_hole(side_a_net, side_b_net)
        cumulative_lead += lead_delta(winner)

        results.append(
            HoleResult(
                hole_number=hole.number,
                par=hole.par,
                side_a_net=side_a_net,
                side_b_net=side_b_net,
                winner=winner,
                cumulative_lead=cumulative_lead,
                player_scores=a_scores + b_scores,
            )
        )

    return results
