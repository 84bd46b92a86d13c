"""Trip leaderboard: per-player totals across rounds and competition ranking."""

from typing import Dict, List, Sequence

from .hole_results import player_hole_score
from .models import LeaderboardEntry, RankedEntry, RoundSnapshot

LEADERBOARD_MODES = ('net', 'gross')


def aggregate_player_totals(rounds: Sequence[RoundSnapshot]) -> List[LeaderboardEntry]:
    """
    Sum each player's scored holes across rounds.

    Unscored holes are skipped. score_to_par compares net strokes against the
    par of the holes the player actually scored, so a player part way through
    a round is measured fairly against one who has finished.

    Args:
        rounds: Round snapshots in play order

    Returns:
        One LeaderboardEntry per player seen in any round, in first-seen order
    """
    entries: Dict[str, LeaderboardEntry] = {}
    par_played: Dict[str, int] = {}

    for snapshot in rounds:
        holes = snapshot.sorted_holes()
        for player in snapshot.players:
            entry = entries.get(player.id)
            if entry is None:
                entry = LeaderboardEntry(player_id=player.id, player_name=player.name)
                entries[player.id] = entry
                par_played[player.id] = 0
            # Latest round wins
            entry.playing_handicap = player.playing_handicap

            for hole in holes:
                score = player_hole_score(player, hole, snapshot.scores)
                if score.gross is None:
                    continue
                entry.gross_total += score.gross
                entry.net_total += score.net  # type: ignore[operator]
                entry.holes_played += 1
                entry.thru = max(entry.thru, hole.number)
                par_played[player.id] += hole.par

    for pid, entry in entries.items():
        entry.score_to_par = entry.net_total - par_played[pid]

    return list(entries.values())


def build_leaderboard(entries: Sequence[LeaderboardEntry], mode: str = 'net') -> List[RankedEntry]:
    """
    Rank entries by total, lowest first, with skip-style ties.

    Equal totals share a position and the next distinct total takes its
    1-based index: 68, 68, 70 -> 1, 1, 3. The sort is stable, so tied
    players keep their input order.

    Args:
        entries: Player totals
        mode: 'net' or 'gross'

    Returns:
        RankedEntry list in ranking order
    """
    if mode not in LEADERBOARD_MODES:
        raise ValueError(f"Unknown leaderboard mode '{mode}'")

    attr = 'net_total' if mode == 'net' else 'gross_total'
    ordered = sorted(entries, key=lambda e: getattr(e, attr))
    totals = [getattr(e, attr) for e in ordered]

    ranked: List[RankedEntry] = []
    position = 0
    for i, entry in enumerate(ordered):
        if i == 0 or totals[i] != totals[i - 1]:
            position = i + 1
        tied = totals.count(totals[i]) > 1
        ranked.append(RankedEntry(position=position, entry=entry, tied=tied))

    return ranked


def format_position(ranked: RankedEntry) -> str:
    """'T3' for a shared position, '3' otherwise."""
    return f'T{ranked.position}' if ranked.tied else str(ranked.position)
