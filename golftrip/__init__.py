from .models import (
    EngineResult,
    FormatKind,
    FormatRound,
    HoleSpec,
    Match,
    MatchState,
    MatchStatus,
    PlayerInfo,
    Press,
    ResultStatus,
    RoundSnapshot,
    ScoreEntry,
    Side,
    WolfDecision,
)
from .handicap import get_strokes_for_hole, calculate_net_score, calculate_playing_handicap
from .hole_results import build_score_map, compute_hole_results
from .match_play import (
    compute_match_state,
    compute_round_match_state,
    add_press,
    update_match_stake,
    calculate_exposure,
    get_hole_match_info,
    match_money_results,
)
from .formats import compute_format_standings
from .junk import JunkClaim, calculate_junk_settlement
from .leaderboard import aggregate_player_totals, build_leaderboard
from .settlement import net_settlements, build_money_totals
from .competition import compute_cup_totals
from .narrative import NarrativeEvent, generate_narratives
from .round_scorer import RoundScorer
from .echo_guard import LocalWriteGuard
from .snapshot import load_round, load_round_snapshot

__all__ = [
    # Models
    'EngineResult',
    'FormatKind',
    'FormatRound',
    'HoleSpec',
    'Match',
    'MatchState',
    'MatchStatus',
    'PlayerInfo',
    'Press',
    'ResultStatus',
    'RoundSnapshot',
    'ScoreEntry',
    'Side',
    'WolfDecision',
    # Handicaps and holes
    'get_strokes_for_hole',
    'calculate_net_score',
    'calculate_playing_handicap',
    'build_score_map',
    'compute_hole_results',
    # Match play
    'compute_match_state',
    'compute_round_match_state',
    'add_press',
    'update_match_stake',
    'calculate_exposure',
    'get_hole_match_info',
    'match_money_results',
    'NarrativeEvent',
    'generate_narratives',
    # Formats and side bets
    'compute_format_standings',
    'JunkClaim',
    'calculate_junk_settlement',
    # Leaderboard, money and the Cup
    'aggregate_player_totals',
    'build_leaderboard',
    'net_settlements',
    'build_money_totals',
    'compute_cup_totals',
    # Round façade
    'RoundScorer',
    'LocalWriteGuard',
    # JSON boundary
    'load_round',
    'load_round_snapshot',
]
