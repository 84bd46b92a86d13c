"""Data models for the golf-trip scoring engine.

Configuration inputs (holes, players, matches, presses, format rounds) are
frozen; everything else is derived and rebuilt on every query.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .constants import DEFAULT_TOTAL_HOLES, MATCH_TYPE_PLAYERS

# player_id -> hole_number -> gross strokes (None = not yet scored)
ScoreMap = Dict[str, Dict[int, Optional[int]]]


class Side(str, Enum):
    """Winner of a hole, match or press."""
    TEAM_A = 'team_a'
    TEAM_B = 'team_b'
    HALVED = 'halved'


class MatchStatus(str, Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    DORMIE = 'dormie'
    COMPLETED = 'completed'


class FormatKind(str, Enum):
    """Closed set of alternate round formats."""
    POINTS_HILO = 'points_hilo'
    STABLEFORD = 'stableford'
    NASSAU = 'nassau'
    SKINS = 'skins'
    WOLF = 'wolf'
    SCRAMBLE = 'scramble'


class ResultStatus(str, Enum):
    OK = 'ok'
    PARTIAL = 'partial'
    NOT_CONFIGURED = 'not_configured'
    INVALID_CONFIGURATION = 'invalid_configuration'


# ============================================================================
# CONFIGURATION INPUTS
# ============================================================================

@dataclass(frozen=True)
class HoleSpec:
    """One hole of the tee being played."""
    number: int
    par: int
    stroke_index: int
    yardage: Optional[int] = None


@dataclass(frozen=True)
class PlayerInfo:
    """A player as the engine sees them."""
    id: str
    name: str
    playing_handicap: float = 0  # negative = plus handicap
    team: Optional[int] = None  # 1 or 2 for team formats


@dataclass(frozen=True)
class ScoreEntry:
    """A single raw score cell as written by the scoring device."""
    round_id: str
    player_id: str
    hole_number: int
    gross: Optional[int]


@dataclass(frozen=True)
class RoundSnapshot:
    """Immutable input handed to every reducer for one round."""
    round_id: str
    holes: List[HoleSpec]
    players: List[PlayerInfo]
    scores: ScoreMap = field(default_factory=dict)
    name: str = ''

    @property
    def total_holes(self) -> int:
        return len(self.holes) or DEFAULT_TOTAL_HOLES

    @property
    def first_hole(self) -> int:
        return min((h.number for h in self.holes), default=1)

    @property
    def last_hole(self) -> int:
        return max((h.number for h in self.holes), default=DEFAULT_TOTAL_HOLES)

    @property
    def par(self) -> int:
        return sum(h.par for h in self.holes)

    def sorted_holes(self) -> List[HoleSpec]:
        return sorted(self.holes, key=lambda h: h.number)

    def player(self, player_id: str) -> Optional[PlayerInfo]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def gross(self, player_id: str, hole_number: int) -> Optional[int]:
        return self.scores.get(player_id, {}).get(hole_number)

    def team_players(self, team: int) -> List[PlayerInfo]:
        return [p for p in self.players if p.team == team]


@dataclass(frozen=True)
class Press:
    """A side bet nested inside a match, scoped to holes from starting_hole."""
    id: str
    match_id: str
    starting_hole: int
    stake_per_man: float  # frozen at creation
    ending_hole: Optional[int] = None  # None = last hole of the round
    status: MatchStatus = MatchStatus.IN_PROGRESS
    winner: Optional[Side] = None
    final_result: Optional[str] = None


@dataclass(frozen=True)
class Match:
    """1v1 or 2v2 best-ball net match configuration."""
    id: str
    round_id: str
    match_type: str  # '1v1' or '2v2'
    stake_per_man: float
    team_a: Tuple[str, ...]
    team_b: Tuple[str, ...]
    status: MatchStatus = MatchStatus.NOT_STARTED  # last persisted status
    winner: Optional[Side] = None
    final_result: Optional[str] = None

    @property
    def players_per_side(self) -> int:
        return MATCH_TYPE_PLAYERS.get(self.match_type, len(self.team_a))


@dataclass(frozen=True)
class WolfDecision:
    """The wolf's pick for one hole (partner_id None = lone wolf)."""
    hole_number: int
    wolf_id: str
    partner_id: Optional[str] = None

    @property
    def is_lone_wolf(self) -> bool:
        return self.partner_id is None


@dataclass(frozen=True)
class FormatRound:
    """Format configuration for one round."""
    kind: FormatKind
    round_id: str
    team_assignments: Dict[str, int] = field(default_factory=dict)  # player_id -> 1 | 2
    stake_per_man: float = 0.0
    # Nassau
    auto_press: bool = False
    auto_press_threshold: int = 2
    # Skins
    skin_value: float = 0.0
    carryover: bool = True
    # Wolf
    tee_order: Tuple[str, ...] = ()
    wolf_decisions: Tuple[WolfDecision, ...] = ()
    lone_wolf_multiplier: float = 2
    # Stableford: 'best_ball' or 'aggregate'
    stableford_combine: str = 'best_ball'
    # Scramble: team number -> captain player_id holding the team score
    captains: Dict[int, str] = field(default_factory=dict)

    def team_ids(self, team: int) -> List[str]:
        return [pid for pid, t in self.team_assignments.items() if t == team]


# ============================================================================
# DERIVED VIEWS
# ============================================================================

@dataclass
class PlayerHoleScore:
    """A player's gross/net for one hole; None fields when unscored."""
    player_id: str
    player_name: str
    gross: Optional[int]
    strokes: int
    net: Optional[int]
    to_par: Optional[int]


@dataclass
class HoleResult:
    """Two-sided outcome of one hole; winner is None until the hole is complete."""
    hole_number: int
    par: int
    side_a_net: Optional[int]
    side_b_net: Optional[int]
    winner: Optional[Side]
    cumulative_lead: int  # positive = side A up
    player_scores: List[PlayerHoleScore] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.winner is not None


@dataclass
class SegmentState:
    """Replay of the match state machine over a contiguous run of holes."""
    first_hole: int
    last_hole: int
    lead: int = 0
    holes_played: int = 0
    holes_remaining: int = 0
    status: MatchStatus = MatchStatus.NOT_STARTED
    winner: Optional[Side] = None
    final_result: Optional[str] = None
    is_dormie: bool = False
    is_closed: bool = False
    closed_on_hole: Optional[int] = None

    @property
    def total_holes(self) -> int:
        return self.last_hole - self.first_hole + 1

    @property
    def completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED


@dataclass
class PressState:
    id: str
    press_number: int
    starting_hole: int
    ending_hole: int
    stake_per_man: float
    status: MatchStatus
    winner: Optional[Side]
    final_result: Optional[str]
    lead: int
    holes_played: int
    holes_remaining: int
    is_dormie: bool

    @property
    def is_open(self) -> bool:
        return self.status != MatchStatus.COMPLETED


@dataclass
class MatchState:
    """Full derived state of a match, its hole results and presses."""
    match_id: str
    round_id: str
    match_type: str
    stake_per_man: float
    players_per_side: int
    team_a: Tuple[str, ...]
    team_b: Tuple[str, ...]
    status: MatchStatus
    winner: Optional[Side]
    final_result: Optional[str]
    lead: int
    holes_played: int
    holes_remaining: int
    is_dormie: bool
    is_closed: bool
    closed_on_hole: Optional[int] = None
    total_holes: int = DEFAULT_TOTAL_HOLES
    hole_results: List[HoleResult] = field(default_factory=list)
    presses: List[PressState] = field(default_factory=list)
    first_hole: int = 1

    @property
    def last_hole(self) -> int:
        return self.first_hole + self.total_holes - 1

    @property
    def completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED


@dataclass
class PressExposure:
    press_number: int
    exposure: float


@dataclass
class ExposureInfo:
    total_exposure: float
    main_match_exposure: float
    press_exposures: List[PressExposure] = field(default_factory=list)
    current_position: float = 0.0  # team A perspective, + winning


@dataclass
class HoleMatchInfo:
    """What is on the line for a single hole."""
    hole_number: int
    total_at_stake: float
    main_match_stake: float
    press_stakes: Dict[int, float] = field(default_factory=dict)  # press_number -> stake
    lead: int = 0
    status_label: str = ''
    is_dormie: bool = False
    is_closed: bool = False


@dataclass
class LeaderboardEntry:
    """Per-player totals across one or more rounds."""
    player_id: str
    player_name: str
    gross_total: int = 0
    net_total: int = 0
    holes_played: int = 0
    thru: int = 0
    score_to_par: int = 0
    playing_handicap: Optional[float] = None


@dataclass
class RankedEntry:
    position: int
    entry: LeaderboardEntry
    tied: bool = False


@dataclass
class MoneyLine:
    """One signed money movement for a player (+ won, - lost)."""
    player_id: str
    amount: float
    description: str
    round_name: str = ''


@dataclass
class PlayerMoneyTotal:
    player_id: str
    player_name: str
    total_winnings: float = 0.0
    results: List[MoneyLine] = field(default_factory=list)


@dataclass(frozen=True)
class SettlementTransaction:
    payer: str
    payee: str
    amount: float


@dataclass
class EngineResult:
    """Explicit result value returned at the round boundary."""
    status: ResultStatus
    value: Any = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (ResultStatus.OK, ResultStatus.PARTIAL)
