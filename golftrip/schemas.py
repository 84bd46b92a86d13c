"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, Field, field_validator, model_validator


class Hole(BaseModel):
    """One hole of the tee being played."""

    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=5)
    stroke_index: int = Field(..., ge=1, le=18)
    yardage: int | None = Field(None, ge=0)

    class Config:
        extra = 'forbid'


class Player(BaseModel):
    """Player in a round."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    playing_handicap: float = Field(default=0, ge=-10, le=54)
    team: int | None = Field(None, ge=1, le=2)

    class Config:
        extra = 'forbid'


class Score(BaseModel):
    """A single raw score cell."""

    player_id: str = Field(..., min_length=1)
    hole_number: int = Field(..., ge=1, le=18)
    gross: int | None = Field(None, ge=1, le=20)

    class Config:
        extra = 'forbid'


class Press(BaseModel):
    """Press on a match."""

    id: str = Field(..., min_length=1)
    starting_hole: int = Field(..., ge=1, le=18)
    ending_hole: int | None = Field(None, ge=1, le=18)
    stake_per_man: float = Field(..., ge=0)
    status: str = Field(default='in_progress', pattern=r'^(not_started|in_progress|dormie|completed)$')
    winner: str | None = Field(None, pattern=r'^(team_a|team_b|halved)$')
    final_result: str | None = None

    class Config:
        extra = 'forbid'


class Match(BaseModel):
    """Match-play configuration for a round."""

    id: str = Field(..., min_length=1)
    match_type: str = Field(..., pattern=r'^(1v1|2v2)$')
    stake_per_man: float = Field(..., ge=0)
    team_a: list[str] = Field(..., min_length=1, max_length=2)
    team_b: list[str] = Field(..., min_length=1, max_length=2)
    status: str = Field(default='not_started', pattern=r'^(not_started|in_progress|dormie|completed)$')
    winner: str | None = Field(None, pattern=r'^(team_a|team_b|halved)$')
    final_result: str | None = None
    presses: list[Press] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


class WolfDecision(BaseModel):
    """The wolf's pick on one hole."""

    hole_number: int = Field(..., ge=1, le=18)
    wolf_id: str
    partner_id: str | None = None

    class Config:
        extra = 'forbid'


class FormatRound(BaseModel):
    """Alternate format configuration for a round."""

    kind: str = Field(..., pattern=r'^(points_hilo|stableford|nassau|skins|wolf|scramble)$')
    team_assignments: dict[str, int] = Field(default_factory=dict)
    stake_per_man: float = Field(default=0, ge=0)
    auto_press: bool = False
    auto_press_threshold: int | None = Field(default=None, ge=1, le=9)
    skin_value: float | None = Field(default=None, ge=0)
    carryover: bool = True
    tee_order: list[str] = Field(default_factory=list)
    wolf_decisions: list[WolfDecision] = Field(default_factory=list)
    lone_wolf_multiplier: float | None = Field(default=None, ge=1)
    stableford_combine: str | None = Field(default=None, pattern=r'^(best_ball|aggregate)$')
    captains: dict[int, str] = Field(default_factory=dict)

    @field_validator('team_assignments')
    @classmethod
    def validate_team_numbers(cls, v):
        """Ensure every player is on team 1 or 2."""
        for player_id, team in v.items():
            if team not in (1, 2):
                raise ValueError(f'Invalid team {team} for player {player_id}')
        return v

    class Config:
        extra = 'forbid'


class RoundFile(BaseModel):
    """Complete round snapshot file structure."""

    round_id: str = Field(..., min_length=1)
    name: str = ''
    holes: list[Hole] = Field(..., min_length=1, max_length=18)
    players: list[Player] = Field(default_factory=list)
    scores: list[Score] = Field(default_factory=list)
    match: Match | None = None
    format: FormatRound | None = None

    @field_validator('holes')
    @classmethod
    def validate_holes(cls, v):
        """Ensure hole numbers are unique and stroke indices form a permutation."""
        numbers = [h.number for h in v]
        if len(set(numbers)) != len(numbers):
            raise ValueError('Duplicate hole numbers')
        indices = sorted(h.stroke_index for h in v)
        if len(v) == 18 and indices != list(range(1, 19)):
            raise ValueError('Stroke indices must be a permutation of 1-18')
        if len(set(indices)) != len(indices):
            raise ValueError('Duplicate stroke indices')
        return v

    @model_validator(mode='after')
    def validate_player_refs(self):
        """Ensure scores reference known players."""
        if self.players:
            known = {p.id for p in self.players}
            unknown = sorted({s.player_id for s in self.scores} - known)
            if unknown:
                raise ValueError(f'Scores for unknown players: {", ".join(unknown)}')
        return self

    class Config:
        extra = 'forbid'


class EngineConfig(BaseModel):
    """Engine configuration settings."""

    max_gross: int = Field(default=20, ge=1, le=30)
    echo_window_seconds: float = Field(default=2.0, ge=0)
    default_skin_value: float = Field(default=5.0, ge=0)
    auto_press_threshold: int = Field(default=2, ge=1, le=9)
    lone_wolf_multiplier: float = Field(default=2, ge=1)
    stableford_combine: str = Field(default='best_ball', pattern=r'^(best_ball|aggregate)$')
    junk_values: dict[str, float] = Field(default_factory=dict)

    @field_validator('junk_values')
    @classmethod
    def validate_junk_types(cls, v):
        """Ensure junk types are known."""
        valid_types = {'greenie', 'sandy', 'barkie', 'polie', 'snake', 'birdie', 'eagle'}
        for junk_type, value in v.items():
            if junk_type not in valid_types:
                raise ValueError(f'Invalid junk type: {junk_type}')
            if value < 0:
                raise ValueError(f'Invalid value for {junk_type}: {value}')
        return v

    class Config:
        extra = 'forbid'
