"""Constants and lookup tables for the golf-trip scoring engine."""

# Round shape
DEFAULT_TOTAL_HOLES = 18
FRONT_NINE_LAST_HOLE = 9
MIN_GROSS = 1
MAX_GROSS = 20
MIN_PAR = 3
MAX_PAR = 5

# Match labels
ALL_SQUARE = 'A/S'
UP = 'UP'
DOWN = 'DN'

# Match types -> players per side
MATCH_TYPE_PLAYERS = {
    '1v1': 1,
    '2v2': 2,
}

# Stableford points by net score relative to par.
# Albatross or better and double bogey or worse are clamped to the ends.
STABLEFORD_POINTS = {
    -3: 8,   # Albatross or better
    -2: 5,   # Eagle
    -1: 3,   # Birdie
    0: 1,    # Par
    1: 0,    # Bogey
    2: -1,   # Double bogey or worse
}

# Points Hi/Lo: 1 point for low vs low, 1 point for high vs high
POINTS_HILO_PER_HOLE = 2
POINTS_HILO_WIN = 1
POINTS_HILO_TIE = 0.5

# Handicap allowances (percent) by format
FORMAT_ALLOWANCES = {
    'stroke_play': 95,
    'best_ball': 85,
    'scramble': 35,
    'match_play': 100,
}

# Score names by gross relative to par
SCORE_NAMES = {
    -3: 'Albatross',
    -2: 'Eagle',
    -1: 'Birdie',
    0: 'Par',
    1: 'Bogey',
    2: 'Double Bogey',
    3: 'Triple Bogey',
}

# Nassau segments: (segment, label)
NASSAU_SEGMENTS = [
    ('front', 'Front 9'),
    ('back', 'Back 9'),
    ('overall', 'Overall'),
]

# Wolf is played by exactly four players
WOLF_PLAYERS = 4

# Junk bet registry: type -> (label, description, self_reported, auto_detectable, default_value)
JUNK_TYPES = {
    'greenie': ('Greenie', 'Closest to pin on par 3 (must be on green)', False, False, 5),
    'sandy': ('Sandy', 'Par or better from a bunker', True, False, 5),
    'barkie': ('Barkie', 'Par or better after hitting a tree', True, False, 5),
    'polie': ('Polie', 'Sinking a long putt (20ft+)', True, False, 5),
    'snake': ('Snake', '3-putt penalty, passes to last player who 3-putts', True, False, 5),
    'birdie': ('Birdie', 'Score one under par', False, True, 5),
    'eagle': ('Eagle', 'Score two or more under par', False, True, 10),
}
DEFAULT_JUNK_VALUES = {junk_type: spec[4] for junk_type, spec in JUNK_TYPES.items()}

# Trip team labels for the team competition
CUP_TEAMS = ('A', 'B')
DEFAULT_COMPETITION_NAME = 'The Cup'

# Settlement amounts are rounded to cents
MONEY_PLACES = 2
