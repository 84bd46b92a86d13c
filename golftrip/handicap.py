"""Handicap stroke allocation and related USGA/WHS formulas."""

import math
from typing import Optional, Sequence

from .constants import FORMAT_ALLOWANCES, SCORE_NAMES

HOLES_PER_ALLOCATION = 18


def round_handicap(value: float) -> int:
    """Round a one-decimal handicap half-up (12.5 -> 13, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def get_strokes_for_hole(playing_handicap: float, stroke_index: int) -> int:
    """
    Number of handicap strokes a player receives on a hole.

    Standard handicaps get floor(H / 18) strokes on every hole plus one extra
    on the H mod 18 hardest holes (lowest stroke index). Plus handicaps give
    strokes back starting from the easiest hole: a +2 gives one back on
    stroke index 18 and 17, returned here as -1.

    Args:
        playing_handicap: Player's playing handicap (negative = plus)
        stroke_index: Hole difficulty ranking, 1 (hardest) to 18

    Returns:
        Strokes received on the hole (negative for strokes given back)

    Raises:
        ValueError: If stroke_index is outside 1-18
    """
    if not 1 <= stroke_index <= HOLES_PER_ALLOCATION:
        raise ValueError(f'Stroke index must be 1-18, got {stroke_index}')

    handicap = round_handicap(playing_handicap)

    if handicap >= 0:
        base_strokes, extra_strokes = divmod(handicap, HOLES_PER_ALLOCATION)
        return base_strokes + (1 if stroke_index <= extra_strokes else 0)

    # Plus handicap: SI 18 -> 1st hole to give back, SI 17 -> 2nd, ...
    base_strokes, extra_strokes = divmod(-handicap, HOLES_PER_ALLOCATION)
    gives_back_on = HOLES_PER_ALLOCATION + 1 - stroke_index
    return -(base_strokes + (1 if gives_back_on <= extra_strokes else 0))


def calculate_net_score(gross: int, playing_handicap: float, stroke_index: int) -> int:
    """Gross strokes minus strokes received on the hole."""
    return gross - get_strokes_for_hole(playing_handicap, stroke_index)


def calculate_round_net_total(
    gross_scores: Sequence[Optional[int]],
    playing_handicap: float,
    stroke_indices: Sequence[int],
) -> int:
    """
    Total net score for the holes that have been scored.

    Args:
        gross_scores: Gross score per hole in hole order (None = not scored)
        playing_handicap: Player's playing handicap
        stroke_indices: Stroke index per hole in the same order

    Returns:
        Sum of net scores over scored holes
    """
    net_total = 0
    for i, gross in enumerate(gross_scores):
        if gross is None:
            continue
        stroke_index = stroke_indices[i] if i < len(stroke_indices) else i + 1
        net_total += calculate_net_score(gross, playing_handicap, stroke_index)
    return net_total


def calculate_course_handicap(
    handicap_index: float, slope: float, course_rating: float, par: int
) -> int:
    """
    Course handicap from a handicap index.

    Formula: Index * (Slope / 113) + (Course Rating - Par), rounded.
    """
    course_handicap = handicap_index * (slope / 113) + (course_rating - par)
    return round_handicap(course_handicap)


def calculate_playing_handicap(
    course_handicap: float,
    format: str = 'stroke_play',
    allowance: int = 100,
) -> int:
    """
    Playing handicap after the format allowance.

    An explicit allowance other than 100 overrides the format default
    (stroke play 95%, best ball 85%, scramble 35%, match play 100%).
    """
    effective_allowance = allowance if allowance != 100 else FORMAT_ALLOWANCES.get(format, 100)
    return round_handicap(course_handicap * (effective_allowance / 100))


def calculate_score_delta(score: int, par: int) -> int:
    """Score relative to par (positive = over)."""
    return score - par


def format_score_delta(delta: int) -> str:
    """Format a to-par value: 'E', '+5', '-2'."""
    if delta == 0:
        return 'E'
    if delta > 0:
        return f'+{delta}'
    return str(delta)


def get_score_name(gross: int, par: int) -> str:
    """Name of a hole score ('Birdie', 'Double Bogey', '4 over par')."""
    delta = gross - par
    if delta in SCORE_NAMES:
        return SCORE_NAMES[delta]
    if delta < 0:
        return f'{abs(delta)} under par'
    return f'{delta} over par'
