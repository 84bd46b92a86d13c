"""Shared fixtures for golftrip tests."""

import pytest

from golftrip.config import clear_config_cache
from golftrip.models import HoleSpec, PlayerInfo, RoundSnapshot

# Par 72: 36 out, 36 in
PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 5, 4]


def make_holes(count: int = 18) -> list[HoleSpec]:
    """Holes 1..count with stroke index equal to the hole number."""
    return [HoleSpec(number=n, par=PARS[n - 1], stroke_index=n) for n in range(1, count + 1)]


@pytest.fixture(autouse=True)
def fresh_config():
    """Reload engine config for every test."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def holes():
    """An 18-hole par 72 tee with stroke index 1-18 in hole order."""
    return make_holes()


@pytest.fixture
def make_snapshot():
    """
    Factory for round snapshots.

    players: list of (id, handicap) or (id, handicap, team)
    scores: player_id -> list of gross scores from hole 1 (None = unscored)
    """
    def _make(players, scores=None, hole_count=18, round_id='r1', name='Round 1'):
        infos = []
        for spec in players:
            pid, handicap, *rest = spec
            infos.append(
                PlayerInfo(id=pid, name=pid.title(), playing_handicap=handicap, team=rest[0] if rest else None)
            )
        score_map = {
            pid: {hole: gross for hole, gross in enumerate(grosses, start=1)}
            for pid, grosses in (scores or {}).items()
        }
        return RoundSnapshot(
            round_id=round_id,
            holes=make_holes(hole_count),
            players=infos,
            scores=score_map,
            name=name,
        )

    return _make


@pytest.fixture
def scenario_b_scores():
    """
    1v1 scratch scores: A wins 1-3, B wins 4, 5-16 halved, A wins 17.

    Hole 18 is unscored.
    """
    alice = [4, 4, 4, 5] + [4] * 12 + [4]
    bob = [5, 5, 5, 4] + [4] * 12 + [5]
    return {'alice': alice, 'bob': bob}
