"""Unit tests for per-hole reducers."""

import pytest

from golftrip.hole_results import (
    best_ball_net,
    build_handicap_map,
    build_score_map,
    compute_hole_results,
    decide_hole,
    is_hole_complete,
    lookup_player,
    player_hole_score,
)
from golftrip.models import HoleSpec, PlayerInfo, ScoreEntry, Side


class TestScoreMap:
    """Tests for building the score map from raw entries."""

    def test_last_write_wins(self):
        """Test a repeated (player, hole) cell keeps the last entry."""
        entries = [
            ScoreEntry('r1', 'alice', 1, 5),
            ScoreEntry('r1', 'bob', 1, 4),
            ScoreEntry('r1', 'alice', 1, 4),
        ]
        assert build_score_map(entries) == {'alice': {1: 4}, 'bob': {1: 4}}

    def test_cleared_score_is_kept_as_none(self):
        """Test a later None entry clears the cell."""
        entries = [ScoreEntry('r1', 'alice', 2, 5), ScoreEntry('r1', 'alice', 2, None)]
        assert build_score_map(entries) == {'alice': {2: None}}

    def test_handicap_map(self):
        """Test player id -> playing handicap."""
        players = [PlayerInfo('alice', 'Alice', 9), PlayerInfo('bob', 'Bob', -1.5)]
        assert build_handicap_map(players) == {'alice': 9, 'bob': -1.5}


class TestPlayerHoleScore:
    """Tests for a single player's hole score."""

    def test_scored_hole(self):
        """Test gross, strokes, net and net to par."""
        player = PlayerInfo('alice', 'Alice', 18)
        hole = HoleSpec(number=1, par=4, stroke_index=1)
        score = player_hole_score(player, hole, {'alice': {1: 5}})
        assert score.gross == 5
        assert score.strokes == 1
        assert score.net == 4
        assert score.to_par == 0

    def test_unscored_hole(self):
        """Test an unscored hole has null gross/net but known strokes."""
        player = PlayerInfo('alice', 'Alice', 18)
        hole = HoleSpec(number=2, par=4, stroke_index=2)
        score = player_hole_score(player, hole, {})
        assert score.gross is None
        assert score.net is None
        assert score.to_par is None
        assert score.strokes == 1

    @pytest.mark.parametrize('gross', [0, 21])
    def test_gross_out_of_range_raises(self, gross):
        """Test gross outside 1-20 reaching a reducer is a programmer error."""
        player = PlayerInfo('alice', 'Alice', 0)
        hole = HoleSpec(number=1, par=4, stroke_index=1)
        with pytest.raises(ValueError):
            player_hole_score(player, hole, {'alice': {1: gross}})

    def test_unknown_player_treated_as_scratch(self, make_snapshot):
        """Test a player missing from the snapshot falls back to scratch."""
        snapshot = make_snapshot([('alice', 10)])
        player = lookup_player(snapshot, 'ghost')
        assert player.name == 'Unknown'
        assert player.playing_handicap == 0


class TestHoleDecision:
    """Tests for best-ball and hole winners."""

    def test_best_ball_requires_every_score(self):
        """Test best ball is None while a required player is unscored."""
        player = PlayerInfo('alice', 'Alice', 0)
        partner = PlayerInfo('carol', 'Carol', 0)
        hole = HoleSpec(number=1, par=4, stroke_index=1)
        scores = {'alice': {1: 4}}
        side = [player_hole_score(player, hole, scores), player_hole_score(partner, hole, scores)]
        assert best_ball_net(side) is None

    def test_best_ball_is_lowest_net(self):
        """Test best ball takes the lower net of the side."""
        player = PlayerInfo('alice', 'Alice', 0)
        partner = PlayerInfo('carol', 'Carol', 18)
        hole = HoleSpec(number=1, par=4, stroke_index=1)
        scores = {'alice': {1: 4}, 'carol': {1: 4}}
        side = [player_hole_score(player, hole, scores), player_hole_score(partner, hole, scores)]
        assert best_ball_net(side) == 3

    def test_decide_hole(self):
        """Test lower net wins, equal nets halve, missing side is undecided."""
        assert decide_hole(3, 4) == Side.TEAM_A
        assert decide_hole(5, 4) == Side.TEAM_B
        assert decide_hole(4, 4) == Side.HALVED
        assert decide_hole(None, 4) is None


class TestComputeHoleResults:
    """Tests for two-sided hole results over a round."""

    def test_cumulative_lead(self, make_snapshot):
        """Test the lead accumulates hole by hole from side A's view."""
        snapshot = make_snapshot(
            [('alice', 0), ('bob', 0)],
            {'alice': [4, 5, 4], 'bob': [5, 4, 5]},
        )
        results = compute_hole_results(['alice'], ['bob'], snapshot)
        assert len(results) == 18
        assert [r.winner for r in results[:3]] == [Side.TEAM_A, Side.TEAM_B, Side.TEAM_A]
        assert [r.cumulative_lead for r in results[:3]] == [1, 0, 1]
        assert results[3].winner is None
        assert results[17].cumulative_lead == 1

    def test_incomplete_best_ball_hole_does_not_count(self, make_snapshot):
        """Test a 2v2 hole with one partner unscored is undecided."""
        snapshot = make_snapshot(
            [('alice', 0), ('carol', 0), ('bob', 0), ('dave', 0)],
            {'alice': [3], 'carol': [None], 'bob': [5], 'dave': [5]},
        )
        results = compute_hole_results(['alice', 'carol'], ['bob', 'dave'], snapshot)
        assert results[0].winner is None
        assert results[0].side_a_net is None
        assert results[0].side_b_net == 5
        assert results[0].cumulative_lead == 0
        assert not is_hole_complete(snapshot, 1, ['alice', 'carol', 'bob', 'dave'])

    def test_handicap_strokes_decide_hole(self, make_snapshot):
        """Test a stroke on SI 1 turns a one-shot loss into a halve."""
        snapshot = make_snapshot([('alice', 1), ('bob', 0)], {'alice': [5], 'bob': [4]})
        results = compute_hole_results(['alice'], ['bob'], snapshot)
        assert results[0].winner == Side.HALVED
