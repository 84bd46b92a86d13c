"""Unit tests for Wolf scoring."""

import logging

import pytest

from golftrip.models import WolfDecision
from golftrip.wolf import (
    calculate_wolf_settlement,
    compute_wolf_state,
    format_wolf_points,
    get_available_partners,
    get_tee_order_for_hole,
    get_wolf_for_hole,
)

TEE_ORDER = ['p1', 'p2', 'p3', 'p4']


@pytest.fixture
def wolf_round(make_snapshot):
    """
    Hole 1: p1 picks p2 and wins. Hole 2: p2 goes alone and wins.
    Hole 3: p3 goes alone and loses. Hole 4: scored but p4 never decided.
    """
    return make_snapshot(
        [(pid, 0) for pid in TEE_ORDER],
        {'p1': [3, 4, 4, 4], 'p2': [5, 3, 4, 4], 'p3': [4, 4, 5, 4], 'p4': [4, 4, 4, 4]},
    )


@pytest.fixture
def decisions():
    return [WolfDecision(1, 'p1', 'p2'), WolfDecision(2, 'p2'), WolfDecision(3, 'p3')]


class TestRotation:
    """Tests for wolf rotation."""

    def test_wolf_rotates(self):
        """Test the wolf follows the tee order and wraps around."""
        assert [get_wolf_for_hole(TEE_ORDER, h) for h in (1, 2, 4, 5, 18)] == ['p1', 'p2', 'p4', 'p1', 'p2']

    def test_tee_order_for_hole(self):
        """Test the wolf tees off first."""
        assert get_tee_order_for_hole(TEE_ORDER, 2) == ['p2', 'p3', 'p4', 'p1']

    def test_available_partners(self):
        """Test everyone but the wolf can be picked."""
        assert get_available_partners(TEE_ORDER, 'p3') == ['p1', 'p2', 'p4']


class TestWolfState:
    """Tests for wolf hole outcomes and money."""

    def test_player_totals(self, wolf_round, decisions):
        """Test partner holes, lone wolf wins and lone wolf losses."""
        standings = compute_wolf_state('r1', 1, TEE_ORDER, decisions, wolf_round, lone_wolf_multiplier=2)
        assert standings.player_totals == {'p1': 2, 'p2': 10, 'p3': -10, 'p4': -2}
        assert sum(standings.player_totals.values()) == 0

    def test_hole_outcomes(self, wolf_round, decisions):
        """Test winners and lone wolf flags per hole."""
        standings = compute_wolf_state('r1', 1, TEE_ORDER, decisions, wolf_round)
        results = standings.hole_results
        assert [r.winner for r in results[:4]] == ['wolf', 'wolf', 'field', None]
        assert not results[0].is_lone_wolf
        assert results[1].is_lone_wolf
        assert results[1].wolf_points_per_man == 2
        assert results[3].decided is False

    def test_undecided_hole_does_not_score(self, wolf_round, decisions):
        """Test a scored hole without a wolf decision is not played."""
        standings = compute_wolf_state('r1', 1, TEE_ORDER, decisions, wolf_round)
        assert standings.holes_played == 3
        assert standings.current_hole == 4
        assert standings.current_wolf_id == 'p4'

    def test_halved_hole(self, make_snapshot):
        """Test a halved hole moves no money."""
        snapshot = make_snapshot([(pid, 0) for pid in TEE_ORDER], {pid: [4] for pid in TEE_ORDER})
        standings = compute_wolf_state('r1', 1, TEE_ORDER, [WolfDecision(1, 'p1', 'p3')], snapshot)
        assert standings.hole_results[0].winner == 'halved'
        assert all(amount == 0 for amount in standings.player_totals.values())

    def test_partner_is_the_wolf(self, wolf_round, caplog):
        """Test a decision pairing the rotation wolf with itself leaves the hole unplayed."""
        with caplog.at_level(logging.WARNING, logger='golftrip.wolf'):
            standings = compute_wolf_state('r1', 1, TEE_ORDER, [WolfDecision(1, 'p2', 'p1')], wolf_round)
        assert not standings.hole_results[0].decided
        assert standings.holes_played == 0
        assert all(amount == 0 for amount in standings.player_totals.values())
        assert 'picks the wolf p1 as partner' in caplog.text

    def test_settlement_lines(self, wolf_round, decisions):
        """Test wolf settlement mirrors the running totals."""
        standings = compute_wolf_state('r1', 1, TEE_ORDER, decisions, wolf_round)
        lines = calculate_wolf_settlement(standings, 'Round 2')
        assert {line.player_id: line.amount for line in lines} == standings.player_totals
        assert all(line.round_name == 'Round 2' for line in lines)

    def test_points_label(self):
        """Test signed money labels."""
        assert format_wolf_points(0) == '$0'
        assert format_wolf_points(4) == '+$4'
        assert format_wolf_points(-2.5) == '-$2.5'
