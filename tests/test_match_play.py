"""Unit tests for the match play engine."""

import dataclasses

import pytest

from golftrip.hole_results import compute_hole_results
from golftrip.match_play import (
    add_press,
    calculate_exposure,
    compute_match_state,
    compute_round_match_state,
    format_final_result,
    format_lead_status,
    format_lead_status_for_team,
    format_match_status,
    get_hole_match_info,
    is_dormie,
    is_match_closed,
    match_money_results,
    update_match_stake,
    validate_press,
)
from golftrip.models import HoleSpec, Match, MatchStatus, PlayerInfo, Press, RoundSnapshot, Side


@pytest.fixture
def singles():
    """1v1 match for $10 a man."""
    return Match(id='m1', round_id='r1', match_type='1v1', stake_per_man=10, team_a=('alice',), team_b=('bob',))


@pytest.fixture
def scratch_pair(make_snapshot):
    def _make(scores):
        return make_snapshot([('alice', 0), ('bob', 0)], scores)
    return _make


@pytest.fixture
def back_nine():
    """Holes 10-18 only; alice wins 10-14 against bob."""
    return RoundSnapshot(
        round_id='r1',
        holes=[HoleSpec(number=n, par=4, stroke_index=n) for n in range(10, 19)],
        players=[PlayerInfo(id='alice', name='Alice'), PlayerInfo(id='bob', name='Bob')],
        scores={'alice': {n: 3 for n in range(10, 15)}, 'bob': {n: 4 for n in range(10, 15)}},
    )


class TestStatusLabels:
    """Tests for match status formatting."""

    def test_lead_status(self):
        """Test live labels from side A's perspective."""
        assert format_lead_status(2) == '2 UP'
        assert format_lead_status(-1) == '1 DN'
        assert format_lead_status(0) == 'A/S'

    def test_lead_status_for_team_b(self):
        """Test side B sees the lead mirrored."""
        assert format_lead_status_for_team(2, Side.TEAM_B) == '2 DN'

    def test_final_result(self):
        """Test closed early, decided on the last hole and halved."""
        assert format_final_result(3, 1) == '3&1'
        assert format_final_result(-4, 3) == '4&3'
        assert format_final_result(1, 0) == '1 UP'
        assert format_final_result(0, 0) == 'A/S'

    def test_match_status(self):
        """Test final label when complete, live label otherwise."""
        assert format_match_status(2, 5) == '2 UP'
        assert format_match_status(3, 2, is_complete=True) == '3&2'

    def test_dormie_and_closed(self):
        """Test dormie when lead equals remaining, closed when it exceeds it."""
        assert is_dormie(2, 2)
        assert not is_dormie(0, 0)
        assert not is_dormie(1, 2)
        assert is_match_closed(3, 2)
        assert not is_match_closed(2, 2)


class TestMatchState:
    """Tests for deriving match state from scores."""

    def test_not_started(self, singles, scratch_pair):
        """Test a match with no scores."""
        state = compute_round_match_state(singles, [], scratch_pair({}))
        assert state.status == MatchStatus.NOT_STARTED
        assert state.lead == 0
        assert state.holes_played == 0
        assert state.holes_remaining == 18
        assert state.winner is None

    def test_dormie_after_sixteen(self, singles, scratch_pair, scenario_b_scores):
        """Test 2 up with 2 to play is dormie."""
        scores = {pid: grosses[:16] for pid, grosses in scenario_b_scores.items()}
        state = compute_round_match_state(singles, [], scratch_pair(scores))
        assert state.lead == 2
        assert state.holes_played == 16
        assert state.holes_remaining == 2
        assert state.is_dormie
        assert state.status == MatchStatus.DORMIE
        assert not state.completed

    def test_closes_three_and_one(self, singles, scratch_pair, scenario_b_scores):
        """Test winning 17 from dormie closes the match 3&1."""
        state = compute_round_match_state(singles, [], scratch_pair(scenario_b_scores))
        assert state.lead == 3
        assert state.holes_remaining == 1
        assert state.status == MatchStatus.COMPLETED
        assert state.winner == Side.TEAM_A
        assert state.final_result == '3&1'
        assert state.is_closed
        assert state.closed_on_hole == 17
        assert not state.is_dormie

    def test_holes_after_close_are_ignored(self, singles, scratch_pair, scenario_b_scores):
        """Test a hole 18 scored after the match closed changes nothing."""
        scores = {
            'alice': scenario_b_scores['alice'] + [6],
            'bob': scenario_b_scores['bob'] + [3],
        }
        state = compute_round_match_state(singles, [], scratch_pair(scores))
        assert state.final_result == '3&1'
        assert state.lead == 3
        assert state.holes_played == 17

    def test_won_on_last_hole(self, singles, scratch_pair):
        """Test a match decided on 18 reads '1 UP'."""
        state = compute_round_match_state(
            singles, [], scratch_pair({'alice': [4] * 17 + [3], 'bob': [4] * 18})
        )
        assert state.completed
        assert state.final_result == '1 UP'
        assert state.winner == Side.TEAM_A

    def test_halved_match(self, singles, scratch_pair):
        """Test 18 halved holes ends all square."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [4] * 18, 'bob': [4] * 18}))
        assert state.completed
        assert state.winner == Side.HALVED
        assert state.final_result == 'A/S'

    def test_side_b_wins(self, singles, scratch_pair):
        """Test side B closing out early."""
        state = compute_round_match_state(
            singles, [], scratch_pair({'alice': [5] * 10, 'bob': [4] * 10})
        )
        assert state.winner == Side.TEAM_B
        assert state.final_result == '10&8'
        assert state.closed_on_hole == 10

    def test_persisted_completed_status_is_kept(self, scratch_pair):
        """Test a completed match does not regress when scores no longer decide it."""
        match = Match(
            id='m1', round_id='r1', match_type='1v1', stake_per_man=10,
            team_a=('alice',), team_b=('bob',),
            status=MatchStatus.COMPLETED, winner=Side.TEAM_A, final_result='2&1',
        )
        state = compute_round_match_state(match, [], scratch_pair({'alice': [4], 'bob': [5]}))
        assert state.status == MatchStatus.COMPLETED
        assert state.winner == Side.TEAM_A
        assert state.final_result == '2&1'

    def test_recompute_is_identical(self, singles, scratch_pair, scenario_b_scores):
        """Test replaying the same scores and presses twice gives equal states."""
        presses = [
            Press(id='p1', match_id='m1', starting_hole=10, stake_per_man=5),
            Press(id='p2', match_id='m1', starting_hole=17, stake_per_man=10, ending_hole=18),
        ]
        snapshot = scratch_pair(scenario_b_scores)
        first = compute_round_match_state(singles, presses, snapshot)
        assert first == compute_round_match_state(singles, presses, snapshot)
        hole_results = compute_hole_results(singles.team_a, singles.team_b, snapshot)
        assert compute_match_state(singles, presses, hole_results) == compute_match_state(
            singles, presses, list(hole_results)
        )

    def test_back_nine_round(self, singles, back_nine):
        """Test a nine-hole round on holes 10-18 is scored from hole 10."""
        state = compute_round_match_state(singles, [], back_nine)
        assert (state.first_hole, state.last_hole) == (10, 18)
        assert state.holes_played == 5
        assert state.status == MatchStatus.COMPLETED
        assert state.final_result == '5&4'
        assert state.closed_on_hole == 14


class TestPresses:
    """Tests for opening and replaying presses."""

    def test_press_replays_its_own_holes(self, singles, scratch_pair, scenario_b_scores):
        """Test a back-nine press only sees holes 10 onwards."""
        press = Press(id='p1', match_id='m1', starting_hole=10, stake_per_man=5)
        scores = {pid: grosses[:16] for pid, grosses in scenario_b_scores.items()}
        state = compute_round_match_state(singles, [press], scratch_pair(scores))
        press_state = state.presses[0]
        assert press_state.press_number == 1
        assert press_state.lead == 0
        assert press_state.holes_played == 7
        assert press_state.holes_remaining == 2
        assert press_state.ending_hole == 18
        assert press_state.is_open

    def test_press_closes_independently(self, singles, scratch_pair):
        """Test a press can close while the main match is still live."""
        press = Press(id='p1', match_id='m1', starting_hole=16, stake_per_man=5)
        alice = [5] + [4] * 14 + [3, 3]
        bob = [4] * 17
        state = compute_round_match_state(singles, [press], scratch_pair({'alice': alice, 'bob': bob}))
        assert not state.completed
        assert state.presses[0].status == MatchStatus.COMPLETED
        assert state.presses[0].final_result == '2&1'
        assert state.presses[0].winner == Side.TEAM_A

    def test_front_nine_press(self, singles, scratch_pair):
        """Test a press with an ending hole stops at that hole."""
        press = Press(id='p1', match_id='m1', starting_hole=7, stake_per_man=5, ending_hole=9)
        state = compute_round_match_state(
            singles, [press], scratch_pair({'alice': [4] * 9, 'bob': [4] * 6 + [5, 4, 4]})
        )
        press_state = state.presses[0]
        assert press_state.status == MatchStatus.COMPLETED
        assert press_state.final_result == '1 UP'

    def test_add_press_copies_stake(self, singles, scratch_pair):
        """Test a new press takes the current main stake and a default id."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [5, 5], 'bob': [4, 4]}))
        presses, errors = add_press(singles, [], state, starting_hole=3)
        assert errors == []
        assert len(presses) == 1
        assert presses[0].id == 'm1-press-1'
        assert presses[0].stake_per_man == 10
        assert presses[0].starting_hole == 3

    def test_press_cannot_start_in_the_future(self, singles, scratch_pair):
        """Test a press may start at most one hole past the last played."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [5, 5], 'bob': [4, 4]}))
        errors = validate_press(state, starting_hole=5)
        assert len(errors) == 1
        assert 'after only 2 holes played' in errors[0]

    def test_press_rejected_on_completed_match(self, singles, scratch_pair, scenario_b_scores):
        """Test presses are refused once the match is completed."""
        state = compute_round_match_state(singles, [], scratch_pair(scenario_b_scores))
        presses, errors = add_press(singles, [], state, starting_hole=18)
        assert presses == []
        assert any('completed' in e for e in errors)

    def test_back_nine_press_bounds(self, singles, back_nine):
        """Test presses on a back-nine round default to hole 18 and cannot start before 10."""
        press = Press(id='p1', match_id='m1', starting_hole=12, stake_per_man=5)
        state = compute_round_match_state(singles, [press], back_nine)
        assert state.presses[0].ending_hole == 18
        assert state.presses[0].holes_played == 3
        live = compute_round_match_state(singles, [], dataclasses.replace(back_nine, scores={}))
        assert validate_press(live, starting_hole=10) == []
        assert validate_press(live, starting_hole=9) == ['Press starting hole must be 10-18, got 9']


class TestStakes:
    """Tests for stake updates, exposure and hole info."""

    def test_update_stake(self, singles, scratch_pair):
        """Test the stake can change while the match is live."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [4], 'bob': [4]}))
        updated, errors = update_match_stake(singles, state, 20)
        assert errors == []
        assert updated.stake_per_man == 20
        assert singles.stake_per_man == 10

    def test_update_stake_rejected_when_completed(self, singles, scratch_pair, scenario_b_scores):
        """Test a completed match keeps its stake."""
        state = compute_round_match_state(singles, [], scratch_pair(scenario_b_scores))
        updated, errors = update_match_stake(singles, state, 20)
        assert updated is singles
        assert errors

    def test_exposure_counts_open_presses(self, singles, scratch_pair, scenario_b_scores):
        """Test exposure adds the main stake and every open press."""
        press = Press(id='p1', match_id='m1', starting_hole=17, stake_per_man=5)
        scores = {pid: grosses[:16] for pid, grosses in scenario_b_scores.items()}
        state = compute_round_match_state(singles, [press], scratch_pair(scores))
        exposure = calculate_exposure(state)
        assert exposure.main_match_exposure == 10
        assert exposure.total_exposure == 15
        assert exposure.current_position == 20
        assert [p.press_number for p in exposure.press_exposures] == [1]

    def test_exposure_scales_with_players_per_side(self, make_snapshot):
        """Test a 2v2 match exposes stake x 2 per side."""
        match = Match(
            id='m2', round_id='r1', match_type='2v2', stake_per_man=10,
            team_a=('alice', 'carol'), team_b=('bob', 'dave'),
        )
        snapshot = make_snapshot(
            [('alice', 0), ('carol', 0), ('bob', 0), ('dave', 0)],
            {'alice': [3], 'carol': [5], 'bob': [4], 'dave': [4]},
        )
        state = compute_round_match_state(match, [], snapshot)
        exposure = calculate_exposure(state)
        assert exposure.total_exposure == 20
        assert exposure.current_position == 20

    def test_hole_match_info(self, singles, scratch_pair, scenario_b_scores):
        """Test the main stake plus covering presses are at stake on a hole."""
        press = Press(id='p1', match_id='m1', starting_hole=17, stake_per_man=5)
        scores = {pid: grosses[:16] for pid, grosses in scenario_b_scores.items()}
        state = compute_round_match_state(singles, [press], scratch_pair(scores))
        info = get_hole_match_info(state, 17)
        assert info.total_at_stake == 15
        assert info.press_stakes == {1: 5}
        assert info.status_label == '2 UP'
        assert info.is_dormie
        assert get_hole_match_info(state, 16).press_stakes == {}


class TestMatchMoney:
    """Tests for money lines from completed matches."""

    def test_completed_match_pays_lead_times_stake(self, singles, scratch_pair, scenario_b_scores):
        """Test a 3&1 win at $10 a man pays $30."""
        state = compute_round_match_state(singles, [], scratch_pair(scenario_b_scores))
        lines = match_money_results(state, 'Round 1')
        assert [(line.player_id, line.amount) for line in lines] == [('alice', 30), ('bob', -30)]
        assert lines[0].description == 'Main: Won 3&1'
        assert lines[1].description == 'Main: Lost 3&1'

    def test_live_match_pays_nothing(self, singles, scratch_pair):
        """Test an in-progress match produces no money lines."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [3], 'bob': [4]}))
        assert match_money_results(state) == []

    def test_halved_match_pays_nothing(self, singles, scratch_pair):
        """Test an all-square match moves no money."""
        state = compute_round_match_state(singles, [], scratch_pair({'alice': [4] * 18, 'bob': [4] * 18}))
        assert match_money_results(state) == []

    def test_completed_press_pays(self, singles, scratch_pair):
        """Test a closed press pays even while the main match is live."""
        press = Press(id='p1', match_id='m1', starting_hole=16, stake_per_man=5)
        alice = [5] + [4] * 14 + [3, 3]
        bob = [4] * 17
        state = compute_round_match_state(singles, [press], scratch_pair({'alice': alice, 'bob': bob}))
        lines = match_money_results(state)
        assert [(line.player_id, line.amount) for line in lines] == [('alice', 10), ('bob', -10)]
        assert lines[0].description == 'Press 1: Won 2&1'

    def test_persisted_winner_with_level_scores_pays_nothing(self, scratch_pair):
        """Test a stored win the scores no longer support moves no money."""
        match = Match(
            id='m1', round_id='r1', match_type='1v1', stake_per_man=10,
            team_a=('alice',), team_b=('bob',),
            status=MatchStatus.COMPLETED, winner=Side.TEAM_A, final_result='3&2',
        )
        state = compute_round_match_state(match, [], scratch_pair({'alice': [4], 'bob': [4]}))
        assert state.completed
        assert state.lead == 0
        assert match_money_results(state) == []
