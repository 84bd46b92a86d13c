"""Unit tests for money totals and settlement."""

import logging

from golftrip.models import MoneyLine, SettlementTransaction
from golftrip.settlement import (
    build_money_totals,
    combine_player_totals,
    format_money,
    net_settlements,
    player_net_totals,
)


class TestNetSettlements:
    """Tests for the payer -> payee plan."""

    def test_largest_debtor_pays_largest_creditor(self):
        """Test greedy matching of debtors to creditors."""
        assert net_settlements({'a': 30, 'b': -10, 'c': -20}) == [
            SettlementTransaction('c', 'a', 20),
            SettlementTransaction('b', 'a', 10),
        ]

    def test_ties_broken_by_player_id(self):
        """Test equal balances are matched in id order."""
        assert net_settlements({'d': -10, 'b': 10, 'c': -10, 'a': 10}) == [
            SettlementTransaction('c', 'a', 10),
            SettlementTransaction('d', 'b', 10),
        ]

    def test_conserves_money(self):
        """Test every player ends square after paying."""
        totals = {'a': 12.5, 'b': -7.25, 'c': -5.25, 'd': 0}
        balances = dict(totals)
        for tx in net_settlements(totals):
            balances[tx.payer] += tx.amount
            balances[tx.payee] -= tx.amount
        assert all(abs(v) < 0.005 for v in balances.values())

    def test_thirds_settle_every_cent(self):
        """Test a pot split three ways pays out the full amount."""
        third = -10 / 3
        transactions = net_settlements({'a': 10, 'b': third, 'c': third, 'd': third})
        assert transactions == [
            SettlementTransaction('d', 'a', 3.34),
            SettlementTransaction('b', 'a', 3.33),
            SettlementTransaction('c', 'a', 3.33),
        ]
        assert round(sum(tx.amount for tx in transactions), 2) == 10.0

    def test_split_creditor(self):
        """Test one debtor can pay several creditors."""
        assert net_settlements({'a': 5, 'b': 5, 'c': -10}) == [
            SettlementTransaction('c', 'a', 5),
            SettlementTransaction('c', 'b', 5),
        ]

    def test_all_square(self):
        """Test nothing to pay when everyone is even."""
        assert net_settlements({'a': 0, 'b': 0}) == []

    def test_warns_when_not_zero_sum(self, caplog):
        """Test unbalanced input is logged."""
        with caplog.at_level(logging.WARNING, logger='golftrip.settlement'):
            net_settlements({'a': 10, 'b': -5})
        assert 'not zero-sum' in caplog.text


class TestMoneyTotals:
    """Tests for grouping money lines."""

    def test_net_totals(self):
        """Test lines are summed per player."""
        lines = [MoneyLine('a', 10, 'Match'), MoneyLine('b', -10, 'Match'), MoneyLine('a', -5, 'Skins')]
        assert player_net_totals(lines) == {'a': 5, 'b': -10}

    def test_combine(self):
        """Test several result maps are added together."""
        assert combine_player_totals({'a': 5, 'b': -5}, {'b': 2, 'c': -2}) == {'a': 5, 'b': -3, 'c': -2}

    def test_sorted_biggest_winner_first(self):
        """Test ordering by winnings, ties by id."""
        lines = [MoneyLine('c', -10, 'Match'), MoneyLine('b', 5, 'Match'), MoneyLine('a', 5, 'Match')]
        totals = build_money_totals(lines, {'a': 'Alice', 'b': 'Bob'})
        assert [t.player_id for t in totals] == ['a', 'b', 'c']
        assert totals[0].player_name == 'Alice'
        assert totals[2].player_name == 'Unknown'
        assert len(totals[2].results) == 1

    def test_format_money(self):
        """Test signed money labels."""
        assert format_money(12.5) == '+$12.50'
        assert format_money(-3) == '-$3'
        assert format_money(0.001) == '$0'
