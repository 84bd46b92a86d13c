"""Money totals across rounds and the payer -> payee settlement plan."""

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional

from .constants import MONEY_PLACES
from .models import MoneyLine, PlayerMoneyTotal, SettlementTransaction
from .utils import round_money

logger = logging.getLogger('golftrip.settlement')

# Balances smaller than half a cent are settled
_EPSILON = 0.005


def player_net_totals(lines: Iterable[MoneyLine]) -> Dict[str, float]:
    """Sum signed money lines per player."""
    totals: Dict[str, float] = {}
    for line in lines:
        totals[line.player_id] = totals.get(line.player_id, 0.0) + line.amount
    return totals


def combine_player_totals(*results: Mapping[str, float]) -> Dict[str, float]:
    """Add several player -> amount maps (match, nassau, skins, wolf, junk)."""
    combined: Dict[str, float] = {}
    for result in results:
        for pid, amount in result.items():
            combined[pid] = combined.get(pid, 0.0) + amount
    return combined


def build_money_totals(
    lines: Iterable[MoneyLine], player_names: Optional[Mapping[str, str]] = None
) -> List[PlayerMoneyTotal]:
    """
    Group money lines into per-player totals, biggest winner first.

    Args:
        lines: Signed money lines from any round or format
        player_names: player_id -> display name

    Returns:
        PlayerMoneyTotal list sorted by total winnings descending
    """
    player_names = player_names or {}
    totals: Dict[str, PlayerMoneyTotal] = {}
    for line in lines:
        total = totals.get(line.player_id)
        if total is None:
            total = PlayerMoneyTotal(
                player_id=line.player_id,
                player_name=player_names.get(line.player_id, 'Unknown'),
            )
            totals[line.player_id] = total
        total.total_winnings += line.amount
        total.results.append(line)

    return sorted(totals.values(), key=lambda t: (-t.total_winnings, t.player_id))


def _to_cents(player_totals: Mapping[str, float]) -> Dict[str, int]:
    """
    Convert signed totals to whole cents without losing any.

    Each total is floored to a cent, then the cents lost to flooring are
    handed back one at a time to the largest remainders (ties by player id),
    so the cents add up to the rounded sum of the inputs.
    """
    scale = 10 ** MONEY_PLACES
    exact = {pid: round(amount * scale, 6) for pid, amount in player_totals.items()}
    cents = {pid: math.floor(value) for pid, value in exact.items()}
    leftover = round(sum(exact.values())) - sum(cents.values())
    by_remainder = sorted(exact, key=lambda pid: (-(exact[pid] - cents[pid]), pid))
    for pid in by_remainder[:max(leftover, 0)]:
        cents[pid] += 1
    return cents


def net_settlements(player_totals: Mapping[str, float]) -> List[SettlementTransaction]:
    """
    Reduce per-player net totals to a short list of payments.

    Totals are netted in whole cents. Creditors (positive) and debtors
    (negative) are each sorted largest first, ties by player id. The largest
    debtor pays the largest creditor min(debt, credit), and so on until
    either side runs out.

    Args:
        player_totals: player_id -> signed net total (+ owed money)

    Returns:
        SettlementTransaction list in payment order, amounts in cents
    """
    total = sum(player_totals.values())
    if abs(total) >= _EPSILON:
        logger.warning(f'Settlement input is not zero-sum (off by {total:.2f})')

    cents = _to_cents(player_totals)
    creditors = sorted(([pid, c] for pid, c in cents.items() if c > 0), key=lambda c: (-c[1], c[0]))
    debtors = sorted(([pid, -c] for pid, c in cents.items() if c < 0), key=lambda d: (-d[1], d[0]))

    transactions: List[SettlementTransaction] = []
    ci = di = 0
    while ci < len(creditors) and di < len(debtors):
        creditor, debtor = creditors[ci], debtors[di]
        amount = min(creditor[1], debtor[1])
        transactions.append(
            SettlementTransaction(
                payer=debtor[0], payee=creditor[0], amount=round_money(amount / 10 ** MONEY_PLACES, MONEY_PLACES)
            )
        )

        creditor[1] -= amount
        debtor[1] -= amount
        if creditor[1] == 0:
            ci += 1
        if debtor[1] == 0:
            di += 1

    logger.debug(f'{len(transactions)} settlement transactions for {len(player_totals)} players')
    return transactions


def format_money(amount: float) -> str:
    """'+$12.50', '-$3', '$0'."""
    if abs(amount) < _EPSILON:
        return '$0'
    sign = '+' if amount > 0 else '-'
    value = f'{abs(amount):.2f}'.removesuffix('.00')
    return f'{sign}${value}'
