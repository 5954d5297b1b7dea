# src/journal/aggregator.py
"""Combination of several accounts into one portfolio report."""
from datetime import datetime, timezone
from typing import Iterable, Protocol, Sequence

from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import AnalyticsReport, Trade


class HasTrades(Protocol):
    """Anything carrying a trade list, such as an account."""

    @property
    def trades(self) -> Sequence[Trade]: ...


def close_instant(trade: Trade) -> datetime:
    """Naive UTC sort key for a close time.

    Aware times are converted to UTC. Naive times are taken as UTC wall-clock,
    so accounts imported with and without offsets can be merged.
    """
    moment = trade.close_time
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def merge_trades(trade_lists: Iterable[Sequence[Trade]]) -> list[Trade]:
    """Concatenate trade lists and sort them by close time.

    The sort is stable, so trades closing at the same instant keep the order
    of the lists they came from.
    """
    merged = [trade for trades in trade_lists for trade in trades]
    merged.sort(key=close_instant)
    return merged


def combine_accounts(
    accounts: Iterable[HasTrades],
    calculator: MetricsCalculator | None = None,
) -> AnalyticsReport:
    """Compute one report over the union of every account's trades.

    Args:
        accounts: Accounts (or reports) whose trades are combined.
        calculator: Calculator to delegate to. Defaults to a new one.

    Returns:
        AnalyticsReport for the merged, chronologically sorted trades.
    """
    calculator = calculator or MetricsCalculator()
    return calculator.calculate(merge_trades(account.trades for account in accounts))
