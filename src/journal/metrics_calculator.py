# src/journal/metrics_calculator.py
"""Calculator for trading performance metrics."""
from collections import defaultdict
from typing import Sequence

from src.journal.models import (
    AnalyticsReport,
    EquityPoint,
    PerformanceBucket,
    PeriodPerformance,
    Ratio,
    SymbolPerformance,
    Trade,
)
from src.journal.periods import Period

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7


def day_index(trade: Trade) -> int:
    """Day of week of the close time, 0=Sunday..6=Saturday."""
    return (trade.close_time.weekday() + 1) % DAYS_PER_WEEK


class MetricsCalculator:
    """Calculates the analytics report from an ordered list of closed trades.

    Trades are expected sorted ascending by close time. The input is never
    re-sorted or modified, and every call recomputes the full report.
    """

    def calculate(self, trades: Sequence[Trade]) -> AnalyticsReport:
        """Calculate every metric for the given trades.

        Args:
            trades: Closed trades sorted ascending by close time.

        Returns:
            AnalyticsReport with all scalars and series populated.
        """
        if not trades:
            return self._empty_report()

        trades = tuple(trades)
        total_trades = len(trades)
        total_profit = sum(t.profit for t in trades)

        winners = [t for t in trades if t.is_win]
        losers = [t for t in trades if not t.is_win]

        winning_trades = len(winners)
        losing_trades = len(losers)
        win_rate = winning_trades / total_trades * 100

        gross_profit = sum(t.profit for t in winners)
        gross_loss = abs(sum(t.profit for t in losers))

        average_win = gross_profit / winning_trades if winning_trades > 0 else 0.0
        average_loss = gross_loss / losing_trades if losing_trades > 0 else 0.0

        equity_curve, max_drawdown, max_drawdown_percent = self._calculate_drawdown(trades)

        return AnalyticsReport(
            total_trades=total_trades,
            total_profit=total_profit,
            win_rate=win_rate,
            winning_trades=winning_trades,
            losing_trades=losing_trades,
            profit_factor=Ratio.of(gross_profit, gross_loss),
            average_win=average_win,
            average_loss=-average_loss if average_loss else 0.0,
            risk_reward_ratio=Ratio.of(average_win, average_loss),
            max_drawdown=max_drawdown,
            max_drawdown_percent=max_drawdown_percent,
            equity_curve=equity_curve,
            day_of_week=self._calculate_day_of_week(trades),
            intraday=self._calculate_intraday(trades),
            weekly=self._aggregate_periods(trades, Period.WEEK),
            monthly=self._aggregate_periods(trades, Period.MONTH),
            yearly=self._aggregate_periods(trades, Period.YEAR),
            symbols=self._aggregate_symbols(trades),
            trades=trades,
        )

    def _empty_report(self) -> AnalyticsReport:
        """Return a report with zero values for an empty trade list."""
        return AnalyticsReport(
            total_trades=0,
            total_profit=0.0,
            win_rate=0.0,
            winning_trades=0,
            losing_trades=0,
            profit_factor=Ratio(),
            average_win=0.0,
            average_loss=0.0,
            risk_reward_ratio=Ratio(),
            max_drawdown=0.0,
            max_drawdown_percent=0.0,
            equity_curve=(),
            day_of_week=(),
            intraday=(),
            weekly=(),
            monthly=(),
            yearly=(),
            symbols=(),
            trades=(),
        )

    def _calculate_drawdown(
        self, trades: tuple[Trade, ...]
    ) -> tuple[tuple[EquityPoint, ...], float, float]:
        """Walk the running balance and track the deepest fall from a peak.

        The percentage is taken against the peak at the moment a new maximum
        drawdown is set. A zero peak leaves the percentage unchanged.

        Args:
            trades: Closed trades in chronological order.

        Returns:
            Tuple of (equity_curve, max_drawdown, max_drawdown_percent).
        """
        balance = 0.0
        peak = 0.0
        max_drawdown = 0.0
        max_drawdown_percent = 0.0
        equity_curve: list[EquityPoint] = []

        for number, trade in enumerate(trades, start=1):
            balance += trade.profit
            if balance > peak:
                peak = balance
            drawdown = peak - balance
            if drawdown > max_drawdown:
                max_drawdown = drawdown
                if peak > 0:
                    max_drawdown_percent = drawdown / peak * 100
            equity_curve.append(EquityPoint(trade_number=number, balance=balance))

        return tuple(equity_curve), max_drawdown, max_drawdown_percent

    def _calculate_day_of_week(
        self, trades: tuple[Trade, ...]
    ) -> tuple[PerformanceBucket, ...]:
        buckets = [PerformanceBucket()] * DAYS_PER_WEEK
        for trade in trades:
            day = day_index(trade)
            buckets[day] = buckets[day].add(trade.profit)
        return tuple(buckets)

    def _calculate_intraday(
        self, trades: tuple[Trade, ...]
    ) -> tuple[tuple[PerformanceBucket, ...], ...]:
        matrix = [[PerformanceBucket()] * HOURS_PER_DAY for _ in range(DAYS_PER_WEEK)]
        for trade in trades:
            row = matrix[day_index(trade)]
            hour = trade.close_time.hour
            row[hour] = row[hour].add(trade.profit)
        return tuple(tuple(row) for row in matrix)

    def _aggregate_periods(
        self, trades: tuple[Trade, ...], period: Period
    ) -> tuple[PeriodPerformance, ...]:
        """Group trades into calendar buckets sorted by period key.

        Args:
            trades: Closed trades.
            period: Granularity of the buckets.

        Returns:
            PeriodPerformance per period, ascending by key.
        """
        profit: dict[str, float] = defaultdict(float)
        count: dict[str, int] = defaultdict(int)

        for trade in trades:
            key = period.key_for(trade.close_time)
            profit[key] += trade.profit
            count[key] += 1

        return tuple(
            PeriodPerformance(period=key, profit=profit[key], trades=count[key])
            for key in sorted(profit)
        )

    def _aggregate_symbols(
        self, trades: tuple[Trade, ...]
    ) -> tuple[SymbolPerformance, ...]:
        """Roll up trades per symbol, best performer first.

        Args:
            trades: Closed trades.

        Returns:
            SymbolPerformance sorted by descending profit.
        """
        profit: dict[str, float] = defaultdict(float)
        wins: dict[str, int] = defaultdict(int)
        count: dict[str, int] = defaultdict(int)

        for trade in trades:
            symbol = trade.display_symbol
            profit[symbol] += trade.profit
            count[symbol] += 1
            if trade.is_win:
                wins[symbol] += 1

        performance = [
            SymbolPerformance(
                symbol=symbol,
                profit=profit[symbol],
                win_rate=wins[symbol] / count[symbol] * 100,
                trades=count[symbol],
            )
            for symbol in profit
        ]
        return tuple(sorted(performance, key=lambda s: s.profit, reverse=True))


def compute(trades: Sequence[Trade]) -> AnalyticsReport:
    """Compute the analytics report for an ordered trade list."""
    return MetricsCalculator().calculate(trades)
