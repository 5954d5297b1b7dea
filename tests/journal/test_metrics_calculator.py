# tests/journal/test_metrics_calculator.py
"""Tests for MetricsCalculator."""
import math
import random
from datetime import datetime, timedelta

import pytest

from src.journal.metrics_calculator import MetricsCalculator, compute
from src.journal.models import PeriodPerformance, SymbolPerformance, Trade


def make_trade(
    ticket: int,
    profit: float,
    close_time: datetime = datetime(2024, 1, 1, 10, 0),
    symbol: str = "EURUSD",
) -> Trade:
    """Create a closed trade for testing."""
    return Trade(ticket=ticket, close_time=close_time, symbol=symbol, profit=profit)


def make_scenario() -> list[Trade]:
    """Three trades: one winner and two losers on consecutive days."""
    return [
        make_trade(1, 100.0, datetime(2024, 1, 1, 10, 0), "EURUSD"),
        make_trade(2, -40.0, datetime(2024, 1, 2, 11, 0), "EURUSD"),
        make_trade(3, -10.0, datetime(2024, 1, 3, 9, 0), "GBPUSD"),
    ]


def make_sequence(profits: list[float]) -> list[Trade]:
    """Create trades one hour apart with the given profits."""
    start = datetime(2024, 3, 4, 8, 0)
    return [
        make_trade(i, p, start + timedelta(hours=i))
        for i, p in enumerate(profits, start=1)
    ]


class TestMetricsCalculator:
    """Tests for MetricsCalculator."""

    def test_calculate_with_no_trades(self) -> None:
        """calculate should return a zero report when no trades are provided."""
        report = MetricsCalculator().calculate([])

        assert report.total_trades == 0
        assert report.total_profit == 0.0
        assert report.win_rate == 0.0
        assert report.winning_trades == 0
        assert report.losing_trades == 0
        assert float(report.profit_factor) == 0.0
        assert not report.profit_factor.is_infinite
        assert report.average_win == 0.0
        assert report.average_loss == 0.0
        assert float(report.risk_reward_ratio) == 0.0
        assert report.max_drawdown == 0.0
        assert report.max_drawdown_percent == 0.0
        assert report.equity_curve == ()
        assert report.day_of_week == ()
        assert report.intraday == ()
        assert report.weekly == ()
        assert report.monthly == ()
        assert report.yearly == ()
        assert report.symbols == ()
        assert report.trades == ()

    def test_zero_profit_counts_as_loss(self) -> None:
        """A break-even trade should count as a loser."""
        report = compute([make_trade(1, 0.0)])

        assert report.winning_trades == 0
        assert report.losing_trades == 1
        assert report.win_rate == 0.0
        assert report.symbols[0].win_rate == 0.0

    def test_profit_factor_infinite_without_losses(self) -> None:
        """profit_factor should be infinite when there are no losing trades."""
        report = compute([make_trade(1, 100.0)])

        assert report.profit_factor.is_infinite
        assert float(report.profit_factor) == math.inf
        assert report.risk_reward_ratio.is_infinite
        assert report.average_loss == 0.0

    def test_concrete_scenario(self) -> None:
        """calculate should produce the documented metrics for a known scenario."""
        report = compute(make_scenario())

        assert report.total_trades == 3
        assert report.total_profit == pytest.approx(50.0)
        assert report.winning_trades == 1
        assert report.losing_trades == 2
        assert report.win_rate == pytest.approx(33.333, rel=0.001)
        assert [(p.trade_number, p.balance) for p in report.equity_curve] == [
            (1, 100.0),
            (2, 60.0),
            (3, 50.0),
        ]
        assert report.max_drawdown == pytest.approx(50.0)
        assert report.max_drawdown_percent == pytest.approx(50.0)
        assert report.symbols == (
            SymbolPerformance(symbol="EURUSD", profit=60.0, win_rate=50.0, trades=2),
            SymbolPerformance(symbol="GBPUSD", profit=-10.0, win_rate=0.0, trades=1),
        )

    def test_calculate_profit_factor_and_averages(self) -> None:
        """calculate should compute profit factor, averages and risk/reward."""
        # Gross profit: 100, gross loss: 40 + 10 = 50 -> profit factor 2.0
        # Average win 100, average loss -25 -> risk/reward 4.0
        report = compute(make_scenario())

        assert float(report.profit_factor) == pytest.approx(2.0)
        assert report.average_win == pytest.approx(100.0)
        assert report.average_loss == pytest.approx(-25.0)
        assert float(report.risk_reward_ratio) == pytest.approx(4.0)

    def test_average_loss_is_never_positive(self) -> None:
        """average_loss should be stored as a negative number."""
        report = compute(make_sequence([50.0, -30.0, 0.0, -90.0]))

        # Losers: -30, 0, -90 -> mean absolute loss 40
        assert report.average_loss == pytest.approx(-40.0)
        assert report.losing_trades == 3

    def test_drawdown_percent_uses_peak_at_maximum(self) -> None:
        """max_drawdown_percent should use the peak when the maximum was set."""
        # Peak 100 -> balance 20 (drawdown 80, 80%), then a new peak of 1020
        # with only a 10 drawdown afterwards.
        report = compute(make_sequence([100.0, -80.0, 1000.0, -10.0]))

        assert report.max_drawdown == pytest.approx(80.0)
        assert report.max_drawdown_percent == pytest.approx(80.0)

    def test_drawdown_percent_stays_zero_without_positive_peak(self) -> None:
        """A drawdown from a zero peak should leave the percentage at zero."""
        report = compute(make_sequence([-50.0, -20.0]))

        assert report.max_drawdown == pytest.approx(70.0)
        assert report.max_drawdown_percent == 0.0

    def test_drawdown_matches_running_peak_definition(self) -> None:
        """max_drawdown should equal the largest peak-to-balance gap."""
        rng = random.Random(7)
        for _ in range(20):
            profits = [round(rng.uniform(-100, 100), 2) for _ in range(rng.randint(1, 40))]
            report = compute(make_sequence(profits))

            balance = 0.0
            peak = 0.0
            expected = 0.0
            for profit in profits:
                balance += profit
                peak = max(peak, balance)
                expected = max(expected, peak - balance)

            assert report.max_drawdown >= 0
            assert report.max_drawdown == pytest.approx(expected)

    def test_day_of_week_heatmap(self) -> None:
        """Trades should be bucketed by weekday with Sunday at index 0."""
        report = compute(make_scenario())

        assert len(report.day_of_week) == 7
        # 2024-01-01 is a Monday
        assert report.day_of_week[1].trades == 1
        assert report.day_of_week[1].profit == pytest.approx(100.0)
        assert report.day_of_week[2].profit == pytest.approx(-40.0)
        assert report.day_of_week[3].profit == pytest.approx(-10.0)
        assert report.day_of_week[0].trades == 0

    def test_sunday_is_day_zero(self) -> None:
        report = compute([make_trade(1, 5.0, datetime(2024, 1, 7, 12, 0))])

        assert report.day_of_week[0].trades == 1
        assert report.intraday_cell("Sun", 12).profit == pytest.approx(5.0)

    def test_intraday_matrix(self) -> None:
        """Every day should have 24 hourly cells keyed by close hour."""
        report = compute(make_scenario())

        assert len(report.intraday) == 7
        assert all(len(hours) == 24 for hours in report.intraday)
        assert report.intraday_cell("Mon", 10).trades == 1
        assert report.intraday_cell("Mon", 10).profit == pytest.approx(100.0)
        assert report.intraday_cell("Tue", 11).profit == pytest.approx(-40.0)
        assert report.intraday_cell("Wed", 9).trades == 1
        assert report.intraday_cell("Wed", 10).trades == 0

    def test_periodic_rollups(self) -> None:
        """Trades should roll up into sorted week, month and year buckets."""
        trades = [
            make_trade(1, 10.0, datetime(2023, 12, 29, 9, 0)),
            make_trade(2, 20.0, datetime(2024, 1, 1, 9, 0)),
            make_trade(3, -5.0, datetime(2024, 1, 2, 9, 0)),
            make_trade(4, 40.0, datetime(2024, 2, 15, 9, 0)),
        ]

        report = compute(trades)

        assert report.weekly == (
            PeriodPerformance(period="2023-W52", profit=10.0, trades=1),
            PeriodPerformance(period="2024-W01", profit=15.0, trades=2),
            PeriodPerformance(period="2024-W07", profit=40.0, trades=1),
        )
        assert report.monthly == (
            PeriodPerformance(period="2023-12", profit=10.0, trades=1),
            PeriodPerformance(period="2024-01", profit=15.0, trades=2),
            PeriodPerformance(period="2024-02", profit=40.0, trades=1),
        )
        assert report.yearly == (
            PeriodPerformance(period="2023", profit=10.0, trades=1),
            PeriodPerformance(period="2024", profit=55.0, trades=3),
        )

    def test_rollups_conserve_total_profit(self) -> None:
        """Each partitioning scheme should sum to the total profit."""
        rng = random.Random(11)
        start = datetime(2023, 11, 20, 0, 0)
        trades = []
        for i in range(150):
            start += timedelta(hours=rng.randint(1, 40))
            trades.append(
                make_trade(
                    i,
                    round(rng.uniform(-200, 250), 2),
                    start,
                    rng.choice(["EURUSD", "GBPUSD", "XAUUSD", ""]),
                )
            )

        report = compute(trades)

        for buckets in (report.weekly, report.monthly, report.yearly, report.symbols):
            assert sum(b.profit for b in buckets) == pytest.approx(report.total_profit)
            assert sum(b.trades for b in buckets) == report.total_trades
        assert sum(b.profit for b in report.day_of_week) == pytest.approx(report.total_profit)
        assert sum(
            cell.profit for hours in report.intraday for cell in hours
        ) == pytest.approx(report.total_profit)

    def test_symbols_sorted_by_profit_with_unknown_fallback(self) -> None:
        """Symbol rollup should sort by profit and name blank symbols Unknown."""
        trades = make_sequence([10.0, 50.0, -20.0])
        trades = [
            Trade(ticket=t.ticket, close_time=t.close_time, symbol=s, profit=t.profit)
            for t, s in zip(trades, ["", "XAUUSD", "US30"])
        ]

        report = compute(trades)

        assert [s.symbol for s in report.symbols] == ["XAUUSD", "Unknown", "US30"]

    def test_calculate_is_deterministic_and_does_not_mutate(self) -> None:
        """Two calls on the same input should give equal reports."""
        trades = make_scenario()
        snapshot = list(trades)

        first = compute(trades)
        second = compute(trades)

        assert first == second
        assert trades == snapshot
        assert first.trades == tuple(trades)

    def test_does_not_resort_input(self) -> None:
        """The equity curve should follow input order, not close time."""
        trades = [
            make_trade(1, 30.0, datetime(2024, 1, 5, 10, 0)),
            make_trade(2, -10.0, datetime(2024, 1, 1, 10, 0)),
        ]

        report = compute(trades)

        assert [p.balance for p in report.equity_curve] == [30.0, 20.0]
