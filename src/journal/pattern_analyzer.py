# src/journal/pattern_analyzer.py
"""Tag filtering and read-time views over an analytics report."""
from dataclasses import dataclass
from typing import Iterable, Sequence

from src.journal.metrics_calculator import HOURS_PER_DAY, MetricsCalculator
from src.journal.models import AnalyticsReport, Emotion, PerformanceBucket, Trade


@dataclass(frozen=True)
class EmotionCount:
    """How often an emotion was logged before and after trades."""

    emotion: Emotion
    before: int
    after: int


class PatternAnalyzer:
    """Derives filtered reports and presentation views from a report."""

    def __init__(self, calculator: MetricsCalculator | None = None) -> None:
        """Initialize the analyzer.

        Args:
            calculator: Calculator used to recompute filtered reports.
        """
        self._calculator = calculator or MetricsCalculator()

    def filter_by_tags(
        self, report: AnalyticsReport, tags: Iterable[str]
    ) -> AnalyticsReport:
        """Recompute the report over trades carrying every given tag.

        Args:
            report: Report whose trade list is filtered.
            tags: Tags a trade must all carry. Empty means no filter.

        Returns:
            The same report when no tags are given, otherwise a fresh report
            over the matching subset.
        """
        required = set(tags)
        if not required:
            return report

        subset = [t for t in report.trades if required <= t.tags]
        return self._calculator.calculate(subset)

    def unique_tags(self, report: AnalyticsReport) -> list[str]:
        """List every tag used in the report, in first-seen order."""
        seen: dict[str, None] = {}
        for trade in report.trades:
            for tag in sorted(trade.tags):
                seen.setdefault(tag, None)
        return list(seen)

    def emotion_breakdown(self, trades: Sequence[Trade]) -> list[EmotionCount]:
        """Count emotions logged before and after trades.

        Args:
            trades: Trades to inspect.

        Returns:
            EmotionCount per emotion in display order, omitting emotions
            that were never logged.
        """
        before = {emotion: 0 for emotion in Emotion}
        after = {emotion: 0 for emotion in Emotion}

        for trade in trades:
            if trade.emotion_before is not None:
                before[trade.emotion_before] += 1
            if trade.emotion_after is not None:
                after[trade.emotion_after] += 1

        return [
            EmotionCount(emotion=emotion, before=before[emotion], after=after[emotion])
            for emotion in Emotion
            if before[emotion] or after[emotion]
        ]

    def hour_blocks(
        self, report: AnalyticsReport, block_hours: int = 4
    ) -> list[list[PerformanceBucket]]:
        """Coarsen the per-hour intraday matrix into blocks of hours.

        Args:
            report: Report holding the per-hour matrix.
            block_hours: Width of each block. Must divide 24.

        Returns:
            One row per day (Sun..Sat), one bucket per block.
        """
        if block_hours <= 0 or HOURS_PER_DAY % block_hours:
            raise ValueError(f"block_hours must divide {HOURS_PER_DAY}: {block_hours}")

        blocks = []
        for hours in report.intraday:
            row = []
            for start in range(0, HOURS_PER_DAY, block_hours):
                cells = hours[start:start + block_hours]
                row.append(
                    PerformanceBucket(
                        trades=sum(c.trades for c in cells),
                        profit=sum(c.profit for c in cells),
                    )
                )
            blocks.append(row)
        return blocks
