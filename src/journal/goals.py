# src/journal/goals.py
"""Goal tracking against report scalars."""
from dataclasses import dataclass
from enum import Enum

from src.journal.models import AnalyticsReport


class GoalStatus(Enum):
    """How a goal is tracking."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class Goals:
    """User-set performance targets.

    Attributes:
        total_profit: Profit target in account currency.
        win_rate: Win rate target in percent.
        max_drawdown: Drawdown limit in percent.
    """

    total_profit: float | None = None
    win_rate: float | None = None
    max_drawdown: float | None = None

    @property
    def has_goals(self) -> bool:
        return bool(self.total_profit or self.win_rate or self.max_drawdown)

    def to_dict(self) -> dict:
        return {
            "total_profit": self.total_profit,
            "win_rate": self.win_rate,
            "max_drawdown": self.max_drawdown,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "Goals":
        data = data or {}
        return cls(
            total_profit=data.get("total_profit"),
            win_rate=data.get("win_rate"),
            max_drawdown=data.get("max_drawdown"),
        )


@dataclass(frozen=True)
class GoalProgress:
    """Progress towards one target."""

    label: str
    current: float
    target: float
    progress_percent: float
    inverted: bool
    status: GoalStatus


def _progress(current: float, target: float) -> float:
    if target == 0:
        return 0.0
    return min(abs(current / target) * 100, 100.0)


def _status(progress: float, inverted: bool) -> GoalStatus:
    # For the drawdown limit, progress towards the target is bad.
    if progress > 80:
        return GoalStatus.POOR if inverted else GoalStatus.GOOD
    if progress > 50:
        return GoalStatus.FAIR
    return GoalStatus.GOOD if inverted else GoalStatus.POOR


def evaluate_goals(goals: Goals, report: AnalyticsReport) -> list[GoalProgress]:
    """Compare a report against the goals that are set.

    Args:
        goals: The account's targets. Unset or zero targets are skipped.
        report: Report to measure.

    Returns:
        GoalProgress for profit, win rate and drawdown, in that order.
    """
    candidates = [
        ("Profit Target", report.total_profit, goals.total_profit, False),
        ("Win Rate Target", report.win_rate, goals.win_rate, False),
        ("Drawdown Limit", report.max_drawdown_percent, goals.max_drawdown, True),
    ]

    results = []
    for label, current, target, inverted in candidates:
        if not target:
            continue
        progress = _progress(current, target)
        results.append(
            GoalProgress(
                label=label,
                current=current,
                target=target,
                progress_percent=progress,
                inverted=inverted,
                status=_status(progress, inverted),
            )
        )
    return results
