# src/journal/models.py
"""Data models for the trading journal."""
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

UNKNOWN_SYMBOL = "Unknown"

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class Emotion(Enum):
    """Emotional state logged before or after a trade."""

    CONFIDENT = "Confident"
    HOPEFUL = "Hopeful"
    NEUTRAL = "Neutral"
    ANXIOUS = "Anxious"
    FEARFUL = "Fearful"


def normalize_tag(tag: str) -> str:
    """Normalize a journal tag: trimmed, lowercase, spaces as dashes."""
    return tag.strip().lower().replace(" ", "-")


def normalize_tags(tags: Iterable[str]) -> frozenset[str]:
    """Normalize a collection of tags, dropping empty ones."""
    return frozenset(t for t in (normalize_tag(tag) for tag in tags) if t)


@dataclass(frozen=True)
class Trade:
    """A single closed position."""

    ticket: int
    close_time: datetime
    symbol: str
    profit: float
    open_time: datetime | None = None

    # Journal
    journal: str | None = None
    emotion_before: Emotion | None = None
    emotion_after: Emotion | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    news_analysis: str | None = None

    @property
    def is_win(self) -> bool:
        """Zero-profit trades count as losses."""
        return self.profit > 0

    @property
    def display_symbol(self) -> str:
        return self.symbol or UNKNOWN_SYMBOL

    def with_journal(self, **changes: Any) -> "Trade":
        """Return a copy with journal fields replaced.

        Args:
            **changes: Any of journal, emotion_before, emotion_after, tags,
                news_analysis.

        Returns:
            A new Trade; this one is left untouched.
        """
        allowed = {"journal", "emotion_before", "emotion_after", "tags", "news_analysis"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Not a journal field: {', '.join(sorted(unknown))}")

        if "tags" in changes:
            changes["tags"] = normalize_tags(changes["tags"] or ())

        return replace(self, **changes)


@dataclass(frozen=True)
class Ratio:
    """A ratio that is either a finite number or infinite.

    Profit factor and risk/reward divide by a loss amount that can be zero.
    That case is a valid result, kept distinct from any finite value.
    """

    value: float = 0.0
    is_infinite: bool = False

    @classmethod
    def of(cls, numerator: float, denominator: float) -> "Ratio":
        if denominator == 0:
            return cls.infinite()
        return cls(value=numerator / denominator)

    @classmethod
    def infinite(cls) -> "Ratio":
        return cls(value=math.inf, is_infinite=True)

    def __float__(self) -> float:
        return math.inf if self.is_infinite else self.value

    def format(self, spec: str = ".2f", undefined: str = "N/A") -> str:
        """Render for display, using the placeholder when infinite."""
        if self.is_infinite:
            return undefined
        return format(self.value, spec)

    def to_json(self) -> float | None:
        return None if self.is_infinite else self.value


@dataclass(frozen=True)
class EquityPoint:
    """Running balance after a trade."""

    trade_number: int
    balance: float


@dataclass(frozen=True)
class PerformanceBucket:
    """Trade count and summed profit for one heatmap cell."""

    trades: int = 0
    profit: float = 0.0

    def add(self, profit: float) -> "PerformanceBucket":
        return PerformanceBucket(trades=self.trades + 1, profit=self.profit + profit)


@dataclass(frozen=True)
class PeriodPerformance:
    """Summed profit and trade count for one calendar period."""

    period: str
    profit: float
    trades: int


@dataclass(frozen=True)
class SymbolPerformance:
    """Performance of one instrument."""

    symbol: str
    profit: float
    win_rate: float
    trades: int


@dataclass(frozen=True)
class AnalyticsReport:
    """Every metric derived from an ordered list of closed trades."""

    total_trades: int
    total_profit: float

    win_rate: float
    winning_trades: int
    losing_trades: int

    profit_factor: Ratio
    average_win: float
    average_loss: float
    risk_reward_ratio: Ratio

    max_drawdown: float
    max_drawdown_percent: float

    equity_curve: tuple[EquityPoint, ...]
    day_of_week: tuple[PerformanceBucket, ...]
    intraday: tuple[tuple[PerformanceBucket, ...], ...]
    weekly: tuple[PeriodPerformance, ...]
    monthly: tuple[PeriodPerformance, ...]
    yearly: tuple[PeriodPerformance, ...]
    symbols: tuple[SymbolPerformance, ...]

    trades: tuple[Trade, ...]

    def intraday_cell(self, day: str, hour: int) -> PerformanceBucket:
        """Look up an intraday cell by day name (Sun..Sat) and hour."""
        if not self.intraday:
            return PerformanceBucket()
        return self.intraday[DAY_NAMES.index(day)][hour]

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {
            "total_trades": self.total_trades,
            "total_profit": self.total_profit,
            "win_rate": self.win_rate,
            "winning_trades": self.winning_trades,
            "losing_trades": self.losing_trades,
            "profit_factor": self.profit_factor.to_json(),
            "average_win": self.average_win,
            "average_loss": self.average_loss,
            "risk_reward_ratio": self.risk_reward_ratio.to_json(),
            "max_drawdown": self.max_drawdown,
            "max_drawdown_percent": self.max_drawdown_percent,
            "equity_curve": [
                {"trade_number": p.trade_number, "balance": p.balance}
                for p in self.equity_curve
            ],
            "day_of_week": {
                DAY_NAMES[i]: {"trades": b.trades, "profit": b.profit}
                for i, b in enumerate(self.day_of_week)
            },
            "intraday": {
                DAY_NAMES[d]: {
                    hour: {"trades": b.trades, "profit": b.profit}
                    for hour, b in enumerate(hours)
                    if b.trades
                }
                for d, hours in enumerate(self.intraday)
            },
            "weekly": [_period_dict(p) for p in self.weekly],
            "monthly": [_period_dict(p) for p in self.monthly],
            "yearly": [_period_dict(p) for p in self.yearly],
            "symbols": [
                {
                    "symbol": s.symbol,
                    "profit": s.profit,
                    "win_rate": s.win_rate,
                    "trades": s.trades,
                }
                for s in self.symbols
            ],
            "trades": [trade_to_dict(t) for t in self.trades],
        }


def _period_dict(period: PeriodPerformance) -> dict:
    return {"period": period.period, "profit": period.profit, "trades": period.trades}


def trade_to_dict(trade: Trade) -> dict:
    """Convert a Trade to a dictionary for JSON storage."""
    return {
        "ticket": trade.ticket,
        "open_time": trade.open_time.isoformat() if trade.open_time else None,
        "close_time": trade.close_time.isoformat(),
        "symbol": trade.symbol,
        "profit": trade.profit,
        "journal": trade.journal,
        "emotion_before": trade.emotion_before.value if trade.emotion_before else None,
        "emotion_after": trade.emotion_after.value if trade.emotion_after else None,
        "tags": sorted(trade.tags),
        "news_analysis": trade.news_analysis,
    }


def dict_to_trade(data: dict) -> Trade:
    """Convert a dictionary from JSON to a Trade."""
    return Trade(
        ticket=int(data["ticket"]),
        open_time=(
            datetime.fromisoformat(data["open_time"])
            if data.get("open_time")
            else None
        ),
        close_time=datetime.fromisoformat(data["close_time"]),
        symbol=data.get("symbol") or UNKNOWN_SYMBOL,
        profit=float(data["profit"]),
        journal=data.get("journal"),
        emotion_before=(
            Emotion(data["emotion_before"]) if data.get("emotion_before") else None
        ),
        emotion_after=(
            Emotion(data["emotion_after"]) if data.get("emotion_after") else None
        ),
        tags=normalize_tags(data.get("tags") or ()),
        news_analysis=data.get("news_analysis"),
    )
