# src/journal/__init__.py
"""Journal module for trade history and analytics."""

from .account_store import AccountStore
from .accounts import Account
from .aggregator import combine_accounts, merge_trades
from .csv_importer import CsvImporter, TradeImportError
from .goals import GoalProgress, Goals, GoalStatus, evaluate_goals
from .journal_manager import JournalManager
from .metrics_calculator import MetricsCalculator, compute
from .models import (
    AnalyticsReport,
    Emotion,
    EquityPoint,
    PerformanceBucket,
    PeriodPerformance,
    Ratio,
    SymbolPerformance,
    Trade,
)
from .pattern_analyzer import EmotionCount, PatternAnalyzer
from .periods import Period
from .settings import JournalSettings

__all__ = [
    "Account",
    "AccountStore",
    "AnalyticsReport",
    "CsvImporter",
    "Emotion",
    "EmotionCount",
    "EquityPoint",
    "GoalProgress",
    "GoalStatus",
    "Goals",
    "JournalManager",
    "JournalSettings",
    "MetricsCalculator",
    "PatternAnalyzer",
    "PerformanceBucket",
    "Period",
    "PeriodPerformance",
    "Ratio",
    "SymbolPerformance",
    "Trade",
    "TradeImportError",
    "combine_accounts",
    "compute",
    "evaluate_goals",
    "merge_trades",
]
