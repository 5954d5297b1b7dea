# src/journal/journal_manager.py
"""Manager for orchestrating all journal components."""
import logging
from typing import Iterable, Sequence

from src.journal.account_store import AccountStore
from src.journal.accounts import Account, new_account_id
from src.journal.aggregator import combine_accounts
from src.journal.csv_importer import CsvImporter
from src.journal.goals import Goals
from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import AnalyticsReport
from src.journal.pattern_analyzer import PatternAnalyzer
from src.journal.sample_data import generate_sample_csv
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class JournalManager:
    """Orchestrates all journal components for importing and analysis.

    Coordinates CsvImporter, AccountStore, MetricsCalculator and
    PatternAnalyzer. Account lists go in and new lists come out; nothing is
    modified in place.
    """

    def __init__(self, settings: JournalSettings, timezone: str | None = None) -> None:
        """Initialize the journal manager with all components.

        Args:
            settings: Journal configuration settings.
            timezone: Zone close times are bucketed in.
        """
        self._settings = settings
        self._store = AccountStore(settings)
        self._importer = CsvImporter(tag_separator=settings.tag_separator, timezone=timezone)
        self._metrics_calculator = MetricsCalculator()
        self._pattern_analyzer = PatternAnalyzer(self._metrics_calculator)

    @property
    def pattern_analyzer(self) -> PatternAnalyzer:
        return self._pattern_analyzer

    async def load_accounts(self) -> list[Account]:
        """Load stored accounts, or none if persistence is disabled."""
        if not self._settings.enabled:
            return []
        accounts = await self._store.load_accounts()
        logger.info(f"Loaded {len(accounts)} accounts")
        return accounts

    async def save_accounts(self, accounts: Sequence[Account]) -> None:
        """Persist the account collection if persistence is enabled."""
        if not self._settings.enabled:
            return
        await self._store.save_accounts(list(accounts))

    def create_account(
        self,
        csv_text: str,
        existing_count: int,
        is_sample: bool = False,
        name: str | None = None,
    ) -> Account:
        """Build a new account from CSV text.

        Args:
            csv_text: Exported trade history.
            existing_count: Number of accounts already present, for naming.
            is_sample: Whether the data is generated sample data.
            name: Display name. Defaults to "Account N".

        Returns:
            A new Account with the configured default goals.

        Raises:
            TradeImportError: If the CSV cannot be imported.
        """
        trades = self._importer.parse(csv_text)
        if not name:
            name = f"Account {existing_count + 1}"
            if is_sample:
                name += " (Sample)"

        defaults = self._settings.default_goals
        account = Account(
            id=new_account_id(),
            name=name,
            trades=tuple(trades),
            goals=Goals(
                total_profit=defaults.total_profit,
                win_rate=defaults.win_rate,
                max_drawdown=defaults.max_drawdown,
            ),
        )
        logger.info(f"Imported {len(trades)} trades into {account.name} ({account.id})")
        return account

    async def import_account(
        self,
        accounts: Sequence[Account],
        csv_text: str,
        is_sample: bool = False,
        name: str | None = None,
    ) -> list[Account]:
        """Import CSV text as a new account and persist the collection.

        Returns:
            The previous accounts followed by the new one.

        Raises:
            TradeImportError: If the CSV cannot be imported.
        """
        account = self.create_account(
            csv_text, len(accounts), is_sample=is_sample, name=name
        )
        updated = [*accounts, account]
        await self.save_accounts(updated)
        return updated

    async def import_sample(self, accounts: Sequence[Account]) -> list[Account]:
        """Import generated sample data as a new account."""
        csv_text = generate_sample_csv(num_trades=self._settings.sample_trades)
        return await self.import_account(accounts, csv_text, is_sample=True)

    def build_report(
        self,
        accounts: Sequence[Account],
        account_id: str | None = None,
        portfolio: bool = False,
        tags: Iterable[str] = (),
    ) -> AnalyticsReport:
        """Compute the report for one account or for all of them.

        Args:
            accounts: Available accounts.
            account_id: Account to report on. Defaults to the first one.
            portfolio: Combine every account instead.
            tags: Only include trades carrying all of these tags.

        Raises:
            KeyError: If account_id does not match an account.
        """
        if portfolio:
            report = combine_accounts(accounts, self._metrics_calculator)
        elif account_id is None:
            trades = accounts[0].trades if accounts else ()
            report = self._metrics_calculator.calculate(trades)
        else:
            matches = [a for a in accounts if a.id == account_id]
            if not matches:
                raise KeyError(f"Unknown account: {account_id}")
            report = self._metrics_calculator.calculate(matches[0].trades)

        return self._pattern_analyzer.filter_by_tags(report, tags)
