"""Dashboard state management."""
from dataclasses import dataclass, replace

from src.dashboard.models import ViewMode
from src.journal.accounts import Account
from src.journal.aggregator import combine_accounts
from src.journal.goals import Goals
from src.journal.models import AnalyticsReport, Trade
from src.journal.pattern_analyzer import PatternAnalyzer


@dataclass(frozen=True)
class DashboardState:
    """Immutable application state of the dashboard.

    Every transition returns a new state. Reports are derived from the
    accounts each time they are requested and are never stored.
    """

    accounts: tuple[Account, ...] = ()
    selected_account_id: str | None = None
    view_mode: ViewMode = ViewMode.INDIVIDUAL
    active_tags: tuple[str, ...] = ()

    @classmethod
    def from_accounts(cls, accounts: list[Account]) -> "DashboardState":
        """Build the initial state, selecting the first account."""
        return cls(
            accounts=tuple(accounts),
            selected_account_id=accounts[0].id if accounts else None,
        )

    def account(self, account_id: str) -> Account:
        """Look up an account.

        Raises:
            KeyError: If no account has that id.
        """
        for account in self.accounts:
            if account.id == account_id:
                return account
        raise KeyError(f"Unknown account: {account_id}")

    @property
    def active_account(self) -> Account | None:
        if self.selected_account_id is None:
            return None
        try:
            return self.account(self.selected_account_id)
        except KeyError:
            return None

    @property
    def is_portfolio(self) -> bool:
        return self.view_mode is ViewMode.PORTFOLIO and len(self.accounts) >= 2

    @property
    def journaling_enabled(self) -> bool:
        """Journal edits need a single account to write to."""
        return not self.is_portfolio and self.active_account is not None

    @property
    def title(self) -> str:
        if self.is_portfolio:
            return "Combined Portfolio"
        active = self.active_account
        return active.name if active else "Dashboard"

    def base_report(self) -> AnalyticsReport | None:
        """Report over the selected account, or every account in portfolio mode."""
        if self.is_portfolio:
            return combine_accounts(self.accounts)
        active = self.active_account
        return active.report() if active else None

    def filtered_report(self, analyzer: PatternAnalyzer | None = None) -> AnalyticsReport | None:
        """Base report recomputed over trades carrying every active tag."""
        report = self.base_report()
        if report is None:
            return None
        return (analyzer or PatternAnalyzer()).filter_by_tags(report, self.active_tags)

    def available_tags(self, analyzer: PatternAnalyzer | None = None) -> list[str]:
        report = self.base_report()
        if report is None:
            return []
        return (analyzer or PatternAnalyzer()).unique_tags(report)

    def add_account(self, account: Account) -> "DashboardState":
        """Append an account and switch to it."""
        return replace(
            self,
            accounts=self.accounts + (account,),
            selected_account_id=account.id,
            view_mode=ViewMode.INDIVIDUAL,
            active_tags=(),
        )

    def select_account(self, account_id: str) -> "DashboardState":
        self.account(account_id)
        return replace(self, selected_account_id=account_id, active_tags=())

    def set_view_mode(self, mode: ViewMode) -> "DashboardState":
        """Switch between a single account and the combined portfolio.

        Raises:
            ValueError: If portfolio mode is requested with fewer than two
                accounts.
        """
        if mode is ViewMode.PORTFOLIO and len(self.accounts) < 2:
            raise ValueError("Portfolio view needs at least two accounts")
        return replace(self, view_mode=mode, active_tags=())

    def toggle_tag(self, tag: str) -> "DashboardState":
        if tag in self.active_tags:
            tags = tuple(t for t in self.active_tags if t != tag)
        else:
            tags = self.active_tags + (tag,)
        return replace(self, active_tags=tags)

    def clear_tags(self) -> "DashboardState":
        return replace(self, active_tags=())

    def update_trade(self, trade: Trade) -> "DashboardState":
        """Replace a trade of the selected account with an edited copy.

        Raises:
            ValueError: If journaling is not possible in the current view.
            KeyError: If the account has no trade with that ticket.
        """
        if not self.journaling_enabled:
            raise ValueError("Trades can only be journaled in individual view")
        return self._replace_account(self.active_account.replace_trade(trade))

    def update_goals(self, goals: Goals) -> "DashboardState":
        """Set the goals of the selected account.

        Raises:
            ValueError: If goals cannot be edited in the current view.
        """
        if not self.journaling_enabled:
            raise ValueError("Goals can only be edited in individual view")
        return self._replace_account(replace(self.active_account, goals=goals))

    def _replace_account(self, updated: Account) -> "DashboardState":
        accounts = tuple(updated if a.id == updated.id else a for a in self.accounts)
        return replace(self, accounts=accounts)
