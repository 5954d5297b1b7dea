# src/journal/accounts.py
"""Trading account holding a journaled trade history."""
import uuid
from dataclasses import dataclass, field, replace

from src.journal.goals import Goals
from src.journal.metrics_calculator import compute
from src.journal.models import AnalyticsReport, Trade, dict_to_trade, trade_to_dict


def new_account_id() -> str:
    return f"acc_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class Account:
    """A named trade history with its goals.

    The report is derived from the trades whenever it is asked for.
    """

    id: str
    name: str
    trades: tuple[Trade, ...]
    goals: Goals = field(default_factory=Goals)

    def report(self) -> AnalyticsReport:
        return compute(self.trades)

    def replace_trade(self, updated: Trade) -> "Account":
        """Return a copy where the trade with the same ticket is replaced.

        Raises:
            KeyError: If no trade has that ticket.
        """
        if not any(t.ticket == updated.ticket for t in self.trades):
            raise KeyError(f"Unknown ticket {updated.ticket} in account {self.id}")

        trades = tuple(updated if t.ticket == updated.ticket else t for t in self.trades)
        return replace(self, trades=trades)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "goals": self.goals.to_dict(),
            "trades": [trade_to_dict(t) for t in self.trades],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        trades = [dict_to_trade(t) for t in data["trades"]]
        trades.sort(key=lambda t: t.close_time)
        return cls(
            id=data["id"],
            name=data["name"],
            trades=tuple(trades),
            goals=Goals.from_dict(data.get("goals")),
        )
