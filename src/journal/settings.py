# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, field_validator


class GoalDefaults(BaseModel):
    """Targets given to a newly imported account."""

    total_profit: float | None = Field(default=1000.0, ge=0)
    win_rate: float | None = Field(default=60.0, ge=0, le=100)
    max_drawdown: float | None = Field(default=10.0, ge=0, le=100)


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        enabled: Whether account changes are persisted.
        data_dir: Directory holding the account collection.
        accounts_file: File name of the account collection.
        tag_separator: Separator of the optional CSV tags column.
        sample_trades: Number of trades in generated sample data.
        default_goals: Targets for newly imported accounts.
    """

    enabled: bool = True
    data_dir: str = "data/accounts"
    accounts_file: str = "accounts.json"

    tag_separator: str = ";"
    sample_trades: int = Field(default=120, ge=1, le=10_000)

    default_goals: GoalDefaults = Field(default_factory=GoalDefaults)

    @field_validator("accounts_file")
    @classmethod
    def validate_accounts_file(cls, v: str) -> str:
        """Validate that accounts_file is a plain JSON file name."""
        if "/" in v or "\\" in v or not v.endswith(".json"):
            raise ValueError(f"Invalid accounts file: {v}. Must be a .json file name")
        return v
