"""Settings for the Streamlit dashboard."""
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DashboardSettings(BaseModel):
    """Configuration for the dashboard."""

    max_trades_displayed: int = Field(default=200, gt=0)
    heatmap_block_hours: int = Field(default=4, gt=0, le=24)
    currency_symbol: str = "$"
    theme: Literal["light", "dark"] = "light"

    @field_validator("heatmap_block_hours")
    @classmethod
    def validate_block_hours(cls, v: int) -> int:
        """Validate that blocks tile a whole day."""
        if 24 % v:
            raise ValueError(f"heatmap_block_hours must divide 24, got {v}")
        return v

    @property
    def plotly_template(self) -> str:
        return "plotly_dark" if self.theme == "dark" else "plotly_white"
