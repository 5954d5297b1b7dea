"""Data models for the dashboard."""
from enum import Enum


class ViewMode(Enum):
    """Which trades the dashboard reports on."""

    INDIVIDUAL = "individual"
    PORTFOLIO = "portfolio"
