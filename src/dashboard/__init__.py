"""Streamlit dashboard for trade journal analytics."""

from src.dashboard.models import ViewMode
from src.dashboard.settings import DashboardSettings
from src.dashboard.state import DashboardState

__all__ = [
    "DashboardSettings",
    "DashboardState",
    "ViewMode",
]
