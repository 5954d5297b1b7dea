"""Streamlit session wiring for the dashboard state."""
import asyncio
import os
from pathlib import Path

import streamlit as st

from src.config.settings import Settings
from src.dashboard.state import DashboardState
from src.journal.journal_manager import JournalManager

STATE_KEY = "dashboard_state"


@st.cache_resource
def get_settings() -> Settings:
    config_path = Path(os.getenv("TRADEPULSE_CONFIG", "config/settings.yaml"))
    return Settings.load(config_path)


@st.cache_resource
def get_manager() -> JournalManager:
    settings = get_settings()
    return JournalManager(settings.journal, timezone=settings.system.timezone)


def get_state() -> DashboardState:
    """Current state of this browser session, loaded from storage once."""
    if STATE_KEY not in st.session_state:
        accounts = asyncio.run(get_manager().load_accounts())
        st.session_state[STATE_KEY] = DashboardState.from_accounts(accounts)
    return st.session_state[STATE_KEY]


def set_state(state: DashboardState, persist: bool = False) -> None:
    """Replace the session state, optionally saving the accounts."""
    st.session_state[STATE_KEY] = state
    if persist:
        asyncio.run(get_manager().save_accounts(state.accounts))
