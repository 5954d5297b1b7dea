"""Home page - Account selection, import and headline metrics."""
import streamlit as st

from src.dashboard.models import ViewMode
from src.dashboard.session import get_manager, get_settings, get_state, set_state
from src.journal.csv_importer import TradeImportError
from src.journal.goals import Goals, GoalStatus, evaluate_goals
from src.journal.sample_data import generate_sample_csv

st.set_page_config(
    page_title="TradePulse Analytics",
    page_icon="📈",
    layout="wide",
)

settings = get_settings()
manager = get_manager()
state = get_state()
currency = settings.dashboard.currency_symbol

st.title("📈 TradePulse Analytics")


def import_csv(csv_text: str, is_sample: bool = False) -> None:
    try:
        account = manager.create_account(csv_text, len(state.accounts), is_sample=is_sample)
    except TradeImportError as e:
        st.error(f"Failed to process data: {e}. Please check the file format.")
        return
    set_state(state.add_account(account), persist=True)
    st.rerun()


with st.expander("➕ Import trades", expanded=not state.accounts):
    uploaded = st.file_uploader(
        "Trade history CSV (ticket, closeTime, symbol, profit)",
        type=["csv"],
    )
    col1, col2 = st.columns(2)
    with col1:
        if uploaded is not None and st.button("Import file"):
            import_csv(uploaded.getvalue().decode("utf-8-sig"))
    with col2:
        if st.button("Use sample data"):
            import_csv(
                generate_sample_csv(num_trades=settings.journal.sample_trades),
                is_sample=True,
            )

if not state.accounts:
    st.info("Import a trade history to get started.", icon="📂")
    st.stop()

col1, col2, col3 = st.columns([1, 2, 3])

with col1:
    modes = [ViewMode.INDIVIDUAL]
    if len(state.accounts) >= 2:
        modes.append(ViewMode.PORTFOLIO)
    mode = st.radio(
        "View",
        options=modes,
        format_func=lambda m: m.value.title(),
        index=modes.index(state.view_mode) if state.view_mode in modes else 0,
    )
    if mode is not state.view_mode:
        set_state(state.set_view_mode(mode))
        st.rerun()

with col2:
    if not state.is_portfolio:
        ids = [a.id for a in state.accounts]
        selected = st.selectbox(
            "Account",
            options=ids,
            format_func=lambda account_id: state.account(account_id).name,
            index=ids.index(state.selected_account_id) if state.selected_account_id in ids else 0,
        )
        if selected != state.selected_account_id:
            set_state(state.select_account(selected))
            st.rerun()

with col3:
    tags = state.available_tags(manager.pattern_analyzer)
    if tags:
        chosen = st.multiselect("Filter by tag", options=tags, default=list(state.active_tags))
        if tuple(chosen) != state.active_tags:
            new_state = state.clear_tags()
            for tag in chosen:
                new_state = new_state.toggle_tag(tag)
            set_state(new_state)
            st.rerun()

report = state.filtered_report(manager.pattern_analyzer)

st.caption(f"Displaying: **{state.title}**")
st.divider()

st.subheader("📊 Key Metrics")

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Total P&L", f"{currency}{report.total_profit:,.2f}")
    st.metric("Total Trades", report.total_trades)
with col2:
    st.metric("Win Rate", f"{report.win_rate:.1f}%")
    st.metric("Profit Factor", report.profit_factor.format())
with col3:
    st.metric("Average Win", f"{currency}{report.average_win:,.2f}")
    st.metric("Average Loss", f"{currency}{report.average_loss:,.2f}")
with col4:
    st.metric("Risk/Reward", report.risk_reward_ratio.format())
    st.metric("Max Drawdown", f"{report.max_drawdown_percent:.1f}%")

st.divider()

st.subheader("🎯 Goals")

active = state.active_account
if not state.journaling_enabled or active is None:
    st.info("Goals are tracked per account. Switch to individual view to see them.")
else:
    status_icons = {GoalStatus.GOOD: "🟢", GoalStatus.FAIR: "🟡", GoalStatus.POOR: "🔴"}
    progress = evaluate_goals(active.goals, report)
    if not progress:
        st.caption("Set your performance goals below to start tracking your progress.")
    for goal in progress:
        st.markdown(
            f"{status_icons[goal.status]} **{goal.label}**: "
            f"{goal.current:,.1f} / {goal.target:,.1f}"
        )
        st.progress(goal.progress_percent / 100)

    with st.form("goals"):
        total_profit = st.number_input(
            f"Total Profit Target ({currency})",
            value=float(active.goals.total_profit or 0.0),
            min_value=0.0,
        )
        win_rate = st.number_input(
            "Win Rate Target (%)",
            value=float(active.goals.win_rate or 0.0),
            min_value=0.0,
            max_value=100.0,
        )
        max_drawdown = st.number_input(
            "Max Drawdown Limit (%)",
            value=float(active.goals.max_drawdown or 0.0),
            min_value=0.0,
            max_value=100.0,
        )
        if st.form_submit_button("Save Goals"):
            goals = Goals(
                total_profit=total_profit or None,
                win_rate=win_rate or None,
                max_drawdown=max_drawdown or None,
            )
            set_state(state.update_goals(goals), persist=True)
            st.rerun()
