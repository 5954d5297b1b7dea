"""Analytics page - Equity curve, heatmaps and rollups."""
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.dashboard.session import get_manager, get_settings, get_state
from src.journal.models import DAY_NAMES

st.set_page_config(page_title="Analytics | TradePulse", page_icon="📊", layout="wide")

st.title("📊 Performance Analytics")

settings = get_settings()
manager = get_manager()
state = get_state()
template = settings.dashboard.plotly_template

report = state.filtered_report(manager.pattern_analyzer)
if report is None or report.total_trades == 0:
    st.info("No trades to analyze. Import a trade history on the Home page.", icon="📂")
    st.stop()

st.caption(f"Displaying: **{state.title}**")


def bar_colors(values: list[float]) -> list[str]:
    return ["green" if v >= 0 else "red" for v in values]


st.subheader("📈 Equity Curve")

fig = go.Figure()
fig.add_trace(
    go.Scatter(
        x=[p.trade_number for p in report.equity_curve],
        y=[p.balance for p in report.equity_curve],
        mode="lines",
        name="Balance",
        line=dict(color="#8b5cf6"),
    )
)
fig.update_layout(xaxis_title="Trade #", yaxis_title="Balance", template=template)
st.plotly_chart(fig, use_container_width=True)

st.divider()

st.subheader("🗓️ Performance Over Time")

tab1, tab2, tab3 = st.tabs(["Weekly", "Monthly", "Yearly"])
for tab, periods in ((tab1, report.weekly), (tab2, report.monthly), (tab3, report.yearly)):
    with tab:
        profits = [p.profit for p in periods]
        fig = go.Figure(
            data=[go.Bar(x=[p.period for p in periods], y=profits, marker_color=bar_colors(profits))]
        )
        fig.update_layout(template=template)
        st.plotly_chart(fig, use_container_width=True)

st.divider()

col1, col2 = st.columns(2)

with col1:
    st.subheader("📅 Day of Week")
    profits = [b.profit for b in report.day_of_week]
    fig = go.Figure(data=[go.Bar(x=list(DAY_NAMES), y=profits, marker_color=bar_colors(profits))])
    fig.update_layout(template=template)
    st.plotly_chart(fig, use_container_width=True)

with col2:
    st.subheader("⏰ Time of Day")
    block_hours = settings.dashboard.heatmap_block_hours
    blocks = manager.pattern_analyzer.hour_blocks(report, block_hours=block_hours)
    fig = go.Figure(
        data=go.Heatmap(
            z=[[b.profit for b in row] for row in blocks],
            x=[f"{h:02d}:00" for h in range(0, 24, block_hours)],
            y=list(DAY_NAMES),
            text=[[f"{b.trades} trades" for b in row] for row in blocks],
            colorscale="RdYlGn",
            zmid=0,
        )
    )
    fig.update_layout(template=template)
    st.plotly_chart(fig, use_container_width=True)

st.divider()

st.subheader("💱 Symbol Performance")

symbols = pd.DataFrame(
    [
        {"Symbol": s.symbol, "Profit": s.profit, "Win Rate %": s.win_rate, "Trades": s.trades}
        for s in report.symbols
    ]
)
st.dataframe(symbols, use_container_width=True, hide_index=True)
