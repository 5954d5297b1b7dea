"""Journal page - Trade log, journaling and emotions."""
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.dashboard.session import get_manager, get_settings, get_state, set_state
from src.journal.models import Emotion

st.set_page_config(page_title="Journal | TradePulse", page_icon="📓", layout="wide")

st.title("📓 Trade Journal")

settings = get_settings()
manager = get_manager()
state = get_state()

report = state.filtered_report(manager.pattern_analyzer)
if report is None or report.total_trades == 0:
    st.info("No trades to journal. Import a trade history on the Home page.", icon="📂")
    st.stop()

st.subheader("🧠 Emotions")

emotions = manager.pattern_analyzer.emotion_breakdown(report.trades)
if emotions:
    fig = go.Figure(
        data=[
            go.Bar(name="Before", x=[e.emotion.value for e in emotions], y=[e.before for e in emotions]),
            go.Bar(name="After", x=[e.emotion.value for e in emotions], y=[e.after for e in emotions]),
        ]
    )
    fig.update_layout(barmode="group", template=settings.dashboard.plotly_template)
    st.plotly_chart(fig, use_container_width=True)
else:
    st.caption("No emotional data logged yet. Pick a trade below to add your emotions.")

st.divider()

st.subheader("📋 Trade Log")

recent = list(reversed(report.trades))[: settings.dashboard.max_trades_displayed]
log = pd.DataFrame(
    [
        {
            "Ticket": t.ticket,
            "Closed": t.close_time,
            "Symbol": t.symbol,
            "Profit": t.profit,
            "Tags": ", ".join(sorted(t.tags)),
            "Journaled": bool(t.journal),
        }
        for t in recent
    ]
)
st.dataframe(log, use_container_width=True, hide_index=True)

if not state.journaling_enabled:
    st.info("Journaling is available in individual account view.")
    st.stop()

st.subheader("✍️ Journal Entry")

tickets = [t.ticket for t in recent]
ticket = st.selectbox("Trade", options=tickets)
trade = next(t for t in recent if t.ticket == ticket)

emotion_options = [None, *Emotion]


def emotion_label(emotion: Emotion | None) -> str:
    return "-" if emotion is None else emotion.value


with st.form("journal"):
    journal = st.text_area("Notes", value=trade.journal or "")
    col1, col2 = st.columns(2)
    with col1:
        before = st.selectbox(
            "Emotion before",
            options=emotion_options,
            index=emotion_options.index(trade.emotion_before),
            format_func=emotion_label,
        )
    with col2:
        after = st.selectbox(
            "Emotion after",
            options=emotion_options,
            index=emotion_options.index(trade.emotion_after),
            format_func=emotion_label,
        )
    tags = st.text_input("Tags (comma separated)", value=", ".join(sorted(trade.tags)))
    news = st.text_area("Market context", value=trade.news_analysis or "")

    if st.form_submit_button("Save"):
        updated = trade.with_journal(
            journal=journal or None,
            emotion_before=before,
            emotion_after=after,
            tags=tags.split(","),
            news_analysis=news or None,
        )
        set_state(state.update_trade(updated), persist=True)
        st.success("Saved")
        st.rerun()
