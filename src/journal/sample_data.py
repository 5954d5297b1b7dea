# src/journal/sample_data.py
"""Deterministic sample trade history for trying out the dashboard."""
import random
from datetime import datetime, timedelta

SAMPLE_SYMBOLS = ("EURUSD", "GBPUSD", "USDJPY", "XAUUSD", "US30")
SAMPLE_TAGS = ("breakout", "news", "reversal", "trend", "scalp")


def generate_sample_csv(
    num_trades: int = 120,
    seed: int = 42,
    start: datetime = datetime(2024, 1, 2, 8, 0),
) -> str:
    """Generate a CSV export of plausible closed trades.

    Args:
        num_trades: Number of rows to generate.
        seed: Seed for reproducible output.
        start: Open time of the first trade.

    Returns:
        CSV text with ticket, openTime, closeTime, symbol, profit and tags.
    """
    rng = random.Random(seed)
    lines = ["ticket,openTime,closeTime,symbol,profit,tags"]
    open_time = start

    for i in range(num_trades):
        open_time += timedelta(hours=rng.randint(2, 30))
        close_time = open_time + timedelta(minutes=rng.randint(5, 600))
        symbol = rng.choice(SAMPLE_SYMBOLS)
        if rng.random() < 0.55:
            profit = round(rng.uniform(10, 250), 2)
        else:
            profit = -round(rng.uniform(10, 180), 2)
        tags = ";".join(sorted(rng.sample(SAMPLE_TAGS, rng.randint(0, 2))))
        lines.append(
            f"{100000 + i},{open_time.isoformat()},{close_time.isoformat()},"
            f"{symbol},{profit},{tags}"
        )

    return "\n".join(lines) + "\n"
