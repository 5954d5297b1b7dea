# src/journal/csv_importer.py
"""Importer turning exported trade history CSV into trade records."""
import io
import logging
import math
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pandas as pd

from src.journal.models import UNKNOWN_SYMBOL, Trade, normalize_tags

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("ticket", "closetime", "symbol", "profit")


class TradeImportError(ValueError):
    """Raised when a CSV file cannot be turned into a trade list."""


class CsvImporter:
    """Parses delimited trade history into trades sorted by close time.

    Required columns are ticket, closeTime, symbol and profit (any case).
    Optional columns are openTime, journal and tags.
    """

    def __init__(self, tag_separator: str = ";", timezone: str | None = None) -> None:
        """Initialize the importer.

        Args:
            tag_separator: Separator inside the tags column.
            timezone: IANA zone close times are expressed in. Aware
                timestamps are converted to it, naive ones are assumed in it.
        """
        self._tag_separator = tag_separator
        self._timezone = ZoneInfo(timezone) if timezone else None

    def parse(self, csv_text: str) -> list[Trade]:
        """Parse CSV text into trades.

        Args:
            csv_text: File contents with a header row.

        Returns:
            Trades sorted ascending by close time.

        Raises:
            TradeImportError: If the header or every row is unusable.
        """
        text = csv_text.strip()
        if len(text.splitlines()) < 2:
            raise TradeImportError("CSV file must have a header and at least one data row.")

        try:
            frame = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                on_bad_lines="skip",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise TradeImportError(f"Unreadable CSV: {e}") from e

        frame.columns = [str(c).strip().lower() for c in frame.columns]
        for column in REQUIRED_COLUMNS:
            if column not in frame.columns:
                raise TradeImportError(f"Missing required column in CSV: {column}")

        trades: list[Trade] = []
        for line_number, row in enumerate(frame.to_dict("records"), start=2):
            trade = self._row_to_trade(row)
            if trade is None:
                logger.warning(f"Skipping invalid row {line_number}: {row}")
                continue
            trades.append(trade)

        if not trades:
            raise TradeImportError("No valid trade data found in the file.")

        aware = {t.close_time.tzinfo is not None for t in trades}
        if len(aware) > 1:
            raise TradeImportError(
                "Close times mix timezone-aware and naive values; set a timezone"
            )

        trades.sort(key=lambda t: t.close_time)
        logger.info(f"Parsed {len(trades)} trades ({len(frame) - len(trades)} rows skipped)")
        return trades

    def parse_file(self, path: Path) -> list[Trade]:
        """Read and parse a CSV file.

        Raises:
            TradeImportError: If the file is missing or unusable.
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except OSError as e:
            raise TradeImportError(f"Cannot read {path}: {e}") from e
        return self.parse(text)

    def _row_to_trade(self, row: dict) -> Trade | None:
        """Convert one CSV row, or None if a required field is invalid."""
        close_time = self._parse_time(_cell(row, "closetime"))
        if close_time is None:
            return None

        try:
            ticket = int(float(_cell(row, "ticket")))
            profit = float(_cell(row, "profit"))
        except (ValueError, OverflowError):
            return None
        if not math.isfinite(profit):
            return None

        tags = _cell(row, "tags")
        return Trade(
            ticket=ticket,
            open_time=self._parse_time(_cell(row, "opentime")),
            close_time=close_time,
            symbol=_cell(row, "symbol") or UNKNOWN_SYMBOL,
            profit=profit,
            journal=_cell(row, "journal") or None,
            tags=normalize_tags(tags.split(self._tag_separator)) if tags else frozenset(),
        )

    def _parse_time(self, value: str) -> datetime | None:
        if not value:
            return None
        try:
            timestamp = pd.Timestamp(value)
        except (ValueError, TypeError):
            return None
        if pd.isna(timestamp):
            return None

        moment = timestamp.to_pydatetime()
        if self._timezone is None:
            return moment
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self._timezone)
        return moment.astimezone(self._timezone)


def _cell(row: dict, column: str) -> str:
    value = row.get(column)
    return value.strip() if isinstance(value, str) else ""
