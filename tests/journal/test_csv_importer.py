# tests/journal/test_csv_importer.py
"""Tests for CsvImporter."""
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from src.journal.csv_importer import CsvImporter, TradeImportError
from src.journal.sample_data import generate_sample_csv


class TestCsvImporter:
    """Tests for CsvImporter.parse."""

    @pytest.fixture
    def importer(self) -> CsvImporter:
        return CsvImporter()

    def test_parse_basic_rows(self, importer: CsvImporter) -> None:
        """parse should read the required columns into trades."""
        csv_text = (
            "ticket,closeTime,symbol,profit\n"
            "101,2024-01-01 10:00:00,EURUSD,100.5\n"
            "102,2024-01-02 11:30:00,GBPUSD,-40\n"
        )

        trades = importer.parse(csv_text)

        assert len(trades) == 2
        assert trades[0].ticket == 101
        assert trades[0].close_time == datetime(2024, 1, 1, 10, 0)
        assert trades[0].symbol == "EURUSD"
        assert trades[0].profit == 100.5
        assert trades[0].open_time is None
        assert trades[1].profit == -40.0

    def test_parse_sorts_by_close_time(self, importer: CsvImporter) -> None:
        csv_text = (
            "ticket,closeTime,symbol,profit\n"
            "3,2024-01-03 09:00,EURUSD,1\n"
            "1,2024-01-01 09:00,EURUSD,2\n"
            "2,2024-01-02 09:00,EURUSD,3\n"
        )

        trades = importer.parse(csv_text)

        assert [t.ticket for t in trades] == [1, 2, 3]

    def test_header_is_case_insensitive(self, importer: CsvImporter) -> None:
        csv_text = "TICKET, CloseTime ,Symbol,PROFIT\n7,2024-01-01 10:00,XAUUSD,12\n"

        trades = importer.parse(csv_text)

        assert trades[0].ticket == 7
        assert trades[0].symbol == "XAUUSD"

    def test_optional_columns(self, importer: CsvImporter) -> None:
        csv_text = (
            "ticket,openTime,closeTime,symbol,profit,journal,tags\n"
            "5,2024-01-01 09:00,2024-01-01 10:00,EURUSD,25,Waited for retest,"
            "Breakout; London Open\n"
        )

        (trade,) = importer.parse(csv_text)

        assert trade.open_time == datetime(2024, 1, 1, 9, 0)
        assert trade.journal == "Waited for retest"
        assert trade.tags == frozenset({"breakout", "london-open"})

    def test_missing_required_column(self, importer: CsvImporter) -> None:
        csv_text = "ticket,closeTime,profit\n1,2024-01-01 10:00,5\n"

        with pytest.raises(TradeImportError, match="Missing required column in CSV: symbol"):
            importer.parse(csv_text)

    def test_header_only(self, importer: CsvImporter) -> None:
        with pytest.raises(TradeImportError, match="header and at least one data row"):
            importer.parse("ticket,closeTime,symbol,profit\n")

    def test_empty_text(self, importer: CsvImporter) -> None:
        with pytest.raises(TradeImportError):
            importer.parse("")

    def test_invalid_rows_are_skipped(self, importer: CsvImporter) -> None:
        """Rows with a bad ticket, time or profit should be dropped."""
        csv_text = (
            "ticket,closeTime,symbol,profit\n"
            "1,2024-01-01 10:00,EURUSD,10\n"
            "abc,2024-01-01 11:00,EURUSD,10\n"
            "3,not a date,EURUSD,10\n"
            "4,2024-01-01 12:00,EURUSD,lots\n"
            "5,2024-01-01 13:00,EURUSD,inf\n"
            "6,,EURUSD,10\n"
            "7,2024-01-01 14:00,EURUSD,-3\n"
        )

        trades = importer.parse(csv_text)

        assert [t.ticket for t in trades] == [1, 7]

    def test_all_rows_invalid(self, importer: CsvImporter) -> None:
        csv_text = "ticket,closeTime,symbol,profit\nx,2024-01-01 10:00,EURUSD,1\n"

        with pytest.raises(TradeImportError, match="No valid trade data found"):
            importer.parse(csv_text)

    def test_blank_symbol_becomes_unknown(self, importer: CsvImporter) -> None:
        csv_text = "ticket,closeTime,symbol,profit\n1,2024-01-01 10:00,,5\n"

        (trade,) = importer.parse(csv_text)

        assert trade.symbol == "Unknown"

    def test_custom_tag_separator(self) -> None:
        importer = CsvImporter(tag_separator="|")
        csv_text = "ticket,closeTime,symbol,profit,tags\n1,2024-01-01 10:00,EURUSD,5,news|scalp\n"

        (trade,) = importer.parse(csv_text)

        assert trade.tags == frozenset({"news", "scalp"})

    def test_aware_times_converted_to_timezone(self) -> None:
        """Aware close times should be bucketed in the configured zone."""
        importer = CsvImporter(timezone="America/New_York")
        csv_text = "ticket,closeTime,symbol,profit\n1,2024-01-06T03:30:00+00:00,EURUSD,5\n"

        (trade,) = importer.parse(csv_text)

        # 03:30 UTC on Saturday is 22:30 on Friday in New York
        assert trade.close_time.hour == 22
        assert trade.close_time.day == 5
        assert trade.close_time.utcoffset() == timedelta(hours=-5)

    def test_naive_times_assumed_in_timezone(self) -> None:
        importer = CsvImporter(timezone="UTC")
        csv_text = "ticket,closeTime,symbol,profit\n1,2024-01-06 03:30,EURUSD,5\n"

        (trade,) = importer.parse(csv_text)

        assert trade.close_time == datetime(2024, 1, 6, 3, 30, tzinfo=timezone.utc)

    def test_mixed_aware_and_naive_without_timezone(self, importer: CsvImporter) -> None:
        csv_text = (
            "ticket,closeTime,symbol,profit\n"
            "1,2024-01-06T03:30:00+00:00,EURUSD,5\n"
            "2,2024-01-06 04:30,EURUSD,5\n"
        )

        with pytest.raises(TradeImportError, match="timezone"):
            importer.parse(csv_text)

    def test_parse_file(self, importer: CsvImporter, tmp_path: Path) -> None:
        path = tmp_path / "history.csv"
        path.write_text("ticket,closeTime,symbol,profit\n1,2024-01-01 10:00,EURUSD,5\n")

        trades = importer.parse_file(path)

        assert len(trades) == 1

    def test_parse_missing_file(self, importer: CsvImporter, tmp_path: Path) -> None:
        with pytest.raises(TradeImportError, match="Cannot read"):
            importer.parse_file(tmp_path / "missing.csv")

    def test_parse_sample_data(self, importer: CsvImporter) -> None:
        """Generated sample data should import completely."""
        trades = importer.parse(generate_sample_csv(num_trades=50))

        assert len(trades) == 50
        assert trades == sorted(trades, key=lambda t: t.close_time)
        assert any(t.tags for t in trades)


class TestSampleData:
    """Tests for generate_sample_csv."""

    def test_same_seed_same_output(self) -> None:
        assert generate_sample_csv(seed=1) == generate_sample_csv(seed=1)

    def test_header_and_row_count(self) -> None:
        lines = generate_sample_csv(num_trades=10).strip().splitlines()

        assert lines[0] == "ticket,openTime,closeTime,symbol,profit,tags"
        assert len(lines) == 11
