# src/journal/periods.py
"""Calendar period granularities used by the periodic rollups."""
from datetime import datetime
from enum import Enum


class Period(Enum):
    """Granularity of a periodic rollup.

    Every key format is zero-padded, so ordinary string ordering of keys
    matches chronological ordering.
    """

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    def key_for(self, moment: datetime) -> str:
        """Derive the period key a timestamp falls into.

        Args:
            moment: The trade's close time.

        Returns:
            ``YYYY-Www`` (ISO-8601 week, Thursday-anchored), ``YYYY-MM`` or
            ``YYYY`` depending on the granularity.
        """
        if self is Period.WEEK:
            iso = moment.date().isocalendar()
            return f"{iso[0]:04d}-W{iso[1]:02d}"
        if self is Period.MONTH:
            return f"{moment.year:04d}-{moment.month:02d}"
        return f"{moment.year:04d}"
