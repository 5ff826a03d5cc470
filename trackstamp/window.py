"""
Date window used to decide which GPS tracks are relevant to a photo set.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, NamedTuple, Optional


class TimeWindow(NamedTuple):
    """Inclusive (oldest, newest) date range."""
    oldest: date
    newest: date

    def contains(self, yyyymmdd: str) -> bool:
        # Fixed-width digits compare correctly as strings
        return self.oldest.strftime("%Y%m%d") <= yyyymmdd <= self.newest.strftime("%Y%m%d")


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def calculate_window(options, photos: Iterable, today: Optional[date] = None) -> Optional[TimeWindow]:
    """
    Compute the track window for a run.

    With options.months_back set the window ends today and starts that many
    months earlier. Otherwise it spans the photo dates, from one day before
    the oldest photo to one month after the newest.

    Args:
        options: ProcessingOptions of the run
        photos: Photos whose timestamps define the window
        today: Reference date for months_back, defaults to today

    Returns:
        The TimeWindow, or None for an empty photo set
    """
    today = today or date.today()
    if options.months_back is not None:
        return TimeWindow(add_months(today, -options.months_back), today)

    dates = [photo.timestamp.date() for photo in photos]
    if not dates:
        return None
    return TimeWindow(min(dates) - timedelta(days=1), add_months(max(dates), 1))
