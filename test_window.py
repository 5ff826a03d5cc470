#!/usr/bin/env python3

from datetime import date, datetime
from types import SimpleNamespace

from trackstamp.config import ProcessingOptions
from trackstamp.window import TimeWindow, add_months, calculate_window


def photo(*args):
    return SimpleNamespace(timestamp=datetime(*args))


def test_window_from_photo_dates():
    photos = [photo(2023, 3, 5, 18, 0), photo(2023, 1, 10, 9, 30), photo(2023, 2, 1)]
    window = calculate_window(ProcessingOptions(), photos)
    assert window == TimeWindow(date(2023, 1, 9), date(2023, 4, 5))


def test_window_from_months_back():
    window = calculate_window(ProcessingOptions(months_back=3), [photo(2020, 1, 1)],
                              today=date(2023, 5, 31))
    assert window == TimeWindow(date(2023, 2, 28), date(2023, 5, 31))


def test_window_without_photos():
    assert calculate_window(ProcessingOptions(), []) is None


def test_window_contains_is_inclusive():
    window = TimeWindow(date(2023, 1, 9), date(2023, 4, 5))
    assert window.contains("20230109")
    assert window.contains("20230405")
    assert not window.contains("20230108")
    assert not window.contains("20230406")


def test_add_months_across_year():
    assert add_months(date(2023, 12, 15), 1) == date(2024, 1, 15)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2023, 1, 15), -13) == date(2021, 12, 15)
