# tests/test_formatters.py

import datetime

from core import formatters


def test_format_percentage():
    assert formatters.format_percentage(87) == "87%"
    assert formatters.format_percentage(0) == "0%"
    assert formatters.format_percentage(None) == "-"


def test_format_score_cell():
    assert formatters.format_score_cell(40.0, 50.0) == "40/50"
    assert formatters.format_score_cell(7.5, 10) == "7.5/10"
    assert formatters.format_score_cell(None, 50) == "-"
    assert formatters.format_score_cell(40, None) == "-"


def test_format_initials():
    assert formatters.format_initials("Ada", "Lovelace") == "AL"
    assert formatters.format_initials("bell", "hooks") == "bh"
    assert formatters.format_initials("", "Prince") == "P"


def test_date_labels(sample_date):
    assert formatters.format_weekday_short(sample_date) == "Wed"
    assert formatters.format_month_day(sample_date) == "09/17"
    assert formatters.format_month_day(datetime.date(2025, 1, 5)) == "01/05"
