# core/formatters.py

# pure display helpers for dashboard view-models
# takes plain values only, never model objects

import datetime

# === numeric formatters ===


def format_percentage(value: int | float | None) -> str:
    return "-" if value is None else f"{value}%"


def format_score(score: float) -> str:
    return f"{score:g}"


def format_score_cell(score: float | None, max_points: float | None) -> str:
    if score is None or max_points is None:
        return "-"

    return f"{format_score(score)}/{format_score(max_points)}"


# === name formatters ===


def format_initials(first_name: str, last_name: str) -> str:
    return f"{first_name[:1]}{last_name[:1]}"


# === date formatters ===


def format_weekday_short(day: datetime.date) -> str:
    return day.strftime("%a")


def format_month_day(day: datetime.date) -> str:
    return day.strftime("%m/%d")
