# core/utils.py

"""
Repository for program-wide utilities.

Holds the input normalizers shared by the models, the record store, and the aggregation engine:
integer record ids and calendar-day dates.
"""

import datetime
from collections.abc import Iterable
from typing import Any


def next_record_id(existing_ids: Iterable[int]) -> int:
    return max(existing_ids, default=0) + 1


def normalize_id(record_id: Any) -> int:
    """
    Validates and normalizes a record id.

    Accepts an integer or a string of digits, and then:
        - Rejects booleans, which are technically integers.
        - Casts digit strings to int.

    Args:
        record_id (Any): The input value to validate.

    Returns:
        The normalized integer id.

    Raises:
        TypeError: If the input is not an integer or a string of digits.
    """
    if isinstance(record_id, bool):
        raise TypeError(f"Invalid id: {record_id!r}. Record ids must be integers.")

    if isinstance(record_id, int):
        return record_id

    if isinstance(record_id, str) and record_id.strip().isdigit():
        return int(record_id.strip())

    raise TypeError(f"Invalid id: {record_id!r}. Record ids must be integers.")


def normalize_date(value: Any) -> datetime.date:
    """
    Validates and normalizes a calendar day.

    Accepts `datetime.date`, `datetime.datetime`, or an ISO-formatted string, and then:
        - Drops any time-of-day component.
        - Parses strings with `fromisoformat()`, so both "2025-09-02" and "2025-09-02T08:15:00" are accepted.

    Args:
        value (Any): The input value to validate.

    Returns:
        The normalized `datetime.date`.

    Raises:
        TypeError: If the input is not a date, datetime, or string.
        ValueError: If a string input is not a valid ISO date.
    """
    if isinstance(value, datetime.datetime):
        return value.date()

    if isinstance(value, datetime.date):
        return value

    if isinstance(value, str):
        try:
            return datetime.datetime.fromisoformat(value.strip()).date()
        except ValueError:
            raise ValueError(
                f"Invalid date: {value!r}. Dates must be formatted as YYYY-MM-DD."
            ) from None

    raise TypeError(f"Invalid date: {value!r}. Expected a date or ISO date string.")
