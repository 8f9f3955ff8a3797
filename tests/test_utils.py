# tests/test_utils.py

import datetime

import pytest

from core.utils import next_record_id, normalize_date, normalize_id


def test_next_record_id():
    assert next_record_id([]) == 1
    assert next_record_id([1, 2, 7]) == 8


def test_normalize_id():
    assert normalize_id(3) == 3
    assert normalize_id(" 12 ") == 12

    for bad in (True, None, 1.5, "abc", "-1"):
        with pytest.raises(TypeError):
            normalize_id(bad)


def test_normalize_date():
    day = datetime.date(2025, 9, 17)

    assert normalize_date(day) == day
    assert normalize_date(datetime.datetime(2025, 9, 17, 8, 15)) == day
    assert normalize_date("2025-09-17") == day
    assert normalize_date("2025-09-17T08:15:00") == day

    with pytest.raises(ValueError):
        normalize_date("Sept 17")

    with pytest.raises(TypeError):
        normalize_date(None)
