"""Unit tests for core/utils/dates.py"""

from datetime import date, datetime, timedelta, timezone

import pytest

from mdsite.core.utils.dates import parse_date, to_datetime
from mdsite.errors import InvalidDateError


@pytest.mark.parametrize("text,expected", [
    ("2023-5-1", datetime(2023, 5, 1)),
    ("2023-05-01 10:30", datetime(2023, 5, 1, 10, 30)),
])
def test_parse_date(text, expected):
    assert parse_date(text, "ctx") == expected


def test_parse_date_invalid_carries_message():
    with pytest.raises(InvalidDateError, match="Invalid date 'soon': in post.md"):
        parse_date("soon", "in post.md")


def test_to_datetime():
    assert to_datetime(date(2023, 1, 2)) == datetime(2023, 1, 2)
    assert to_datetime(datetime(2023, 1, 2, 3)) == datetime(2023, 1, 2, 3)
    aware = datetime(2023, 1, 2, 5, tzinfo=timezone(timedelta(hours=2)))
    assert to_datetime(aware) == datetime(2023, 1, 2, 3)
    assert to_datetime("2023-01-02") is None
    assert to_datetime(None) is None
