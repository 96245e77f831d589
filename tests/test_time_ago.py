"""Tests for the time-ago humanizer."""

from datetime import datetime, timedelta, timezone

import pytest

from app.utils.time_ago import time_ago

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("delta, expected", [
    (timedelta(seconds=0), "0 seconds ago"),
    (timedelta(seconds=1), "1 second ago"),
    (timedelta(seconds=59), "59 seconds ago"),
    (timedelta(seconds=90), "1 minute ago"),
    (timedelta(minutes=5), "5 minutes ago"),
    (timedelta(hours=1), "1 hour ago"),
    (timedelta(hours=23, minutes=59), "23 hours ago"),
    (timedelta(days=3), "3 days ago"),
    (timedelta(days=14), "2 weeks ago"),
    (timedelta(days=30), "4 weeks ago"),
    (timedelta(days=45), "1 month ago"),
    (timedelta(days=400), "1 year ago"),
    (timedelta(days=730), "2 years ago"),
])
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, now=NOW) == expected


def test_naive_datetimes_are_utc():
    naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
    assert time_ago(naive, now=NOW) == "2 hours ago"


def test_future_moment_clamps_to_zero():
    assert time_ago(NOW + timedelta(minutes=5), now=NOW) == "0 seconds ago"
