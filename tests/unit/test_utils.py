"""Unit tests for date, number and text helpers"""

from datetime import datetime, timezone, timedelta
from budget_forecaster.utils.date_utils import as_utc, month_key, previous_month_key
from budget_forecaster.utils.number_utils import round_half_up, format_amount
from budget_forecaster.utils.text_utils import sanitize_text


def test_month_key_naive_and_aware():
    assert month_key(datetime(2026, 3, 31, 23, 59)) == "2026-03"
    plus_two = timezone(timedelta(hours=2))
    assert month_key(datetime(2026, 4, 1, 1, 0, tzinfo=plus_two)) == "2026-03"


def test_as_utc():
    naive = datetime(2026, 1, 1, 8, 0)
    assert as_utc(naive) == datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)


def test_previous_month_key():
    months = ["2026-04", "2025-11", "2026-01"]

    assert previous_month_key("2026-04", months) == "2026-01"
    assert previous_month_key("2026-02", months) == "2026-01"
    assert previous_month_key("2025-11", months) is None


def test_round_half_up():
    """Test halves round away from zero like currency amounts"""
    assert round_half_up(2.675) == 2.68
    assert round_half_up(0.125) == 0.13
    assert round_half_up(83.3333) == 83.33
    assert round_half_up(82.5, 0) == 83.0


def test_format_amount():
    assert format_amount(100.0) == "100"
    assert format_amount(100.5) == "100.5"
    assert format_amount(12.345) == "12.35"
    assert format_amount(0.0) == "0"


def test_sanitize_text():
    assert sanitize_text("  <b>Groceries</b>  ") == "bGroceries/b"
    assert sanitize_text("coffee") == "coffee"
