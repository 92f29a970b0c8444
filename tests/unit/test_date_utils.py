"""Unit tests for date bucketing helpers"""

from datetime import date, datetime
from lifedash_gateway.utils.date_utils import iso_week_key, month_key, parse_iso_date, week_start_key


def test_parse_iso_date_variants():
    assert parse_iso_date("2024-03-05") == date(2024, 3, 5)
    assert parse_iso_date("2024-03-05T23:59:00Z") == date(2024, 3, 5)
    assert parse_iso_date(datetime(2024, 3, 5, 8, 30)) == date(2024, 3, 5)
    assert parse_iso_date(date(2024, 3, 5)) == date(2024, 3, 5)


def test_iso_week_key_uses_iso_year():
    """Dec 30 2024 belongs to ISO week 1 of 2025"""
    assert iso_week_key(date(2024, 12, 30)) == "2025-W01"
    assert iso_week_key(date(2024, 1, 30)) == "2024-W05"


def test_month_and_week_start_keys():
    assert month_key(date(2024, 2, 29)) == "2024-02"
    assert week_start_key(date(2024, 3, 10)) == "2024-03-04"
    assert week_start_key(date(2024, 3, 4)) == "2024-03-04"
