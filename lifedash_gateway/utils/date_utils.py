"""Date manipulation utilities"""

from datetime import date, datetime, timedelta


def parse_iso_date(value: str | date) -> date:
    """Parse an ISO-8601 date or datetime string, keeping only the calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) > 10:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def day_key(day: date) -> str:
    """YYYY-MM-DD"""
    return day.isoformat()


def iso_week_key(day: date) -> str:
    """YYYY-Www using the ISO year and zero-padded ISO week, so keys sort chronologically"""
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def month_key(day: date) -> str:
    """YYYY-MM"""
    return f"{day.year}-{day.month:02d}"


def week_start(day: date) -> date:
    """Monday of the week containing day"""
    return day - timedelta(days=day.weekday())


def week_start_key(day: date) -> str:
    """YYYY-MM-DD of the Monday starting day's week"""
    return week_start(day).isoformat()
