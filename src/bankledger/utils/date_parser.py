"""Date parsing utilities.

Statement cells are parsed strictly with each account's ``strptime`` pattern.
Dates typed on the command line are parsed leniently with dateutil, and also
accept calendar periods such as "last month" or "this-year".
"""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIOD_UNITS = ("week", "month", "year")
RELATIVE_DAYS = {"yesterday": -1, "today": 0, "tomorrow": 1}


def parse_statement_date(date_str: str, pattern: str) -> date:
    """Parse a statement cell with the account's ``strptime`` pattern.

    Statement dates are never guessed: "03/04/2024" means something different
    for each bank, so the configured pattern is the only accepted layout.

    Raises:
        ValueError: If the cell does not match the pattern
    """
    if date_str is None or not date_str.strip():
        raise ValueError("Empty date string")
    cell = date_str.strip()
    try:
        return datetime.strptime(cell, pattern).date()
    except ValueError as e:
        raise ValueError(f"Could not parse date '{cell}' with '{pattern}': {e}")


def month_start(day: date) -> date:
    """Return the first day of the month containing ``day``."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Return the last day of the month containing ``day``."""
    return month_start(day) + relativedelta(months=1, days=-1)


def period_bounds(unit: str, offset: int = 0, today: Optional[date] = None) -> tuple[date, date]:
    """First and last day of the calendar week, month or year around ``today``.

    Weeks start on Monday. ``offset`` shifts by whole periods, so ``-1`` is the
    previous one.
    """
    today = today or date.today()
    if unit == "week":
        start = today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
        return start, start + timedelta(days=6)
    if unit == "month":
        start = month_start(today) + relativedelta(months=offset)
        return start, month_end(start)
    if unit == "year":
        start = date(today.year + offset, 1, 1)
        return start, date(start.year, 12, 31)
    raise ValueError(f"Unknown period unit: '{unit}'")


def _split_period(text: str) -> Optional[tuple[int, str]]:
    """Split "last month" or "this-year" into (offset, unit)."""
    words = text.replace("-", " ").split()
    if len(words) != 2 or words[1] not in PERIOD_UNITS:
        return None
    offsets = {"this": 0, "last": -1}
    if words[0] not in offsets:
        return None
    return offsets[words[0]], words[1]


def parse_date(date_str: str) -> date:
    """Parse a date typed by the user.

    Accepts "today", "yesterday" and "tomorrow", the start of a period
    ("this week", "last month", ...) and anything dateutil understands, such
    as "2024-01-15" or "January 15, 2024".

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text in RELATIVE_DAYS:
        return today + timedelta(days=RELATIVE_DAYS[text])

    period = _split_period(text)
    if period is not None:
        offset, unit = period
        return period_bounds(unit, offset, today)[0]

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")


def parse_month(month_str: str) -> date:
    """Parse a "YYYY-MM" month into the first day of that month."""
    try:
        return datetime.strptime(month_str.strip(), "%Y-%m").date()
    except ValueError as e:
        raise ValueError(f"Could not parse month '{month_str}' (expected YYYY-MM): {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Date range selected by a period flag such as "last-month".

    Current periods end today; previous periods are complete.

    Raises:
        ValueError: If the period is not one of this/last week, month or year
    """
    split = _split_period(period.strip().lower())
    if split is None:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, last-year, last-week"
        )
    offset, unit = split
    today = date.today()
    start, end = period_bounds(unit, offset, today)
    return (start, today) if offset == 0 else (start, end)
