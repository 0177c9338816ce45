# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Date and time utilities for the SchoolDesk client.

The backend exchanges calendar dates as ISO ``YYYY-MM-DD`` strings and
timestamps as ISO 8601 datetimes. All helpers here accept what the API or a
form field may hand over (a ``date``, a ``datetime``, a string or nothing)
and normalize it.

Usage:
------
    from src.utils.datetime import parse_date, whole_months_between

    start = parse_date("2024-04-01")
    months = whole_months_between(start, parse_date("2025-03-31"))
"""

import re
from datetime import date, datetime

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def today() -> date:
    """Get the current local calendar date."""
    return date.today()


def parse_date(value: date | datetime | str | None) -> date | None:
    """Parse a calendar date from a form or API value.

    Accepts ``YYYY-MM-DD`` strings and full ISO 8601 timestamps (the API
    sometimes serializes date columns as midnight UTC timestamps).

    Args:
        value: A date, datetime, ISO string, or None.

    Returns:
        The calendar date, or None for None/blank input.

    Raises:
        ValueError: If a non-blank string does not start with a
            ``YYYY-MM-DD`` date or is not a valid date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if not text:
        return None

    day, separator, _ = text.partition("T")
    if not DATE_PATTERN.fullmatch(day):
        raise ValueError(f"Not a YYYY-MM-DD date: {text!r}")
    if separator:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(day)


def format_date(value: date | None) -> str:
    """Format a calendar date for a form field (empty string for None)."""
    if value is None:
        return ""
    return value.isoformat()


def whole_months_between(start: date, end: date) -> int:
    """Count calendar-month boundaries between two dates.

    Days of the month are ignored: 2024-04-01 to 2025-03-31 is 11 months,
    2024-04-30 to 2024-05-01 is 1 month. The result is negative when
    ``end`` falls in an earlier month than ``start``.

    Args:
        start: First date.
        end: Second date.

    Returns:
        Month difference between the two dates.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)
