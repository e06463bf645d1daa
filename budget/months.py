"""
Month arithmetic on YYYY-MM strings.

Months are kept as strings throughout the budget app; zero-padded YYYY-MM
sorts and compares correctly as text, which the range queries rely on.
"""

import calendar


def parse_month(ym):
    """Split 'YYYY-MM' into (year, month) integers."""
    year, month = ym.split('-')
    return int(year), int(month)


def format_month(year, month):
    return f"{year:04d}-{month:02d}"


def months_diff(from_month, to_month):
    """Number of months from from_month to to_month (negative if earlier)."""
    fy, fm = parse_month(from_month)
    ty, tm = parse_month(to_month)
    return (ty - fy) * 12 + (tm - fm)


def add_months(ym, delta):
    """Shift a month by delta months, crossing year boundaries as needed."""
    year, month = parse_month(ym)
    total = year * 12 + (month - 1) + delta
    return format_month(total // 12, total % 12 + 1)


def month_range(from_month, to_month):
    """Inclusive list of months from from_month to to_month."""
    return [add_months(from_month, i) for i in range(months_diff(from_month, to_month) + 1)]


def days_in_month(ym):
    year, month = parse_month(ym)
    return calendar.monthrange(year, month)[1]


def clamp_day(ym, anchor_day=None):
    """Day of the month an occurrence falls on.

    Without an anchor day the occurrence falls on the last day of the month;
    anchor days past the end of a short month are clamped to its last day.
    """
    last = days_in_month(ym)
    if anchor_day is None:
        return last
    return min(anchor_day, last)
