import calendar
from datetime import date


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month length.

    Examples:
        >>> add_months(date(2025, 1, 31), 1)
        datetime.date(2025, 2, 28)
        >>> add_months(date(2025, 4, 1), 12)
        datetime.date(2026, 4, 1)
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def financial_year(on: date) -> str:
    """Indian financial year label (April to March) for a date, e.g. '2025-26'."""
    start = on.year if on.month >= 4 else on.year - 1
    return f"{start}-{str(start + 1)[-2:]}"
