"""Calendar helpers used by document freshness checks."""

import calendar
from datetime import datetime


def add_months(moment: datetime, months: int) -> datetime:
    """Shifts a datetime by whole calendar months.

    The day of month is clamped to the last day of the target month, so
    31 January plus one month is 28 (or 29) February. Time of day and
    tzinfo are preserved.

    Args:
        moment: The datetime to shift.
        months: Number of months to add; may be negative.

    Returns:
        The shifted datetime.
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))
