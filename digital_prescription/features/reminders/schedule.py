# Reminders Feature - Course schedule rules
#
# Pure date arithmetic shared by the reminder service and the prescription
# boundary. Nothing here touches the database or reads the clock.

from datetime import date, timedelta
from typing import List, Optional


def derive_end_date(start_date: date, duration_days: Optional[int]) -> date:
    """End of a course: start + duration, or the start itself for courses without a length."""
    if not duration_days or duration_days <= 0:
        return start_date
    return start_date + timedelta(days=duration_days)


def is_due(start_date: date, end_date: Optional[date], today: date) -> bool:
    """A course is due on `today` when it falls inside [start_date, end_date]; no end means open-ended."""
    if start_date > today:
        return False
    return end_date is None or today <= end_date


def day_index(start_date: date, on: date) -> int:
    """1-based offset of `on` from the course start."""
    return (on - start_date).days + 1


def day_number_for(start_date: date, duration_days: Optional[int], on: date) -> int:
    """Day number of a freshly created reminder, 0 when `on` is outside [1, duration_days]."""
    index = day_index(start_date, on)
    if duration_days and 1 <= index <= duration_days:
        return index
    # Single-day courses (duration 0) list as day 0; only mark-taken promotes them to day 1
    return 0


def taken_day_number(
    start_date: Optional[date],
    duration_days: Optional[int],
    on: date,
    current: int = 0,
) -> int:
    """
    Day number to store when a dose is marked taken.

    Courses without a usable start date or length count as single-day courses (day 1).
    Out-of-range dates keep whatever nonzero day number the record already had.
    """
    if start_date is None or duration_days is None or duration_days <= 0:
        return 1

    index = day_index(start_date, on)
    if 1 <= index <= duration_days:
        return index
    return current or 0


def course_dates(start_date: date, end_date: Optional[date], today: date) -> List[date]:
    """Every date of a course window. Open-ended courses stop at `today`."""
    last = end_date if end_date is not None else today
    if last < start_date:
        return []
    return [start_date + timedelta(days=offset) for offset in range((last - start_date).days + 1)]
