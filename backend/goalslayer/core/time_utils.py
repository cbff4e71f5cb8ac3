from datetime import date, datetime, time, timedelta


def monday_of(d: date) -> date:
    """Return the Monday of the week containing `d`.

    Monday = 0, Sunday = 6. Example: 2025-01-08 (Wed) -> 2025-01-06
    """
    if isinstance(d, datetime):
        d = d.date()
    return d - timedelta(days=d.weekday())


def current_week_start(today: date | None = None) -> date:
    """Week key for "now" in server local time."""
    return monday_of(today or date.today())


def week_start_datetime(week_start: date) -> datetime:
    """Monday 00:00:00 (naive, local) for a week key."""
    return datetime.combine(week_start, time.min)


def window_start(weeks: int, today: date | None = None) -> date:
    """First Monday of a window of `weeks` weeks ending with the current week."""
    return current_week_start(today) - timedelta(weeks=max(weeks, 1) - 1)


def iso_day(dt) -> str | None:
    """Format a date/datetime as 'YYYY-MM-DD'. Returns None if dt is None."""
    if dt is None:
        return None
    if isinstance(dt, datetime):
        dt = dt.date()
    return dt.isoformat()
