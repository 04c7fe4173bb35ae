# src/motion_tasks/forms/dates.py

from __future__ import annotations

from datetime import datetime, timedelta


def _midnight_in(days: int) -> datetime:
    # Calendar arithmetic on naive local time; the offset is attached last so a
    # DST change in between lands on the right local day.
    day = datetime.now() + timedelta(days=days)
    return day.replace(hour=0, minute=0, second=0, microsecond=0).astimezone()


def tomorrow() -> datetime:
    """Tomorrow at local midnight (default due date of a new task)."""
    return _midnight_in(1)


def next_week() -> datetime:
    """One week from today at local midnight."""
    return _midnight_in(7)


DATE_SHORTCUTS = {
    "tomorrow": tomorrow,
    "next week": next_week,
}
