# src/weekboard/tasks/weekly_policy.py

"""
Weekly time rules.

All functions are pure and take local wall-clock time; there is no timezone handling.
datetime.weekday(): Monday=0 ... Friday=4, Saturday=5, Sunday=6.
"""

from __future__ import annotations

from datetime import datetime, timedelta

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6


def reset_due(now: datetime) -> bool:
    """True only during the minute Sunday 00:00."""
    return now.weekday() == SUNDAY and now.hour == 0 and now.minute == 0


def urgent(now: datetime) -> bool:
    """True from Friday 00:00 until Sunday 00:00."""
    return now.weekday() in (FRIDAY, SATURDAY)


def last_reset_boundary(now: datetime) -> datetime:
    """Most recent Sunday 00:00 at or before `now`."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    days_back = (now.weekday() - SUNDAY) % 7
    return midnight - timedelta(days=days_back)


def next_reset_at(now: datetime) -> datetime:
    """Next Sunday 00:00 strictly after `now`."""
    return last_reset_boundary(now) + timedelta(days=7)


def format_countdown(delta: timedelta) -> str:
    total_min = max(0, int(delta.total_seconds() // 60))
    days, rem = divmod(total_min, 24 * 60)
    hours, minutes = divmod(rem, 60)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
