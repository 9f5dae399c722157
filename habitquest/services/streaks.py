"""Streak calculations over completion histories.

A streak is the number of consecutive qualifying days walking backward from
today. Today may still be empty without breaking the chain, since the user
has the rest of the day to act, but any earlier empty day ends the walk.
Per-habit and user-level streaks share one walk and differ only in which
days qualify.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from habitquest.core.errors import InvalidArgument
from habitquest.models.gamification import (
    CompletionRecord,
    HabitSnapshot,
    UserAggregate,
    to_day,
)

logger = logging.getLogger(__name__)

STREAK_LOOKBACK_DAYS = 365


def completed_days(records: Iterable[CompletionRecord], today: date | None = None) -> set[date]:
    """Collect the days with a completed record, ignoring days after today."""
    days = {record.date for record in records if record.completed}
    if today is not None:
        days = {day for day in days if day <= today}
    return days


def walk_streak(
    days: Iterable[date],
    today: date | datetime | str,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count consecutive qualifying days backward from today.

    Only the first day checked (today) may be empty. At most lookback_days
    days, today included, are examined.
    """
    if lookback_days < 1:
        raise InvalidArgument(f"Lookback must be at least 1 day, got {lookback_days}")

    qualifying = set(days)
    cursor = to_day(today)
    streak = 0

    for i in range(lookback_days):
        if cursor in qualifying:
            streak += 1
        elif i > 0:
            break
        cursor -= timedelta(days=1)

    return streak


def compute_streak(
    records: Iterable[CompletionRecord],
    today: date | datetime | str,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Calculate the current streak of a single habit."""
    day = to_day(today)
    streak = walk_streak(completed_days(records, day), day, lookback_days)
    logger.debug(f"Habit streak as of {day}: {streak}")
    return streak


def compute_user_streak(
    habits: Iterable[HabitSnapshot],
    today: date | datetime | str,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Calculate the user-level streak: days on which any active habit was completed."""
    day = to_day(today)
    active = [habit for habit in habits if not habit.is_archived]
    if not active:
        return 0

    days: set[date] = set()
    for habit in active:
        days |= completed_days(habit.records, day)

    streak = walk_streak(days, day, lookback_days)
    logger.debug(f"User streak as of {day} over {len(active)} active habits: {streak}")
    return streak


def longest_run(records: Iterable[CompletionRecord]) -> int:
    """Find the longest run of consecutive completed days in a history."""
    days = sorted(completed_days(records))
    if not days:
        return 0

    longest = 1
    run = 1
    for prev, day in zip(days, days[1:]):
        if (day - prev).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def update_longest_streak(aggregate: UserAggregate, current_streak: int) -> UserAggregate:
    """Record a freshly computed streak; the longest streak never decreases."""
    if current_streak < 0:
        raise InvalidArgument(f"Streak must be non-negative, got {current_streak}")
    return aggregate.model_copy(update={
        "current_streak": current_streak,
        "longest_streak": max(aggregate.longest_streak, current_streak),
    })
