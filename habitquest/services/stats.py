"""Completion statistics per habit and per period."""

from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from habitquest.core.errors import InvalidArgument
from habitquest.core.numbers import round_half_up
from habitquest.models.gamification import (
    CompletionRecord,
    HabitSnapshot,
    HabitStats,
    PeriodStats,
    to_day,
)

STATS_WINDOW_DAYS = 30

PERIOD_DAYS = {
    "week": 7,
    "month": 30,
    "year": 365,
}
EPOCH = date(1970, 1, 1)


def habit_stats(records: Iterable[CompletionRecord], today: date | datetime | str) -> HabitStats:
    """Calculate a habit's completions over the last 30 days and all time.

    The window is the 30 days ending today, today included.
    """
    day = to_day(today)
    window_start = day - timedelta(days=STATS_WINDOW_DAYS - 1)
    completed = [r for r in records if r.completed]

    last_30_days = sum(1 for r in completed if window_start <= r.date <= day)

    return HabitStats(
        last_30_days=last_30_days,
        completion_rate=round_half_up(last_30_days / STATS_WINDOW_DAYS * 100),
        total_all_time=len(completed),
    )


def period_range(period: str, today: date | datetime | str) -> tuple[date, date]:
    """Get the first and last day covered by a period ending today."""
    end = to_day(today)
    if period == "all":
        return EPOCH, end
    if period not in PERIOD_DAYS:
        raise InvalidArgument(f"Period must be one of week, month, year, all; got {period!r}")
    return end - timedelta(days=PERIOD_DAYS[period]), end


def period_stats(
    habits: Iterable[HabitSnapshot],
    period: str,
    today: date | datetime | str,
) -> PeriodStats:
    """Aggregate completions across habits for a period.

    The completion rate compares completions against one per active habit per day.
    """
    start, end = period_range(period, today)
    habits = list(habits)

    completions = [
        (record.date, habit.category)
        for habit in habits
        for record in habit.records
        if record.completed and start <= record.date <= end
    ]

    # isoweekday(): Monday=1 ... Sunday=7, so % 7 gives Sunday=0
    by_day_of_week = Counter(day.isoweekday() % 7 for day, _ in completions)
    by_category = Counter(category for _, category in completions)

    total_days = (end - start).days + 1
    active_habits = sum(1 for habit in habits if not habit.is_archived)
    expected = total_days * active_habits
    rate = round_half_up(len(completions) / expected * 100) if expected > 0 else 0

    return PeriodStats(
        period=period,
        total_completions=len(completions),
        unique_days=len({day for day, _ in completions}),
        by_category=dict(by_category),
        by_day_of_week=dict(by_day_of_week),
        completion_rate=rate,
    )
