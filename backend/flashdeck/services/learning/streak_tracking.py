"""
Study Streak Tracking

Derives study streaks from the history of ended sessions. Works purely on
calendar dates in settings.STUDY_TIMEZONE; time of day is discarded and
several sessions on one day count as a single study day.

Responsibilities:
- Calculate current and longest study streaks
- Track streak milestones
- Count study days in the last week and month

Usage:
    from flashdeck.services.learning.streak_tracking import study_streak

    streak = study_streak(store.study_history)
    print(streak.current, streak.longest, streak.last_study_date)
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from flashdeck.config.settings import settings
from flashdeck.models.learning import StreakData, StudyHistoryEntry
from flashdeck.utils.date_utils import study_date, utc_now


def study_streak(
    history: Iterable[StudyHistoryEntry],
    now: Optional[datetime] = None,
) -> StreakData:
    """
    Get detailed study streak information.

    Args:
        history: Study history entries in any order.
        now: Reference instant for "today" (defaults to now).

    Returns:
        StreakData; all zeros/None for an empty history.
    """
    study_dates = distinct_study_dates(history)

    if not study_dates:
        return StreakData(
            current=0,
            longest=0,
            last_study_date=None,
            streak_start=None,
            is_active_today=False,
            days_this_week=0,
            days_this_month=0,
            milestones_reached=[],
            next_milestone=settings.STREAK_MILESTONES[0]
            if settings.STREAK_MILESTONES
            else None,
        )

    today = study_date(now or utc_now())

    current, streak_start = calculate_current_streak(study_dates, today)
    longest = calculate_longest_streak(study_dates)

    milestones = settings.STREAK_MILESTONES
    reached = [m for m in milestones if longest >= m]
    next_milestone = next((m for m in milestones if m > current), None)

    return StreakData(
        current=current,
        longest=longest,
        last_study_date=study_dates[0],
        streak_start=streak_start,
        is_active_today=study_dates[0] == today,
        days_this_week=count_days_in_period(study_dates, today, 7),
        days_this_month=count_days_in_period(study_dates, today, 30),
        milestones_reached=reached,
        next_milestone=next_milestone,
    )


def distinct_study_dates(history: Iterable[StudyHistoryEntry]) -> list[date]:
    """
    Unique study days, most recent first.

    Args:
        history: Study history entries in any order.

    Returns:
        list[date]: Unique calendar dates in descending order.
    """
    return sorted({study_date(entry.date) for entry in history}, reverse=True)


def calculate_current_streak(
    study_dates: list[date], today: date
) -> tuple[int, Optional[date]]:
    """
    Calculate the current consecutive study streak.

    The chain starts at the most recent study day, which must be today or
    yesterday (a learner who studied yesterday but not yet today still has
    a live streak). Each further day must be exactly one day before the
    previous one; the first gap ends the chain.

    Args:
        study_dates: Unique study dates in descending order.
        today: Current date for the reference.

    Returns:
        tuple[int, Optional[date]]: Tuple containing:
            - streak_count: Number of consecutive study days.
            - streak_start_date: First day of the streak, or None if no streak.
    """
    if not study_dates:
        return 0, None

    most_recent = study_dates[0]
    yesterday = today - timedelta(days=1)

    if most_recent != today and most_recent != yesterday:
        return 0, None

    streak = 0
    streak_start = None
    expected_date = most_recent

    for day in study_dates:
        if day == expected_date:
            streak += 1
            streak_start = day
            expected_date = expected_date - timedelta(days=1)
        elif day < expected_date:
            # Gap in streak
            break

    return streak, streak_start


def calculate_longest_streak(study_dates: list[date]) -> int:
    """
    Calculate the longest study streak ever achieved.

    Args:
        study_dates: Study dates in any order (duplicates allowed).

    Returns:
        int: Length of the longest run of consecutive study days.
    """
    if not study_dates:
        return 0

    sorted_dates = sorted(set(study_dates))

    longest = 1
    current = 1

    for i in range(1, len(sorted_dates)):
        if sorted_dates[i] == sorted_dates[i - 1] + timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest


def count_days_in_period(study_dates: list[date], today: date, days: int) -> int:
    """
    Count unique study days within the trailing period ending today.

    Args:
        study_dates: Study dates (any order).
        today: Last day of the period.
        days: Period length in days, today included.

    Returns:
        int: Number of unique study days within the period.
    """
    cutoff = today - timedelta(days=days - 1)
    return len([d for d in set(study_dates) if cutoff <= d <= today])
