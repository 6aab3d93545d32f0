"""
Streak calculator.

A streak is a run of consecutive calendar days on which the user met their
daily XP goal. These functions are pure: they take the user's daily stat rows
(any order) and an explicit ``today``, and never touch the database.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, Protocol


class DailyGoalRecord(Protocol):
    """Anything with a calendar day and a goal-met flag (e.g. UserDailyStat)."""
    date: date
    goal_met: bool


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    longest_streak: int


def _goal_met_by_day(stats: Iterable[DailyGoalRecord]) -> Dict[date, bool]:
    # At most one row per day is stored; if duplicates slip in, any goal-met row wins
    by_day: Dict[date, bool] = {}
    for stat in stats:
        by_day[stat.date] = by_day.get(stat.date, False) or bool(stat.goal_met)
    return by_day


def calculate_current_streak(stats: Iterable[DailyGoalRecord], today: date) -> int:
    """
    Count consecutive goal-met days ending today.

    Today is still in progress: when today has no row yet, or its goal is not
    met yet, the streak is counted from yesterday instead of dropping to 0.
    The walk stops at the first missing day or goal_met=False day.
    Rows dated after ``today`` are ignored.
    """
    by_day = _goal_met_by_day(stats)

    day = today if by_day.get(today) else today - timedelta(days=1)
    streak = 0
    while by_day.get(day):
        streak += 1
        day -= timedelta(days=1)
    return streak


def calculate_longest_streak(stats: Iterable[DailyGoalRecord]) -> int:
    """Longest run of consecutive goal-met days anywhere in the history."""
    by_day = _goal_met_by_day(stats)

    longest = 0
    running = 0
    previous_day = None
    for day in sorted(by_day):
        if not by_day[day]:
            running = 0
        elif previous_day is not None and running > 0 and day - previous_day == timedelta(days=1):
            running += 1
        else:
            running = 1
        longest = max(longest, running)
        previous_day = day
    return longest


def calculate_streaks(stats: Iterable[DailyGoalRecord], today: date) -> StreakSummary:
    """Compute current and longest streak over the same rows."""
    stats = list(stats)
    current = calculate_current_streak(stats, today)
    # The current run is part of the history, so longest >= current holds by construction;
    # max() keeps it true even for rows dated after today.
    longest = max(calculate_longest_streak(stats), current)
    return StreakSummary(current_streak=current, longest_streak=longest)
