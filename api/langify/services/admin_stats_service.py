"""
Admin dashboard aggregation: platform totals and the last week of activity.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Set

from sqlmodel import Session, select, func

from langify.models.models import User, UserDailyStat
from langify.services import streak_service
from langify.utils import date_utils
from langify.utils.text_utils import round_half_up_to

logger = logging.getLogger(__name__)

ACTIVITY_WINDOW_DAYS = 7


@dataclass(frozen=True)
class DailyActivity:
    date: date
    users: int
    lessons: int


@dataclass(frozen=True)
class AdminStats:
    total_users: int
    total_lessons_completed: int
    active_today: int
    average_streak: float
    daily_activity: List[DailyActivity]


def get_admin_stats(session: Session, today: Optional[date] = None) -> AdminStats:
    """
    Platform-wide totals.

    - total_lessons_completed sums every user's daily lesson counters
    - active_today counts distinct users with a stats row today
    - average_streak is the mean current streak over all users, one decimal
    - daily_activity lists the last 7 days, oldest first, with distinct
      active users and lessons completed per day
    """
    today = today or date_utils.today()

    user_ids = list(session.exec(select(User.id)).all())
    total_lessons = session.exec(select(func.coalesce(func.sum(UserDailyStat.lessons_completed), 0))).one()

    stats_by_user: Dict[int, List[UserDailyStat]] = defaultdict(list)
    users_by_day: Dict[date, Set[int]] = defaultdict(set)
    lessons_by_day: Dict[date, int] = defaultdict(int)
    for stat in session.exec(select(UserDailyStat)).all():
        stats_by_user[stat.user_id].append(stat)
        users_by_day[stat.date].add(stat.user_id)
        lessons_by_day[stat.date] += stat.lessons_completed

    streaks = [streak_service.calculate_current_streak(stats_by_user.get(user_id, []), today) for user_id in user_ids]
    average_streak = round_half_up_to(sum(streaks) / len(streaks), 1) if streaks else 0.0

    start = date_utils.window_start(today, ACTIVITY_WINDOW_DAYS)
    daily_activity = [
        DailyActivity(date=day, users=len(users_by_day.get(day, ())), lessons=lessons_by_day.get(day, 0))
        for day in date_utils.iter_days(start, today)
    ]

    stats = AdminStats(
        total_users=len(user_ids),
        total_lessons_completed=int(total_lessons),
        active_today=len(users_by_day.get(today, ())),
        average_streak=average_streak,
        daily_activity=daily_activity,
    )
    logger.info(
        f"Built admin stats: {stats.total_users} users, {stats.active_today} active today, "
        f"{stats.total_lessons_completed} lessons completed"
    )
    return stats
