"""
Leaderboard ranker.

Points are the XP a user earned inside a period window, summed from their
daily stats. Users with no points in the window are left out.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlmodel import Session, select, func

from langify.core.config import settings
from langify.models.models import LeaderboardPeriod, User, UserDailyStat
from langify.utils import date_utils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: int
    name: str
    avatar_url: Optional[str]
    points: int


def rank_users(
    session: Session,
    period: LeaderboardPeriod = LeaderboardPeriod.WEEK,
    today: Optional[date] = None,
) -> List[LeaderboardEntry]:
    """
    Rank every user with points in the period.

    ``week`` covers the configured number of calendar days ending today
    (inclusive); ``all`` covers the whole history. Sorted by points
    descending, ties by user id ascending, ranked 1..N by position.
    """
    today = today or date_utils.today()
    points = func.sum(UserDailyStat.xp_earned)

    query = (
        select(User.id, User.name, User.avatar_url, points.label("points"))
        .join(UserDailyStat, UserDailyStat.user_id == User.id)  # type: ignore
    )
    if LeaderboardPeriod(period) == LeaderboardPeriod.WEEK:
        start = date_utils.window_start(today, settings.leaderboard_window_days)
        query = query.where(UserDailyStat.date >= start, UserDailyStat.date <= today)

    query = (
        query.group_by(User.id, User.name, User.avatar_url)
        .having(points > 0)
        .order_by(points.desc(), User.id.asc())  # type: ignore
    )

    rows = session.exec(query).all()
    return [
        LeaderboardEntry(rank=position, user_id=user_id, name=name, avatar_url=avatar_url, points=int(total))
        for position, (user_id, name, avatar_url, total) in enumerate(rows, start=1)
    ]


def build_leaderboard(
    session: Session,
    period: LeaderboardPeriod = LeaderboardPeriod.WEEK,
    today: Optional[date] = None,
    limit: Optional[int] = None,
) -> List[LeaderboardEntry]:
    """Top of the leaderboard (settings.leaderboard_limit entries by default)."""
    limit = limit or settings.leaderboard_limit
    entries = rank_users(session, period, today)[:limit]
    logger.info(f"Built {LeaderboardPeriod(period).value} leaderboard with {len(entries)} entries")
    return entries


def get_user_rank(
    session: Session,
    user_id: int,
    period: LeaderboardPeriod = LeaderboardPeriod.WEEK,
    today: Optional[date] = None,
) -> Optional[LeaderboardEntry]:
    """The user's entry over the untruncated ranking, or None when they have no points in the period."""
    for entry in rank_users(session, period, today):
        if entry.user_id == user_id:
            return entry
    return None
