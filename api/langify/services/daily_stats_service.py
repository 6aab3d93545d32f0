"""
Daily stat accumulator.

Keeps one UserDailyStat row per user per calendar day with the XP earned and
lessons completed that day, and whether the day's XP goal was met.

Updates are a single INSERT ... ON CONFLICT (user_id, date) DO UPDATE that
increments the counters in the database, so two lessons finished at the same
moment cannot lose each other's XP. Each call accumulates: recording 10 XP
and then 5 XP leaves the row at 15.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from langify.core.config import settings
from langify.core.exceptions import ValidationError
from langify.models.models import DailyGoal, UserDailyStat
from langify.utils import date_utils

logger = logging.getLogger(__name__)


def _dialect_insert(session: Session):
    """Return the dialect-specific insert() that supports ON CONFLICT."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"Daily stat upsert is not supported for dialect '{dialect}'")


def get_target_xp(session: Session, user_id: int) -> int:
    """Return the user's daily XP target, or the configured default when no goal is stored."""
    target = session.exec(
        select(DailyGoal.target_xp_per_day).where(DailyGoal.user_id == user_id)
    ).first()
    return target if target else settings.default_target_xp_per_day


def accumulate_daily_stat(
    session: Session,
    user_id: int,
    xp_delta: int = 0,
    lessons_delta: int = 0,
    day: Optional[date] = None,
) -> UserDailyStat:
    """
    Add XP and/or completed lessons to a user's stats for one calendar day.

    Creates the row when the user has no stats for that day yet. goal_met is
    recomputed in the same statement as xp_earned >= the user's target.
    The caller owns the transaction (commit/rollback).

    Args:
        session: Database session
        user_id: User the activity belongs to
        xp_delta: XP to add (>= 0)
        lessons_delta: Completed lessons to add (>= 0)
        day: Calendar day, defaults to today in the configured timezone

    Returns:
        The updated UserDailyStat row

    Raises:
        ValidationError: If a delta is negative
    """
    if xp_delta < 0:
        raise ValidationError(f"XP delta must be non-negative, got {xp_delta}")
    if lessons_delta < 0:
        raise ValidationError(f"Lessons delta must be non-negative, got {lessons_delta}")

    day = day or date_utils.today()
    target_xp = get_target_xp(session, user_id)

    table = UserDailyStat.__table__
    insert = _dialect_insert(session)
    stmt = insert(table).values(
        user_id=user_id,
        date=day,
        xp_earned=xp_delta,
        lessons_completed=lessons_delta,
        goal_met=xp_delta >= target_xp,
        created_at=date_utils.utc_now(),
    )
    new_xp = table.c.xp_earned + stmt.excluded.xp_earned
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.user_id, table.c.date],
        set_={
            "xp_earned": new_xp,
            "lessons_completed": table.c.lessons_completed + stmt.excluded.lessons_completed,
            "goal_met": new_xp >= target_xp,
        },
    )
    # Pending ORM objects (e.g. a just-created user) must exist before the Core upsert
    session.flush()
    session.exec(stmt)

    stat = session.exec(
        select(UserDailyStat)
        .where(UserDailyStat.user_id == user_id, UserDailyStat.date == day)
        .execution_options(populate_existing=True)
    ).one()

    logger.info(
        f"Accumulated daily stat for user {user_id} on {day}: +{xp_delta} XP, "
        f"+{lessons_delta} lesson(s) -> xp={stat.xp_earned}, lessons={stat.lessons_completed}, "
        f"goal_met={stat.goal_met} (target={target_xp})"
    )
    return stat


def record_xp(session: Session, user_id: int, amount: int, day: Optional[date] = None) -> UserDailyStat:
    """Add earned XP to today's (or the given day's) stats."""
    return accumulate_daily_stat(session, user_id, xp_delta=amount, day=day)


def record_lesson_completed(session: Session, user_id: int, day: Optional[date] = None) -> UserDailyStat:
    """Count one completed lesson on today's (or the given day's) stats."""
    return accumulate_daily_stat(session, user_id, lessons_delta=1, day=day)


def refresh_goal_met(session: Session, user_id: int, day: Optional[date] = None) -> Optional[UserDailyStat]:
    """
    Recompute goal_met for one day after the user's XP target changed.

    Returns the updated row, or None when the user has no stats for that day.
    """
    day = day or date_utils.today()
    stat = session.exec(
        select(UserDailyStat).where(UserDailyStat.user_id == user_id, UserDailyStat.date == day)
    ).first()
    if stat is None:
        return None
    stat.goal_met = stat.xp_earned >= get_target_xp(session, user_id)
    session.add(stat)
    return stat


def get_daily_stats(
    session: Session,
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[UserDailyStat]:
    """Return a user's daily stats, newest first, optionally limited to [start, end]."""
    query = select(UserDailyStat).where(UserDailyStat.user_id == user_id)
    if start is not None:
        query = query.where(UserDailyStat.date >= start)
    if end is not None:
        query = query.where(UserDailyStat.date <= end)
    return list(session.exec(query.order_by(UserDailyStat.date.desc())).all())  # type: ignore
