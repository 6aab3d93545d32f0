"""
UserDailyStat model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime, UniqueConstraint
from typing import Optional
from datetime import date as date_type, datetime

from langify.utils.date_utils import utc_now


class UserDailyStat(SQLModel, table=True):
    """UserDailyStat table - XP and lessons accumulated per user per calendar day."""
    __tablename__ = "user_daily_stat"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_user_daily_stat_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    date: date_type = Field(index=True)  # Calendar day in the configured timezone
    xp_earned: int = Field(default=0)
    lessons_completed: int = Field(default=0)
    goal_met: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
