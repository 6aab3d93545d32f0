"""
DailyGoal model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.user import User


class DailyGoal(SQLModel, table=True):
    """DailyGoal table - one per user, read whenever goal-met is computed."""
    __tablename__ = "daily_goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    target_xp_per_day: int = Field(default=50)
    target_lessons_per_day: int = Field(default=1)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    user: "User" = Relationship(back_populates="daily_goal")
