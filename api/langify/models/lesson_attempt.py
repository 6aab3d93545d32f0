"""
LessonAttempt model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from langify.models.enums import AttemptStatus
from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.lesson import Lesson


class LessonAttempt(SQLModel, table=True):
    """LessonAttempt table - one learner's pass through a lesson's tasks."""
    __tablename__ = "lesson_attempt"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    lesson_id: int = Field(foreign_key="lesson.id", index=True)
    started_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))  # Set once, when the attempt is completed
    score_percent: int = Field(default=0)
    total_questions: int = Field(default=0)
    correct_answers: int = Field(default=0)
    xp_earned: int = Field(default=0)

    # Relationships
    lesson: "Lesson" = Relationship(back_populates="attempts")

    @property
    def status(self) -> AttemptStatus:
        return AttemptStatus.COMPLETED if self.completed_at is not None else AttemptStatus.STARTED
