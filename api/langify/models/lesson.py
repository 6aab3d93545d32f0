"""
Lesson model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.course import Course
    from langify.models.task import Task
    from langify.models.lesson_attempt import LessonAttempt


class Lesson(SQLModel, table=True):
    """Lesson table - an ordered step of a course holding ordered tasks."""
    __tablename__ = "lesson"

    id: Optional[int] = Field(default=None, primary_key=True)
    course_id: int = Field(foreign_key="course.id", index=True)
    title: str
    description: Optional[str] = None
    order_in_course: int = Field(default=1)
    estimated_minutes: Optional[int] = Field(default=None)
    tasks_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    course: "Course" = Relationship(back_populates="lessons")
    tasks: List["Task"] = Relationship(
        back_populates="lesson",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Task.order_in_lesson"}
    )
    attempts: List["LessonAttempt"] = Relationship(
        back_populates="lesson",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
