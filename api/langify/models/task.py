"""
Task model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import Column, DateTime, JSON, String as SAString

from langify.models.enums import TaskType
from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.lesson import Lesson


class Task(SQLModel, table=True):
    """Task table - one question of a lesson. correct_answer never leaves the server unchecked."""
    __tablename__ = "task"

    id: Optional[int] = Field(default=None, primary_key=True)
    lesson_id: int = Field(foreign_key="lesson.id", index=True)
    type: TaskType = Field(
        default=TaskType.MULTIPLE_CHOICE,
        sa_column=Column(SAString, nullable=False, default=TaskType.MULTIPLE_CHOICE.value)
    )
    question_text: str
    question_extra: Optional[str] = None
    correct_answer: str
    incorrect_answers: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    vocabulary_id: Optional[int] = Field(default=None, foreign_key="vocabulary_item.id")
    order_in_lesson: int = Field(default=1)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    lesson: "Lesson" = Relationship(back_populates="tasks")
