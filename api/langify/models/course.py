"""
Course model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.lesson import Lesson


class Course(SQLModel, table=True):
    """Course table - a published or draft sequence of lessons."""
    __tablename__ = "course"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str = Field(default="")
    industry_tag: Optional[str] = Field(default=None, index=True)  # IndustryContext value
    level: Optional[str] = Field(default=None, index=True)  # CEFRLevel value
    created_by: Optional[int] = Field(default=None, foreign_key="user.id")
    is_published: bool = Field(default=False, index=True)
    lessons_count: Optional[int] = Field(default=None)  # Falls back to the number of lessons when unset
    estimated_minutes: Optional[int] = Field(default=None)
    image_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    lessons: List["Lesson"] = Relationship(
        back_populates="course",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Lesson.order_in_course"}
    )
