"""
Course catalogue schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class LessonSummary(BaseModel):
    """Lesson as listed inside a course."""
    id: int
    title: str
    description: Optional[str] = None
    order_in_course: int
    estimated_minutes: Optional[int] = None
    tasks_count: int

    class Config:
        from_attributes = True


class CourseResponse(BaseModel):
    """Course without its lessons."""
    id: int
    title: str
    description: str
    industry_tag: Optional[str] = None
    level: Optional[str] = None
    created_by: Optional[int] = None
    is_published: bool
    lessons_count: Optional[int] = None
    estimated_minutes: Optional[int] = None
    image_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CourseDetailResponse(CourseResponse):
    """Course with its lessons in course order."""
    lessons: List[LessonSummary] = Field(default_factory=list)


class CourseListResponse(BaseModel):
    courses: List[CourseResponse]
    total: int


class CourseProgressResponse(BaseModel):
    """A user's progress through one course."""
    course_id: int
    completed_lessons: int
    total_lessons: int
    progress_percent: int = Field(..., ge=0, le=100)
    is_started: bool
    is_completed: bool


class CourseWithProgressResponse(BaseModel):
    course: CourseResponse
    progress: CourseProgressResponse


class CourseProgressListResponse(BaseModel):
    user_id: int
    courses: List[CourseWithProgressResponse]
