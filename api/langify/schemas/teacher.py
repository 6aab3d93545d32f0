"""
Teacher authoring and dashboard schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime


class CourseCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="Course title")
    description: str = Field("", description="Course description")
    industry_tag: Optional[str] = Field(None, description="'it', 'finance', 'office' or 'general'")
    level: Optional[str] = Field(None, description="CEFR level (A1-C2)")
    estimated_minutes: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_published: bool = Field(False, description="Publish immediately")


class CourseUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    industry_tag: Optional[str] = None
    level: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    is_published: Optional[bool] = None


class LessonCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    order_in_course: Optional[int] = Field(None, ge=1, description="Defaults to the end of the course")


class LessonUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    order_in_course: Optional[int] = Field(None, ge=1)


class TaskCreateRequest(BaseModel):
    type: str = Field("MULTIPLE_CHOICE", description="FLASHCARD, MULTIPLE_CHOICE or GAP_FILL")
    question_text: str = Field(..., min_length=1)
    question_extra: Optional[str] = None
    correct_answer: str = Field(..., min_length=1)
    incorrect_answers: List[str] = Field(default_factory=list, description="Ignored for flashcards")
    vocabulary_id: Optional[int] = None
    order_in_lesson: Optional[int] = Field(None, ge=1, description="Defaults to the end of the lesson")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "MULTIPLE_CHOICE",
                "question_text": "What does 'deadline' mean?",
                "correct_answer": "termin",
                "incorrect_answers": ["spotkanie", "budżet", "raport"]
            }
        }


class TaskUpdateRequest(BaseModel):
    type: Optional[str] = None
    question_text: Optional[str] = Field(None, min_length=1)
    question_extra: Optional[str] = None
    correct_answer: Optional[str] = Field(None, min_length=1)
    incorrect_answers: Optional[List[str]] = None
    vocabulary_id: Optional[int] = None
    order_in_lesson: Optional[int] = Field(None, ge=1)


class TaskResponse(BaseModel):
    """Full task including the answer, for authors only."""
    id: int
    lesson_id: int
    type: str
    question_text: str
    question_extra: Optional[str] = None
    correct_answer: str
    incorrect_answers: List[str]
    vocabulary_id: Optional[int] = None
    order_in_lesson: int

    class Config:
        from_attributes = True


class AuthoredLessonResponse(BaseModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    order_in_course: int
    estimated_minutes: Optional[int] = None
    tasks_count: int
    tasks: List[TaskResponse] = Field(default_factory=list)

    class Config:
        from_attributes = True


class StudentActivityResponse(BaseModel):
    student_id: int
    name: str
    email: str
    total_xp: int
    lessons_completed: int
    courses_started: int
    courses_completed: int
    last_active: Optional[date] = None
    current_streak: int

    class Config:
        from_attributes = True


class CourseStatsResponse(BaseModel):
    course_id: int
    course_title: str
    total_students: int
    completed_students: int
    avg_progress: int
    total_lessons: int

    class Config:
        from_attributes = True


class StudentCourseProgressResponse(BaseModel):
    student_id: int
    student_name: str
    course_id: int
    course_title: str
    completed_lessons: int
    total_lessons: int
    progress_percent: int
    avg_score: int
    last_attempt: Optional[datetime] = None

    class Config:
        from_attributes = True


class TeacherDashboardResponse(BaseModel):
    students: List[StudentActivityResponse]
    course_stats: List[CourseStatsResponse]
    student_progress: List[StudentCourseProgressResponse]
