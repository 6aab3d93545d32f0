"""
Lesson player schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from langify.schemas.course import CourseProgressResponse


class SecureTaskResponse(BaseModel):
    """Task as shown to a learner: the correct answer is never included."""
    id: int
    lesson_id: int
    type: str
    question_text: str
    question_extra: Optional[str] = None
    vocabulary_id: Optional[int] = None
    order_in_lesson: int


class LessonResponse(BaseModel):
    """Lesson with its tasks in lesson order."""
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    order_in_course: int
    estimated_minutes: Optional[int] = None
    tasks_count: int
    tasks: List[SecureTaskResponse] = Field(default_factory=list)


class TaskOptionsResponse(BaseModel):
    """Shuffled answer options (empty for flashcards)."""
    task_id: int
    options: List[str]


class CheckAnswerRequest(BaseModel):
    answer: str = Field(..., description="Answer text as given by the learner")


class CheckAnswerResponse(BaseModel):
    task_id: int
    is_correct: bool
    correct_answer: str


class StartAttemptRequest(BaseModel):
    user_id: int = Field(..., description="User ID")


class TaskAnswerSubmission(BaseModel):
    """One answer in a lesson submission."""
    task_id: int = Field(..., description="Task ID")
    answer: Optional[str] = Field(None, description="Answer text (optional for self-assessed flashcards)")
    self_assessed_correct: Optional[bool] = Field(
        None, description="Flashcards only: whether the learner knew the answer"
    )


class CompleteAttemptRequest(BaseModel):
    """Answers for every task the learner answered."""
    user_id: int = Field(..., description="User ID")
    answers: List[TaskAnswerSubmission] = Field(default_factory=list, description="Submitted answers")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "answers": [
                    {"task_id": 1, "answer": "pull request"},
                    {"task_id": 2, "self_assessed_correct": True}
                ]
            }
        }


class LessonAttemptResponse(BaseModel):
    id: int
    user_id: int
    lesson_id: int
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    score_percent: int
    total_questions: int
    correct_answers: int
    xp_earned: int

    @classmethod
    def from_attempt(cls, attempt) -> "LessonAttemptResponse":
        return cls(
            id=attempt.id,
            user_id=attempt.user_id,
            lesson_id=attempt.lesson_id,
            status=attempt.status.value,
            started_at=attempt.started_at,
            completed_at=attempt.completed_at,
            score_percent=attempt.score_percent,
            total_questions=attempt.total_questions,
            correct_answers=attempt.correct_answers,
            xp_earned=attempt.xp_earned,
        )


class TaskResultResponse(BaseModel):
    task_id: int
    is_correct: bool
    correct_answer: str


class CompleteAttemptResponse(BaseModel):
    """Scored attempt plus what it changed."""
    attempt: LessonAttemptResponse
    results: List[TaskResultResponse]
    today_xp: int
    goal_met_today: bool
    course_progress: CourseProgressResponse
