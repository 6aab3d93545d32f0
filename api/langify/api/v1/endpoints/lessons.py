"""
Lesson player endpoints.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportCallIssue=false
# pyright: reportArgumentType=false
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List, Optional

from langify.core.database import get_session
from langify.models.models import Task
from langify.schemas.lesson import (
    CheckAnswerRequest,
    CheckAnswerResponse,
    CompleteAttemptRequest,
    CompleteAttemptResponse,
    LessonAttemptResponse,
    LessonResponse,
    SecureTaskResponse,
    StartAttemptRequest,
    TaskOptionsResponse,
    TaskResultResponse,
)
from langify.services import content_service, lesson_attempt_service
from langify.api.v1.endpoints.courses import to_progress_response
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/lessons", tags=["lessons"])


def to_secure_task(task: Task) -> SecureTaskResponse:
    """Learner view of a task, without correct or incorrect answers."""
    return SecureTaskResponse(
        id=task.id,
        lesson_id=task.lesson_id,
        type=str(getattr(task.type, "value", task.type)),
        question_text=task.question_text,
        question_extra=task.question_extra,
        vocabulary_id=task.vocabulary_id,
        order_in_lesson=task.order_in_lesson,
    )


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: int,
    session: Session = Depends(get_session)
):
    """A lesson with its tasks in order. Answers are not included."""
    lesson = content_service.get_lesson(session, lesson_id)
    tasks = content_service.get_lesson_tasks(session, lesson_id)
    return LessonResponse(
        id=lesson.id,
        course_id=lesson.course_id,
        title=lesson.title,
        description=lesson.description,
        order_in_course=lesson.order_in_course,
        estimated_minutes=lesson.estimated_minutes,
        tasks_count=lesson.tasks_count,
        tasks=[to_secure_task(task) for task in tasks]
    )


@router.get("/tasks/{task_id}/options", response_model=TaskOptionsResponse)
async def get_task_options(
    task_id: int,
    session: Session = Depends(get_session)
):
    """Shuffled answer options for a multiple-choice or gap-fill task."""
    return TaskOptionsResponse(task_id=task_id, options=content_service.get_task_options(session, task_id))


@router.post("/tasks/{task_id}/check", response_model=CheckAnswerResponse)
async def check_answer(
    task_id: int,
    request: CheckAnswerRequest,
    session: Session = Depends(get_session)
):
    """Check one answer (case-insensitive, surrounding whitespace ignored) and reveal the correct one."""
    result = content_service.check_task_answer(session, task_id, request.answer)
    return CheckAnswerResponse(task_id=result.task_id, is_correct=result.is_correct, correct_answer=result.correct_answer)


@router.post("/{lesson_id}/attempts", response_model=LessonAttemptResponse, status_code=status.HTTP_201_CREATED)
async def start_attempt(
    lesson_id: int,
    request: StartAttemptRequest,
    session: Session = Depends(get_session)
):
    """Start a new attempt at a lesson."""
    attempt = lesson_attempt_service.start_attempt(session, request.user_id, lesson_id)
    commit_or_rollback(session, "start lesson attempt")
    session.refresh(attempt)
    return LessonAttemptResponse.from_attempt(attempt)


@router.get("/attempts/history", response_model=List[LessonAttemptResponse])
async def get_attempt_history(
    user_id: int,
    lesson_id: Optional[int] = None,
    session: Session = Depends(get_session)
):
    """The user's attempts, most recent first."""
    attempts = lesson_attempt_service.list_user_attempts(session, user_id, lesson_id=lesson_id)
    return [LessonAttemptResponse.from_attempt(attempt) for attempt in attempts]


@router.post("/attempts/{attempt_id}/complete", response_model=CompleteAttemptResponse)
async def complete_attempt(
    attempt_id: int,
    request: CompleteAttemptRequest,
    session: Session = Depends(get_session)
):
    """
    Complete an attempt with the learner's answers.

    The server checks every answer, computes score and XP, and adds the XP and
    the completed lesson to today's stats. Everything is committed together.
    Completing an attempt twice is rejected with 409.
    """
    result = lesson_attempt_service.complete_attempt(session, attempt_id, request.user_id, request.answers)
    commit_or_rollback(session, "complete lesson attempt")
    session.refresh(result.attempt)

    return CompleteAttemptResponse(
        attempt=LessonAttemptResponse.from_attempt(result.attempt),
        results=[
            TaskResultResponse(task_id=r.task_id, is_correct=r.is_correct, correct_answer=r.correct_answer)
            for r in result.task_results
        ],
        today_xp=result.daily_stat.xp_earned,
        goal_met_today=result.daily_stat.goal_met,
        course_progress=to_progress_response(result.attempt.lesson.course_id, result.course_progress),
    )
