"""
Lesson attempt service.

An attempt is created when a learner opens a lesson and completed once when
they submit their answers. Completion is scored here, not by the client:
each answer is checked against the stored task, the attempt is stamped with
score and XP, and the XP plus one completed lesson are added to the day's
stats in the same transaction.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from sqlalchemy import update
from sqlmodel import Session, select

from langify.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from langify.models.models import LessonAttempt, Task, TaskType, User, UserDailyStat
from langify.schemas.lesson import TaskAnswerSubmission
from langify.services import content_service, daily_stats_service, progress_service
from langify.services.progress_service import CourseProgress
from langify.utils import date_utils
from langify.utils.text_utils import round_half_up

logger = logging.getLogger(__name__)

BASE_XP = 10
SCORE_XP = 40


@dataclass(frozen=True)
class TaskResult:
    task_id: int
    is_correct: bool
    correct_answer: str


@dataclass(frozen=True)
class AttemptResult:
    attempt: LessonAttempt
    task_results: List[TaskResult]
    daily_stat: UserDailyStat
    course_progress: CourseProgress


def calculate_score_percent(correct_answers: int, total_questions: int) -> int:
    """Share of correct answers as a whole percent (0 when there are no questions)."""
    if total_questions <= 0:
        return 0
    return round_half_up(correct_answers / total_questions * 100)


def calculate_xp(score_percent: int) -> int:
    """XP for a completed lesson: 10 for finishing plus up to 40 for the score (10..50)."""
    score_percent = max(0, min(100, score_percent))
    return round_half_up(BASE_XP + score_percent / 100 * SCORE_XP)


def grade_answer(task: Task, submission: Optional[TaskAnswerSubmission]) -> bool:
    """
    Decide whether one task was answered correctly.

    Flashcards are graded by the learner's self assessment when given; every
    other answer is compared with the stored correct answer. A task with no
    submission is wrong.
    """
    if submission is None:
        return False
    if TaskType(task.type) == TaskType.FLASHCARD and submission.self_assessed_correct is not None:
        return submission.self_assessed_correct
    return content_service.is_answer_correct(task, submission.answer)


def start_attempt(session: Session, user_id: int, lesson_id: int) -> LessonAttempt:
    """
    Open a new attempt at a lesson. Earlier attempts, finished or not, are kept.

    Raises:
        NotFoundError: If the user or lesson does not exist
        ValidationError: If the lesson has no tasks
    """
    if not session.get(User, user_id):
        raise NotFoundError(f"User with id {user_id} not found")
    lesson = content_service.get_lesson(session, lesson_id)
    if not content_service.get_lesson_tasks(session, lesson_id):
        raise ValidationError(f"Lesson {lesson_id} has no tasks")

    attempt = LessonAttempt(user_id=user_id, lesson_id=lesson.id)
    session.add(attempt)
    session.flush()

    logger.info(f"User {user_id} started attempt {attempt.id} at lesson {lesson_id}")
    return attempt


def get_attempt(session: Session, attempt_id: int, user_id: Optional[int] = None) -> LessonAttempt:
    attempt = session.get(LessonAttempt, attempt_id)
    if not attempt:
        raise NotFoundError(f"Lesson attempt with id {attempt_id} not found")
    if user_id is not None and attempt.user_id != user_id:
        raise AuthorizationError(f"Lesson attempt {attempt_id} does not belong to user {user_id}")
    return attempt


def list_user_attempts(session: Session, user_id: int, lesson_id: Optional[int] = None) -> List[LessonAttempt]:
    """A user's attempts, most recent first."""
    query = select(LessonAttempt).where(LessonAttempt.user_id == user_id)
    if lesson_id is not None:
        query = query.where(LessonAttempt.lesson_id == lesson_id)
    return list(session.exec(query.order_by(LessonAttempt.started_at.desc(), LessonAttempt.id.desc())).all())  # type: ignore


def complete_attempt(
    session: Session,
    attempt_id: int,
    user_id: int,
    answers: Sequence[TaskAnswerSubmission],
) -> AttemptResult:
    """
    Score and complete an attempt, then credit the XP and lesson to today's stats.

    Every task of the lesson counts as one question; unanswered tasks are
    wrong. The caller commits.

    Args:
        session: Database session
        attempt_id: Attempt to complete
        user_id: Acting user, must own the attempt
        answers: One submission per answered task

    Returns:
        AttemptResult with the completed attempt, per-task results, the
        updated daily stat and the course progress after completion

    Raises:
        NotFoundError: If the attempt does not exist
        AuthorizationError: If the attempt belongs to another user
        ConflictError: If the attempt is already completed
        ValidationError: If an answer names a task outside the lesson or a task twice
    """
    attempt = get_attempt(session, attempt_id, user_id)
    if attempt.completed_at is not None:
        raise ConflictError(f"Lesson attempt {attempt_id} is already completed")

    tasks = content_service.get_lesson_tasks(session, attempt.lesson_id)
    task_ids = {task.id for task in tasks}

    submissions = {}
    for submission in answers:
        if submission.task_id not in task_ids:
            raise ValidationError(f"Task {submission.task_id} is not part of lesson {attempt.lesson_id}")
        if submission.task_id in submissions:
            raise ValidationError(f"Task {submission.task_id} was answered more than once")
        submissions[submission.task_id] = submission

    task_results = [
        TaskResult(
            task_id=task.id,
            is_correct=grade_answer(task, submissions.get(task.id)),
            correct_answer=task.correct_answer,
        )
        for task in tasks
    ]

    correct_answers = sum(1 for result in task_results if result.is_correct)
    score_percent = calculate_score_percent(correct_answers, len(tasks))
    completed_at = date_utils.utc_now()

    # Only the request that flips completed_at from NULL may credit the lesson
    updated = session.exec(
        update(LessonAttempt)
        .where(LessonAttempt.id == attempt.id, LessonAttempt.completed_at.is_(None))  # type: ignore
        .values(
            completed_at=completed_at,
            total_questions=len(tasks),
            correct_answers=correct_answers,
            score_percent=score_percent,
            xp_earned=calculate_xp(score_percent),
        )
        .execution_options(synchronize_session=False)
    )
    if updated.rowcount == 0:
        raise ConflictError(f"Lesson attempt {attempt_id} is already completed")
    session.refresh(attempt)

    daily_stat = daily_stats_service.accumulate_daily_stat(
        session,
        user_id,
        xp_delta=attempt.xp_earned,
        lessons_delta=1,
        day=date_utils.to_calendar_day(completed_at),
    )

    lesson = content_service.get_lesson(session, attempt.lesson_id)
    course_progress = progress_service.get_user_course_progress(session, user_id, lesson.course_id)

    logger.info(
        f"User {user_id} completed attempt {attempt.id} at lesson {attempt.lesson_id}: "
        f"{correct_answers}/{len(tasks)} correct, score {score_percent}%, +{attempt.xp_earned} XP"
    )
    return AttemptResult(
        attempt=attempt,
        task_results=task_results,
        daily_stat=daily_stat,
        course_progress=course_progress,
    )
