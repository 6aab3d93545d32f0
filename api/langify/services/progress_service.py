"""
Course progress aggregator.

Progress is derived from completed lesson attempts: a lesson counts as done
for a user once any of their attempts at it has been completed. Retrying a
lesson does not count twice.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from sqlmodel import Session, select

from langify.core.exceptions import NotFoundError
from langify.models.models import Course, Lesson, LessonAttempt
from langify.utils.text_utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseProgress:
    completed_lessons: int
    total_lessons: int
    progress_percent: int
    is_started: bool
    is_completed: bool


def calculate_percent(completed: int, total: int) -> int:
    """Whole-number completion percent, 0 when there is nothing to complete, clamped to [0, 100]."""
    if total <= 0:
        return 0
    return max(0, min(100, round_half_up(completed / total * 100)))


def compute_course_progress(
    course_lesson_ids: Iterable[int],
    completed_lesson_ids: Iterable[int],
    lessons_count: Optional[int] = None,
) -> CourseProgress:
    """
    Compute a user's progress through one course.

    Args:
        course_lesson_ids: Ids of the lessons in the course
        completed_lesson_ids: Ids of every lesson the user has completed (any course)
        lessons_count: Declared lesson count of the course; falls back to the
            number of lessons when unset or 0

    Returns:
        CourseProgress. A course with no lessons is never completed.
    """
    course_lessons = set(course_lesson_ids)
    completed = len(course_lessons & set(completed_lesson_ids))
    total = lessons_count or len(course_lessons)

    return CourseProgress(
        completed_lessons=completed,
        total_lessons=total,
        progress_percent=calculate_percent(completed, total),
        is_started=completed > 0,
        is_completed=total > 0 and completed >= total,
    )


def get_completed_lesson_ids(session: Session, user_id: int) -> Set[int]:
    """Distinct lessons the user has at least one completed attempt for."""
    lesson_ids = session.exec(
        select(LessonAttempt.lesson_id)
        .where(LessonAttempt.user_id == user_id)
        .where(LessonAttempt.completed_at.is_not(None))  # type: ignore
        .distinct()
    ).all()
    return set(lesson_ids)


def get_course_lesson_ids(session: Session, course_id: int) -> List[int]:
    return list(session.exec(
        select(Lesson.id).where(Lesson.course_id == course_id).order_by(Lesson.order_in_course)
    ).all())


def get_user_course_progress(session: Session, user_id: int, course_id: int) -> CourseProgress:
    """Progress of one user through one course."""
    course = session.get(Course, course_id)
    if not course:
        raise NotFoundError(f"Course with id {course_id} not found")

    return compute_course_progress(
        get_course_lesson_ids(session, course_id),
        get_completed_lesson_ids(session, user_id),
        course.lessons_count,
    )


def get_user_progress_for_published_courses(
    session: Session,
    user_id: int,
) -> List[Tuple[Course, CourseProgress]]:
    """
    Progress of one user through every published course, newest course first.

    Completed lessons are loaded once and intersected per course.
    """
    completed_ids = get_completed_lesson_ids(session, user_id)
    courses = session.exec(
        select(Course).where(Course.is_published == True).order_by(Course.created_at.desc(), Course.id.desc())  # type: ignore  # noqa: E712
    ).all()

    results = []
    for course in courses:
        lesson_ids = [lesson.id for lesson in course.lessons]
        results.append((course, compute_course_progress(lesson_ids, completed_ids, course.lessons_count)))

    logger.debug(f"Computed progress over {len(results)} published courses for user {user_id}")
    return results
