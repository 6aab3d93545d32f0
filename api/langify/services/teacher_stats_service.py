"""
Teacher dashboard aggregation.

Everything is computed over learners (role ``user``) and published courses.
The data is loaded with one query per table and grouped in memory.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Set

from sqlmodel import Session, select

from langify.models.models import Course, Lesson, LessonAttempt, User, UserDailyStat, UserRole
from langify.services import streak_service
from langify.services.progress_service import compute_course_progress
from langify.utils import date_utils
from langify.utils.text_utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentActivity:
    student_id: int
    name: str
    email: str
    total_xp: int
    lessons_completed: int
    courses_started: int
    courses_completed: int
    last_active: Optional[date]
    current_streak: int


@dataclass(frozen=True)
class CourseStats:
    course_id: int
    course_title: str
    total_students: int
    completed_students: int
    avg_progress: int
    total_lessons: int


@dataclass(frozen=True)
class StudentCourseProgress:
    student_id: int
    student_name: str
    course_id: int
    course_title: str
    completed_lessons: int
    total_lessons: int
    progress_percent: int
    avg_score: int
    last_attempt: Optional[datetime]


class _Snapshot:
    """Rows the dashboard needs, grouped by user and course."""

    def __init__(self, session: Session):
        self.students = list(session.exec(
            select(User).where(User.role == UserRole.USER.value).order_by(User.id)
        ).all())
        self.courses = list(session.exec(
            select(Course).where(Course.is_published == True).order_by(Course.id)  # noqa: E712
        ).all())

        self.lessons_by_course: Dict[int, Set[int]] = defaultdict(set)
        for lesson_id, course_id in session.exec(select(Lesson.id, Lesson.course_id)).all():
            self.lessons_by_course[course_id].add(lesson_id)

        self.attempts_by_user: Dict[int, List[LessonAttempt]] = defaultdict(list)
        for attempt in session.exec(select(LessonAttempt)).all():
            self.attempts_by_user[attempt.user_id].append(attempt)

        self.stats_by_user: Dict[int, List[UserDailyStat]] = defaultdict(list)
        for stat in session.exec(select(UserDailyStat)).all():
            self.stats_by_user[stat.user_id].append(stat)

    def completed_lesson_ids(self, user_id: int) -> Set[int]:
        return {a.lesson_id for a in self.attempts_by_user.get(user_id, []) if a.completed_at is not None}


def _student_activity(snapshot: _Snapshot, today: date) -> List[StudentActivity]:
    activity = []
    for student in snapshot.students:
        stats = snapshot.stats_by_user.get(student.id, [])
        completed_ids = snapshot.completed_lesson_ids(student.id)

        courses_started = 0
        courses_completed = 0
        for course in snapshot.courses:
            progress = compute_course_progress(
                snapshot.lessons_by_course.get(course.id, set()), completed_ids, course.lessons_count
            )
            courses_started += progress.is_started
            courses_completed += progress.is_completed

        activity.append(StudentActivity(
            student_id=student.id,
            name=student.name,
            email=student.email,
            total_xp=sum(stat.xp_earned for stat in stats),
            lessons_completed=len(completed_ids),
            courses_started=courses_started,
            courses_completed=courses_completed,
            last_active=max((stat.date for stat in stats), default=None),
            current_streak=streak_service.calculate_current_streak(stats, today),
        ))

    activity.sort(key=lambda item: (-item.total_xp, item.student_id))
    return activity


def get_student_activity(session: Session, today: Optional[date] = None) -> List[StudentActivity]:
    """Per-learner totals, highest total XP first."""
    return _student_activity(_Snapshot(session), today or date_utils.today())


def _course_stats(snapshot: _Snapshot) -> List[CourseStats]:
    results = []
    for course in snapshot.courses:
        course_lessons = snapshot.lessons_by_course.get(course.id, set())
        total_lessons = course.lessons_count or len(course_lessons)

        with_progress = 0
        completed = 0
        percent_sum = 0.0
        for student in snapshot.students:
            progress = compute_course_progress(
                course_lessons, snapshot.completed_lesson_ids(student.id), course.lessons_count
            )
            if not progress.is_started:
                continue
            with_progress += 1
            completed += progress.is_completed
            # Unrounded so the average is not skewed by per-student rounding
            percent_sum += min(100.0, progress.completed_lessons / total_lessons * 100) if total_lessons else 0.0

        results.append(CourseStats(
            course_id=course.id,
            course_title=course.title,
            total_students=with_progress,
            completed_students=completed,
            avg_progress=round_half_up(percent_sum / with_progress) if with_progress else 0,
            total_lessons=total_lessons,
        ))

    results.sort(key=lambda item: (-item.total_students, item.course_id))
    return results


def get_course_stats(session: Session) -> List[CourseStats]:
    """Per published course: learners with progress, learners who finished, average progress."""
    return _course_stats(_Snapshot(session))


def _student_course_progress(snapshot: _Snapshot) -> List[StudentCourseProgress]:
    results = []
    for student in snapshot.students:
        attempts = snapshot.attempts_by_user.get(student.id, [])
        if not attempts:
            continue
        for course in snapshot.courses:
            course_lessons = snapshot.lessons_by_course.get(course.id, set())
            course_attempts = [a for a in attempts if a.lesson_id in course_lessons]
            if not course_attempts:
                continue

            completed_attempts = [a for a in course_attempts if a.completed_at is not None]
            progress = compute_course_progress(
                course_lessons, {a.lesson_id for a in completed_attempts}, course.lessons_count
            )
            avg_score = (
                round_half_up(sum(a.score_percent for a in completed_attempts) / len(completed_attempts))
                if completed_attempts else 0
            )

            results.append(StudentCourseProgress(
                student_id=student.id,
                student_name=student.name,
                course_id=course.id,
                course_title=course.title,
                completed_lessons=progress.completed_lessons,
                total_lessons=progress.total_lessons,
                progress_percent=progress.progress_percent,
                avg_score=avg_score,
                last_attempt=max(a.started_at for a in course_attempts),
            ))

    results.sort(key=lambda item: (item.student_name.casefold(), -item.progress_percent, item.course_id))
    return results


def get_student_course_progress(session: Session, student_id: Optional[int] = None) -> List[StudentCourseProgress]:
    """
    Progress of each learner in each published course they have attempted.

    A started but never completed attempt counts toward last_attempt only.
    Sorted by learner name, then progress descending.
    """
    rows = _student_course_progress(_Snapshot(session))
    if student_id is not None:
        rows = [row for row in rows if row.student_id == student_id]
    return rows


def get_teacher_dashboard(session: Session, today: Optional[date] = None) -> Dict[str, list]:
    """All three dashboard views from a single snapshot."""
    snapshot = _Snapshot(session)
    dashboard = {
        "students": _student_activity(snapshot, today or date_utils.today()),
        "course_stats": _course_stats(snapshot),
        "student_progress": _student_course_progress(snapshot),
    }
    logger.info(
        f"Built teacher dashboard: {len(snapshot.students)} students, {len(snapshot.courses)} published courses"
    )
    return dashboard
