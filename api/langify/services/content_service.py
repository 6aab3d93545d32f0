"""
Content service: course catalogue, lesson player reads and teacher authoring.

Learner-facing reads never expose a task's correct answer; answers are
checked here instead.
"""
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select, func

from langify.core.exceptions import NotFoundError, ValidationError
from langify.models.models import CEFRLevel, Course, IndustryContext, Lesson, Task, TaskType, VocabularyItem
from langify.utils import date_utils
from langify.utils.text_utils import normalize_answer

logger = logging.getLogger(__name__)

COURSE_FIELDS = {"title", "description", "industry_tag", "level", "is_published", "estimated_minutes", "image_url"}
LESSON_FIELDS = {"title", "description", "estimated_minutes", "order_in_course"}
TASK_FIELDS = {
    "type", "question_text", "question_extra", "correct_answer",
    "incorrect_answers", "vocabulary_id", "order_in_lesson",
}


@dataclass(frozen=True)
class AnswerCheck:
    task_id: int
    is_correct: bool
    correct_answer: str


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

def list_published_courses(
    session: Session,
    industry: Optional[str] = None,
    level: Optional[str] = None,
) -> List[Course]:
    """Published courses, newest first, optionally filtered by industry tag and CEFR level."""
    query = select(Course).where(Course.is_published == True)  # noqa: E712
    if industry:
        query = query.where(Course.industry_tag == industry)
    if level:
        query = query.where(Course.level == level)
    return list(session.exec(query.order_by(Course.created_at.desc(), Course.id.desc())).all())  # type: ignore


def list_courses_by_author(session: Session, user_id: int) -> List[Course]:
    """Every course (draft or published) created by a user, newest first."""
    return list(session.exec(
        select(Course).where(Course.created_by == user_id).order_by(Course.created_at.desc(), Course.id.desc())  # type: ignore
    ).all())


def get_course(session: Session, course_id: int, published_only: bool = False) -> Course:
    """Return a course or raise NotFoundError. Drafts count as missing when published_only is set."""
    course = session.get(Course, course_id)
    if not course or (published_only and not course.is_published):
        raise NotFoundError(f"Course with id {course_id} not found")
    return course


def get_course_lessons(session: Session, course_id: int) -> List[Lesson]:
    """Lessons of a course in course order."""
    return list(session.exec(
        select(Lesson).where(Lesson.course_id == course_id).order_by(Lesson.order_in_course, Lesson.id)  # type: ignore
    ).all())


def get_lesson(session: Session, lesson_id: int) -> Lesson:
    lesson = session.get(Lesson, lesson_id)
    if not lesson:
        raise NotFoundError(f"Lesson with id {lesson_id} not found")
    return lesson


def get_lesson_tasks(session: Session, lesson_id: int) -> List[Task]:
    """Tasks of a lesson in lesson order. Callers decide whether the answers leave the server."""
    return list(session.exec(
        select(Task).where(Task.lesson_id == lesson_id).order_by(Task.order_in_lesson, Task.id)  # type: ignore
    ).all())


def get_task(session: Session, task_id: int) -> Task:
    task = session.get(Task, task_id)
    if not task:
        raise NotFoundError(f"Task with id {task_id} not found")
    return task


# ---------------------------------------------------------------------------
# Lesson player
# ---------------------------------------------------------------------------

def build_task_options(task: Task, rng: Optional[random.Random] = None) -> List[str]:
    """
    Answer options for a task: the correct answer plus the incorrect ones, shuffled.

    Flashcards have no options and return an empty list.
    """
    if TaskType(task.type) == TaskType.FLASHCARD:
        return []
    options = [task.correct_answer] + list(task.incorrect_answers or [])
    (rng or random).shuffle(options)
    return options


def get_task_options(session: Session, task_id: int, rng: Optional[random.Random] = None) -> List[str]:
    return build_task_options(get_task(session, task_id), rng)


def is_answer_correct(task: Task, answer: Optional[str]) -> bool:
    """Compare a submitted answer with the stored one, ignoring case and surrounding/repeated whitespace."""
    submitted = normalize_answer(answer)
    return bool(submitted) and submitted == normalize_answer(task.correct_answer)


def check_task_answer(session: Session, task_id: int, answer: Optional[str]) -> AnswerCheck:
    """Check one answer and reveal the correct one."""
    task = get_task(session, task_id)
    return AnswerCheck(task_id=task.id, is_correct=is_answer_correct(task, answer), correct_answer=task.correct_answer)


# ---------------------------------------------------------------------------
# Authoring
# ---------------------------------------------------------------------------

def _validate_course_fields(data: Dict[str, Any]) -> None:
    if "title" in data and not (data["title"] or "").strip():
        raise ValidationError("Course title must not be empty")
    if data.get("industry_tag") and data["industry_tag"] not in {i.value for i in IndustryContext}:
        raise ValidationError(f"Invalid industry tag: {data['industry_tag']}")
    if data.get("level") and data["level"] not in {level.value for level in CEFRLevel}:
        raise ValidationError(f"Invalid level: {data['level']}")


def _validate_task_fields(data: Dict[str, Any]) -> None:
    if "type" in data:
        try:
            TaskType(data["type"])
        except ValueError:
            raise ValidationError(f"Invalid task type: {data['type']}")
    if "question_text" in data and not (data["question_text"] or "").strip():
        raise ValidationError("Task question must not be empty")
    if "correct_answer" in data and not (data["correct_answer"] or "").strip():
        raise ValidationError("Task correct answer must not be empty")


def _sync_lessons_count(session: Session, course: Course) -> None:
    session.flush()
    count = session.exec(select(func.count()).select_from(Lesson).where(Lesson.course_id == course.id)).one()
    session.expire(course, ["lessons"])
    course.lessons_count = count
    course.updated_at = date_utils.utc_now()
    session.add(course)


def _sync_tasks_count(session: Session, lesson: Lesson) -> None:
    session.flush()
    count = session.exec(select(func.count()).select_from(Task).where(Task.lesson_id == lesson.id)).one()
    session.expire(lesson, ["tasks"])
    lesson.tasks_count = count
    lesson.updated_at = date_utils.utc_now()
    session.add(lesson)


def create_course(session: Session, author_id: int, **data: Any) -> Course:
    """Create a course (a draft unless is_published is passed) owned by author_id."""
    data = {key: value for key, value in data.items() if key in COURSE_FIELDS and value is not None}
    if "title" not in data:
        raise ValidationError("Course title is required")
    _validate_course_fields(data)

    course = Course(created_by=author_id, lessons_count=0, **data)
    session.add(course)
    session.flush()
    logger.info(f"User {author_id} created course {course.id} '{course.title}'")
    return course


def update_course(session: Session, course_id: int, **data: Any) -> Course:
    """Update the given course fields; None values are left unchanged."""
    course = get_course(session, course_id)
    data = {key: value for key, value in data.items() if key in COURSE_FIELDS and value is not None}
    _validate_course_fields(data)

    for key, value in data.items():
        setattr(course, key, value)
    course.updated_at = date_utils.utc_now()
    session.add(course)
    logger.info(f"Updated course {course_id}: {', '.join(sorted(data)) or 'no changes'}")
    return course


def set_course_published(session: Session, course_id: int, is_published: bool) -> Course:
    return update_course(session, course_id, is_published=is_published)


def delete_course(session: Session, course_id: int) -> None:
    """Delete a course with its lessons, their tasks and attempts."""
    course = get_course(session, course_id)
    session.delete(course)
    session.flush()
    logger.info(f"Deleted course {course_id}")


def create_lesson(session: Session, course_id: int, **data: Any) -> Lesson:
    """Append a lesson to a course (after the highest order in use) and resync lessons_count."""
    course = get_course(session, course_id)
    data = {key: value for key, value in data.items() if key in LESSON_FIELDS and value is not None}
    if not (data.get("title") or "").strip():
        raise ValidationError("Lesson title is required")

    if "order_in_course" not in data:
        last = session.exec(
            select(func.coalesce(func.max(Lesson.order_in_course), 0)).where(Lesson.course_id == course_id)
        ).one()
        data["order_in_course"] = last + 1

    lesson = Lesson(course_id=course_id, tasks_count=0, **data)
    session.add(lesson)
    _sync_lessons_count(session, course)
    logger.info(f"Created lesson {lesson.id} in course {course_id} at position {lesson.order_in_course}")
    return lesson


def update_lesson(session: Session, lesson_id: int, **data: Any) -> Lesson:
    lesson = get_lesson(session, lesson_id)
    data = {key: value for key, value in data.items() if key in LESSON_FIELDS and value is not None}
    if "title" in data and not data["title"].strip():
        raise ValidationError("Lesson title must not be empty")

    for key, value in data.items():
        setattr(lesson, key, value)
    lesson.updated_at = date_utils.utc_now()
    session.add(lesson)
    return lesson


def delete_lesson(session: Session, lesson_id: int) -> None:
    """Delete a lesson with its tasks and attempts, then resync the course's lessons_count."""
    lesson = get_lesson(session, lesson_id)
    course = get_course(session, lesson.course_id)
    session.delete(lesson)
    _sync_lessons_count(session, course)
    logger.info(f"Deleted lesson {lesson_id} from course {course.id}")


def create_task(session: Session, lesson_id: int, **data: Any) -> Task:
    """
    Append a task to a lesson (after the highest order in use) and resync tasks_count.

    Flashcards never store incorrect answers.
    """
    lesson = get_lesson(session, lesson_id)
    data = {key: value for key, value in data.items() if key in TASK_FIELDS and value is not None}
    for required in ("question_text", "correct_answer"):
        if required not in data:
            raise ValidationError(f"Task {required} is required")
    _validate_task_fields(data)

    if data.get("vocabulary_id") is not None and not session.get(VocabularyItem, data["vocabulary_id"]):
        raise NotFoundError(f"Vocabulary item with id {data['vocabulary_id']} not found")

    task_type = TaskType(data.pop("type", TaskType.MULTIPLE_CHOICE))
    incorrect = [answer for answer in data.pop("incorrect_answers", []) if answer.strip()]
    if task_type == TaskType.FLASHCARD:
        incorrect = []

    if "order_in_lesson" not in data:
        last = session.exec(
            select(func.coalesce(func.max(Task.order_in_lesson), 0)).where(Task.lesson_id == lesson_id)
        ).one()
        data["order_in_lesson"] = last + 1

    task = Task(lesson_id=lesson_id, type=task_type.value, incorrect_answers=incorrect, **data)
    session.add(task)
    _sync_tasks_count(session, lesson)
    logger.info(f"Created {task_type.value} task {task.id} in lesson {lesson_id}")
    return task


def update_task(session: Session, task_id: int, **data: Any) -> Task:
    task = get_task(session, task_id)
    data = {key: value for key, value in data.items() if key in TASK_FIELDS and value is not None}
    _validate_task_fields(data)

    if data.get("vocabulary_id") is not None and not session.get(VocabularyItem, data["vocabulary_id"]):
        raise NotFoundError(f"Vocabulary item with id {data['vocabulary_id']} not found")

    if "type" in data:
        data["type"] = TaskType(data["type"]).value
    for key, value in data.items():
        setattr(task, key, value)
    if TaskType(task.type) == TaskType.FLASHCARD:
        task.incorrect_answers = []
    session.add(task)
    return task


def delete_task(session: Session, task_id: int) -> None:
    task = get_task(session, task_id)
    lesson = get_lesson(session, task.lesson_id)
    session.delete(task)
    _sync_tasks_count(session, lesson)
    logger.info(f"Deleted task {task_id} from lesson {lesson.id}")
