"""Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database. API tests run the real
FastAPI app with the session dependency pointed at that database.
"""
import os

# Settings are read at import time and require a database URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, timedelta
from typing import Callable, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from langify.core.database import get_session
from langify.main import app
from langify.models.models import (
    Course,
    DailyGoal,
    Lesson,
    LessonAttempt,
    Task,
    TaskType,
    User,
    UserDailyStat,
    UserRole,
    VocabularyItem,
)

TODAY = date(2025, 3, 14)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine():
    """Fresh in-memory database shared by all connections of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    """API client whose requests use the test database."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def today() -> date:
    return TODAY


# =============================================================================
# Factories
# =============================================================================


@pytest.fixture
def make_user(session) -> Callable[..., User]:
    """Create a user with a daily goal."""
    counter = {"n": 0}

    def _make_user(
        name: Optional[str] = None,
        role: UserRole = UserRole.USER,
        target_xp_per_day: int = 50,
        email: Optional[str] = None,
    ) -> User:
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        user = User(
            email=email or f"user{counter['n']}@example.com",
            name=name,
            password=User.hash_password("secret123"),
            role=UserRole(role).value,
        )
        session.add(user)
        session.flush()
        session.add(DailyGoal(user_id=user.id, target_xp_per_day=target_xp_per_day))
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_course(session) -> Callable[..., Course]:
    """Create a course with N lessons of M multiple-choice tasks each."""

    def _make_course(
        title: str = "English for IT",
        lessons: int = 2,
        tasks_per_lesson: int = 2,
        is_published: bool = True,
        lessons_count: Optional[int] = None,
        industry_tag: str = "it",
        level: str = "A2",
    ) -> Course:
        course = Course(
            title=title,
            description=f"{title} description",
            industry_tag=industry_tag,
            level=level,
            is_published=is_published,
            lessons_count=lessons if lessons_count is None else lessons_count,
        )
        session.add(course)
        session.flush()

        for lesson_index in range(1, lessons + 1):
            lesson = Lesson(
                course_id=course.id,
                title=f"{title} lesson {lesson_index}",
                order_in_course=lesson_index,
                tasks_count=tasks_per_lesson,
            )
            session.add(lesson)
            session.flush()
            for task_index in range(1, tasks_per_lesson + 1):
                session.add(Task(
                    lesson_id=lesson.id,
                    type=TaskType.MULTIPLE_CHOICE.value,
                    question_text=f"Question {lesson_index}.{task_index}",
                    correct_answer=f"answer {task_index}",
                    incorrect_answers=["wrong a", "wrong b", "wrong c"],
                    order_in_lesson=task_index,
                ))

        session.commit()
        session.refresh(course)
        return course

    return _make_course


@pytest.fixture
def lesson_ids(session) -> Callable[[Course], List[int]]:
    def _lesson_ids(course: Course) -> List[int]:
        return [lesson.id for lesson in sorted(course.lessons, key=lambda lesson: lesson.order_in_course)]

    return _lesson_ids


@pytest.fixture
def add_daily_stats(session) -> Callable[..., None]:
    """Insert daily stat rows relative to a day: {offset_in_days: (xp, goal_met)}."""

    def _add_daily_stats(user_id: int, days: dict, end: date = TODAY, lessons: int = 1) -> None:
        for offset, (xp, goal_met) in days.items():
            session.add(UserDailyStat(
                user_id=user_id,
                date=end + timedelta(days=offset),
                xp_earned=xp,
                lessons_completed=lessons,
                goal_met=goal_met,
            ))
        session.commit()

    return _add_daily_stats


@pytest.fixture
def complete_lesson(session) -> Callable[..., LessonAttempt]:
    """Record a completed attempt directly, without going through scoring."""

    def _complete_lesson(user_id: int, lesson_id: int, score_percent: int = 100, completed: bool = True):
        attempt = LessonAttempt(user_id=user_id, lesson_id=lesson_id, score_percent=score_percent)
        if completed:
            attempt.completed_at = attempt.started_at
        session.add(attempt)
        session.commit()
        session.refresh(attempt)
        return attempt

    return _complete_lesson


@pytest.fixture
def make_vocabulary(session) -> Callable[..., VocabularyItem]:
    def _make_vocabulary(word: str, translation: str, industry_tag: str = "it") -> VocabularyItem:
        item = VocabularyItem(english_word_or_phrase=word, translation=translation, industry_tag=industry_tag)
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    return _make_vocabulary
