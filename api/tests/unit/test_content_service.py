"""Unit tests for the catalogue, answer checking and authoring."""
import random

import pytest

from langify.core.exceptions import NotFoundError, ValidationError
from langify.models.models import Task, TaskType
from langify.services import content_service


class TestAnswerChecking:
    """Tests for answer options and checking."""

    def test_options_contain_every_answer_once(self) -> None:
        """Test that options are the correct answer plus the incorrect ones."""
        task = Task(lesson_id=1, question_text="q", correct_answer="merge", incorrect_answers=["fork", "clone"])

        options = content_service.build_task_options(task, random.Random(3))

        assert sorted(options) == ["clone", "fork", "merge"]

    def test_flashcard_has_no_options(self) -> None:
        task = Task(lesson_id=1, type=TaskType.FLASHCARD.value, question_text="q", correct_answer="a")

        assert content_service.build_task_options(task) == []

    def test_answer_ignores_case_and_spacing(self) -> None:
        """Test that the comparison is normalized on both sides."""
        task = Task(lesson_id=1, question_text="q", correct_answer="Pull Request")

        assert content_service.is_answer_correct(task, "  pull   request ") is True
        assert content_service.is_answer_correct(task, "push request") is False

    def test_empty_answer_is_wrong(self) -> None:
        task = Task(lesson_id=1, question_text="q", correct_answer="merge")

        assert content_service.is_answer_correct(task, "   ") is False
        assert content_service.is_answer_correct(task, None) is False

    def test_check_unknown_task(self, session) -> None:
        with pytest.raises(NotFoundError):
            content_service.check_task_answer(session, 404, "anything")


class TestCatalogue:
    """Tests for catalogue reads."""

    def test_published_courses_with_filters(self, session, make_course) -> None:
        """Test that drafts are hidden and filters narrow the list."""
        make_course(title="IT basics", industry_tag="it", level="A2")
        make_course(title="Finance basics", industry_tag="finance", level="B1")
        make_course(title="Draft", is_published=False)

        assert {c.title for c in content_service.list_published_courses(session)} == {"IT basics", "Finance basics"}
        assert [c.title for c in content_service.list_published_courses(session, industry="finance")] == [
            "Finance basics"
        ]
        assert [c.title for c in content_service.list_published_courses(session, level="A2")] == ["IT basics"]

    def test_draft_is_missing_for_learners(self, session, make_course) -> None:
        course = make_course(is_published=False)

        with pytest.raises(NotFoundError):
            content_service.get_course(session, course.id, published_only=True)
        assert content_service.get_course(session, course.id).id == course.id


class TestAuthoring:
    """Tests for course, lesson and task authoring."""

    def test_course_lesson_task_counts_stay_in_sync(self, session, make_user) -> None:
        """Test that lessons_count and tasks_count follow creates and deletes."""
        teacher = make_user(role="teacher")
        course = content_service.create_course(session, teacher.id, title="Emails", industry_tag="office")
        first = content_service.create_lesson(session, course.id, title="Greetings")
        second = content_service.create_lesson(session, course.id, title="Closings")
        content_service.create_task(session, first.id, question_text="Hi ___", correct_answer="there",
                                    type=TaskType.GAP_FILL.value)
        content_service.create_task(session, first.id, question_text="Hello", correct_answer="Cześć",
                                    type=TaskType.FLASHCARD.value, incorrect_answers=["x"])
        session.commit()

        assert course.lessons_count == 2
        assert (first.order_in_course, second.order_in_course) == (1, 2)
        assert first.tasks_count == 2
        assert [task.order_in_lesson for task in first.tasks] == [1, 2]
        assert first.tasks[1].incorrect_answers == []

        content_service.delete_lesson(session, second.id)
        session.commit()
        assert course.lessons_count == 1

    def test_append_after_delete_uses_next_free_position(self, session, make_course) -> None:
        """Test that a new lesson or task goes after the last one even when an earlier one was deleted."""
        course = make_course(lessons=3, tasks_per_lesson=3)
        first, _, third = course.lessons
        content_service.delete_lesson(session, first.id)
        content_service.delete_task(session, third.tasks[0].id)
        session.commit()

        lesson = content_service.create_lesson(session, course.id, title="Wrap-up")
        task = content_service.create_task(session, third.id, question_text="q", correct_answer="a")
        session.commit()

        assert lesson.order_in_course == 4
        assert task.order_in_lesson == 4
        assert [item.order_in_course for item in content_service.get_course_lessons(session, course.id)] == [2, 3, 4]

    def test_new_course_is_a_draft(self, session, make_user) -> None:
        teacher = make_user(role="teacher")

        course = content_service.create_course(session, teacher.id, title="Drafted")

        assert course.is_published is False
        assert course.created_by == teacher.id

    def test_publish(self, session, make_user) -> None:
        teacher = make_user(role="teacher")
        course = content_service.create_course(session, teacher.id, title="Soon live")

        content_service.set_course_published(session, course.id, True)

        assert course.is_published is True

    def test_invalid_fields(self, session, make_user) -> None:
        """Test that unknown enum values and empty titles are rejected."""
        teacher = make_user(role="teacher")

        with pytest.raises(ValidationError):
            content_service.create_course(session, teacher.id, title="  ")
        with pytest.raises(ValidationError):
            content_service.create_course(session, teacher.id, title="X", level="Z9")

        course = content_service.create_course(session, teacher.id, title="Valid")
        lesson = content_service.create_lesson(session, course.id, title="L1")
        with pytest.raises(ValidationError):
            content_service.create_task(session, lesson.id, question_text="q", correct_answer="a", type="ESSAY")

    def test_task_with_unknown_vocabulary(self, session, make_course) -> None:
        course = make_course(lessons=1)

        with pytest.raises(NotFoundError):
            content_service.create_task(
                session, course.lessons[0].id, question_text="q", correct_answer="a", vocabulary_id=404
            )

    def test_delete_course_removes_lessons(self, session, make_course) -> None:
        course = make_course(lessons=2)
        lesson_id = course.lessons[0].id

        content_service.delete_course(session, course.id)
        session.commit()

        with pytest.raises(NotFoundError):
            content_service.get_lesson(session, lesson_id)
