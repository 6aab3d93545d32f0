"""Unit tests for the teacher dashboard aggregation."""
from datetime import timedelta

from langify.services import teacher_stats_service
from langify.utils import date_utils


class TestStudentActivity:
    """Tests for get_student_activity."""

    def test_totals_per_student(self, session, make_user, make_course, lesson_ids,
                                complete_lesson, add_daily_stats, today) -> None:
        """Test XP, lessons, courses and streak for each learner, highest XP first."""
        make_user("Teacher", role="teacher")
        busy = make_user("Busy")
        quiet = make_user("Quiet")
        course = make_course(lessons=2)
        ids = lesson_ids(course)
        complete_lesson(busy.id, ids[0])
        complete_lesson(busy.id, ids[1])
        complete_lesson(quiet.id, ids[0], completed=False)
        add_daily_stats(busy.id, {-1: (60, True), 0: (50, True)})
        add_daily_stats(quiet.id, {-4: (10, False)})

        activity = teacher_stats_service.get_student_activity(session, today)

        assert [row.name for row in activity] == ["Busy", "Quiet"]
        busy_row, quiet_row = activity
        assert busy_row.total_xp == 110
        assert busy_row.lessons_completed == 2
        assert busy_row.courses_started == 1
        assert busy_row.courses_completed == 1
        assert busy_row.current_streak == 2
        assert busy_row.last_active == today
        assert quiet_row.lessons_completed == 0
        assert quiet_row.courses_started == 0
        assert quiet_row.last_active == today - timedelta(days=4)


class TestCourseStats:
    """Tests for get_course_stats."""

    def test_average_progress_over_started_students(self, session, make_user, make_course,
                                                    lesson_ids, complete_lesson) -> None:
        """Test that students without progress are not part of the average."""
        first = make_user()
        second = make_user()
        make_user()
        course = make_course(lessons=4)
        ids = lesson_ids(course)
        for lesson_id in ids:
            complete_lesson(first.id, lesson_id)
        complete_lesson(second.id, ids[0])

        stats = teacher_stats_service.get_course_stats(session)

        assert len(stats) == 1
        assert stats[0].total_students == 2
        assert stats[0].completed_students == 1
        assert stats[0].avg_progress == 63  # (100 + 25) / 2 = 62.5
        assert stats[0].total_lessons == 4

    def test_drafts_are_excluded(self, session, make_course) -> None:
        make_course(is_published=False)

        assert teacher_stats_service.get_course_stats(session) == []


class TestStudentCourseProgress:
    """Tests for get_student_course_progress."""

    def test_scenario_three_of_five(self, session, make_user, make_course, lesson_ids, complete_lesson) -> None:
        """Test 3 distinct completed lessons of 5, one retried, plus an unfinished attempt."""
        student = make_user("Ann")
        course = make_course(lessons=5)
        ids = lesson_ids(course)
        complete_lesson(student.id, ids[0], score_percent=100)
        complete_lesson(student.id, ids[0], score_percent=50)
        complete_lesson(student.id, ids[1], score_percent=80)
        complete_lesson(student.id, ids[2], score_percent=70)
        unfinished = complete_lesson(student.id, ids[3], completed=False)
        unfinished.started_at = date_utils.utc_now() + timedelta(hours=1)
        session.add(unfinished)
        session.commit()

        rows = teacher_stats_service.get_student_course_progress(session)

        assert len(rows) == 1
        row = rows[0]
        assert row.completed_lessons == 3
        assert row.progress_percent == 60
        assert row.avg_score == 75
        assert row.last_attempt == unfinished.started_at

    def test_sorted_by_name_then_progress(self, session, make_user, make_course, lesson_ids, complete_lesson) -> None:
        zed = make_user("zed")
        amy = make_user("Amy")
        slow = make_course(title="Slow", lessons=4)
        fast = make_course(title="Fast", lessons=1)
        complete_lesson(zed.id, lesson_ids(slow)[0])
        complete_lesson(amy.id, lesson_ids(slow)[0])
        complete_lesson(amy.id, lesson_ids(fast)[0])

        rows = teacher_stats_service.get_student_course_progress(session)

        assert [(row.student_name, row.course_title) for row in rows] == [
            ("Amy", "Fast"),
            ("Amy", "Slow"),
            ("zed", "Slow"),
        ]

    def test_filter_by_student(self, session, make_user, make_course, lesson_ids, complete_lesson) -> None:
        first = make_user()
        second = make_user()
        course = make_course(lessons=1)
        complete_lesson(first.id, lesson_ids(course)[0])
        complete_lesson(second.id, lesson_ids(course)[0])

        rows = teacher_stats_service.get_student_course_progress(session, student_id=second.id)

        assert [row.student_id for row in rows] == [second.id]


class TestDashboard:
    def test_all_views_present(self, session, make_user, make_course, today) -> None:
        make_user()
        make_course()

        dashboard = teacher_stats_service.get_teacher_dashboard(session, today)

        assert set(dashboard) == {"students", "course_stats", "student_progress"}
        assert len(dashboard["students"]) == 1
        assert len(dashboard["course_stats"]) == 1
        assert dashboard["student_progress"] == []
