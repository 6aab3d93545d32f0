"""API tests for teacher authoring, the teacher dashboard and admin tools."""
from langify.models.models import UserRole
from langify.utils import date_utils

API = "/api/v1"


class TestTeacherAccess:
    """Tests for role checks on teacher routes."""

    def test_learner_is_forbidden(self, client, make_user) -> None:
        learner = make_user()

        response = client.get(f"{API}/teacher/dashboard", params={"user_id": learner.id})

        assert response.status_code == 403
        assert response.json()["type"] == "AuthorizationError"

    def test_admin_may_use_teacher_routes(self, client, make_user) -> None:
        admin = make_user(role=UserRole.ADMIN)

        assert client.get(f"{API}/teacher/dashboard", params={"user_id": admin.id}).status_code == 200


class TestAuthoring:
    """Tests for creating and publishing content."""

    def test_build_and_publish_a_course(self, client, make_user) -> None:
        """Test course -> lesson -> tasks -> publish, then the learner catalogue shows it."""
        teacher = make_user(role=UserRole.TEACHER)
        params = {"user_id": teacher.id}

        course = client.post(
            f"{API}/teacher/courses", params=params,
            json={"title": "Standups", "industry_tag": "it", "level": "B1"},
        ).json()
        assert course["is_published"] is False
        assert course["created_by"] == teacher.id
        assert client.get(f"{API}/courses").json()["total"] == 0

        lesson = client.post(
            f"{API}/teacher/courses/{course['id']}/lessons", params=params, json={"title": "Yesterday I..."}
        ).json()
        assert lesson["order_in_course"] == 1

        first = client.post(
            f"{API}/teacher/lessons/{lesson['id']}/tasks", params=params,
            json={"question_text": "I ___ the bug", "correct_answer": "fixed",
                  "incorrect_answers": ["fix", "fixing"], "type": "GAP_FILL"},
        )
        assert first.status_code == 201
        card = client.post(
            f"{API}/teacher/lessons/{lesson['id']}/tasks", params=params,
            json={"question_text": "blocker", "correct_answer": "przeszkoda",
                  "incorrect_answers": ["x"], "type": "FLASHCARD"},
        ).json()
        assert card["incorrect_answers"] == []
        assert card["order_in_lesson"] == 2

        published = client.put(
            f"{API}/teacher/courses/{course['id']}", params=params, json={"is_published": True}
        ).json()
        assert published["is_published"] is True
        assert published["lessons_count"] == 1
        assert published["title"] == "Standups"

        catalogue = client.get(f"{API}/courses").json()
        assert [c["title"] for c in catalogue["courses"]] == ["Standups"]
        lessons = client.get(f"{API}/teacher/courses/{course['id']}/lessons", params=params).json()
        assert lessons[0]["tasks_count"] == 2
        assert [task["correct_answer"] for task in lessons[0]["tasks"]] == ["fixed", "przeszkoda"]

        mine = client.get(f"{API}/teacher/courses", params=params).json()
        assert [c["id"] for c in mine] == [course["id"]]

    def test_invalid_task_type(self, client, make_user, make_course) -> None:
        teacher = make_user(role=UserRole.TEACHER)
        course = make_course(lessons=1)

        response = client.post(
            f"{API}/teacher/lessons/{course.lessons[0].id}/tasks", params={"user_id": teacher.id},
            json={"question_text": "q", "correct_answer": "a", "type": "ESSAY"},
        )

        assert response.status_code == 400

    def test_delete_task_and_lesson(self, client, make_user, make_course) -> None:
        teacher = make_user(role=UserRole.TEACHER)
        course = make_course(lessons=2, tasks_per_lesson=2)
        params = {"user_id": teacher.id}
        first_lesson = course.lessons[0]
        task_id = first_lesson.tasks[0].id
        second_lesson_id = course.lessons[1].id

        assert client.delete(f"{API}/teacher/tasks/{task_id}", params=params).status_code == 200
        assert client.get(f"{API}/lessons/{first_lesson.id}").json()["tasks_count"] == 1

        assert client.delete(f"{API}/teacher/lessons/{second_lesson_id}", params=params).status_code == 200
        assert client.get(f"{API}/courses/{course.id}").json()["lessons_count"] == 1

    def test_update_missing_course(self, client, make_user) -> None:
        teacher = make_user(role=UserRole.TEACHER)

        response = client.put(f"{API}/teacher/courses/404", params={"user_id": teacher.id}, json={"title": "X"})

        assert response.status_code == 404


class TestTeacherDashboard:
    def test_dashboard_views(self, client, make_user, make_course, lesson_ids, complete_lesson, add_daily_stats) -> None:
        teacher = make_user(role=UserRole.TEACHER)
        student = make_user("Student")
        course = make_course(lessons=2)
        complete_lesson(student.id, lesson_ids(course)[0], score_percent=80)
        add_daily_stats(student.id, {0: (42, False)})

        dashboard = client.get(f"{API}/teacher/dashboard", params={"user_id": teacher.id}).json()

        assert [s["name"] for s in dashboard["students"]] == ["Student"]
        assert dashboard["students"][0]["total_xp"] == 42
        assert dashboard["course_stats"][0]["total_students"] == 1
        assert dashboard["course_stats"][0]["avg_progress"] == 50
        assert dashboard["student_progress"][0]["avg_score"] == 80

        filtered = client.get(
            f"{API}/teacher/student-progress", params={"user_id": teacher.id, "student_id": student.id}
        ).json()
        assert len(filtered) == 1


class TestAdmin:
    """Tests for admin stats and user management."""

    def test_teacher_is_not_admin(self, client, make_user) -> None:
        teacher = make_user(role=UserRole.TEACHER)

        assert client.get(f"{API}/admin/stats", params={"user_id": teacher.id}).status_code == 403

    def test_stats(self, client, make_user, add_daily_stats) -> None:
        admin = make_user(role=UserRole.ADMIN)
        learner = make_user()
        add_daily_stats(learner.id, {0: (50, True)}, end=date_utils.today(), lessons=2)

        stats = client.get(f"{API}/admin/stats", params={"user_id": admin.id}).json()

        assert stats["total_users"] == 2
        assert stats["total_lessons_completed"] == 2
        assert stats["active_today"] == 1
        assert stats["average_streak"] == 0.5
        assert len(stats["daily_activity"]) == 7

    def test_change_role_and_search(self, client, make_user) -> None:
        admin = make_user(role=UserRole.ADMIN)
        learner = make_user("Marta", email="marta@langify.app")

        response = client.put(
            f"{API}/admin/users/{learner.id}/role", params={"user_id": admin.id}, json={"role": "teacher"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "teacher"

        found = client.get(f"{API}/admin/users", params={"user_id": admin.id, "search": "marta"}).json()
        assert found["total"] == 1
        assert found["users"][0]["role"] == "teacher"

    def test_admin_cannot_demote_or_delete_self(self, client, make_user) -> None:
        admin = make_user(role=UserRole.ADMIN)
        params = {"user_id": admin.id}

        assert client.put(f"{API}/admin/users/{admin.id}/role", params=params, json={"role": "user"}).status_code == 400
        assert client.delete(f"{API}/admin/users/{admin.id}", params=params).status_code == 400

    def test_delete_user(self, client, make_user, add_daily_stats) -> None:
        admin = make_user(role=UserRole.ADMIN)
        learner = make_user()
        add_daily_stats(learner.id, {0: (10, False)})

        response = client.delete(f"{API}/admin/users/{learner.id}", params={"user_id": admin.id})

        assert response.status_code == 200
        assert response.json()["daily_stats_deleted"] == 1
        assert client.get(f"{API}/auth/me", params={"user_id": learner.id}).status_code == 404
