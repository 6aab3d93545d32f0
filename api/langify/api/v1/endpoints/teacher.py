"""
Teacher endpoints: course authoring and the student dashboard.

Every route takes the acting user's id and requires the teacher or admin role.
"""
# pyright: reportAttributeAccessIssue=false
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List, Optional

from langify.core.database import get_session
from langify.models.models import UserRole
from langify.schemas.course import CourseResponse
from langify.schemas.teacher import (
    AuthoredLessonResponse,
    CourseCreateRequest,
    CourseStatsResponse,
    CourseUpdateRequest,
    LessonCreateRequest,
    LessonUpdateRequest,
    StudentActivityResponse,
    StudentCourseProgressResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
    TeacherDashboardResponse,
)
from langify.services import content_service, teacher_stats_service, user_service
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/teacher", tags=["teacher"])

STAFF_ROLES = (UserRole.TEACHER, UserRole.ADMIN)


def to_authored_lesson(session: Session, lesson) -> AuthoredLessonResponse:
    tasks = content_service.get_lesson_tasks(session, lesson.id)
    return AuthoredLessonResponse(
        id=lesson.id,
        course_id=lesson.course_id,
        title=lesson.title,
        description=lesson.description,
        order_in_course=lesson.order_in_course,
        estimated_minutes=lesson.estimated_minutes,
        tasks_count=lesson.tasks_count,
        tasks=[TaskResponse.model_validate(task) for task in tasks]
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

@router.get("/dashboard", response_model=TeacherDashboardResponse)
async def get_dashboard(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Student activity, course stats and student-course progress in one response."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    dashboard = teacher_stats_service.get_teacher_dashboard(session)
    return TeacherDashboardResponse(
        students=[StudentActivityResponse.model_validate(s) for s in dashboard["students"]],
        course_stats=[CourseStatsResponse.model_validate(c) for c in dashboard["course_stats"]],
        student_progress=[StudentCourseProgressResponse.model_validate(p) for p in dashboard["student_progress"]],
    )


@router.get("/students", response_model=List[StudentActivityResponse])
async def get_student_activity(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Learners ordered by total XP."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    return [StudentActivityResponse.model_validate(s) for s in teacher_stats_service.get_student_activity(session)]


@router.get("/course-stats", response_model=List[CourseStatsResponse])
async def get_course_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Published courses ordered by number of learners with progress."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    return [CourseStatsResponse.model_validate(c) for c in teacher_stats_service.get_course_stats(session)]


@router.get("/student-progress", response_model=List[StudentCourseProgressResponse])
async def get_student_course_progress(
    user_id: int,
    student_id: Optional[int] = None,
    session: Session = Depends(get_session)
):
    """Per learner and course progress, optionally for one learner."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    rows = teacher_stats_service.get_student_course_progress(session, student_id=student_id)
    return [StudentCourseProgressResponse.model_validate(row) for row in rows]


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------

@router.get("/courses", response_model=List[CourseResponse])
async def list_my_courses(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Courses created by the acting user, drafts included."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    return [CourseResponse.model_validate(course) for course in content_service.list_courses_by_author(session, user_id)]


@router.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    user_id: int,
    request: CourseCreateRequest,
    session: Session = Depends(get_session)
):
    user_service.require_role(session, user_id, *STAFF_ROLES)
    course = content_service.create_course(session, user_id, **request.model_dump())
    commit_or_rollback(session, "create course")
    session.refresh(course)
    return CourseResponse.model_validate(course)


@router.put("/courses/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: int,
    user_id: int,
    request: CourseUpdateRequest,
    session: Session = Depends(get_session)
):
    """Update course fields, including publishing or unpublishing it."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    course = content_service.update_course(session, course_id, **request.model_dump(exclude_unset=True))
    commit_or_rollback(session, "update course")
    session.refresh(course)
    return CourseResponse.model_validate(course)


@router.delete("/courses/{course_id}", status_code=status.HTTP_200_OK)
async def delete_course(
    course_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Delete a course with its lessons and tasks."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    content_service.delete_course(session, course_id)
    commit_or_rollback(session, "delete course")
    return {"message": f"Course {course_id} deleted"}


@router.get("/courses/{course_id}/lessons", response_model=List[AuthoredLessonResponse])
async def get_course_lessons(
    course_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Lessons of any course (published or not) with full tasks, for editing."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    content_service.get_course(session, course_id)
    return [to_authored_lesson(session, lesson) for lesson in content_service.get_course_lessons(session, course_id)]


# ---------------------------------------------------------------------------
# Lessons
# ---------------------------------------------------------------------------

@router.post("/courses/{course_id}/lessons", response_model=AuthoredLessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    course_id: int,
    user_id: int,
    request: LessonCreateRequest,
    session: Session = Depends(get_session)
):
    """Append a lesson to a course."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    lesson = content_service.create_lesson(session, course_id, **request.model_dump())
    commit_or_rollback(session, "create lesson")
    session.refresh(lesson)
    return to_authored_lesson(session, lesson)


@router.put("/lessons/{lesson_id}", response_model=AuthoredLessonResponse)
async def update_lesson(
    lesson_id: int,
    user_id: int,
    request: LessonUpdateRequest,
    session: Session = Depends(get_session)
):
    user_service.require_role(session, user_id, *STAFF_ROLES)
    lesson = content_service.update_lesson(session, lesson_id, **request.model_dump(exclude_unset=True))
    commit_or_rollback(session, "update lesson")
    session.refresh(lesson)
    return to_authored_lesson(session, lesson)


@router.delete("/lessons/{lesson_id}", status_code=status.HTTP_200_OK)
async def delete_lesson(
    lesson_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    user_service.require_role(session, user_id, *STAFF_ROLES)
    content_service.delete_lesson(session, lesson_id)
    commit_or_rollback(session, "delete lesson")
    return {"message": f"Lesson {lesson_id} deleted"}


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

@router.post("/lessons/{lesson_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    lesson_id: int,
    user_id: int,
    request: TaskCreateRequest,
    session: Session = Depends(get_session)
):
    """Append a task to a lesson."""
    user_service.require_role(session, user_id, *STAFF_ROLES)
    task = content_service.create_task(session, lesson_id, **request.model_dump())
    commit_or_rollback(session, "create task")
    session.refresh(task)
    return TaskResponse.model_validate(task)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    user_id: int,
    request: TaskUpdateRequest,
    session: Session = Depends(get_session)
):
    user_service.require_role(session, user_id, *STAFF_ROLES)
    task = content_service.update_task(session, task_id, **request.model_dump(exclude_unset=True))
    commit_or_rollback(session, "update task")
    session.refresh(task)
    return TaskResponse.model_validate(task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_200_OK)
async def delete_task(
    task_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    user_service.require_role(session, user_id, *STAFF_ROLES)
    content_service.delete_task(session, task_id)
    commit_or_rollback(session, "delete task")
    return {"message": f"Task {task_id} deleted"}
