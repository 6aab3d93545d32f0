"""
Course catalogue endpoints.
"""
# pyright: reportAttributeAccessIssue=false
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from langify.core.database import get_session
from langify.schemas.course import (
    CourseDetailResponse,
    CourseListResponse,
    CourseProgressListResponse,
    CourseProgressResponse,
    CourseResponse,
    CourseWithProgressResponse,
    LessonSummary,
)
from langify.services import content_service, progress_service, user_service
from langify.services.progress_service import CourseProgress

router = APIRouter(prefix="/courses", tags=["courses"])


def to_progress_response(course_id: int, progress: CourseProgress) -> CourseProgressResponse:
    return CourseProgressResponse(
        course_id=course_id,
        completed_lessons=progress.completed_lessons,
        total_lessons=progress.total_lessons,
        progress_percent=progress.progress_percent,
        is_started=progress.is_started,
        is_completed=progress.is_completed,
    )


@router.get("", response_model=CourseListResponse)
async def list_courses(
    industry: Optional[str] = None,
    level: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Published courses, newest first, optionally filtered by industry tag and level."""
    courses = content_service.list_published_courses(session, industry=industry, level=level)
    return CourseListResponse(
        courses=[CourseResponse.model_validate(course) for course in courses],
        total=len(courses)
    )


@router.get("/progress", response_model=CourseProgressListResponse)
async def get_progress_for_all_courses(
    user_id: int,
    session: Session = Depends(get_session)
):
    """The user's progress through every published course."""
    user_service.get_user(session, user_id)
    results = progress_service.get_user_progress_for_published_courses(session, user_id)
    return CourseProgressListResponse(
        user_id=user_id,
        courses=[
            CourseWithProgressResponse(
                course=CourseResponse.model_validate(course),
                progress=to_progress_response(course.id, progress),
            )
            for course, progress in results
        ]
    )


@router.get("/{course_id}", response_model=CourseDetailResponse)
async def get_course(
    course_id: int,
    session: Session = Depends(get_session)
):
    """A published course with its lessons in course order."""
    course = content_service.get_course(session, course_id, published_only=True)
    lessons = content_service.get_course_lessons(session, course_id)

    return CourseDetailResponse(
        **CourseResponse.model_validate(course).model_dump(),
        lessons=[LessonSummary.model_validate(lesson) for lesson in lessons]
    )


@router.get("/{course_id}/progress", response_model=CourseProgressResponse)
async def get_course_progress(
    course_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """The user's progress through one course."""
    user_service.get_user(session, user_id)
    progress = progress_service.get_user_course_progress(session, user_id, course_id)
    return to_progress_response(course_id, progress)
