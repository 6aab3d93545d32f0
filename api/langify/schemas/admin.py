"""
Admin dashboard schemas.
"""
from pydantic import BaseModel, Field
from typing import List
from datetime import date as date_type

from langify.schemas.auth import UserResponse


class DailyActivityResponse(BaseModel):
    date: date_type
    users: int
    lessons: int

    class Config:
        from_attributes = True


class AdminStatsResponse(BaseModel):
    total_users: int
    total_lessons_completed: int
    active_today: int
    average_streak: float
    daily_activity: List[DailyActivityResponse]

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    users: List[UserResponse]
    total: int


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="'user', 'teacher' or 'admin'")


class DeleteUserResponse(BaseModel):
    message: str
    vocabulary_deleted: int
    attempts_deleted: int
    daily_stats_deleted: int
    courses_detached: int
