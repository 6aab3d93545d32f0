"""
Daily goal and user stats schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as date_type


class DailyGoalResponse(BaseModel):
    """A user's daily targets."""
    user_id: int
    target_xp_per_day: int
    target_lessons_per_day: int

    class Config:
        from_attributes = True


class UpdateDailyGoalRequest(BaseModel):
    """Change daily targets; omitted fields keep their value."""
    target_xp_per_day: Optional[int] = Field(None, gt=0, description="XP to earn per day")
    target_lessons_per_day: Optional[int] = Field(None, gt=0, description="Lessons to complete per day")

    class Config:
        json_schema_extra = {
            "example": {
                "target_xp_per_day": 100,
                "target_lessons_per_day": 2
            }
        }


class UserStatsResponse(BaseModel):
    """Totals, streaks and today's progress."""
    user_id: int
    total_xp: int
    total_lessons_completed: int
    current_streak: int
    longest_streak: int
    today_xp: int
    today_lessons: int
    goal_met_today: bool
    target_xp_per_day: int
    target_lessons_per_day: int

    class Config:
        from_attributes = True


class DailyStatResponse(BaseModel):
    """One calendar day of a user's activity."""
    date: date_type
    xp_earned: int
    lessons_completed: int
    goal_met: bool

    class Config:
        from_attributes = True


class DailyStatsListResponse(BaseModel):
    user_id: int
    days: List[DailyStatResponse]
