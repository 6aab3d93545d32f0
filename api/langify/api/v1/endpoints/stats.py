"""
User stats endpoints.
"""
from datetime import date
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from langify.core.database import get_session
from langify.schemas.goal import UserStatsResponse, DailyStatResponse, DailyStatsListResponse
from langify.services import daily_stats_service, user_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=UserStatsResponse)
async def get_user_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Total XP and lessons, current and longest streak, and today's progress against the goal."""
    summary = user_service.get_user_stats_summary(session, user_id)
    return UserStatsResponse.model_validate(summary)


@router.get("/daily", response_model=DailyStatsListResponse)
async def get_daily_stats(
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    session: Session = Depends(get_session)
):
    """Daily history, newest first, optionally limited to [start, end]."""
    user_service.get_user(session, user_id)
    stats = daily_stats_service.get_daily_stats(session, user_id, start=start, end=end)
    return DailyStatsListResponse(
        user_id=user_id,
        days=[DailyStatResponse.model_validate(stat) for stat in stats]
    )
