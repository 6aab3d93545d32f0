"""
Leaderboard endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from langify.core.database import get_session
from langify.models.models import LeaderboardPeriod
from langify.schemas.leaderboard import LeaderboardEntryResponse, LeaderboardResponse, MyRankResponse
from langify.services import leaderboard_service, user_service

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    period: LeaderboardPeriod = Query(LeaderboardPeriod.WEEK, description="'week' (last 7 days) or 'all'"),
    session: Session = Depends(get_session)
):
    """Top users by XP earned in the period."""
    entries = leaderboard_service.build_leaderboard(session, period)
    return LeaderboardResponse(
        period=period.value,
        entries=[LeaderboardEntryResponse.model_validate(entry) for entry in entries]
    )


@router.get("/me", response_model=MyRankResponse)
async def get_my_rank(
    user_id: int,
    period: LeaderboardPeriod = Query(LeaderboardPeriod.WEEK, description="'week' (last 7 days) or 'all'"),
    session: Session = Depends(get_session)
):
    """The user's rank over the full ranking, including places below the top list."""
    user_service.get_user(session, user_id)
    entry = leaderboard_service.get_user_rank(session, user_id, period)
    return MyRankResponse(
        period=period.value,
        user_id=user_id,
        entry=LeaderboardEntryResponse.model_validate(entry) if entry else None
    )
