"""
Daily goal endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from langify.core.database import get_session
from langify.schemas.goal import DailyGoalResponse, UpdateDailyGoalRequest
from langify.services import user_service
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=DailyGoalResponse)
async def get_daily_goal(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get the user's daily goal (created with defaults on first read)."""
    goal = user_service.get_or_create_daily_goal(session, user_id)
    commit_or_rollback(session, "create daily goal")
    return DailyGoalResponse.model_validate(goal)


@router.put("", response_model=DailyGoalResponse)
async def update_daily_goal(
    user_id: int,
    request: UpdateDailyGoalRequest,
    session: Session = Depends(get_session)
):
    """Update daily targets. A new XP target is applied to today's goal-met flag at once."""
    goal = user_service.update_daily_goal(
        session,
        user_id,
        target_xp_per_day=request.target_xp_per_day,
        target_lessons_per_day=request.target_lessons_per_day,
    )
    commit_or_rollback(session, "update daily goal")
    session.refresh(goal)
    return DailyGoalResponse.model_validate(goal)
