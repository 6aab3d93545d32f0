"""
Admin endpoints: platform stats and user management.

Every route takes the acting user's id and requires the admin role.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import Optional

from langify.core.database import get_session
from langify.core.exceptions import ValidationError
from langify.models.models import UserRole
from langify.schemas.admin import AdminStatsResponse, ChangeRoleRequest, DeleteUserResponse, UserListResponse
from langify.schemas.auth import UserResponse
from langify.services import admin_stats_service, user_service
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Totals, users active today, average streak and the last 7 days of activity."""
    user_service.require_role(session, user_id, UserRole.ADMIN)
    return AdminStatsResponse.model_validate(admin_stats_service.get_admin_stats(session))


@router.get("/users", response_model=UserListResponse)
async def list_users(
    user_id: int,
    search: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """All users with their roles, optionally searched by name or email."""
    user_service.require_role(session, user_id, UserRole.ADMIN)
    users = user_service.list_users(session, search=search)
    return UserListResponse(users=[UserResponse.from_user(user) for user in users], total=len(users))


@router.put("/users/{target_user_id}/role", response_model=UserResponse)
async def change_role(
    target_user_id: int,
    user_id: int,
    request: ChangeRoleRequest,
    session: Session = Depends(get_session)
):
    """Change another user's role."""
    user_service.require_role(session, user_id, UserRole.ADMIN)
    if target_user_id == user_id and request.role != UserRole.ADMIN.value:
        raise ValidationError("Admins cannot remove their own admin role")

    user = user_service.change_user_role(session, target_user_id, request.role)
    commit_or_rollback(session, "change user role")
    session.refresh(user)
    return UserResponse.from_user(user)


@router.delete("/users/{target_user_id}", response_model=DeleteUserResponse)
async def delete_user(
    target_user_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Delete a user and everything recorded for them."""
    user_service.require_role(session, user_id, UserRole.ADMIN)
    if target_user_id == user_id:
        raise ValidationError("Admins cannot delete their own account here")

    counts = user_service.delete_user_data(session, target_user_id)
    commit_or_rollback(session, "delete user")
    return DeleteUserResponse(message=f"User {target_user_id} deleted", **counts)
