from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from langify.core.database import get_session
from langify.schemas.auth import LoginRequest, RegisterRequest, AuthResponse, UserResponse, UpdateProfileRequest
from langify.services import user_service
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session)
):
    """Login with email and password."""
    user = user_service.authenticate_user(session, login_data.email, login_data.password)
    return AuthResponse(user=UserResponse.from_user(user), message="Login successful")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Register a new user with a default daily goal."""
    user = user_service.register_user(
        session,
        email=register_data.email,
        name=register_data.name,
        password=register_data.password,
        preferred_interface_language=register_data.preferred_interface_language,
    )
    commit_or_rollback(session, "register user")
    session.refresh(user)

    return AuthResponse(user=UserResponse.from_user(user), message="Registration successful")


@router.get("/me", response_model=UserResponse)
async def get_profile(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get a user's profile, role and onboarding state."""
    return UserResponse.from_user(user_service.get_user(session, user_id))


@router.patch("/profile", response_model=AuthResponse)
async def update_profile(
    user_id: int,
    update_data: UpdateProfileRequest,
    session: Session = Depends(get_session)
):
    """Update name, interface language, industry context (onboarding) or avatar."""
    user = user_service.update_profile(
        session,
        user_id,
        name=update_data.name,
        preferred_interface_language=update_data.preferred_interface_language,
        industry_context=update_data.industry_context,
        avatar_url=update_data.avatar_url,
    )
    commit_or_rollback(session, "update profile")
    session.refresh(user)

    return AuthResponse(user=UserResponse.from_user(user), message="Profile updated successfully")
