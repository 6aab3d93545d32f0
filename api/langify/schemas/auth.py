from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Registration request schema."""
    email: EmailStr = Field(..., description="Email address")
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    password: str = Field(..., min_length=6, description="Password (minimum 6 characters)")
    preferred_interface_language: Optional[str] = Field(None, max_length=2, description="Interface language ('pl' or 'en')")


class UserResponse(BaseModel):
    """User response schema (without password)."""
    id: int
    email: str
    name: str
    role: str
    preferred_interface_language: str
    industry_context: Optional[str] = None
    avatar_url: Optional[str] = None
    has_completed_onboarding: bool
    created_at: str

    class Config:
        from_attributes = True

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=str(getattr(user.role, "value", user.role)),
            preferred_interface_language=user.preferred_interface_language,
            industry_context=user.industry_context,
            avatar_url=user.avatar_url,
            has_completed_onboarding=user.has_completed_onboarding,
            created_at=user.created_at.isoformat(),
        )


class UpdateProfileRequest(BaseModel):
    """Profile update; only the fields provided are changed. Setting industry_context completes onboarding."""
    name: Optional[str] = Field(None, max_length=200, description="Display name")
    preferred_interface_language: Optional[str] = Field(None, max_length=2, description="Interface language ('pl' or 'en')")
    industry_context: Optional[str] = Field(None, description="Industry: 'it', 'finance', 'office' or 'general'")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL (empty string clears it)")


class AuthResponse(BaseModel):
    """Authentication response schema."""
    user: UserResponse
    message: str
