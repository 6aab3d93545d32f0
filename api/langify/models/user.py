"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from sqlalchemy import Column, DateTime, String as SAString
import hashlib

from langify.models.enums import UserRole, InterfaceLanguage
from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.daily_goal import DailyGoal


class User(SQLModel, table=True):
    """User table - profile, role and preferences."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    password: str  # Hashed password
    role: UserRole = Field(
        default=UserRole.USER,
        sa_column=Column(SAString, nullable=False, default=UserRole.USER.value)
    )
    preferred_interface_language: str = Field(default=InterfaceLanguage.PL.value)
    industry_context: Optional[str] = Field(default=None)  # None until onboarding is completed
    avatar_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    daily_goal: Optional["DailyGoal"] = Relationship(back_populates="user")

    @property
    def has_completed_onboarding(self) -> bool:
        return self.industry_context is not None

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return self.password == self.hash_password(password)
