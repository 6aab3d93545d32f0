"""
UserVocabulary model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime, UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import datetime

from langify.utils.date_utils import utc_now

if TYPE_CHECKING:
    from langify.models.vocabulary_item import VocabularyItem


class UserVocabulary(SQLModel, table=True):
    """UserVocabulary table - a word on a user's review list with its recall strength (0-5)."""
    __tablename__ = "user_vocabulary"
    __table_args__ = (
        UniqueConstraint("user_id", "vocabulary_id", name="uq_user_vocabulary_user_vocabulary"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    vocabulary_id: int = Field(foreign_key="vocabulary_item.id")
    added_manually: bool = Field(default=False)
    strength: int = Field(default=0)
    last_seen_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    vocabulary_item: "VocabularyItem" = Relationship()
