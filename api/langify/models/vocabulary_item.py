"""
VocabularyItem model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from typing import Optional
from datetime import datetime

from langify.utils.date_utils import utc_now


class VocabularyItem(SQLModel, table=True):
    """VocabularyItem table - a word or phrase with its translation."""
    __tablename__ = "vocabulary_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    english_word_or_phrase: str = Field(index=True)
    translation: str
    example_sentence: Optional[str] = None
    industry_tag: Optional[str] = None  # IndustryContext value
    audio_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
