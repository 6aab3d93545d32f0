"""
Vocabulary schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class VocabularyItemResponse(BaseModel):
    id: int
    english_word_or_phrase: str
    translation: str
    example_sentence: Optional[str] = None
    industry_tag: Optional[str] = None
    audio_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserVocabularyResponse(BaseModel):
    """An entry on a user's review list with the item it refers to."""
    vocabulary_id: int
    added_manually: bool
    strength: int = Field(..., ge=0)
    last_seen_at: Optional[datetime] = None
    created_at: datetime
    item: VocabularyItemResponse


class UserVocabularyListResponse(BaseModel):
    user_id: int
    words: List[UserVocabularyResponse]
    total: int


class AddVocabularyRequest(BaseModel):
    user_id: int = Field(..., description="User ID")
    vocabulary_id: int = Field(..., description="Vocabulary item ID")


class AddVocabularyResponse(BaseModel):
    word: UserVocabularyResponse
    created: bool = Field(..., description="False when the word was already on the list")


class PracticeResultRequest(BaseModel):
    user_id: int = Field(..., description="User ID")
    vocabulary_id: int = Field(..., description="Vocabulary item ID")
    correct: bool = Field(..., description="Whether the learner recalled the word")


class PracticeAnswer(BaseModel):
    vocabulary_id: int
    correct: bool


class PracticeSessionRequest(BaseModel):
    user_id: int = Field(..., description="User ID")
    results: List[PracticeAnswer] = Field(..., min_length=1, description="Answers in the order they were given")


class PracticeSessionResponse(BaseModel):
    practiced: int
    correct: int
    incorrect: int
    accuracy_percent: int
    mastered: int

    class Config:
        from_attributes = True
