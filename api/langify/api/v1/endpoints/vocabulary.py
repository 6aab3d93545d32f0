"""
Vocabulary endpoints: the word catalogue and each user's review list.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List, Optional

from langify.core.database import get_session
from langify.models.models import UserVocabulary, VocabularyItem
from langify.schemas.vocabulary import (
    AddVocabularyRequest,
    AddVocabularyResponse,
    PracticeResultRequest,
    PracticeSessionRequest,
    PracticeSessionResponse,
    UserVocabularyListResponse,
    UserVocabularyResponse,
    VocabularyItemResponse,
)
from langify.services import user_service, vocabulary_service
from langify.api.v1.endpoints.utils import commit_or_rollback

router = APIRouter(prefix="/vocabulary", tags=["vocabulary"])


def to_user_vocabulary_response(entry: UserVocabulary, item: VocabularyItem) -> UserVocabularyResponse:
    return UserVocabularyResponse(
        vocabulary_id=entry.vocabulary_id,
        added_manually=entry.added_manually,
        strength=entry.strength,
        last_seen_at=entry.last_seen_at,
        created_at=entry.created_at,
        item=VocabularyItemResponse.model_validate(item)
    )


@router.get("/items", response_model=List[VocabularyItemResponse])
async def list_vocabulary_items(
    industry: Optional[str] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Browse the vocabulary catalogue."""
    items = vocabulary_service.list_vocabulary_items(session, industry=industry, search=search)
    return [VocabularyItemResponse.model_validate(item) for item in items]


@router.get("", response_model=UserVocabularyListResponse)
async def get_user_words(
    user_id: int,
    search: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """The user's words, most recently added first, optionally searched by word or translation."""
    user_service.get_user(session, user_id)
    entries = vocabulary_service.get_user_vocabulary(session, user_id, search=search)
    return UserVocabularyListResponse(
        user_id=user_id,
        words=[to_user_vocabulary_response(entry, item) for entry, item in entries],
        total=len(entries)
    )


@router.post("", response_model=AddVocabularyResponse, status_code=status.HTTP_200_OK)
async def add_word(
    request: AddVocabularyRequest,
    session: Session = Depends(get_session)
):
    """Add a word to the user's list. Adding a word that is already there is not an error."""
    entry, created = vocabulary_service.add_to_vocabulary(session, request.user_id, request.vocabulary_id)
    commit_or_rollback(session, "add vocabulary word")
    session.refresh(entry)
    return AddVocabularyResponse(
        word=to_user_vocabulary_response(entry, session.get(VocabularyItem, entry.vocabulary_id)),
        created=created
    )


@router.delete("/{vocabulary_id}", status_code=status.HTTP_200_OK)
async def remove_word(
    vocabulary_id: int,
    user_id: int,
    session: Session = Depends(get_session)
):
    """Remove a word from the user's list."""
    removed = vocabulary_service.remove_from_vocabulary(session, user_id, vocabulary_id)
    commit_or_rollback(session, "remove vocabulary word")
    return {
        "message": "Word removed" if removed else "Word was not on the list",
        "removed": removed
    }


@router.post("/practice", response_model=UserVocabularyResponse)
async def record_practice_result(
    request: PracticeResultRequest,
    session: Session = Depends(get_session)
):
    """Record one practice answer: strength +1 when correct, -1 when not, within 0-5."""
    entry = vocabulary_service.record_practice_result(
        session, request.user_id, request.vocabulary_id, request.correct
    )
    commit_or_rollback(session, "record practice result")
    session.refresh(entry)
    return to_user_vocabulary_response(entry, session.get(VocabularyItem, entry.vocabulary_id))


@router.post("/practice/session", response_model=PracticeSessionResponse)
async def record_practice_session(
    request: PracticeSessionRequest,
    session: Session = Depends(get_session)
):
    """Record a whole practice round and return its summary."""
    summary = vocabulary_service.record_practice_session(
        session,
        request.user_id,
        [(answer.vocabulary_id, answer.correct) for answer in request.results]
    )
    commit_or_rollback(session, "record practice session")
    return PracticeSessionResponse.model_validate(summary)
