"""
Vocabulary service.

Each user keeps a review list of vocabulary items. Every entry carries a
recall strength between 0 and the configured maximum (5): a correct answer in
practice moves it up one step, a wrong answer moves it down one step.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlmodel import Session, select, func, or_

from langify.core.config import settings
from langify.core.exceptions import NotFoundError
from langify.models.models import User, UserVocabulary, VocabularyItem
from langify.utils import date_utils
from langify.utils.text_utils import round_half_up

logger = logging.getLogger(__name__)

MIN_STRENGTH = 0


@dataclass(frozen=True)
class PracticeSummary:
    practiced: int
    correct: int
    incorrect: int
    accuracy_percent: int
    mastered: int


def update_strength(current_strength: int, correct: bool, max_strength: Optional[int] = None) -> int:
    """
    Move strength one step up on a correct answer, one step down otherwise.

    Args:
        current_strength: Current strength (clamped to the valid range first)
        correct: Whether the practice answer was correct
        max_strength: Upper bound, defaults to settings.max_vocabulary_strength

    Returns:
        New strength in [0, max_strength]
    """
    max_strength = settings.max_vocabulary_strength if max_strength is None else max_strength
    current_strength = max(MIN_STRENGTH, min(max_strength, current_strength))

    if correct:
        return min(max_strength, current_strength + 1)
    return max(MIN_STRENGTH, current_strength - 1)


def _search_filter(search: str):
    pattern = f"%{search.strip().lower()}%"
    return or_(
        func.lower(VocabularyItem.english_word_or_phrase).like(pattern),
        func.lower(VocabularyItem.translation).like(pattern),
    )


def list_vocabulary_items(
    session: Session,
    industry: Optional[str] = None,
    search: Optional[str] = None,
) -> List[VocabularyItem]:
    """Vocabulary catalogue in alphabetical order, optionally filtered by industry tag and search text."""
    query = select(VocabularyItem)
    if industry:
        query = query.where(VocabularyItem.industry_tag == industry)
    if search and search.strip():
        query = query.where(_search_filter(search))
    return list(session.exec(query.order_by(VocabularyItem.english_word_or_phrase)).all())


def get_user_vocabulary(
    session: Session,
    user_id: int,
    search: Optional[str] = None,
) -> List[Tuple[UserVocabulary, VocabularyItem]]:
    """
    A user's review list with item details, most recently added first.

    Args:
        session: Database session
        user_id: Owner of the list
        search: Optional case-insensitive text matched against word and translation

    Returns:
        List of (UserVocabulary, VocabularyItem) pairs
    """
    query = (
        select(UserVocabulary, VocabularyItem)
        .join(VocabularyItem, VocabularyItem.id == UserVocabulary.vocabulary_id)  # type: ignore
        .where(UserVocabulary.user_id == user_id)
    )
    if search and search.strip():
        query = query.where(_search_filter(search))
    query = query.order_by(UserVocabulary.created_at.desc(), UserVocabulary.id.desc())  # type: ignore
    return list(session.exec(query).all())


def add_to_vocabulary(
    session: Session,
    user_id: int,
    vocabulary_id: int,
    added_manually: bool = True,
) -> Tuple[UserVocabulary, bool]:
    """
    Put an item on the user's review list.

    Adding an item that is already on the list leaves it unchanged.

    Returns:
        (entry, created) where created is False for an existing entry

    Raises:
        NotFoundError: If the user or vocabulary item does not exist
    """
    if not session.get(User, user_id):
        raise NotFoundError(f"User with id {user_id} not found")
    if not session.get(VocabularyItem, vocabulary_id):
        raise NotFoundError(f"Vocabulary item with id {vocabulary_id} not found")

    existing = session.exec(
        select(UserVocabulary).where(
            UserVocabulary.user_id == user_id,
            UserVocabulary.vocabulary_id == vocabulary_id,
        )
    ).first()
    if existing:
        return existing, False

    entry = UserVocabulary(
        user_id=user_id,
        vocabulary_id=vocabulary_id,
        added_manually=added_manually,
        strength=MIN_STRENGTH,
    )
    session.add(entry)
    session.flush()

    logger.info(f"Added vocabulary item {vocabulary_id} to user {user_id} (manual={added_manually})")
    return entry, True


def remove_from_vocabulary(session: Session, user_id: int, vocabulary_id: int) -> bool:
    """Remove an item from the user's list. Returns False when it was not on the list."""
    entry = session.exec(
        select(UserVocabulary).where(
            UserVocabulary.user_id == user_id,
            UserVocabulary.vocabulary_id == vocabulary_id,
        )
    ).first()
    if not entry:
        return False

    session.delete(entry)
    logger.info(f"Removed vocabulary item {vocabulary_id} from user {user_id}")
    return True


def record_practice_result(
    session: Session,
    user_id: int,
    vocabulary_id: int,
    correct: bool,
) -> UserVocabulary:
    """
    Apply one practice answer to an entry's strength and stamp last_seen_at.

    Raises:
        NotFoundError: If the item is not on the user's list
    """
    entry = session.exec(
        select(UserVocabulary).where(
            UserVocabulary.user_id == user_id,
            UserVocabulary.vocabulary_id == vocabulary_id,
        )
    ).first()
    if not entry:
        raise NotFoundError(f"Vocabulary item {vocabulary_id} is not on user {user_id}'s list")

    old_strength = entry.strength
    entry.strength = update_strength(entry.strength, correct)
    entry.last_seen_at = date_utils.utc_now()
    session.add(entry)

    logger.debug(
        f"Practice result for user {user_id}, item {vocabulary_id}: "
        f"{'correct' if correct else 'incorrect'}, strength {old_strength} -> {entry.strength}"
    )
    return entry


def record_practice_session(
    session: Session,
    user_id: int,
    results: Iterable[Tuple[int, bool]],
) -> PracticeSummary:
    """
    Apply a batch of (vocabulary_id, correct) practice answers and summarize them.

    An item answered several times in one batch moves once per answer.
    """
    results = list(results)
    entries = [record_practice_result(session, user_id, vocabulary_id, correct) for vocabulary_id, correct in results]

    correct_count = sum(1 for _, correct in results if correct)
    mastered = len({
        entry.vocabulary_id for entry in entries if entry.strength >= settings.max_vocabulary_strength
    })
    summary = PracticeSummary(
        practiced=len(results),
        correct=correct_count,
        incorrect=len(results) - correct_count,
        accuracy_percent=round_half_up(correct_count / len(results) * 100) if results else 0,
        mastered=mastered,
    )

    logger.info(
        f"Practice session for user {user_id}: {summary.correct}/{summary.practiced} correct"
    )
    return summary
