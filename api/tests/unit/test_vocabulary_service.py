"""Unit tests for the vocabulary review list."""
import pytest

from langify.core.exceptions import NotFoundError
from langify.services import vocabulary_service
from langify.services.vocabulary_service import update_strength


class TestUpdateStrength:
    """Tests for update_strength."""

    def test_correct_answer_moves_up(self) -> None:
        assert update_strength(2, True, max_strength=5) == 3

    def test_wrong_answer_moves_down(self) -> None:
        assert update_strength(2, False, max_strength=5) == 1

    def test_bounds(self) -> None:
        """Test that strength stays within 0..max."""
        assert update_strength(5, True, max_strength=5) == 5
        assert update_strength(0, False, max_strength=5) == 0

    def test_out_of_range_value_is_clamped_first(self) -> None:
        """Test that a stored value above the maximum is treated as the maximum."""
        assert update_strength(9, False, max_strength=5) == 4

    def test_default_maximum_from_settings(self) -> None:
        """Test that the configured maximum (5) is used by default."""
        assert update_strength(5, True) == 5


class TestReviewList:
    """Tests for adding, listing and removing vocabulary."""

    def test_add_is_idempotent(self, session, make_user, make_vocabulary) -> None:
        """Test that adding the same item twice keeps one entry."""
        user = make_user()
        item = make_vocabulary("deploy", "wdrożyć")

        entry, created = vocabulary_service.add_to_vocabulary(session, user.id, item.id)
        again, created_again = vocabulary_service.add_to_vocabulary(session, user.id, item.id)

        assert created is True
        assert created_again is False
        assert again.id == entry.id
        assert entry.strength == 0

    def test_add_unknown_item(self, session, make_user) -> None:
        """Test that a missing vocabulary item raises NotFoundError."""
        user = make_user()

        with pytest.raises(NotFoundError):
            vocabulary_service.add_to_vocabulary(session, user.id, 404)

    def test_search_matches_word_or_translation(self, session, make_user, make_vocabulary) -> None:
        """Test that search is case-insensitive over both columns."""
        user = make_user()
        deploy = make_vocabulary("deploy", "wdrożyć")
        invoice = make_vocabulary("invoice", "faktura", industry_tag="finance")
        vocabulary_service.add_to_vocabulary(session, user.id, deploy.id)
        vocabulary_service.add_to_vocabulary(session, user.id, invoice.id)
        session.commit()

        by_word = vocabulary_service.get_user_vocabulary(session, user.id, search="DEPL")
        by_translation = vocabulary_service.get_user_vocabulary(session, user.id, search="faktur")

        assert [item.english_word_or_phrase for _, item in by_word] == ["deploy"]
        assert [item.english_word_or_phrase for _, item in by_translation] == ["invoice"]

    def test_catalogue_filter_by_industry(self, session, make_vocabulary) -> None:
        """Test that the catalogue can be narrowed to one industry."""
        make_vocabulary("deploy", "wdrożyć", industry_tag="it")
        make_vocabulary("invoice", "faktura", industry_tag="finance")

        items = vocabulary_service.list_vocabulary_items(session, industry="finance")

        assert [item.english_word_or_phrase for item in items] == ["invoice"]

    def test_remove(self, session, make_user, make_vocabulary) -> None:
        """Test that removing reports whether the item was on the list."""
        user = make_user()
        item = make_vocabulary("deploy", "wdrożyć")
        vocabulary_service.add_to_vocabulary(session, user.id, item.id)

        assert vocabulary_service.remove_from_vocabulary(session, user.id, item.id) is True
        session.flush()
        assert vocabulary_service.remove_from_vocabulary(session, user.id, item.id) is False


class TestPractice:
    """Tests for practice results."""

    def test_practice_result_updates_strength(self, session, make_user, make_vocabulary) -> None:
        """Test that a correct answer raises strength and stamps last_seen_at."""
        user = make_user()
        item = make_vocabulary("deploy", "wdrożyć")
        vocabulary_service.add_to_vocabulary(session, user.id, item.id)

        entry = vocabulary_service.record_practice_result(session, user.id, item.id, correct=True)

        assert entry.strength == 1
        assert entry.last_seen_at is not None

    def test_practice_item_not_on_list(self, session, make_user, make_vocabulary) -> None:
        """Test that practicing an item not on the list raises NotFoundError."""
        user = make_user()
        item = make_vocabulary("deploy", "wdrożyć")

        with pytest.raises(NotFoundError):
            vocabulary_service.record_practice_result(session, user.id, item.id, correct=True)

    def test_practice_session_summary(self, session, make_user, make_vocabulary) -> None:
        """Test accuracy and mastered counts for a batch of answers."""
        user = make_user()
        deploy = make_vocabulary("deploy", "wdrożyć")
        invoice = make_vocabulary("invoice", "faktura")
        for item in (deploy, invoice):
            vocabulary_service.add_to_vocabulary(session, user.id, item.id)
        entry, _ = vocabulary_service.add_to_vocabulary(session, user.id, deploy.id)
        entry.strength = 4
        session.add(entry)
        session.flush()

        summary = vocabulary_service.record_practice_session(
            session, user.id, [(deploy.id, True), (invoice.id, True), (invoice.id, False)]
        )

        assert summary.practiced == 3
        assert summary.correct == 2
        assert summary.incorrect == 1
        assert summary.accuracy_percent == 67
        assert summary.mastered == 1
