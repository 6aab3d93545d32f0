"""Unit tests for text, rounding and calendar-day helpers."""
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel

from langify.models.models import LessonAttempt
from langify.utils import date_utils
from langify.utils.text_utils import normalize_answer, round_half_up, round_half_up_to


class TestNormalizeAnswer:
    """Tests for normalize_answer."""

    def test_collapses_whitespace_and_case(self) -> None:
        """Test that spacing and case differences are ignored."""
        assert normalize_answer("  Pull   Request ") == "pull request"

    def test_keeps_punctuation(self) -> None:
        """Test that punctuation is part of the answer."""
        assert normalize_answer("e-mail") != normalize_answer("email")

    def test_none_is_empty(self) -> None:
        """Test that None normalizes to an empty string."""
        assert normalize_answer(None) == ""


class TestRounding:
    """Tests for half-up rounding."""

    def test_halves_round_up(self) -> None:
        """Test 2.5 -> 3 and 62.5 -> 63, unlike banker's rounding."""
        assert round_half_up(2.5) == 3
        assert round_half_up(62.5) == 63

    def test_below_half_rounds_down(self) -> None:
        """Test that 33.33 rounds to 33."""
        assert round_half_up(100 / 3) == 33

    def test_one_decimal(self) -> None:
        """Test rounding to one decimal place."""
        assert round_half_up_to(1.25, 1) == 1.3
        assert round_half_up_to(4 / 3, 1) == 1.3


class TestCalendarDays:
    """Tests for calendar-day helpers."""

    def test_naive_timestamp_is_utc(self) -> None:
        """Test that a naive timestamp is read as UTC."""
        assert date_utils.to_calendar_day(datetime(2025, 3, 14, 23, 30), "UTC") == date(2025, 3, 14)

    def test_timestamp_in_another_timezone(self) -> None:
        """Test that late UTC evening is already the next day in Warsaw."""
        assert date_utils.to_calendar_day(datetime(2025, 3, 14, 23, 30), "Europe/Warsaw") == date(2025, 3, 15)

    def test_window_start_is_inclusive(self) -> None:
        """Test that a 7-day window ending on the 14th starts on the 8th."""
        assert date_utils.window_start(date(2025, 3, 14), 7) == date(2025, 3, 8)

    def test_iter_days_includes_both_ends(self) -> None:
        """Test that iter_days yields start and end."""
        days = list(date_utils.iter_days(date(2025, 2, 27), date(2025, 3, 1)))

        assert days == [date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1)]

    def test_utc_now_is_aware(self) -> None:
        """Test that new timestamps are UTC and carry tzinfo."""
        assert date_utils.utc_now().utcoffset() == timedelta(0)


class TestStoredTimestamps:
    """Tests for timestamps written through the ORM."""

    def test_timestamp_columns_are_timezone_aware(self) -> None:
        """Test that every timestamp column is declared with a timezone."""
        columns = [
            column
            for table in SQLModel.metadata.sorted_tables
            for column in table.columns
            if isinstance(column.type, DateTime)
        ]

        assert columns
        assert all(column.type.timezone for column in columns)

    def test_write_and_read_back(self, session, make_user) -> None:
        """Test that an aware timestamp survives a commit and keeps its calendar day."""
        user = make_user()
        stamp = datetime(2025, 3, 14, 23, 30, tzinfo=timezone.utc)
        user.updated_at = stamp
        session.add(user)
        session.commit()
        session.refresh(user)

        assert user.updated_at.replace(tzinfo=None) == stamp.replace(tzinfo=None)
        assert date_utils.to_calendar_day(user.updated_at) == date(2025, 3, 14)

    def test_defaults_on_insert(self, session, make_user, make_course) -> None:
        """Test that default timestamps are filled in when rows are created."""
        user = make_user()
        course = make_course(lessons=1)
        attempt = LessonAttempt(user_id=user.id, lesson_id=course.lessons[0].id)
        session.add(attempt)
        session.commit()
        session.refresh(attempt)

        assert attempt.started_at is not None
        assert attempt.completed_at is None
