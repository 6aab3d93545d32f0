"""Unit tests for the daily stat accumulator."""
from datetime import timedelta

import pytest

from langify.core.exceptions import ValidationError
from langify.models.models import UserDailyStat
from langify.services import daily_stats_service
from sqlmodel import select


class TestAccumulateDailyStat:
    """Tests for accumulate_daily_stat."""

    def test_creates_row_on_first_activity(self, session, make_user, today) -> None:
        """Test that the first XP of the day inserts a row."""
        user = make_user()

        stat = daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=10, day=today)
        session.commit()

        assert stat.xp_earned == 10
        assert stat.lessons_completed == 0
        assert stat.date == today

    def test_deltas_accumulate(self, session, make_user, today) -> None:
        """Test that recording 10 XP then 5 XP leaves 15."""
        user = make_user()

        daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=10, lessons_delta=1, day=today)
        stat = daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=5, lessons_delta=1, day=today)
        session.commit()

        assert stat.xp_earned == 15
        assert stat.lessons_completed == 2
        rows = session.exec(select(UserDailyStat).where(UserDailyStat.user_id == user.id)).all()
        assert len(rows) == 1

    def test_goal_met_follows_target(self, session, make_user, today) -> None:
        """Test that goal_met flips once XP reaches the daily target."""
        user = make_user(target_xp_per_day=50)

        stat = daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=40, day=today)
        assert stat.goal_met is False

        stat = daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=10, day=today)
        assert stat.goal_met is True

    def test_days_are_separate_rows(self, session, make_user, today) -> None:
        """Test that activity on different days does not mix."""
        user = make_user()

        daily_stats_service.record_xp(session, user.id, 30, day=today - timedelta(days=1))
        daily_stats_service.record_xp(session, user.id, 20, day=today)
        session.commit()

        stats = daily_stats_service.get_daily_stats(session, user.id)
        assert [(stat.date, stat.xp_earned) for stat in stats] == [
            (today, 20),
            (today - timedelta(days=1), 30),
        ]

    def test_record_lesson_completed(self, session, make_user, today) -> None:
        """Test that a completed lesson adds one lesson and no XP."""
        user = make_user()

        stat = daily_stats_service.record_lesson_completed(session, user.id, day=today)

        assert stat.lessons_completed == 1
        assert stat.xp_earned == 0

    def test_negative_xp_is_rejected(self, session, make_user, today) -> None:
        """Test that a negative XP delta raises ValidationError and writes nothing."""
        user = make_user()

        with pytest.raises(ValidationError):
            daily_stats_service.accumulate_daily_stat(session, user.id, xp_delta=-5, day=today)

        assert daily_stats_service.get_daily_stats(session, user.id) == []

    def test_negative_lessons_are_rejected(self, session, make_user, today) -> None:
        """Test that a negative lessons delta raises ValidationError."""
        user = make_user()

        with pytest.raises(ValidationError):
            daily_stats_service.accumulate_daily_stat(session, user.id, lessons_delta=-1, day=today)


class TestRefreshGoalMet:
    """Tests for refresh_goal_met."""

    def test_recomputes_against_new_target(self, session, make_user, today) -> None:
        """Test that lowering the target marks an existing day as met."""
        user = make_user(target_xp_per_day=50)
        daily_stats_service.record_xp(session, user.id, 30, day=today)
        user.daily_goal.target_xp_per_day = 20
        session.add(user.daily_goal)
        session.flush()

        stat = daily_stats_service.refresh_goal_met(session, user.id, day=today)

        assert stat.goal_met is True

    def test_no_row_for_the_day(self, session, make_user, today) -> None:
        """Test that a day without stats returns None."""
        user = make_user()

        assert daily_stats_service.refresh_goal_met(session, user.id, day=today) is None


class TestGetDailyStats:
    """Tests for get_daily_stats."""

    def test_date_range_is_inclusive(self, session, make_user, add_daily_stats, today) -> None:
        """Test that start and end days are both included."""
        user = make_user()
        add_daily_stats(user.id, {-5: (10, False), -3: (20, False), -1: (30, False), 0: (40, False)})

        stats = daily_stats_service.get_daily_stats(
            session, user.id, start=today - timedelta(days=3), end=today - timedelta(days=1)
        )

        assert [stat.xp_earned for stat in stats] == [30, 20]
