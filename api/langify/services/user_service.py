"""
User service for business logic related to user operations.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select, func, or_

from langify.core.config import settings
from langify.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from langify.models.models import (
    Course,
    DailyGoal,
    IndustryContext,
    InterfaceLanguage,
    LessonAttempt,
    User,
    UserDailyStat,
    UserRole,
    UserVocabulary,
)
from langify.services import daily_stats_service, streak_service
from langify.utils import date_utils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserStatsSummary:
    user_id: int
    total_xp: int
    total_lessons_completed: int
    current_streak: int
    longest_streak: int
    today_xp: int
    today_lessons: int
    goal_met_today: bool
    target_xp_per_day: int
    target_lessons_per_day: int


def get_user(session: Session, user_id: int) -> User:
    """Return the user or raise NotFoundError."""
    user = session.get(User, user_id)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def require_role(session: Session, user_id: int, *roles: UserRole) -> User:
    """
    Return the acting user when their role is one of ``roles``.

    Raises:
        NotFoundError: If the user does not exist
        AuthorizationError: If the user's role is not allowed
    """
    user = get_user(session, user_id)
    allowed = {UserRole(role).value for role in roles}
    if UserRole(user.role).value not in allowed:
        raise AuthorizationError(
            f"User {user_id} with role '{UserRole(user.role).value}' may not perform this action "
            f"(requires one of: {', '.join(sorted(allowed))})"
        )
    return user


def register_user(
    session: Session,
    email: str,
    name: str,
    password: str,
    preferred_interface_language: Optional[str] = None,
) -> User:
    """
    Create a user with a hashed password and a default daily goal.

    Raises:
        ConflictError: If the email is already registered
        ValidationError: If the interface language is unknown
    """
    email = email.strip().lower()
    existing = session.exec(select(User).where(func.lower(User.email) == email)).first()
    if existing:
        raise ConflictError("Email already exists")

    language = preferred_interface_language or InterfaceLanguage.PL.value
    if language not in {lang.value for lang in InterfaceLanguage}:
        raise ValidationError(f"Invalid interface language: {language}")

    user = User(
        email=email,
        name=name.strip(),
        password=User.hash_password(password),
        role=UserRole.USER.value,
        preferred_interface_language=language,
    )
    session.add(user)
    session.flush()

    session.add(DailyGoal(
        user_id=user.id,
        target_xp_per_day=settings.default_target_xp_per_day,
        target_lessons_per_day=settings.default_target_lessons_per_day,
    ))
    session.flush()

    logger.info(f"Registered user {user.id} ({email})")
    return user


def authenticate_user(session: Session, email: str, password: str) -> User:
    """Return the user for valid credentials, otherwise raise AuthenticationError."""
    user = session.exec(select(User).where(func.lower(User.email) == email.strip().lower())).first()
    if not user or not user.verify_password(password):
        raise AuthenticationError("Invalid email or password")
    return user


def update_profile(
    session: Session,
    user_id: int,
    name: Optional[str] = None,
    preferred_interface_language: Optional[str] = None,
    industry_context: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    """
    Update profile fields that are not None.

    Setting industry_context completes onboarding.
    """
    user = get_user(session, user_id)

    if name is not None:
        if not name.strip():
            raise ValidationError("Name must not be empty")
        user.name = name.strip()

    if preferred_interface_language is not None:
        if preferred_interface_language not in {lang.value for lang in InterfaceLanguage}:
            raise ValidationError(f"Invalid interface language: {preferred_interface_language}")
        user.preferred_interface_language = preferred_interface_language

    if industry_context is not None:
        if industry_context not in {industry.value for industry in IndustryContext}:
            raise ValidationError(f"Invalid industry context: {industry_context}")
        was_onboarded = user.has_completed_onboarding
        user.industry_context = industry_context
        if not was_onboarded:
            logger.info(f"User {user_id} completed onboarding with industry '{industry_context}'")

    if avatar_url is not None:
        user.avatar_url = avatar_url or None

    user.updated_at = date_utils.utc_now()
    session.add(user)
    return user


def get_or_create_daily_goal(session: Session, user_id: int) -> DailyGoal:
    """Return the user's daily goal, creating it with the configured defaults on first read."""
    get_user(session, user_id)
    goal = session.exec(select(DailyGoal).where(DailyGoal.user_id == user_id)).first()
    if goal:
        return goal

    goal = DailyGoal(
        user_id=user_id,
        target_xp_per_day=settings.default_target_xp_per_day,
        target_lessons_per_day=settings.default_target_lessons_per_day,
    )
    session.add(goal)
    session.flush()
    logger.info(f"Created default daily goal for user {user_id}")
    return goal


def update_daily_goal(
    session: Session,
    user_id: int,
    target_xp_per_day: Optional[int] = None,
    target_lessons_per_day: Optional[int] = None,
) -> DailyGoal:
    """
    Change the user's daily targets.

    When the XP target changes, today's goal_met is recomputed against it.
    Earlier days keep the flag they were stored with.

    Raises:
        ValidationError: If a target is not positive
    """
    if target_xp_per_day is not None and target_xp_per_day <= 0:
        raise ValidationError("target_xp_per_day must be greater than 0")
    if target_lessons_per_day is not None and target_lessons_per_day <= 0:
        raise ValidationError("target_lessons_per_day must be greater than 0")

    goal = get_or_create_daily_goal(session, user_id)
    xp_changed = target_xp_per_day is not None and target_xp_per_day != goal.target_xp_per_day

    if target_xp_per_day is not None:
        goal.target_xp_per_day = target_xp_per_day
    if target_lessons_per_day is not None:
        goal.target_lessons_per_day = target_lessons_per_day
    goal.updated_at = date_utils.utc_now()
    session.add(goal)
    session.flush()

    if xp_changed:
        daily_stats_service.refresh_goal_met(session, user_id)

    logger.info(
        f"Updated daily goal for user {user_id}: {goal.target_xp_per_day} XP, "
        f"{goal.target_lessons_per_day} lesson(s)"
    )
    return goal


def get_user_stats_summary(session: Session, user_id: int, today: Optional[date] = None) -> UserStatsSummary:
    """
    Totals, streaks and today's progress for one user.

    goal_met_today compares today's XP with the current target, so it reflects
    a target change made later in the day. Read only: a user without a stored
    goal is measured against the configured defaults.
    """
    today = today or date_utils.today()
    get_user(session, user_id)
    goal = session.exec(select(DailyGoal).where(DailyGoal.user_id == user_id)).first()
    target_xp = goal.target_xp_per_day if goal else settings.default_target_xp_per_day
    target_lessons = goal.target_lessons_per_day if goal else settings.default_target_lessons_per_day
    stats = daily_stats_service.get_daily_stats(session, user_id)

    today_stat = next((stat for stat in stats if stat.date == today), None)
    today_xp = today_stat.xp_earned if today_stat else 0
    streaks = streak_service.calculate_streaks(stats, today)

    return UserStatsSummary(
        user_id=user_id,
        total_xp=sum(stat.xp_earned for stat in stats),
        total_lessons_completed=sum(stat.lessons_completed for stat in stats),
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        today_xp=today_xp,
        today_lessons=today_stat.lessons_completed if today_stat else 0,
        goal_met_today=today_xp >= target_xp,
        target_xp_per_day=target_xp,
        target_lessons_per_day=target_lessons,
    )


def list_users(session: Session, search: Optional[str] = None) -> List[User]:
    """All users, newest first, optionally filtered by a case-insensitive name/email substring."""
    query = select(User)
    if search and search.strip():
        pattern = f"%{search.strip().lower()}%"
        query = query.where(or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern)))
    return list(session.exec(query.order_by(User.created_at.desc(), User.id.desc())).all())  # type: ignore


def change_user_role(session: Session, user_id: int, role: str) -> User:
    """Set a user's role."""
    try:
        new_role = UserRole(role)
    except ValueError:
        raise ValidationError(f"Invalid role: {role}")

    user = get_user(session, user_id)
    old_role = UserRole(user.role)
    user.role = new_role.value
    user.updated_at = date_utils.utc_now()
    session.add(user)

    logger.info(f"Changed role of user {user_id} from '{old_role.value}' to '{new_role.value}'")
    return user


def delete_user_data(
    session: Session,
    user_id: int
) -> Dict[str, Any]:
    """
    Delete a user together with everything recorded for them.

    Deletes in the order the foreign keys require:
    1. UserVocabulary rows
    2. LessonAttempts
    3. UserDailyStats
    4. The DailyGoal
    5. The user itself

    Courses the user authored stay in the catalogue with created_by cleared.

    Args:
        session: Database session
        user_id: The user ID whose data should be deleted

    Returns:
        Dict with counts of deleted items

    Raises:
        NotFoundError: If user not found
    """
    user = get_user(session, user_id)

    vocabulary = session.exec(select(UserVocabulary).where(UserVocabulary.user_id == user_id)).all()
    for entry in vocabulary:
        session.delete(entry)

    attempts = session.exec(select(LessonAttempt).where(LessonAttempt.user_id == user_id)).all()
    for attempt in attempts:
        session.delete(attempt)

    stats = session.exec(select(UserDailyStat).where(UserDailyStat.user_id == user_id)).all()
    for stat in stats:
        session.delete(stat)

    goal = session.exec(select(DailyGoal).where(DailyGoal.user_id == user_id)).first()
    if goal:
        session.delete(goal)

    authored = session.exec(select(Course).where(Course.created_by == user_id)).all()
    for course in authored:
        course.created_by = None
        session.add(course)

    session.flush()
    session.delete(user)
    session.flush()

    logger.info(
        f"Deleted user {user_id}: "
        f"{len(vocabulary)} vocabulary entries, "
        f"{len(attempts)} lesson attempts, "
        f"{len(stats)} daily stats"
    )

    return {
        'vocabulary_deleted': len(vocabulary),
        'attempts_deleted': len(attempts),
        'daily_stats_deleted': len(stats),
        'courses_detached': len(authored),
    }
