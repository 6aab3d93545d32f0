"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel.metadata, which
init_db() and Alembic rely on:
    from langify.models.models import Course, Lesson
"""
from langify.models.enums import (
    UserRole,
    IndustryContext,
    InterfaceLanguage,
    CEFRLevel,
    TaskType,
    AttemptStatus,
    LeaderboardPeriod,
)
from langify.models.user import User
from langify.models.daily_goal import DailyGoal
from langify.models.user_daily_stat import UserDailyStat
from langify.models.vocabulary_item import VocabularyItem
from langify.models.user_vocabulary import UserVocabulary
from langify.models.course import Course
from langify.models.lesson import Lesson
from langify.models.task import Task
from langify.models.lesson_attempt import LessonAttempt

__all__ = [
    'UserRole',
    'IndustryContext',
    'InterfaceLanguage',
    'CEFRLevel',
    'TaskType',
    'AttemptStatus',
    'LeaderboardPeriod',
    'User',
    'DailyGoal',
    'UserDailyStat',
    'VocabularyItem',
    'UserVocabulary',
    'Course',
    'Lesson',
    'Task',
    'LessonAttempt',
]
