"""
Model enums.
"""
from enum import Enum


class UserRole(str, Enum):
    """Application role of a user."""
    USER = "user"
    TEACHER = "teacher"
    ADMIN = "admin"


class IndustryContext(str, Enum):
    """Industry a learner works in; also used to tag courses and vocabulary."""
    IT = "it"
    FINANCE = "finance"
    OFFICE = "office"
    GENERAL = "general"


class InterfaceLanguage(str, Enum):
    """Language of the application interface."""
    PL = "pl"
    EN = "en"


class CEFRLevel(str, Enum):
    """CEFR language proficiency levels."""
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class TaskType(str, Enum):
    """Kind of task shown by the lesson player."""
    FLASHCARD = "FLASHCARD"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    GAP_FILL = "GAP_FILL"


class AttemptStatus(str, Enum):
    """Lesson attempt lifecycle: STARTED -> COMPLETED is the only transition."""
    STARTED = "started"
    COMPLETED = "completed"


class LeaderboardPeriod(str, Enum):
    """Aggregation window for the leaderboard."""
    WEEK = "week"
    ALL = "all"
