"""
Custom exceptions for the application.
"""


class LangifyException(Exception):
    """Base exception for all Langify application exceptions."""
    pass


class ValidationError(LangifyException):
    """Raised when validation fails (e.g. negative XP delta, non-positive goal)."""
    pass


class NotFoundError(LangifyException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(LangifyException):
    """Raised when there's a conflict (e.g., duplicate entry, attempt already completed)."""
    pass


class AuthenticationError(LangifyException):
    """Raised when authentication fails."""
    pass


class AuthorizationError(LangifyException):
    """Raised when authorization fails."""
    pass


class PersistenceError(LangifyException):
    """Raised when the database rejects a read or write."""
    pass
