"""
Utility functions for endpoint operations.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from langify.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def commit_or_rollback(session: Session, action: str) -> None:
    """
    Commit the request's writes, or roll all of them back.

    Args:
        session: Request-scoped database session
        action: Short description used in logs and the error message

    Raises:
        PersistenceError: If the database rejects the commit
    """
    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Error while trying to {action}: {str(e)}", exc_info=True)
        raise PersistenceError(f"Failed to {action}") from e
