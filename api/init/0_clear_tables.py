"""
Script to clear learning content and progress tables.
Users and their daily goals are kept.
"""
import sys
import logging
from pathlib import Path

# Add the api directory to Python path so we can import from langify
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete
from sqlmodel import Session
from langify.core.database import engine
from langify.models.models import (
    Course,
    Lesson,
    LessonAttempt,
    Task,
    UserDailyStat,
    UserVocabulary,
    VocabularyItem,
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Children before parents (foreign keys)
TABLES_IN_DELETE_ORDER = [
    LessonAttempt,
    UserVocabulary,
    UserDailyStat,
    Task,
    Lesson,
    Course,
    VocabularyItem,
]


def clear_tables():
    """Clear all content and progress rows."""
    with Session(engine) as session:
        try:
            for model in TABLES_IN_DELETE_ORDER:
                logger.info(f"Deleting all rows from {model.__tablename__}...")
                result = session.exec(delete(model))
                logger.info(f"Deleted {result.rowcount} rows from {model.__tablename__}")

            session.commit()
            logger.info("Successfully cleared content and progress tables")

        except Exception as e:
            session.rollback()
            logger.error("Error clearing tables: %s", e, exc_info=True)
            raise


if __name__ == "__main__":
    logger.info("Starting table clearing...")
    try:
        clear_tables()
        logger.info("Successfully completed!")
    except Exception as e:
        logger.error("Error during table clearing: %s", e, exc_info=True)
        sys.exit(1)
