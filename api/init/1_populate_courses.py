"""
Script to populate the demo catalogue from courses.json.
Creates vocabulary items, published courses, their lessons and tasks.
Items and courses that already exist (same word / same title) are skipped.
Does not modify existing data.
"""
import sys
import json
import logging
from pathlib import Path

# Add the api directory to Python path so we can import from langify
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from sqlmodel import Session, select
from langify.core.database import engine
from langify.models.models import Course, VocabularyItem
from langify.services import content_service

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DATA_FILE = script_dir / "courses.json"


def load_vocabulary(session: Session, entries: list) -> dict:
    """Create missing vocabulary items. Returns a map of seed key -> vocabulary item id."""
    ids_by_key = {}
    created = 0
    for entry in entries:
        entry = dict(entry)
        key = entry.pop("key")
        item = session.exec(
            select(VocabularyItem).where(VocabularyItem.english_word_or_phrase == entry["english_word_or_phrase"])
        ).first()
        if not item:
            item = VocabularyItem(**entry)
            session.add(item)
            session.flush()
            created += 1
        ids_by_key[key] = item.id

    logger.info(f"Vocabulary: {created} created, {len(entries) - created} already present")
    return ids_by_key


def load_courses(session: Session, courses: list, vocabulary_ids: dict) -> int:
    """Create missing courses with their lessons and tasks. Returns the number of courses created."""
    created = 0
    for course_data in courses:
        course_data = dict(course_data)
        lessons = course_data.pop("lessons", [])

        existing = session.exec(select(Course).where(Course.title == course_data["title"])).first()
        if existing:
            logger.info(f"Skipping existing course '{existing.title}'")
            continue

        course = content_service.create_course(session, None, is_published=True, **course_data)
        for lesson_data in lessons:
            lesson_data = dict(lesson_data)
            tasks = lesson_data.pop("tasks", [])
            lesson = content_service.create_lesson(session, course.id, **lesson_data)
            for task_data in tasks:
                task_data = dict(task_data)
                vocabulary_key = task_data.pop("vocabulary", None)
                if vocabulary_key and vocabulary_key not in vocabulary_ids:
                    raise ValueError(f"Unknown vocabulary key '{vocabulary_key}' in lesson '{lesson.title}'")
                content_service.create_task(
                    session, lesson.id, vocabulary_id=vocabulary_ids.get(vocabulary_key), **task_data
                )

        logger.info(f"Created course '{course.title}' with {len(lessons)} lessons")
        created += 1
    return created


def populate_courses(data_file: Path = DATA_FILE):
    """Load the catalogue file into the database in one transaction."""
    with open(data_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    with Session(engine) as session:
        try:
            vocabulary_ids = load_vocabulary(session, data.get("vocabulary", []))
            courses_created = load_courses(session, data.get("courses", []), vocabulary_ids)
            session.commit()
            logger.info(f"Successfully populated catalogue: {courses_created} new course(s)")
        except Exception as e:
            session.rollback()
            logger.error("Error populating courses: %s", e, exc_info=True)
            raise


if __name__ == "__main__":
    logger.info("Starting catalogue population...")
    try:
        populate_courses()
        logger.info("Successfully completed!")
    except Exception as e:
        logger.error("Error during catalogue population: %s", e, exc_info=True)
        sys.exit(1)
