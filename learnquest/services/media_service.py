"""
learnquest/services/media_service.py
Locating course files on disk
"""
import logging
from pathlib import Path

from learnquest.errors import ErrorCode, NotFoundError
from learnquest.services.course_scanner import find_course_by_title, load_courses
from learnquest.store import JsonStore

logger = logging.getLogger(__name__)


def resolve_course_file(store: JsonStore, course_title: str, filename: str) -> Path:
    """
    Map /{course}/{filename} to a file inside that course's folder.

    Raises NotFoundError for an unknown course, a missing file, or a name that
    escapes the course folder ("../", absolute paths).
    """
    course = find_course_by_title(load_courses(store), course_title)
    if course is None:
        raise NotFoundError("Course", course_title, code=ErrorCode.COURSE_NOT_FOUND)

    course_dir = Path(course.course_path) / course.title
    file_path = course_dir / filename

    if Path(filename).name != filename or filename in (".", "..") or not file_path.is_file():
        logger.warning(f"File not found in {course.title}: {filename}")
        raise NotFoundError("File", filename, code=ErrorCode.FILE_NOT_FOUND)
    return file_path
