"""
learnquest/services/course_scanner.py
Filesystem scanner -> course index

Every immediate sub-directory of a course root is one course. Files directly
inside it are its content: videos (VIDEO_EXTENSIONS) and PDFs. The index is
written to data.json so the API can serve it without touching the disk tree.

ID SCHEME:
- course ids run 1..N across all roots, in scan order
- video ids are course_id * 1000 + position (1-based)
- pdf ids continue after the last video of the same course
"""
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional

from learnquest.schemas.course import ContentItem, Course, CourseIndex, CourseView, VideoView
from learnquest.store import COURSES, JsonStore

logger = logging.getLogger(__name__)

ID_BLOCK = 1000

_DIGITS = re.compile(r"(\d+)")
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def natural_key(name: str):
    """Sort key that orders '2 - Intro' before '10 - Wrap up'."""
    return [int(part) if part.isdigit() else part.lower() for part in _DIGITS.split(name)]


def _list_files(folder: Path) -> List[str]:
    return sorted((entry.name for entry in os.scandir(folder) if entry.is_file()), key=natural_key)


def _content_items(files: Iterable[str], course_id: int, first_index: int,
                   course_path: str, item_type: str) -> List[ContentItem]:
    items = []
    for offset, file_name in enumerate(files):
        items.append(ContentItem(
            id=course_id * ID_BLOCK + first_index + offset + 1,
            title=Path(file_name).stem,
            file_path=file_name,
            course_path=course_path,
            type=item_type,
        ))
    return items


def scan_course_paths(course_paths: List[str], video_extensions: List[str]) -> CourseIndex:
    """Walk the configured roots and build the index (no persistence)."""
    index = CourseIndex()
    if not course_paths:
        logger.error("❌ No COURSE_PATH configured")
        return index

    extensions = tuple(ext.lower() for ext in video_extensions)
    logger.info(f"📂 Scanning {len(course_paths)} course path(s)...")

    course_id = 1
    for root in course_paths:
        root_path = Path(root)
        if not root_path.is_dir():
            logger.error(f"❌ Path not found: {root}")
            continue

        logger.info(f"📁 Scanning: {root}")
        course_dirs = sorted(
            (entry.name for entry in os.scandir(root_path) if entry.is_dir() and not entry.name.startswith(".")),
            key=natural_key,
        )

        for course_name in course_dirs:
            files = _list_files(root_path / course_name)
            video_files = [f for f in files if f.lower().endswith(extensions)]
            pdf_files = [f for f in files if f.lower().endswith(".pdf")]

            logger.info(f"   ✓ {course_name}: {len(video_files)} videos, {len(pdf_files)} PDFs")

            videos = _content_items(video_files, course_id, 0, root, "video")
            pdfs = _content_items(pdf_files, course_id, len(video_files), root, "pdf")
            index.courses.append(Course(
                id=course_id,
                title=course_name,
                course_path=root,
                videos=videos,
                pdfs=pdfs,
                content=videos + pdfs,
            ))
            course_id += 1

    return index


def generate_course_data(store: JsonStore, course_paths: List[str], video_extensions: List[str]) -> CourseIndex:
    """Rescan the roots and persist the result to data.json."""
    index = scan_course_paths(course_paths, video_extensions)
    store.write(COURSES, index.to_store())
    logger.info(f"✅ data.json generated with {len(index.courses)} courses")
    return index


def load_courses(store: JsonStore) -> CourseIndex:
    return CourseIndex.model_validate(store.read(COURSES, {"courses": []}))


def find_course(index: CourseIndex, course_id: int) -> Optional[Course]:
    return next((c for c in index.courses if c.id == course_id), None)


def find_course_by_title(index: CourseIndex, title: str) -> Optional[Course]:
    return next((c for c in index.courses if c.title == title), None)


def find_course_for_video(index: CourseIndex, video_id: int) -> Optional[Course]:
    for course in index.courses:
        if course.find_video(video_id) is not None:
            return course
    return None


# ================= PDF MATCHING =================

def normalize_name(name: str) -> str:
    return _NON_ALNUM.sub("", name.lower())


def match_pdf(video_title: str, pdfs: List[ContentItem]) -> Optional[ContentItem]:
    """
    Pick the companion PDF for a video by file-name similarity.

    Both names are lowercased and stripped to [a-z0-9]; the first PDF whose
    name contains the video's, or is contained in it, wins. Names that
    normalise to nothing never match.
    """
    video_name = normalize_name(video_title)
    if not video_name:
        return None
    for pdf in pdfs:
        pdf_name = normalize_name(pdf.title)
        if pdf_name and (pdf_name in video_name or video_name in pdf_name):
            return pdf
    return None


def attach_pdfs(course: Course) -> CourseView:
    videos = [
        VideoView(**video.model_dump(), pdf=match_pdf(video.title, course.pdfs))
        for video in course.videos
    ]
    return CourseView(
        id=course.id,
        title=course.title,
        course_path=course.course_path,
        videos=videos,
        pdfs=course.pdfs,
        content=course.content,
    )
