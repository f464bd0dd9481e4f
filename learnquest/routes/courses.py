"""
learnquest/routes/courses.py
Course index endpoints

Courses come from data.json (written by the scanner); videos are served
with their companion PDF attached.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from learnquest.config import settings
from learnquest.errors import APIError, ErrorCode, NotFoundError
from learnquest.rate_limit import limiter
from learnquest.schemas.course import (
    ContentItem,
    Course,
    CourseProgressSummary,
    CourseView,
    RefreshResponse,
    VideoView,
)
from learnquest.services import course_scanner, progress_service
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Courses"])


def get_course_or_404(store: JsonStore, course_id: int) -> Course:
    course = course_scanner.find_course(course_scanner.load_courses(store), course_id)
    if course is None:
        raise NotFoundError("Course", course_id, code=ErrorCode.COURSE_NOT_FOUND)
    return course


@router.get("/courses", response_model=List[CourseView])
async def list_courses(store: JsonStore = Depends(get_store)):
    index = course_scanner.load_courses(store)
    return [course_scanner.attach_pdfs(course) for course in index.courses]


@router.get("/courses/{course_id}", response_model=CourseView)
async def get_course(course_id: int, store: JsonStore = Depends(get_store)):
    return course_scanner.attach_pdfs(get_course_or_404(store, course_id))


@router.get("/courses/{course_id}/videos", response_model=List[VideoView])
async def get_course_videos(course_id: int, store: JsonStore = Depends(get_store)):
    return course_scanner.attach_pdfs(get_course_or_404(store, course_id)).videos


@router.get("/courses/{course_id}/progress", response_model=CourseProgressSummary)
async def get_course_progress(course_id: int, store: JsonStore = Depends(get_store)):
    course = get_course_or_404(store, course_id)
    return progress_service.course_progress(course, progress_service.load_progress(store))


@router.get("/courses/{course_id}/resume", response_model=Optional[ContentItem])
async def get_resume_video(course_id: int, store: JsonStore = Depends(get_store)):
    """
    Video to open when the course is selected: the unfinished one touched most
    recently, else the first unfinished one, else the first video.
    """
    course = get_course_or_404(store, course_id)
    return progress_service.resume_video(course, progress_service.load_progress(store))


@router.post("/refresh", response_model=RefreshResponse)
@limiter.limit(settings.refresh_rate_limit)
async def refresh_courses(request: Request, store: JsonStore = Depends(get_store)):
    if not settings.course_paths:
        raise APIError(
            status_code=400,
            error="Bad Request",
            message="COURSE_PATH is not set, nothing to rescan",
            code=ErrorCode.INVALID_INPUT
        )
    logger.info("🔄 Refreshing course data...")
    index = course_scanner.generate_course_data(store, settings.course_paths, settings.video_extensions)
    return RefreshResponse(courses=len(index.courses))
