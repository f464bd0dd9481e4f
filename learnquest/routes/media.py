"""
learnquest/routes/media.py
Video streaming and inline PDF delivery

Byte ranges, If-Range and HEAD are handled by FileResponse.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import FileResponse

from learnquest.config import feature_flags
from learnquest.errors import ErrorCode, RangeNotSatisfiableError
from learnquest.services import media_service
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Media"])

VIDEO_MEDIA_TYPE = "video/mp4"


@router.api_route("/stream/{course}/{filename}", methods=["GET", "HEAD"])
async def stream_video(
    course: str,
    filename: str,
    range_header: Optional[str] = Header(None, alias="range"),
    store: JsonStore = Depends(get_store)
):
    """
    Stream a course video.

    With a Range header: 206 and the requested slice, 416 when it lies past the end.
    Without one: 200 and the whole file (416 when FEATURE_STRICT_RANGE is on).
    """
    path = media_service.resolve_course_file(store, course, filename)

    if not range_header and feature_flags.FEATURE_STRICT_RANGE:
        raise RangeNotSatisfiableError(path.stat().st_size, "Requires Range header", code=ErrorCode.RANGE_REQUIRED)

    return FileResponse(path=path, media_type=VIDEO_MEDIA_TYPE)


@router.api_route("/pdf/{course}/{filename}", methods=["GET", "HEAD"])
async def serve_pdf(course: str, filename: str, store: JsonStore = Depends(get_store)):
    path = media_service.resolve_course_file(store, course, filename)
    return FileResponse(
        path=path,
        media_type="application/pdf",
        headers={"Content-Disposition": "inline"},
    )
