"""
learnquest/routes/progress.py
Playback progress endpoints

Saving a position that completes a video for the first time runs the
completion flow (XP, streak, quests, analytics, achievements) and returns
what it earned in `events`.
"""
import logging
from typing import Dict

from fastapi import APIRouter, Depends

from learnquest.schemas.progress import (
    ProgressSaveResponse,
    ProgressUpdateRequest,
    VideoProgress,
    VideoProgressResponse,
)
from learnquest.services import progress_service
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["Progress"])


@router.get("", response_model=Dict[str, VideoProgress])
async def get_all_progress(store: JsonStore = Depends(get_store)):
    return progress_service.load_progress(store)


@router.get("/{video_id}", response_model=VideoProgressResponse)
async def get_video_progress(video_id: int, store: JsonStore = Depends(get_store)):
    """Stored progress for one video; zeroed defaults when never played."""
    entry = progress_service.load_progress(store).get(str(video_id)) or VideoProgress()
    return VideoProgressResponse(video_id=str(video_id), **entry.model_dump())


@router.post("/{video_id}", response_model=ProgressSaveResponse)
async def save_video_progress(
    video_id: int,
    request: ProgressUpdateRequest,
    store: JsonStore = Depends(get_store)
):
    entry, events = progress_service.save_video_progress(store, video_id, request)
    return ProgressSaveResponse(progress=entry, events=events)
