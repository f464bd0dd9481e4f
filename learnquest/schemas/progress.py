"""
learnquest/schemas/progress.py
Per-video playback progress (progress.json)
"""
from typing import Optional
from pydantic import ConfigDict, Field, field_validator

from learnquest.schemas.common import CamelModel
from learnquest.schemas.gamification import CompletionEvents


class VideoProgress(CamelModel):
    current_time: float = Field(0.0, ge=0)
    duration: float = Field(0.0, ge=0)
    completed: bool = False
    last_updated: Optional[str] = None


# ================= REQUEST SCHEMAS =================

class ProgressUpdateRequest(CamelModel):
    """
    Request schema for saving the playback position.

    Used by: POST /api/progress/{video_id}
    """
    current_time: float = Field(0.0, description="Playback position in seconds")
    duration: float = Field(0.0, description="Video length in seconds")
    completed: Optional[bool] = Field(None, description="Client-side completion hint")
    last_updated: Optional[str] = None

    @field_validator('current_time', 'duration', mode='before')
    @classmethod
    def coerce_seconds(cls, v):
        """Browsers report NaN/empty durations before metadata loads; treat as 0."""
        if v is None or v == "":
            return 0.0
        try:
            value = float(v)
        except (TypeError, ValueError):
            return 0.0
        if value != value or value < 0 or value == float("inf"):
            return 0.0
        return value

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "currentTime": 512.4,
            "duration": 560.0,
            "completed": True,
            "lastUpdated": "2024-05-01T21:14:03.000Z"
        }
    })


# ================= RESPONSE SCHEMAS =================

class VideoProgressResponse(VideoProgress):
    video_id: str


class ProgressSaveResponse(CamelModel):
    success: bool = True
    progress: VideoProgress
    events: Optional[CompletionEvents] = Field(None, description="Set when this save completed the video")
