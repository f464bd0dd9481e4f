"""
learnquest/schemas/notes.py
Request/Response schemas for timestamped video notes (notes.json)
"""
from typing import Optional
from pydantic import Field, field_validator

from learnquest.schemas.common import CamelModel


class Note(CamelModel):
    id: int
    video_id: str
    timestamp: float = Field(0.0, ge=0, description="Seconds into the video")
    content: str
    created_at: str
    updated_at: Optional[str] = None


class NoteCreate(CamelModel):
    """Request to create a note"""
    timestamp: float = Field(0.0, ge=0)
    content: str = Field(..., min_length=1, max_length=10000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content cannot be empty")
        return v.strip()


class NoteUpdate(CamelModel):
    """Request to update a note"""
    content: str = Field(..., min_length=1, max_length=10000)
    timestamp: Optional[float] = Field(None, ge=0)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content cannot be empty")
        return v.strip()
