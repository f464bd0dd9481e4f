"""
learnquest/schemas/course.py
Course index models (data.json)
"""
from typing import List, Literal, Optional
from pydantic import ConfigDict, Field

from learnquest.schemas.common import CamelModel


class ContentItem(CamelModel):
    """A single video or PDF inside a course folder."""
    id: int
    title: str = Field(..., description="File name without extension")
    file_path: str = Field(..., description="File name inside the course folder")
    course_path: str = Field(..., description="Course root the folder was found under")
    type: Literal["video", "pdf"]


class Course(CamelModel):
    id: int
    title: str = Field(..., description="Course folder name")
    course_path: str
    videos: List[ContentItem] = Field(default_factory=list)
    pdfs: List[ContentItem] = Field(default_factory=list)
    content: List[ContentItem] = Field(default_factory=list)

    def find_video(self, video_id: int) -> Optional[ContentItem]:
        for video in self.videos:
            if video.id == video_id:
                return video
        return None


class CourseIndex(CamelModel):
    courses: List[Course] = Field(default_factory=list)


# ================= RESPONSE SCHEMAS =================

class VideoView(ContentItem):
    """Video as served to the client, with its companion PDF if one matched."""
    pdf: Optional[ContentItem] = None


class CourseView(CamelModel):
    id: int
    title: str
    course_path: str
    videos: List[VideoView] = Field(default_factory=list)
    pdfs: List[ContentItem] = Field(default_factory=list)
    content: List[ContentItem] = Field(default_factory=list)


class CourseProgressSummary(CamelModel):
    course_id: int
    total_videos: int
    completed_videos: int
    percent: float = Field(..., ge=0, le=100)
    completed: bool


class RefreshResponse(CamelModel):
    success: bool = True
    courses: int = Field(..., description="Number of courses found by the rescan")

    model_config = ConfigDict(json_schema_extra={
        "example": {"success": True, "courses": 4}
    })
