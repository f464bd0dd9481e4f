"""
learnquest/schemas/analytics.py
Watch-time analytics (analytics.json)
"""
from typing import Dict, List, Optional, Union
from pydantic import Field

from learnquest.schemas.common import CamelModel


class DayStats(CamelModel):
    watch_time: float = Field(0.0, ge=0, description="Seconds watched")
    videos_completed: int = Field(0, ge=0)


class Analytics(CamelModel):
    total_watch_time: float = Field(0.0, ge=0, description="Seconds watched, all time")
    daily_stats: Dict[str, DayStats] = Field(default_factory=dict, description="Keyed by local date YYYY-MM-DD")
    course_stats: Dict[str, DayStats] = Field(default_factory=dict, description="Keyed by course id")


class WatchTimeRequest(CamelModel):
    """
    Used by: POST /api/analytics/watch-time
    """
    duration: float = Field(..., gt=0, le=24 * 3600, description="Seconds watched since the last report")
    video_id: Optional[Union[int, str]] = None
    course_id: Optional[Union[int, str]] = None


class WatchTimeResponse(CamelModel):
    success: bool = True
    analytics: Analytics
    study_minutes_added: int = 0


class WeeklyDay(CamelModel):
    date: str
    day: str = Field(..., description="Short weekday name, e.g. Mon")
    minutes: int
    videos: int


class WeeklySummary(CamelModel):
    days: List[WeeklyDay]
    total_minutes: int
    average_minutes: float
