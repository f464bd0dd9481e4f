"""
learnquest/schemas/gamification.py
Pydantic schemas for XP, levels, streaks and achievements (gamification.json)
"""
from typing import List, Optional
from pydantic import ConfigDict, Field

from learnquest.schemas.common import CamelModel


class UserStats(CamelModel):
    total_xp: int = Field(0, ge=0, alias="totalXP")
    level: int = Field(1, ge=1)
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    total_videos_completed: int = Field(0, ge=0)
    total_courses_completed: int = Field(0, ge=0)
    last_activity_date: Optional[str] = Field(None, description="ISO timestamp of the last completion")


class Achievement(CamelModel):
    id: str
    title: str
    description: str
    icon: str
    unlocked: bool = False
    unlocked_at: Optional[str] = None


class GamificationState(CamelModel):
    stats: UserStats = Field(default_factory=UserStats)
    achievements: List[Achievement] = Field(default_factory=list)


# ================= REQUEST SCHEMAS =================

class AwardXPRequest(CamelModel):
    """
    Request schema for a manual XP grant.

    Used by: POST /api/gamification/award
    """
    amount: int = Field(..., gt=0, le=10000)
    reason: str = Field("manual", max_length=200)

    model_config = ConfigDict(json_schema_extra={
        "example": {"amount": 25, "reason": "Video completed"}
    })


# ================= RESPONSE SCHEMAS =================

class LevelProgress(CamelModel):
    level: int
    xp_into_level: int = Field(..., description="XP earned since the current level started")
    xp_for_next_level: int = Field(..., description="XP span of one level")
    xp_to_next_level: int
    percent: float


class GamificationSummary(CamelModel):
    stats: UserStats
    level_progress: LevelProgress
    unlocked_achievements: int
    total_achievements: int


class CompletionEvents(CamelModel):
    """Everything a single action earned, so the client can animate it."""
    xp_awarded: int = Field(0, alias="xpAwarded")
    leveled_up: bool = False
    level: int = 1
    course_completed: bool = False
    unlocked_achievements: List[Achievement] = Field(default_factory=list)
    completed_quests: List[str] = Field(default_factory=list)
    reasons: List[str] = Field(default_factory=list, description="Log of why XP was granted")


class StatsResponse(CamelModel):
    success: bool = True
    stats: UserStats


class AchievementsResponse(CamelModel):
    success: bool = True
    achievements: List[Achievement]


class AwardResponse(CamelModel):
    success: bool = True
    stats: UserStats
    events: CompletionEvents
