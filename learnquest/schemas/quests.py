"""
learnquest/schemas/quests.py
Daily quests (quests.json)
"""
from typing import List, Optional
from pydantic import Field

from learnquest.schemas.common import CamelModel


class DailyQuest(CamelModel):
    id: str
    title: str
    description: str
    target: int = Field(..., gt=0)
    progress: int = Field(0, ge=0)
    reward: int = Field(..., ge=0, description="XP granted when the quest completes")
    completed: bool = False


class QuestBoard(CamelModel):
    last_reset: Optional[str] = Field(None, description="Local date (YYYY-MM-DD) of the last reset")
    daily_quests: List[DailyQuest] = Field(default_factory=list)


class QuestProgressRequest(CamelModel):
    """
    Used by: POST /api/quests/progress
    """
    quest_id: str = Field(..., min_length=1)
    increment: int = Field(1, ge=0, le=1440)


class QuestProgressResponse(CamelModel):
    success: bool = True
    quests: QuestBoard
    quest_completed: bool = False
    xp_awarded: int = Field(0, alias="xpAwarded")
