"""
learnquest/routes/analytics.py
Watch-time analytics endpoints
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from learnquest.schemas.analytics import Analytics, WatchTimeRequest, WatchTimeResponse, WeeklySummary
from learnquest.services import analytics_service, gamification, quest_service
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("", response_model=Analytics)
async def get_analytics(store: JsonStore = Depends(get_store)):
    return analytics_service.load_analytics(store)


@router.post("/watch-time", response_model=WatchTimeResponse)
async def record_watch_time(request: WatchTimeRequest, store: JsonStore = Depends(get_store)):
    """
    Add watched seconds. Every whole minute of today's total crossed by this
    report advances the study-time quest by one.
    """
    today = datetime.now().date()
    analytics = analytics_service.load_analytics(store)
    minutes = analytics_service.add_watch_time(analytics, request.duration, today, request.course_id)
    analytics_service.save_analytics(store, analytics)

    if minutes > 0:
        board = quest_service.load_board(store, today)
        completed = quest_service.advance_quests(board, [quest_service.QUEST_STUDY_30], minutes)
        quest_service.save_board(store, board)
        for quest in completed:
            gamification.apply_reward(store, quest.reward, f"Quest completed: {quest.title}")

    return WatchTimeResponse(analytics=analytics, study_minutes_added=minutes)


@router.get("/weekly", response_model=WeeklySummary)
async def get_weekly_summary(store: JsonStore = Depends(get_store)):
    return analytics_service.weekly_summary(analytics_service.load_analytics(store), datetime.now().date())
