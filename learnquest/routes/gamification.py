"""
learnquest/routes/gamification.py
XP, level, streak and achievement endpoints

GET /stats applies streak decay before answering, so a streak that lapsed
while the app was closed reads as 0.
"""
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Body, Depends

from learnquest.schemas.common import SuccessResponse
from learnquest.schemas.gamification import (
    Achievement,
    AchievementsResponse,
    AwardResponse,
    AwardXPRequest,
    GamificationSummary,
    StatsResponse,
    UserStats,
)
from learnquest.services import gamification
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gamification", tags=["Gamification"])


@router.get("/stats", response_model=UserStats)
async def get_stats(store: JsonStore = Depends(get_store)):
    state = gamification.load_state(store)
    if gamification.decay_streak(state.stats, datetime.now().date()):
        gamification.save_state(store, state)
    return state.stats


@router.post("/stats", response_model=StatsResponse)
async def save_stats(stats: UserStats = Body(...), store: JsonStore = Depends(get_store)):
    """Overwrite the stats document. The level always follows totalXP."""
    state = gamification.load_state(store)
    stats.level = gamification.level_for_xp(stats.total_xp)
    stats.longest_streak = max(stats.longest_streak, stats.current_streak)
    state.stats = stats
    gamification.save_state(store, state)
    return StatsResponse(stats=state.stats)


@router.get("/achievements", response_model=List[Achievement])
async def get_achievements(store: JsonStore = Depends(get_store)):
    return gamification.load_state(store).achievements


@router.post("/achievements", response_model=AchievementsResponse)
async def save_achievements(achievements: List[Achievement] = Body(...), store: JsonStore = Depends(get_store)):
    state = gamification.load_state(store)
    state.achievements = achievements
    gamification.save_state(store, state)
    # catalogue entries missing from the body come back locked
    state = gamification.load_state(store)
    return AchievementsResponse(achievements=state.achievements)


@router.get("/summary", response_model=GamificationSummary)
async def get_summary(store: JsonStore = Depends(get_store)):
    state = gamification.load_state(store)
    if gamification.decay_streak(state.stats, datetime.now().date()):
        gamification.save_state(store, state)
    return GamificationSummary(
        stats=state.stats,
        level_progress=gamification.level_progress(state.stats.total_xp),
        unlocked_achievements=sum(1 for a in state.achievements if a.unlocked),
        total_achievements=len(state.achievements),
    )


@router.post("/award", response_model=AwardResponse)
async def award_xp(request: AwardXPRequest, store: JsonStore = Depends(get_store)):
    state, events = gamification.apply_reward(store, request.amount, request.reason)
    return AwardResponse(stats=state.stats, events=events)


@router.post("/reset", response_model=SuccessResponse)
async def reset_gamification(store: JsonStore = Depends(get_store)):
    gamification.save_state(store, gamification.default_state())
    logger.info("🧹 Gamification data reset")
    return SuccessResponse(message="Gamification data reset successfully")
