"""
learnquest/routes/quests.py
Daily quest endpoints
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from learnquest.errors import ErrorCode, NotFoundError
from learnquest.schemas.quests import QuestBoard, QuestProgressRequest, QuestProgressResponse
from learnquest.services import gamification, quest_service
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quests", tags=["Quests"])


@router.get("", response_model=QuestBoard)
async def get_quests(store: JsonStore = Depends(get_store)):
    return quest_service.load_board(store, datetime.now().date())


@router.post("/progress", response_model=QuestProgressResponse)
async def update_quest_progress(request: QuestProgressRequest, store: JsonStore = Depends(get_store)):
    """
    Advance one quest. The reward is paid by the call that completes it;
    calls on an already-completed quest award nothing.
    """
    board = quest_service.load_board(store, datetime.now().date())
    quest = quest_service.find_quest(board, request.quest_id)
    if quest is None:
        raise NotFoundError("Quest", request.quest_id, code=ErrorCode.QUEST_NOT_FOUND)

    just_completed = quest_service.advance_quest(quest, request.increment)
    quest_service.save_board(store, board)

    xp_awarded = 0
    if just_completed:
        _, events = gamification.apply_reward(store, quest.reward, f"Quest completed: {quest.title}")
        xp_awarded = events.xp_awarded

    return QuestProgressResponse(quests=board, quest_completed=just_completed, xp_awarded=xp_awarded)
