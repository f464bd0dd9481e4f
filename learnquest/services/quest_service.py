"""
learnquest/services/quest_service.py
Daily quests

The board resets to DEFAULT_QUESTS the first time it is read on a new local
calendar day. Progress is capped at the target; a quest's reward is paid
only on the call that completes it.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from learnquest.schemas.quests import DailyQuest, QuestBoard
from learnquest.store import QUESTS, JsonStore

logger = logging.getLogger(__name__)

QUEST_WATCH_ONE = "watch-1"
QUEST_WATCH_THREE = "watch-3"
QUEST_STUDY_30 = "study-30"

DEFAULT_QUESTS = [
    {"id": QUEST_WATCH_ONE, "title": "Warm Up", "description": "Complete 1 video today",
     "target": 1, "reward": 20},
    {"id": QUEST_WATCH_THREE, "title": "Triple Play", "description": "Complete 3 videos today",
     "target": 3, "reward": 50},
    {"id": QUEST_STUDY_30, "title": "Deep Focus", "description": "Study for 30 minutes today",
     "target": 30, "reward": 40},
]


def default_quests() -> List[DailyQuest]:
    return [DailyQuest(**entry) for entry in DEFAULT_QUESTS]


def load_board(store: JsonStore, today: date) -> QuestBoard:
    """Read quests.json, resetting (and persisting) when the date changed."""
    raw = store.read(QUESTS)
    board = QuestBoard.model_validate(raw) if raw is not None else QuestBoard()

    if board.last_reset != today.isoformat() or not board.daily_quests:
        if board.last_reset:
            logger.info(f"🌅 Daily quests reset (last reset {board.last_reset})")
        board = QuestBoard(last_reset=today.isoformat(), daily_quests=default_quests())
        save_board(store, board)
    return board


def save_board(store: JsonStore, board: QuestBoard) -> None:
    store.write(QUESTS, board.to_store())


def find_quest(board: QuestBoard, quest_id: str) -> Optional[DailyQuest]:
    return next((q for q in board.daily_quests if q.id == quest_id), None)


def advance_quest(quest: DailyQuest, increment: int) -> bool:
    """
    Move a quest forward.

    Returns True only when this call flipped the quest to completed.
    """
    if quest.completed or increment <= 0:
        return False
    quest.progress = min(quest.target, quest.progress + increment)
    if quest.progress >= quest.target:
        quest.completed = True
        logger.info(f"🎯 Quest completed: {quest.title}")
        return True
    return False


def advance_quests(board: QuestBoard, quest_ids: List[str], increment: int = 1) -> List[DailyQuest]:
    """Advance several quests; returns the ones completed by this call."""
    completed = []
    for quest_id in quest_ids:
        quest = find_quest(board, quest_id)
        if quest is not None and advance_quest(quest, increment):
            completed.append(quest)
    return completed


def quest_summary(board: QuestBoard) -> Tuple[int, int]:
    done = sum(1 for q in board.daily_quests if q.completed)
    return done, len(board.daily_quests)
