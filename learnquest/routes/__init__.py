"""
learnquest/routes/__init__.py
Route registration
"""
from fastapi import APIRouter
from learnquest.routes import courses, media, progress
from learnquest.routes import gamification, quests, analytics
from learnquest.routes import notes, quizzes

router = APIRouter()

# Library and playback
router.include_router(courses.router)
router.include_router(media.router)
router.include_router(progress.router)

# Gamification
router.include_router(gamification.router)
router.include_router(quests.router)
router.include_router(analytics.router)

# Study tools
router.include_router(notes.router)
router.include_router(quizzes.router)
