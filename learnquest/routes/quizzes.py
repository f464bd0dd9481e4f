"""
learnquest/routes/quizzes.py
Per-video quizzes: authoring, answer-free retrieval and grading
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from learnquest.errors import ErrorCode, NotFoundError
from learnquest.schemas.common import SuccessResponse
from learnquest.schemas.quizzes import PublicQuiz, Quiz, QuizResult, QuizSubmission, QuizUpsert
from learnquest.services import gamification, quiz_grader
from learnquest.store import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/quizzes", tags=["Quizzes"])


def _quiz_not_found(video_id: int) -> NotFoundError:
    return NotFoundError("Quiz for video", video_id, code=ErrorCode.QUIZ_NOT_FOUND)


@router.get("/{video_id}", response_model=PublicQuiz)
async def get_quiz(video_id: int, store: JsonStore = Depends(get_store)):
    quiz = quiz_grader.load_quizzes(store).get(str(video_id))
    if quiz is None:
        raise _quiz_not_found(video_id)
    return quiz_grader.public_view(quiz)


@router.put("/{video_id}", response_model=PublicQuiz)
async def upsert_quiz(video_id: int, request: QuizUpsert, store: JsonStore = Depends(get_store)):
    """Create or replace the questions. Attempt history and pass state are kept."""
    quizzes = quiz_grader.load_quizzes(store)
    now = datetime.now().isoformat()
    quiz = quizzes.get(str(video_id))
    if quiz is None:
        quiz = Quiz(video_id=str(video_id), created_at=now)
        quizzes[str(video_id)] = quiz
    quiz.questions = request.questions
    quiz.updated_at = now
    quiz_grader.save_quizzes(store, quizzes)
    logger.info(f"📝 Quiz for video {video_id} saved ({len(quiz.questions)} questions)")
    return quiz_grader.public_view(quiz)


@router.post("/{video_id}/submit", response_model=QuizResult)
async def submit_quiz(video_id: int, submission: QuizSubmission, store: JsonStore = Depends(get_store)):
    quizzes = quiz_grader.load_quizzes(store)
    quiz = quizzes.get(str(video_id))
    if quiz is None:
        raise _quiz_not_found(video_id)

    attempt, results, first_pass = quiz_grader.record_attempt(quiz, submission.answers, datetime.now())
    quiz_grader.save_quizzes(store, quizzes)

    xp_awarded = 0
    if first_pass:
        _, events = gamification.apply_reward(store, gamification.XP_QUIZ_PASSED, f"Quiz passed for video {video_id}")
        xp_awarded = events.xp_awarded

    return QuizResult(
        score=attempt.score,
        total=attempt.total,
        percent=attempt.percent,
        passed=attempt.passed,
        first_pass=first_pass,
        xp_awarded=xp_awarded,
        results=results,
    )


@router.delete("/{video_id}", response_model=SuccessResponse)
async def delete_quiz(video_id: int, store: JsonStore = Depends(get_store)):
    quizzes = quiz_grader.load_quizzes(store)
    if str(video_id) not in quizzes:
        raise _quiz_not_found(video_id)
    del quizzes[str(video_id)]
    quiz_grader.save_quizzes(store, quizzes)
    return SuccessResponse(message="Quiz deleted")
