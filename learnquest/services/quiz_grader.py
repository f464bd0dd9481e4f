"""
learnquest/services/quiz_grader.py
Deterministic grading for per-video multiple-choice quizzes
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from learnquest.schemas.quizzes import (
    PublicQuestion,
    PublicQuiz,
    QuestionResult,
    Quiz,
    QuizAttempt,
)
from learnquest.store import QUIZZES, JsonStore

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 0.6


def load_quizzes(store: JsonStore) -> Dict[str, Quiz]:
    raw = store.read(QUIZZES, {})
    return {video_id: Quiz.model_validate(entry) for video_id, entry in raw.items()}


def save_quizzes(store: JsonStore, quizzes: Dict[str, Quiz]) -> None:
    store.write(QUIZZES, {video_id: quiz.to_store() for video_id, quiz in quizzes.items()})


def public_view(quiz: Quiz) -> PublicQuiz:
    """Strip correct answers before sending a quiz to the client."""
    return PublicQuiz(
        video_id=quiz.video_id,
        questions=[
            PublicQuestion(index=i, question=q.question, options=q.options)
            for i, q in enumerate(quiz.questions)
        ],
        best_score=quiz.best_score,
        passed=quiz.passed,
        attempt_count=len(quiz.attempts),
    )


def grade(quiz: Quiz, answers: List[Optional[int]]) -> Tuple[int, List[QuestionResult]]:
    """
    Compare answers[i] to question i's correct index.

    Missing trailing answers and nulls are wrong; extra answers are ignored.
    """
    results = []
    score = 0
    for i, question in enumerate(quiz.questions):
        selected = answers[i] if i < len(answers) else None
        is_correct = selected is not None and selected == question.correct_answer
        if is_correct:
            score += 1
        results.append(QuestionResult(
            index=i,
            selected=selected,
            correct_answer=question.correct_answer,
            is_correct=is_correct,
            explanation=question.explanation,
        ))
    return score, results


def record_attempt(quiz: Quiz, answers: List[Optional[int]], now: datetime) -> Tuple[QuizAttempt, List[QuestionResult], bool]:
    """
    Grade and append an attempt.

    Returns (attempt, per-question results, first_pass) where first_pass is
    True only for the first attempt that reaches PASS_THRESHOLD.
    """
    score, results = grade(quiz, answers)
    total = len(quiz.questions)
    percent = round(score / total * 100, 1) if total else 0.0
    passed = total > 0 and score / total >= PASS_THRESHOLD

    attempt = QuizAttempt(
        answers=list(answers[:total]),
        score=score,
        total=total,
        percent=percent,
        passed=passed,
        submitted_at=now.isoformat(),
    )
    quiz.attempts.append(attempt)
    quiz.best_score = max(quiz.best_score, percent)

    first_pass = passed and not quiz.passed
    quiz.passed = quiz.passed or passed
    logger.info(f"📝 Quiz for video {quiz.video_id}: {score}/{total} ({'passed' if passed else 'failed'})")
    return attempt, results, first_pass
