"""
learnquest/schemas/quizzes.py
Per-video multiple-choice quizzes (quizzes.json)

Each quiz collection is keyed by video id. Correct answers are stored as
option indices and never leave the server until an attempt is graded.
"""
from typing import List, Optional
from pydantic import ConfigDict, Field, model_validator

from learnquest.schemas.common import CamelModel


class QuizQuestion(CamelModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2, max_length=10)
    correct_answer: int = Field(..., ge=0, description="Index into options")
    explanation: Optional[str] = None

    @model_validator(mode='after')
    def validate_answer_index(self):
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correctAnswer {self.correct_answer} out of range for {len(self.options)} options"
            )
        return self


class QuizAttempt(CamelModel):
    answers: List[Optional[int]]
    score: int
    total: int
    percent: float
    passed: bool
    submitted_at: str


class Quiz(CamelModel):
    video_id: str
    questions: List[QuizQuestion] = Field(default_factory=list)
    attempts: List[QuizAttempt] = Field(default_factory=list)
    best_score: float = Field(0.0, description="Best percentage reached")
    passed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ================= REQUEST SCHEMAS =================

class QuizUpsert(CamelModel):
    """
    Used by: PUT /api/quizzes/{video_id}
    """
    questions: List[QuizQuestion] = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "questions": [
                {"question": "What does HTTP 206 mean?",
                 "options": ["OK", "Partial Content", "Not Modified"],
                 "correctAnswer": 1}
            ]
        }
    })


class QuizSubmission(CamelModel):
    """
    Used by: POST /api/quizzes/{video_id}/submit

    answers[i] is the chosen option index for question i; null or a missing
    trailing entry counts as unanswered.
    """
    answers: List[Optional[int]] = Field(..., max_length=100)


# ================= RESPONSE SCHEMAS =================

class PublicQuestion(CamelModel):
    index: int
    question: str
    options: List[str]


class PublicQuiz(CamelModel):
    video_id: str
    questions: List[PublicQuestion]
    best_score: float
    passed: bool
    attempt_count: int


class QuestionResult(CamelModel):
    index: int
    selected: Optional[int]
    correct_answer: int
    is_correct: bool
    explanation: Optional[str] = None


class QuizResult(CamelModel):
    success: bool = True
    score: int
    total: int
    percent: float
    passed: bool
    first_pass: bool = Field(False, description="True when this attempt is the first passing one")
    xp_awarded: int = Field(0, alias="xpAwarded")
    results: List[QuestionResult]
