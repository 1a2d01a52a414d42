"""
Evaluation models for PrepCoach

Defines the scored-answer structures shared by the adaptive controller,
the analytics engine and the external scoring service.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, StrictBool, field_validator


def require_number(value):
    """Reject non-numeric scores before pydantic coerces them."""
    # bool is an int subclass and numeric strings would be coerced
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("score must be a number")
    return value


class Confidence(str, Enum):
    """Delivery confidence classification returned by the scoring service."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InterviewType(str, Enum):
    """Interview categories a user can practice."""

    HR = "hr"
    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"

    @property
    def display_text(self) -> str:
        """Short label used in insights and suggestions."""
        texts = {
            "hr": "HR",
            "behavioral": "Behavioral",
            "technical": "Technical",
        }
        return texts.get(self.value, self.value)

    @property
    def prompt_text(self) -> str:
        """Label used when talking to the AI gateway."""
        return f"{self.display_text} interview"


class Difficulty(str, Enum):
    """Question difficulty levels, ordered easy < medium < hard."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def display_text(self) -> str:
        return self.value.capitalize()

    @property
    def level(self) -> int:
        """Zero-based position on the difficulty ladder."""
        return list(Difficulty).index(self)

    @classmethod
    def from_level(cls, level: int) -> "Difficulty":
        """Get the difficulty at a ladder position, clamped to the ladder ends."""
        ladder = list(cls)
        return ladder[max(0, min(level, len(ladder) - 1))]


class AnswerEvaluation(BaseModel):
    """The (score, confidence, hesitation) triple the controller consumes."""

    score: float = Field(
        ..., ge=1, le=10,
        description="Answer score on a 1-10 scale"
    )
    confidence: Confidence = Field(..., description="Delivery confidence")
    hesitation: StrictBool = Field(
        ...,
        description="Whether hesitation markers were detected"
    )

    _score_must_be_numeric = field_validator("score", mode="before")(require_number)


class ScoringRequest(BaseModel):
    """Payload sent to the external scoring service."""

    interview_type: InterviewType
    current_question: str = Field(..., min_length=1)
    candidate_answer: str = Field(..., min_length=1)


class ScoringResult(AnswerEvaluation):
    """Scoring service output: the evaluation triple plus a one-line summary."""

    summary: str = Field(
        ..., min_length=1,
        description="One sentence explanation of the score"
    )


class AnswerFeedback(BaseModel):
    """Per-answer feedback shown right after an answer is scored."""

    score: float
    summary: str
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class EvaluationRecord(BaseModel):
    """
    One scored interview answer attempt.

    Created once per answer and never modified afterwards. The analytics
    engine only reads score, confidence, hesitation, interview_type,
    difficulty, answer_length and created_at.
    """

    model_config = {"frozen": True}

    # Identification
    id: str = Field(default_factory=lambda: f"rec_{uuid4().hex[:12]}")
    user_id: str

    # Scoring
    score: float = Field(..., ge=1, le=10)
    confidence: Confidence
    hesitation: StrictBool

    # Classification
    interview_type: InterviewType
    difficulty: Difficulty

    # Response
    answer_length: int = Field(
        ..., ge=0,
        description="Character count of the candidate answer"
    )

    # Timing
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Optional context (not used by the analytics engine)
    question: str | None = None
    summary: str | None = None

    _score_must_be_numeric = field_validator("score", mode="before")(require_number)

    def to_evaluation(self) -> AnswerEvaluation:
        """Get the evaluation triple for the adaptive controller."""
        return AnswerEvaluation(
            score=self.score,
            confidence=self.confidence,
            hesitation=self.hesitation,
        )
