"""
Interview session and state models for PrepCoach
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from prepcoach.models.adaptive import AdaptiveState, InterviewerTone
from prepcoach.models.evaluation import (
    AnswerFeedback,
    Difficulty,
    InterviewType,
    ScoringResult,
)


class AnswerMode(str, Enum):
    """How the candidate delivers answers. Voice and video arrive as transcripts."""

    TEXT = "text"
    VOICE = "voice"
    VIDEO = "video"


class InterviewState(str, Enum):
    """Interview state machine states."""

    # Pre-interview
    SETUP = "setup"  # Session created, not started
    READY = "ready"  # Ready to ask the first question

    # During interview
    ASKING = "asking"  # Next question being prepared
    LISTENING = "listening"  # Waiting for the candidate answer
    EVALUATING = "evaluating"  # Scoring service call in flight
    DECIDING = "deciding"  # Controller choosing next difficulty and tone

    # Post-interview
    COMPLETE = "complete"  # All questions answered
    CANCELLED = "cancelled"  # Abandoned by the user


class InterviewSetup(BaseModel):
    """User's interview configuration."""

    user_id: str = Field(..., min_length=1)

    interview_type: InterviewType = Field(
        default=InterviewType.BEHAVIORAL,
        description="Interview category to practice"
    )

    mode: AnswerMode = Field(
        default=AnswerMode.TEXT,
        description="Answer delivery mode"
    )

    starting_difficulty: Difficulty = Field(
        default=Difficulty.EASY,
        description="Difficulty of the opening question"
    )

    max_questions: int = Field(
        default=5, ge=1, le=15,
        description="Number of questions in the session"
    )


class InterviewTurn(BaseModel):
    """A question-answer pair during the interview."""

    question_text: str
    difficulty: Difficulty
    tone: InterviewerTone
    asked_at: datetime

    # Response
    answer: str | None = None
    answered_at: datetime | None = None

    # Evaluation
    scoring: ScoringResult | None = None
    feedback: AnswerFeedback | None = None
    record_id: str | None = None

    @property
    def is_answered(self) -> bool:
        return self.scoring is not None


class InterviewSession(BaseModel):
    """Complete interview session state."""

    # Identification
    session_id: str = Field(default_factory=lambda: str(uuid4()))

    # Setup
    setup: InterviewSetup

    # State
    state: InterviewState = Field(default=InterviewState.SETUP)
    adaptive: AdaptiveState = Field(default_factory=AdaptiveState)

    # Timing
    created_at: datetime = Field(default_factory=datetime.utcnow)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    # Questions & answers
    turns: list[InterviewTurn] = Field(default_factory=list)

    # Metadata
    error_message: str | None = None

    @property
    def user_id(self) -> str:
        return self.setup.user_id

    @property
    def questions_answered(self) -> int:
        return sum(1 for turn in self.turns if turn.is_answered)

    def get_current_turn(self) -> InterviewTurn | None:
        """Get the latest turn, answered or not."""
        return self.turns[-1] if self.turns else None

    def add_turn(self, turn: InterviewTurn) -> None:
        """Add a newly asked question to the session."""
        self.turns.append(turn)

    def should_end_interview(self) -> bool:
        """Check if interview should end."""
        return (
            self.questions_answered >= self.setup.max_questions or
            self.state in [InterviewState.COMPLETE, InterviewState.CANCELLED]
        )

    def get_duration_seconds(self) -> float:
        """Get interview duration in seconds."""
        if not self.started_at:
            return 0.0
        end = self.completed_at or datetime.utcnow()
        return (end - self.started_at).total_seconds()
