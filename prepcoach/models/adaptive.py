"""
Adaptive interview models for PrepCoach

Structures passed into and out of the difficulty/tone controller and the
question-generation service.
"""

from enum import Enum

from pydantic import BaseModel, Field

from prepcoach.models.evaluation import AnswerEvaluation, Difficulty, InterviewType


class InterviewerTone(str, Enum):
    """Delivery tone for the next question."""

    SUPPORTIVE = "supportive"  # Warm, encouraging phrasing
    NEUTRAL = "neutral"        # Professional, direct
    CHALLENGING = "challenging"  # Probing, slightly demanding

    @property
    def description(self) -> str:
        descriptions = {
            "supportive": "Warm, encouraging phrasing that puts candidate at ease",
            "neutral": "Professional, direct questioning without emotional coloring",
            "challenging": "Probing, pushing for deeper answers, slightly demanding",
        }
        return descriptions.get(self.value, "")


class AdaptiveDecision(BaseModel):
    """Controller output for one turn."""

    next_difficulty: Difficulty
    interviewer_tone: InterviewerTone


class AdaptiveState(BaseModel):
    """
    Per-session difficulty/tone tracker.

    Lives only as long as its interview session and is never persisted.
    The controller returns a new instance each turn instead of mutating
    this one.
    """

    model_config = {"frozen": True}

    current_difficulty: Difficulty = Difficulty.EASY
    interviewer_tone: InterviewerTone = InterviewerTone.NEUTRAL
    last_evaluation: AnswerEvaluation | None = None


class QuestionRequest(BaseModel):
    """Payload sent to the question-generation service."""

    interview_type: InterviewType
    current_difficulty: Difficulty
    next_difficulty: Difficulty
    interviewer_tone: InterviewerTone


class AdaptiveRequest(BaseModel):
    """Controller request: the difficulty just played and the answer's evaluation."""

    interview_type: InterviewType = InterviewType.BEHAVIORAL
    current_difficulty: Difficulty
    answer_evaluation: AnswerEvaluation


class AdaptiveResponse(AdaptiveDecision):
    """Controller decision plus the generated question text."""

    next_question: str = Field(..., min_length=1)
