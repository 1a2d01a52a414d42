"""
Data models and schemas for PrepCoach

Contains Pydantic models for:
- Evaluation records and scoring payloads
- Adaptive difficulty/tone state
- Interview sessions
- Analytics and coaching output
"""

from prepcoach.models.evaluation import (
    AnswerEvaluation,
    AnswerFeedback,
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
    ScoringRequest,
    ScoringResult,
)
from prepcoach.models.adaptive import (
    AdaptiveDecision,
    AdaptiveRequest,
    AdaptiveResponse,
    AdaptiveState,
    InterviewerTone,
    QuestionRequest,
)
from prepcoach.models.interview import (
    AnswerMode,
    InterviewSession,
    InterviewSetup,
    InterviewState,
    InterviewTurn,
)
from prepcoach.models.analytics import (
    AnalyticsReport,
    AnswerLengthCategory,
    BehavioralInsight,
    CoachingFeedback,
    CoachingInput,
    CoachingSuggestion,
    InsightType,
    NextBestAction,
    PerformanceSnapshot,
)

__all__ = [
    # Evaluation
    "AnswerEvaluation",
    "AnswerFeedback",
    "Confidence",
    "Difficulty",
    "EvaluationRecord",
    "InterviewType",
    "ScoringRequest",
    "ScoringResult",
    # Adaptive
    "AdaptiveDecision",
    "AdaptiveRequest",
    "AdaptiveResponse",
    "AdaptiveState",
    "InterviewerTone",
    "QuestionRequest",
    # Interview
    "AnswerMode",
    "InterviewSession",
    "InterviewSetup",
    "InterviewState",
    "InterviewTurn",
    # Analytics
    "AnalyticsReport",
    "AnswerLengthCategory",
    "BehavioralInsight",
    "CoachingFeedback",
    "CoachingInput",
    "CoachingSuggestion",
    "InsightType",
    "NextBestAction",
    "PerformanceSnapshot",
]
