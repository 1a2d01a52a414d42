"""
Analytics models for PrepCoach

Derived structures computed from a user's evaluation history. None of
these are stored; they are rebuilt from the records on demand.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from prepcoach.models.evaluation import (
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
)


class AnswerLengthCategory(str, Enum):
    """Classification of the mean answer length."""

    TOO_SHORT = "too_short"
    IDEAL = "ideal"
    TOO_LONG = "too_long"


class InsightType(str, Enum):
    """Visual weight of a behavioral insight."""

    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


class DateBucket(BaseModel):
    """Mean score and answer count for one calendar date."""

    date: str  # "Jan 5"
    score: float
    count: int


class ConfidenceBucket(BaseModel):
    """Confidence tally for one calendar date."""

    date: str
    low: int = 0
    medium: int = 0
    high: int = 0


class TypePerformance(BaseModel):
    """Mean score and answer count for one interview type."""

    type: InterviewType
    avg_score: float
    count: int


class TypeShare(BaseModel):
    """Answer count for one interview type, for proportion displays."""

    type: InterviewType
    name: str
    value: int


class DifficultyShare(BaseModel):
    """Answer count for one difficulty level."""

    difficulty: Difficulty
    name: str
    count: int


class ScoreTrend(BaseModel):
    """Recent average against the window right before it."""

    recent_average: float
    previous_average: float
    delta: float
    label: str  # "+0.4" / "-1.2"

    @computed_field
    @property
    def is_up(self) -> bool:
        """Whether the dashboard shows the trend arrow pointing up."""
        return self.delta >= 0


class BehavioralInsight(BaseModel):
    """Short human-readable observation about a performance pattern."""

    type: InsightType
    title: str
    message: str


class NextBestAction(BaseModel):
    """The practice session a coaching suggestion points at."""

    label: str
    interview_type: InterviewType
    difficulty: Difficulty


class CoachingSuggestion(BaseModel):
    """Single highest-priority improvement recommendation."""

    improvement_area: str
    actionable_tip: str
    next_best_action: NextBestAction


class PerformanceSnapshot(BaseModel):
    """Headline numbers for the dashboard."""

    total_interviews: int
    average_score: float
    score_trend: ScoreTrend
    confidence: Confidence
    current_difficulty: Difficulty
    hesitation_rate: int = Field(..., ge=0, le=100)
    delivery_rate: int = Field(..., ge=0, le=100)


class LatestInterview(BaseModel):
    """The most recent record compared with the running average."""

    record: EvaluationRecord
    score_difference: float
    standing: str  # "above_average", "below_average", "on_par"
    score_band: str  # "excellent", "good", "fair", "needs_work"


class ChartSeries(BaseModel):
    """Series backing the dashboard charts."""

    score_by_date: list[DateBucket] = Field(default_factory=list)
    confidence_by_date: list[ConfidenceBucket] = Field(default_factory=list)
    type_distribution: list[TypeShare] = Field(default_factory=list)
    difficulty_distribution: list[DifficultyShare] = Field(default_factory=list)
    performance_by_type: list[TypePerformance] = Field(default_factory=list)


class AnalyticsReport(BaseModel):
    """Complete analytics dashboard for one user."""

    user_id: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    snapshot: PerformanceSnapshot
    latest: LatestInterview | None = None
    charts: ChartSeries
    insights: list[BehavioralInsight] = Field(default_factory=list)
    suggestion: CoachingSuggestion | None = None


class CoachingInput(BaseModel):
    """Payload sent to the coaching-feedback service."""

    last_five_scores: list[float] = Field(..., min_length=1)
    confidence_trend: list[Confidence] = Field(default_factory=list)
    hesitation_frequency: float = Field(..., ge=0, le=1)
    interview_type: InterviewType


class CoachingFeedback(BaseModel):
    """Narrative coaching feedback from the coaching-feedback service."""

    strength: str
    observation: str
    coaching_insight: str
    actionable_tip: str
