"""
Report Generator for PrepCoach

Generates the analytics dashboard for a user with:
- Performance snapshot
- Latest interview comparison
- Chart series
- Behavioral insights
- Coaching suggestion

Reports are cached per user and rebuilt whenever the user's record
history changes.
"""

import logging
from datetime import datetime
from typing import Sequence

from prepcoach.core import analytics_engine as analytics
from prepcoach.core.insight_generator import InsightGenerator
from prepcoach.core.record_store import RecordStore
from prepcoach.models.analytics import (
    AnalyticsReport,
    ChartSeries,
    CoachingInput,
    LatestInterview,
    PerformanceSnapshot,
)
from prepcoach.models.evaluation import EvaluationRecord

logger = logging.getLogger(__name__)

# Latest score within this distance of the average counts as on par
STANDING_BAND = 0.5
COACHING_WINDOW = 5


class ReportGenerator:
    """
    Builds analytics reports from a user's evaluation history.

    Every figure is recomputed from the records; only the finished report is
    cached, keyed on the store's per-user version.
    """

    def __init__(self, record_store: RecordStore, insight_generator: InsightGenerator | None = None):
        """
        Initialize report generator.

        Args:
            record_store: Source of evaluation records
            insight_generator: Rule-based insights and coaching suggestion
        """
        self.record_store = record_store
        self.insight_generator = insight_generator or InsightGenerator()
        self._cache: dict[str, tuple[int, AnalyticsReport]] = {}

    def generate(self, user_id: str) -> AnalyticsReport:
        """
        Generate the complete analytics report for a user.

        Args:
            user_id: User whose history is analysed

        Returns:
            AnalyticsReport (empty sections when the user has no records)
        """
        version = self.record_store.version(user_id)
        cached = self._cache.get(user_id)
        if cached and cached[0] == version:
            logger.debug(f"Analytics cache hit for user {user_id} (version {version})")
            return cached[1]

        records = self.record_store.list_for_user(user_id)
        report = AnalyticsReport(
            user_id=user_id,
            generated_at=datetime.utcnow(),
            snapshot=self.build_snapshot(records),
            latest=self.build_latest_interview(records),
            charts=self.build_charts(records),
            insights=self.insight_generator.behavioral_insights(records),
            suggestion=self.insight_generator.coaching_suggestion(records),
        )
        self._cache[user_id] = (version, report)

        logger.info(f"Generated analytics report for user {user_id} from {len(records)} records")
        return report

    # =========================================================================
    # SECTIONS
    # =========================================================================

    def build_snapshot(self, records: Sequence[EvaluationRecord]) -> PerformanceSnapshot:
        return PerformanceSnapshot(
            total_interviews=len(records),
            average_score=analytics.average_score(records),
            score_trend=analytics.score_trend(records),
            confidence=analytics.overall_confidence(records),
            current_difficulty=analytics.current_difficulty(records),
            hesitation_rate=analytics.hesitation_rate(records),
            delivery_rate=analytics.delivery_rate(records),
        )

    def build_latest_interview(self, records: Sequence[EvaluationRecord]) -> LatestInterview | None:
        """The most recent record compared against the user's average."""
        latest = analytics.most_recent(records, 1)
        if not latest:
            return None

        record = latest[0]
        difference = analytics.round_score(record.score - analytics.average_score(records))

        if difference > STANDING_BAND:
            standing = "above_average"
        elif difference < -STANDING_BAND:
            standing = "below_average"
        else:
            standing = "on_par"

        return LatestInterview(
            record=record,
            score_difference=difference,
            standing=standing,
            score_band=self._score_band(record.score),
        )

    def build_charts(self, records: Sequence[EvaluationRecord]) -> ChartSeries:
        return ChartSeries(
            score_by_date=analytics.group_by_date(records),
            confidence_by_date=analytics.group_confidence_by_date(records),
            type_distribution=analytics.type_distribution(records),
            difficulty_distribution=analytics.difficulty_distribution(records),
            performance_by_type=analytics.performance_by_type(records),
        )

    def build_coaching_input(self, records: Sequence[EvaluationRecord]) -> CoachingInput | None:
        """
        Coaching-service payload from the five most recent records.

        Scores and confidence levels are listed oldest first so the last
        entry is the latest answer.
        """
        recent = analytics.most_recent(records, COACHING_WINDOW)
        if not recent:
            return None

        chronological = list(reversed(recent))
        hesitations = sum(1 for r in chronological if r.hesitation)
        return CoachingInput(
            last_five_scores=[r.score for r in chronological],
            confidence_trend=[r.confidence for r in chronological],
            hesitation_frequency=hesitations / len(chronological),
            interview_type=recent[0].interview_type,
        )

    def _score_band(self, score: float) -> str:
        if score >= 8:
            return "excellent"
        elif score >= 6:
            return "good"
        elif score >= 4:
            return "fair"
        return "needs_work"
