"""
Insight Generator for PrepCoach

Turns analytics engine output into:
- Up to three behavioral insights
- One prioritized coaching suggestion

Both are recomputed from the full history on every call.
"""

import logging
from typing import Sequence

from prepcoach.core import analytics_engine as analytics
from prepcoach.models.analytics import (
    AnswerLengthCategory,
    BehavioralInsight,
    CoachingSuggestion,
    InsightType,
    NextBestAction,
    TypePerformance,
)
from prepcoach.models.evaluation import (
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
)

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 3

# Hesitation insight
HESITATION_WINDOW = 5
HESITATION_IMPROVEMENT_POINTS = 10
HIGH_HESITATION_RATE = 50
LOW_HESITATION_RATE = 20

# Type gap insight
PERFORMANCE_GAP = 1.5

# Coaching suggestion
IMPROVEMENT_WINDOW = 3
COACHING_HESITATION_RATE = 40
FOUNDATIONAL_SCORE = 6
ADVANCING_SCORE = 7
ADVANCING_HESITATION_RATE = 30
WEAK_TYPE_MARGIN = 1


class InsightGenerator:
    """
    Rule-based coaching layer on top of the analytics engine.

    Stateless; holds no cache because histories are small and bounded by
    one user's practice sessions.
    """

    # =========================================================================
    # BEHAVIORAL INSIGHTS
    # =========================================================================

    def behavioral_insights(self, records: Sequence[EvaluationRecord]) -> list[BehavioralInsight]:
        """
        Generate at most three insights in fixed rule order.

        Args:
            records: Full evaluation history for one user

        Returns:
            Insights from the hesitation, answer length and type gap rules,
            or an empty list when there is no history
        """
        if not records:
            return []

        insights = []
        for rule in (self._hesitation_insight, self._answer_length_insight, self._performance_gap_insight):
            insight = rule(records)
            if insight:
                insights.append(insight)

        return insights[:MAX_INSIGHTS]

    def _hesitation_insight(self, records: Sequence[EvaluationRecord]) -> BehavioralInsight | None:
        overall_rate = analytics.hesitation_rate(records)
        recent_rate = analytics.hesitation_rate(analytics.most_recent(records, HESITATION_WINDOW))
        older = analytics.older_than(records, HESITATION_WINDOW)
        older_rate = analytics.hesitation_rate(older) if older else overall_rate

        if recent_rate < older_rate - HESITATION_IMPROVEMENT_POINTS:
            return BehavioralInsight(
                type=InsightType.SUCCESS,
                title="Hesitation Improving",
                message=(
                    f"Your hesitation dropped from {older_rate}% to {recent_rate}% in recent sessions. "
                    f"Your answers are becoming more confident."
                ),
            )
        if overall_rate > HIGH_HESITATION_RATE:
            return BehavioralInsight(
                type=InsightType.WARNING,
                title="High Hesitation Rate",
                message=(
                    f"You hesitated in {overall_rate}% of responses. "
                    f"Consider practicing common questions to build confidence."
                ),
            )
        if overall_rate < LOW_HESITATION_RATE:
            return BehavioralInsight(
                type=InsightType.SUCCESS,
                title="Strong Delivery",
                message=f"Only {overall_rate}% hesitation rate shows confident, well-prepared responses.",
            )
        return None

    def _answer_length_insight(self, records: Sequence[EvaluationRecord]) -> BehavioralInsight:
        category = analytics.answer_length_category(records)

        if category == AnswerLengthCategory.TOO_SHORT:
            return BehavioralInsight(
                type=InsightType.WARNING,
                title="Answers May Be Too Brief",
                message=(
                    "Your average answer length is below recommended. Try adding more context "
                    "and examples to strengthen your responses."
                ),
            )
        if category == AnswerLengthCategory.TOO_LONG:
            return BehavioralInsight(
                type=InsightType.INFO,
                title="Consider Conciseness",
                message=(
                    "Your answers tend to be lengthy. Practice summarizing key points to keep "
                    "responses focused and impactful."
                ),
            )
        return BehavioralInsight(
            type=InsightType.SUCCESS,
            title="Ideal Answer Length",
            message=(
                "Your responses have appropriate depth without being too verbose. "
                "Keep maintaining this balance."
            ),
        )

    def _performance_gap_insight(self, records: Sequence[EvaluationRecord]) -> BehavioralInsight | None:
        performance = analytics.performance_by_type(records)
        if len(performance) < 2:
            return None

        # Stable sort: the first type listed wins a tie for strongest, the last for weakest
        ranked = sorted(performance, key=lambda p: p.avg_score, reverse=True)
        strongest, weakest = ranked[0], ranked[-1]

        if strongest.avg_score - weakest.avg_score < PERFORMANCE_GAP:
            return None

        strong_label = strongest.type.display_text
        weak_label = weakest.type.display_text
        return BehavioralInsight(
            type=InsightType.INFO,
            title="Performance Gap Detected",
            message=(
                f"You excel in {strong_label} interviews ({strongest.avg_score}/10) but struggle "
                f"with {weak_label} ({weakest.avg_score}/10). Focus on {weak_label} practice."
            ),
        )

    # =========================================================================
    # COACHING SUGGESTION
    # =========================================================================

    def is_improving(self, records: Sequence[EvaluationRecord]) -> bool:
        """
        Whether the 3 most recent answers beat the 3 before them.

        With fewer than 4 records there is no previous window, so the recent
        mean is compared with the overall average instead.
        """
        recent_avg = analytics.average_score(analytics.most_recent(records, IMPROVEMENT_WINDOW))
        if len(records) > IMPROVEMENT_WINDOW:
            previous = analytics.window(records, IMPROVEMENT_WINDOW, IMPROVEMENT_WINDOW * 2)
            previous_avg = analytics.average_score(previous)
        else:
            previous_avg = analytics.average_score(records)
        return recent_avg > previous_avg

    def coaching_suggestion(self, records: Sequence[EvaluationRecord]) -> CoachingSuggestion | None:
        """
        Pick the single highest-priority recommendation.

        Args:
            records: Full evaluation history for one user

        Returns:
            CoachingSuggestion, or None when there is no history
        """
        if not records:
            return None

        avg_score = analytics.average_score(records)
        hesitation = analytics.hesitation_rate(records)
        difficulty = analytics.current_difficulty(records)
        confidence = analytics.overall_confidence(records)
        improving = self.is_improving(records)
        weakest = self._weakest_type(analytics.performance_by_type(records))

        if hesitation > COACHING_HESITATION_RATE:
            suggestion = self._response_confidence(difficulty)
        elif confidence == Confidence.LOW:
            suggestion = self._building_confidence()
        elif not improving and avg_score < FOUNDATIONAL_SCORE:
            suggestion = self._foundational_skills(weakest)
        elif improving and avg_score >= ADVANCING_SCORE and hesitation < ADVANCING_HESITATION_RATE:
            suggestion = self._advancing_difficulty(difficulty, weakest)
        elif weakest and weakest.avg_score < avg_score - WEAK_TYPE_MARGIN:
            suggestion = self._weak_type_focus(weakest, difficulty)
        else:
            suggestion = self._consistent_practice(difficulty)

        logger.debug(
            f"Coaching suggestion: {suggestion.improvement_area} "
            f"(avg={avg_score}, hesitation={hesitation}%, improving={improving})"
        )
        return suggestion

    def _weakest_type(self, performance: list[TypePerformance]) -> TypePerformance | None:
        # min() keeps the first of equal scores in hr, behavioral, technical order
        return min(performance, key=lambda p: p.avg_score) if performance else None

    def _response_confidence(self, difficulty: Difficulty) -> CoachingSuggestion:
        capped = Difficulty.MEDIUM if difficulty == Difficulty.HARD else difficulty
        return CoachingSuggestion(
            improvement_area="Response Confidence",
            actionable_tip=(
                "Practice the STAR method (Situation, Task, Action, Result) before answering. "
                "Take a 2-second pause to structure your thoughts instead of rushing into answers."
            ),
            next_best_action=NextBestAction(
                label=f"Practice {capped.display_text} Behavioral",
                interview_type=InterviewType.BEHAVIORAL,
                difficulty=capped,
            ),
        )

    def _building_confidence(self) -> CoachingSuggestion:
        return CoachingSuggestion(
            improvement_area="Building Confidence",
            actionable_tip=(
                "Record yourself answering questions and review them. Focus on maintaining "
                "steady pace and avoiding filler words like 'um' or 'like'."
            ),
            next_best_action=NextBestAction(
                label="Start with Easy HR Interview",
                interview_type=InterviewType.HR,
                difficulty=Difficulty.EASY,
            ),
        )

    def _foundational_skills(self, weakest: TypePerformance | None) -> CoachingSuggestion:
        return CoachingSuggestion(
            improvement_area="Foundational Skills",
            actionable_tip=(
                "Go back to basics: practice common questions in your weakest area. "
                "Quality repetition builds muscle memory for strong answers."
            ),
            next_best_action=NextBestAction(
                label=f"Retry {weakest.type.display_text} Interview" if weakest else "Start Easy Interview",
                interview_type=weakest.type if weakest else InterviewType.HR,
                difficulty=Difficulty.EASY,
            ),
        )

    def _advancing_difficulty(
        self,
        difficulty: Difficulty,
        weakest: TypePerformance | None
    ) -> CoachingSuggestion:
        next_difficulty = Difficulty.from_level(difficulty.level + 1)
        return CoachingSuggestion(
            improvement_area="Advancing Difficulty",
            actionable_tip=(
                "You're showing consistent improvement. Challenge yourself with harder "
                "questions to prepare for real-world pressure."
            ),
            next_best_action=NextBestAction(
                label=f"Move to {next_difficulty.display_text} Difficulty",
                interview_type=weakest.type if weakest else InterviewType.TECHNICAL,
                difficulty=next_difficulty,
            ),
        )

    def _weak_type_focus(self, weakest: TypePerformance, difficulty: Difficulty) -> CoachingSuggestion:
        label = weakest.type.display_text
        return CoachingSuggestion(
            improvement_area=f"{label} Interview Skills",
            actionable_tip=(
                f"Your {label.lower()} interview score ({weakest.avg_score}/10) is below your "
                f"average. Practice this type specifically to close the gap."
            ),
            next_best_action=NextBestAction(
                label=f"Practice {label} Interview",
                interview_type=weakest.type,
                difficulty=difficulty,
            ),
        )

    def _consistent_practice(self, difficulty: Difficulty) -> CoachingSuggestion:
        return CoachingSuggestion(
            improvement_area="Consistent Practice",
            actionable_tip=(
                "You're on track. Keep practicing regularly to maintain your edge. "
                "Try mixing different interview types to stay adaptable."
            ),
            next_best_action=NextBestAction(
                label="Continue Current Practice",
                interview_type=InterviewType.BEHAVIORAL,
                difficulty=difficulty,
            ),
        )
