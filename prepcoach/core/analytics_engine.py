"""
Analytics Engine for PrepCoach

Descriptive statistics over a user's evaluation history. Every function is
pure and total: the empty history yields a neutral default, never an error.

Windowed computations always order records most-recent-first by
``created_at`` before slicing, so callers may pass records in any order.
"""

import math
from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from prepcoach.models.analytics import (
    AnswerLengthCategory,
    ConfidenceBucket,
    DateBucket,
    DifficultyShare,
    ScoreTrend,
    TypePerformance,
    TypeShare,
)
from prepcoach.models.evaluation import (
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
)

# Window sizes
DIFFICULTY_WINDOW = 5
TREND_WINDOW = 5

# Answer length thresholds (characters)
SHORT_ANSWER_LENGTH = 50
LONG_ANSWER_LENGTH = 300

# Majority-vote tie-break orders, highest priority first
CONFIDENCE_PRIORITY = (Confidence.HIGH, Confidence.LOW, Confidence.MEDIUM)
DIFFICULTY_PRIORITY = (Difficulty.HARD, Difficulty.MEDIUM, Difficulty.EASY)


# =========================================================================
# ROUNDING
# =========================================================================

def round_score(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def round_percent(value: float) -> int:
    """Round half up to a whole percentage."""
    return int(math.floor(value + 0.5))


# =========================================================================
# WINDOWS
# =========================================================================

def order_by_recency(records: Iterable[EvaluationRecord]) -> list[EvaluationRecord]:
    """Sort records most-recent-first. Records sharing a timestamp keep their order."""
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def window(records: Iterable[EvaluationRecord], start: int, stop: int) -> list[EvaluationRecord]:
    """Records at recency positions start..stop-1 (0 is the most recent)."""
    return order_by_recency(records)[start:stop]


def most_recent(records: Iterable[EvaluationRecord], count: int) -> list[EvaluationRecord]:
    """The ``count`` most recent records."""
    return window(records, 0, count)


def older_than(records: Iterable[EvaluationRecord], count: int) -> list[EvaluationRecord]:
    """Every record except the ``count`` most recent."""
    return order_by_recency(records)[count:]


# =========================================================================
# AGGREGATES
# =========================================================================

def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _majority(values: Iterable, priority: Sequence):
    """Most frequent value; on a tie the value listed first in ``priority`` wins."""
    counts = Counter(values)
    best = max(counts[candidate] for candidate in priority)
    return next(candidate for candidate in priority if counts[candidate] == best)


def average_score(records: Sequence[EvaluationRecord]) -> float:
    """Mean score rounded to one decimal. Empty history gives 0."""
    if not records:
        return 0.0
    return round_score(_mean([r.score for r in records]))


def overall_confidence(records: Sequence[EvaluationRecord]) -> Confidence:
    """Majority confidence across all records; ties resolve high > low > medium."""
    if not records:
        return Confidence.MEDIUM
    return _majority((r.confidence for r in records), CONFIDENCE_PRIORITY)


def current_difficulty(records: Sequence[EvaluationRecord]) -> Difficulty:
    """Majority difficulty over the 5 most recent records; ties resolve hard > medium > easy."""
    if not records:
        return Difficulty.EASY
    recent = most_recent(records, DIFFICULTY_WINDOW)
    return _majority((r.difficulty for r in recent), DIFFICULTY_PRIORITY)


def hesitation_rate(records: Sequence[EvaluationRecord]) -> int:
    """Percentage of records flagged with hesitation, as a whole number."""
    if not records:
        return 0
    hesitations = sum(1 for r in records if r.hesitation)
    return round_percent(hesitations / len(records) * 100)


def delivery_rate(records: Sequence[EvaluationRecord]) -> int:
    """Percentage of records delivered without hesitation."""
    return 100 - hesitation_rate(records)


def answer_length_category(records: Sequence[EvaluationRecord]) -> AnswerLengthCategory:
    """Classify the mean answer length."""
    if not records:
        return AnswerLengthCategory.IDEAL

    avg_length = _mean([r.answer_length for r in records])
    if avg_length < SHORT_ANSWER_LENGTH:
        return AnswerLengthCategory.TOO_SHORT
    if avg_length > LONG_ANSWER_LENGTH:
        return AnswerLengthCategory.TOO_LONG
    return AnswerLengthCategory.IDEAL


# =========================================================================
# GROUPING
# =========================================================================

def format_date_label(day: date) -> str:
    """Short month and unpadded day, e.g. "Jan 5"."""
    return f"{day:%b} {day.day}"


def _by_calendar_date(records: Iterable[EvaluationRecord]) -> dict[date, list[EvaluationRecord]]:
    grouped: dict[date, list[EvaluationRecord]] = {}
    for record in records:
        grouped.setdefault(record.created_at.date(), []).append(record)
    return dict(sorted(grouped.items()))


def group_by_date(records: Sequence[EvaluationRecord]) -> list[DateBucket]:
    """Mean score and count per calendar date, oldest date first."""
    return [
        DateBucket(
            date=format_date_label(day),
            score=round_score(_mean([r.score for r in bucket])),
            count=len(bucket),
        )
        for day, bucket in _by_calendar_date(records).items()
    ]


def group_confidence_by_date(records: Sequence[EvaluationRecord]) -> list[ConfidenceBucket]:
    """Confidence tally per calendar date, oldest date first."""
    buckets = []
    for day, bucket in _by_calendar_date(records).items():
        counts = Counter(r.confidence for r in bucket)
        buckets.append(ConfidenceBucket(
            date=format_date_label(day),
            low=counts[Confidence.LOW],
            medium=counts[Confidence.MEDIUM],
            high=counts[Confidence.HIGH],
        ))
    return buckets


def performance_by_type(records: Sequence[EvaluationRecord]) -> list[TypePerformance]:
    """Mean score and count per interview type; types without records are left out."""
    performance = []
    for interview_type in InterviewType:
        scores = [r.score for r in records if r.interview_type == interview_type]
        if scores:
            performance.append(TypePerformance(
                type=interview_type,
                avg_score=round_score(_mean(scores)),
                count=len(scores),
            ))
    return performance


def type_distribution(records: Sequence[EvaluationRecord]) -> list[TypeShare]:
    """Record count per interview type; types without records are left out."""
    counts = Counter(r.interview_type for r in records)
    return [
        TypeShare(type=t, name=t.display_text, value=counts[t])
        for t in InterviewType
        if counts[t] > 0
    ]


def difficulty_distribution(records: Sequence[EvaluationRecord]) -> list[DifficultyShare]:
    """Record count per difficulty; levels without records are left out."""
    counts = Counter(r.difficulty for r in records)
    return [
        DifficultyShare(difficulty=d, name=d.display_text, count=counts[d])
        for d in Difficulty
        if counts[d] > 0
    ]


# =========================================================================
# TRENDS
# =========================================================================

def score_trend(records: Sequence[EvaluationRecord]) -> ScoreTrend:
    """
    Compare the 5 most recent records with the 5 before them.

    Without older records the previous average equals the recent one, so
    the delta is 0.
    """
    recent = most_recent(records, TREND_WINDOW)
    previous = window(records, TREND_WINDOW, TREND_WINDOW * 2)

    recent_avg = average_score(recent)
    previous_avg = average_score(previous) if previous else recent_avg
    delta = round_score(recent_avg - previous_avg)

    return ScoreTrend(
        recent_average=recent_avg,
        previous_average=previous_avg,
        delta=delta,
        label=f"+{delta:.1f}" if delta >= 0 else f"{delta:.1f}",
    )
