"""Tests for behavioral insights and the coaching suggestion."""

import pytest

from prepcoach.core.insight_generator import InsightGenerator
from prepcoach.models.analytics import InsightType
from prepcoach.models.evaluation import Difficulty, InterviewType


@pytest.fixture
def generator() -> InsightGenerator:
    return InsightGenerator()


def test_empty_history(generator):
    assert generator.behavioral_insights([]) == []
    assert generator.coaching_suggestion([]) is None


def test_performance_gap_between_alternating_types(generator, make_history):
    records = make_history([
        {"interview_type": "technical" if i % 2 == 0 else "hr", "score": 9 if i % 2 == 0 else 6}
        for i in range(10)
    ])

    insights = generator.behavioral_insights(records)

    gap = insights[-1]
    assert len(insights) == 3
    assert gap.type == InsightType.INFO
    assert gap.title == "Performance Gap Detected"
    assert gap.message == (
        "You excel in Technical interviews (9.0/10) but struggle with HR (6.0/10). "
        "Focus on HR practice."
    )


def test_no_gap_insight_below_threshold(generator, make_history):
    records = make_history([
        {"interview_type": "technical", "score": 7.5},
        {"interview_type": "hr", "score": 6.1},
    ])

    titles = [i.title for i in generator.behavioral_insights(records)]

    assert "Performance Gap Detected" not in titles


def test_insights_and_suggestion_are_bounded(generator, make_history):
    records = make_history([
        {
            "score": 3 + (i * 7) % 8,
            "confidence": ("low", "medium", "high")[i % 3],
            "hesitation": i % 4 == 0,
            "interview_type": ("hr", "behavioral", "technical")[i % 3],
            "difficulty": ("easy", "medium", "hard")[i % 3],
            "answer_length": 30 + i * 40,
        }
        for i in range(12)
    ])

    assert len(generator.behavioral_insights(records)) <= 3
    assert generator.coaching_suggestion(records) is not None


def test_strong_delivery_and_ideal_length(generator, make_history):
    records = make_history([{"answer_length": 150}] * 4)

    insights = generator.behavioral_insights(records)

    assert [i.title for i in insights] == ["Strong Delivery", "Ideal Answer Length"]
    assert insights[0].message == "Only 0% hesitation rate shows confident, well-prepared responses."


def test_hesitation_improving(generator, make_history):
    records = make_history([{"hesitation": False}] * 5 + [{"hesitation": True}] * 5)

    insight = generator.behavioral_insights(records)[0]

    assert insight.title == "Hesitation Improving"
    assert insight.type == InsightType.SUCCESS
    assert "dropped from 100% to 0%" in insight.message


def test_hesitation_drop_of_exactly_ten_points_is_not_improving(generator, make_history):
    # recent 1/5 = 20%, older 3/10 = 30%
    records = make_history(
        [{"hesitation": True}] + [{}] * 4
        + [{"hesitation": True}] * 3 + [{}] * 7
    )

    titles = [i.title for i in generator.behavioral_insights(records)]

    assert "Hesitation Improving" not in titles
    assert "High Hesitation Rate" not in titles
    assert "Strong Delivery" not in titles


def test_five_records_compare_against_overall_hesitation(generator, make_history):
    records = make_history([{}] * 5)

    assert generator.behavioral_insights(records)[0].title == "Strong Delivery"

    records = make_history([{}] * 5 + [{"hesitation": True}])

    assert generator.behavioral_insights(records)[0].title == "Hesitation Improving"


def test_high_hesitation_and_short_answers(generator, make_history):
    records = make_history([
        {"hesitation": True, "answer_length": 20},
        {"hesitation": True, "answer_length": 30},
        {"hesitation": False, "answer_length": 40},
    ])

    insights = generator.behavioral_insights(records)

    assert [i.title for i in insights] == ["High Hesitation Rate", "Answers May Be Too Brief"]
    assert insights[0].message.startswith("You hesitated in 67% of responses.")
    assert [i.type for i in insights] == [InsightType.WARNING, InsightType.WARNING]


def test_moderate_hesitation_gives_no_hesitation_insight(generator, make_history):
    records = make_history([{"hesitation": True}, {}, {}, {"answer_length": 400}])

    titles = [i.title for i in generator.behavioral_insights(records)]

    assert titles == ["Ideal Answer Length"]


# =========================================================================
# COACHING SUGGESTION
# =========================================================================

def test_response_confidence_caps_difficulty_at_medium(generator, make_history):
    records = make_history([
        {"hesitation": True, "difficulty": "hard"},
        {"hesitation": True, "difficulty": "hard"},
        {"hesitation": False, "difficulty": "hard"},
    ])

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "Response Confidence"
    assert suggestion.next_best_action.label == "Practice Medium Behavioral"
    assert suggestion.next_best_action.interview_type == InterviewType.BEHAVIORAL
    assert suggestion.next_best_action.difficulty == Difficulty.MEDIUM


def test_building_confidence(generator, make_history):
    records = make_history([{"confidence": "low", "score": 6}] * 3)

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "Building Confidence"
    assert suggestion.next_best_action.label == "Start with Easy HR Interview"
    assert suggestion.next_best_action.interview_type == InterviewType.HR
    assert suggestion.next_best_action.difficulty == Difficulty.EASY


def test_foundational_skills(generator, make_history):
    records = make_history([{"score": s} for s in (4, 4, 4, 5, 5, 5)])

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "Foundational Skills"
    assert suggestion.next_best_action.label == "Retry Behavioral Interview"
    assert suggestion.next_best_action.interview_type == InterviewType.BEHAVIORAL
    assert suggestion.next_best_action.difficulty == Difficulty.EASY


def test_advancing_difficulty(generator, make_history):
    records = make_history([
        {"score": s, "confidence": "high", "interview_type": "technical"}
        for s in (9, 9, 9, 7, 7, 7)
    ])

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "Advancing Difficulty"
    assert suggestion.next_best_action.label == "Move to Hard Difficulty"
    assert suggestion.next_best_action.interview_type == InterviewType.TECHNICAL
    assert suggestion.next_best_action.difficulty == Difficulty.HARD


def test_weak_type_focus(generator, make_history):
    records = make_history([
        {"interview_type": t, "score": s}
        for t, s in [("technical", 9), ("hr", 5), ("technical", 9), ("technical", 9), ("hr", 5), ("technical", 9)]
    ])

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "HR Interview Skills"
    assert suggestion.next_best_action.label == "Practice HR Interview"
    assert suggestion.next_best_action.interview_type == InterviewType.HR
    assert suggestion.next_best_action.difficulty == Difficulty.MEDIUM
    assert "(5.0/10)" in suggestion.actionable_tip


def test_consistent_practice(generator, make_history):
    records = make_history([{"score": 7}] * 4)

    suggestion = generator.coaching_suggestion(records)

    assert suggestion.improvement_area == "Consistent Practice"
    assert suggestion.next_best_action.label == "Continue Current Practice"
    assert suggestion.next_best_action.interview_type == InterviewType.BEHAVIORAL


def test_is_improving(generator, make_history):
    assert generator.is_improving(make_history([{"score": s} for s in (8, 8, 8, 6, 6, 6)]))
    assert not generator.is_improving(make_history([{"score": s} for s in (6, 6, 6, 8, 8, 8)]))
    # Fewer than four records compares against the overall average
    assert not generator.is_improving(make_history([{"score": s} for s in (8, 6, 4)]))
