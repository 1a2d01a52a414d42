"""Tests for the difficulty/tone controller."""

import pytest

from prepcoach.core.adaptive_controller import (
    InvalidEvaluationInput,
    advance_state,
    calculate_interviewer_tone,
    calculate_next_difficulty,
    decide_next_step,
)
from prepcoach.models.adaptive import AdaptiveState, InterviewerTone
from prepcoach.models.evaluation import AnswerEvaluation, Confidence, Difficulty

EASY, MEDIUM, HARD = Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD


def evaluation(score=6, confidence="medium", hesitation=False) -> dict:
    return {"score": score, "confidence": confidence, "hesitation": hesitation}


# =========================================================================
# DIFFICULTY
# =========================================================================

@pytest.mark.parametrize("current,expected", [(EASY, EASY), (MEDIUM, EASY), (HARD, MEDIUM)])
@pytest.mark.parametrize("confidence", ["low", "medium", "high"])
def test_hesitation_steps_down_and_is_supportive(current, expected, confidence):
    decision = decide_next_step(current, evaluation(score=9, confidence=confidence, hesitation=True))

    assert decision.next_difficulty == expected
    assert decision.interviewer_tone == InterviewerTone.SUPPORTIVE


@pytest.mark.parametrize("score", [1, 2.5, 4])
@pytest.mark.parametrize("current,expected", [(EASY, EASY), (MEDIUM, EASY), (HARD, MEDIUM)])
def test_low_score_steps_down_even_with_high_confidence(current, expected, score):
    decision = decide_next_step(current, evaluation(score=score, confidence="high"))

    assert decision.next_difficulty == expected
    assert decision.interviewer_tone == InterviewerTone.SUPPORTIVE


@pytest.mark.parametrize("score", [7, 8.5, 10])
@pytest.mark.parametrize("current,expected", [(EASY, MEDIUM), (MEDIUM, HARD), (HARD, HARD)])
def test_confident_strong_answer_steps_up(current, expected, score):
    assert calculate_next_difficulty(current, evaluation(score=score, confidence="high")) == expected


@pytest.mark.parametrize("confidence", ["low", "medium"])
def test_strong_answer_without_high_confidence_holds(confidence):
    assert calculate_next_difficulty(MEDIUM, evaluation(score=9, confidence=confidence)) == MEDIUM


def test_score_just_above_struggling_holds():
    assert calculate_next_difficulty(MEDIUM, evaluation(score=4.5, confidence="high")) == MEDIUM


def test_difficulty_never_moves_more_than_one_level():
    for current in Difficulty:
        for score in (1, 4, 4.1, 6.9, 7, 8, 10):
            for confidence in Confidence:
                for hesitation in (True, False):
                    result = calculate_next_difficulty(
                        current, evaluation(score=score, confidence=confidence.value, hesitation=hesitation)
                    )
                    assert abs(result.level - current.level) <= 1


# =========================================================================
# TONE
# =========================================================================

def test_challenging_when_moving_into_hard_with_high_confidence():
    decision = decide_next_step(MEDIUM, evaluation(score=9, confidence="high"))

    assert decision.next_difficulty == HARD
    assert decision.interviewer_tone == InterviewerTone.CHALLENGING


def test_challenging_needs_score_of_eight():
    decision = decide_next_step(MEDIUM, evaluation(score=7.5, confidence="high"))

    assert decision.next_difficulty == HARD
    assert decision.interviewer_tone == InterviewerTone.NEUTRAL


def test_strong_answer_below_hard_is_neutral():
    decision = decide_next_step(EASY, evaluation(score=9, confidence="high"))

    assert decision.next_difficulty == MEDIUM
    assert decision.interviewer_tone == InterviewerTone.NEUTRAL


def test_low_confidence_is_supportive_without_changing_difficulty():
    decision = decide_next_step(MEDIUM, evaluation(score=6, confidence="low"))

    assert decision.next_difficulty == MEDIUM
    assert decision.interviewer_tone == InterviewerTone.SUPPORTIVE


def test_tone_uses_difficulty_it_is_given():
    assert calculate_interviewer_tone(HARD, evaluation(score=8, confidence="high")) == InterviewerTone.CHALLENGING
    assert calculate_interviewer_tone(MEDIUM, evaluation(score=8, confidence="high")) == InterviewerTone.NEUTRAL


# =========================================================================
# INPUTS
# =========================================================================

def test_accepts_records_and_string_difficulty(make_record):
    record = make_record(score=3, confidence="low", hesitation=True, difficulty="medium")

    decision = decide_next_step("medium", record)

    assert decision.next_difficulty == EASY
    assert decision.interviewer_tone == InterviewerTone.SUPPORTIVE


@pytest.mark.parametrize("bad", [
    evaluation(score=0),
    evaluation(score=11),
    evaluation(score="7"),
    evaluation(score=True),
    evaluation(confidence="extreme"),
    evaluation(hesitation="yes"),
    evaluation(hesitation=1),
    {"score": 7, "confidence": "high"},
    None,
    [7, "high", False],
])
def test_invalid_evaluation_is_rejected(bad):
    with pytest.raises(InvalidEvaluationInput):
        decide_next_step(MEDIUM, bad)


def test_invalid_difficulty_is_rejected():
    with pytest.raises(InvalidEvaluationInput):
        decide_next_step("impossible", evaluation())


def test_constructed_model_is_revalidated():
    sneaky = AnswerEvaluation.model_construct(score=42, confidence=Confidence.HIGH, hesitation=False)

    with pytest.raises(InvalidEvaluationInput):
        decide_next_step(MEDIUM, sneaky)


# =========================================================================
# STATE
# =========================================================================

def test_advance_state_returns_new_state():
    state = AdaptiveState(current_difficulty=MEDIUM)

    new_state, decision = advance_state(state, evaluation(score=9, confidence="high"))

    assert state.current_difficulty == MEDIUM
    assert state.last_evaluation is None
    assert new_state.current_difficulty == HARD == decision.next_difficulty
    assert new_state.interviewer_tone == InterviewerTone.CHALLENGING
    assert new_state.last_evaluation.score == 9


def test_adaptive_state_defaults():
    state = AdaptiveState()

    assert state.current_difficulty == EASY
    assert state.interviewer_tone == InterviewerTone.NEUTRAL
    assert state.last_evaluation is None
