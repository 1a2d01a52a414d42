"""
Adaptive Controller for PrepCoach

Rule-based difficulty and tone selection for the next question. Pure
functions of the current difficulty and the evaluation of the answer just
given; no memory beyond the two inputs.
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from prepcoach.models.adaptive import AdaptiveDecision, AdaptiveState, InterviewerTone
from prepcoach.models.evaluation import AnswerEvaluation, Confidence, Difficulty

logger = logging.getLogger(__name__)

# Thresholds on the 1-10 score scale
STRUGGLING_SCORE = 4
STEP_UP_SCORE = 7
CHALLENGE_SCORE = 8


class InvalidEvaluationInput(Exception):
    """Raised when the controller receives an out-of-range score or bad enum value."""
    pass


# =========================================================================
# VALIDATION
# =========================================================================

def _coerce_difficulty(value: Any) -> Difficulty:
    try:
        return Difficulty(value)
    except ValueError as e:
        raise InvalidEvaluationInput(f"Invalid difficulty: {value!r}") from e


def _coerce_evaluation(value: AnswerEvaluation | BaseModel | Mapping[str, Any]) -> AnswerEvaluation:
    # Always re-validate so model_construct() instances cannot slip through
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if not isinstance(value, Mapping):
        raise InvalidEvaluationInput(f"Evaluation must be a mapping, got {type(value).__name__}")
    try:
        return AnswerEvaluation.model_validate(dict(value))
    except ValidationError as e:
        raise InvalidEvaluationInput(f"Invalid evaluation: {e}") from e


# =========================================================================
# RULES
# =========================================================================

def _is_struggling(evaluation: AnswerEvaluation) -> bool:
    return evaluation.hesitation or evaluation.score <= STRUGGLING_SCORE


def calculate_next_difficulty(
    current_difficulty: Difficulty | str,
    evaluation: AnswerEvaluation | Mapping[str, Any],
) -> Difficulty:
    """
    Step difficulty by at most one level.

    Hesitation or a score of 4 or less steps down (floor at easy). Otherwise
    high confidence with a score of 7 or more steps up (ceiling at hard).
    Anything else keeps the current difficulty.
    """
    current = _coerce_difficulty(current_difficulty)
    evaluation = _coerce_evaluation(evaluation)

    if _is_struggling(evaluation):
        return Difficulty.from_level(current.level - 1)

    if evaluation.confidence == Confidence.HIGH and evaluation.score >= STEP_UP_SCORE:
        return Difficulty.from_level(current.level + 1)

    return current


def calculate_interviewer_tone(
    next_difficulty: Difficulty | str,
    evaluation: AnswerEvaluation | Mapping[str, Any],
) -> InterviewerTone:
    """
    Pick the tone for the next question, given the difficulty it will be asked at.

    Struggling or low-confidence candidates get a supportive tone; high
    performers moving into hard questions get a challenging one.
    """
    next_difficulty = _coerce_difficulty(next_difficulty)
    evaluation = _coerce_evaluation(evaluation)

    if _is_struggling(evaluation) or evaluation.confidence == Confidence.LOW:
        return InterviewerTone.SUPPORTIVE

    if (
        next_difficulty == Difficulty.HARD and
        evaluation.confidence == Confidence.HIGH and
        evaluation.score >= CHALLENGE_SCORE
    ):
        return InterviewerTone.CHALLENGING

    return InterviewerTone.NEUTRAL


def decide_next_step(
    current_difficulty: Difficulty | str,
    evaluation: AnswerEvaluation | BaseModel | Mapping[str, Any],
) -> AdaptiveDecision:
    """
    Decide difficulty first, then tone conditioned on the new difficulty.

    Args:
        current_difficulty: Difficulty of the question just answered
        evaluation: Score/confidence/hesitation of that answer. Any model or
            mapping carrying those three fields is accepted.

    Returns:
        AdaptiveDecision with the next difficulty and interviewer tone

    Raises:
        InvalidEvaluationInput: If any input is out of range or malformed
    """
    current = _coerce_difficulty(current_difficulty)
    evaluation = _coerce_evaluation(evaluation)

    next_difficulty = calculate_next_difficulty(current, evaluation)
    tone = calculate_interviewer_tone(next_difficulty, evaluation)

    logger.info(
        f"Adaptive decision: {current.value} -> {next_difficulty.value}, tone={tone.value} "
        f"(score={evaluation.score}, confidence={evaluation.confidence.value}, "
        f"hesitation={evaluation.hesitation})"
    )
    return AdaptiveDecision(next_difficulty=next_difficulty, interviewer_tone=tone)


def advance_state(
    state: AdaptiveState,
    evaluation: AnswerEvaluation | BaseModel | Mapping[str, Any],
) -> tuple[AdaptiveState, AdaptiveDecision]:
    """
    Apply one turn to a session's adaptive state.

    Returns a new state rather than mutating the given one, together with
    the decision that produced it.
    """
    evaluation = _coerce_evaluation(evaluation)
    decision = decide_next_step(state.current_difficulty, evaluation)
    new_state = AdaptiveState(
        current_difficulty=decision.next_difficulty,
        interviewer_tone=decision.interviewer_tone,
        last_evaluation=evaluation,
    )
    return new_state, decision
