"""
Adaptive API endpoints

Exposes the difficulty/tone controller:
- Pure decision for one evaluated answer
- Decision plus a generated next question
"""

from fastapi import APIRouter

from prepcoach.api.dependencies import get_ai_reasoning
from prepcoach.core.adaptive_controller import decide_next_step
from prepcoach.models.adaptive import (
    AdaptiveDecision,
    AdaptiveRequest,
    AdaptiveResponse,
    QuestionRequest,
)

router = APIRouter()


@router.post("/decide", response_model=AdaptiveDecision)
async def decide(request: AdaptiveRequest) -> AdaptiveDecision:
    """Next difficulty and interviewer tone for one evaluated answer."""
    return decide_next_step(request.current_difficulty, request.answer_evaluation)


@router.post("/next-question", response_model=AdaptiveResponse)
async def next_question(request: AdaptiveRequest) -> AdaptiveResponse:
    """
    Decide the next difficulty and tone, then generate a matching question.

    Gateway failures surface as upstream errors; an empty model reply falls
    back to a fixed question for the chosen difficulty.
    """
    decision = decide_next_step(request.current_difficulty, request.answer_evaluation)

    question = await get_ai_reasoning().generate_next_question(
        QuestionRequest(
            interview_type=request.interview_type,
            current_difficulty=request.current_difficulty,
            next_difficulty=decision.next_difficulty,
            interviewer_tone=decision.interviewer_tone,
        )
    )

    return AdaptiveResponse(
        next_difficulty=decision.next_difficulty,
        interviewer_tone=decision.interviewer_tone,
        next_question=question,
    )
