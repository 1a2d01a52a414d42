"""
Evaluation API endpoints

Scores a single answer outside of an interview session.
"""

from fastapi import APIRouter

from prepcoach.api.dependencies import get_ai_reasoning
from prepcoach.models.evaluation import ScoringRequest, ScoringResult

router = APIRouter()


@router.post("/score", response_model=ScoringResult)
async def score_answer(request: ScoringRequest) -> ScoringResult:
    """Score one answer with the scoring service. Nothing is stored."""
    return await get_ai_reasoning().evaluate_answer(request)
