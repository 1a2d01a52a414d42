"""
Records API endpoints

Handles:
- Storing an evaluation record for a user
- Listing a user's records, most recent first
"""

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field, StrictBool, field_validator

from prepcoach.api.dependencies import get_record_store
from prepcoach.models.evaluation import (
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
    require_number,
)

router = APIRouter()


class RecordCreateRequest(BaseModel):
    """An answer scored outside of a session, to be added to the history."""
    score: float = Field(..., ge=1, le=10)
    confidence: Confidence
    hesitation: StrictBool
    interview_type: InterviewType
    difficulty: Difficulty
    answer_length: int = Field(..., ge=0)
    question: str | None = None
    summary: str | None = None

    _score_must_be_numeric = field_validator("score", mode="before")(require_number)


@router.post("/{user_id}", response_model=EvaluationRecord, status_code=201)
async def create_record(user_id: str, request: RecordCreateRequest) -> EvaluationRecord:
    """Append a record to the user's history."""
    record = EvaluationRecord(user_id=user_id, **request.model_dump())
    return get_record_store().append(record)


@router.get("/{user_id}", response_model=list[EvaluationRecord])
async def list_records(
    user_id: str,
    limit: int | None = Query(default=None, ge=0, description="Most recent N records"),
) -> list[EvaluationRecord]:
    """List a user's records, most recent first."""
    store = get_record_store()
    if limit is None:
        return store.list_for_user(user_id)
    return store.recent_for_user(user_id, limit)
