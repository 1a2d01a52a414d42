"""
Interview API endpoints

Handles interview session lifecycle:
- Creating sessions
- Starting interviews
- Submitting answers
- Requesting the next question after a failed generation
- Ending interviews
"""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from prepcoach.api.dependencies import get_orchestrator
from prepcoach.config.settings import get_settings
from prepcoach.core.interview_orchestrator import SessionNotFoundError, StateTransitionError
from prepcoach.models.evaluation import AnswerFeedback, Difficulty, InterviewType
from prepcoach.models.interview import AnswerMode, InterviewSetup

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class SetupRequest(BaseModel):
    """Request model for interview setup."""
    user_id: str = Field(..., min_length=1)
    interview_type: InterviewType = InterviewType.BEHAVIORAL
    mode: AnswerMode = AnswerMode.TEXT
    starting_difficulty: Difficulty | None = None
    max_questions: int | None = Field(default=None, ge=1, le=15)


class SetupResponse(BaseModel):
    """Response model for interview setup."""
    session_id: str
    status: str
    message: str


class QuestionResponse(BaseModel):
    """A question delivered to the candidate, or the completion notice."""
    action: str  # "question", "complete", "retry"
    question_text: str | None = None
    question_number: int | None = None
    total_questions: int | None = None
    difficulty: str | None = None
    tone: str | None = None
    message: str | None = None
    questions_answered: int | None = None
    average_score: float | None = None


class StartResponse(BaseModel):
    """Response after starting interview."""
    session_id: str
    state: str
    first_question: QuestionResponse


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting an answer (typed text or a transcript)."""
    answer: str = Field(..., min_length=1)


class SubmitAnswerResponse(QuestionResponse):
    """Feedback for the submitted answer plus the next action."""
    feedback: AnswerFeedback
    record_id: str
    next_difficulty: str
    interviewer_tone: str
    error: str | None = None


class SessionStatusResponse(BaseModel):
    """Response for session status."""
    session_id: str
    user_id: str
    state: str
    interview_type: str
    mode: str
    questions_answered: int
    total_questions: int
    current_difficulty: str
    interviewer_tone: str
    current_question: str | None = None
    duration_seconds: float
    error_message: str | None = None


def _require_session(session_id: str):
    session = get_orchestrator().get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/setup", response_model=SetupResponse)
async def setup_interview(request: SetupRequest) -> SetupResponse:
    """
    Create a new interview session.

    This initializes the interview with user preferences
    but does not start the interview yet.
    """
    settings = get_settings()
    setup = InterviewSetup(
        user_id=request.user_id,
        interview_type=request.interview_type,
        mode=request.mode,
        starting_difficulty=request.starting_difficulty or settings.starting_difficulty,
        max_questions=request.max_questions or settings.max_questions,
    )

    session = await get_orchestrator().create_session(setup)

    return SetupResponse(
        session_id=session.session_id,
        status="created",
        message="Interview session created. Call /start to begin.",
    )


@router.post("/{session_id}/start", response_model=StartResponse)
async def start_interview(session_id: str) -> StartResponse:
    """
    Start the interview.

    This transitions the session to READY and delivers the opening question.
    """
    _require_session(session_id)

    try:
        result = await get_orchestrator().start_interview(session_id)
    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    session = _require_session(session_id)
    return StartResponse(
        session_id=session_id,
        state=session.state.value,
        first_question=QuestionResponse(**result),
    )


@router.post("/{session_id}/respond", response_model=SubmitAnswerResponse)
async def submit_answer(session_id: str, request: SubmitAnswerRequest) -> SubmitAnswerResponse:
    """
    Submit an answer to the current question.

    The answer is scored, stored in the user's history, and the next
    question is asked at the adapted difficulty and tone.

    If the next question cannot be generated, the feedback is still
    returned with action "retry"; call /next to ask again.
    """
    _require_session(session_id)

    try:
        result = await get_orchestrator().submit_answer(session_id, request.answer)
    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")

    return SubmitAnswerResponse(**result)


@router.post("/{session_id}/next", response_model=QuestionResponse)
async def next_question(session_id: str) -> QuestionResponse:
    """
    Ask the next question again after question generation failed.

    Only valid while the session is deciding.
    """
    _require_session(session_id)

    try:
        result = await get_orchestrator().ask_next_question(session_id)
    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")

    return QuestionResponse(**result)


@router.get("/{session_id}/status", response_model=SessionStatusResponse)
async def get_session_status(session_id: str) -> SessionStatusResponse:
    """Get the current status of an interview session."""
    session = _require_session(session_id)
    turn = session.get_current_turn()

    return SessionStatusResponse(
        session_id=session.session_id,
        user_id=session.user_id,
        state=session.state.value,
        interview_type=session.setup.interview_type.value,
        mode=session.setup.mode.value,
        questions_answered=session.questions_answered,
        total_questions=session.setup.max_questions,
        current_difficulty=session.adaptive.current_difficulty.value,
        interviewer_tone=session.adaptive.interviewer_tone.value,
        current_question=turn.question_text if turn and not turn.is_answered else None,
        duration_seconds=session.get_duration_seconds(),
        error_message=session.error_message,
    )


@router.post("/{session_id}/end")
async def end_interview(session_id: str) -> dict[str, Any]:
    """
    End the interview.

    Unfinished sessions are cancelled; the session is then discarded.
    Answers already scored stay in the user's history.
    """
    try:
        return await get_orchestrator().end_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
