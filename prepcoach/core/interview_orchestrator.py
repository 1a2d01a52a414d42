"""
Interview Orchestrator - State machine for managing interview lifecycle.

This is the central coordinator for a practice interview session.
It manages state transitions, runs each answer through scoring, the
record store and the adaptive controller, and asks the next question.
"""

import logging
from datetime import datetime
from typing import Any

from prepcoach.core.adaptive_controller import advance_state
from prepcoach.core.ai_reasoning import UpstreamServiceError
from prepcoach.core.analytics_engine import round_score
from prepcoach.models.adaptive import AdaptiveState, QuestionRequest
from prepcoach.models.interview import (
    InterviewSession,
    InterviewSetup,
    InterviewState,
    InterviewTurn,
)
from prepcoach.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)


class StateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


class SessionNotFoundError(ValueError):
    """Raised when a session ID is unknown or already discarded."""
    pass


class InterviewOrchestrator:
    """
    Manages the interview lifecycle using a state machine pattern.

    States:
        SETUP → READY → ASKING → LISTENING → EVALUATING → DECIDING
                                                              ↓
                                                      (ASKING | COMPLETE)

    A failed scoring call returns the session to LISTENING so the answer can
    be resubmitted; a failed question-generation call returns it to DECIDING
    so the next question can be requested again.

    The orchestrator coordinates between:
    - Evaluation Engine (scoring, feedback, records)
    - AI Reasoning Layer (question generation)
    - Record Store (user history)
    """

    # Valid state transitions
    VALID_TRANSITIONS: dict[InterviewState, list[InterviewState]] = {
        InterviewState.SETUP: [InterviewState.READY, InterviewState.CANCELLED],
        InterviewState.READY: [InterviewState.ASKING, InterviewState.CANCELLED],
        InterviewState.ASKING: [InterviewState.LISTENING, InterviewState.DECIDING, InterviewState.CANCELLED],
        InterviewState.LISTENING: [InterviewState.EVALUATING, InterviewState.CANCELLED],
        InterviewState.EVALUATING: [InterviewState.DECIDING, InterviewState.LISTENING, InterviewState.CANCELLED],
        InterviewState.DECIDING: [InterviewState.ASKING, InterviewState.COMPLETE, InterviewState.CANCELLED],
        InterviewState.COMPLETE: [],  # Terminal state
        InterviewState.CANCELLED: [],  # Terminal state
    }

    def __init__(
        self,
        ai_reasoning: Any = None,  # AIReasoningLayer
        evaluation_engine: Any = None,  # EvaluationEngine
        record_store: Any = None,  # RecordStore
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            ai_reasoning: AI reasoning layer for question generation
            evaluation_engine: Answer scoring and record building
            record_store: Store receiving one record per scored answer
        """
        self.ai_reasoning = ai_reasoning
        self.evaluation_engine = evaluation_engine
        self.record_store = record_store
        self.interviewer_prompts = InterviewerPrompts()

        # Session storage (in-memory)
        self._sessions: dict[str, InterviewSession] = {}

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    async def create_session(self, setup: InterviewSetup) -> InterviewSession:
        """
        Create a new interview session from setup configuration.

        Args:
            setup: User's interview configuration

        Returns:
            New InterviewSession instance
        """
        session = InterviewSession(
            setup=setup,
            adaptive=AdaptiveState(current_difficulty=setup.starting_difficulty),
        )
        self._sessions[session.session_id] = session

        logger.info(
            f"Created interview session: {session.session_id} "
            f"(user={setup.user_id}, type={setup.interview_type.value})"
        )
        return session

    def get_session(self, session_id: str) -> InterviewSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> InterviewSession:
        session = self.get_session(session_id)
        if not session:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def _require_live_session(self, session_id: str) -> InterviewSession:
        """Re-check a session after a gateway call; an ended session drops the result."""
        session = self.get_session(session_id)
        if not session or session.state == InterviewState.CANCELLED:
            logger.warning(f"Session {session_id} ended while waiting on the AI gateway")
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    async def update_session(self, session: InterviewSession) -> None:
        """Update a session in storage."""
        self._sessions[session.session_id] = session

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    async def transition_state(
        self,
        session_id: str,
        new_state: InterviewState,
        error_message: str | None = None
    ) -> InterviewSession:
        """
        Transition a session to a new state.

        Args:
            session_id: Session ID
            new_state: Target state
            error_message: Reason recorded on the session, if any

        Returns:
            Updated session

        Raises:
            StateTransitionError: If transition is invalid
        """
        session = self.require_session(session_id)
        old_state = session.state

        valid_next_states = self.VALID_TRANSITIONS.get(old_state, [])
        if new_state not in valid_next_states:
            raise StateTransitionError(
                f"Invalid transition from {old_state.value} to {new_state.value}. "
                f"Valid transitions: {[s.value for s in valid_next_states]}"
            )

        session.state = new_state
        session.error_message = error_message

        if new_state == InterviewState.READY:
            session.started_at = datetime.utcnow()
        elif new_state in (InterviewState.COMPLETE, InterviewState.CANCELLED):
            session.completed_at = datetime.utcnow()

        await self.update_session(session)

        logger.info(f"Session {session_id}: {old_state.value} → {new_state.value}")
        return session

    # =========================================================================
    # INTERVIEW FLOW
    # =========================================================================

    async def start_interview(self, session_id: str) -> dict[str, Any]:
        """
        Start the interview - transition to READY and ask the opening question.

        Returns:
            First question data
        """
        session = self.require_session(session_id)
        await self.transition_state(session_id, InterviewState.READY)
        await self.transition_state(session_id, InterviewState.ASKING)

        turn = InterviewTurn(
            question_text=self.interviewer_prompts.opening_question(session.setup.interview_type),
            difficulty=session.adaptive.current_difficulty,
            tone=session.adaptive.interviewer_tone,
            asked_at=datetime.utcnow(),
        )
        session.add_turn(turn)
        await self.transition_state(session_id, InterviewState.LISTENING)

        return self._question_payload(session, turn)

    async def ask_next_question(self, session_id: str) -> dict[str, Any]:
        """
        Generate and deliver the next question, or complete the interview.

        Raises:
            StateTransitionError: If the session is not deciding
            UpstreamServiceError: If question generation fails; the session
                is left in DECIDING
            SessionNotFoundError: If the session was ended during generation
        """
        session = self.require_session(session_id)

        if session.state == InterviewState.DECIDING and session.should_end_interview():
            await self.transition_state(session_id, InterviewState.COMPLETE)
            return {"action": "complete", "message": "Interview complete", **self.session_summary(session)}

        await self.transition_state(session_id, InterviewState.ASKING)

        previous = session.get_current_turn()
        request = QuestionRequest(
            interview_type=session.setup.interview_type,
            current_difficulty=previous.difficulty if previous else session.adaptive.current_difficulty,
            next_difficulty=session.adaptive.current_difficulty,
            interviewer_tone=session.adaptive.interviewer_tone,
        )

        try:
            question_text = await self.ai_reasoning.generate_next_question(request)
        except UpstreamServiceError as e:
            logger.error(f"Question generation failed for session {session_id}: {e}")
            self._require_live_session(session_id)
            await self.transition_state(session_id, InterviewState.DECIDING, error_message=str(e))
            raise

        self._require_live_session(session_id)
        turn = InterviewTurn(
            question_text=question_text,
            difficulty=request.next_difficulty,
            tone=request.interviewer_tone,
            asked_at=datetime.utcnow(),
        )
        session.add_turn(turn)
        await self.transition_state(session_id, InterviewState.LISTENING)

        return self._question_payload(session, turn)

    async def submit_answer(self, session_id: str, answer: str) -> dict[str, Any]:
        """
        Process the candidate's answer to the current question.

        Scores the answer, stores its record, advances the adaptive state and
        then either asks the next question or completes the interview.

        If question generation fails after the answer is stored, the result
        carries ``action="retry"`` and the error, and the session stays in
        DECIDING.

        Returns:
            Feedback for the answer plus the next action

        Raises:
            StateTransitionError: If the session is not listening
            UpstreamServiceError: If scoring fails (session back to LISTENING)
            SessionNotFoundError: If the session was ended while a gateway
                call was in flight; nothing further is stored
        """
        session = self.require_session(session_id)
        await self.transition_state(session_id, InterviewState.EVALUATING)

        turn = session.get_current_turn()
        try:
            scoring = await self.evaluation_engine.score_answer(
                session.setup.interview_type,
                turn.question_text,
                answer,
            )
        except UpstreamServiceError as e:
            logger.error(f"Scoring failed for session {session_id}: {e}")
            self._require_live_session(session_id)
            await self.transition_state(session_id, InterviewState.LISTENING, error_message=str(e))
            raise

        self._require_live_session(session_id)
        record = self.evaluation_engine.build_record(
            user_id=session.user_id,
            interview_type=session.setup.interview_type,
            difficulty=turn.difficulty,
            question=turn.question_text,
            answer=answer,
            scoring=scoring,
        )
        self.record_store.append(record)

        turn.answer = answer
        turn.answered_at = datetime.utcnow()
        turn.scoring = scoring
        turn.feedback = self.evaluation_engine.build_feedback(scoring)
        turn.record_id = record.id

        await self.transition_state(session_id, InterviewState.DECIDING)
        session.adaptive, decision = advance_state(session.adaptive, scoring)
        await self.update_session(session)

        result = {
            "feedback": turn.feedback.model_dump(mode="json"),
            "record_id": record.id,
            "next_difficulty": decision.next_difficulty.value,
            "interviewer_tone": decision.interviewer_tone.value,
        }
        try:
            result.update(await self.ask_next_question(session_id))
        except UpstreamServiceError as e:
            # The answer is already stored; the next question is retried via /next
            result.update({
                "action": "retry",
                "message": "Answer scored, but the next question could not be generated. Request it again.",
                "error": str(e),
            })
        return result

    async def end_session(self, session_id: str) -> dict[str, Any]:
        """
        End the interview and discard the session.

        An unfinished session is cancelled first. Records already stored for
        answered questions are kept.
        """
        session = self.require_session(session_id)

        if session.state != InterviewState.COMPLETE:
            await self.transition_state(session_id, InterviewState.CANCELLED)

        summary = {
            "action": "ended",
            "state": session.state.value,
            **self.session_summary(session),
        }
        del self._sessions[session_id]
        logger.info(f"Discarded session {session_id}")
        return summary

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def session_summary(self, session: InterviewSession) -> dict[str, Any]:
        """Answered count, average score and duration of a session."""
        scores = [turn.scoring.score for turn in session.turns if turn.scoring]
        return {
            "questions_answered": len(scores),
            "average_score": round_score(sum(scores) / len(scores)) if scores else 0.0,
            "duration_seconds": session.get_duration_seconds(),
        }

    def _question_payload(self, session: InterviewSession, turn: InterviewTurn) -> dict[str, Any]:
        return {
            "action": "question",
            "question_text": turn.question_text,
            "question_number": len(session.turns),
            "total_questions": session.setup.max_questions,
            "difficulty": turn.difficulty.value,
            "tone": turn.tone.value,
        }
