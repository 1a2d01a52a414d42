"""Tests for the interview session state machine."""

import asyncio

import pytest

from prepcoach.core.ai_reasoning import UpstreamServiceError
from prepcoach.core.evaluation_engine import EvaluationEngine
from prepcoach.core.interview_orchestrator import (
    InterviewOrchestrator,
    SessionNotFoundError,
    StateTransitionError,
)
from prepcoach.core.record_store import RecordStore
from prepcoach.models.adaptive import InterviewerTone
from prepcoach.models.evaluation import Difficulty, InterviewType
from prepcoach.models.interview import InterviewSetup, InterviewState

ANSWER = "I split the migration into three phases and measured error rates after each one."


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def orchestrator(ai_reasoning, store) -> InterviewOrchestrator:
    return InterviewOrchestrator(
        ai_reasoning=ai_reasoning,
        evaluation_engine=EvaluationEngine(ai_reasoning),
        record_store=store,
    )


def start_session(orchestrator, **setup) -> str:
    setup.setdefault("user_id", "user-1")
    session = asyncio.run(orchestrator.create_session(InterviewSetup(**setup)))
    asyncio.run(orchestrator.start_interview(session.session_id))
    return session.session_id


def test_create_session_seeds_adaptive_state(orchestrator):
    setup = InterviewSetup(user_id="user-1", starting_difficulty=Difficulty.MEDIUM)

    session = asyncio.run(orchestrator.create_session(setup))

    assert session.state == InterviewState.SETUP
    assert session.adaptive.current_difficulty == Difficulty.MEDIUM
    assert session.adaptive.interviewer_tone == InterviewerTone.NEUTRAL
    assert session.setup.max_questions == 5


def test_start_asks_opening_question(orchestrator, gateway):
    session = asyncio.run(orchestrator.create_session(
        InterviewSetup(user_id="user-1", interview_type=InterviewType.HR)
    ))

    result = asyncio.run(orchestrator.start_interview(session.session_id))

    assert result["action"] == "question"
    assert result["question_text"] == "Tell me about yourself and your background."
    assert result["question_number"] == 1
    assert result["difficulty"] == "easy"
    assert session.state == InterviewState.LISTENING
    assert session.started_at is not None
    assert gateway.requests == []


def test_answer_is_scored_recorded_and_adapted(orchestrator, store, gateway):
    session_id = start_session(orchestrator, interview_type=InterviewType.TECHNICAL)

    result = asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    session = orchestrator.get_session(session_id)
    records = store.list_for_user("user-1")
    assert result["action"] == "question"
    assert result["question_text"] == gateway.question
    assert result["next_difficulty"] == "medium"
    assert result["interviewer_tone"] == "neutral"
    assert result["feedback"]["strengths"] == [
        "Confident delivery",
        "Clear and direct response",
        "Strong content relevance",
        "Excellent structure",
    ]
    assert len(records) == 1
    assert records[0].difficulty == Difficulty.EASY
    assert records[0].interview_type == InterviewType.TECHNICAL
    assert records[0].answer_length == len(ANSWER)
    assert result["record_id"] == records[0].id
    assert session.state == InterviewState.LISTENING
    assert session.adaptive.current_difficulty == Difficulty.MEDIUM
    assert session.get_current_turn().difficulty == Difficulty.MEDIUM


def test_session_completes_after_max_questions(orchestrator, store):
    session_id = start_session(orchestrator, max_questions=2)

    asyncio.run(orchestrator.submit_answer(session_id, ANSWER))
    result = asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    session = orchestrator.get_session(session_id)
    assert result["action"] == "complete"
    assert result["questions_answered"] == 2
    assert result["average_score"] == 8.0
    assert session.state == InterviewState.COMPLETE
    assert session.completed_at is not None
    assert len(store.list_for_user("user-1")) == 2


def test_scoring_failure_returns_to_listening(orchestrator, store, gateway):
    session_id = start_session(orchestrator)
    gateway.status_code = 500

    with pytest.raises(UpstreamServiceError):
        asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    session = orchestrator.get_session(session_id)
    assert session.state == InterviewState.LISTENING
    assert session.error_message == "AI gateway error: 500"
    assert store.list_for_user("user-1") == []

    gateway.status_code = 200
    result = asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    assert result["action"] == "question"
    assert len(store.list_for_user("user-1")) == 1


def test_question_failure_keeps_feedback_and_leaves_session_deciding(orchestrator, store, gateway):
    session_id = start_session(orchestrator)
    gateway.question_status_code = 429

    result = asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    session = orchestrator.get_session(session_id)
    assert result["action"] == "retry"
    assert result["error"] == "Rate limit exceeded. Please try again later."
    assert result["feedback"]["score"] == 8
    assert result["record_id"] == store.list_for_user("user-1")[0].id
    assert session.state == InterviewState.DECIDING
    assert len(store.list_for_user("user-1")) == 1

    gateway.question_status_code = 200
    result = asyncio.run(orchestrator.ask_next_question(session_id))

    assert result["action"] == "question"
    assert result["question_number"] == 2
    assert session.state == InterviewState.LISTENING


def test_answer_outside_listening_is_rejected(orchestrator):
    session = asyncio.run(orchestrator.create_session(InterviewSetup(user_id="user-1")))

    with pytest.raises(StateTransitionError):
        asyncio.run(orchestrator.submit_answer(session.session_id, ANSWER))


def test_next_question_only_while_deciding(orchestrator):
    session_id = start_session(orchestrator)

    with pytest.raises(StateTransitionError):
        asyncio.run(orchestrator.ask_next_question(session_id))


def test_start_twice_is_rejected(orchestrator):
    session_id = start_session(orchestrator)

    with pytest.raises(StateTransitionError):
        asyncio.run(orchestrator.start_interview(session_id))


def test_end_session_cancels_and_discards(orchestrator, store):
    session_id = start_session(orchestrator)
    asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    result = asyncio.run(orchestrator.end_session(session_id))

    assert result["action"] == "ended"
    assert result["state"] == "cancelled"
    assert result["questions_answered"] == 1
    assert orchestrator.get_session(session_id) is None
    assert len(store.list_for_user("user-1")) == 1


def test_end_completed_session_keeps_complete_state(orchestrator):
    session_id = start_session(orchestrator, max_questions=1)
    asyncio.run(orchestrator.submit_answer(session_id, ANSWER))

    result = asyncio.run(orchestrator.end_session(session_id))

    assert result["state"] == "complete"


def test_unknown_session(orchestrator):
    with pytest.raises(SessionNotFoundError):
        asyncio.run(orchestrator.start_interview("missing"))


class StalledScoring(EvaluationEngine):
    """Holds the scoring call open until released."""

    def __init__(self, ai_reasoning):
        super().__init__(ai_reasoning)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def score_answer(self, *args):
        self.started.set()
        await self.release.wait()
        return await super().score_answer(*args)


@pytest.mark.parametrize("gateway_status", [200, 500])
def test_ending_session_while_scoring_drops_the_answer(ai_reasoning, store, gateway, gateway_status):
    engine = StalledScoring(ai_reasoning)
    orchestrator = InterviewOrchestrator(ai_reasoning=ai_reasoning, evaluation_engine=engine, record_store=store)
    session_id = start_session(orchestrator)

    async def end_mid_answer():
        pending = asyncio.create_task(orchestrator.submit_answer(session_id, ANSWER))
        await engine.started.wait()
        ended = await orchestrator.end_session(session_id)

        gateway.status_code = gateway_status
        engine.release.set()
        with pytest.raises(SessionNotFoundError):
            await pending
        return ended

    ended = asyncio.run(end_mid_answer())

    assert ended["state"] == "cancelled"
    assert orchestrator.get_session(session_id) is None
    assert store.list_for_user("user-1") == []


def test_ending_session_while_asking_drops_the_question(orchestrator, ai_reasoning, store, monkeypatch):
    session_id = start_session(orchestrator)
    started = asyncio.Event()
    release = asyncio.Event()
    generate = ai_reasoning.generate_next_question

    async def stalled_generate(request):
        started.set()
        await release.wait()
        return await generate(request)

    monkeypatch.setattr(ai_reasoning, "generate_next_question", stalled_generate)

    async def end_mid_question():
        pending = asyncio.create_task(orchestrator.submit_answer(session_id, ANSWER))
        await started.wait()
        await orchestrator.end_session(session_id)
        release.set()
        with pytest.raises(SessionNotFoundError):
            await pending

    asyncio.run(end_mid_question())

    # the answer was scored before the session ended, so its record stays
    assert len(store.list_for_user("user-1")) == 1
