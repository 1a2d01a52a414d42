"""Shared fixtures: record factory, fake AI gateway and API client."""

import json
from datetime import datetime, timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from prepcoach.config.settings import Settings
from prepcoach.core.ai_reasoning import AIReasoningLayer
from prepcoach.models.evaluation import EvaluationRecord

BASE_TIME = datetime(2026, 1, 5, 12, 0, 0)


@pytest.fixture
def make_record():
    """
    Build EvaluationRecords. ``minutes_ago`` orders them in time; a larger
    value means an older record.
    """

    def _make(
        score=7,
        confidence="medium",
        hesitation=False,
        interview_type="behavioral",
        difficulty="medium",
        answer_length=120,
        minutes_ago=0,
        user_id="user-1",
        created_at=None,
    ) -> EvaluationRecord:
        return EvaluationRecord(
            user_id=user_id,
            score=score,
            confidence=confidence,
            hesitation=hesitation,
            interview_type=interview_type,
            difficulty=difficulty,
            answer_length=answer_length,
            created_at=created_at or BASE_TIME - timedelta(minutes=minutes_ago),
        )

    return _make


@pytest.fixture
def make_history(make_record):
    """Records from a list of keyword dicts, most recent first."""

    def _make(rows: list[dict]) -> list[EvaluationRecord]:
        return [make_record(minutes_ago=i, **fields) for i, fields in enumerate(rows)]

    return _make


class FakeGateway:
    """
    Stands in for the chat-completions endpoint.

    Routes on the system prompt: scoring, coaching or question generation.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.payloads: list[dict] = []
        self.scoring: dict | str = {
            "score": 8,
            "confidence": "high",
            "hesitation": False,
            "summary": "Clear, specific answer with a concrete example.",
        }
        self.question = "How do you prioritise when two deadlines collide?"
        self.coaching: dict | str = {
            "strength": "Scores stay high across sessions",
            "observation": "Confidence has been rising",
            "coaching_insight": "Preparation is paying off",
            "actionable_tip": "Rehearse one leadership story tonight",
        }
        self.status_code = 200
        self.question_status_code = 200

    def kind(self, payload: dict) -> str:
        system = payload["messages"][0]["content"]
        if "interview evaluator" in system:
            return "scoring"
        if "interview coach" in system:
            return "coaching"
        return "question"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(request)
        self.payloads.append(payload)
        kind = self.kind(payload)

        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "gateway failure"})
        if kind == "question" and self.question_status_code != 200:
            return httpx.Response(self.question_status_code, json={"error": "gateway failure"})

        content = {"scoring": self.scoring, "coaching": self.coaching, "question": self.question}[kind]
        if isinstance(content, dict):
            content = json.dumps(content)
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def settings() -> Settings:
    return Settings(ai_gateway_api_key="test-key", ai_gateway_url="https://gateway.test/v1")


@pytest.fixture
def ai_reasoning(gateway, settings) -> AIReasoningLayer:
    client = httpx.AsyncClient(
        base_url=settings.ai_gateway_url,
        transport=httpx.MockTransport(gateway),
    )
    return AIReasoningLayer(settings=settings, client=client)


def _reset_dependencies():
    from prepcoach.api import dependencies

    dependencies._ai_reasoning = None
    dependencies._record_store = None
    dependencies._insight_generator = None
    dependencies._evaluation_engine = None
    dependencies._report_generator = None
    dependencies._orchestrator = None


@pytest.fixture
def api_client(ai_reasoning):
    """TestClient whose singletons talk to the fake gateway."""
    from prepcoach.api import dependencies
    import main

    _reset_dependencies()
    dependencies._ai_reasoning = ai_reasoning

    yield TestClient(main.app)

    _reset_dependencies()
