"""
Core business logic modules for PrepCoach

Contains:
- Adaptive Controller: Next difficulty and interviewer tone
- Analytics Engine: Aggregates over a user's evaluation history
- Insight Generator: Behavioral insights and coaching suggestion
- AI Reasoning: Scoring, question generation and coaching feedback
- Evaluation Engine: Per-answer feedback and records
- Interview Orchestrator: State machine for interview lifecycle
- Record Store: Append-only evaluation history
- Report Generator: Analytics dashboard compilation
"""

from prepcoach.core.adaptive_controller import InvalidEvaluationInput, advance_state, decide_next_step
from prepcoach.core.ai_reasoning import AIReasoningLayer, UpstreamServiceError
from prepcoach.core.evaluation_engine import EvaluationEngine
from prepcoach.core.insight_generator import InsightGenerator
from prepcoach.core.interview_orchestrator import (
    InterviewOrchestrator,
    SessionNotFoundError,
    StateTransitionError,
)
from prepcoach.core.record_store import RecordStore
from prepcoach.core.report_generator import ReportGenerator

__all__ = [
    "InvalidEvaluationInput",
    "advance_state",
    "decide_next_step",
    "AIReasoningLayer",
    "UpstreamServiceError",
    "EvaluationEngine",
    "InsightGenerator",
    "InterviewOrchestrator",
    "SessionNotFoundError",
    "StateTransitionError",
    "RecordStore",
    "ReportGenerator",
]
