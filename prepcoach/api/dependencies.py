"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

from prepcoach.core.ai_reasoning import AIReasoningLayer
from prepcoach.core.evaluation_engine import EvaluationEngine
from prepcoach.core.insight_generator import InsightGenerator
from prepcoach.core.interview_orchestrator import InterviewOrchestrator
from prepcoach.core.record_store import RecordStore
from prepcoach.core.report_generator import ReportGenerator


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_ai_reasoning: AIReasoningLayer | None = None
_record_store: RecordStore | None = None
_insight_generator: InsightGenerator | None = None
_evaluation_engine: EvaluationEngine | None = None
_report_generator: ReportGenerator | None = None
_orchestrator: InterviewOrchestrator | None = None


def get_ai_reasoning() -> AIReasoningLayer:
    """Get the AI reasoning layer singleton."""
    global _ai_reasoning

    if _ai_reasoning is None:
        _ai_reasoning = AIReasoningLayer()

    return _ai_reasoning


def get_record_store() -> RecordStore:
    """Get the record store singleton."""
    global _record_store

    if _record_store is None:
        _record_store = RecordStore()

    return _record_store


def get_insight_generator() -> InsightGenerator:
    """Get the insight generator singleton."""
    global _insight_generator

    if _insight_generator is None:
        _insight_generator = InsightGenerator()

    return _insight_generator


def get_evaluation_engine() -> EvaluationEngine:
    """Get the evaluation engine singleton."""
    global _evaluation_engine

    if _evaluation_engine is None:
        _evaluation_engine = EvaluationEngine(get_ai_reasoning())

    return _evaluation_engine


def get_report_generator() -> ReportGenerator:
    """Get the analytics report generator singleton."""
    global _report_generator

    if _report_generator is None:
        _report_generator = ReportGenerator(get_record_store(), get_insight_generator())

    return _report_generator


def get_orchestrator() -> InterviewOrchestrator:
    """
    Get the interview orchestrator singleton.

    Lazily initializes all required components.
    """
    global _orchestrator

    if _orchestrator is None:
        _orchestrator = InterviewOrchestrator(
            ai_reasoning=get_ai_reasoning(),
            evaluation_engine=get_evaluation_engine(),
            record_store=get_record_store(),
        )

    return _orchestrator


async def cleanup():
    """Cleanup resources on shutdown."""
    global _ai_reasoning, _record_store, _insight_generator
    global _evaluation_engine, _report_generator, _orchestrator

    if _ai_reasoning:
        await _ai_reasoning.close()

    _ai_reasoning = None
    _record_store = None
    _insight_generator = None
    _evaluation_engine = None
    _report_generator = None
    _orchestrator = None
