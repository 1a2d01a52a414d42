"""
Analytics API endpoints

Handles:
- Full analytics dashboard
- Individual dashboard sections
- AI coaching feedback
"""

from fastapi import APIRouter, HTTPException

from prepcoach.api.dependencies import get_ai_reasoning, get_record_store, get_report_generator
from prepcoach.models.analytics import (
    AnalyticsReport,
    BehavioralInsight,
    ChartSeries,
    CoachingFeedback,
    CoachingSuggestion,
    PerformanceSnapshot,
)

router = APIRouter()


@router.get("/{user_id}", response_model=AnalyticsReport)
async def get_analytics(user_id: str) -> AnalyticsReport:
    """
    Get the full analytics dashboard for a user.

    A user without records gets zeroed figures and empty lists.
    """
    return get_report_generator().generate(user_id)


@router.get("/{user_id}/snapshot", response_model=PerformanceSnapshot)
async def get_snapshot(user_id: str) -> PerformanceSnapshot:
    """Headline performance numbers."""
    return get_report_generator().generate(user_id).snapshot


@router.get("/{user_id}/insights", response_model=list[BehavioralInsight])
async def get_insights(user_id: str) -> list[BehavioralInsight]:
    """Up to three behavioral insights."""
    return get_report_generator().generate(user_id).insights


@router.get("/{user_id}/suggestion", response_model=CoachingSuggestion | None)
async def get_suggestion(user_id: str) -> CoachingSuggestion | None:
    """The single highest-priority coaching suggestion, or null."""
    return get_report_generator().generate(user_id).suggestion


@router.get("/{user_id}/charts", response_model=ChartSeries)
async def get_charts(user_id: str) -> ChartSeries:
    """Series backing the dashboard charts."""
    return get_report_generator().generate(user_id).charts


@router.post("/{user_id}/coaching-feedback", response_model=CoachingFeedback)
async def get_coaching_feedback(user_id: str) -> CoachingFeedback:
    """
    Narrative coaching feedback from the five most recent answers.

    Requires at least one record.
    """
    records = get_record_store().list_for_user(user_id)
    coaching_input = get_report_generator().build_coaching_input(records)
    if coaching_input is None:
        raise HTTPException(status_code=404, detail="No interview records for user")

    return await get_ai_reasoning().generate_coaching_feedback(coaching_input)
