"""
Metadata API endpoints

Provides reference data for:
- Interview types
- Difficulty levels
- Interviewer tones
- Answer modes
"""

from fastapi import APIRouter
from pydantic import BaseModel

from prepcoach.models.adaptive import InterviewerTone
from prepcoach.models.evaluation import Difficulty, InterviewType
from prepcoach.models.interview import AnswerMode
from prepcoach.prompts.interviewer import InterviewerPrompts

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class InterviewTypeInfo(BaseModel):
    """Information about an interview type."""
    id: str
    name: str
    opening_question: str


class OptionInfo(BaseModel):
    """A selectable option with an optional description."""
    id: str
    name: str
    description: str = ""


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/interview-types")
async def get_interview_types() -> list[InterviewTypeInfo]:
    """Get all available interview types."""
    prompts = InterviewerPrompts()
    return [
        InterviewTypeInfo(
            id=interview_type.value,
            name=interview_type.display_text,
            opening_question=prompts.opening_question(interview_type),
        )
        for interview_type in InterviewType
    ]


@router.get("/difficulties")
async def get_difficulties() -> list[OptionInfo]:
    """Get difficulty levels, easiest first."""
    descriptions = {
        "easy": "Fundamentals and straightforward scenarios",
        "medium": "Situational questions needing specific examples",
        "hard": "Pressure scenarios and deep strategic thinking",
    }

    return [
        OptionInfo(
            id=difficulty.value,
            name=difficulty.display_text,
            description=descriptions.get(difficulty.value, ""),
        )
        for difficulty in Difficulty
    ]


@router.get("/tones")
async def get_tones() -> list[OptionInfo]:
    """Get all interviewer tones."""
    return [
        OptionInfo(
            id=tone.value,
            name=tone.value.capitalize(),
            description=tone.description,
        )
        for tone in InterviewerTone
    ]


@router.get("/answer-modes")
async def get_answer_modes() -> list[OptionInfo]:
    """Get all answer mode options."""
    descriptions = {
        "text": "Type each answer",
        "voice": "Speak each answer; the transcript is scored",
        "video": "Record each answer on camera; the transcript is scored",
    }

    return [
        OptionInfo(
            id=mode.value,
            name=mode.name.title(),
            description=descriptions.get(mode.value, ""),
        )
        for mode in AnswerMode
    ]
