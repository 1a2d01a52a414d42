"""
AI prompt templates for PrepCoach

Contains structured prompts for:
- Next question generation
- Answer scoring
- Coaching feedback
"""

from prepcoach.prompts.interviewer import InterviewerPrompts
from prepcoach.prompts.evaluator import EvaluatorPrompts
from prepcoach.prompts.coach import CoachPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
    "CoachPrompts",
]
