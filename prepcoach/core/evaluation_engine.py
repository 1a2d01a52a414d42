"""
Evaluation Engine for PrepCoach

Handles scoring and feedback generation for candidate answers.
Works in conjunction with the AI Reasoning Layer, which does the actual
scoring; this module turns a scoring result into per-answer feedback and
an evaluation record for the user's history.
"""

import logging
from typing import Any

from prepcoach.models.evaluation import (
    AnswerFeedback,
    Confidence,
    Difficulty,
    EvaluationRecord,
    InterviewType,
    ScoringRequest,
    ScoringResult,
)

logger = logging.getLogger(__name__)

STRONG_CONTENT_SCORE = 7
EXCELLENT_STRUCTURE_SCORE = 8
DIRECTNESS_SCORE = 6


class EvaluationEngine:
    """
    Central evaluation component for interview answers.

    Responsibilities:
    - Score individual answers via the scoring service
    - Generate per-answer strengths and improvements
    - Build the immutable evaluation record
    """

    def __init__(self, ai_reasoning: Any = None):
        """
        Initialize evaluation engine.

        Args:
            ai_reasoning: AI reasoning layer used for scoring
        """
        self.ai_reasoning = ai_reasoning

    # =========================================================================
    # ANSWER SCORING
    # =========================================================================

    async def score_answer(
        self,
        interview_type: InterviewType,
        question: str,
        answer: str,
    ) -> ScoringResult:
        """
        Score a single answer.

        Raises:
            UpstreamServiceError: If the scoring service fails
        """
        request = ScoringRequest(
            interview_type=interview_type,
            current_question=question,
            candidate_answer=answer,
        )
        return await self.ai_reasoning.evaluate_answer(request)

    # =========================================================================
    # FEEDBACK
    # =========================================================================

    def build_feedback(self, scoring: ScoringResult) -> AnswerFeedback:
        """Per-answer strengths and improvements derived from the scoring result."""
        strengths = []
        if scoring.confidence == Confidence.HIGH:
            strengths.append("Confident delivery")
        if not scoring.hesitation:
            strengths.append("Clear and direct response")
        if scoring.score >= STRONG_CONTENT_SCORE:
            strengths.append("Strong content relevance")
        if scoring.score >= EXCELLENT_STRUCTURE_SCORE:
            strengths.append("Excellent structure")
        if not strengths:
            strengths.append("Completed the response")

        improvements = []
        if scoring.confidence == Confidence.LOW:
            improvements.append("Build more confidence in delivery")
        if scoring.hesitation:
            improvements.append("Reduce filler words and hesitations")
        if scoring.score < STRONG_CONTENT_SCORE:
            improvements.append("Add more specific examples")
        if scoring.score < DIRECTNESS_SCORE:
            improvements.append("Focus on answering the question directly")
        if not improvements:
            improvements.append("Continue practicing")

        return AnswerFeedback(
            score=scoring.score,
            summary=scoring.summary,
            strengths=strengths,
            improvements=improvements,
        )

    # =========================================================================
    # RECORDS
    # =========================================================================

    def build_record(
        self,
        user_id: str,
        interview_type: InterviewType,
        difficulty: Difficulty,
        question: str,
        answer: str,
        scoring: ScoringResult,
    ) -> EvaluationRecord:
        """Create the evaluation record for one scored answer."""
        record = EvaluationRecord(
            user_id=user_id,
            score=scoring.score,
            confidence=scoring.confidence,
            hesitation=scoring.hesitation,
            interview_type=interview_type,
            difficulty=difficulty,
            answer_length=len(answer),
            question=question,
            summary=scoring.summary,
        )
        logger.debug(f"Built record {record.id} for user {user_id}")
        return record
