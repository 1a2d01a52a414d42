"""
AI Reasoning Layer for PrepCoach

Handles all calls to the external AI gateway:
- Answer scoring
- Next question generation
- Coaching feedback

The gateway speaks the OpenAI-compatible chat-completions protocol. Failures
reaching it surface as UpstreamServiceError; nothing here retries.
"""

import json
import logging
import re

import httpx
from pydantic import ValidationError

from prepcoach.config.settings import Settings, get_settings
from prepcoach.models.adaptive import QuestionRequest
from prepcoach.models.analytics import CoachingFeedback, CoachingInput
from prepcoach.models.evaluation import Confidence, ScoringRequest, ScoringResult
from prepcoach.prompts.coach import CoachPrompts
from prepcoach.prompts.evaluator import EvaluatorPrompts
from prepcoach.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
CREDITS_EXHAUSTED_MESSAGE = "AI credits exhausted. Please add more credits."

FALLBACK_SCORING = {
    "score": 5,
    "confidence": Confidence.MEDIUM,
    "hesitation": False,
    "summary": "Unable to fully evaluate response. Please try again.",
}


class UpstreamServiceError(Exception):
    """Raised when the AI gateway is unreachable or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AIReasoningLayer:
    """
    Central client for the scoring, question-generation and coaching services.

    Model output that cannot be parsed falls back to safe defaults; transport
    and HTTP failures are raised to the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize AI reasoning layer with gateway configuration.

        Args:
            settings: Application settings (defaults to environment settings)
            client: HTTP client to use instead of building one
        """
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.ai_gateway_url.rstrip("/"),
            timeout=self.settings.request_timeout_seconds,
        )

        # Prompt templates
        self.interviewer_prompts = InterviewerPrompts()
        self.evaluator_prompts = EvaluatorPrompts()
        self.coach_prompts = CoachPrompts()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    # =========================================================================
    # GATEWAY CALLS
    # =========================================================================

    def _extract_content(self, result: dict) -> str:
        """Extract text content from API response, handling list/dict formats."""
        choices = result.get("choices") or [{}]
        content = choices[0].get("message", {}).get("content", "")

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        if content is None:
            return ""
        return content if isinstance(content, str) else str(content)

    async def _call_gateway(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int | None = None,
        purpose: str = "completion",
    ) -> str:
        """
        Send one chat-completion request.

        Returns:
            Model response text (may be empty)

        Raises:
            UpstreamServiceError: If the gateway is unreachable, misconfigured
                or answers with a non-2xx status
        """
        if not self.settings.ai_gateway_api_key:
            logger.error("AI gateway API key is not configured")
            raise UpstreamServiceError("AI gateway API key is not configured")

        payload = {
            "model": self.settings.ai_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        headers = {
            "Authorization": f"Bearer {self.settings.ai_gateway_api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self.client.post(
                self.settings.chat_completions_path,
                json=payload,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"AI gateway request failed ({purpose}): {e}")
            raise UpstreamServiceError(f"AI gateway unreachable: {e}") from e

        if response.status_code == 429:
            raise UpstreamServiceError(RATE_LIMIT_MESSAGE, status_code=429)
        if response.status_code == 402:
            raise UpstreamServiceError(CREDITS_EXHAUSTED_MESSAGE, status_code=402)
        if response.is_error:
            logger.error(f"AI gateway error ({purpose}): {response.status_code} {response.text}")
            raise UpstreamServiceError(
                f"AI gateway error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise UpstreamServiceError(
                "AI gateway returned a non-JSON response",
                status_code=response.status_code,
            ) from e

        logger.debug(f"AI gateway response received ({purpose})")
        return self._extract_content(result).strip()

    # =========================================================================
    # ANSWER SCORING
    # =========================================================================

    async def evaluate_answer(self, request: ScoringRequest) -> ScoringResult:
        """
        Score a candidate answer.

        Args:
            request: Interview type, question and answer

        Returns:
            ScoringResult; a neutral fallback if the model output is malformed

        Raises:
            UpstreamServiceError: If the gateway fails or returns no content
        """
        logger.info(
            f"Evaluating answer: type={request.interview_type.value}, "
            f"answer_length={len(request.candidate_answer)}"
        )

        content = await self._call_gateway(
            self.evaluator_prompts.generate_system_prompt(),
            self.evaluator_prompts.generate_evaluation_prompt(request),
            temperature=self.settings.scoring_temperature,
            max_tokens=self.settings.scoring_max_tokens,
            purpose="scoring",
        )
        if not content:
            logger.error("No content in scoring response")
            raise UpstreamServiceError("No content in AI response")

        result = self._parse_scoring_response(content)
        logger.info(
            f"Evaluation complete: score={result.score}, confidence={result.confidence.value}, "
            f"hesitation={result.hesitation}"
        )
        return result

    def _parse_scoring_response(self, content: str) -> ScoringResult:
        """Parse model output into a ScoringResult, falling back on bad output."""
        cleaned = re.sub(r"```(?:json)?\n?", "", content).strip()
        try:
            return ScoringResult.model_validate(json.loads(cleaned))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to parse scoring response: {e}")
            return ScoringResult(**FALLBACK_SCORING)

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    async def generate_next_question(self, request: QuestionRequest) -> str:
        """
        Generate the next question at the controller's difficulty and tone.

        Returns:
            Question text; a fixed question for the difficulty if the model
            returns nothing
        """
        content = await self._call_gateway(
            self.interviewer_prompts.generate_question_system_prompt(request),
            self.interviewer_prompts.generate_question_prompt(request),
            temperature=self.settings.question_temperature,
            max_tokens=self.settings.question_max_tokens,
            purpose="question",
        )

        if not content:
            logger.warning(f"No question in AI response, using {request.next_difficulty.value} fallback")
            return self.interviewer_prompts.fallback_question(request.next_difficulty)

        # Remove wrapping quotes
        question = re.sub(r"^[\"']|[\"']$", "", content).strip()
        return question or self.interviewer_prompts.fallback_question(request.next_difficulty)

    # =========================================================================
    # COACHING FEEDBACK
    # =========================================================================

    async def generate_coaching_feedback(self, data: CoachingInput) -> CoachingFeedback:
        """
        Generate narrative coaching feedback from recent performance.

        Returns:
            CoachingFeedback; rule-derived text if the model output is malformed
        """
        content = await self._call_gateway(
            self.coach_prompts.SYSTEM_CONTEXT,
            self.coach_prompts.generate_feedback_prompt(data),
            temperature=self.settings.coaching_temperature,
            purpose="coaching",
        )
        return self._parse_coaching_response(content, data)

    def _parse_coaching_response(self, content: str, data: CoachingInput) -> CoachingFeedback:
        match = re.search(r"\{[\s\S]*\}", content or "")
        if match:
            try:
                return CoachingFeedback.model_validate(json.loads(match.group(0)))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"Failed to parse coaching response: {e}")
        else:
            logger.warning("No JSON found in coaching response")

        return self._get_fallback_coaching(data)

    def _get_fallback_coaching(self, data: CoachingInput) -> CoachingFeedback:
        """Rule-derived coaching feedback when the model output is unusable."""
        scores = data.last_five_scores
        avg_score = sum(scores) / len(scores)
        change = self.coach_prompts.score_change(scores)

        return CoachingFeedback(
            strength=(
                "Consistent performance with strong scores" if avg_score >= 7
                else "Showing determination and willingness to practice"
            ),
            observation=(
                "Scores are trending upward across sessions" if change > 0
                else "Performance has room for growth with focused practice"
            ),
            coaching_insight=(
                "Hesitation patterns suggest more preparation on fundamentals would help"
                if data.hesitation_frequency > 0.5
                else "Confidence levels indicate solid foundational knowledge"
            ),
            actionable_tip=(
                "Before your next session, practice answering 3 questions out loud using the STAR method"
            ),
        )
