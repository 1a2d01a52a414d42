"""
AI Coaching Feedback Prompts

Contains the prompt for narrative coaching feedback built from a user's
last few scores, confidence levels and hesitation frequency.
"""

from prepcoach.models.analytics import CoachingInput
from prepcoach.models.evaluation import Confidence


class CoachPrompts:
    """
    Prompt templates for coaching feedback.

    The model sees only aggregate performance data, never answer text.
    """

    SYSTEM_CONTEXT = """You are a professional interview coach analyzing a candidate's recent interview performance.
Your role is to provide supportive, professional feedback that helps them improve.

CRITICAL RULES:
- Be specific and actionable, not generic
- No empty praise like "Great job!" or "You're doing well!"
- Focus on observable patterns in the data
- Provide one clear, specific tip they can practice immediately
- Keep each field to 1-2 sentences maximum
- Be encouraging but honest about areas needing work"""

    @staticmethod
    def score_change(scores: list[float]) -> float:
        """Last score minus first score of the window."""
        return scores[-1] - scores[0] if len(scores) >= 2 else 0.0

    def generate_feedback_prompt(self, data: CoachingInput) -> str:
        """Generate prompt for coaching feedback."""
        scores = data.last_five_scores
        avg_score = sum(scores) / len(scores)
        change = self.score_change(scores)
        trend = "improving" if change > 0 else "declining" if change < 0 else "stable"

        levels = [c.value for c in data.confidence_trend]
        high_count = sum(1 for c in data.confidence_trend if c == Confidence.HIGH)
        low_count = sum(1 for c in data.confidence_trend if c == Confidence.LOW)

        return f"""Analyze this {data.interview_type.prompt_text} performance and generate coaching feedback:

Performance Data:
- Last 5 scores: {scores} (scale 1-10)
- Average score: {avg_score:.1f}
- Score trend: {trend} ({change:+.1f})
- Confidence levels: {levels}
- High confidence answers: {high_count}/{len(levels)}
- Low confidence answers: {low_count}/{len(levels)}
- Hesitation frequency: {data.hesitation_frequency * 100:.0f}% of answers showed hesitation

Return ONLY valid JSON in this exact format:
{{
  "strength": "One specific strength observed from the data",
  "observation": "One key pattern or trend noticed in their performance",
  "coaching_insight": "A professional insight about what this pattern means",
  "actionable_tip": "One specific, practical action they can take before their next interview"
}}"""
