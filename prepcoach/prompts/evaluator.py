"""
AI Evaluator Prompt Templates

Contains the prompt sent to the scoring service. The model returns a JSON
object with a 1-10 score, a confidence classification, a hesitation flag
and a one-line summary.
"""

from prepcoach.models.evaluation import ScoringRequest


class EvaluatorPrompts:
    """
    Prompt templates for AI evaluation of answers.

    Key principles:
    - Critical, specific assessment; no generic praise
    - Focus on relevance, clarity and confidence indicators
    - Strict JSON output
    """

    SYSTEM_CONTEXT = """You are an expert interview evaluator. Your job is to assess candidate responses with precision and critical analysis.

STRICT RULES:
1. DO NOT give generic praise like "great answer" or "well done"
2. DO NOT ask follow-up questions
3. Focus ONLY on: relevance to the question, clarity of expression, and confidence indicators
4. Be critical but fair - identify specific weaknesses
5. Detect hesitation markers: filler words (um, uh, like), vague language, circular reasoning, or lack of specifics
"""

    SCORING_RUBRIC = """
SCORING CRITERIA (1-10):
- 1-3: Poor - Off-topic, unclear, or fundamentally wrong
- 4-5: Below Average - Partially relevant but lacks depth or clarity
- 6-7: Average - Addresses the question adequately with minor issues
- 8-9: Good - Clear, relevant, and demonstrates competence
- 10: Excellent - Exceptional clarity, depth, and confidence

CONFIDENCE ASSESSMENT:
- "low": Answer shows uncertainty, vagueness, or lack of conviction
- "medium": Reasonably confident but could be stronger
- "high": Demonstrates clear conviction and authority

HESITATION DETECTION:
- true: Contains filler words, vague statements, or signs of uncertainty
- false: Direct, clear, and confident delivery
"""

    OUTPUT_SCHEMA = """You must respond with ONLY valid JSON matching this exact schema:
{
  "score": <number 1-10>,
  "confidence": "<low|medium|high>",
  "hesitation": <true|false>,
  "summary": "<one sentence explanation of the score, max 100 characters>"
}"""

    def generate_system_prompt(self) -> str:
        return f"{self.SYSTEM_CONTEXT}{self.SCORING_RUBRIC}\n{self.OUTPUT_SCHEMA}"

    def generate_evaluation_prompt(self, request: ScoringRequest) -> str:
        """Generate the user prompt for scoring one answer."""
        return f"""Interview Type: {request.interview_type.prompt_text}
Question: {request.current_question}
Candidate Answer: {request.candidate_answer}

Evaluate this response and return ONLY the JSON object."""
