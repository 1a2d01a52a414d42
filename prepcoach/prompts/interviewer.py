"""
AI Interviewer Prompt Templates

Contains structured prompts for generating the next interview question at a
given difficulty and tone, plus the fixed questions used when no model
output is available.
"""

from prepcoach.models.adaptive import InterviewerTone, QuestionRequest
from prepcoach.models.evaluation import Difficulty, InterviewType


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Key principles:
    - Exactly one question per call
    - Difficulty and tone come from the adaptive controller, never the model
    - No preamble, numbering or follow-up
    """

    DIFFICULTY_GUIDE = """- easy: Basic questions about fundamentals, simple scenarios, straightforward expectations
- medium: Situational questions requiring specific examples, moderate complexity
- hard: Complex behavioral questions, pressure scenarios, deep technical or strategic thinking"""

    # Opening question per interview type; later questions are generated
    OPENING_QUESTIONS: dict[InterviewType, str] = {
        InterviewType.HR: "Tell me about yourself and your background.",
        InterviewType.BEHAVIORAL: "Describe a challenging project you've worked on.",
        InterviewType.TECHNICAL: "Walk me through a technical problem you solved recently and how you approached it.",
    }

    # Used when the model returns no question text
    FALLBACK_QUESTIONS: dict[Difficulty, str] = {
        Difficulty.EASY: "What motivates you in your work?",
        Difficulty.MEDIUM: "Describe a time when you had to adapt to a significant change at work.",
        Difficulty.HARD: (
            "Tell me about a situation where you had to make a critical decision with "
            "incomplete information and significant consequences."
        ),
    }

    def _tone_guide(self) -> str:
        return "\n".join(f"- {tone.value}: {tone.description}" for tone in InterviewerTone)

    def generate_question_system_prompt(self, request: QuestionRequest) -> str:
        """System prompt pinning difficulty and tone for the next question."""
        interview = request.interview_type.prompt_text

        return f"""You are an expert interviewer conducting a {interview}.

YOUR TASK: Generate exactly ONE interview question.

DIFFICULTY LEVEL: {request.next_difficulty.value}
{self.DIFFICULTY_GUIDE}

INTERVIEWER TONE: {request.interviewer_tone.value}
{self._tone_guide()}

RULES:
1. Ask ONLY ONE question
2. Do NOT include any preamble, explanation, or follow-up
3. Do NOT number the question
4. Match the difficulty and tone exactly
5. Make the question relevant to {interview}
6. The question should be different from common basic questions like "tell me about yourself"

Respond with ONLY the question text, nothing else."""

    def generate_question_prompt(self, request: QuestionRequest) -> str:
        """User prompt for the next question."""
        direction = ""
        if request.next_difficulty != request.current_difficulty:
            moved = "up" if request.next_difficulty.level > request.current_difficulty.level else "down"
            direction = (
                f" The previous question was {request.current_difficulty.value}; "
                f"difficulty has moved {moved}."
            )

        return (
            f"Generate the next {request.next_difficulty.value} difficulty question with a "
            f"{request.interviewer_tone.value} tone for a {request.interview_type.prompt_text}."
            f"{direction}"
        )

    def opening_question(self, interview_type: InterviewType) -> str:
        return self.OPENING_QUESTIONS[interview_type]

    def fallback_question(self, difficulty: Difficulty) -> str:
        return self.FALLBACK_QUESTIONS[difficulty]
