"""Short comments on quiz answers in the mascot's voice."""

import random

import structlog

from fynix.application.learning.protocols.ai_completion_service import (
    AICompletionServiceProtocol,
)
from fynix.domain.app_state import LANGUAGE_NAMES
from fynix.domain.gamification.services.mascot import roast_tier
from fynix.domain.learning.services.feedback_lines import fallback_quiz_comment, vocab_feedback

logger = structlog.get_logger(__name__)

ROAST_STYLES = {
    "mild": "kind and supportive",
    "medium": "casual and slightly sarcastic",
    "hard": "extremely cheeky, arrogant and condescending (ROAST)",
}

FEEDBACK_TEMPERATURE = 0.8


def build_feedback_system_prompt(
    correct_answer: str, user_answer: str, is_correct: bool, roast_level: int, language: str
) -> str:
    verdict = "CORRECT" if is_correct else "WRONG"
    return (
        "You are FYNIX, an 847 year old dragon with young-bro vibes.\n"
        "You comment on a student's answer to a quiz question.\n"
        f"The answer was {verdict}.\n"
        f'The correct answer would have been: "{correct_answer}".\n'
        f'The user answered: "{user_answer}".\n'
        f"Your roast level is {roast_level}/5 ({ROAST_STYLES[roast_tier(roast_level)]}).\n"
        "Use current youth slang (wild, tuff, no cap, 💀, 🔥, Bruh, fr).\n"
        "Keep it EXTREMELY short (max. 15 words).\n"
        f"IMPORTANT: answer in {LANGUAGE_NAMES.get(language, 'German')}. Reply directly as Fynix."
    )


class QuizFeedbackService:
    def __init__(
        self, ai_service: AICompletionServiceProtocol, rng: random.Random | None = None
    ) -> None:
        self.ai_service = ai_service
        self.rng = rng or random.Random()

    async def comment(
        self,
        question: str,
        user_answer: str,
        correct_answer: str,
        is_correct: bool,
        roast_level: int = 3,
        language: str = "de",
    ) -> str:
        """
        Comment on an answer, falling back to a canned line when AI is unavailable.
        """
        prompt = (
            f'Question: "{question}"\n'
            f'User answer: "{user_answer}"\n'
            f'Correct answer: "{correct_answer}"\n'
            "Comment on it briefly in Fynix style."
        )
        response = await self.ai_service.complete_with_retry(
            prompt,
            system_prompt=build_feedback_system_prompt(
                correct_answer, user_answer, is_correct, roast_level, language
            ),
            temperature=FEEDBACK_TEMPERATURE,
        )
        if response.success and response.text.strip():
            return response.text.strip()

        logger.debug("quiz_feedback_fallback", error=response.error)
        return fallback_quiz_comment(is_correct, correct_answer)

    def vocab_comment(self, term: str, is_correct: bool, roast_level: int = 3) -> str:
        """Local per-word feedback for vocabulary answers."""
        return vocab_feedback(term, is_correct, roast_level, self.rng)
