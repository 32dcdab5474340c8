"""Generation of new feed facts through the AI completion service."""

import structlog
from pydantic import ValidationError as PydanticValidationError

from fynix.application.common.json_payload import extract_json_payload
from fynix.application.feed.schemas import FeedFactPayload
from fynix.application.learning.protocols.ai_completion_service import (
    AICompletionServiceProtocol,
)
from fynix.domain.feed.entities.feed_item import AIFeedItem

logger = structlog.get_logger(__name__)

DEFAULT_GRADE = "8"
DEFAULT_INTERESTS = "Wissenschaft, Kurioses"
FALLBACK_PROMPT_INTERESTS = "general knowledge, science, history, curiosities"
FACT_TEMPERATURE = 0.8


def build_feed_system_prompt(grade: str, interests: str, language: str) -> str:
    return f"""You are FYNIX, an 847 year old dragon with young-bro vibes.
You have seen everything but love dropping wild, little-known facts that still blow your mind after all these centuries.
Generate an extremely interesting, age-appropriate fact for someone in grade {grade}.
Interests: {interests or FALLBACK_PROMPT_INTERESTS}.
Return the answer as a JSON object with exactly this schema:
{{
  "category": "Category",
  "title": "Punchy title",
  "content": "The fact (max 3-4 sentences, told as if you witnessed it yourself)",
  "quiz": {{
    "type": "mc",
    "question": "Quiz question",
    "options": ["A", "B", "C", "D"],
    "correct": 0
  }}
}}
IMPORTANT: the language is "{language}". Be relaxed, wise and a little arrogant-cool. Use current youth slang (wild, tuff, no cap, 💀, 🔥)."""


class FeedFactGenerator:
    def __init__(self, ai_service: AICompletionServiceProtocol) -> None:
        self.ai_service = ai_service

    async def generate(
        self,
        grade: str = DEFAULT_GRADE,
        interests: str = DEFAULT_INTERESTS,
        language: str = "de",
    ) -> AIFeedItem | None:
        """
        Ask the AI for one new feed fact.

        Returns:
            The validated fact, or None when the AI failed or returned
            something that does not match the schema
        """
        response = await self.ai_service.complete_with_retry(
            f'Generate a little-known, exciting fact for my feed in language "{language}".',
            system_prompt=build_feed_system_prompt(grade, interests, language),
            temperature=FACT_TEMPERATURE,
        )
        if not response.success:
            logger.info("feed_fact_unavailable", error=response.error)
            return None

        payload = extract_json_payload(response.text)
        if payload is None:
            logger.warning("feed_fact_not_json")
            return None
        try:
            return FeedFactPayload.model_validate(payload).to_feed_item()
        except PydanticValidationError as e:
            logger.warning("feed_fact_invalid", errors=e.error_count())
            return None
