"""Strategies that turn study material into a multiple choice quiz."""

import random
from dataclasses import dataclass

from fynix.application.common.json_payload import extract_json_payload
from fynix.application.common.result import Failure, Result, Success
from fynix.application.learning.protocols.ai_completion_service import (
    AICompletionServiceProtocol,
)
from fynix.application.learning.schemas import parse_quiz_items
from fynix.domain.app_state import LANGUAGE_NAMES
from fynix.domain.learning.entities.quiz_item import QuizItem
from fynix.domain.learning.services.local_quiz_builder import (
    MAX_QUIZ_ITEMS,
    build_local_material_quiz,
)

MAX_SOURCE_CHARS = 4000
MIN_AI_ITEMS = 2


@dataclass(frozen=True)
class MaterialQuizRequest:
    source_text: str
    language: str = "de"


def build_material_quiz_prompt(request: MaterialQuizRequest) -> str:
    language = LANGUAGE_NAMES.get(request.language, "German")
    return (
        f"Create exactly {MAX_QUIZ_ITEMS} multiple choice quiz questions in {language} from the "
        "following study material. Every question has 4 answer options, exactly one is correct. "
        "Reply ONLY with this JSON, nothing else:\n"
        '{"questions":[{"question":"Question?","answer":"correct answer",'
        '"options":["A","B","C","D"]}]}\n\n'
        f"Material:\n{request.source_text[:MAX_SOURCE_CHARS]}"
    )


class AIMaterialQuizStrategy:
    name = "ai"

    def __init__(self, ai_service: AICompletionServiceProtocol) -> None:
        self.ai_service = ai_service

    async def generate(self, request: MaterialQuizRequest) -> Result[list[QuizItem], str]:
        response = await self.ai_service.complete_with_retry(build_material_quiz_prompt(request))
        if not response.success:
            return Failure(response.error or "AI request failed")

        items = parse_quiz_items(
            extract_json_payload(response.text), require_options=True, limit=MAX_QUIZ_ITEMS
        )
        if len(items) < MIN_AI_ITEMS:
            return Failure(f"AI returned {len(items)} usable questions")
        return Success(items)


class LocalMaterialQuizStrategy:
    name = "local"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def generate(self, request: MaterialQuizRequest) -> Result[list[QuizItem], str]:
        items = build_local_material_quiz(request.source_text, self.rng)
        if not items:
            return Failure("Material has no sentences long enough to quiz")
        return Success(items)
