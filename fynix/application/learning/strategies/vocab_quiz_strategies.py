"""Strategies that turn a vocabulary list into a quiz."""

import random
from dataclasses import dataclass

from fynix.application.common.json_payload import extract_json_payload
from fynix.application.common.result import Failure, Result, Success
from fynix.application.learning.protocols.ai_completion_service import (
    AICompletionServiceProtocol,
)
from fynix.application.learning.schemas import parse_quiz_items
from fynix.domain.learning.entities.quiz_item import QuizDirection, QuizItem, QuizMode
from fynix.domain.learning.services.local_quiz_builder import build_local_vocab_quiz
from fynix.domain.vocabulary.entities.vocab_list import VocabPair

MIN_AI_ITEMS = 2


@dataclass(frozen=True)
class VocabQuizRequest:
    entries: tuple[VocabPair, ...]
    source_lang: str
    target_lang: str
    mode: QuizMode
    direction: QuizDirection

    def direction_label(self) -> str:
        if self.direction == QuizDirection.MIXED:
            return "mixed"
        if self.direction == QuizDirection.SOURCE_TARGET:
            return f"{self.source_lang} → {self.target_lang}"
        return f"{self.target_lang} → {self.source_lang}"


def build_vocab_quiz_prompt(request: VocabQuizRequest) -> str:
    mode_text = "multiple choice" if request.mode == QuizMode.MULTIPLE_CHOICE else "free input"
    words = "\n".join(f"{entry.term} - {entry.translation}" for entry in request.entries)
    return (
        f"Create a short vocabulary quiz ({mode_text}, direction: {request.direction_label()}). "
        'Reply only with JSON in the format {"questions":[{"question":"...","answer":"...",'
        '"options":["..."]}]}. Use these words:\n'
        f"{words}"
    )


class AIVocabQuizStrategy:
    name = "ai"

    def __init__(self, ai_service: AICompletionServiceProtocol) -> None:
        self.ai_service = ai_service

    async def generate(self, request: VocabQuizRequest) -> Result[list[QuizItem], str]:
        response = await self.ai_service.complete_with_retry(build_vocab_quiz_prompt(request))
        if not response.success:
            return Failure(response.error or "AI request failed")

        items = parse_quiz_items(
            extract_json_payload(response.text),
            require_options=request.mode == QuizMode.MULTIPLE_CHOICE,
        )
        if len(items) < MIN_AI_ITEMS:
            return Failure(f"AI returned {len(items)} usable questions")
        return Success(items)


class LocalVocabQuizStrategy:
    name = "local"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def generate(self, request: VocabQuizRequest) -> Result[list[QuizItem], str]:
        items = build_local_vocab_quiz(
            request.entries,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            mode=request.mode,
            direction=request.direction,
            rng=self.rng,
        )
        if not items:
            return Failure("No vocabulary to quiz")
        return Success(items)
