"""Pydantic schemas for AI vocabulary transcription payloads."""

import re
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic import ValidationError as PydanticValidationError

from fynix.domain.vocabulary.entities.vocab_list import VocabPair

TERM_KEYS = ("term", "word", "vokabel")
TRANSLATION_KEYS = ("translation", "meaning", "übersetzung")
CONTAINER_KEYS = ("items", "vocab", "vokabeln")

_OCR_NOISE = re.compile(r"[%&$§]")


def _first_filled(data: dict[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = data.get(key)
        if value:
            return str(value).strip()
    return ""


class VocabItemPayload(BaseModel):
    term: str
    translation: str

    @model_validator(mode="before")
    @classmethod
    def resolve_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            "term": _first_filled(data, TERM_KEYS),
            "translation": _first_filled(data, TRANSLATION_KEYS),
        }

    @model_validator(mode="after")
    def reject_garbage(self) -> "VocabItemPayload":
        if not self.translation or len(self.term) <= 1:
            raise ValueError("term or translation missing")
        if _OCR_NOISE.search(self.term) and len(self.term) < 5:
            raise ValueError("term looks like OCR noise")
        return self


def parse_vocab_items(payload: Any) -> list[VocabPair]:
    """Vocabulary pairs from a list payload or one nested under a known key."""
    raw_items: Any = None
    if isinstance(payload, list):
        raw_items = payload
    elif isinstance(payload, dict):
        raw_items = next((payload[key] for key in CONTAINER_KEYS if payload.get(key)), None)
    if not isinstance(raw_items, list):
        return []

    pairs: list[VocabPair] = []
    for raw in raw_items:
        try:
            item = VocabItemPayload.model_validate(raw)
        except PydanticValidationError:
            continue
        pairs.append(VocabPair(term=item.term, translation=item.translation))
    return pairs
