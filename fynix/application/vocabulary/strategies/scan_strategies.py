"""Strategies that read vocabulary pairs off a photographed page."""

from dataclasses import dataclass

from fynix.application.common.json_payload import extract_json_payload
from fynix.application.common.result import Failure, Result, Success
from fynix.application.learning.protocols.vision_service import VisionServiceProtocol
from fynix.application.vocabulary.protocols.ocr_service import OCRServiceProtocol
from fynix.application.vocabulary.schemas import parse_vocab_items
from fynix.domain.vocabulary.entities.vocab_list import VocabPair
from fynix.domain.vocabulary.services.vocab_parser import parse_vocab_pairs

SCAN_PROMPT = """Read every vocabulary pair in the image.
Rules:
1. Ignore headings, page numbers and logos.
2. Extract ONLY the term and its translation.
3. Return ONLY valid JSON: {"items":[{"term":"...","translation":"..."}]}.
4. If you are unsure about an entry, leave it out instead of guessing."""


@dataclass(frozen=True)
class VocabScanRequest:
    image: bytes


class VisionVocabScanStrategy:
    """Ask the vision model for JSON pairs; parse its raw text if the JSON is unusable."""

    name = "vision"

    def __init__(self, vision_service: VisionServiceProtocol) -> None:
        self.vision_service = vision_service

    async def generate(self, request: VocabScanRequest) -> Result[list[VocabPair], str]:
        raw = await self.vision_service.transcribe(SCAN_PROMPT, [request.image])
        pairs = parse_vocab_items(extract_json_payload(raw)) or parse_vocab_pairs(raw)
        if not pairs:
            return Failure("No vocabulary in the model reply")
        return Success(pairs)


class OCRVocabScanStrategy:
    name = "ocr"

    def __init__(self, ocr_service: OCRServiceProtocol) -> None:
        self.ocr_service = ocr_service

    async def generate(self, request: VocabScanRequest) -> Result[list[VocabPair], str]:
        text = await self.ocr_service.extract_text(request.image)
        pairs = parse_vocab_pairs(text)
        if not pairs:
            return Failure("No vocabulary text recognized")
        return Success(pairs)
