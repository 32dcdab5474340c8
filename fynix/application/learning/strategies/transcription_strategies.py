"""Strategies that read the text on a photographed page."""

from dataclasses import dataclass

from fynix.application.common.result import Failure, Result, Success
from fynix.application.learning.protocols.vision_service import VisionServiceProtocol
from fynix.application.vocabulary.protocols.ocr_service import OCRServiceProtocol

TRANSCRIBE_PROMPT = (
    "Read the complete text in this image and reproduce it exactly. Only the text, nothing else."
)
MIN_TRANSCRIBED_CHARS = 20


@dataclass(frozen=True)
class ImageTextRequest:
    image: bytes


class VisionTranscriptionStrategy:
    name = "vision"

    def __init__(self, vision_service: VisionServiceProtocol) -> None:
        self.vision_service = vision_service

    async def generate(self, request: ImageTextRequest) -> Result[str, str]:
        text = (await self.vision_service.transcribe(TRANSCRIBE_PROMPT, [request.image])).strip()
        if len(text) < MIN_TRANSCRIBED_CHARS:
            return Failure("Too little text recognized")
        return Success(text)


class OCRTranscriptionStrategy:
    name = "ocr"

    def __init__(self, ocr_service: OCRServiceProtocol) -> None:
        self.ocr_service = ocr_service

    async def generate(self, request: ImageTextRequest) -> Result[str, str]:
        text = (await self.ocr_service.extract_text(request.image)).strip()
        if len(text) < MIN_TRANSCRIBED_CHARS:
            return Failure("Too little text recognized")
        return Success(text)
