"""Local OCR through Tesseract."""

import asyncio
from io import BytesIO

import pytesseract
import structlog
from PIL import Image

logger = structlog.get_logger(__name__)

DEFAULT_OCR_LANGUAGE = "deu+eng"
# Page segmentation mode 6: one uniform block of text, works well for word lists
TESSERACT_CONFIG = "--psm 6"


class TesseractOCRService:
    def __init__(self, default_language: str = DEFAULT_OCR_LANGUAGE) -> None:
        self.default_language = default_language

    async def extract_text(self, image: bytes, lang: str | None = None) -> str:
        """Recognize the text in an image. Runs Tesseract in a worker thread."""
        language = lang or self.default_language
        text = await asyncio.to_thread(self._recognize, image, language)
        logger.debug("ocr_text_extracted", language=language, chars=len(text))
        return text

    @staticmethod
    def _recognize(image: bytes, language: str) -> str:
        with Image.open(BytesIO(image)) as picture:
            return pytesseract.image_to_string(picture, lang=language, config=TESSERACT_CONFIG)
