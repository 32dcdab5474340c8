from typing import Protocol


class OCRServiceProtocol(Protocol):
    async def extract_text(self, image: bytes, lang: str | None = None) -> str: ...


class ImageCommentServiceProtocol(Protocol):
    async def comment(self, image: bytes, roast_level: int) -> str: ...
