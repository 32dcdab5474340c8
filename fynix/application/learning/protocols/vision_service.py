from typing import Protocol


class VisionServiceProtocol(Protocol):
    async def transcribe(self, prompt: str, images: list[bytes]) -> str: ...
