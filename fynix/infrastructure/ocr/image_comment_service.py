"""Mascot comments on uploaded pictures, based on their size and brightness."""

import asyncio
import random
from io import BytesIO

import structlog
from PIL import Image, ImageStat, UnidentifiedImageError

from fynix.domain.gamification.services.mascot import roast_tier

logger = structlog.get_logger(__name__)

LARGE_AREA = 800 * 600
SMALL_AREA = 200 * 200
BRIGHT_THRESHOLD = 0.5
DARK_THRESHOLD = 0.25
ANALYSIS_SIZE = (200, 200)

IMAGE_LOADED = "Image loaded."
NO_TRAITS = "Image recognized. You can pull vocabulary out of it now."

# tier -> (bright, dark, large, small)
_COMMENTS: dict[str, tuple[str, str, str, str]] = {
    "mild": (
        "Bright picture. At least your camera is wide awake.",
        "Bruh, turn on a light. I can't see a thing.",
        "Big picture. Hopefully your brain is that big too.",
        "Smaller than my first scale. But it will do.",
    ),
    "medium": (
        "Brightness is fine. Now only you need to wake up.",
        "Dark as my old cave. Give me some light.",
        "Chunky picture. Let me take a look...",
        "Compact. Like your knowledge right now?",
    ),
    "hard": (
        "Good light. No more excuses for not studying.",
        "Pitch black. Are you kidding me? Lights on!",
        "Decent resolution. I can see every mistake, bro.",
        "Tiny picture. Scared I'll see too much?",
    ),
}


def image_traits(image: bytes) -> tuple[int, int, float]:
    """Width, height and mean brightness (0..1) of an encoded image."""
    with Image.open(BytesIO(image)) as picture:
        width, height = picture.size
        preview = picture.convert("L")
        preview.thumbnail(ANALYSIS_SIZE)
        brightness = ImageStat.Stat(preview).mean[0] / 255
    return width, height, brightness


class ImageCommentService:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def comment(self, image: bytes, roast_level: int) -> str:
        """Pick a remark for the picture. Decoding runs in a worker thread."""
        try:
            width, height, brightness = await asyncio.to_thread(image_traits, image)
        except (UnidentifiedImageError, OSError) as e:
            logger.info("image_analysis_failed", error=str(e))
            return IMAGE_LOADED

        bright, dark, large, small = _COMMENTS[roast_tier(roast_level)]
        area = width * height
        pool = [
            line
            for line, applies in (
                (bright, brightness > BRIGHT_THRESHOLD),
                (dark, brightness < DARK_THRESHOLD),
                (large, area > LARGE_AREA),
                (small, area < SMALL_AREA),
            )
            if applies
        ]
        return self.rng.choice(pool) if pool else NO_TRAITS
