"""Use case for importing vocabulary from a photo."""

from dataclasses import dataclass

import structlog

from fynix.application.common.fallback_pipeline import FallbackPipeline
from fynix.application.state.state_store import StateStore
from fynix.application.vocabulary.protocols.ocr_service import ImageCommentServiceProtocol
from fynix.application.vocabulary.strategies.scan_strategies import VocabScanRequest
from fynix.domain.identity.entities.user_profile import DEFAULT_ROAST_LEVEL
from fynix.domain.vocabulary.entities.vocab_list import VocabPair
from fynix.exceptions import VocabListNotFoundError

logger = structlog.get_logger(__name__)

NOTHING_RECOGNIZED = "No vocabulary text recognized. Try a clearer picture or add words manually."


@dataclass(frozen=True)
class VocabScanResult:
    added: int
    source: str | None
    comment: str
    message: str | None = None


class VocabScanUseCase:
    def __init__(
        self,
        store: StateStore,
        pipeline: FallbackPipeline[VocabScanRequest, list[VocabPair]],
        image_comment_service: ImageCommentServiceProtocol,
    ) -> None:
        self.store = store
        self.pipeline = pipeline
        self.image_comment_service = image_comment_service

    async def scan(self, list_id: str, image: bytes) -> VocabScanResult:
        """
        Recognize vocabulary pairs in an image and append them to a list.

        The vision model is asked first, OCR plus the vocabulary parser is
        the fallback. Finding nothing is not an error: the result carries a
        hint instead.

        Args:
            list_id: ID of the vocabulary list to append to
            image: Encoded image bytes

        Returns:
            How many entries were added, by which strategy, and a comment
            on the picture

        Raises:
            VocabListNotFoundError: If the list does not exist
        """
        if self.store.find_vocab_list(list_id) is None:
            raise VocabListNotFoundError(list_id)

        user = self.store.user
        roast_level = user.roast_level if user is not None else DEFAULT_ROAST_LEVEL
        comment = await self.image_comment_service.comment(image, roast_level)

        result = await self.pipeline.run(VocabScanRequest(image=image))
        if not result.is_success:
            logger.info("vocab_scan_found_nothing", list_id=list_id, error=result.unwrap_error())
            return VocabScanResult(added=0, source=None, comment=comment, message=NOTHING_RECOGNIZED)

        outcome = result.unwrap()
        added = self.store.add_vocab_entries(list_id, outcome.value)
        logger.info("vocab_scan_imported", list_id=list_id, source=outcome.strategy, added=added)
        return VocabScanResult(added=added, source=outcome.strategy, comment=comment)
