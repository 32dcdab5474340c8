"""Use case for importing vocabulary typed or pasted as text."""

import structlog

from fynix.application.state.state_store import StateStore
from fynix.domain.vocabulary.services.vocab_parser import parse_vocab_pairs
from fynix.exceptions import VocabListNotFoundError

logger = structlog.get_logger(__name__)


class ImportVocabTextUseCase:
    def __init__(self, store: StateStore) -> None:
        self.store = store

    def execute(self, list_id: str, text: str) -> int:
        """
        Parse pairs out of free text and append them to a list.

        Returns:
            Number of entries added

        Raises:
            VocabListNotFoundError: If the list does not exist
        """
        if self.store.find_vocab_list(list_id) is None:
            raise VocabListNotFoundError(list_id)

        pairs = parse_vocab_pairs(text)
        added = self.store.add_vocab_entries(list_id, pairs)
        logger.info("vocab_text_imported", list_id=list_id, parsed=len(pairs), added=added)
        return added
