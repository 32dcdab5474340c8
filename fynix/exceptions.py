"""Application exception hierarchy for Fynix."""


class FynixError(Exception):
    """Base exception for all Fynix application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(FynixError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class VocabListNotFoundError(NotFoundError):
    """Vocabulary list not found error."""

    def __init__(self, list_id: str) -> None:
        self.list_id = list_id
        super().__init__(f"Vocabulary list with id {list_id} not found")


class FeedItemNotFoundError(NotFoundError):
    """No feed card at the requested position."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Feed item at position {index} not found")


class ServiceError(FynixError):
    """An external collaborator (AI, OCR) failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=502)
