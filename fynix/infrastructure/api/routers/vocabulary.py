"""API routes for vocabulary lists, imports and vocabulary quizzes."""

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from fynix.application.learning.use_cases.vocab_quiz_use_case import VocabQuizUseCase
from fynix.application.state.state_store import StateStore
from fynix.application.vocabulary.use_cases.import_vocab_text_use_case import (
    ImportVocabTextUseCase,
)
from fynix.application.vocabulary.use_cases.vocab_scan_use_case import VocabScanUseCase
from fynix.core import container
from fynix.domain.common.exceptions import DomainError
from fynix.domain.vocabulary.services.vocab_parser import parse_vocab_pairs
from fynix.exceptions import FynixError, NotFoundError, VocabListNotFoundError
from fynix.infrastructure.api.schemas.profile_schemas import MessageResponse
from fynix.infrastructure.api.schemas.quiz_schemas import QuizResponse
from fynix.infrastructure.api.schemas.vocabulary_schemas import (
    VocabEntryCreateRequest,
    VocabEntrySchema,
    VocabEntryUpdateRequest,
    VocabImportResponse,
    VocabListCreateRequest,
    VocabListSchema,
    VocabPairSchema,
    VocabParseResponse,
    VocabQuizRequest,
    VocabScanResponse,
    VocabTextRequest,
)
from fynix.infrastructure.common.di import inject_use_case

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/vocab-lists", tags=["vocabulary"])


def _entry_not_found(entry_id: str) -> NotFoundError:
    return NotFoundError(f"Vocabulary entry with id {entry_id} not found")


@router.get("", response_model=list[VocabListSchema], status_code=status.HTTP_200_OK)
def list_vocab_lists(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> list[VocabListSchema]:
    return [VocabListSchema.model_validate(vocab) for vocab in store.snapshot().vocab_lists]


@router.post("", response_model=VocabListSchema, status_code=status.HTTP_201_CREATED)
def create_vocab_list(
    request: VocabListCreateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> VocabListSchema:
    list_id = store.add_vocab_list(
        name=request.name, source_lang=request.source_lang, target_lang=request.target_lang
    )
    return VocabListSchema.model_validate(store.find_vocab_list(list_id))


@router.post("/parse", response_model=VocabParseResponse, status_code=status.HTTP_200_OK)
def parse_vocab_text(request: VocabTextRequest) -> VocabParseResponse:
    """Preview the pairs recognized in pasted text without storing them."""
    pairs = parse_vocab_pairs(request.text)
    return VocabParseResponse(pairs=[VocabPairSchema.model_validate(pair) for pair in pairs])


@router.get("/{list_id}", response_model=VocabListSchema, status_code=status.HTTP_200_OK)
def get_vocab_list(
    list_id: str,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> VocabListSchema:
    vocab_list = store.find_vocab_list(list_id)
    if vocab_list is None:
        raise VocabListNotFoundError(list_id)
    return VocabListSchema.model_validate(vocab_list)


@router.post(
    "/{list_id}/entries",
    response_model=VocabEntrySchema,
    status_code=status.HTTP_201_CREATED,
)
def add_vocab_entry(
    list_id: str,
    request: VocabEntryCreateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> VocabEntrySchema:
    entry = store.add_vocab_entry(list_id, term=request.term, translation=request.translation)
    if entry is None:
        raise VocabListNotFoundError(list_id)
    return VocabEntrySchema.model_validate(entry)


@router.patch(
    "/{list_id}/entries/{entry_id}",
    response_model=VocabEntrySchema,
    status_code=status.HTTP_200_OK,
)
def update_vocab_entry(
    list_id: str,
    entry_id: str,
    request: VocabEntryUpdateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> VocabEntrySchema:
    if store.find_vocab_list(list_id) is None:
        raise VocabListNotFoundError(list_id)
    entry = store.update_vocab_entry(
        list_id, entry_id, term=request.term, translation=request.translation
    )
    if entry is None:
        raise _entry_not_found(entry_id)
    return VocabEntrySchema.model_validate(entry)


@router.delete(
    "/{list_id}/entries/{entry_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
)
def delete_vocab_entry(
    list_id: str,
    entry_id: str,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MessageResponse:
    if store.find_vocab_list(list_id) is None:
        raise VocabListNotFoundError(list_id)
    if not store.remove_vocab_entry(list_id, entry_id):
        raise _entry_not_found(entry_id)
    return MessageResponse(success=True, message="Entry deleted")


@router.post(
    "/{list_id}/import",
    response_model=VocabImportResponse,
    status_code=status.HTTP_200_OK,
)
def import_vocab_text(
    list_id: str,
    request: VocabTextRequest,
    use_case: ImportVocabTextUseCase = Depends(
        inject_use_case(container.import_vocab_text_use_case)
    ),
) -> VocabImportResponse:
    """Parse pasted text and append every recognized pair to the list."""
    return VocabImportResponse(added=use_case.execute(list_id, request.text))


@router.post("/{list_id}/scan", response_model=VocabScanResponse, status_code=status.HTTP_200_OK)
async def scan_vocab_image(
    list_id: str,
    image: UploadFile = File(..., description="Photo of a vocabulary page"),
    use_case: VocabScanUseCase = Depends(inject_use_case(container.vocab_scan_use_case)),
) -> VocabScanResponse:
    """
    Recognize vocabulary in a photo and append it to the list.

    Raises:
        HTTPException: If the upload is empty or scanning fails unexpectedly
    """
    content = await image.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty upload")

    try:
        result = await use_case.scan(list_id, content)
        return VocabScanResponse.model_validate(result)
    except (FynixError, DomainError):
        raise
    except Exception as e:
        logger.error("vocab_scan_failed", list_id=list_id, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{list_id}/quiz", response_model=QuizResponse, status_code=status.HTTP_200_OK)
async def start_vocab_quiz(
    list_id: str,
    request: VocabQuizRequest,
    use_case: VocabQuizUseCase = Depends(inject_use_case(container.vocab_quiz_use_case)),
) -> QuizResponse:
    """Build a quiz for the list; the local builder takes over when AI is unavailable."""
    try:
        quiz = await use_case.start_quiz(list_id, mode=request.mode, direction=request.direction)
        return QuizResponse.model_validate(quiz)
    except (FynixError, DomainError):
        raise
    except Exception as e:
        logger.error("vocab_quiz_failed", list_id=list_id, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
