"""API routes for material quizzes, answers and answer feedback."""

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from fynix.application.learning.quiz_feedback_service import QuizFeedbackService
from fynix.application.learning.use_cases.answer_quiz_use_case import AnswerQuizUseCase
from fynix.application.learning.use_cases.material_quiz_use_case import MaterialQuizUseCase
from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.domain.common.exceptions import DomainError
from fynix.domain.identity.entities.user_profile import DEFAULT_ROAST_LEVEL
from fynix.exceptions import FynixError
from fynix.infrastructure.api.schemas.quiz_schemas import (
    AnswerRequest,
    AnswerResponse,
    FeedbackRequest,
    FeedbackResponse,
    MaterialTextRequest,
    QuizResponse,
    VocabFeedbackRequest,
)
from fynix.infrastructure.common.di import inject_use_case

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


def _roast_level(store: StateStore) -> int:
    user = store.user
    return user.roast_level if user is not None else DEFAULT_ROAST_LEVEL


@router.post("/material", response_model=QuizResponse, status_code=status.HTTP_200_OK)
async def create_material_quiz(
    request: MaterialTextRequest,
    use_case: MaterialQuizUseCase = Depends(inject_use_case(container.material_quiz_use_case)),
) -> QuizResponse:
    """Build a quiz from pasted study material."""
    try:
        quiz = await use_case.from_text(request.text)
        return QuizResponse.model_validate(quiz)
    except (FynixError, DomainError):
        raise
    except Exception as e:
        logger.error("material_quiz_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/material/image", response_model=QuizResponse, status_code=status.HTTP_200_OK)
async def create_material_quiz_from_image(
    image: UploadFile = File(..., description="Photo of a textbook page or notes"),
    use_case: MaterialQuizUseCase = Depends(inject_use_case(container.material_quiz_use_case)),
) -> QuizResponse:
    """Transcribe a photographed page and build a quiz from its text."""
    content = await image.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty upload")

    try:
        quiz = await use_case.from_image(content)
        return QuizResponse.model_validate(quiz)
    except (FynixError, DomainError):
        raise
    except Exception as e:
        logger.error("material_image_quiz_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/answer", response_model=AnswerResponse, status_code=status.HTTP_200_OK)
def answer_question(
    request: AnswerRequest,
    use_case: AnswerQuizUseCase = Depends(inject_use_case(container.answer_quiz_use_case)),
) -> AnswerResponse:
    """Check an answer and settle XP for the quiz kind."""
    result = use_case.answer(kind=request.kind, given=request.given, expected=request.expected)
    return AnswerResponse.model_validate(result)


@router.post("/feedback", response_model=FeedbackResponse, status_code=status.HTTP_200_OK)
async def comment_on_answer(
    request: FeedbackRequest,
    service: QuizFeedbackService = Depends(inject_use_case(container.quiz_feedback_service)),
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> FeedbackResponse:
    """Short mascot comment on an answer in the user's roast level and language."""
    comment = await service.comment(
        question=request.question,
        user_answer=request.user_answer,
        correct_answer=request.correct_answer,
        is_correct=request.is_correct,
        roast_level=_roast_level(store),
        language=store.snapshot().preferences.language.value,
    )
    return FeedbackResponse(comment=comment)


@router.post("/feedback/vocab", response_model=FeedbackResponse, status_code=status.HTTP_200_OK)
def comment_on_vocab_answer(
    request: VocabFeedbackRequest,
    service: QuizFeedbackService = Depends(inject_use_case(container.quiz_feedback_service)),
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> FeedbackResponse:
    comment = service.vocab_comment(
        term=request.term, is_correct=request.is_correct, roast_level=_roast_level(store)
    )
    return FeedbackResponse(comment=comment)
