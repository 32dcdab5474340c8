"""API routes for the fact feed and saved facts."""

from fastapi import APIRouter, Depends, status

from fynix.application.feed.feed_refresh_loop import FeedRefreshLoop
from fynix.application.learning.use_cases.answer_quiz_use_case import AnswerQuizUseCase
from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.exceptions import NotFoundError
from fynix.infrastructure.api.schemas.feed_schemas import (
    FeedAnswerRequest,
    FeedItemSchema,
    FeedRefreshResponse,
    FeedResponse,
    SavedFactCreateRequest,
    SavedFactSchema,
)
from fynix.infrastructure.api.schemas.profile_schemas import MessageResponse
from fynix.infrastructure.api.schemas.quiz_schemas import AnswerResponse
from fynix.infrastructure.common.di import inject_use_case

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=FeedResponse, status_code=status.HTTP_200_OK)
def get_feed(
    store: StateStore = Depends(inject_use_case(container.state_store)),
    refresh_loop: FeedRefreshLoop = Depends(inject_use_case(container.feed_refresh_loop)),
) -> FeedResponse:
    return FeedResponse(
        items=[FeedItemSchema.model_validate(item) for item in store.snapshot().feed],
        refreshing=refresh_loop.running,
    )


@router.post("/refresh", response_model=FeedRefreshResponse, status_code=status.HTTP_200_OK)
async def refresh_feed(
    refresh_loop: FeedRefreshLoop = Depends(inject_use_case(container.feed_refresh_loop)),
) -> FeedRefreshResponse:
    """Fetch one new fact right away instead of waiting for the next tick."""
    return FeedRefreshResponse(added=await refresh_loop.tick())


@router.post("/{index}/answer", response_model=AnswerResponse, status_code=status.HTTP_200_OK)
def answer_feed_quiz(
    index: int,
    request: FeedAnswerRequest,
    use_case: AnswerQuizUseCase = Depends(inject_use_case(container.answer_quiz_use_case)),
) -> AnswerResponse:
    """Answer the quiz on a feed card: +25 XP when right, -5 XP when wrong."""
    result = use_case.answer_feed(index=index, selected=request.selected)
    return AnswerResponse.model_validate(result)


@router.get("/saved", response_model=list[SavedFactSchema], status_code=status.HTTP_200_OK)
def list_saved_facts(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> list[SavedFactSchema]:
    return [SavedFactSchema.model_validate(fact) for fact in store.snapshot().saved_facts]


@router.post("/saved", response_model=SavedFactSchema, status_code=status.HTTP_201_CREATED)
def save_fact(
    request: SavedFactCreateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> SavedFactSchema:
    """
    Bookmark a fact.

    Raises:
        BusinessRuleViolationError: If a fact with the same title is already saved
    """
    fact = store.add_saved_fact(
        category=request.category, title=request.title, content=request.content
    )
    return SavedFactSchema.model_validate(fact)


@router.delete("/saved/{fact_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_saved_fact(
    fact_id: str,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MessageResponse:
    if not store.remove_saved_fact(fact_id):
        raise NotFoundError(f"Saved fact with id {fact_id} not found")
    return MessageResponse(success=True, message="Fact removed")
