"""API routes for the money log."""

from fastapi import APIRouter, Depends, Query, status

from fynix.application.money.record_money_entry_use_case import RecordMoneyEntryUseCase
from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.domain.money.entities.money_entry import MoneyDirection
from fynix.domain.money.services import CATEGORIES, monthly_stats, suggest_category
from fynix.exceptions import NotFoundError
from fynix.infrastructure.api.schemas.money_schemas import (
    CategorySuggestionResponse,
    MoneyEntryCreateRequest,
    MoneyEntryCreateResponse,
    MoneyEntrySchema,
    MoneyOverviewResponse,
    MonthlyStatsSchema,
)
from fynix.infrastructure.api.schemas.profile_schemas import MessageResponse
from fynix.infrastructure.common.di import inject_use_case

router = APIRouter(prefix="/money", tags=["money"])


@router.get("", response_model=MoneyOverviewResponse, status_code=status.HTTP_200_OK)
def get_money_overview(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MoneyOverviewResponse:
    """List all entries, newest first, with this month's totals."""
    entries = store.snapshot().money
    stats = monthly_stats(entries, store.current_date())
    return MoneyOverviewResponse(
        entries=[MoneyEntrySchema.model_validate(entry) for entry in reversed(entries)],
        month=MonthlyStatsSchema.model_validate(stats),
    )


@router.post("", response_model=MoneyEntryCreateResponse, status_code=status.HTTP_201_CREATED)
def record_money_entry(
    request: MoneyEntryCreateRequest,
    use_case: RecordMoneyEntryUseCase = Depends(
        inject_use_case(container.record_money_entry_use_case)
    ),
) -> MoneyEntryCreateResponse:
    record = use_case.execute(
        amount=request.amount,
        direction=request.direction,
        category=request.category,
        note=request.note,
    )
    return MoneyEntryCreateResponse(
        entry=MoneyEntrySchema.model_validate(record.entry),
        xp_awarded=record.xp_awarded,
        milestone_reached=record.milestone_reached,
    )


@router.get(
    "/categories",
    response_model=CategorySuggestionResponse,
    status_code=status.HTTP_200_OK,
)
def suggest_money_category(
    direction: MoneyDirection,
    note: str = Query("", description="Note to guess the category from"),
) -> CategorySuggestionResponse:
    return CategorySuggestionResponse(
        category=suggest_category(direction, note),
        categories=list(CATEGORIES[direction]),
    )


@router.delete("/{entry_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_money_entry(
    entry_id: str,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MessageResponse:
    if not store.remove_money_entry(entry_id):
        raise NotFoundError(f"Money entry with id {entry_id} not found")
    return MessageResponse(success=True, message="Entry deleted")
