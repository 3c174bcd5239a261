"""LRS allowance endpoints: usage summary, what-if check, ledger recording"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from forex_compliance.api.v1.schemas import (
    LRSCheckRequest,
    LRSCheckResponse,
    LRSUsageResponse,
    RecordUsageRequest,
    RecordUsageResponse,
    UsageHistoryItem,
    UsageHistoryResponse,
)
from forex_compliance.api.dependencies import get_lrs_tracker, get_request_id, get_usage_repository
from forex_compliance.domain.exceptions import UsageStoreError
from forex_compliance.domain.models import UsageEntry
from forex_compliance.infrastructure.database.repositories import LRSUsageRepository
from forex_compliance.infrastructure.observability.logging import log_limit_check, log_usage_recorded
from forex_compliance.infrastructure.observability.metrics import (
    lrs_recorded_counter,
    usage_store_failures_counter,
)
from forex_compliance.services.compliance import LRSTracker
from forex_compliance.utils.date_utils import (
    current_financial_year,
    financial_year_bounds,
    financial_year_for,
)

router = APIRouter()

FY_QUERY = Query(None, description="Financial year label such as 2025-26; defaults to the current one")


def resolve_financial_year(label: Optional[str]) -> tuple[str, date]:
    """Validated FY label and its first day, for ledger lookups"""
    label = label or current_financial_year()
    try:
        start, _ = financial_year_bounds(label)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return label, start


@router.get("/lrs/usage", response_model=LRSUsageResponse)
def get_lrs_usage(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    financial_year: Optional[str] = FY_QUERY,
    tracker: LRSTracker = Depends(get_lrs_tracker),
):
    """LRS consumption for the dashboard card, current financial year by default"""
    _, as_of = resolve_financial_year(financial_year)
    summary = tracker.usage(user_id, as_of, request_id=get_request_id(request))
    if summary is None:
        raise HTTPException(status_code=503, detail="LRS usage temporarily unavailable")

    return LRSUsageResponse(
        user_id=user_id,
        financial_year=summary.financial_year,
        total_used=float(summary.total_used),
        remaining_limit=float(summary.remaining_limit),
        usage_percentage=float(summary.usage_percentage),
        transaction_count=summary.transaction_count,
    )


@router.post("/lrs/check", response_model=LRSCheckResponse)
def check_lrs_limit(
    request_body: LRSCheckRequest,
    request: Request,
    tracker: LRSTracker = Depends(get_lrs_tracker),
):
    """
    Check a prospective amount against the remaining allowance.

    Exceeding the limit is a normal outcome (allowed=false), not an error.
    Nothing is written.
    """
    result = tracker.check(
        request_body.user_id, request_body.amount_usd, request_id=get_request_id(request)
    )

    log_limit_check(
        get_request_id(request),
        request_body.user_id,
        request_body.amount_usd,
        result.allowed,
        result.usage_percentage,
    )

    return LRSCheckResponse(
        allowed=result.allowed,
        resulting_usage=float(result.resulting_usage),
        usage_percentage=float(result.usage_percentage),
        remaining_limit=float(result.remaining_limit),
        warning_message=result.warning_message,
        rejection_message=result.rejection_message,
    )


@router.post("/lrs/usage", response_model=RecordUsageResponse, status_code=201)
def record_lrs_usage(
    request_body: RecordUsageRequest,
    request: Request,
    tracker: LRSTracker = Depends(get_lrs_tracker),
):
    """Append one ledger row once an order is confirmed"""
    today = date.today()
    transaction_date = request_body.transaction_date or today
    if transaction_date > today:
        raise HTTPException(status_code=422, detail="transaction_date cannot be in the future")
    financial_year = financial_year_for(transaction_date)
    entry = UsageEntry(
        user_id=request_body.user_id,
        financial_year=financial_year,
        service_type=request_body.service_type,
        amount_usd=request_body.amount_usd,
        purpose=request_body.purpose,
        transaction_date=transaction_date,
        transaction_id=request_body.transaction_id,
        currency_exchange_order_id=request_body.currency_exchange_order_id,
        service_application_id=request_body.service_application_id,
    )

    outcome = tracker.record_usage(entry, request_id=get_request_id(request))
    if not outcome.success:
        raise HTTPException(status_code=503, detail="Unable to record LRS usage")

    lrs_recorded_counter.labels(service_type=entry.service_type.value).inc()
    log_usage_recorded(get_request_id(request), entry.user_id, entry.service_type.value, outcome.entry_id)

    return RecordUsageResponse(entry_id=outcome.entry_id, financial_year=financial_year)


@router.get("/lrs/history", response_model=UsageHistoryResponse)
def get_lrs_history(
    user_id: str = Query(..., min_length=1, description="User identifier"),
    financial_year: Optional[str] = FY_QUERY,
    repository: LRSUsageRepository = Depends(get_usage_repository),
):
    """Recent ledger rows, current financial year by default"""
    financial_year, _ = resolve_financial_year(financial_year)
    try:
        entries = repository.list_entries(user_id, financial_year)
    except UsageStoreError:
        usage_store_failures_counter.inc()
        raise HTTPException(status_code=503, detail="LRS history temporarily unavailable")

    return UsageHistoryResponse(
        user_id=user_id,
        financial_year=financial_year,
        entries=[
            UsageHistoryItem(
                entry_id=str(e.id),
                service_type=e.service_type,
                amount_usd=float(e.amount_usd),
                purpose=e.purpose,
                transaction_date=e.transaction_date,
            )
            for e in entries
        ],
    )
