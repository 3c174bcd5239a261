"""Order status normalization for the dashboard trackers"""

from typing import Optional
from fastapi import APIRouter, Query, Request

from forex_compliance.api.v1.schemas import (
    NextActionSchema,
    OrderStatusResponse,
    StatusFlowItem,
    StatusFlowResponse,
)
from forex_compliance.api.dependencies import get_request_id
from forex_compliance.domain.order_status import (
    STATUS_FLOW,
    STATUS_LABELS,
    OrderStatus,
    can_make_payment,
    can_upload_documents,
    flow_position,
    is_known_status,
    next_action,
    normalize_status,
)
from forex_compliance.infrastructure.observability.logging import log_unmapped_status
from forex_compliance.infrastructure.observability.metrics import unmapped_status_counter

router = APIRouter()


@router.get("/orders/status/{raw_status}", response_model=OrderStatusResponse)
def describe_order_status(
    raw_status: str,
    request: Request,
    service_type: Optional[str] = Query(None, description="exchange | remittance | forex_card | insurance"),
):
    recognized = is_known_status(raw_status)
    if not recognized:
        unmapped_status_counter.labels(service_type=service_type or "unknown").inc()
        log_unmapped_status(get_request_id(request), raw_status, service_type)

    status = normalize_status(raw_status, service_type)
    action = next_action(status)

    return OrderStatusResponse(
        raw_status=raw_status,
        recognized=recognized,
        status=status.value,
        label=STATUS_LABELS[status],
        next_action=NextActionSchema(action=action.action, label=action.label, blocked=action.blocked),
        can_make_payment=can_make_payment(status),
        can_upload_documents=can_upload_documents(status),
        flow_position=flow_position(status),
    )


@router.get("/orders/statuses", response_model=StatusFlowResponse)
def list_order_statuses():
    """Canonical lifecycle, in order, plus the statuses that leave it"""
    return StatusFlowResponse(
        flow=[StatusFlowItem(status=s.value, label=STATUS_LABELS[s]) for s in STATUS_FLOW],
        off_flow=[
            StatusFlowItem(status=s.value, label=STATUS_LABELS[s])
            for s in OrderStatus
            if s not in STATUS_FLOW
        ],
    )
