"""Canonical order lifecycle shared by exchange, remittance, forex card and insurance orders"""

from enum import Enum
from typing import Dict, List, Optional

from forex_compliance.domain.models import NextAction


class OrderStatus(str, Enum):
    CREATED = "created"
    DOCUMENTS_REQUIRED = "documents_required"
    DOCUMENTS_UPLOADED = "documents_uploaded"
    VERIFICATION_IN_PROGRESS = "verification_in_progress"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_RECEIVED = "payment_received"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"


STATUS_LABELS: Dict[OrderStatus, str] = {
    OrderStatus.CREATED: "Order Created",
    OrderStatus.DOCUMENTS_REQUIRED: "Documents Required",
    OrderStatus.DOCUMENTS_UPLOADED: "Documents Uploaded",
    OrderStatus.VERIFICATION_IN_PROGRESS: "Verification in Progress",
    OrderStatus.VERIFIED: "Verified",
    OrderStatus.VERIFICATION_FAILED: "Verification Failed",
    OrderStatus.PAYMENT_PENDING: "Payment Pending",
    OrderStatus.PAYMENT_RECEIVED: "Payment Received",
    OrderStatus.PROCESSING: "Processing",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
    OrderStatus.REJECTED: "Rejected",
}

# Happy path, forward only. Cancelled/rejected/failed sit outside it.
STATUS_FLOW: List[OrderStatus] = [
    OrderStatus.CREATED,
    OrderStatus.DOCUMENTS_REQUIRED,
    OrderStatus.DOCUMENTS_UPLOADED,
    OrderStatus.VERIFICATION_IN_PROGRESS,
    OrderStatus.VERIFIED,
    OrderStatus.PAYMENT_PENDING,
    OrderStatus.PAYMENT_RECEIVED,
    OrderStatus.PROCESSING,
    OrderStatus.COMPLETED,
]

STATUS_MAP: Dict[str, OrderStatus] = {
    # Currency exchange
    "draft": OrderStatus.CREATED,
    "pending": OrderStatus.VERIFICATION_IN_PROGRESS,
    "pending_compliance": OrderStatus.VERIFICATION_IN_PROGRESS,
    "rate_locked": OrderStatus.PAYMENT_PENDING,
    "advance_paid": OrderStatus.PAYMENT_RECEIVED,
    "approved": OrderStatus.VERIFIED,
    "balance_paid": OrderStatus.PAYMENT_RECEIVED,
    "scheduled": OrderStatus.PROCESSING,
    "dispatched": OrderStatus.PROCESSING,
    "delivered": OrderStatus.COMPLETED,
    # Remittance
    "payment_pending": OrderStatus.PAYMENT_PENDING,
    "compliance_pending": OrderStatus.VERIFICATION_IN_PROGRESS,
    # Forex card
    "applied": OrderStatus.CREATED,
    "awaiting_payment": OrderStatus.PAYMENT_PENDING,
    "under_review": OrderStatus.VERIFICATION_IN_PROGRESS,
    "documents_submitted": OrderStatus.DOCUMENTS_UPLOADED,
    "card_active": OrderStatus.COMPLETED,
    # Travel insurance
    "pending_payment": OrderStatus.PAYMENT_PENDING,
    "issued": OrderStatus.COMPLETED,
    "active": OrderStatus.COMPLETED,
    "expired": OrderStatus.COMPLETED,
    # Common
    "completed": OrderStatus.COMPLETED,
    "cancelled": OrderStatus.CANCELLED,
    "rejected": OrderStatus.REJECTED,
    "failed": OrderStatus.VERIFICATION_FAILED,
    "action_required": OrderStatus.DOCUMENTS_REQUIRED,
}

NEXT_ACTIONS: Dict[OrderStatus, NextAction] = {
    OrderStatus.CREATED: NextAction("upload_documents", "Upload Documents", False),
    OrderStatus.DOCUMENTS_REQUIRED: NextAction("upload_documents", "Upload Required Documents", True),
    OrderStatus.DOCUMENTS_UPLOADED: NextAction("wait", "Awaiting Verification", True),
    OrderStatus.VERIFICATION_IN_PROGRESS: NextAction("wait", "Verification in Progress", True),
    OrderStatus.VERIFIED: NextAction("make_payment", "Complete Payment", False),
    OrderStatus.VERIFICATION_FAILED: NextAction("resubmit", "Resubmit Documents", True),
    OrderStatus.PAYMENT_PENDING: NextAction("make_payment", "Complete Payment", True),
    OrderStatus.PAYMENT_RECEIVED: NextAction("wait", "Processing Order", True),
    OrderStatus.PROCESSING: NextAction("track", "Track Order", False),
    OrderStatus.COMPLETED: NextAction("view", "View Details", False),
    OrderStatus.CANCELLED: NextAction("view", "View Details", False),
    OrderStatus.REJECTED: NextAction("reapply", "Re-Apply", False),
}

CONTACT_SUPPORT = NextAction("contact", "Contact Support", False)

PAYABLE_STATUSES = frozenset({OrderStatus.VERIFIED, OrderStatus.PAYMENT_PENDING})
UPLOADABLE_STATUSES = frozenset(
    {OrderStatus.CREATED, OrderStatus.DOCUMENTS_REQUIRED, OrderStatus.VERIFICATION_FAILED}
)


def _key(raw_status: str) -> str:
    return (raw_status or "").strip().lower()


def is_known_status(raw_status: str) -> bool:
    return _key(raw_status) in STATUS_MAP


def normalize_status(raw_status: str, service_type: Optional[str] = None) -> OrderStatus:
    """
    Map a service-specific status string onto the canonical lifecycle.

    The table is shared by all services, so `service_type` does not change
    the result. Unknown strings map to CREATED; callers that care should
    check is_known_status() first.
    """
    return STATUS_MAP.get(_key(raw_status), OrderStatus.CREATED)


def next_action(status: OrderStatus) -> NextAction:
    return NEXT_ACTIONS.get(status, CONTACT_SUPPORT)


def can_make_payment(status: OrderStatus) -> bool:
    return status in PAYABLE_STATUSES


def can_upload_documents(status: OrderStatus) -> bool:
    return status in UPLOADABLE_STATUSES


def flow_position(status: OrderStatus) -> Optional[int]:
    """Zero-based step in STATUS_FLOW, None for off-flow statuses"""
    try:
        return STATUS_FLOW.index(status)
    except ValueError:
        return None
