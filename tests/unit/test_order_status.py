"""Unit tests for order status normalization"""

import pytest
from forex_compliance.domain.order_status import (
    CONTACT_SUPPORT,
    STATUS_FLOW,
    STATUS_LABELS,
    STATUS_MAP,
    OrderStatus,
    can_make_payment,
    can_upload_documents,
    flow_position,
    is_known_status,
    next_action,
    normalize_status,
)


def test_dispatched_forex_card_is_processing():
    status = normalize_status("dispatched", "forex_card")
    action = next_action(status)

    assert status is OrderStatus.PROCESSING
    assert action.action == "track"
    assert action.label == "Track Order"
    assert action.blocked is False


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("draft", OrderStatus.CREATED),
        ("rate_locked", OrderStatus.PAYMENT_PENDING),
        ("advance_paid", OrderStatus.PAYMENT_RECEIVED),
        ("delivered", OrderStatus.COMPLETED),
        ("compliance_pending", OrderStatus.VERIFICATION_IN_PROGRESS),
        ("documents_submitted", OrderStatus.DOCUMENTS_UPLOADED),
        ("card_active", OrderStatus.COMPLETED),
        ("issued", OrderStatus.COMPLETED),
        ("expired", OrderStatus.COMPLETED),
        ("failed", OrderStatus.VERIFICATION_FAILED),
        ("action_required", OrderStatus.DOCUMENTS_REQUIRED),
        ("Under_Review", OrderStatus.VERIFICATION_IN_PROGRESS),
        (" CANCELLED ", OrderStatus.CANCELLED),
    ],
)
def test_raw_statuses_map_to_canonical(raw, expected):
    assert normalize_status(raw) is expected


@pytest.mark.parametrize("raw", ["shipped_to_moon", "", None])
def test_unmapped_defaults_to_created(raw):
    assert normalize_status(raw) is OrderStatus.CREATED
    assert is_known_status(raw) is False


def test_renormalizing_canonical_values():
    """Canonical names that are also raw keys survive; others fall back to created"""
    for status in OrderStatus:
        again = normalize_status(status.value)
        if status.value in STATUS_MAP:
            assert again is STATUS_MAP[status.value]
        else:
            assert again is OrderStatus.CREATED

    assert normalize_status("payment_pending") is OrderStatus.PAYMENT_PENDING
    assert normalize_status("verified") is OrderStatus.CREATED


def test_every_status_has_label_and_action():
    for status in OrderStatus:
        assert status in STATUS_LABELS
        assert next_action(status) != CONTACT_SUPPORT


def test_unknown_value_gets_contact_support():
    assert next_action("not-a-status") == CONTACT_SUPPORT


@pytest.mark.parametrize(
    "status,blocked",
    [
        (OrderStatus.DOCUMENTS_REQUIRED, True),
        (OrderStatus.PAYMENT_PENDING, True),
        (OrderStatus.VERIFIED, False),
        (OrderStatus.REJECTED, False),
    ],
)
def test_blocked_flags(status, blocked):
    assert next_action(status).blocked is blocked


def test_payment_and_upload_predicates():
    payable = {s for s in OrderStatus if can_make_payment(s)}
    uploadable = {s for s in OrderStatus if can_upload_documents(s)}

    assert payable == {OrderStatus.VERIFIED, OrderStatus.PAYMENT_PENDING}
    assert uploadable == {
        OrderStatus.CREATED,
        OrderStatus.DOCUMENTS_REQUIRED,
        OrderStatus.VERIFICATION_FAILED,
    }


def test_flow_positions():
    assert flow_position(OrderStatus.CREATED) == 0
    assert flow_position(OrderStatus.COMPLETED) == len(STATUS_FLOW) - 1
    assert flow_position(OrderStatus.CANCELLED) is None
    assert flow_position(OrderStatus.VERIFICATION_FAILED) is None
