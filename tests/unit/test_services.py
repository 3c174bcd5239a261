"""Unit tests for compliance services against a SQLite ledger"""

import logging
from datetime import date
from decimal import Decimal
from forex_compliance.domain.exceptions import ConversionError
from forex_compliance.domain.lrs import UNVERIFIED_MESSAGE
from forex_compliance.domain.models import Direction, ServiceType
from forex_compliance.services.compliance import LRSTracker, TDSCalculator


class FailingConverter:
    async def convert(self, amount, from_currency, to_currency, as_of=None):
        raise ConversionError("rates unavailable")


async def test_tds_uses_converted_financial_year_total(repository, converter, make_entry):
    # 6,500 USD at 100 INR/USD = 6,50,000 INR already purchased
    repository.add_entry(make_entry("user_med", 4000))
    repository.add_entry(make_entry("user_med", 2500, ServiceType.CURRENCY_EXCHANGE))

    result = await TDSCalculator(repository, converter).calculate(
        "user_med", Decimal("100000"), "medical", Direction.BUY
    )

    assert result.financial_year_total == Decimal("650000.00")
    assert result.applicable is True
    assert result.amount_due == Decimal("2500.00")


async def test_tds_ignores_other_users_and_years(repository, converter, make_entry):
    repository.add_entry(make_entry("someone_else", 9000))
    repository.add_entry(make_entry("user_a", 9000, financial_year="2019-20"))

    result = await TDSCalculator(repository, converter).calculate(
        "user_a", Decimal("100000"), "travel", Direction.BUY
    )

    assert result.financial_year_total == Decimal("0")
    assert result.applicable is False


async def test_tds_store_failure_degrades_to_not_applicable(broken_repository, converter):
    result = await TDSCalculator(broken_repository, converter).calculate(
        "user_x", Decimal("900000"), "travel", Direction.BUY
    )

    assert result.applicable is False
    assert result.amount_due == Decimal("0")
    assert result.rate_category_name == "Unavailable"
    assert "Unable to calculate TDS" in result.note


async def test_tds_conversion_failure_degrades_to_not_applicable(repository, make_entry):
    repository.add_entry(make_entry("user_y", 9000))

    result = await TDSCalculator(repository, FailingConverter()).calculate(
        "user_y", Decimal("900000"), "travel", Direction.BUY
    )

    assert result.applicable is False
    assert result.rate_category_name == "Unavailable"


async def test_tds_sale_never_touches_store(broken_repository):
    result = await TDSCalculator(broken_repository, FailingConverter()).calculate(
        "user_z", Decimal("900000"), "travel", Direction.SELL
    )

    assert result.applicable is False
    assert result.rate_category_name == "N/A"


def test_lrs_check_does_not_record(repository, make_entry):
    repository.add_entry(make_entry("user_lrs", 240000))
    tracker = LRSTracker(repository)

    result = tracker.check("user_lrs", Decimal("5000"))
    tracker.check("user_lrs", Decimal("5000"))

    assert result.allowed is True
    assert result.usage_percentage == Decimal("98.00")
    assert result.warning_message is not None
    assert tracker.usage("user_lrs").transaction_count == 1


def test_lrs_record_then_usage(repository, make_entry):
    tracker = LRSTracker(repository)

    outcome = tracker.record_usage(
        make_entry("user_rec", 1200, ServiceType.FOREX_CARD, currency_exchange_order_id="ord-1")
    )
    tracker.record_usage(make_entry("user_rec", 800))
    summary = tracker.usage("user_rec")

    assert outcome.success is True
    assert outcome.entry_id
    assert summary.total_used == Decimal("2000.00")
    assert summary.transaction_count == 2
    assert summary.remaining_limit == Decimal("248000.00")


def test_lrs_usage_for_past_year(repository, make_entry):
    repository.add_entry(
        make_entry("user_old", 5000, financial_year="2023-24", transaction_date=date(2023, 9, 1))
    )

    summary = LRSTracker(repository).usage("user_old", as_of=date(2024, 1, 10))

    assert summary.financial_year == "2023-24"
    assert summary.total_used == Decimal("5000.00")


def test_lrs_store_failure_is_conservative(broken_repository):
    tracker = LRSTracker(broken_repository)

    result = tracker.check("user_down", Decimal("10"))

    assert result.allowed is False
    assert result.rejection_message == UNVERIFIED_MESSAGE
    assert tracker.usage("user_down") is None


def test_lrs_record_failure_reports_error(broken_repository, make_entry):
    outcome = LRSTracker(broken_repository).record_usage(make_entry("user_down", 10))

    assert outcome.success is False
    assert "connection refused" in outcome.error


def failure_records(caplog):
    return [r for r in caplog.records if r.levelno == logging.ERROR]


async def test_tds_failure_log_carries_request_id(broken_repository, converter, caplog):
    with caplog.at_level(logging.ERROR, logger="forex_compliance"):
        await TDSCalculator(broken_repository, converter).calculate(
            "user_log", Decimal("900000"), "travel", Direction.BUY, request_id="req-tds"
        )

    [record] = failure_records(caplog)
    assert record.request_id == "req-tds"
    assert record.user_id == "user_log"


def test_lrs_failure_logs_carry_request_id(broken_repository, make_entry, caplog):
    tracker = LRSTracker(broken_repository)

    with caplog.at_level(logging.ERROR, logger="forex_compliance"):
        tracker.check("user_log", Decimal("10"), request_id="req-check")
        tracker.record_usage(make_entry("user_log", 10), request_id="req-record")

    assert [r.request_id for r in failure_records(caplog)] == ["req-check", "req-record"]


def test_failure_log_without_request_id_uses_placeholder(broken_repository, caplog):
    with caplog.at_level(logging.ERROR, logger="forex_compliance"):
        LRSTracker(broken_repository).usage("user_log")

    [record] = failure_records(caplog)
    assert record.request_id == "-"
