"""Liberalised Remittance Scheme (LRS) limit tracking"""

from decimal import Decimal

from forex_compliance.domain.models import FinancialYearUsage, LimitCheckResult, LRSUsageSummary
from forex_compliance.utils.money import round2, to_decimal

# Per user per financial year across remittance, exchange and forex card loads
LRS_ANNUAL_LIMIT_USD = Decimal("250000")
LRS_WARNING_PERCENTAGE = Decimal("90")

UNVERIFIED_MESSAGE = "Unable to verify LRS limit. Please try again."


def usage_percentage(total_used: Decimal, limit: Decimal = LRS_ANNUAL_LIMIT_USD) -> Decimal:
    return round2(to_decimal(total_used) / limit * 100)


def summarize_usage(usage: FinancialYearUsage, limit: Decimal = LRS_ANNUAL_LIMIT_USD) -> LRSUsageSummary:
    total = to_decimal(usage.total_amount_usd)
    return LRSUsageSummary(
        financial_year=usage.financial_year,
        total_used=total,
        remaining_limit=max(Decimal("0"), limit - total),
        usage_percentage=usage_percentage(total, limit),
        transaction_count=usage.transaction_count,
    )


def check_limit(total_used, amount_usd, limit: Decimal = LRS_ANNUAL_LIMIT_USD) -> LimitCheckResult:
    """
    Decide whether a transaction fits in the remaining annual allowance.

    - Rejected when usage after the transaction would exceed the ceiling
    - Allowed with a warning when usage after the transaction is >= 90%
    - Allowed silently otherwise

    Checking never records anything; see LRSTracker.record_usage.
    """
    total = to_decimal(total_used)
    amount = to_decimal(amount_usd)
    remaining = max(Decimal("0"), limit - total)
    resulting = total + amount
    percentage = usage_percentage(resulting, limit)

    if resulting > limit:
        return LimitCheckResult(
            allowed=False,
            resulting_usage=resulting,
            usage_percentage=percentage,
            remaining_limit=remaining,
            rejection_message=(
                f"Transaction exceeds your remaining LRS limit of USD {remaining:,}. "
                f"Annual limit is USD {limit:,}."
            ),
        )

    warning = None
    if resulting * 100 >= limit * LRS_WARNING_PERCENTAGE:
        warning = f"Warning: This transaction will use {percentage:.1f}% of your annual LRS limit."

    return LimitCheckResult(
        allowed=True,
        resulting_usage=resulting,
        usage_percentage=percentage,
        remaining_limit=remaining,
        warning_message=warning,
    )


def limit_unverified() -> LimitCheckResult:
    """Conservative result when the user's usage cannot be read"""
    return LimitCheckResult(
        allowed=False,
        resulting_usage=Decimal("0"),
        usage_percentage=Decimal("0"),
        remaining_limit=Decimal("0"),
        rejection_message=UNVERIFIED_MESSAGE,
    )
