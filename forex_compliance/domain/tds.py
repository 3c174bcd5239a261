"""TDS calculation under Section 206C(1G) of the Income Tax Act"""

import re
from decimal import Decimal
from typing import Dict

from forex_compliance.domain.models import Direction, TDSRate, TDSResult
from forex_compliance.utils.money import round2, to_decimal

# Per user per financial year, in INR
TDS_THRESHOLD_INR = Decimal("700000")

DEFAULT_PURPOSE = "other"

TDS_RATES: Dict[str, TDSRate] = {
    "education_loan": TDSRate(Decimal("0.005"), "Education (with loan)"),
    "education": TDSRate(Decimal("0.05"), "Education (self-funded)"),
    "medical": TDSRate(Decimal("0.05"), "Medical Treatment"),
    "travel": TDSRate(Decimal("0.20"), "Travel"),
    "business": TDSRate(Decimal("0.20"), "Business"),
    "family_maintenance": TDSRate(Decimal("0.20"), "Family Maintenance"),
    "emigration": TDSRate(Decimal("0.20"), "Emigration"),
    "employment": TDSRate(Decimal("0.20"), "Employment"),
    "investment": TDSRate(Decimal("0.20"), "Investment"),
    "gift": TDSRate(Decimal("0.20"), "Gift/Donation"),
    DEFAULT_PURPOSE: TDSRate(Decimal("0.20"), "Other"),
}

ZERO = Decimal("0")


def purpose_key(purpose: str) -> str:
    """'Family Maintenance' -> 'family_maintenance'"""
    return re.sub(r"\s+", "_", (purpose or "").strip().lower())


def resolve_rate(purpose: str) -> TDSRate:
    """Rate for a purpose; unrecognised purposes fall back to the 20% default"""
    return TDS_RATES.get(purpose_key(purpose), TDS_RATES[DEFAULT_PURPOSE])


def taxable_base(prior_total: Decimal, amount: Decimal, threshold: Decimal = TDS_THRESHOLD_INR) -> Decimal:
    """
    Portion of `amount` that lies above the threshold.

    Only the slice of the new transaction beyond the threshold is taxed:
        max(0, prior + amount - threshold) - max(0, prior - threshold)

    Example:
        prior 6,50,000 + amount 1,00,000 against 7,00,000 -> 50,000
    """
    after = max(ZERO, prior_total + amount - threshold)
    before = max(ZERO, prior_total - threshold)
    return after - before


def not_applicable_on_sale(threshold: Decimal = TDS_THRESHOLD_INR) -> TDSResult:
    return TDSResult(
        applicable=False,
        rate=ZERO,
        amount_due=ZERO,
        taxable_amount=ZERO,
        threshold_consumed=ZERO,
        threshold_remaining=threshold,
        rate_category_name="N/A",
        financial_year_total=ZERO,
        note="TDS is not applicable on sale of foreign currency.",
    )


def tds_unavailable(threshold: Decimal = TDS_THRESHOLD_INR) -> TDSResult:
    """Safe default when the financial-year total cannot be determined"""
    return TDSResult(
        applicable=False,
        rate=ZERO,
        amount_due=ZERO,
        taxable_amount=ZERO,
        threshold_consumed=ZERO,
        threshold_remaining=threshold,
        rate_category_name="Unavailable",
        financial_year_total=ZERO,
        note=(
            "Unable to calculate TDS right now. Any TDS due will be confirmed "
            "before the order is finalised."
        ),
    )


def calculate_tds(
    amount_inr,
    purpose: str,
    direction: Direction,
    prior_total_inr,
    threshold: Decimal = TDS_THRESHOLD_INR,
) -> TDSResult:
    """
    Compute TDS due on a candidate transaction.

    Amounts must already be in INR (the unit the threshold is denominated in);
    no conversion happens here.

    Args:
        amount_inr: Candidate transaction amount
        purpose: Remittance purpose, free text or key ("Medical", "education_loan")
        direction: BUY attracts TDS, SELL never does
        prior_total_inr: Cumulative purchases earlier in the financial year
    """
    if Direction(direction) is Direction.SELL:
        return not_applicable_on_sale(threshold)

    amount = to_decimal(amount_inr)
    prior = to_decimal(prior_total_inr)
    rate_info = resolve_rate(purpose)

    base = taxable_base(prior, amount, threshold)
    amount_due = round2(base * rate_info.rate)
    applicable = amount_due > 0

    if applicable:
        note = (
            f"TDS of {rate_info.rate * 100:.1f}% (INR {amount_due:,}) applies as your "
            f"FY remittances exceed INR {threshold:,}. TDS is a government requirement "
            "and can be claimed while filing your income tax return."
        )
    else:
        note = f"No TDS applicable as your FY remittances are within the INR {threshold:,} threshold."

    return TDSResult(
        applicable=applicable,
        rate=rate_info.rate,
        amount_due=amount_due,
        taxable_amount=round2(base),
        threshold_consumed=min(prior, threshold),
        threshold_remaining=max(ZERO, threshold - prior),
        rate_category_name=rate_info.name,
        financial_year_total=prior,
        note=note,
    )
