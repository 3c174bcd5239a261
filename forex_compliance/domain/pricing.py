"""
Slab-wise pricing of forex products.

The customer rate is the inter-bank rate (IBR) plus a markup percentage. The
markup depends on the product and on the INR value of the order at the IBR.

Examples:
    >>> quote_rate(ProductType.EDUCATION_TT, Decimal("400"), Decimal("100")).final_rate
    Decimal('103.00')
    >>> markup_percentage(ProductType.CURRENCY_CARD, Decimal("2000"), Decimal("84"))
    Decimal('1.00')
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from forex_compliance.domain.models import ExchangeRateBreakdown
from forex_compliance.utils.money import round2, to_decimal


class ProductType(str, Enum):
    EDUCATION_TT = "education_tt"
    MAINTENANCE_TT = "maintenance_tt"
    GIFT_TT = "gift_tt"
    CURRENCY_CARD = "currency_card"
    CURRENCY_NOTE = "currency_note"


@dataclass(frozen=True)
class PricingSlab:
    min_inr: Decimal
    max_inr: Optional[Decimal]  # None: no upper bound
    markups: Dict[ProductType, Decimal]

    @property
    def range_label(self) -> str:
        if self.max_inr is None:
            return f"{self.min_inr}+"
        return f"{self.min_inr}-{self.max_inr}"


def _markups(education, maintenance, gift, card, note) -> Dict[ProductType, Decimal]:
    return {
        ProductType.EDUCATION_TT: Decimal(education),
        ProductType.MAINTENANCE_TT: Decimal(maintenance),
        ProductType.GIFT_TT: Decimal(gift),
        ProductType.CURRENCY_CARD: Decimal(card),
        ProductType.CURRENCY_NOTE: Decimal(note),
    }


# Bands are in INR; the last one is open-ended
PRICING_SLABS: List[PricingSlab] = [
    PricingSlab(Decimal("0"), Decimal("50000"), _markups("3.00", "4.00", "4.00", "2.00", "2.50")),
    PricingSlab(Decimal("50001"), Decimal("100000"), _markups("1.25", "1.50", "1.50", "1.25", "1.50")),
    PricingSlab(Decimal("100001"), Decimal("200000"), _markups("1.00", "1.25", "1.25", "1.00", "1.00")),
    PricingSlab(Decimal("200001"), None, _markups("1.00", "1.25", "1.25", "1.00", "1.00")),
]


def find_slab(amount_inr) -> PricingSlab:
    """
    Slab for an INR amount.

    Bands are matched on their upper bound only, so fractional amounts between
    two bands (50000.50) fall into the higher one.
    """
    amount_inr = to_decimal(amount_inr)
    for slab in PRICING_SLABS:
        if slab.max_inr is None or amount_inr <= slab.max_inr:
            return slab
    return PRICING_SLABS[-1]


def markup_percentage(product: ProductType, amount_fcy, ibr_rate) -> Decimal:
    """Markup for `amount_fcy` units of foreign currency priced at `ibr_rate` INR each"""
    amount_inr = to_decimal(amount_fcy) * to_decimal(ibr_rate)
    return find_slab(amount_inr).markups[ProductType(product)]


def calculate_exchange_rate(product: ProductType, amount_fcy, ibr_rate) -> Decimal:
    """Final customer rate: IBR * (1 + markup / 100)"""
    return quote_rate(product, amount_fcy, ibr_rate).final_rate


def quote_rate(product: ProductType, amount_fcy, ibr_rate) -> ExchangeRateBreakdown:
    """
    Rate breakdown for display: base rate, service charge per unit and final rate.

    Args:
        product: Product being bought
        amount_fcy: Order amount in the foreign currency
        ibr_rate: Inter-bank rate, INR per unit of the foreign currency

    Raises:
        ValueError: If the IBR is not positive
    """
    base_rate = to_decimal(ibr_rate)
    if base_rate <= 0:
        raise ValueError(f"Inter-bank rate must be positive, got {ibr_rate}")
    amount_fcy = to_decimal(amount_fcy)
    amount_inr = amount_fcy * base_rate
    slab = find_slab(amount_inr)
    markup = slab.markups[ProductType(product)]

    service_charge = round2(base_rate * markup / 100)
    final_rate = round2(base_rate + service_charge)
    return ExchangeRateBreakdown(
        base_rate=base_rate,
        markup_percent=markup,
        service_charge_per_unit=service_charge,
        final_rate=final_rate,
        amount_inr=round2(amount_inr),
        total_inr=round2(amount_fcy * final_rate),
        slab_range=slab.range_label,
    )
