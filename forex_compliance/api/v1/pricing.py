"""GET /v1/pricing/quote - slab-wise customer rate for a forex product"""

import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from forex_compliance.api.v1.schemas import PricingQuoteResponse
from forex_compliance.api.dependencies import get_currency_converter, get_request_id
from forex_compliance.domain.exceptions import ConversionError
from forex_compliance.domain.pricing import ProductType, quote_rate
from forex_compliance.infrastructure.conversion import CurrencyConverter
from forex_compliance.infrastructure.observability.metrics import (
    pricing_quote_counter,
    rates_fetch_failures_counter,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/pricing/quote", response_model=PricingQuoteResponse)
async def get_pricing_quote(
    request: Request,
    product: ProductType = Query(..., description="Product being bought"),
    currency: str = Query(..., min_length=3, max_length=3, description="Foreign currency code"),
    amount: Decimal = Query(..., gt=0, max_digits=14, decimal_places=2, description="Amount in that currency"),
    converter: CurrencyConverter = Depends(get_currency_converter),
):
    """Base rate, service charge and final rate for an order of `amount` units"""
    currency = currency.upper()
    if currency == "INR":
        raise HTTPException(status_code=422, detail="currency must be a foreign currency")

    try:
        ibr_rate = await converter.convert(Decimal(1), currency, "INR")
    except ConversionError as e:
        rates_fetch_failures_counter.inc()
        logger.error(
            f"Pricing rate lookup failed: {e}",
            extra={"request_id": get_request_id(request), "currency": currency},
        )
        raise HTTPException(status_code=503, detail=f"No rate available for {currency}")

    breakdown = quote_rate(product, amount, ibr_rate)
    pricing_quote_counter.labels(product=product.value).inc()

    return PricingQuoteResponse(
        product=product.value,
        currency=currency,
        amount=float(amount),
        base_rate=float(breakdown.base_rate),
        markup_percent=float(breakdown.markup_percent),
        service_charge_per_unit=float(breakdown.service_charge_per_unit),
        final_rate=float(breakdown.final_rate),
        amount_inr=float(breakdown.amount_inr),
        total_inr=float(breakdown.total_inr),
        slab_range=breakdown.slab_range,
    )
