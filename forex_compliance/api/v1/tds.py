"""POST /v1/tds/calculate - TDS on foreign currency purchases"""

from fastapi import APIRouter, Depends, Request

from forex_compliance.api.v1.schemas import TDSRequest, TDSResponse
from forex_compliance.api.dependencies import get_request_id, get_tds_calculator
from forex_compliance.services.compliance import TDSCalculator
from forex_compliance.infrastructure.observability.logging import log_tds_calculation

router = APIRouter()


@router.post("/tds/calculate", response_model=TDSResponse)
async def calculate_tds(
    request_body: TDSRequest,
    request: Request,
    calculator: TDSCalculator = Depends(get_tds_calculator),
):
    """
    Calculate TDS for a prospective order.

    Never fails on a backend outage: the result then carries applicable=false
    and a note telling the customer TDS will be confirmed later.
    """
    result = await calculator.calculate(
        user_id=request_body.user_id,
        amount_inr=request_body.amount_inr,
        purpose=request_body.purpose,
        direction=request_body.direction,
        request_id=get_request_id(request),
    )

    log_tds_calculation(
        get_request_id(request),
        request_body.user_id,
        request_body.purpose,
        request_body.direction.value,
        result.applicable,
        result.amount_due,
    )

    return TDSResponse(
        applicable=result.applicable,
        rate_percent=float(result.rate_percent),
        amount_due=float(result.amount_due),
        taxable_amount=float(result.taxable_amount),
        threshold_consumed=float(result.threshold_consumed),
        threshold_remaining=float(result.threshold_remaining),
        financial_year_total=float(result.financial_year_total),
        rate_category_name=result.rate_category_name,
        note=result.note,
    )
