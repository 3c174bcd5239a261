"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from forex_compliance.domain.models import Direction, ServiceType


class TDSRequest(BaseModel):
    """Request body for POST /v1/tds/calculate"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    amount_inr: Decimal = Field(
        ..., gt=0, max_digits=14, decimal_places=2, description="Transaction amount in INR"
    )
    purpose: str = Field("other", description="Remittance purpose, e.g. 'medical' or 'education_loan'")
    direction: Direction = Field(Direction.BUY, description="buy (acquire) or sell (dispose) foreign currency")


class TDSResponse(BaseModel):
    applicable: bool
    rate_percent: float
    amount_due: float
    taxable_amount: float
    threshold_consumed: float
    threshold_remaining: float
    financial_year_total: float
    rate_category_name: str
    note: str


class LRSCheckRequest(BaseModel):
    """Request body for POST /v1/lrs/check"""

    user_id: str = Field(..., min_length=1)
    amount_usd: Decimal = Field(
        ..., gt=0, max_digits=14, decimal_places=2, description="Transaction amount in USD"
    )


class LRSCheckResponse(BaseModel):
    allowed: bool
    resulting_usage: float
    usage_percentage: float
    remaining_limit: float
    warning_message: Optional[str] = None
    rejection_message: Optional[str] = None


class LRSUsageResponse(BaseModel):
    """Response for GET /v1/lrs/usage"""

    user_id: str
    financial_year: str
    total_used: float
    remaining_limit: float
    usage_percentage: float
    transaction_count: int


class RecordUsageRequest(BaseModel):
    """Request body for POST /v1/lrs/usage"""

    user_id: str = Field(..., min_length=1)
    service_type: ServiceType
    amount_usd: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    purpose: str = Field(..., min_length=1)
    transaction_date: Optional[date] = None
    transaction_id: Optional[str] = None
    currency_exchange_order_id: Optional[str] = None
    service_application_id: Optional[str] = None


class RecordUsageResponse(BaseModel):
    entry_id: str
    financial_year: str


class UsageHistoryItem(BaseModel):
    entry_id: str
    service_type: str
    amount_usd: float
    purpose: str
    transaction_date: date


class UsageHistoryResponse(BaseModel):
    """Response for GET /v1/lrs/history"""

    user_id: str
    financial_year: str
    entries: List[UsageHistoryItem]


class CityEligibilityResponse(BaseModel):
    city_name: str
    matched: bool
    eligible: bool
    distance_km: Optional[int] = None
    message: str


class CitySchema(BaseModel):
    name: str
    state: str
    distance_km: int


class CitySearchResponse(BaseModel):
    query: str
    cities: List[CitySchema]


class NextActionSchema(BaseModel):
    action: str
    label: str
    blocked: bool


class OrderStatusResponse(BaseModel):
    """Response for GET /v1/orders/status/{raw_status}"""

    raw_status: str
    recognized: bool
    status: str
    label: str
    next_action: NextActionSchema
    can_make_payment: bool
    can_upload_documents: bool
    flow_position: Optional[int] = None


class StatusFlowItem(BaseModel):
    status: str
    label: str


class StatusFlowResponse(BaseModel):
    flow: List[StatusFlowItem]
    off_flow: List[StatusFlowItem]


class PricingQuoteResponse(BaseModel):
    """Response for GET /v1/pricing/quote"""

    product: str
    currency: str
    amount: float
    base_rate: float
    markup_percent: float
    service_charge_per_unit: float
    final_rate: float
    amount_inr: float
    total_inr: float
    slab_range: str
