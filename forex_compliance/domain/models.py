"""Domain models - pure Python dataclasses for compliance calculations"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    """Which side of the foreign currency trade the customer is on"""

    BUY = "buy"  # acquire foreign currency
    SELL = "sell"  # dispose of foreign currency


class ServiceType(str, Enum):
    """Services that consume the customer's LRS allowance"""

    REMITTANCE = "remittance"
    CURRENCY_EXCHANGE = "currency_exchange"
    FOREX_CARD = "forex_card"


@dataclass(frozen=True)
class FinancialYearUsage:
    """Aggregate of a user's LRS ledger for one financial year"""

    user_id: str
    financial_year: str
    total_amount_usd: Decimal
    transaction_count: int


@dataclass(frozen=True)
class TDSRate:
    rate: Decimal  # fraction, 0.05 == 5%
    name: str


@dataclass(frozen=True)
class TDSResult:
    """Outcome of a TDS (Section 206C(1G)) calculation"""

    applicable: bool
    rate: Decimal
    amount_due: Decimal
    taxable_amount: Decimal
    threshold_consumed: Decimal
    threshold_remaining: Decimal
    rate_category_name: str
    financial_year_total: Decimal
    note: str

    @property
    def rate_percent(self) -> Decimal:
        return self.rate * 100


@dataclass(frozen=True)
class LimitCheckResult:
    """Admissibility of a transaction against the LRS ceiling"""

    allowed: bool
    resulting_usage: Decimal
    usage_percentage: Decimal
    remaining_limit: Decimal
    warning_message: Optional[str] = None
    rejection_message: Optional[str] = None


@dataclass(frozen=True)
class LRSUsageSummary:
    """Dashboard view of LRS consumption"""

    financial_year: str
    total_used: Decimal
    remaining_limit: Decimal
    usage_percentage: Decimal
    transaction_count: int


@dataclass
class UsageEntry:
    """One append-only LRS ledger row"""

    user_id: str
    financial_year: str
    service_type: ServiceType
    amount_usd: Decimal
    purpose: str
    transaction_date: date
    transaction_id: Optional[str] = None
    currency_exchange_order_id: Optional[str] = None
    service_application_id: Optional[str] = None


@dataclass(frozen=True)
class UsageRecordResult:
    success: bool
    entry_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class City:
    name: str
    state: str
    distance_km: int  # from the Panchkula hub


@dataclass(frozen=True)
class CityEligibility:
    city_name: str
    matched: bool
    eligible: bool
    message: str
    distance_km: Optional[int] = None


@dataclass(frozen=True)
class NextAction:
    """What the customer can do next for an order"""

    action: str
    label: str
    blocked: bool


@dataclass(frozen=True)
class ExchangeRateBreakdown:
    """Customer rate for one product, split into base rate and service charge"""

    base_rate: Decimal  # inter-bank rate, INR per unit
    markup_percent: Decimal
    service_charge_per_unit: Decimal
    final_rate: Decimal
    amount_inr: Decimal  # at the base rate; selects the slab
    total_inr: Decimal  # at the final rate
    slab_range: str
