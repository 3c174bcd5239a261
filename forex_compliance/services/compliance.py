"""Compliance services: calculators combined with their ledger lookups.

Data-access failures are converted here into safe results so a form wizard is
never blocked by a transient backend outage.
"""

import logging
from datetime import date
from typing import Optional

from forex_compliance.domain.exceptions import ConversionError, UsageStoreError
from forex_compliance.domain.lrs import check_limit, limit_unverified, summarize_usage
from forex_compliance.domain.models import (
    Direction,
    LimitCheckResult,
    LRSUsageSummary,
    TDSResult,
    UsageEntry,
    UsageRecordResult,
)
from forex_compliance.domain.tds import calculate_tds, tds_unavailable
from forex_compliance.infrastructure.conversion import CurrencyConverter
from forex_compliance.infrastructure.database.repositories import LRSUsageRepository
from forex_compliance.infrastructure.observability.metrics import (
    lrs_check_counter,
    rates_fetch_failures_counter,
    record_limit_check,
    record_tds,
    tds_calculation_counter,
    usage_store_failures_counter,
)
from forex_compliance.utils.date_utils import financial_year_for

logger = logging.getLogger(__name__)

# Ledger amounts are stored in USD; the TDS threshold is in INR
LEDGER_CURRENCY = "USD"
TDS_CURRENCY = "INR"


class TDSCalculator:
    """TDS for a user's purchase, against their financial-year purchase total"""

    def __init__(self, repository: LRSUsageRepository, converter: CurrencyConverter):
        self.repository = repository
        self.converter = converter

    async def calculate(
        self,
        user_id: str,
        amount_inr,
        purpose: str,
        direction: Direction,
        as_of: Optional[date] = None,
        request_id: str = "-",
    ) -> TDSResult:
        if Direction(direction) is Direction.SELL:
            record_tds(False)
            return calculate_tds(amount_inr, purpose, direction, prior_total_inr=0)

        as_of = as_of or date.today()
        try:
            usage = self.repository.get_financial_year_usage(user_id, financial_year_for(as_of))
            prior_inr = await self.converter.convert(
                usage.total_amount_usd, LEDGER_CURRENCY, TDS_CURRENCY, as_of
            )
        except UsageStoreError as e:
            usage_store_failures_counter.inc()
            tds_calculation_counter.labels(outcome="unavailable").inc()
            logger.error(
                f"TDS usage lookup failed: {e}",
                extra={"request_id": request_id, "user_id": user_id},
            )
            return tds_unavailable()
        except ConversionError as e:
            rates_fetch_failures_counter.inc()
            tds_calculation_counter.labels(outcome="unavailable").inc()
            logger.error(
                f"TDS conversion failed: {e}",
                extra={"request_id": request_id, "user_id": user_id},
            )
            return tds_unavailable()

        result = calculate_tds(amount_inr, purpose, direction, prior_inr)
        record_tds(result.applicable)
        return result


class LRSTracker:
    """Annual LRS allowance: read usage, check a candidate amount, record usage"""

    def __init__(self, repository: LRSUsageRepository):
        self.repository = repository

    def usage(
        self, user_id: str, as_of: Optional[date] = None, request_id: str = "-"
    ) -> Optional[LRSUsageSummary]:
        """Current FY summary, or None when the ledger is unreachable"""
        financial_year = financial_year_for(as_of or date.today())
        try:
            usage = self.repository.get_financial_year_usage(user_id, financial_year)
        except UsageStoreError as e:
            usage_store_failures_counter.inc()
            logger.error(
                f"LRS usage lookup failed: {e}",
                extra={"request_id": request_id, "user_id": user_id},
            )
            return None
        return summarize_usage(usage)

    def check(
        self, user_id: str, amount_usd, as_of: Optional[date] = None, request_id: str = "-"
    ) -> LimitCheckResult:
        """What-if check; never writes to the ledger"""
        summary = self.usage(user_id, as_of, request_id)
        if summary is None:
            lrs_check_counter.labels(outcome="unavailable").inc()
            return limit_unverified()
        result = check_limit(summary.total_used, amount_usd)
        record_limit_check(result.allowed, result.warning_message is not None)
        return result

    def record_usage(self, entry: UsageEntry, request_id: str = "-") -> UsageRecordResult:
        try:
            db_entry = self.repository.add_entry(entry)
        except UsageStoreError as e:
            usage_store_failures_counter.inc()
            logger.error(
                f"LRS usage record failed: {e}",
                extra={"request_id": request_id, "user_id": entry.user_id},
            )
            return UsageRecordResult(success=False, error=str(e))
        return UsageRecordResult(success=True, entry_id=str(db_entry.id))
