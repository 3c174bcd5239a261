"""Data access layer for the LRS usage ledger"""

from typing import List
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from forex_compliance.infrastructure.database.models import LRSUsageEntry
from forex_compliance.domain.exceptions import UsageStoreError
from forex_compliance.domain.models import FinancialYearUsage, UsageEntry
from forex_compliance.utils.money import round2


class LRSUsageRepository:
    """Repository for LRS usage rows. Rows are inserted, never updated."""

    def __init__(self, db: Session):
        self.db = db

    def get_financial_year_usage(self, user_id: str, financial_year: str) -> FinancialYearUsage:
        """
        Sum a user's ledger for one financial year.

        Raises:
            UsageStoreError: On any database failure
        """
        try:
            total, count = (
                self.db.query(
                    func.coalesce(func.sum(LRSUsageEntry.amount_usd), 0),
                    func.count(LRSUsageEntry.id),
                )
                .filter(
                    LRSUsageEntry.user_id == user_id,
                    LRSUsageEntry.financial_year == financial_year,
                )
                .one()
            )
        except SQLAlchemyError as e:
            raise UsageStoreError(f"Failed to read LRS usage: {e}") from e

        return FinancialYearUsage(
            user_id=user_id,
            financial_year=financial_year,
            total_amount_usd=round2(total),
            transaction_count=int(count),
        )

    def add_entry(self, entry: UsageEntry) -> LRSUsageEntry:
        """Append a ledger row and commit"""
        db_entry = LRSUsageEntry(
            user_id=entry.user_id,
            financial_year=entry.financial_year,
            service_type=entry.service_type.value,
            amount_usd=entry.amount_usd,
            purpose=entry.purpose,
            transaction_id=entry.transaction_id,
            currency_exchange_order_id=entry.currency_exchange_order_id,
            service_application_id=entry.service_application_id,
            transaction_date=entry.transaction_date,
        )
        try:
            self.db.add(db_entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UsageStoreError(f"Failed to record LRS usage: {e}") from e
        return db_entry

    def list_entries(self, user_id: str, financial_year: str, limit: int = 20) -> List[LRSUsageEntry]:
        """Fetch recent ledger rows for a user"""
        try:
            return (
                self.db.query(LRSUsageEntry)
                .filter(
                    LRSUsageEntry.user_id == user_id,
                    LRSUsageEntry.financial_year == financial_year,
                )
                .order_by(LRSUsageEntry.transaction_date.desc(), LRSUsageEntry.created_at.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise UsageStoreError(f"Failed to list LRS usage: {e}") from e
