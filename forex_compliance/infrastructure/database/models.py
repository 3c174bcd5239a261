"""SQLAlchemy ORM models for the LRS usage ledger"""

import uuid
from sqlalchemy import Column, Date, DateTime, Numeric, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LRSUsageEntry(Base):
    """Append-only ledger row; one per LRS-consuming transaction"""

    __tablename__ = "lrs_usage"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    financial_year = Column(Text, nullable=False, index=True)
    service_type = Column(Text, nullable=False)
    amount_usd = Column(Numeric(14, 2), nullable=False)
    purpose = Column(Text, nullable=False)
    transaction_id = Column(Text, nullable=True)
    currency_exchange_order_id = Column(Text, nullable=True)
    service_application_id = Column(Text, nullable=True)
    transaction_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
