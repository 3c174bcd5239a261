"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from forex_compliance.api.main import create_app
from forex_compliance.api.dependencies import get_currency_converter
from forex_compliance.domain.exceptions import UsageStoreError
from forex_compliance.domain.models import ServiceType, UsageEntry
from forex_compliance.infrastructure.conversion import StaticRateConverter
from forex_compliance.infrastructure.database.models import Base
from forex_compliance.infrastructure.database.repositories import LRSUsageRepository
from forex_compliance.infrastructure.database.session import get_db
from forex_compliance.utils.date_utils import current_financial_year


# Test database
TEST_DATABASE_URL = "sqlite:///./test_forex.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Round number so USD ledger totals convert to exact INR figures
TEST_INR_PER_USD = 100


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def converter() -> StaticRateConverter:
    return StaticRateConverter({"USD": TEST_INR_PER_USD, "EUR": 110})


@pytest.fixture
def repository(db: Session) -> LRSUsageRepository:
    return LRSUsageRepository(db)


@pytest.fixture
def client(db: Session, converter: StaticRateConverter) -> TestClient:
    """Create FastAPI test client with test database and fixed rates"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_currency_converter] = lambda: converter
    return TestClient(app)


@pytest.fixture
def make_entry():
    """Build a ledger entry in the current financial year"""

    def _make(user_id: str, amount_usd, service_type: ServiceType = ServiceType.REMITTANCE, **kwargs) -> UsageEntry:
        return UsageEntry(
            user_id=user_id,
            financial_year=kwargs.pop("financial_year", current_financial_year()),
            service_type=service_type,
            amount_usd=Decimal(str(amount_usd)),
            purpose=kwargs.pop("purpose", "education"),
            transaction_date=kwargs.pop("transaction_date", date.today()),
            **kwargs,
        )

    return _make


class BrokenRepository:
    """Stands in for the ledger while the backend is down"""

    def get_financial_year_usage(self, user_id, financial_year):
        raise UsageStoreError("connection refused")

    def add_entry(self, entry):
        raise UsageStoreError("connection refused")

    def list_entries(self, user_id, financial_year, limit=20):
        raise UsageStoreError("connection refused")


@pytest.fixture
def broken_repository() -> BrokenRepository:
    return BrokenRepository()
