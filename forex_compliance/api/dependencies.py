"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from forex_compliance.config import settings
from forex_compliance.infrastructure.clients.rates import RatesClient
from forex_compliance.infrastructure.conversion import CurrencyConverter, LiveRateConverter, StaticRateConverter
from forex_compliance.infrastructure.database.repositories import LRSUsageRepository
from forex_compliance.infrastructure.database.session import get_db
from forex_compliance.services.compliance import LRSTracker, TDSCalculator


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_currency_converter() -> CurrencyConverter:
    """Converter selected by the rates_provider setting"""
    if settings.rates_provider == "http":
        return LiveRateConverter(RatesClient())
    return StaticRateConverter(settings.reference_rates)


def get_usage_repository(db: Session = Depends(get_db)) -> LRSUsageRepository:
    return LRSUsageRepository(db)


def get_tds_calculator(
    repository: LRSUsageRepository = Depends(get_usage_repository),
    converter: CurrencyConverter = Depends(get_currency_converter),
) -> TDSCalculator:
    return TDSCalculator(repository, converter)


def get_lrs_tracker(repository: LRSUsageRepository = Depends(get_usage_repository)) -> LRSTracker:
    return LRSTracker(repository)
