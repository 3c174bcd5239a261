"""Delivery city validation and autocomplete"""

from fastapi import APIRouter, Query

from forex_compliance.api.v1.schemas import CityEligibilityResponse, CitySchema, CitySearchResponse
from forex_compliance.domain.cities import search_cities, validate_city
from forex_compliance.infrastructure.observability.metrics import record_city_validation

router = APIRouter()


@router.get("/cities/validate", response_model=CityEligibilityResponse)
def validate_delivery_city(name: str = Query("", description="City name as typed by the customer")):
    result = validate_city(name)
    record_city_validation(result.matched, result.eligible)

    return CityEligibilityResponse(
        city_name=result.city_name,
        matched=result.matched,
        eligible=result.eligible,
        distance_km=result.distance_km,
        message=result.message,
    )


@router.get("/cities/search", response_model=CitySearchResponse)
def search_delivery_cities(q: str = Query("", description="Partial city or state name")):
    return CitySearchResponse(
        query=q,
        cities=[CitySchema(name=c.name, state=c.state, distance_km=c.distance_km) for c in search_cities(q)],
    )
