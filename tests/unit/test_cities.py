"""Unit tests for delivery city validation"""

import pytest
from forex_compliance.domain.cities import (
    ALL_KNOWN_CITIES,
    MAX_DELIVERY_RADIUS_KM,
    OUTSIDE_RADIUS_MESSAGE,
    UNKNOWN_CITY_MESSAGE,
    eligible_cities,
    search_cities,
    validate_city,
)
from forex_compliance.domain.models import City


def test_known_city_within_radius():
    result = validate_city("Zirakpur")

    assert result.matched is True
    assert result.distance_km == 15
    assert result.eligible is True
    assert "Zirakpur" in result.message


@pytest.mark.parametrize("name", ["Chandigarh", "chandigarh ", "CHANDIGARH", "  ChAnDiGaRh"])
def test_lookup_is_case_and_whitespace_insensitive(name):
    result = validate_city(name)

    assert result == validate_city("Chandigarh")
    assert result.eligible is True
    assert result.distance_km == 5


def test_typed_only_city_is_accepted():
    result = validate_city("ludhiana")

    assert result.matched is True
    assert result.city_name == "Ludhiana"
    assert result.eligible is True


def test_unknown_city_gets_generic_message():
    result = validate_city("Nowhereville")

    assert result.matched is False
    assert result.eligible is False
    assert result.distance_km is None
    assert result.message == UNKNOWN_CITY_MESSAGE
    assert "contact support" in result.message


def test_city_beyond_radius():
    table = [City("Panchkula", "Haryana", 0), City("Delhi", "Delhi", 250)]

    result = validate_city("Delhi", cities=table)

    assert result.matched is True
    assert result.eligible is False
    assert result.distance_km == 250
    assert result.message == OUTSIDE_RADIUS_MESSAGE


def test_radius_boundary_is_inclusive():
    table = [City("Edge", "Nowhere", MAX_DELIVERY_RADIUS_KM)]

    assert validate_city("edge", cities=table).eligible is True


@pytest.mark.parametrize("name", ["", "   ", None])
def test_empty_input(name):
    result = validate_city(name)

    assert result.matched is False
    assert result.eligible is False
    assert result.message == "Please enter a city name"


def test_search_by_state_sorted_by_distance():
    results = search_cities("himachal")

    assert results[0].name == "Baddi"
    assert all(c.state == "Himachal Pradesh" for c in results)
    distances = [c.distance_km for c in results]
    assert distances == sorted(distances)


def test_search_by_name_substring():
    names = [c.name for c in search_cities("pur")]

    assert "Zirakpur" in names
    assert "Rajpura" in names
    assert "Saharanpur" in names


@pytest.mark.parametrize("query", ["", "a", " k "])
def test_short_query_returns_all_eligible_cities(query):
    assert search_cities(query) == eligible_cities()


def test_search_no_match():
    assert search_cities("zzz") == []


def test_eligible_cities_sorted_and_within_radius():
    cities = eligible_cities()

    assert len(cities) == len(ALL_KNOWN_CITIES)
    assert cities[0].name == "Panchkula"
    assert all(c.distance_km <= MAX_DELIVERY_RADIUS_KM for c in cities)
    distances = [c.distance_km for c in cities]
    assert distances == sorted(distances)
