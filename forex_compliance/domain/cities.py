"""Doorstep delivery eligibility for currency exchange orders"""

from typing import List, Sequence

from forex_compliance.domain.models import City, CityEligibility

ORIGIN_CITY = "Panchkula, Haryana"
MAX_DELIVERY_RADIUS_KM = 150

# Distances are pre-computed road distances from the Panchkula hub.
# Shown in the city dropdown.
PREDEFINED_CITIES: List[City] = [
    City("Panchkula", "Haryana", 0),
    City("Chandigarh", "Chandigarh", 5),
    City("Mohali", "Punjab", 10),
    City("Zirakpur", "Punjab", 15),
    City("Derabassi", "Punjab", 25),
    City("Ambala", "Haryana", 45),
    City("Kurukshetra", "Haryana", 95),
    City("Yamunanagar", "Haryana", 65),
    City("Jagadhri", "Haryana", 60),
    City("Karnal", "Haryana", 120),
    City("Kaithal", "Haryana", 140),
    City("Pehowa", "Haryana", 110),
    City("Pinjore", "Haryana", 12),
    City("Kalka", "Haryana", 15),
    City("Nalagarh", "Himachal Pradesh", 35),
    City("Patiala", "Punjab", 70),
    City("Solan", "Himachal Pradesh", 50),
    City("Shimla", "Himachal Pradesh", 115),
    City("Dharampur", "Himachal Pradesh", 40),
    City("Kasauli", "Himachal Pradesh", 45),
]

# Accepted when typed, not listed in the dropdown
ADDITIONAL_VALID_CITIES: List[City] = [
    City("Baddi", "Himachal Pradesh", 30),
    City("Parwanoo", "Himachal Pradesh", 35),
    City("Rajpura", "Punjab", 40),
    City("Kharar", "Punjab", 15),
    City("Ropar", "Punjab", 45),
    City("Nangal", "Punjab", 80),
    City("Morinda", "Punjab", 50),
    City("Ludhiana", "Punjab", 100),
    City("Jalandhar", "Punjab", 145),
    City("Panipat", "Haryana", 140),
    City("Sonipat", "Haryana", 145),
    City("Rohtak", "Haryana", 145),
    City("Saharanpur", "Uttar Pradesh", 95),
    City("Meerut", "Uttar Pradesh", 140),
]

ALL_KNOWN_CITIES: List[City] = PREDEFINED_CITIES + ADDITIONAL_VALID_CITIES

OUTSIDE_RADIUS_MESSAGE = (
    f"Currency exchange delivery is currently available only within "
    f"{MAX_DELIVERY_RADIUS_KM} km of {ORIGIN_CITY}."
)
UNKNOWN_CITY_MESSAGE = (
    f"{OUTSIDE_RADIUS_MESSAGE} Please select a city from the list or contact "
    "support for other locations."
)


def validate_city(
    city_name: str,
    cities: Sequence[City] = ALL_KNOWN_CITIES,
    radius_km: int = MAX_DELIVERY_RADIUS_KM,
) -> CityEligibility:
    """
    Check whether a city is inside the delivery radius.

    Matching is exact after trimming and lower-casing. There is no geocoding:
    a city missing from the table is reported as ineligible even if it is
    actually close to the hub.
    """
    normalized = (city_name or "").strip().lower()
    if not normalized:
        return CityEligibility(
            city_name=city_name or "",
            matched=False,
            eligible=False,
            message="Please enter a city name",
        )

    found = next((c for c in cities if c.name.lower() == normalized), None)
    if found is None:
        return CityEligibility(
            city_name=city_name.strip(),
            matched=False,
            eligible=False,
            message=UNKNOWN_CITY_MESSAGE,
        )

    if found.distance_km <= radius_km:
        return CityEligibility(
            city_name=found.name,
            matched=True,
            eligible=True,
            distance_km=found.distance_km,
            message=f"{found.name} is within delivery radius ({found.distance_km} km from Panchkula)",
        )

    return CityEligibility(
        city_name=found.name,
        matched=True,
        eligible=False,
        distance_km=found.distance_km,
        message=OUTSIDE_RADIUS_MESSAGE,
    )


def eligible_cities(
    cities: Sequence[City] = ALL_KNOWN_CITIES,
    radius_km: int = MAX_DELIVERY_RADIUS_KM,
) -> List[City]:
    """All known cities inside the radius, nearest first"""
    return sorted((c for c in cities if c.distance_km <= radius_km), key=lambda c: c.distance_km)


def search_cities(query: str, cities: Sequence[City] = ALL_KNOWN_CITIES) -> List[City]:
    """Autocomplete: substring match on city or state name, nearest first"""
    normalized = (query or "").strip().lower()
    if len(normalized) < 2:
        return eligible_cities(cities)

    matches = [
        c for c in cities
        if normalized in c.name.lower() or normalized in c.state.lower()
    ]
    return sorted(matches, key=lambda c: c.distance_km)
