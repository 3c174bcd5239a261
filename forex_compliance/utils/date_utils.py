"""Financial year helpers (April-March cycle)"""

from datetime import date
from typing import Tuple


def financial_year_for(day: date) -> str:
    """Return the FY label containing `day`, e.g. 2025-04-01 -> "2025-26"."""
    if day.month >= 4:
        return f"{day.year}-{str(day.year + 1)[-2:]}"
    return f"{day.year - 1}-{str(day.year)[-2:]}"


def current_financial_year(today: date | None = None) -> str:
    return financial_year_for(today or date.today())


def financial_year_bounds(label: str) -> Tuple[date, date]:
    """First and last day (inclusive) of a "YYYY-YY" financial year

    Raises:
        ValueError: If the label is malformed or its two years are not consecutive
    """
    try:
        start_year = int(label[:4])
    except ValueError as e:
        raise ValueError(f"Invalid financial year label: {label!r}") from e
    start = date(start_year, 4, 1)
    if financial_year_for(start) != label:
        raise ValueError(f"Invalid financial year label: {label!r}")
    return start, date(start_year + 1, 3, 31)
