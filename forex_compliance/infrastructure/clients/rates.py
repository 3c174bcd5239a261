"""Exchange rate HTTP client"""

import httpx
from decimal import Decimal, InvalidOperation
from typing import Dict
from forex_compliance.domain.exceptions import RatesAPIError
from forex_compliance.config import settings


class RatesClient:
    """Client for an exchangerate-api style `/latest/{base}` endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.rates_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_inr_rates(self) -> Dict[str, Decimal]:
        """
        Fetch INR per 1 unit of each foreign currency.

        The upstream quotes foreign units per 1 INR, so every rate is inverted.

        Raises:
            RatesAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}/INR")
                response.raise_for_status()
                data = response.json()

                rates: Dict[str, Decimal] = {}
                for currency, per_inr in data["rates"].items():
                    per_inr = Decimal(str(per_inr))
                    if per_inr > 0:
                        rates[currency.upper()] = Decimal(1) / per_inr
                rates["INR"] = Decimal(1)
                return rates

            except httpx.TimeoutException as e:
                raise RatesAPIError(f"Rates API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise RatesAPIError(f"Rates API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RatesAPIError(f"Rates API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError, InvalidOperation) as e:
                raise RatesAPIError(f"Invalid rate data from provider: {e}") from e
