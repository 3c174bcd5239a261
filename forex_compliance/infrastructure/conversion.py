"""Currency conversion used when aggregating financial-year totals.

Calculators never hold a conversion rate themselves; a converter is injected so
tax and limit figures follow whatever rate source is configured.
"""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Protocol

from forex_compliance.domain.exceptions import ConversionError
from forex_compliance.infrastructure.clients.rates import RatesClient
from forex_compliance.utils.money import round2, to_decimal


class CurrencyConverter(Protocol):
    async def convert(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency: str,
        as_of: Optional[date] = None,
    ) -> Decimal: ...


def _convert_via_inr(amount, from_currency: str, to_currency: str, inr_rates: Mapping[str, Decimal]) -> Decimal:
    source, target = from_currency.upper(), to_currency.upper()
    amount = to_decimal(amount)
    if source == target:
        return amount
    try:
        from_rate = Decimal(1) if source == "INR" else to_decimal(inr_rates[source])
        to_rate = Decimal(1) if target == "INR" else to_decimal(inr_rates[target])
    except KeyError as e:
        raise ConversionError(f"No rate available for {e.args[0]}") from e
    return round2(amount * from_rate / to_rate)


class StaticRateConverter:
    """Converts with a fixed table of INR-per-unit reference rates"""

    def __init__(self, inr_rates: Mapping[str, float]):
        self.inr_rates = {k.upper(): to_decimal(v) for k, v in inr_rates.items()}

    async def convert(self, amount, from_currency, to_currency, as_of=None) -> Decimal:
        return _convert_via_inr(amount, from_currency, to_currency, self.inr_rates)


class LiveRateConverter:
    """
    Converts with rates fetched from the rates API on each call.

    The provider only serves latest rates, so `as_of` is accepted but not
    honoured.
    """

    def __init__(self, client: RatesClient):
        self.client = client

    async def convert(self, amount, from_currency, to_currency, as_of=None) -> Decimal:
        if from_currency.upper() == to_currency.upper():
            return to_decimal(amount)
        rates = await self.client.get_inr_rates()
        return _convert_via_inr(amount, from_currency, to_currency, rates)
