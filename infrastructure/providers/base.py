import math
from abc import ABC, abstractmethod
from typing import Any, Protocol

import httpx

from domain.exceptions.arbitrage import SourceUnavailableError
from domain.models.arbitrage import Denomination, ExchangeName, SanityBands, TickerRecord

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/98.0.4758.102 Safari/537.36"
)


class TickerSource(Protocol):
    @property
    def name(self) -> str: ...

    async def fetch_tickers(self) -> list[TickerRecord]: ...

    async def close(self) -> None: ...


class BRLRateSource(Protocol):
    @property
    def name(self) -> str: ...

    async def fetch_rate(self) -> float: ...

    async def close(self) -> None: ...


def parse_price(value: Any) -> float | None:
    """Parse a numeric or string price; returns None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


class BaseJSONProvider(ABC):
    """A base class for JSON-over-HTTP sources, handling common request logic."""

    BASE_URL = ""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
        base_url: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    async def _request(self, endpoint: str, params: dict | None = None) -> Any:
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await self._client.get(url, params=params, headers=self.headers)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise SourceUnavailableError(
                f"{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise SourceUnavailableError(f"{self.name} request failed: {e.__class__.__name__}") from e
        except Exception as e:
            raise SourceUnavailableError(f"{self.name} response parsing error: {str(e)}") from e

    async def close(self) -> None:
        """Cleanly close the HTTP client."""
        await self._client.aclose()


class ExchangePriceSource(BaseJSONProvider):
    """A direct USDT/BRL price endpoint of a single exchange."""

    exchange: ExchangeName
    ENDPOINT = ""
    PARAMS: dict | None = None

    def __init__(self, *args, bands: SanityBands | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.bands = bands or SanityBands()

    @property
    def name(self) -> str:
        return self.exchange.value

    @abstractmethod
    def extract_price(self, payload: Any) -> float | None:
        """Pull the price out of the provider-specific response shape."""

    async def fetch_price(self) -> float:
        data = await self._request(self.ENDPOINT, dict(self.PARAMS) if self.PARAMS else None)
        price = self.extract_price(data)
        if price is None:
            raise SourceUnavailableError(f"No price found in {self.name} response")
        if not self.bands.is_plausible(price, Denomination.BRL):
            raise SourceUnavailableError(f"Implausible {self.name} USDT/BRL price: {price}")
        return price

    async def fetch_tickers(self) -> list[TickerRecord]:
        price = await self.fetch_price()
        return [TickerRecord(market=self.name, base="USDT", target="BRL", last=price)]


class RateProviderMixin:
    """Shared parsing for sources that report a BRL per USD rate."""

    name: str

    def _positive_rate(self, value: Any) -> float:
        rate = parse_price(value)
        if rate is None or rate <= 0:
            raise SourceUnavailableError(f"{self.name} returned no usable BRL rate: {value!r}")
        return rate
