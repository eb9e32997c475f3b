from domain.exceptions.arbitrage import SourceUnavailableError

from .base import BaseJSONProvider, RateProviderMixin


class AwesomeAPIProvider(RateProviderMixin, BaseJSONProvider):
    """USD/BRL spot quote from economia.awesomeapi.com.br."""

    BASE_URL = "https://economia.awesomeapi.com.br"

    @property
    def name(self) -> str:
        return "awesomeapi"

    async def fetch_rate(self) -> float:
        data = await self._request("json/last/USD-BRL")
        try:
            bid = data["USDBRL"]["bid"]
        except (KeyError, TypeError) as e:
            raise SourceUnavailableError("Missing USDBRL bid in AwesomeAPI response") from e
        return self._positive_rate(bid)
