from domain.exceptions.arbitrage import SourceUnavailableError

from .base import BaseJSONProvider, RateProviderMixin


class BCBProvider(RateProviderMixin, BaseJSONProvider):
    """Banco Central do Brasil reference rate (SGS series 1, USD/BRL sell)."""

    BASE_URL = "https://api.bcb.gov.br"
    SERIES = 1

    @property
    def name(self) -> str:
        return "bcb"

    async def fetch_rate(self) -> float:
        data = await self._request(
            f"dados/serie/bcdata.sgs.{self.SERIES}/dados/ultimos/1", {"formato": "json"}
        )
        try:
            value = data[0]["valor"]
        except (KeyError, IndexError, TypeError) as e:
            raise SourceUnavailableError("Missing valor in BCB response") from e
        return self._positive_rate(value)
