import logging
from typing import Any

from domain.exceptions.arbitrage import SourceUnavailableError
from domain.models.arbitrage import TickerRecord

from .base import BaseJSONProvider, RateProviderMixin, parse_price

logger = logging.getLogger(__name__)


class CoinGeckoProvider(RateProviderMixin, BaseJSONProvider):
    """Broad aggregator: USDT tickers across markets and the tether/BRL price."""

    BASE_URL = "https://api.coingecko.com/api/v3"
    # CoinGecko ids of the supported markets; Coinbase is listed as "gdax".
    EXCHANGE_IDS = "binance,bybit_spot,kucoin,gdax"

    @property
    def name(self) -> str:
        return "coingecko"

    async def fetch_tickers(self) -> list[TickerRecord]:
        data = await self._request("coins/tether/tickers", {"exchange_ids": self.EXCHANGE_IDS})
        tickers = data.get("tickers") if isinstance(data, dict) else None
        if not isinstance(tickers, list):
            raise SourceUnavailableError("CoinGecko tickers payload is not a list")

        records = []
        for ticker in tickers:
            record = self._to_record(ticker)
            if record is not None:
                records.append(record)
        logger.debug(f"CoinGecko returned {len(records)} usable tickers out of {len(tickers)}")
        return records

    async def fetch_rate(self) -> float:
        data = await self._request("simple/price", {"ids": "tether", "vs_currencies": "brl"})
        try:
            value = data["tether"]["brl"]
        except (KeyError, TypeError) as e:
            raise SourceUnavailableError("Missing tether/brl in CoinGecko response") from e
        return self._positive_rate(value)

    @staticmethod
    def _to_record(ticker: Any) -> TickerRecord | None:
        if not isinstance(ticker, dict):
            return None
        market = ticker.get("market")
        market_name = market.get("name") if isinstance(market, dict) else None
        if not market_name:
            return None

        volume = ticker.get("converted_volume")
        volume_usd = parse_price(volume.get("usd")) if isinstance(volume, dict) else None

        return TickerRecord(
            market=str(market_name),
            base=str(ticker.get("base") or "").upper(),
            target=str(ticker.get("target") or "").upper(),
            last=parse_price(ticker.get("last")),
            is_stale=bool(ticker.get("is_stale")) or bool(ticker.get("is_anomaly")),
            volume_usd=volume_usd,
        )
