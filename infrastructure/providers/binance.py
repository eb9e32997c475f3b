from typing import Any

from domain.models.arbitrage import ExchangeName

from .base import ExchangePriceSource, parse_price


class BinanceProvider(ExchangePriceSource):
    BASE_URL = "https://api.binance.com/api/v3"
    ENDPOINT = "ticker/24hr"
    PARAMS = {"symbol": "USDTBRL"}
    exchange = ExchangeName.BINANCE

    def extract_price(self, payload: Any) -> float | None:
        if not isinstance(payload, dict):
            return None
        return parse_price(payload.get("lastPrice"))
