from typing import Any

from domain.models.arbitrage import ExchangeName

from .base import ExchangePriceSource, parse_price


class BybitProvider(ExchangePriceSource):
    BASE_URL = "https://api.bybit.com/v5"
    ENDPOINT = "market/tickers"
    PARAMS = {"category": "spot", "symbol": "USDTBRL"}
    exchange = ExchangeName.BYBIT

    def extract_price(self, payload: Any) -> float | None:
        # {"result": {"list": [{"lastPrice": "..."}]}}
        try:
            return parse_price(payload["result"]["list"][0]["lastPrice"])
        except (KeyError, IndexError, TypeError):
            return None
