from typing import Any

from domain.models.arbitrage import ExchangeName

from .base import ExchangePriceSource, parse_price


class KuCoinProvider(ExchangePriceSource):
    BASE_URL = "https://api.kucoin.com/api/v1"
    ENDPOINT = "market/orderbook/level1"
    PARAMS = {"symbol": "USDT-BRL"}
    exchange = ExchangeName.KUCOIN

    def extract_price(self, payload: Any) -> float | None:
        try:
            return parse_price(payload["data"]["price"])
        except (KeyError, TypeError):
            return None
