from typing import Any

from domain.models.arbitrage import ExchangeName

from .base import ExchangePriceSource, parse_price


class CoinbaseProvider(ExchangePriceSource):
    BASE_URL = "https://api.coinbase.com/v2"
    ENDPOINT = "prices/USDT-BRL/spot"
    exchange = ExchangeName.COINBASE

    def extract_price(self, payload: Any) -> float | None:
        try:
            return parse_price(payload["data"]["amount"])
        except (KeyError, TypeError):
            return None
