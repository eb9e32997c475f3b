from .awesomeapi import AwesomeAPIProvider
from .base import BaseJSONProvider, BRLRateSource, ExchangePriceSource, TickerSource
from .binance import BinanceProvider
from .bybit import BybitProvider
from .bcb import BCBProvider
from .coinbase import CoinbaseProvider
from .coingecko import CoinGeckoProvider
from .kucoin import KuCoinProvider

EXCHANGE_PROVIDERS: list[type[ExchangePriceSource]] = [
    BinanceProvider,
    BybitProvider,
    KuCoinProvider,
    CoinbaseProvider,
]

__all__ = [
    'AwesomeAPIProvider',
    'BaseJSONProvider',
    'BRLRateSource',
    'BCBProvider',
    'BinanceProvider',
    'BybitProvider',
    'CoinbaseProvider',
    'CoinGeckoProvider',
    'EXCHANGE_PROVIDERS',
    'ExchangePriceSource',
    'KuCoinProvider',
    'TickerSource',
]
