import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class ExchangeName(str, Enum):
    """Supported exchanges. Declaration order is the result order."""

    BINANCE = "Binance"
    BYBIT = "Bybit"
    KUCOIN = "KuCoin"
    COINBASE = "Coinbase"


class Denomination(str, Enum):
    BRL = "BRL"
    USD = "USD"

    @property
    def priority(self) -> int:
        return 1 if self is Denomination.BRL else 0

    @classmethod
    def from_currency(cls, code: str | None) -> "Denomination | None":
        code = (code or "").upper()
        if code == "BRL":
            return cls.BRL
        if code in ("USD", "USDT"):
            return cls.USD
        return None


# Lowercase tokens looked up inside upstream market names.
EXCHANGE_TOKENS: dict[ExchangeName, tuple[str, ...]] = {
    ExchangeName.BINANCE: ("binance",),
    ExchangeName.BYBIT: ("bybit",),
    ExchangeName.KUCOIN: ("kucoin",),
    ExchangeName.COINBASE: ("coinbase",),
}


def match_exchange(market_name: str | None) -> ExchangeName | None:
    if not market_name:
        return None
    lowered = market_name.lower()
    for name, tokens in EXCHANGE_TOKENS.items():
        if any(token in lowered for token in tokens):
            return name
    return None


def is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass(frozen=True)
class SanityBands:
    brl_min: float = 1.0
    usd_low: float = 0.9
    usd_high: float = 1.1

    def is_plausible(self, value: float, denomination: Denomination) -> bool:
        if not is_number(value):
            return False
        if denomination is Denomination.BRL:
            return value > self.brl_min
        return self.usd_low <= value <= self.usd_high


@dataclass(frozen=True)
class TickerRecord:
    market: str
    base: str
    target: str
    last: float | None
    is_stale: bool = False
    volume_usd: float | None = None


@dataclass(frozen=True)
class ExchangeQuote:
    name: ExchangeName
    buy_price: float | None


@dataclass(frozen=True)
class ExchangeDetails:
    name: ExchangeName
    fee: float


@dataclass(frozen=True)
class Exchange:
    name: ExchangeName
    fee: float
    buy_price: float | None


def join_quotes(
    quotes: list[ExchangeQuote], details: list[ExchangeDetails]
) -> list[Exchange]:
    """Attach static fee details to live quotes; quotes without details are dropped."""
    by_name = {d.name: d for d in details}
    exchanges = []
    for quote in quotes:
        detail = by_name.get(quote.name)
        if detail is None:
            continue
        exchanges.append(Exchange(name=quote.name, fee=detail.fee, buy_price=quote.buy_price))
    return exchanges


@dataclass(frozen=True)
class ConversionRate:
    rate: float
    source: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class SimulationResult:
    exchange_name: ExchangeName
    initial_amount: float
    buy_price: float | None = None
    units_after_fee: float | None = None
    final_amount: float | None = None
    profit: float | None = None
    profit_percentage: float | None = None
    best: bool = False

    @property
    def has_quote(self) -> bool:
        return self.profit is not None

    def mark_best(self) -> "SimulationResult":
        return replace(self, best=True)


@dataclass(frozen=True)
class AggregatedQuotes:
    quotes: list[ExchangeQuote]
    conversion_rate: ConversionRate | None
    timestamp: datetime

    @property
    def has_any_price(self) -> bool:
        return any(q.buy_price is not None for q in self.quotes)


@dataclass(frozen=True)
class SimulationReport:
    amount: float
    resale_price: float
    results: list[SimulationResult]
    quotes: AggregatedQuotes

    @property
    def best(self) -> SimulationResult | None:
        return next((r for r in self.results if r.best), None)

    @property
    def has_any_quote(self) -> bool:
        return any(r.has_quote for r in self.results)
