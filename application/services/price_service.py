import asyncio
import logging
from datetime import datetime

from application.services.conversion_service import ConversionService
from domain.models.arbitrage import (
    AggregatedQuotes,
    ConversionRate,
    Denomination,
    ExchangeName,
    ExchangeQuote,
    SanityBands,
    TickerRecord,
    match_exchange,
)
from infrastructure.providers.base import TickerSource

logger = logging.getLogger(__name__)


class PriceService:
    """Aggregates USDT/BRL buy prices for the fixed set of supported exchanges."""

    def __init__(
        self,
        ticker_sources: list[TickerSource],
        conversion_service: ConversionService,
        bands: SanityBands | None = None,
        min_volume_usd: float = 1000.0,
        exchanges: list[ExchangeName] | None = None,
    ):
        self.ticker_sources = ticker_sources
        self.conversion_service = conversion_service
        self.bands = bands or SanityBands()
        self.min_volume_usd = min_volume_usd
        self.exchanges = exchanges or list(ExchangeName)

    async def get_quotes(self) -> AggregatedQuotes:
        """
        1. Resolve the conversion rate and fetch every ticker source concurrently
        2. Keep, per exchange, the highest priority valid candidate
        3. Project onto the fixed exchange list, absent exchanges become None
        """
        rate, *source_results = await asyncio.gather(
            self.conversion_service.try_resolve(),
            *(self._fetch_source(source) for source in self.ticker_sources),
        )

        # exchange -> (price, priority); first seen wins among equal priority
        best: dict[ExchangeName, tuple[float, int]] = {}
        for records in source_results:
            for record in records:
                candidate = self._evaluate(record, rate)
                if candidate is None:
                    continue
                name, price, priority = candidate
                current = best.get(name)
                if current is None or priority > current[1]:
                    best[name] = (price, priority)

        quotes = [
            ExchangeQuote(name=name, buy_price=best[name][0] if name in best else None)
            for name in self.exchanges
        ]

        missing = [q.name.value for q in quotes if q.buy_price is None]
        if missing:
            logger.warning(f"No usable quote for: {', '.join(missing)}")

        return AggregatedQuotes(quotes=quotes, conversion_rate=rate, timestamp=datetime.now())

    async def _fetch_source(self, source: TickerSource) -> list[TickerRecord]:
        try:
            records = await source.fetch_tickers()
        except Exception as e:
            logger.warning(f"Price source {source.name} failed: {e}")
            return []

        logger.info(f"Price source {source.name} returned {len(records)} records")
        return records

    def _evaluate(
        self, record: TickerRecord, rate: ConversionRate | None
    ) -> tuple[ExchangeName, float, int] | None:
        name = match_exchange(record.market)
        if name is None or name not in self.exchanges:
            return None

        if record.is_stale:
            logger.debug(f"Skipping stale {record.market} {record.base}/{record.target}")
            return None
        if record.volume_usd is not None and record.volume_usd < self.min_volume_usd:
            logger.debug(f"Skipping low volume {record.market} {record.base}/{record.target}")
            return None

        if record.base.upper() != "USDT":
            return None
        denomination = Denomination.from_currency(record.target)
        if denomination is None or record.last is None:
            return None
        if not self.bands.is_plausible(record.last, denomination):
            logger.debug(f"Rejecting implausible {record.market} {record.target} price {record.last}")
            return None

        if denomination is Denomination.BRL:
            return name, record.last, denomination.priority

        if rate is None:
            return None
        return name, record.last * rate.rate, denomination.priority
