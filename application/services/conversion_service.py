import logging
from datetime import datetime

from redis.exceptions import RedisError

from domain.exceptions.arbitrage import CacheError, ConversionUnavailableError
from domain.models.arbitrage import ConversionRate
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.providers.base import BRLRateSource

logger = logging.getLogger(__name__)


class ConversionService:
    """Resolves BRL per USD from an ordered chain of sources.

    Each source is tried only after the previous one failed. The first usable
    rate wins; if every source fails the rate is unavailable.
    """

    def __init__(self, sources: list[BRLRateSource], cache: RedisCacheService | None = None):
        self.sources = sources
        self.cache = cache

    async def resolve(self) -> ConversionRate:
        cached = await self._read_cache()
        if cached is not None:
            return cached

        for source in self.sources:
            try:
                value = await source.fetch_rate()
            except Exception as e:
                logger.warning(f"BRL rate source {source.name} failed: {e}")
                continue

            rate = ConversionRate(rate=value, source=source.name, timestamp=datetime.now())
            logger.info(f"Resolved BRL rate {value} from {source.name}")
            await self._write_cache(rate)
            return rate

        raise ConversionUnavailableError(
            f"All BRL rate sources failed: {', '.join(s.name for s in self.sources)}"
        )

    async def try_resolve(self) -> ConversionRate | None:
        try:
            return await self.resolve()
        except ConversionUnavailableError as e:
            logger.error(str(e))
            return None

    async def _read_cache(self) -> ConversionRate | None:
        if self.cache is None:
            return None
        try:
            return await self.cache.get_conversion_rate()
        except (CacheError, RedisError) as e:
            logger.warning(f"Conversion rate cache read failed: {e}")
            return None

    async def _write_cache(self, rate: ConversionRate) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set_conversion_rate(rate)
        except RedisError as e:
            logger.warning(f"Conversion rate cache write failed: {e}")
