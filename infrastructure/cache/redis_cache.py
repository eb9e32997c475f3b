import json
from datetime import datetime, timedelta

from redis import asyncio as redis

from domain.exceptions.arbitrage import CacheError
from domain.models.arbitrage import ConversionRate


class RedisCacheService:
    RATE_KEY = "rate:USD:BRL"

    def __init__(self, redis_client: redis.Redis, rate_ttl: int = 60):
        self.redis = redis_client
        self.rate_ttl = timedelta(seconds=rate_ttl)

    async def get_conversion_rate(self) -> ConversionRate | None:
        data = await self.redis.get(self.RATE_KEY)

        if not data:
            return None

        try:
            rate_dict = json.loads(data)
            return ConversionRate(
                rate=float(rate_dict["rate"]),
                source=rate_dict["source"],
                timestamp=datetime.fromisoformat(rate_dict["timestamp"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            raise CacheError(f"Invalid json data in cache: {e}") from e

    async def set_conversion_rate(self, rate: ConversionRate) -> None:
        rate_dict = {
            "rate": rate.rate,
            "source": rate.source,
            "timestamp": rate.timestamp.isoformat(),
        }

        await self.redis.setex(self.RATE_KEY, self.rate_ttl, json.dumps(rate_dict))
