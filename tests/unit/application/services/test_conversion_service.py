# nosec B101


import pytest
from datetime import datetime
from unittest.mock import AsyncMock, Mock

from redis.exceptions import ConnectionError as RedisConnectionError

from application.services.conversion_service import ConversionService
from domain.exceptions.arbitrage import CacheError, ConversionUnavailableError, SourceUnavailableError
from domain.models.arbitrage import ConversionRate


def make_source(name, rate=None, error=None):
    source = Mock()
    source.name = name
    source.fetch_rate = AsyncMock(return_value=rate, side_effect=error)
    return source


@pytest.mark.asyncio
async def test_first_source_wins_and_later_sources_not_queried():
    primary = make_source('coingecko', rate=5.19)
    spot = make_source('awesomeapi', rate=5.12)
    bcb = make_source('bcb', rate=5.10)
    service = ConversionService(sources=[primary, spot, bcb])

    result = await service.resolve()

    assert result.rate == 5.19
    assert result.source == 'coingecko'
    spot.fetch_rate.assert_not_called()
    bcb.fetch_rate.assert_not_called()


@pytest.mark.asyncio
async def test_falls_back_to_second_source():
    primary = make_source('coingecko', error=SourceUnavailableError('down'))
    spot = make_source('awesomeapi', rate=5.12)
    service = ConversionService(sources=[primary, spot, make_source('bcb', rate=5.10)])

    result = await service.resolve()

    assert result.rate == 5.12
    assert result.source == 'awesomeapi'


@pytest.mark.asyncio
async def test_central_bank_rate_used_exactly_when_others_fail(caplog):
    primary = make_source('coingecko', error=SourceUnavailableError('timeout'))
    spot = make_source('awesomeapi', error=SourceUnavailableError('HTTP error 429'))
    bcb = make_source('bcb', rate=5.4321)
    service = ConversionService(sources=[primary, spot, bcb])

    result = await service.resolve()

    assert result.rate == 5.4321
    assert result.source == 'bcb'
    warnings = [r for r in caplog.records if r.levelname == 'WARNING']
    assert len(warnings) == 2


@pytest.mark.asyncio
async def test_unexpected_source_exception_is_absorbed():
    primary = make_source('coingecko', error=RuntimeError('boom'))
    spot = make_source('awesomeapi', rate=5.12)
    service = ConversionService(sources=[primary, spot])

    assert (await service.resolve()).rate == 5.12


@pytest.mark.asyncio
async def test_all_sources_fail_raises_conversion_unavailable():
    service = ConversionService(sources=[
        make_source('coingecko', error=SourceUnavailableError('a')),
        make_source('awesomeapi', error=SourceUnavailableError('b')),
        make_source('bcb', error=SourceUnavailableError('c')),
    ])

    with pytest.raises(ConversionUnavailableError) as exc_info:
        await service.resolve()

    assert 'coingecko, awesomeapi, bcb' in str(exc_info.value)


@pytest.mark.asyncio
async def test_try_resolve_returns_none_when_unavailable():
    service = ConversionService(sources=[make_source('bcb', error=SourceUnavailableError('c'))])

    assert await service.try_resolve() is None


@pytest.mark.asyncio
async def test_cache_hit_skips_sources():
    cached = ConversionRate(rate=5.2, source='awesomeapi', timestamp=datetime(2026, 10, 19, 10, 0))
    cache = AsyncMock()
    cache.get_conversion_rate.return_value = cached
    primary = make_source('coingecko', rate=5.19)
    service = ConversionService(sources=[primary], cache=cache)

    result = await service.resolve()

    assert result is cached
    primary.fetch_rate.assert_not_called()
    cache.set_conversion_rate.assert_not_called()


@pytest.mark.asyncio
async def test_cache_miss_resolves_and_stores():
    cache = AsyncMock()
    cache.get_conversion_rate.return_value = None
    service = ConversionService(sources=[make_source('coingecko', rate=5.19)], cache=cache)

    result = await service.resolve()

    cache.set_conversion_rate.assert_awaited_once_with(result)


@pytest.mark.asyncio
async def test_cache_failures_do_not_break_resolution():
    cache = AsyncMock()
    cache.get_conversion_rate.side_effect = CacheError('Invalid json data')
    cache.set_conversion_rate.side_effect = RedisConnectionError('refused')
    service = ConversionService(sources=[make_source('coingecko', rate=5.19)], cache=cache)

    result = await service.resolve()

    assert result.rate == 5.19
