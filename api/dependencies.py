import logging

from fastapi import HTTPException, status
from redis.asyncio import Redis

from application.services import ConversionService, PriceService, SimulationService, TelegramService
from config.settings import Settings, get_settings
from domain.models.arbitrage import ExchangeDetails, ExchangeName, SanityBands
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.providers import (
	EXCHANGE_PROVIDERS,
	AwesomeAPIProvider,
	BCBProvider,
	CoinGeckoProvider,
	TickerSource,
)
from infrastructure.telegram import TelegramBotClient

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	redis_client: Redis | None = None
	providers: list | None = None
	price_service: PriceService | None = None
	simulation_service: SimulationService | None = None
	telegram_client: TelegramBotClient | None = None
	telegram_service: TelegramService | None = None


deps = AppDependencies()


def build_exchange_details(settings: Settings) -> list[ExchangeDetails]:
	return [
		ExchangeDetails(name=name, fee=settings.EXCHANGE_FEES[name.value])
		for name in ExchangeName
		if name.value in settings.EXCHANGE_FEES
	]


def build_ticker_sources(
	settings: Settings, coingecko: CoinGeckoProvider, bands: SanityBands
) -> list[TickerSource]:
	sources: list[TickerSource] = []
	for key in settings.PRICE_SOURCES:
		if key == 'exchanges':
			sources.extend(
				provider_cls(
					timeout=settings.REQUEST_TIMEOUT, user_agent=settings.USER_AGENT, bands=bands
				)
				for provider_cls in EXCHANGE_PROVIDERS
			)
		elif key == 'coingecko':
			sources.append(coingecko)
		else:
			logger.warning(f'Unknown price source {key!r} ignored')
	return sources


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	bands = SanityBands(
		brl_min=settings.BRL_MIN_PRICE,
		usd_low=settings.USD_BAND_LOW,
		usd_high=settings.USD_BAND_HIGH,
	)
	http_options = {'timeout': settings.REQUEST_TIMEOUT, 'user_agent': settings.USER_AGENT}

	coingecko = CoinGeckoProvider(base_url=settings.COINGECKO_BASE_URL, **http_options)
	rate_sources = [
		coingecko,
		AwesomeAPIProvider(base_url=settings.AWESOMEAPI_BASE_URL, **http_options),
		BCBProvider(base_url=settings.BCB_BASE_URL, **http_options),
	]
	ticker_sources = build_ticker_sources(settings, coingecko, bands)
	deps.providers = list({id(p): p for p in [*ticker_sources, *rate_sources]}.values())

	cache = None
	if settings.REDIS_URL:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		cache = RedisCacheService(deps.redis_client, rate_ttl=settings.CONVERSION_CACHE_TTL)

	conversion_service = ConversionService(sources=rate_sources, cache=cache)
	deps.price_service = PriceService(
		ticker_sources=ticker_sources,
		conversion_service=conversion_service,
		bands=bands,
		min_volume_usd=settings.MIN_VOLUME_USD,
	)
	deps.simulation_service = SimulationService(
		price_service=deps.price_service,
		details=build_exchange_details(settings),
		resale_price=settings.DEFAULT_RESALE_PRICE,
		resale_fee=settings.RESALE_FEE_FRACTION,
	)

	if settings.TELEGRAM_BOT_TOKEN:
		deps.telegram_client = TelegramBotClient(settings.TELEGRAM_BOT_TOKEN)
		deps.telegram_service = TelegramService(
			bot=deps.telegram_client,
			simulation_service=deps.simulation_service,
			channel_id=settings.TELEGRAM_CHANNEL_ID,
		)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.providers:
		for provider in deps.providers:
			await provider.close()
	if deps.telegram_client:
		await deps.telegram_client.close()

	logger.info('Cleanup complete')


def get_price_service() -> PriceService:
	if deps.price_service is None:
		raise RuntimeError('Price service not initialized')
	return deps.price_service


def get_simulation_service() -> SimulationService:
	if deps.simulation_service is None:
		raise RuntimeError('Simulation service not initialized')
	return deps.simulation_service


def get_telegram_service() -> TelegramService:
	if deps.telegram_service is None:
		raise HTTPException(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			detail='Bot token not configured',
		)
	return deps.telegram_service
