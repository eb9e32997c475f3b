from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'USDT/BRL Arbitrage API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'

	# Outbound HTTP
	REQUEST_TIMEOUT: float = 10.0
	USER_AGENT: str = (
		'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
		'(KHTML, like Gecko) Chrome/98.0.4758.102 Safari/537.36'
	)

	# Price sources, iterated in this order
	PRICE_SOURCES: list[str] = ['exchanges', 'coingecko']
	COINGECKO_BASE_URL: str = 'https://api.coingecko.com/api/v3'
	AWESOMEAPI_BASE_URL: str = 'https://economia.awesomeapi.com.br'
	BCB_BASE_URL: str = 'https://api.bcb.gov.br'

	# Sanity bands and filters
	BRL_MIN_PRICE: float = 1.0
	USD_BAND_LOW: float = 0.9
	USD_BAND_HIGH: float = 1.1
	MIN_VOLUME_USD: float = 1000.0

	# Simulation
	EXCHANGE_FEES: dict[str, float] = {
		'Binance': 0.001,
		'Bybit': 0.001,
		'KuCoin': 0.001,
		'Coinbase': 0.005,
	}
	RESALE_FEE_FRACTION: float = 0.002
	DEFAULT_RESALE_PRICE: float = 5.25

	# Conversion rate cache, disabled when empty
	REDIS_URL: str = ''
	CONVERSION_CACHE_TTL: int = 60

	# Telegram
	TELEGRAM_BOT_TOKEN: str = ''
	TELEGRAM_CHANNEL_ID: str = '@upsurechanel'
	PUBLIC_APP_URL: str = ''

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
