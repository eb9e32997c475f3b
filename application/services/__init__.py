from .conversion_service import ConversionService
from .price_service import PriceService
from .simulation_service import SimulationService
from .telegram_service import TelegramService

__all__ = ['ConversionService', 'PriceService', 'SimulationService', 'TelegramService']
