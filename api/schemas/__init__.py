from .requests import ResalePriceRequest, SimulationRequest
from .responses import (
	QuoteResponse,
	QuotesResponse,
	ResalePriceResponse,
	SimulationResponse,
	SimulationRowResponse,
)

__all__ = [
	'QuoteResponse',
	'QuotesResponse',
	'ResalePriceRequest',
	'ResalePriceResponse',
	'SimulationRequest',
	'SimulationResponse',
	'SimulationRowResponse',
]
