from datetime import datetime

from pydantic import BaseModel, Field

from domain.models.arbitrage import AggregatedQuotes, ExchangeName, SimulationReport, SimulationResult


class QuoteResponse(BaseModel):
	name: ExchangeName
	buy_price: float | None = Field(..., description='BRL price of 1 USDT, null when unavailable')


class QuotesResponse(BaseModel):
	quotes: list[QuoteResponse]
	conversion_rate: float | None = Field(None, description='BRL per USD used for USD quotes')
	conversion_source: str | None = None
	timestamp: datetime
	has_any_price: bool = Field(..., description='False when every source failed and all prices are null')

	@classmethod
	def from_domain(cls, aggregated: AggregatedQuotes) -> 'QuotesResponse':
		rate = aggregated.conversion_rate
		return cls(
			quotes=[QuoteResponse(name=q.name, buy_price=q.buy_price) for q in aggregated.quotes],
			conversion_rate=rate.rate if rate else None,
			conversion_source=rate.source if rate else None,
			timestamp=aggregated.timestamp,
			has_any_price=aggregated.has_any_price,
		)


class SimulationRowResponse(BaseModel):
	exchange_name: ExchangeName
	initial_amount: float
	buy_price: float | None
	units_after_fee: float | None
	final_amount: float | None
	profit: float | None
	profit_percentage: float | None
	best: bool = False

	@classmethod
	def from_domain(cls, result: SimulationResult) -> 'SimulationRowResponse':
		return cls(
			exchange_name=result.exchange_name,
			initial_amount=result.initial_amount,
			buy_price=result.buy_price,
			units_after_fee=result.units_after_fee,
			final_amount=result.final_amount,
			profit=result.profit,
			profit_percentage=result.profit_percentage,
			best=result.best,
		)


class SimulationResponse(BaseModel):
	amount: float
	resale_price: float
	results: list[SimulationRowResponse]
	best_exchange: ExchangeName | None = Field(None, description='Greatest positive profit, if any')
	timestamp: datetime
	has_any_price: bool = Field(..., description='False when no exchange produced a usable quote')

	@classmethod
	def from_domain(cls, report: SimulationReport) -> 'SimulationResponse':
		best = report.best
		return cls(
			amount=report.amount,
			resale_price=report.resale_price,
			results=[SimulationRowResponse.from_domain(r) for r in report.results],
			best_exchange=best.exchange_name if best else None,
			timestamp=report.quotes.timestamp,
			has_any_price=report.quotes.has_any_price,
		)


class ResalePriceResponse(BaseModel):
	price: float = Field(..., description='Current resale price in BRL')
