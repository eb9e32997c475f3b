import logging

from application.services.price_service import PriceService
from domain.exceptions.arbitrage import InvalidInputError
from domain.models.arbitrage import (
    Exchange,
    ExchangeDetails,
    SimulationReport,
    SimulationResult,
    is_number,
    join_quotes,
)

logger = logging.getLogger(__name__)

RESALE_FEE_FRACTION = 0.002


def validate_positive(value, label: str) -> float:
    """Reject anything that is not a finite number strictly greater than zero."""
    if not is_number(value) or value <= 0:
        raise InvalidInputError(f"{label} must be a positive number, got {value!r}")
    return float(value)


def simulate(
    amount: float,
    exchanges: list[Exchange],
    resale_price: float,
    resale_fee: float = RESALE_FEE_FRACTION,
) -> list[SimulationResult]:
    """Buy on each exchange, resell at resale_price; one row per exchange, in order.

    Inputs are assumed validated. No rounding is applied.
    """
    results = []
    for exchange in exchanges:
        buy_price = exchange.buy_price
        if not is_number(buy_price) or buy_price <= 0:
            results.append(SimulationResult(exchange_name=exchange.name, initial_amount=amount))
            continue

        units_bought = amount / buy_price
        units_after_fee = units_bought * (1 - exchange.fee)
        gross_proceeds = units_after_fee * resale_price
        final_amount = gross_proceeds * (1 - resale_fee)
        profit = final_amount - amount

        results.append(
            SimulationResult(
                exchange_name=exchange.name,
                initial_amount=amount,
                buy_price=buy_price,
                units_after_fee=units_after_fee,
                final_amount=final_amount,
                profit=profit,
                profit_percentage=(profit / amount) * 100,
            )
        )
    return results


def best_option(results: list[SimulationResult]) -> SimulationResult | None:
    """Row with the greatest positive profit; first one wins a tie."""
    best = None
    for result in results:
        if result.profit is None or result.profit <= 0:
            continue
        if best is None or result.profit > best.profit:
            best = result
    return best


def mark_best(results: list[SimulationResult]) -> list[SimulationResult]:
    best = best_option(results)
    if best is None:
        return list(results)
    return [r.mark_best() if r is best else r for r in results]


class SimulationService:
    """Runs simulations against live quotes and owns the operator-set resale price.

    The resale price is replaced as a whole on every write; the last write wins.
    It lives only as long as the process.
    """

    def __init__(
        self,
        price_service: PriceService,
        details: list[ExchangeDetails],
        resale_price: float,
        resale_fee: float = RESALE_FEE_FRACTION,
    ):
        self.price_service = price_service
        self.details = details
        self.resale_fee = resale_fee
        self._resale_price = validate_positive(resale_price, "Resale price")

    @property
    def resale_price(self) -> float:
        return self._resale_price

    def set_resale_price(self, price) -> float:
        self._resale_price = validate_positive(price, "Resale price")
        logger.info(f"Resale price set to {self._resale_price}")
        return self._resale_price

    async def run(self, amount, resale_price=None) -> SimulationReport:
        amount = validate_positive(amount, "Amount")
        price = self._resale_price if resale_price is None else validate_positive(resale_price, "Resale price")

        quotes = await self.price_service.get_quotes()
        exchanges = join_quotes(quotes.quotes, self.details)
        results = mark_best(simulate(amount, exchanges, price, self.resale_fee))

        return SimulationReport(amount=amount, resale_price=price, results=results, quotes=quotes)
