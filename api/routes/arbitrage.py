from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_price_service, get_simulation_service
from api.schemas import (
	QuotesResponse,
	ResalePriceRequest,
	ResalePriceResponse,
	SimulationRequest,
	SimulationResponse,
)
from application.services import PriceService, SimulationService

router = APIRouter(prefix='/api', tags=['arbitrage'])


@router.get(
	'/quotes',
	response_model=QuotesResponse,
	status_code=status.HTTP_200_OK,
	summary='Current USDT/BRL buy price per exchange',
)
async def get_quotes(
	service: Annotated[PriceService, Depends(get_price_service)],
) -> QuotesResponse:
	aggregated = await service.get_quotes()
	return QuotesResponse.from_domain(aggregated)


@router.post(
	'/simulate',
	response_model=SimulationResponse,
	status_code=status.HTTP_200_OK,
	summary='Simulate buying USDT on each exchange and reselling it',
)
async def simulate(
	body: SimulationRequest,
	service: Annotated[SimulationService, Depends(get_simulation_service)],
) -> SimulationResponse:
	report = await service.run(body.amount, body.resale_price)
	return SimulationResponse.from_domain(report)


@router.get(
	'/resale-price',
	response_model=ResalePriceResponse,
	status_code=status.HTTP_200_OK,
	summary='Current resale price',
)
async def get_resale_price(
	service: Annotated[SimulationService, Depends(get_simulation_service)],
) -> ResalePriceResponse:
	return ResalePriceResponse(price=service.resale_price)


@router.put(
	'/resale-price',
	response_model=ResalePriceResponse,
	status_code=status.HTTP_200_OK,
	summary='Replace the resale price used by simulations',
)
async def set_resale_price(
	body: ResalePriceRequest,
	service: Annotated[SimulationService, Depends(get_simulation_service)],
) -> ResalePriceResponse:
	return ResalePriceResponse(price=service.set_resale_price(body.price))
