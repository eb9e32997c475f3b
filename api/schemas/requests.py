from pydantic import BaseModel, ConfigDict, Field


class SimulationRequest(BaseModel):
	amount: float = Field(..., gt=0, allow_inf_nan=False, description='BRL amount to invest')
	resale_price: float | None = Field(
		default=None,
		gt=0,
		allow_inf_nan=False,
		description='Resale price override; the configured value is used when omitted',
	)

	model_config = ConfigDict(json_schema_extra={'example': {'amount': 5000.00, 'resale_price': 5.25}})


class ResalePriceRequest(BaseModel):
	price: float = Field(..., gt=0, allow_inf_nan=False)

	model_config = ConfigDict(json_schema_extra={'example': {'price': 5.28}})
