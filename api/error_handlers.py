import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.arbitrage import InvalidInputError, TelegramError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidInputError)
	async def invalid_input_handler(request: Request, exc: InvalidInputError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(TelegramError)
	async def telegram_error_handler(request: Request, exc: TelegramError):
		logger.error(f'Telegram error: {exc}')
		return JSONResponse(status_code=502, content={'detail': str(exc)})
