import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_telegram_service
from application.services import TelegramService
from config.settings import get_settings
from domain.exceptions.arbitrage import TelegramError

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api/telegram', tags=['telegram'])


@router.post('/webhook', status_code=status.HTTP_200_OK, summary='Telegram update receiver')
async def webhook(
	request: Request,
	service: Annotated[TelegramService, Depends(get_telegram_service)],
) -> dict:
	try:
		update = await request.json()
	except ValueError as e:
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid request body') from e
	if not isinstance(update, dict):
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid request body')

	try:
		await service.handle_update(update)
	except TelegramError as e:
		# Telegram redelivers on non-2xx, so failed replies are only logged.
		logger.error(f'Failed to answer Telegram update: {e}')

	return {'status': 'ok'}


@router.get('/setup', status_code=status.HTTP_200_OK, summary='Register webhook and bot commands')
async def setup(
	service: Annotated[TelegramService, Depends(get_telegram_service)],
) -> dict:
	public_url = get_settings().PUBLIC_APP_URL
	if not public_url:
		raise HTTPException(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			detail='PUBLIC_APP_URL not configured',
		)

	url = await service.setup_webhook(public_url)
	return {'success': True, 'webhook_url': url}
