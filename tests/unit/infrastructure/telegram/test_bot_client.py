# nosec B101


import pytest
from unittest.mock import Mock, AsyncMock
import httpx

from infrastructure.telegram import TelegramBotClient
from domain.exceptions.arbitrage import TelegramError


def make_client(payload):
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_client.post.return_value = mock_response
    return mock_client


@pytest.mark.asyncio
async def test_send_message_posts_markdown_payload():
    mock_client = make_client({'ok': True, 'result': {'message_id': 1}})
    bot = TelegramBotClient('123:abc', client=mock_client)

    result = await bot.send_message(42, '*hello*')

    assert result == {'message_id': 1}
    call_args = mock_client.post.call_args
    assert call_args[0][0] == 'https://api.telegram.org/bot123:abc/sendMessage'
    assert call_args[1]['json'] == {
        'chat_id': 42,
        'text': '*hello*',
        'parse_mode': 'Markdown',
        'disable_web_page_preview': True,
    }


@pytest.mark.asyncio
async def test_api_error_raises_telegram_error():
    mock_client = make_client({'ok': False, 'error_code': 400, 'description': 'Bad Request: chat not found'})
    bot = TelegramBotClient('123:abc', client=mock_client)

    with pytest.raises(TelegramError) as exc_info:
        await bot.get_chat('@missing')

    assert 'chat not found' in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize('payload', [[], ['ok'], 'Bad Gateway', None, 502])
async def test_non_object_body_raises_telegram_error(payload):
    mock_client = make_client(payload)
    bot = TelegramBotClient('123:abc', client=mock_client)

    with pytest.raises(TelegramError) as exc_info:
        await bot.send_message(42, 'hello')

    assert 'unexpected payload' in str(exc_info.value)


@pytest.mark.asyncio
async def test_network_error_raises_telegram_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.post.side_effect = httpx.ConnectError('Connection refused')
    bot = TelegramBotClient('123:abc', client=mock_client)

    with pytest.raises(TelegramError) as exc_info:
        await bot.get_me()

    assert 'request failed' in str(exc_info.value)


@pytest.mark.asyncio
async def test_set_my_commands_sends_command_list():
    mock_client = make_client({'ok': True, 'result': True})
    bot = TelegramBotClient('123:abc', client=mock_client)
    commands = [{'command': 'help', 'description': 'Ajuda'}]

    assert await bot.set_my_commands(commands) is True
    assert mock_client.post.call_args[1]['json'] == {'commands': commands}
