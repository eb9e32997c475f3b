from typing import Any

import httpx

from domain.exceptions.arbitrage import TelegramError


class TelegramBotClient:
    BASE_URL = "https://api.telegram.org"

    def __init__(self, token: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
        self.token = token
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def _call(self, method: str, payload: dict | None = None) -> Any:
        url = f"{self.BASE_URL}/bot{self.token}/{method}"
        try:
            response = await self._client.post(url, json=payload or {})
            data = response.json()
        except httpx.RequestError as e:
            raise TelegramError(f"Telegram {method} request failed: {e.__class__.__name__}") from e
        except ValueError as e:
            raise TelegramError(f"Telegram {method} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise TelegramError(f"Telegram {method} returned unexpected payload: {type(data).__name__}")

        if not data.get("ok", False):
            description = data.get("description", "Unknown error")
            raise TelegramError(f"Telegram {method} failed: {description}")

        return data.get("result")

    async def send_message(self, chat_id: int | str, text: str, parse_mode: str = "Markdown") -> Any:
        return await self._call(
            "sendMessage",
            {
                "chat_id": chat_id,
                "text": text,
                "parse_mode": parse_mode,
                "disable_web_page_preview": True,
            },
        )

    async def get_chat(self, chat_id: int | str) -> dict:
        return await self._call("getChat", {"chat_id": chat_id})

    async def get_me(self) -> dict:
        return await self._call("getMe")

    async def set_webhook(self, url: str) -> Any:
        return await self._call("setWebhook", {"url": url})

    async def set_my_commands(self, commands: list[dict[str, str]]) -> Any:
        return await self._call("setMyCommands", {"commands": commands})

    async def close(self) -> None:
        await self._client.aclose()
