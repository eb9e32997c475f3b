from .bot_client import TelegramBotClient

__all__ = ['TelegramBotClient']
