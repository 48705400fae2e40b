"""
Telegram side of the file search bot.

ARCHITECTURE: stateless webhook, one update per request.
- dispatcher.classify_update decides what an update means
- handlers.process_update searches and replies
- webhook.configure_webhook registers the service with Telegram
- telegram_api.TelegramAPI wraps the Bot API calls
"""

from .dispatcher import classify_update, NoAction, Notify, Search
from .handlers import process_update
from .webhook import configure_webhook
from .telegram_api import TelegramAPI, get_telegram_api

__all__ = [
    "classify_update",
    "NoAction",
    "Notify",
    "Search",
    "process_update",
    "configure_webhook",
    "TelegramAPI",
    "get_telegram_api",
]
