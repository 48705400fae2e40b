"""
Telegram Bot API client.

Simple wrapper for the two Bot API methods the bot needs:
sendMessage for replies and setWebhook for self-registration.
"""

import json
from typing import Optional

import httpx
from fastapi import Depends

from filebot.config import Settings, get_settings
from filebot.middleware.auth import require_bot_token
from filebot.schemas import InlineKeyboard, OutboundMessage
from filebot.services.http_client import get_http_client
from .logging_config import bot_logger as logger


class TelegramAPI:
    """
    Bot API calls bound to one bot token.

    The httpx client is owned by the caller.
    """

    def __init__(self, token: str, client: httpx.AsyncClient, base_url: str = "https://api.telegram.org"):
        self.token = token
        self.client = client
        self.base_url = base_url.rstrip("/")

    def _method_url(self, method: str) -> str:
        return f"{self.base_url}/bot{self.token}/{method}"

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_markup: Optional[InlineKeyboard] = None,
        reply_to_message_id: Optional[int] = None
    ) -> None:
        """
        Send an HTML message to a chat.

        Args:
            chat_id: Telegram chat ID
            text: Message text (HTML parse mode)
            reply_markup: Optional inline keyboard
            reply_to_message_id: Optional message to reply to

        Delivery is best effort: a non-2xx answer from Telegram is logged,
        not raised. Transport errors still propagate.
        """
        message = OutboundMessage(
            chat_id=chat_id,
            text=text,
            reply_markup=json.dumps(reply_markup.model_dump()) if reply_markup else None,
            reply_to_message_id=reply_to_message_id
        )

        response = await self.client.post(
            self._method_url("sendMessage"),
            json=message.model_dump(exclude_none=True)
        )

        if response.is_error:
            logger.warning(
                f"sendMessage to chat_id={chat_id} failed with status {response.status_code}: {response.text}"
            )

    async def set_webhook(self, url: str, secret_token: Optional[str] = None):
        """
        Point Telegram at our webhook and drop any queued updates.

        Returns:
            Raw JSON answer from Telegram ({"ok": ..., "description": ...})
        """
        params = {
            "url": url,
            "drop_pending_updates": "true"
        }

        if secret_token:
            params["secret_token"] = secret_token

        response = await self.client.get(self._method_url("setWebhook"), params=params)
        return response.json()


def get_telegram_api(
    token: str = Depends(require_bot_token),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> TelegramAPI:
    """FastAPI dependency: Bot API client for the current request."""
    return TelegramAPI(token, client, base_url=settings.telegram_api_url)
