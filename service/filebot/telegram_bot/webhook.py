"""
Webhook self-registration (/setwebhook).

Operator opens /setwebhook once after deploy; Telegram is told to deliver
updates to the service root and to drop anything queued meanwhile.
Safe to call repeatedly.
"""

import json
from typing import Optional

import httpx
from fastapi.responses import HTMLResponse

from filebot.config import ConfigurationMissing
from .logging_config import bot_logger as logger
from .telegram_api import TelegramAPI


def _pretty(result) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


async def configure_webhook(
    telegram: TelegramAPI,
    target_url: str,
    secret_token: Optional[str] = None
) -> HTMLResponse:
    """
    Register target_url as the bot's webhook.

    The raw Telegram answer is echoed back for the operator.
    """
    if not target_url:
        raise ConfigurationMissing("WORKER_URL")

    try:
        result = await telegram.set_webhook(target_url, secret_token=secret_token)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"setWebhook call failed: {e}", exc_info=True)
        return HTMLResponse(f"Failed to set webhook.\n<pre>{e}</pre>", status_code=500)

    if isinstance(result, dict) and result.get("ok"):
        logger.info(f"Webhook set to {target_url}")
        return HTMLResponse(f"Webhook set successfully to {target_url}\n<pre>{_pretty(result)}</pre>")

    logger.error(f"Telegram rejected webhook {target_url}: {result}")
    return HTMLResponse(f"Failed to set webhook.\n<pre>{_pretty(result)}</pre>", status_code=500)
