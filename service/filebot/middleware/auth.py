from fastapi import Depends, Header, HTTPException

from filebot.config import ConfigurationMissing, Settings, get_settings


def require_bot_token(settings: Settings = Depends(get_settings)) -> str:
    """
    Return the bot token, or fail the request before any outbound call.

    Raises ConfigurationMissing (rendered as plain-text 500 by main.py).
    """
    if not settings.bot_token:
        raise ConfigurationMissing("BOT_TOKEN")
    return settings.bot_token


def verify_webhook_secret(
    settings: Settings = Depends(get_settings),
    x_telegram_bot_api_secret_token: str = Header(None)
) -> None:
    """
    Check Telegram's secret header when a webhook secret is configured.

    Without a configured secret every delivery is accepted.
    """
    if settings.telegram_webhook_secret:
        if x_telegram_bot_api_secret_token != settings.telegram_webhook_secret:
            raise HTTPException(status_code=403, detail="Invalid secret token")
