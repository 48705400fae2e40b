from fastapi import FastAPI, Request, Depends
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from filebot.config import ConfigurationMissing, Settings, get_settings
from filebot.middleware.auth import require_bot_token, verify_webhook_secret
from filebot.schemas import Update
from filebot.services.file_search import FileSearchClient, get_file_search_client
from filebot.telegram_bot import TelegramAPI, configure_webhook, get_telegram_api, process_update
from filebot.telegram_bot.logging_config import bot_logger as logger

INFO_TEXT = "Hello! This is the Telegram bot worker. Use the /setwebhook endpoint to configure the bot."

# Every path belongs to the bot, so no interactive docs
app = FastAPI(
    title="File Search Bot",
    description="Telegram group bot that searches a file index",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None
)


@app.exception_handler(ConfigurationMissing)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    """Deployment is missing a secret: tell the operator, call nothing."""
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Verbs no route lists still get the info page (or the missing token 500)."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)

    settings = request.app.dependency_overrides.get(get_settings, get_settings)()
    try:
        require_bot_token(settings)
    except ConfigurationMissing as missing:
        return await configuration_missing_handler(request, missing)
    return PlainTextResponse(INFO_TEXT)


# Webhook setup endpoint (must be registered before the catch-all routes)
@app.api_route(
    get_settings().webhook_setup_path,
    methods=["GET", "POST"],
    dependencies=[Depends(require_bot_token)]
)
async def set_webhook(
    telegram: TelegramAPI = Depends(get_telegram_api),
    settings: Settings = Depends(get_settings)
):
    """
    Register this service as the bot's webhook.

    Telegram will POST updates to WORKER_URL.
    """
    return await configure_webhook(
        telegram,
        settings.worker_url,
        secret_token=settings.telegram_webhook_secret or None
    )


# Telegram webhook endpoint
@app.post("/{path:path}", dependencies=[Depends(require_bot_token), Depends(verify_webhook_secret)])
async def telegram_webhook(
    request: Request,
    telegram: TelegramAPI = Depends(get_telegram_api),
    search: FileSearchClient = Depends(get_file_search_client),
    settings: Settings = Depends(get_settings)
):
    """
    Webhook endpoint for Telegram updates.

    Always answers 200 once the body parses; Telegram would otherwise
    redeliver the update.
    """
    try:
        update = Update.model_validate_json(await request.body())
    except ValidationError as e:
        logger.error(f"Error parsing update: {e}")
        return PlainTextResponse("Invalid request body", status_code=400)

    await process_update(update, telegram, search, settings.results_page_url)

    return PlainTextResponse("OK")


@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"],
    dependencies=[Depends(require_bot_token)]
)
async def root():
    """Anything else: short hint for whoever opened the URL."""
    return PlainTextResponse(INFO_TEXT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
