from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Telegram
    bot_token: str = ""  # Required: checked on every request, not at startup
    worker_url: str = ""  # Public URL of this service, used by /setwebhook
    telegram_webhook_secret: str = ""  # Optional: for webhook verification
    telegram_api_url: str = "https://api.telegram.org"
    webhook_setup_path: str = "/setwebhook"

    # File search
    search_api_url: str = "https://tga-hd.api.hashhackers.com"
    results_page_url: str = "https://gods-eye.pages.dev/"

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Environment
    environment: str = "development"
    log_level: str = "DEBUG"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


class ConfigurationMissing(Exception):
    """A required secret is absent from the deployment."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} secret is not set")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
