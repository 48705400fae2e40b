import json

import httpx
import pytest
from fastapi.testclient import TestClient

from filebot.config import Settings, get_settings
from filebot.main import app
from filebot.services.http_client import get_http_client

BOT_TOKEN = "123456:TEST-TOKEN"
WORKER_URL = "https://filebot.example.dev"


class FakeUpstream:
    """
    Stands in for Telegram and the search API.

    Every outbound request is recorded; answers are configured per test.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.search_status = 200
        self.search_body: object = {"total_files": 0, "files": []}
        self.search_error: Exception | None = None
        self.send_status = 200
        self.send_error: Exception | None = None
        self.set_webhook_body: object = {"ok": True, "result": True, "description": "Webhook was set"}
        self.set_webhook_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/files/search":
            if self.search_error:
                raise self.search_error
            if isinstance(self.search_body, str):
                return httpx.Response(self.search_status, text=self.search_body)
            return httpx.Response(self.search_status, json=self.search_body)

        if path.endswith("/sendMessage"):
            if self.send_error:
                raise self.send_error
            return httpx.Response(self.send_status, json={"ok": self.send_status == 200})

        if path.endswith("/setWebhook"):
            if self.set_webhook_error:
                raise self.set_webhook_error
            return httpx.Response(200, json=self.set_webhook_body)

        return httpx.Response(404)

    @property
    def searches(self) -> list[str]:
        return [r.url.params["q"] for r in self.requests if r.url.path == "/files/search"]

    @property
    def sent_messages(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path.endswith("/sendMessage")]

    @property
    def webhook_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/setWebhook")]


def make_update(text="report", chat_type="group", chat_id=-1001234567890, message_id=42):
    """Minimal Telegram update as delivered to the webhook."""
    message = {
        "message_id": message_id,
        "from": {"id": 7, "is_bot": False, "first_name": "Test"},
        "chat": {"id": chat_id, "type": chat_type, "title": "Test group"},
        "date": 1700000000,
    }
    if text is not None:
        message["text"] = text
    return {"update_id": 10001, "message": message}


@pytest.fixture()
def upstream():
    return FakeUpstream()


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        bot_token=BOT_TOKEN,
        worker_url=WORKER_URL,
        telegram_webhook_secret="",
        telegram_api_url="https://api.telegram.org",
        search_api_url="https://search.example.dev",
        results_page_url="https://results.example.dev/",
    )


@pytest.fixture()
def use_settings(settings):
    """Swap the settings the app sees, e.g. use_settings(bot_token="")."""
    def _use(**changes):
        app.dependency_overrides[get_settings] = lambda: settings.model_copy(update=changes)
    return _use


@pytest.fixture()
def client(settings, upstream):
    """A test client whose outbound HTTP goes to FakeUpstream."""
    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as http:
            yield http

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http_client

    yield TestClient(app)

    app.dependency_overrides.clear()
