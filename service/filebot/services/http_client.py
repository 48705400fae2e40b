"""
Shared outbound HTTP client.

One AsyncClient per inbound request, closed when the response is sent.
"""

from typing import AsyncIterator

import httpx
from fastapi import Depends

from filebot.config import Settings, get_settings


async def get_http_client(
    settings: Settings = Depends(get_settings)
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client
