"""
Client for the external file search API.

GET {search_api_url}/files/search?q=... -> {"total_files": int, "files": [...]}
"""

import httpx
from fastapi import Depends

from filebot.config import Settings, get_settings
from filebot.schemas import SearchResult
from filebot.services.http_client import get_http_client


class FileSearchClient:
    """Thin wrapper around the search endpoint."""

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def search(self, query: str) -> SearchResult:
        """
        Search files by free text.

        Raises:
            httpx.HTTPStatusError: search API answered with a non-2xx status
            httpx.HTTPError: transport failure
            ValueError: body is not JSON
            pydantic.ValidationError: total_files is not a number
        """
        response = await self.client.get(
            f"{self.base_url}/files/search",
            params={"q": query}
        )
        response.raise_for_status()
        data = response.json()

        # Anything but an object reads as an empty result
        if not isinstance(data, dict):
            return SearchResult()
        return SearchResult.model_validate(data)


def get_file_search_client(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> FileSearchClient:
    """FastAPI dependency: search client for the current request."""
    return FileSearchClient(client, settings.search_api_url)
