"""Small JSON client bound to one base URL."""

from __future__ import annotations

from typing import Any

import httpx

REQUEST_TIMEOUT = 30.0


class ApiService:
    """Sends GET and POST requests under a base URL and decodes JSON replies."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None) -> None:
        self.base_url = base_url
        self._client = client

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{endpoint}"
        if self._client is not None:
            response = await self._client.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
                response = await client.request(method, url, **kwargs)
        return response.json()

    async def get(self, endpoint: str) -> Any:
        """GET the endpoint and return its decoded JSON body."""
        return await self._request("GET", endpoint)

    async def post(self, endpoint: str, body: Any) -> Any:
        """POST a JSON body to the endpoint and return the decoded reply."""
        return await self._request("POST", endpoint, json=body)