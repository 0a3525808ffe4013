"""HTTP adapter for GitHub REST operations."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .errors import GitHubAPIError

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


class GitHubAPIClient:
    """
    HTTP client adapter for GitHub API calls.

    Implements IAPIClient protocol. The token is passed per call so one client
    can serve several accounts.
    """

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        user_agent: str = "i4tow-cli",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": self._user_agent,
            },
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, endpoint: str, token: str) -> Any:
        return await self._request("GET", endpoint, token)

    async def post(self, endpoint: str, token: str, json: Dict) -> Any:
        return await self._request("POST", endpoint, token, json)

    async def put(self, endpoint: str, token: str, json: Dict) -> Any:
        return await self._request("PUT", endpoint, token, json)

    async def _request(
        self, method: str, endpoint: str, token: str, json: Optional[Dict] = None
    ) -> httpx.Response:
        if not self._client:
            raise RuntimeError("GitHubAPIClient not initialized. Use 'async with' context.")

        response = await self._client.request(
            method,
            endpoint,
            json=json,
            headers={"Authorization": f"Bearer {token}"},
        )
        logger.debug("%s %s -> %s", method, endpoint, response.status_code)

        if response.status_code >= 400:
            try:
                error_detail = response.json()
            except ValueError:
                error_detail = response.text
            raise GitHubAPIError(response.status_code, error_detail, method, endpoint)

        return response
