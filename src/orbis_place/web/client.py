"""HTTP client the profile pages use to fetch view objects."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404
DEFAULT_TIMEOUT_SECONDS = 10.0


class ProfileFetchError(RuntimeError):
    """Raised when a profile could not be loaded for any reason but 404."""


class ProfileNotFound(ProfileFetchError):
    """Raised when the API answers 404 for the requested profile."""


class ProfileApiClient:
    """Thin async wrapper around the public profile endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> ProfileApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_user(self, username: str) -> dict[str, Any]:
        """Fetch the public profile for ``username``."""
        return await self._get_json(f"/users/username/{quote(username, safe='')}")

    async def fetch_team(self, team_name: str) -> dict[str, Any]:
        """Fetch the public profile for ``team_name``."""
        return await self._get_json(f"/teams/{quote(team_name, safe='')}")

    async def _get_json(self, path: str) -> dict[str, Any]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as err:
            raise ProfileFetchError(f"Request to {path} failed: {err}") from err

        if response.status_code == HTTP_NOT_FOUND:
            raise ProfileNotFound(path)
        if not response.is_success:
            raise ProfileFetchError(f"{path} answered HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as err:
            raise ProfileFetchError(f"{path} returned invalid JSON") from err
        if not isinstance(payload, dict):
            raise ProfileFetchError(f"{path} returned an unexpected payload")
        return payload
