import logging
import types
from typing import Any, Optional

import httpx

from app.core.errors import (
    MalformedResponseError,
    NotFoundUpstreamError,
    UpstreamUnavailableError,
)

logger = logging.getLogger("app.faceit.client")

DEFAULT_BASE_URL = "https://open.faceit.com/data/v4"


class FaceitClient:
    """Thin async wrapper over the FACEIT Data API v4."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 4.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key or ''}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "FaceitClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]] = None,
        exc_value: Optional[BaseException] = None,
        traceback: Optional[types.TracebackType] = None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_value, traceback)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        logger.debug("GET %s %s", path, params or "")
        try:
            response = await self._client.get(
                path,
                params=params,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableError(f"timeout on {path}") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"{type(e).__name__} on {path}: {e}") from e

        if response.status_code == 404:
            raise NotFoundUpstreamError(f"404 on {path}")
        if response.is_error:
            raise UpstreamUnavailableError(
                f"FACEIT API returned status {response.status_code} on {path}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"invalid JSON on {path}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"expected an object on {path}")
        return data

    async def get_player(self, nickname: str, timeout: Optional[float] = None) -> dict:
        return await self.get_json(
            "/players", params={"nickname": nickname}, timeout=timeout
        )

    async def get_player_stats(self, player_id: str, game: str) -> dict:
        return await self.get_json(f"/players/{player_id}/stats/{game}")

    async def get_history(
        self, player_id: str, game: str, limit: int = 10, offset: int = 0
    ) -> dict:
        return await self.get_json(
            f"/players/{player_id}/history",
            params={"game": game, "offset": offset, "limit": limit},
        )

    async def get_match_stats(self, match_id: str) -> dict:
        return await self.get_json(f"/matches/{match_id}/stats")
