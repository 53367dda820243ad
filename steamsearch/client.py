"""Async Steam Web API client.

Issues the three read-only GET calls the search pipeline needs. All HTTP
calls use httpx.AsyncClient so they do not block the event loop. Failures
are logged, counted, and re-raised as SteamAPIError.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx

from .env import SteamConfig
from .errors import SteamAPIError
from .logger import StructuredLogger, get_logger
from .schema import validate_owned_games, validate_player_summaries, validate_vanity_response

RESOLVE_VANITY_PATH = "ISteamUser/ResolveVanityURL/v0001/"
PLAYER_SUMMARIES_PATH = "ISteamUser/GetPlayerSummaries/v0002/"
OWNED_GAMES_PATH = "IPlayerService/GetOwnedGames/v0001/"


class SteamWebClient:
    """Thin client for the Steam Web API endpoints used by the search."""

    def __init__(
        self,
        config: SteamConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self._config = config
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=config.timeout)
        self._owns_http = http_client is None
        self._logger = logger or get_logger()

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "SteamWebClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def build_url(self, path: str) -> str:
        return f"{self._config.cors_proxy}{self._config.api_endpoint}{path}"

    async def resolve_vanity_url(self, vanity: str) -> Dict[str, Any]:
        """Resolve a vanity name. Returns {"response": {"steamid"?: str, ...}}."""
        return await self._get(RESOLVE_VANITY_PATH, {"vanityurl": vanity}, validate_vanity_response)

    async def get_player_summaries(self, steamids: str) -> Dict[str, Any]:
        """Look up player summaries. Returns {"response": {"players": [...]}}."""
        return await self._get(PLAYER_SUMMARIES_PATH, {"steamids": steamids}, validate_player_summaries)

    async def get_owned_games(self, steamid: str) -> Dict[str, Any]:
        """Fetch the owned games of a Steam ID. The payload is returned unchanged."""
        return await self._get(
            OWNED_GAMES_PATH, {"steamid": steamid, "format": "json"}, validate_owned_games
        )

    async def _get(
        self,
        path: str,
        params: Dict[str, str],
        validate: Callable[[Any], List[str]],
    ) -> Dict[str, Any]:
        url = self.build_url(path)
        query = {"key": self._config.api_key, **params}

        self._logger.record_api_call()
        self._logger.debug("Steam API request", endpoint=path, params=params)
        try:
            resp = await self._http.get(url, params=query)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self._logger.record_error(f"HTTPError_{status}")
            self._logger.error("Steam API request failed", endpoint=path, status=status)
            raise SteamAPIError(f"Steam API request failed ({status}): {path}", path, status) from e
        except httpx.TimeoutException as e:
            self._logger.record_error("Timeout")
            self._logger.warning("Steam API request timed out", endpoint=path)
            raise SteamAPIError(f"Steam API request timed out: {path}", path) from e
        except httpx.RequestError as e:
            self._logger.record_error("RequestError")
            self._logger.error("Steam API request error", endpoint=path, error=str(e))
            raise SteamAPIError(f"Steam API request error: {e}", path) from e

        try:
            data = resp.json()
        except ValueError as e:
            self._logger.record_error("InvalidJSON")
            self._logger.error("Steam API returned invalid JSON", endpoint=path)
            raise SteamAPIError(f"Steam API returned invalid JSON: {path}", path, resp.status_code) from e

        errors = validate(data)
        if errors:
            self._logger.record_error("MalformedResponse")
            self._logger.error("Steam API returned malformed payload", endpoint=path, errors=errors)
            raise SteamAPIError(
                f"Steam API returned malformed payload ({'; '.join(errors)}): {path}",
                path,
                resp.status_code,
            )
        return data
