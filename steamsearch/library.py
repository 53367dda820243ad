from typing import Any, Dict, Optional, Protocol

from .logger import StructuredLogger, get_logger


class OwnedGamesAPI(Protocol):
    async def get_owned_games(self, steamid: str) -> Dict[str, Any]: ...


class OwnedGamesFetcher:
    """Fetches the owned-games list for an already resolved Steam ID."""

    def __init__(self, api: OwnedGamesAPI, logger: Optional[StructuredLogger] = None):
        self.api = api
        self.logger = logger or get_logger()

    async def fetch(self, steamid: str) -> Dict[str, Any]:
        """
        Return the GetOwnedGames payload for steamid unchanged.

        Raises:
            SteamAPIError: On any transport or payload failure
        """
        data = await self.api.get_owned_games(steamid)
        body = data.get("response", {})
        self.logger.info(
            "Owned games fetched",
            steamid=steamid,
            game_count=body.get("game_count", len(body.get("games", []))),
        )
        return data
