"""
Identity resolution.

Turns a classified search term into a canonical Steam ID64 with one remote
call per category:

- numeric IDs and permalinks are validated with GetPlayerSummaries
- profile URLs and nicknames are resolved with ResolveVanityURL

A Loading event is emitted on the channel before each call. Success and
Failure events for this stage are left to the orchestrator.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from .classify import Classification, InputCategory, SteamIDType, ID_TYPE_BY_CATEGORY, classify
from .errors import ErrorKind, ResolutionError, SteamAPIError
from .events import EventChannel, EventDetails, SearchEvent, SearchState, SearchType
from .logger import StructuredLogger, get_logger


class IdentityAPI(Protocol):
    async def resolve_vanity_url(self, vanity: str) -> Dict[str, Any]: ...

    async def get_player_summaries(self, steamids: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class Resolution:
    """Outcome of the identity stage.

    Exactly one of canonical_id / error is set, except for terms that could
    not be classified, where both are None.
    """

    search_term: str
    category: Optional[InputCategory] = None
    canonical_id: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.canonical_id is not None

    @property
    def unresolved(self) -> bool:
        return self.canonical_id is None and self.error is None


class IdentityResolver:
    def __init__(
        self,
        api: IdentityAPI,
        channel: EventChannel,
        logger: Optional[StructuredLogger] = None,
    ):
        self.api = api
        self.channel = channel
        self.logger = logger or get_logger()

    async def resolve(self, search_term: str) -> Resolution:
        classification = classify(search_term)
        if classification is None:
            if search_term:
                self.logger.info("Search term not recognized", input=search_term)
            return Resolution(search_term)

        try:
            canonical_id = await self._resolve(search_term, classification)
        except (ResolutionError, SteamAPIError) as e:
            self.logger.warning(
                "Steam ID resolution failed",
                input=search_term,
                category=classification.category.value,
                error=str(e),
            )
            return Resolution(search_term, classification.category, error=e)

        self.logger.info(
            "Steam ID resolved",
            input=search_term,
            category=classification.category.value,
            steamid=canonical_id,
        )
        return Resolution(search_term, classification.category, canonical_id=canonical_id)

    async def _resolve(self, search_term: str, classification: Classification) -> str:
        category, value = classification
        id_type = ID_TYPE_BY_CATEGORY[category]

        if category == InputCategory.NUMERIC_ID:
            if await self.is_valid_id(value, id_type):
                return value
            raise ResolutionError(ErrorKind.INVALID_ID64, search_term)

        # /id/ or /profiles/ without a name segment: nothing to look up
        if not value and category == InputCategory.PROFILE_URL:
            raise ResolutionError(ErrorKind.INVALID_PROFILE_URL, search_term)
        if not value and category == InputCategory.PERMALINK:
            raise ResolutionError(ErrorKind.INVALID_PERMALINK, search_term)

        if category == InputCategory.PERMALINK:
            if await self.is_valid_id(value, id_type):
                return value
            raise ResolutionError(ErrorKind.INVALID_PERMALINK, search_term)

        steamid = await self.steam_id_from_name(value, id_type)
        if steamid:
            return steamid
        if category == InputCategory.PROFILE_URL:
            raise ResolutionError(ErrorKind.INVALID_PROFILE_URL, search_term)
        raise ResolutionError(ErrorKind.INVALID_NICKNAME, search_term)

    async def steam_id_from_name(self, name: str, id_type: SteamIDType) -> Optional[str]:
        """Resolve a vanity name; returns None when Steam has no match."""
        self._emit_loading(SearchType.IDENTITY_RETRIEVAL, name, id_type)
        data = await self.api.resolve_vanity_url(name)
        return data["response"].get("steamid") or None

    async def is_valid_id(self, steamid: str, id_type: SteamIDType) -> bool:
        """True when GetPlayerSummaries knows at least one player for the ID."""
        self._emit_loading(SearchType.IDENTITY_VALIDATION, steamid, id_type)
        data = await self.api.get_player_summaries(steamid)
        return len(data["response"]["players"]) > 0

    def _emit_loading(self, search_type: SearchType, value: str, id_type: SteamIDType) -> None:
        self.channel.emit(SearchEvent(
            state=SearchState.LOADING,
            type=search_type,
            details=EventDetails(meta={"input": value, "type": id_type}),
        ))
