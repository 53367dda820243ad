"""
Search orchestration.

Runs one search as a strict sequence of phases:

    IDLE -> CLASSIFY_AND_RESOLVE -> FETCH_RESOURCES -> DONE
                     |                    |
                     +------> FAILED <----+

Callers get a bare success/failure boolean from start(); everything else
(resolved ID, owned games, typed errors) travels on the event channel.

Identity-stage Success/Failure events are only emitted while
search_activated is true. Resource-fetch events are always emitted.
"""

from enum import Enum
from typing import Optional, Protocol

from .client import SteamWebClient
from .env import load_config
from .errors import ResolutionError, SteamAPIError
from .events import EventChannel, EventDetails, SearchEvent, SearchState, SearchType
from .library import OwnedGamesAPI, OwnedGamesFetcher
from .logger import StructuredLogger, get_logger
from .resolver import IdentityAPI, IdentityResolver


class SearchPhase(str, Enum):
    IDLE = "idle"
    CLASSIFY_AND_RESOLVE = "classify_and_resolve"
    FETCH_RESOURCES = "fetch_resources"
    DONE = "done"
    FAILED = "failed"


class SteamAPI(IdentityAPI, OwnedGamesAPI, Protocol):
    pass


class SearchService:
    """
    Resolves a search term to a Steam ID and fetches its owned games.

    Args:
        api: Object exposing resolve_vanity_url, get_player_summaries and
            get_owned_games coroutines (normally a SteamWebClient)
        channel: Event channel to broadcast on; a new one is created if omitted
        search_activated: Initial value of the activation flag
        gate_identity_events: When False, identity-stage Success/Failure
            events are emitted regardless of search_activated
        logger: Logger override
    """

    def __init__(
        self,
        api: SteamAPI,
        channel: Optional[EventChannel] = None,
        *,
        search_activated: bool = False,
        gate_identity_events: bool = True,
        logger: Optional[StructuredLogger] = None,
    ):
        self.api = api
        self.channel = channel if channel is not None else EventChannel()
        self.search_activated = search_activated
        self.gate_identity_events = gate_identity_events
        self.logger = logger or get_logger()
        self.resolver = IdentityResolver(api, self.channel, logger=self.logger)
        self.fetcher = OwnedGamesFetcher(api, logger=self.logger)
        self.last_phase = SearchPhase.IDLE

    @property
    def identity_events_enabled(self) -> bool:
        return self.search_activated or not self.gate_identity_events

    async def start(self, search_term: str) -> bool:
        """
        Run a full search. Returns True on success, False on failure.

        An empty or unrecognized term completes without events and counts
        as success.
        """
        self._transition(SearchPhase.IDLE, search_term)
        if not search_term:
            self._transition(SearchPhase.DONE, search_term)
            return True

        phase = self._transition(SearchPhase.CLASSIFY_AND_RESOLVE, search_term)
        resolution = await self.resolver.resolve(search_term)
        category = resolution.category.value if resolution.category else "unrecognized"

        if resolution.unresolved:
            self._transition(SearchPhase.DONE, search_term)
            return True

        self.logger.record_search_attempt(category)

        if not resolution.ok:
            if self.identity_events_enabled:
                self.channel.emit(SearchEvent(
                    state=SearchState.FAILURE,
                    type=SearchType.IDENTITY_RETRIEVAL,
                    details=EventDetails(error=resolution.error, meta={"input": search_term}),
                ))
            self.logger.record_search_failure(category, _error_type(resolution.error))
            self._transition(SearchPhase.FAILED, search_term, previous=phase)
            return False

        if self.identity_events_enabled:
            self.channel.emit(SearchEvent(
                state=SearchState.SUCCESS,
                type=SearchType.IDENTITY_RETRIEVAL,
                details=EventDetails(result=resolution.canonical_id, meta={"input": search_term}),
            ))

        phase = self._transition(SearchPhase.FETCH_RESOURCES, search_term)
        try:
            games = await self.fetcher.fetch(resolution.canonical_id)
        except SteamAPIError as e:
            self.channel.emit(SearchEvent(
                state=SearchState.FAILURE,
                type=SearchType.RESOURCE_FETCH,
                details=EventDetails(error=e),
            ))
            self.logger.record_search_failure(category)
            self._transition(SearchPhase.FAILED, search_term, previous=phase)
            return False

        self.channel.emit(SearchEvent(
            state=SearchState.SUCCESS,
            type=SearchType.RESOURCE_FETCH,
            details=EventDetails(result=games),
        ))
        self.logger.record_search_success(category)
        self._transition(SearchPhase.DONE, search_term)
        return True

    def _transition(
        self,
        phase: SearchPhase,
        search_term: str,
        previous: Optional[SearchPhase] = None,
    ) -> SearchPhase:
        self.last_phase = phase
        if previous is not None:
            self.logger.debug("Search phase", input=search_term, phase=phase.value, failed_in=previous.value)
        else:
            self.logger.debug("Search phase", input=search_term, phase=phase.value)
        return phase


def _error_type(error: Optional[Exception]) -> Optional[str]:
    # SteamAPIError is counted by the client when it is raised
    if isinstance(error, ResolutionError):
        return error.kind.value
    return None


# Global search service instance
_global_service: Optional[SearchService] = None


def get_search_service(api: Optional[SteamAPI] = None, **kwargs) -> SearchService:
    """
    Get or create the process-wide search service.

    The first call creates it. Without an api, a SteamWebClient is built
    from load_config().
    """
    global _global_service

    if _global_service is None:
        if api is None:
            api = SteamWebClient(load_config())
        _global_service = SearchService(api, **kwargs)

    return _global_service


def reset_search_service():
    """Reset the global search service (useful for testing)."""
    global _global_service
    _global_service = None
