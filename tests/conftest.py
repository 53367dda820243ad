"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List
from unittest.mock import AsyncMock

from steamsearch.events import EventChannel, SearchEvent
from steamsearch.logger import StructuredLogger
from steamsearch.search import SearchService

GABEN_ID64 = "76561197960287930"


@pytest.fixture
def logger(tmp_path) -> StructuredLogger:
    """Logger writing only to a temporary directory."""
    return StructuredLogger(
        name="steamsearch-test",
        level="DEBUG",
        log_dir=tmp_path,
        enable_console=False,
    )


@pytest.fixture
def players_response() -> Dict[str, Any]:
    """GetPlayerSummaries payload with one player."""
    return {
        "response": {
            "players": [
                {
                    "steamid": GABEN_ID64,
                    "personaname": "Rabscuttle",
                    "profileurl": "https://steamcommunity.com/id/gabelogannewell/",
                }
            ]
        }
    }


@pytest.fixture
def empty_players_response() -> Dict[str, Any]:
    return {"response": {"players": []}}


@pytest.fixture
def vanity_response() -> Dict[str, Any]:
    """ResolveVanityURL payload for a known vanity name."""
    return {"response": {"steamid": GABEN_ID64, "success": 1}}


@pytest.fixture
def no_match_vanity_response() -> Dict[str, Any]:
    return {"response": {"success": 42, "message": "No match"}}


@pytest.fixture
def owned_games_response() -> Dict[str, Any]:
    """GetOwnedGames payload."""
    return {
        "response": {
            "game_count": 2,
            "games": [
                {"appid": 10, "playtime_forever": 32},
                {"appid": 220, "playtime_forever": 1440},
            ],
        }
    }


@pytest.fixture
def api(players_response, vanity_response, owned_games_response) -> AsyncMock:
    """Steam API double where every lookup succeeds."""
    mock = AsyncMock()
    mock.resolve_vanity_url = AsyncMock(return_value=vanity_response)
    mock.get_player_summaries = AsyncMock(return_value=players_response)
    mock.get_owned_games = AsyncMock(return_value=owned_games_response)
    return mock


@pytest.fixture
def channel() -> EventChannel:
    return EventChannel()


@pytest.fixture
def events(channel) -> List[SearchEvent]:
    """Every event emitted on the channel, in order."""
    received: List[SearchEvent] = []
    channel.subscribe(received.append)
    return received


@pytest.fixture
def service(api, channel, logger) -> SearchService:
    """Active search service wired to the API double."""
    return SearchService(api, channel, search_activated=True, logger=logger)
