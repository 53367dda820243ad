"""
Tests for identity resolution.
"""

import pytest
from unittest.mock import AsyncMock

from steamsearch.classify import InputCategory, SteamIDType
from steamsearch.errors import ErrorKind, ResolutionError, SteamAPIError
from steamsearch.events import SearchState, SearchType
from steamsearch.resolver import IdentityResolver

GABEN_ID64 = "76561197960287930"


@pytest.fixture
def resolver(api, channel, logger) -> IdentityResolver:
    return IdentityResolver(api, channel, logger=logger)


class TestNumericIds:
    @pytest.mark.asyncio
    async def test_valid_id_is_returned_unchanged(self, resolver, api, events):
        resolution = await resolver.resolve("76561197960435530")

        assert resolution.ok
        assert resolution.canonical_id == "76561197960435530"
        assert resolution.category == InputCategory.NUMERIC_ID
        api.get_player_summaries.assert_awaited_once_with("76561197960435530")
        api.resolve_vanity_url.assert_not_called()

        assert len(events) == 1
        assert events[0].state == SearchState.LOADING
        assert events[0].type == SearchType.IDENTITY_VALIDATION
        assert events[0].details.meta == {"input": "76561197960435530", "type": SteamIDType.ID64}

    @pytest.mark.asyncio
    async def test_unknown_id(self, resolver, api, empty_players_response):
        api.get_player_summaries.return_value = empty_players_response

        resolution = await resolver.resolve("123")

        assert not resolution.ok
        assert isinstance(resolution.error, ResolutionError)
        assert resolution.error.kind == ErrorKind.INVALID_ID64
        assert "123" in str(resolution.error)


class TestProfileUrls:
    @pytest.mark.asyncio
    async def test_vanity_is_resolved(self, resolver, api, events):
        resolution = await resolver.resolve("https://steamcommunity.com/id/gaben")

        assert resolution.canonical_id == GABEN_ID64
        api.resolve_vanity_url.assert_awaited_once_with("gaben")
        assert events[0].type == SearchType.IDENTITY_RETRIEVAL
        assert events[0].details.meta == {"input": "gaben", "type": SteamIDType.PROFILE_URL}

    @pytest.mark.asyncio
    async def test_vanity_without_match(self, resolver, api, no_match_vanity_response):
        api.resolve_vanity_url.return_value = no_match_vanity_response
        term = "https://steamcommunity.com/id/gaben"

        resolution = await resolver.resolve(term)

        assert resolution.error.kind == ErrorKind.INVALID_PROFILE_URL
        assert resolution.error.search_term == term
        assert term in str(resolution.error)


class TestPermalinks:
    @pytest.mark.asyncio
    async def test_permalink_is_validated(self, resolver, api, events):
        resolution = await resolver.resolve(f"https://steamcommunity.com/profiles/{GABEN_ID64}")

        assert resolution.canonical_id == GABEN_ID64
        api.get_player_summaries.assert_awaited_once_with(GABEN_ID64)
        assert events[0].type == SearchType.IDENTITY_VALIDATION
        assert events[0].details.meta["type"] == SteamIDType.PERMALINK

    @pytest.mark.asyncio
    async def test_unknown_permalink(self, resolver, api, empty_players_response):
        api.get_player_summaries.return_value = empty_players_response

        resolution = await resolver.resolve("https://steamcommunity.com/profiles/1")

        assert resolution.error.kind == ErrorKind.INVALID_PERMALINK


class TestMissingNameSegment:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("term, kind", [
        ("https://steamcommunity.com/id/", ErrorKind.INVALID_PROFILE_URL),
        ("https://steamcommunity.com/profiles/", ErrorKind.INVALID_PERMALINK),
    ])
    async def test_fails_without_remote_call(self, resolver, api, events, term, kind):
        resolution = await resolver.resolve(term)

        assert resolution.error.kind == kind
        assert resolution.error.search_term == term
        assert events == []
        api.resolve_vanity_url.assert_not_called()
        api.get_player_summaries.assert_not_called()


class TestNicknames:
    @pytest.mark.asyncio
    async def test_nickname_is_resolved(self, resolver, api, events):
        resolution = await resolver.resolve("gaben")

        assert resolution.canonical_id == GABEN_ID64
        assert resolution.category == InputCategory.NICKNAME
        api.resolve_vanity_url.assert_awaited_once_with("gaben")
        assert events[0].details.meta == {"input": "gaben", "type": SteamIDType.NICKNAME}

    @pytest.mark.asyncio
    async def test_empty_steamid(self, resolver, api):
        api.resolve_vanity_url.return_value = {"response": {"steamid": "", "success": 1}}

        resolution = await resolver.resolve("nobody")

        assert resolution.error.kind == ErrorKind.INVALID_NICKNAME
        assert str(resolution.error) == "The nickname “nobody” is invalid"


class TestUnresolvable:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("term", ["", "https://steamcommunity.com/groups/valve", "https://example.com"])
    async def test_no_calls_no_events(self, resolver, api, events, term):
        resolution = await resolver.resolve(term)

        assert resolution.unresolved
        assert resolution.category is None
        assert events == []
        api.resolve_vanity_url.assert_not_called()
        api.get_player_summaries.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_is_carried(self, resolver, api, events):
        api.resolve_vanity_url = AsyncMock(
            side_effect=SteamAPIError("Steam API request timed out", "ISteamUser/ResolveVanityURL/v0001/")
        )

        resolution = await resolver.resolve("gaben")

        assert isinstance(resolution.error, SteamAPIError)
        assert not resolution.unresolved
        # Loading is emitted before the call is issued
        assert len(events) == 1
