"""
Error taxonomy for Steam ID searches.

- ResolutionError: the search term could not be resolved to a Steam ID,
  tagged with one of the four ErrorKind variants
- SteamAPIError: network, HTTP or payload errors from the Steam Web API
- ConfigError: missing or invalid configuration
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_ID64 = "invalid_id64"
    INVALID_NICKNAME = "invalid_nickname"
    INVALID_PROFILE_URL = "invalid_profile_url"
    INVALID_PERMALINK = "invalid_permalink"


_MESSAGES = {
    ErrorKind.INVALID_ID64: "Steam ID64 “{}” is invalid",
    ErrorKind.INVALID_NICKNAME: "The nickname “{}” is invalid",
    ErrorKind.INVALID_PROFILE_URL: "Profile URL “{}” is invalid",
    ErrorKind.INVALID_PERMALINK: "Permalink “{}” is invalid",
}


class ResolutionError(Exception):
    """Raised when a search term does not resolve to an existing Steam ID."""

    def __init__(self, kind: ErrorKind, search_term: str):
        self.kind = kind
        self.search_term = search_term
        super().__init__(_MESSAGES[kind].format(search_term))


class SteamAPIError(Exception):
    """Raised when a Steam Web API call fails or returns an unusable payload."""

    def __init__(self, message: str, endpoint: str, status: Optional[int] = None):
        self.endpoint = endpoint
        self.status = status
        super().__init__(message)


class ConfigError(ValueError):
    """Configuration loading/validation error."""
