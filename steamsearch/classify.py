import re
from enum import Enum
from typing import NamedTuple, Optional
from urllib.parse import urlparse

COMMUNITY_HOST = "steamcommunity"

# Scheme and www. are optional; searched anywhere in the term
URL_PATTERN = re.compile(
    r"(https?://.)?(www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)"
)
NUMERIC_PATTERN = re.compile(r"[0-9]+")


class InputCategory(str, Enum):
    NUMERIC_ID = "numeric_id"
    PROFILE_URL = "profile_url"
    PERMALINK = "permalink"
    NICKNAME = "nickname"


class SteamIDType(str, Enum):
    """Kind of input handed to a Steam Web API identity call."""

    ID64 = "id64"
    PROFILE_URL = "profile_url"
    PERMALINK = "permalink"
    NICKNAME = "nickname"


ID_TYPE_BY_CATEGORY = {
    InputCategory.NUMERIC_ID: SteamIDType.ID64,
    InputCategory.PROFILE_URL: SteamIDType.PROFILE_URL,
    InputCategory.PERMALINK: SteamIDType.PERMALINK,
    InputCategory.NICKNAME: SteamIDType.NICKNAME,
}


class Classification(NamedTuple):
    category: InputCategory
    value: str


def is_numeric(term: str) -> bool:
    return NUMERIC_PATTERN.fullmatch(term) is not None


def looks_like_url(term: str) -> bool:
    return URL_PATTERN.search(term) is not None


def parse_community_url(term: str) -> Optional[Classification]:
    """
    Classify a URL-shaped term pointing at the Steam community site.

    Returns None when the host is not the community site or the first path
    segment is neither "id" nor "profiles". A missing name segment yields an
    empty value.
    """
    url = term if "://" in term else f"https://{term}"
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    host = parsed.hostname or ""
    if COMMUNITY_HOST not in host:
        return None

    route = [x for x in parsed.path.split("/") if x]
    if not route:
        return None
    value = route[1] if len(route) > 1 else ""
    if route[0] == "id":
        return Classification(InputCategory.PROFILE_URL, value)
    if route[0] == "profiles":
        return Classification(InputCategory.PERMALINK, value)
    return None


def classify(term: str) -> Optional[Classification]:
    """
    Derive the input category of a raw search term from its shape.

    Empty terms and URL-shaped terms that do not point at a community
    profile yield None.
    """
    if not term:
        return None
    if is_numeric(term):
        return Classification(InputCategory.NUMERIC_ID, term)
    if looks_like_url(term):
        return parse_community_url(term)
    return Classification(InputCategory.NICKNAME, term)
