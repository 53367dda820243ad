import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_API_ENDPOINT = "https://api.steampowered.com/"
DEFAULT_TIMEOUT = 15.0


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class SteamConfig:
    api_key: str
    api_endpoint: str = DEFAULT_API_ENDPOINT
    cors_proxy: str = ""
    timeout: float = DEFAULT_TIMEOUT


def load_config(
    api_key: Optional[str] = None,
    api_endpoint: Optional[str] = None,
    cors_proxy: Optional[str] = None,
) -> SteamConfig:
    """
    Build the Steam Web API configuration.

    Explicit arguments win over STEAM_API_KEY, STEAM_API_ENDPOINT,
    STEAM_CORS_PROXY and STEAM_TIMEOUT from the environment.

    Raises:
        ConfigError: If no API key is available
    """
    key = api_key or os.getenv("STEAM_API_KEY")
    if not key:
        raise ConfigError("Missing STEAM_API_KEY. Set env var or pass api_key.")

    endpoint = api_endpoint or os.getenv("STEAM_API_ENDPOINT") or DEFAULT_API_ENDPOINT
    if not endpoint.endswith("/"):
        endpoint += "/"

    proxy = cors_proxy if cors_proxy is not None else os.getenv("STEAM_CORS_PROXY", "")

    raw_timeout = os.getenv("STEAM_TIMEOUT")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigError(f"STEAM_TIMEOUT must be a number, got {raw_timeout!r}")

    return SteamConfig(api_key=key, api_endpoint=endpoint, cors_proxy=proxy, timeout=timeout)
