import argparse
import asyncio
import json

from .env import load_env, load_config
from .errors import ConfigError
from .events import SearchEvent
from .client import SteamWebClient
from .logger import get_logger
from .search import SearchService, get_search_service, reset_search_service

from . import __version__


def print_event(event: SearchEvent) -> None:
    print(json.dumps(event.to_dict(), ensure_ascii=False, default=str))


async def run_search(term: str, service: SearchService) -> bool:
    unsubscribe = service.channel.subscribe(print_event)
    try:
        return await service.start(term)
    finally:
        unsubscribe()


async def _search(args: argparse.Namespace) -> bool:
    config = load_config(api_key=args.api_key, api_endpoint=args.endpoint, cors_proxy=args.cors_proxy)
    async with SteamWebClient(config) as client:
        service = get_search_service(client)
        service.search_activated = not args.quiet_identity
        try:
            return await run_search(args.term, service)
        finally:
            # the service does not outlive the client it was built on
            reset_search_service()


def cmd_search(args: argparse.Namespace) -> None:
    try:
        ok = asyncio.run(_search(args))
    except ConfigError as e:
        raise SystemExit(str(e))
    if args.metrics:
        get_logger().log_metrics_summary()
    if not ok:
        raise SystemExit(1)


def main():
    # Load .env if present (STEAM_API_KEY, STEAM_API_ENDPOINT, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="steamsearch", description="Resolve a Steam user and list their games")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    srch = subparsers.add_parser("search", help="Resolve a Steam ID64, profile URL, permalink or nickname and fetch owned games")
    srch.add_argument("term", help="Search term (quote URLs)")
    srch.add_argument("--quiet-identity", action="store_true", help="Deactivate the search: suppress Steam ID success/failure events")
    srch.add_argument("--api-key", help="Steam Web API key (or set STEAM_API_KEY)")
    srch.add_argument("--endpoint", help="Steam Web API base URL (or set STEAM_API_ENDPOINT)")
    srch.add_argument("--cors-proxy", help="Prefix prepended to every request URL (or set STEAM_CORS_PROXY)")
    srch.add_argument("--metrics", action="store_true", help="Log a metrics summary when done")
    srch.set_defaults(func=cmd_search)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
