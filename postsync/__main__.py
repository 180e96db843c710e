"""CLI entry point for postsync."""

import argparse
import asyncio
import json
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path

from .config import Config, load_config
from .errors import RemoteUnavailable
from .remote import RemoteCollection
from .store import SyncStore


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = "".join(traceback.format_exception(*record.exc_info))
        return json.dumps(log_data)


def setup_logging(log_level: str = "info", json_output: bool = False) -> None:
    """Configure the root logger.

    Args:
        log_level: Level name (warning, info, debug).
        json_output: Emit one JSON object per line instead of plain text.
    """
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        handlers=[handler],
    )


def build_store(config: Config) -> SyncStore:
    """Create a SyncStore wired to the configured remote collection."""
    remote = RemoteCollection(
        base_url=config.remote.base_url,
        collection=config.remote.collection,
        suffix=config.remote.suffix,
        timeout=config.remote.timeout,
    )
    return SyncStore(remote)


async def cmd_dashboard(args: argparse.Namespace) -> int:
    """Start the web dashboard."""
    config = load_config(args.config)

    try:
        from .dashboard import create_app

        import uvicorn
    except ImportError as e:
        print(f"Dashboard dependencies not installed: {e}", file=sys.stderr)
        print("Install with: pip install postsync[dashboard]", file=sys.stderr)
        return 1

    if not config.remote.base_url:
        print("No remote URL configured (set remote.base_url or POSTSYNC_REMOTE_URL)", file=sys.stderr)
        return 1

    host = args.host or config.dashboard.host
    port = args.port or config.dashboard.port

    store = build_store(config)
    app = create_app(config, store)

    print(f"Starting {config.dashboard.title} Dashboard")
    print(f"Remote: {config.remote.base_url} (collection: {config.remote.collection})")
    print(f"URL: http://{host}:{port}")

    try:
        verbose = getattr(args, "verbose", False)
        config_uvicorn = uvicorn.Config(
            app,
            host=host,
            port=port,
            log_level="info" if verbose else "warning",
        )
        server = uvicorn.Server(config_uvicorn)
        await server.serve()
    finally:
        await store.remote.close()

    return 0


async def cmd_status(args: argparse.Namespace) -> int:
    """Check that the remote collection can be loaded."""
    config = load_config(args.config)
    store = build_store(config)

    status_data = {
        "timestamp": datetime.now().isoformat(),
        "remote": {
            "base_url": config.remote.base_url,
            "collection": config.remote.collection,
            "timeout": config.remote.timeout,
        },
    }

    try:
        await store.load()
        status_data["remote"]["reachable"] = True
        status_data["remote"]["error"] = None
    except RemoteUnavailable as e:
        status_data["remote"]["reachable"] = False
        status_data["remote"]["error"] = e.detail or str(e)
    finally:
        await store.remote.close()

    status_data["posts"] = {
        "count": len(store),
        "ids": [post.id for post in store.records],
    }

    if args.json:
        print(json.dumps(status_data, indent=2))
    else:
        remote_status = status_data["remote"]
        print("postsync Status Check")
        print("=====================")
        print(f"Remote ({remote_status['base_url'] or 'not configured'}):")
        if remote_status["reachable"]:
            print("  Status: Reachable")
            print(f"  Posts: {status_data['posts']['count']}")
        else:
            print("  Status: Not reachable")
            print(f"  Error: {remote_status['error']}")

    return 0 if status_data["remote"]["reachable"] else 1


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="postsync",
        description="Manage a post list stored in a remote document collection",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file (default: none, built-in defaults)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["warning", "info", "debug"],
        default=None,
        help="Set log level explicitly (overrides -v/--verbose)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON for machine parsing",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Status command
    status_parser = subparsers.add_parser("status", help="Check the remote collection")
    status_parser.add_argument(
        "--json",
        action="store_true",
        help="Output status as JSON",
    )
    status_parser.set_defaults(func=cmd_status)

    # Dashboard command
    dashboard_parser = subparsers.add_parser("dashboard", help="Start the web dashboard")
    dashboard_parser.add_argument(
        "-p", "--port",
        type=int,
        default=None,
        help="Port to run dashboard on (default: from config, 8080)",
    )
    dashboard_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind dashboard to (default: from config, 127.0.0.1)",
    )
    dashboard_parser.set_defaults(func=cmd_dashboard)

    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging(
        args.log_level or ("debug" if args.verbose else config.logging.level),
        args.json_logs or config.logging.json,
    )

    if not args.command:
        parser.print_help()
        return 1

    return asyncio.run(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
