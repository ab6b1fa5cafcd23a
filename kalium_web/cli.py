"""Command-line entry point for the catalog server."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .app import create_app
from .config import (
    FLASK_DEBUG,
    FLASK_HOST,
    FLASK_PORT,
    FRONTEND_ROOT,
    LOG_DIR,
    LOG_LEVEL,
    LOG_TO_FILE,
    MONGODB_URI,
    REWRITE_PROFILE,
)
from .errors import StoreError
from .logging_config import setup_logging
from .rewrite import PROFILE_NAMES, build_profile
from .store import CatalogStore

__all__ = ["main", "parse_args"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Kalium furniture catalog API and mirror page server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kalium-web                          # backend routes on $PORT (default 8000)
  kalium-web --profile static         # plain index_*.html mirror links
  kalium-web --frontend-root ./site --port 5000 --debug
        """,
    )
    parser.add_argument("--host", default=FLASK_HOST, help=f"Bind address (default: {FLASK_HOST})")
    parser.add_argument("--port", type=int, default=FLASK_PORT, help=f"Port (default: {FLASK_PORT})")
    parser.add_argument(
        "--profile",
        choices=PROFILE_NAMES,
        default=REWRITE_PROFILE,
        help=f"Link rewrite profile (default: {REWRITE_PROFILE})",
    )
    parser.add_argument(
        "--frontend-root",
        type=Path,
        default=FRONTEND_ROOT,
        help="Directory holding the mirrored HTML and assets",
    )
    parser.add_argument("--debug", action="store_true", default=FLASK_DEBUG, help="Flask debug mode")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Console log level (default: {LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logger = setup_logging(
        level=getattr(logging, args.log_level),
        log_to_file=LOG_TO_FILE,
        log_dir=LOG_DIR,
    )

    store = CatalogStore.from_uri(MONGODB_URI)
    try:
        store.ping()
        logger.info(f"[DB] Connected to MongoDB at {MONGODB_URI}")
    except StoreError as e:
        # Keep serving pages; API calls will answer 500 until the DB is back
        logger.error(f"[DB] MongoDB connection error: {e.message}")

    profile = build_profile(args.profile)
    app = create_app(store=store, frontend_root=args.frontend_root, profile=profile)

    logger.info(f"Server running at http://localhost:{args.port}")
    if profile.name == "static":
        logger.info("Rewriting product/category links to local index_*.html")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
