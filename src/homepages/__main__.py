# ABOUTME: CLI entry point for the homepages site tools.
# ABOUTME: Provides subcommands: latest, status, flush-cache, reading, init-db, serve.

import argparse
import logging
import sys

import structlog

from homepages.config import get_settings


def configure_logging() -> None:
    """Configure structlog for console or JSON output."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )
    else:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )


def cmd_latest(_args: argparse.Namespace) -> int:
    """Print the latest published homepage id (0 when there is none)."""
    from homepages.site import get_site

    site = get_site()
    print(site.plugin.get_latest_homepage_id())
    return 0


def cmd_status(_args: argparse.Namespace) -> int:
    """Show reading settings, activation state and the cached latest id."""
    from homepages.host.reading import get_front_page_mode, get_page_on_front
    from homepages.site import get_site

    site = get_site()
    settings = site.settings
    cached = site.transients.get(settings.latest_cache_key)

    print("\n=== Homepages Status ===\n")
    print(f"Front page mode: {get_front_page_mode(site.options).value}")
    print(f"Page on front: {get_page_on_front(site.options) or '-'}")
    print(f"Homepage published: {'yes' if site.plugin.latch.is_set() else 'no'}")
    print(f"Interception active: {'yes' if site.plugin.is_active() else 'no'}")
    print(f"Cached latest id: {'-' if cached is None else cached}")
    print(f"Latest homepage id: {site.plugin.get_latest_homepage_id()}")

    notices = site.plugin.admin_notices()
    if notices:
        print("\n⚠️  Notices:")
        for notice in notices:
            print(f"  - {notice.striptags()}")
    print()

    return 0


def cmd_flush_cache(_args: argparse.Namespace) -> int:
    """Drop the cached latest homepage id."""
    from homepages.site import get_site

    log = structlog.get_logger()
    site = get_site()
    deleted = site.transients.delete(site.settings.latest_cache_key)
    log.info("homepage_cache_flushed", existed=deleted)
    return 0


def cmd_reading(args: argparse.Namespace) -> int:
    """Update what the site root displays."""
    from homepages.host.reading import PAGE_ON_FRONT, SHOW_ON_FRONT
    from homepages.models import FrontPageMode
    from homepages.site import get_site

    log = structlog.get_logger()
    mode = FrontPageMode(args.mode)
    if mode == FrontPageMode.PAGE and not args.page_id:
        log.error("reading_page_id_required")
        return 1

    site = get_site()
    site.options.update(SHOW_ON_FRONT, mode.value)
    if args.page_id:
        site.options.update(PAGE_ON_FRONT, args.page_id)
    log.info("reading_settings_updated", mode=mode.value, page_on_front=args.page_id)
    return 0


def cmd_init_db(_args: argparse.Namespace) -> int:
    """Create database tables."""
    from homepages.db.session import init_db

    log = structlog.get_logger()
    try:
        init_db()
    except Exception:
        log.exception("init_db_failed")
        return 1
    log.info("init_db_complete", url=get_settings().database_url)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web frontend with uvicorn."""
    import uvicorn

    uvicorn.run("homepages.web.app:create_app", factory=True, host=args.host, port=args.port)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="homepages",
        description="Homepages - serve the latest published homepage on the site root",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("latest", help="Print the latest published homepage id")
    subparsers.add_parser("status", help="Show reading settings and homepage state")
    subparsers.add_parser("flush-cache", help="Drop the cached latest homepage id")

    # reading command
    reading_parser = subparsers.add_parser("reading", help="Set what the site root displays")
    reading_parser.add_argument(
        "mode",
        choices=["posts", "page"],
        help="'posts' for the latest homepage, 'page' for a fixed front page",
    )
    reading_parser.add_argument(
        "--page-id",
        type=int,
        default=0,
        help="Fixed front page id (required for 'page')",
    )

    subparsers.add_parser("init-db", help="Create database tables")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web frontend")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    return parser


COMMANDS = {
    "latest": cmd_latest,
    "status": cmd_status,
    "flush-cache": cmd_flush_cache,
    "reading": cmd_reading,
    "init-db": cmd_init_db,
    "serve": cmd_serve,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
