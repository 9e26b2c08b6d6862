# ABOUTME: FastAPI application factory with Jinja2 templates and database lifespan.
# ABOUTME: Main entry point for the homepages web frontend.

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import bleach
import structlog
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from homepages.db.session import close_db, init_db
from homepages.site import Site, get_site
from homepages.web.routes import admin, home, rest

logger = structlog.get_logger()

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"

# Allowed HTML tags for homepage bodies
ALLOWED_TAGS = [
    "p", "br", "strong", "em", "b", "i", "a", "ul", "ol", "li", "blockquote", "h2", "h3",
]
ALLOWED_ATTRS = {"a": ["href", "title"]}


def sanitize_html(value: str) -> Markup:
    """Sanitize HTML content to prevent XSS while allowing safe formatting."""
    clean = bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRS, strip=True)
    return Markup(clean)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context for database setup/teardown.

    An injected site brings its own stores, so the settings database is left alone.
    """
    logger.info("app_startup")
    if app.state.owns_db:
        init_db()
    yield
    logger.info("app_shutdown")
    if app.state.owns_db:
        close_db()


def create_app(site: Site | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        site: Site to serve. Defaults to the database-backed site from settings.
    """
    app = FastAPI(
        title="Homepages",
        description="Serves the latest published homepage on the site root",
        version="0.1.0",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["sanitize"] = sanitize_html
    app.state.templates = templates
    app.state.owns_db = site is None
    app.state.site = site or get_site()

    app.include_router(rest.router)
    app.include_router(admin.router)
    app.include_router(home.router)

    return app
