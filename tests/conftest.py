# ABOUTME: Pytest fixtures and configuration for homepages tests.
# ABOUTME: Provides test settings, an in-memory site, homepage factories and a request helper.

from collections.abc import Callable

import pytest
from pydantic import SecretStr

from homepages.config import Settings
from homepages.host.query import QueryDescription
from homepages.host.reading import PAGE_ON_FRONT, SHOW_ON_FRONT
from homepages.models import Post, PostStatus, RequestContext
from homepages.site import Site

EDITOR_TOKEN = "editor-token"


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing."""
    return Settings(
        database_url="sqlite://",
        editor_token=SecretStr(EDITOR_TOKEN),
        site_name="Test Site",
        log_level="DEBUG",
    )


@pytest.fixture
def site(mock_settings: Settings) -> Site:
    """Create an in-memory site with the plugin set up."""
    return Site.in_memory(mock_settings)


@pytest.fixture
def create_homepage(site: Site) -> Callable[..., Post]:
    """Factory for homepage posts saved through the post service."""

    def _create_homepage(
        status: PostStatus = PostStatus.PUBLISH, title: str = "Homepage", **fields
    ) -> Post:
        return site.posts.create(post_type="homepage", status=status, title=title, **fields)

    return _create_homepage


@pytest.fixture
def create_homepages(create_homepage: Callable[..., Post]) -> Callable[[int], list[int]]:
    """Factory for several published homepages, oldest first."""

    def _create_homepages(count: int) -> list[int]:
        return [create_homepage(title=f"Homepage {i}").id for i in range(count)]

    return _create_homepages


@pytest.fixture
def go_to(site: Site) -> Callable[..., QueryDescription]:
    """Resolve the main query for a front-end request."""

    def _go_to(
        logged_in: bool = False,
        preview: bool = False,
        admin: bool = False,
        **params,
    ) -> QueryDescription:
        context = RequestContext(
            is_admin=admin,
            is_logged_in=logged_in,
            is_preview=preview,
            params={key: str(value) for key, value in params.items()},
        )
        return site.lifecycle.run(context)

    return _go_to


@pytest.fixture
def static_front_page(site: Site) -> Post:
    """Switch the site to static-page mode with a published front page."""
    page = site.posts.create(post_type="page", title="Welcome", content="<p>Static</p>")
    site.options.update(SHOW_ON_FRONT, "page")
    site.options.update(PAGE_ON_FRONT, page.id)
    return page
