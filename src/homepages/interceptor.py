# ABOUTME: Query interception strategies that put the latest homepage on the site root.
# ABOUTME: Latest-posts mode rewrites the main query; static-page mode replaces the fetched results.

from abc import ABC
from collections.abc import Callable, Iterable
from typing import ClassVar

import structlog

from homepages.config import Settings, get_settings
from homepages.host.hooks import HookRegistry
from homepages.host.ports import OptionStore, PostStore
from homepages.host.query import QueryDescription
from homepages.host.reading import get_page_on_front
from homepages.models import FrontPageMode, Post, PostStatus, RequestContext

log = structlog.get_logger()

MODIFY_MAIN_QUERY = "homepages_modify_main_query"
MODIFY_POST_RESULTS = "homepages_modify_post_results"

# Query var recording which fixed front page a short-circuited query replaced.
FRONT_PAGE_VAR = "homepages_front_page"


def should_modify_main_query(query: QueryDescription, context: RequestContext) -> bool:
    """True for the main home-view query of a front-end request."""
    return not context.is_admin and query.is_main_query() and query.is_home


def is_static_front_page_query(
    query: QueryDescription, context: RequestContext, page_on_front: int
) -> bool:
    """True for the front-end main query that fetched the configured fixed front page."""
    return (
        not context.is_admin
        and query.is_main_query()
        and page_on_front > 0
        and query.target_fixed_page_id == page_on_front
    )


class Interceptor(ABC):
    """Strategy for one front-page mode. Every hook defaults to a no-op."""

    mode: ClassVar[FrontPageMode]

    def __init__(
        self,
        hooks: HookRegistry,
        gate: Callable[[], bool],
        settings: Settings | None = None,
    ) -> None:
        self.hooks = hooks
        self.gate = gate
        self.settings = settings or get_settings()

    def on_parse_query(self, query: QueryDescription, context: RequestContext) -> None:
        return None

    def on_the_posts(
        self, posts: list[Post], query: QueryDescription, context: RequestContext
    ) -> list[Post]:
        return posts

    def document_title(self, title: str, query: QueryDescription, context: RequestContext) -> str:
        return title


class LatestPostsInterceptor(Interceptor):
    """Rewrites the home-view main query to fetch the single latest homepage."""

    mode = FrontPageMode.POSTS

    def on_parse_query(self, query: QueryDescription, context: RequestContext) -> None:
        if not should_modify_main_query(query, context):
            return
        if not self.hooks.apply_filters(MODIFY_MAIN_QUERY, self.gate(), query, context):
            log.debug("main_query_left_unmodified")
            return

        query.set("post_type", self.settings.post_type)
        query.set("posts_per_page", 1)
        query.set("post_status", PostStatus.PUBLISH.value)


class StaticPageInterceptor(Interceptor):
    """Swaps the fetched fixed front page for the latest homepage.

    ``resolve`` must not re-enter this interceptor; the plugin hands in a
    resolver call that runs with the ``the_posts`` dispatch detached.
    """

    mode = FrontPageMode.PAGE

    def __init__(
        self,
        hooks: HookRegistry,
        gate: Callable[[], bool],
        resolve: Callable[[RequestContext], int],
        store: PostStore,
        options: OptionStore,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(hooks, gate, settings)
        self.resolve = resolve
        self.store = store
        self.options = options

    def on_the_posts(
        self, posts: list[Post], query: QueryDescription, context: RequestContext
    ) -> list[Post]:
        page_on_front = get_page_on_front(self.options)
        if not is_static_front_page_query(query, context, page_on_front):
            return posts
        if not self.hooks.apply_filters(MODIFY_POST_RESULTS, self.gate(), query, context):
            log.debug("post_results_left_unmodified", page_on_front=page_on_front)
            return posts

        query.is_home = True
        query.is_page = False
        query.is_singular = False
        query.set("page_id", 0)
        query.set(FRONT_PAGE_VAR, page_on_front)

        latest_id = self.resolve(context)
        latest = self.store.get(latest_id) if latest_id else None
        if latest is None:
            return posts

        log.debug("front_page_replaced", page_on_front=page_on_front, homepage_id=latest.id)
        return [latest]

    def document_title(self, title: str, query: QueryDescription, context: RequestContext) -> str:
        front_page_id = query.get(FRONT_PAGE_VAR)
        if not front_page_id:
            return title
        front_page = self.store.get(front_page_id)
        return front_page.title if front_page else title


def select_interceptor(mode: FrontPageMode, interceptors: Iterable[Interceptor]) -> Interceptor:
    """Pick the strategy for the configured front-page mode.

    Raises:
        LookupError: If no strategy handles the mode.
    """
    for interceptor in interceptors:
        if interceptor.mode == mode:
            return interceptor
    raise LookupError(f"No interceptor for front page mode {mode.value!r}")
