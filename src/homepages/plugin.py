# ABOUTME: Composition root that wires every homepage component onto the host's hooks.
# ABOUTME: Selects the interception strategy from the front-page mode on each call.

from markupsafe import Markup

from homepages.config import Settings, get_settings
from homepages.host.hooks import HookRegistry
from homepages.host.ports import (
    OptionStore,
    PostFinder,
    PostStore,
    PostTypeRegistry,
    TransientStore,
)
from homepages.host.query import QueryDescription
from homepages.host.reading import get_front_page_mode
from homepages.interceptor import (
    Interceptor,
    LatestPostsInterceptor,
    StaticPageInterceptor,
    select_interceptor,
)
from homepages.models import Post, RequestContext
from homepages.notices import AdminNotices
from homepages.publication import ActivationLatch, PublicationTracker
from homepages.registration import PostTypeRegistrar
from homepages.resolver import CacheInvalidator, LatestHomepageResolver
from homepages.rest import ApiGuard
from homepages.visibility import VisibilityGate


class Homepages:
    """The homepages plugin.

    Holds one instance of each component and registers their callbacks on
    the host hook registry in ``setup``.
    """

    def __init__(
        self,
        hooks: HookRegistry,
        finder: PostFinder,
        store: PostStore,
        options: OptionStore,
        transients: TransientStore,
        post_types: PostTypeRegistry,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.hooks = hooks
        self.options = options

        self.latch = ActivationLatch(options, self.settings.has_published_option)
        self.tracker = PublicationTracker(self.latch, self.settings)
        self.resolver = LatestHomepageResolver(finder, transients, self.settings)
        self.invalidator = CacheInvalidator(transients, self.settings)
        self.registrar = PostTypeRegistrar(post_types, self.settings)
        self.visibility = VisibilityGate(options, self.settings)
        self.api_guard = ApiGuard(self.settings)
        self.notices = AdminNotices(options, self.settings)
        self.interceptors: tuple[Interceptor, ...] = (
            LatestPostsInterceptor(hooks, self.is_active, self.settings),
            StaticPageInterceptor(
                hooks, self.is_active, self._resolve_detached, store, options, self.settings
            ),
        )

    def setup(self) -> None:
        """Register every callback on the hook registry."""
        hooks = self.hooks
        hooks.add_action("init", self.registrar.create_post_type)
        hooks.add_action("wp", self.visibility.update_homepage_query_conditionals)
        hooks.add_action("wp", self.visibility.set_404_on_pagination)

        hooks.add_action("save_post", self.invalidator.clear_homepage_cache)

        hooks.add_action("parse_query", self.update_main_query)
        hooks.add_filter("the_posts", self.update_post_results)
        hooks.add_filter("document_title", self.update_document_title)
        hooks.add_filter(
            f"rest_{self.settings.post_type}_query", self.api_guard.rest_only_expose_latest_homepage
        )
        hooks.add_filter("rest_pre_dispatch", self.api_guard.prevent_paginated_rest_requests)

        hooks.add_filter("admin_notices", self.notices.admin_notices)
        hooks.add_action("transition_post_status", self.tracker.on_transition)

    def is_active(self) -> bool:
        """Whether interception is live (first publish seen, or gate disabled)."""
        if not self.settings.activation_gate:
            return True
        return self.tracker.has_homepage()

    def interceptor(self) -> Interceptor:
        return select_interceptor(get_front_page_mode(self.options), self.interceptors)

    def update_main_query(self, query: QueryDescription, context: RequestContext) -> None:
        self.interceptor().on_parse_query(query, context)

    def update_post_results(
        self, posts: list[Post], query: QueryDescription, context: RequestContext
    ) -> list[Post]:
        return self.interceptor().on_the_posts(posts, query, context)

    def update_document_title(
        self, title: str, query: QueryDescription, context: RequestContext
    ) -> str:
        return self.interceptor().document_title(title, query, context)

    def _resolve_detached(self, context: RequestContext) -> int:
        with self.hooks.suspended("the_posts", self.update_post_results):
            return self.resolver.resolve_latest_id(context)

    def get_latest_homepage_id(self, context: RequestContext | None = None) -> int:
        """Get the latest homepage id."""
        return self.resolver.resolve_latest_id(context)

    def admin_notices(self) -> list[Markup]:
        """Collect admin notices from every ``admin_notices`` filter."""
        return self.hooks.apply_filters("admin_notices", [])
