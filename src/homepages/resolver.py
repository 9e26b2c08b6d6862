# ABOUTME: Resolves the latest published homepage id, cached in a transient.
# ABOUTME: Also holds the cache invalidator that evicts the cached id whenever a homepage is saved.

import structlog

from homepages.config import Settings, get_settings
from homepages.host.ports import PostFinder, TransientStore
from homepages.host.query import QueryDescription
from homepages.models import Post, PostStatus, RequestContext
from homepages.utils import absint

log = structlog.get_logger()


class LatestHomepageResolver:
    """Finds the most recently published homepage."""

    def __init__(
        self,
        finder: PostFinder,
        transients: TransientStore,
        settings: Settings | None = None,
    ) -> None:
        self.finder = finder
        self.transients = transients
        self.settings = settings or get_settings()

    def resolve_latest_id(self, context: RequestContext | None = None) -> int:
        """Get the latest homepage id.

        A preview request carrying a ``p`` parameter resolves to that id
        as-is, so unpublished homepages can be previewed. Otherwise the cached
        id is used when present; ``0`` is a valid cached value meaning no
        homepage exists yet.

        Args:
            context: Current request context.

        Returns:
            The latest published homepage id, or 0 if there is none.
        """
        context = context or RequestContext()
        if context.is_preview and context.params.get("p"):
            return absint(context.params["p"])

        cached = self.transients.get(self.settings.latest_cache_key)
        if cached is not None:
            return absint(cached)

        homepage_id = self._lookup_latest_id(context)
        self.transients.set(
            self.settings.latest_cache_key, homepage_id, self.settings.latest_cache_ttl
        )
        log.info("latest_homepage_cache_miss", homepage_id=homepage_id)
        return homepage_id

    def _lookup_latest_id(self, context: RequestContext) -> int:
        query = QueryDescription(
            query_vars={
                "post_type": self.settings.post_type,
                "post_status": PostStatus.PUBLISH.value,
                "posts_per_page": 1,
                "no_found_rows": True,
            }
        )
        posts = self.finder.find(query, context)
        if posts and isinstance(posts[0], Post):
            return absint(posts[0].id)
        return 0


class CacheInvalidator:
    """Drops the cached latest homepage id on every homepage save."""

    def __init__(self, transients: TransientStore, settings: Settings | None = None) -> None:
        self.transients = transients
        self.settings = settings or get_settings()

    def clear_homepage_cache(self, post_id: int, post: Post) -> None:
        """``save_post`` callback. Any save counts, whatever the status change."""
        if post.post_type != self.settings.post_type:
            return
        self.transients.delete(self.settings.latest_cache_key)
        log.info("homepage_cache_cleared", post_id=post_id)
