# ABOUTME: Minimal REST dispatcher for post type collection routes.
# ABOUTME: Runs the rest_pre_dispatch and rest_<type>_query filters before querying posts.

from typing import Any

import structlog

from homepages.host.hooks import HookRegistry
from homepages.host.ports import PostFinder, PostTypeRegistry
from homepages.host.query import QueryDescription
from homepages.models import Post, PostStatus, RequestContext, RestError, RestRequest
from homepages.utils import absint

log = structlog.get_logger()

MAX_PER_PAGE = 100


def to_rest_item(post: Post) -> dict[str, Any]:
    """Serialize a post the way collection endpoints return it."""
    return {
        "id": post.id,
        "date": post.published_at.isoformat(),
        "modified": post.modified_at.isoformat(),
        "status": post.status.value,
        "type": post.post_type,
        "title": {"rendered": post.title},
        "content": {"rendered": post.content},
        "featured_media": post.featured_media or 0,
    }


class RestServer:
    """Dispatches ``GET /<namespace>/<post_type>`` collection requests."""

    def __init__(
        self,
        finder: PostFinder,
        hooks: HookRegistry,
        post_types: PostTypeRegistry,
        namespace: str,
        default_per_page: int = 10,
    ) -> None:
        self.finder = finder
        self.hooks = hooks
        self.post_types = post_types
        self.namespace = namespace.strip("/")
        self.default_per_page = default_per_page

    def _match(self, route: str) -> str | None:
        namespace, _, post_type = route.strip("/").rpartition("/")
        if namespace != self.namespace:
            return None
        definition = self.post_types.get_post_type(post_type)
        if definition is None or not definition.show_in_rest:
            return None
        return post_type

    def dispatch(
        self, request: RestRequest, context: RequestContext | None = None
    ) -> list[dict[str, Any]] | RestError:
        """Handle a collection request.

        Returns:
            The serialized posts, or a RestError when a filter rejects the
            request or no route matches.
        """
        context = context or RequestContext()
        result = self.hooks.apply_filters("rest_pre_dispatch", None, self, request, context)
        if result is not None:
            return result

        post_type = self._match(request.route)
        if post_type is None:
            return RestError(
                code="rest_no_route",
                message="No route was found matching the URL and request method.",
                status=404,
            )

        per_page = absint(request.params.get("per_page")) or self.default_per_page
        args: dict[str, Any] = {
            "post_type": post_type,
            "post_status": PostStatus.PUBLISH.value,
            "posts_per_page": min(per_page, MAX_PER_PAGE),
            "paged": absint(request.params.get("page")) or 1,
        }
        args = self.hooks.apply_filters(f"rest_{post_type}_query", args, request)

        posts = self.finder.find(QueryDescription(query_vars=args), context)
        log.debug("rest_collection_dispatched", route=request.route, count=len(posts))
        return [to_rest_item(post) for post in posts]
