# ABOUTME: Mutable query description and the engine that executes it against a post store.
# ABOUTME: The engine runs every result list through the "the_posts" filter.

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from homepages.models import Post, PostStatus, RequestContext
from homepages.utils import absint

if TYPE_CHECKING:
    from homepages.host.hooks import HookRegistry
    from homepages.host.ports import PostStore

ANY = "any"


@dataclass
class QueryDescription:
    """A pending content query plus the view flags the host derives from it."""

    query_vars: dict[str, Any] = field(default_factory=dict)
    is_main: bool = False
    is_home: bool = False
    is_paged: bool = False
    is_preview: bool = False
    is_page: bool = False
    is_singular: bool = False
    is_404: bool = False
    queried_post_type: str | None = None
    posts: list[Post] = field(default_factory=list)

    def get(self, key: str, default: Any = None) -> Any:
        return self.query_vars.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.query_vars[key] = value

    def is_main_query(self) -> bool:
        return self.is_main

    @property
    def target_fixed_page_id(self) -> int:
        """Id of the fixed page this query targets, or 0."""
        return absint(self.get("page_id"))

    def is_singular_of(self, post_type: str) -> bool:
        """True if this is a single-document view of the given post type."""
        return self.is_singular and self.queried_post_type == post_type

    def set_404(self) -> None:
        """Switch the query to its not-found state."""
        self.is_home = False
        self.is_paged = False
        self.is_page = False
        self.is_singular = False
        self.is_404 = True
        self.queried_post_type = None
        self.posts = []


@dataclass
class PostCriteria:
    """Store-level selection derived from query vars."""

    ids: list[int] | None = None
    post_types: list[str] | None = None
    statuses: list[PostStatus] | None = None
    limit: int | None = None
    offset: int = 0

    @classmethod
    def from_query_vars(cls, query_vars: dict[str, Any], default_per_page: int) -> "PostCriteria":
        """Translate query vars into criteria.

        ``p`` selects one post of any type, ``page_id`` one post of type
        ``page``; otherwise ``post_type`` (default ``post``) applies. Status
        defaults to published only. ``posts_per_page=-1`` lifts the limit.
        ``paged`` only offsets listings, never an id lookup.
        """
        ids = None
        post_types = _as_list(query_vars.get("post_type"))
        if absint(query_vars.get("p")):
            ids = [absint(query_vars["p"])]
        elif absint(query_vars.get("page_id")):
            ids = [absint(query_vars["page_id"])]
            post_types = post_types or ["page"]
        elif post_types is None:
            post_types = ["post"]
        if post_types and ANY in post_types:
            post_types = None

        raw_statuses = _as_list(query_vars.get("post_status")) or [PostStatus.PUBLISH.value]
        statuses = None if ANY in raw_statuses else [PostStatus(s) for s in raw_statuses]

        per_page = query_vars.get("posts_per_page", default_per_page)
        per_page = default_per_page if per_page is None else int(per_page)
        limit = None if per_page < 0 else per_page
        paged = max(absint(query_vars.get("paged")), 1)
        offset = (paged - 1) * limit if limit and ids is None else 0

        return cls(ids=ids, post_types=post_types, statuses=statuses, limit=limit, offset=offset)


def _as_list(value: Any) -> list[str] | None:
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class QueryEngine:
    """Executes query descriptions against a post store."""

    def __init__(self, store: "PostStore", hooks: "HookRegistry", default_per_page: int = 10):
        self.store = store
        self.hooks = hooks
        self.default_per_page = default_per_page

    def find(self, query: QueryDescription, context: RequestContext | None = None) -> list[Post]:
        """Run the query and store the filtered results on it.

        Results pass through the ``the_posts`` filter unless the query sets
        ``suppress_filters``.
        """
        criteria = PostCriteria.from_query_vars(query.query_vars, self.default_per_page)
        posts = self.store.find(criteria)
        if not query.get("suppress_filters"):
            posts = self.hooks.apply_filters("the_posts", posts, query, context or RequestContext())
        query.posts = list(posts)
        return query.posts
