# ABOUTME: Protocols for the host services the plugin depends on.
# ABOUTME: Post store, option store, transient store, post type registry and query runner.

from typing import Any, Protocol

from homepages.host.query import PostCriteria, QueryDescription
from homepages.models import Post, PostTypeDefinition, RequestContext


class PostStore(Protocol):
    """Durable storage for posts, ordered newest first."""

    def find(self, criteria: PostCriteria) -> list[Post]: ...

    def get(self, post_id: int) -> Post | None: ...

    def save(self, post: Post) -> Post: ...


class OptionStore(Protocol):
    """Durable key/value settings."""

    def get(self, name: str, default: Any = None) -> Any: ...

    def update(self, name: str, value: Any) -> None: ...


class TransientStore(Protocol):
    """Ephemeral key/value cache with per-entry expiry.

    ``get`` returns None on a miss or after expiry.
    """

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: int) -> None: ...

    def delete(self, key: str) -> bool: ...


class PostTypeRegistry(Protocol):
    """Host registry of content types."""

    def register_post_type(self, name: str, definition: PostTypeDefinition) -> None: ...

    def get_post_type(self, name: str) -> PostTypeDefinition | None: ...


class PostFinder(Protocol):
    """Anything that can execute a query description."""

    def find(
        self, query: QueryDescription, context: RequestContext | None = None
    ) -> list[Post]: ...
