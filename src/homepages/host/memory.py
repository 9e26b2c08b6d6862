# ABOUTME: In-memory implementations of the host store ports.
# ABOUTME: Used by tests and by single-process setups that need no database.

import time
from collections.abc import Callable
from typing import Any

import structlog

from homepages.host.query import PostCriteria
from homepages.models import Post, PostTypeDefinition

log = structlog.get_logger()


def recency_key(post: Post) -> tuple:
    """Sort key for the host's default order: newest first, then highest id."""
    return (post.published_at, post.id)


class MemoryPostStore:
    """Post store backed by a dict."""

    def __init__(self) -> None:
        self._posts: dict[int, Post] = {}
        self._next_id = 1

    def save(self, post: Post) -> Post:
        if not post.id:
            post = post.model_copy(update={"id": self._next_id})
        self._next_id = max(self._next_id, post.id + 1)
        self._posts[post.id] = post
        return post

    def get(self, post_id: int) -> Post | None:
        return self._posts.get(post_id)

    def find(self, criteria: PostCriteria) -> list[Post]:
        posts = [
            post
            for post in self._posts.values()
            if (criteria.ids is None or post.id in criteria.ids)
            and (criteria.post_types is None or post.post_type in criteria.post_types)
            and (criteria.statuses is None or post.status in criteria.statuses)
        ]
        posts.sort(key=recency_key, reverse=True)
        end = None if criteria.limit is None else criteria.offset + criteria.limit
        return posts[criteria.offset : end]


class MemoryOptionStore:
    """Option store backed by a dict."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = dict(initial or {})

    def get(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def update(self, name: str, value: Any) -> None:
        self._options[name] = value


class MemoryTransientStore:
    """Transient store with per-key expiry measured by an injectable clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            log.debug("transient_expired", key=key)
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None


class MemoryPostTypeRegistry:
    """Post type registry backed by a dict."""

    def __init__(self) -> None:
        self._types: dict[str, PostTypeDefinition] = {}

    def register_post_type(self, name: str, definition: PostTypeDefinition) -> None:
        self._types[name] = definition
        log.debug("post_type_registered", post_type=name)

    def get_post_type(self, name: str) -> PostTypeDefinition | None:
        return self._types.get(name)
