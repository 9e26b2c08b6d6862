# ABOUTME: Host-side post service that persists posts and fires lifecycle hooks.
# ABOUTME: Every save emits transition_post_status followed by save_post.

from datetime import UTC, datetime

import structlog

from homepages.host.hooks import HookRegistry
from homepages.host.ports import PostStore
from homepages.models import Post, PostStatus

log = structlog.get_logger()

NEW_STATUS = "new"


class PostService:
    """Saves posts and notifies observers of status transitions and saves."""

    def __init__(self, store: PostStore, hooks: HookRegistry) -> None:
        self.store = store
        self.hooks = hooks

    def save(self, post: Post) -> Post:
        """Insert or update a post.

        Args:
            post: Post to save. An id of 0 inserts a new post.

        Returns:
            The stored post, with its assigned id.
        """
        existing = self.store.get(post.id) if post.id else None
        old_status = existing.status.value if existing else NEW_STATUS

        saved = self.store.save(post.model_copy(update={"modified_at": datetime.now(UTC)}))
        log.info(
            "post_saved",
            post_id=saved.id,
            post_type=saved.post_type,
            old_status=old_status,
            new_status=saved.status.value,
        )

        self.hooks.do_action("transition_post_status", saved.status.value, old_status, saved)
        self.hooks.do_action("save_post", saved.id, saved)
        return saved

    def create(
        self,
        post_type: str = "post",
        status: PostStatus = PostStatus.PUBLISH,
        title: str = "",
        content: str = "",
        **fields,
    ) -> Post:
        """Create and save a new post."""
        post = Post(post_type=post_type, status=status, title=title, content=content, **fields)
        return self.save(post)

    def update_status(self, post_id: int, status: PostStatus) -> Post:
        """Move an existing post to another status.

        Raises:
            LookupError: If no post has this id.
        """
        post = self.store.get(post_id)
        if post is None:
            raise LookupError(f"Post {post_id} does not exist")
        update: dict = {"status": status}
        if status == PostStatus.PUBLISH and post.status != PostStatus.PUBLISH:
            update["published_at"] = datetime.now(UTC)
        return self.save(post.model_copy(update=update))
