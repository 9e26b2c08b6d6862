# ABOUTME: Tracks whether a homepage has ever been published.
# ABOUTME: The flag is a one-way latch that gates query interception until the first publish.

import structlog

from homepages.config import Settings, get_settings
from homepages.host.ports import OptionStore
from homepages.models import Post, PostStatus

log = structlog.get_logger()


class ActivationLatch:
    """Durable boolean that can be set but never cleared."""

    def __init__(self, options: OptionStore, name: str) -> None:
        self._options = options
        self._name = name

    def is_set(self) -> bool:
        return bool(self._options.get(self._name, False))

    def set(self) -> None:
        self._options.update(self._name, True)


class PublicationTracker:
    """Sets the activation latch when a homepage is first published."""

    def __init__(self, latch: ActivationLatch, settings: Settings | None = None) -> None:
        self.latch = latch
        self.settings = settings or get_settings()

    def has_homepage(self) -> bool:
        """Check if at least one homepage has ever been published."""
        return self.latch.is_set()

    def on_transition(self, new_status: str, old_status: str, post: Post) -> None:
        """``transition_post_status`` callback."""
        if (
            new_status == PostStatus.PUBLISH.value
            and old_status != PostStatus.PUBLISH.value
            and post.post_type == self.settings.post_type
        ):
            already_set = self.latch.is_set()
            self.latch.set()
            if not already_set:
                log.info("homepage_first_published", post_id=post.id)
