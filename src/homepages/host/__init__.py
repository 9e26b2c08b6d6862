# ABOUTME: Host content-management model the plugin plugs into.
# ABOUTME: Exports the hook registry, query engine, lifecycle, post service and memory stores.

from homepages.host.hooks import HookRegistry
from homepages.host.lifecycle import RequestLifecycle
from homepages.host.memory import (
    MemoryOptionStore,
    MemoryPostStore,
    MemoryPostTypeRegistry,
    MemoryTransientStore,
)
from homepages.host.posts import PostService
from homepages.host.query import PostCriteria, QueryDescription, QueryEngine

__all__ = [
    "HookRegistry",
    "MemoryOptionStore",
    "MemoryPostStore",
    "MemoryPostTypeRegistry",
    "MemoryTransientStore",
    "PostCriteria",
    "PostService",
    "QueryDescription",
    "QueryEngine",
    "RequestLifecycle",
]
