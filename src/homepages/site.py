# ABOUTME: Assembles a runnable site: host stores and services plus the homepages plugin.
# ABOUTME: Provides memory-backed and database-backed constructors and a cached default site.

from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session, sessionmaker

from homepages.config import Settings, get_settings
from homepages.host.hooks import HookRegistry
from homepages.host.lifecycle import RequestLifecycle
from homepages.host.memory import (
    MemoryOptionStore,
    MemoryPostStore,
    MemoryPostTypeRegistry,
    MemoryTransientStore,
)
from homepages.host.ports import OptionStore, PostStore, PostTypeRegistry, TransientStore
from homepages.host.posts import PostService
from homepages.host.query import QueryEngine
from homepages.host.rest_server import RestServer
from homepages.models import RequestContext
from homepages.plugin import Homepages


@dataclass
class Site:
    """Everything needed to serve requests for one site."""

    settings: Settings
    hooks: HookRegistry
    store: PostStore
    options: OptionStore
    transients: TransientStore
    post_types: PostTypeRegistry
    engine: QueryEngine
    posts: PostService
    lifecycle: RequestLifecycle
    rest: RestServer
    plugin: Homepages

    @classmethod
    def create(
        cls,
        store: PostStore,
        options: OptionStore,
        transients: TransientStore,
        settings: Settings | None = None,
        post_types: PostTypeRegistry | None = None,
    ) -> "Site":
        """Wire host services around the given stores, set up the plugin and fire ``init``."""
        settings = settings or get_settings()
        post_types = post_types or MemoryPostTypeRegistry()
        hooks = HookRegistry()
        engine = QueryEngine(store, hooks, settings.default_posts_per_page)
        plugin = Homepages(hooks, engine, store, options, transients, post_types, settings)
        plugin.setup()
        hooks.do_action("init")
        return cls(
            settings=settings,
            hooks=hooks,
            store=store,
            options=options,
            transients=transients,
            post_types=post_types,
            engine=engine,
            posts=PostService(store, hooks),
            lifecycle=RequestLifecycle(engine, hooks, options),
            rest=RestServer(
                engine, hooks, post_types, settings.rest_namespace, settings.default_posts_per_page
            ),
            plugin=plugin,
        )

    @classmethod
    def in_memory(cls, settings: Settings | None = None) -> "Site":
        return cls.create(
            MemoryPostStore(), MemoryOptionStore(), MemoryTransientStore(), settings=settings
        )

    @classmethod
    def from_database(
        cls,
        session_factory: sessionmaker[Session],
        settings: Settings | None = None,
    ) -> "Site":
        from homepages.db.repository import (
            OptionRepository,
            PostRepository,
            TransientRepository,
        )

        return cls.create(
            PostRepository(session_factory),
            OptionRepository(session_factory),
            TransientRepository(session_factory),
            settings=settings,
        )


@lru_cache
def get_site() -> Site:
    """Get the cached database-backed site built from settings."""
    from homepages.db.session import get_session_factory

    return Site.from_database(get_session_factory(), get_settings())


def get_latest_homepage_id(context: RequestContext | None = None) -> int:
    """Get the latest homepage ID of the default site."""
    return get_site().plugin.get_latest_homepage_id(context)
