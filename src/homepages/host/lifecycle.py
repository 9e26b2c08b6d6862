# ABOUTME: Request lifecycle driver for front-end page views.
# ABOUTME: Builds the main query from request params, fires parse_query, executes it, then fires wp.

import structlog

from homepages.host.hooks import HookRegistry
from homepages.host.ports import OptionStore, PostFinder
from homepages.host.query import ANY, QueryDescription
from homepages.host.reading import get_front_page_mode, get_page_on_front
from homepages.models import FrontPageMode, RequestContext
from homepages.utils import absint

log = structlog.get_logger()


class RequestLifecycle:
    """Resolves the main query for a front-end request.

    Stages, in order:
        1. ``build_query`` derives query vars and view flags from the request.
        2. ``parse_query`` action lets observers rewrite the pending query.
        3. The query engine executes it (results pass through ``the_posts``).
        4. Singular views record the queried post type, or 404 when empty.
        5. ``wp`` action lets observers adjust the final view flags.
    """

    def __init__(self, finder: PostFinder, hooks: HookRegistry, options: OptionStore) -> None:
        self.finder = finder
        self.hooks = hooks
        self.options = options

    def build_query(self, context: RequestContext) -> QueryDescription:
        """Create the main query description for a request."""
        params = context.params
        query = QueryDescription(is_main=True, is_preview=context.is_preview)

        post_id = absint(params.get("p"))
        page_id = absint(params.get("page_id"))
        paged = absint(params.get("paged"))

        if post_id:
            query.set("p", post_id)
            if params.get("post_type"):
                query.set("post_type", params["post_type"])
            query.is_singular = True
        elif page_id:
            query.set("page_id", page_id)
            query.is_page = query.is_singular = True
        elif (
            get_front_page_mode(self.options) == FrontPageMode.PAGE
            and get_page_on_front(self.options)
        ):
            query.set("page_id", get_page_on_front(self.options))
            query.is_page = query.is_singular = True
        else:
            if params.get("post_type"):
                query.set("post_type", params["post_type"])
            query.is_home = True

        if query.is_singular and context.is_preview and context.is_logged_in:
            query.set("post_status", ANY)

        if paged:
            query.set("paged", paged)
            query.is_paged = paged > 1

        return query

    def run(self, context: RequestContext) -> QueryDescription:
        """Resolve the main query for a request through every lifecycle stage."""
        query = self.build_query(context)
        self.hooks.do_action("parse_query", query, context)

        self.finder.find(query, context)
        if query.is_singular:
            if query.posts:
                query.queried_post_type = query.posts[0].post_type
            else:
                query.set_404()

        self.hooks.do_action("wp", query, context)
        log.debug(
            "main_query_resolved",
            is_home=query.is_home,
            is_404=query.is_404,
            posts=[post.id for post in query.posts],
        )
        return query
