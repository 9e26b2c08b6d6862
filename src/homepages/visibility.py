# ABOUTME: Keeps individual homepages private outside the site root.
# ABOUTME: Direct permalinks 404 for visitors (home view for editors); paged home views always 404.

import structlog

from homepages.config import Settings, get_settings
from homepages.host.ports import OptionStore
from homepages.host.query import QueryDescription
from homepages.host.reading import get_front_page_mode
from homepages.models import FrontPageMode, RequestContext

log = structlog.get_logger()


def is_direct_homepage_view(
    query: QueryDescription, context: RequestContext, post_type: str
) -> bool:
    """True when a front-end main query resolved to a single homepage."""
    return not context.is_admin and query.is_main_query() and query.is_singular_of(post_type)


def is_paged_home_view(query: QueryDescription, context: RequestContext) -> bool:
    """True for page 2 or later of the front-end home listing."""
    return not context.is_admin and query.is_main_query() and query.is_home and query.is_paged


class VisibilityGate:
    """``wp`` callbacks that adjust the final view flags of the main query."""

    def __init__(self, options: OptionStore, settings: Settings | None = None) -> None:
        self.options = options
        self.settings = settings or get_settings()

    def update_homepage_query_conditionals(
        self, query: QueryDescription, context: RequestContext
    ) -> None:
        """Hide single homepages from visitors; show them as the home view to editors.

        In static-page mode editors see the document as an ordinary single
        view instead of a masqueraded home view.
        """
        if not is_direct_homepage_view(query, context, self.settings.post_type):
            return

        if not context.is_logged_in:
            log.debug("homepage_permalink_hidden", posts=[post.id for post in query.posts])
            query.set_404()
        elif get_front_page_mode(self.options) == FrontPageMode.POSTS:
            query.is_home = True

    def set_404_on_pagination(self, query: QueryDescription, context: RequestContext) -> None:
        """Send any paginated home view to a 404.

        Only the latest homepage should be public. A URL like ``/page/2``
        would otherwise serve the second most recent homepage.
        """
        if get_front_page_mode(self.options) != FrontPageMode.POSTS:
            return
        if is_paged_home_view(query, context):
            log.debug("paged_home_view_hidden", paged=query.get("paged"))
            query.set_404()
