# ABOUTME: Tests for the query interception strategies.
# ABOUTME: Covers predicates, the activation gate, veto filters and both front-page modes.

import contextvars
import threading
from collections.abc import Callable

import pytest

from homepages.config import Settings
from homepages.host.query import QueryDescription
from homepages.interceptor import (
    MODIFY_MAIN_QUERY,
    MODIFY_POST_RESULTS,
    LatestPostsInterceptor,
    StaticPageInterceptor,
    is_static_front_page_query,
    select_interceptor,
    should_modify_main_query,
)
from homepages.models import FrontPageMode, Post, PostStatus, RequestContext
from homepages.site import Site


class TestPredicates:
    """Tests for the pure applicability predicates."""

    def test_should_modify_main_query(self) -> None:
        home = QueryDescription(is_main=True, is_home=True)

        assert should_modify_main_query(home, RequestContext())
        assert not should_modify_main_query(home, RequestContext(is_admin=True))
        assert not should_modify_main_query(QueryDescription(is_home=True), RequestContext())
        assert not should_modify_main_query(QueryDescription(is_main=True), RequestContext())

    def test_is_static_front_page_query(self) -> None:
        query = QueryDescription(is_main=True, query_vars={"page_id": 4})

        assert is_static_front_page_query(query, RequestContext(), 4)
        assert not is_static_front_page_query(query, RequestContext(), 5)
        assert not is_static_front_page_query(query, RequestContext(is_admin=True), 4)
        assert not is_static_front_page_query(QueryDescription(is_main=True), RequestContext(), 0)

    def test_select_interceptor(self, site: Site) -> None:
        interceptors = site.plugin.interceptors

        selected = select_interceptor(FrontPageMode.POSTS, interceptors)
        assert isinstance(selected, LatestPostsInterceptor)
        selected = select_interceptor(FrontPageMode.PAGE, interceptors)
        assert isinstance(selected, StaticPageInterceptor)
        with pytest.raises(LookupError):
            select_interceptor(FrontPageMode.PAGE, interceptors[:1])


class TestLatestPostsMode:
    """Pre-execution rewrite of the home view."""

    def test_rewrites_home_query(
        self, site: Site, create_homepage: Callable[..., Post]
    ) -> None:
        create_homepage()
        query = QueryDescription(is_main=True, is_home=True)

        site.hooks.do_action("parse_query", query, RequestContext())

        assert query.query_vars == {
            "post_type": "homepage",
            "posts_per_page": 1,
            "post_status": "publish",
        }

    def test_inert_until_first_publish(
        self, site: Site, create_homepage: Callable[..., Post], go_to
    ) -> None:
        """With only drafts the home view keeps showing regular posts."""
        create_homepage(status=PostStatus.DRAFT)
        post = site.posts.create(post_type="post", title="Blog post")

        query = go_to()

        assert query.is_home
        assert query.get("post_type") is None
        assert [p.id for p in query.posts] == [post.id]

    def test_gate_disabled_intercepts_immediately(self, mock_settings: Settings) -> None:
        """With the activation gate off, the rewrite happens before any publish."""
        site = Site.in_memory(mock_settings.model_copy(update={"activation_gate": False}))
        query = QueryDescription(is_main=True, is_home=True)

        site.hooks.do_action("parse_query", query, RequestContext())

        assert query.get("post_type") == "homepage"

    def test_admin_requests_untouched(
        self, site: Site, create_homepage: Callable[..., Post]
    ) -> None:
        create_homepage()
        query = QueryDescription(is_main=True, is_home=True)

        site.hooks.do_action("parse_query", query, RequestContext(is_admin=True))

        assert query.query_vars == {}

    def test_veto_leaves_home_query_unmodified(
        self, site: Site, create_homepage: Callable[..., Post], go_to
    ) -> None:
        """Returning False from the modify-main-query filter disables the rewrite."""
        create_homepage()
        post = site.posts.create(post_type="post", title="Blog post")
        site.hooks.add_filter(MODIFY_MAIN_QUERY, lambda allow, query, context: False)

        query = go_to()

        assert query.get("post_type") is None
        assert query.get("posts_per_page") is None
        assert [p.id for p in query.posts] == [post.id]

    def test_veto_filter_receives_gate_value(self, site: Site) -> None:
        """The filter default is the activation gate."""
        seen = []
        site.hooks.add_filter(MODIFY_MAIN_QUERY, lambda allow, query, context: seen.append(allow))

        query = QueryDescription(is_main=True, is_home=True)
        site.hooks.do_action("parse_query", query, RequestContext())

        assert seen == [False]

    def test_root_shows_only_latest_homepage(
        self, create_homepages: Callable[[int], list[int]], go_to
    ) -> None:
        ids = create_homepages(10)

        query = go_to()

        assert query.is_home
        assert not query.is_404
        assert [post.id for post in query.posts] == [ids[-1]]

    def test_static_strategy_inert_in_posts_mode(self, site: Site) -> None:
        """the_posts is left alone when the site shows latest posts."""
        posts = [Post(id=1, post_type="page")]
        query = QueryDescription(is_main=True, query_vars={"page_id": 1})

        assert site.hooks.apply_filters("the_posts", posts, query, RequestContext()) is posts


class TestStaticPageMode:
    """Post-execution short-circuit of the fixed front page."""

    def test_replaces_front_page_with_latest(
        self, site: Site, static_front_page: Post, create_homepages, go_to
    ) -> None:
        ids = create_homepages(3)

        query = go_to()

        assert query.is_home
        assert not query.is_page
        assert not query.is_singular
        assert not query.is_404
        assert query.target_fixed_page_id == 0
        assert [post.id for post in query.posts] == [ids[-1]]

    def test_document_title_is_front_page_title(
        self, site: Site, static_front_page: Post, create_homepage, go_to
    ) -> None:
        create_homepage(title="Latest homepage")
        query = go_to()

        title = site.hooks.apply_filters("document_title", "", query, RequestContext())

        assert title == "Welcome"

    def test_document_title_untouched_without_short_circuit(
        self, site: Site, static_front_page: Post
    ) -> None:
        query = QueryDescription(is_main=True)

        title = site.hooks.apply_filters("document_title", "Other", query, RequestContext())
        assert title == "Other"

    def test_no_homepage_keeps_front_page(self, site: Site, static_front_page: Post, go_to) -> None:
        """Before any homepage is published the fixed page is served as usual."""
        query = go_to()

        assert query.is_page
        assert [post.id for post in query.posts] == [static_front_page.id]

    def test_ungated_without_homepage_keeps_results(self, mock_settings: Settings) -> None:
        """With the gate off and no homepage, the results stay the fixed page."""
        site = Site.in_memory(mock_settings.model_copy(update={"activation_gate": False}))
        page = site.posts.create(post_type="page", title="Welcome")
        site.options.update("show_on_front", "page")
        site.options.update("page_on_front", page.id)

        query = site.lifecycle.run(RequestContext())

        assert query.is_home
        assert [post.id for post in query.posts] == [page.id]

    def test_veto_post_results(
        self, site: Site, static_front_page: Post, create_homepage, go_to
    ) -> None:
        create_homepage()
        site.hooks.add_filter(MODIFY_POST_RESULTS, lambda allow, query, context: False)

        query = go_to()

        assert query.is_page
        assert [post.id for post in query.posts] == [static_front_page.id]

    def test_other_pages_untouched(
        self, site: Site, static_front_page: Post, create_homepage, go_to
    ) -> None:
        create_homepage()
        about = site.posts.create(post_type="page", title="About")

        query = go_to(page_id=about.id)

        assert query.is_page
        assert [post.id for post in query.posts] == [about.id]

    def test_resolve_runs_with_the_posts_detached(
        self, site: Site, static_front_page: Post, create_homepage, go_to
    ) -> None:
        """The resolver's own query never re-enters the short-circuit."""
        create_homepage()
        attached_during_resolve = []
        resolve = site.plugin.resolver.resolve_latest_id

        def spy(context):
            attached_during_resolve.append(
                site.hooks.has_hook("the_posts", site.plugin.update_post_results)
            )
            return resolve(context)

        site.plugin.resolver.resolve_latest_id = spy

        go_to()

        assert attached_during_resolve == [False]
        assert site.hooks.has_hook("the_posts", site.plugin.update_post_results)

    def test_concurrent_request_keeps_short_circuit(
        self, site: Site, static_front_page: Post, create_homepage, go_to
    ) -> None:
        """A root request served while another is resolving still gets the latest homepage."""
        homepage = create_homepage()
        concurrent_ids = []
        started = []
        resolve = site.plugin.resolver.resolve_latest_id

        def other_request() -> None:
            query = site.lifecycle.run(RequestContext())
            concurrent_ids.append([post.id for post in query.posts])

        def resolve_while_another_request_runs(context):
            if not started:
                started.append(True)
                worker = threading.Thread(target=contextvars.Context().run, args=(other_request,))
                worker.start()
                worker.join()
            return resolve(context)

        site.plugin.resolver.resolve_latest_id = resolve_while_another_request_runs

        query = go_to()

        assert concurrent_ids == [[homepage.id]]
        assert [post.id for post in query.posts] == [homepage.id]
