# ABOUTME: Tests for the action/filter hook registry.
# ABOUTME: Validates ordering, filter chaining, removal and temporary suspension.

import contextvars
import threading
from unittest.mock import MagicMock

from homepages.host.hooks import HookRegistry


class TestHookRegistry:
    """Tests for HookRegistry."""

    def test_filters_chain_values(self) -> None:
        """Each filter receives the previous filter's output."""
        hooks = HookRegistry()
        hooks.add_filter("title", lambda value: value + " one")
        hooks.add_filter("title", lambda value: value + " two")

        assert hooks.apply_filters("title", "zero") == "zero one two"

    def test_filter_without_callbacks_returns_value(self) -> None:
        """Unknown hooks return the value unchanged."""
        assert HookRegistry().apply_filters("missing", 42) == 42

    def test_priority_orders_callbacks(self) -> None:
        """Lower priorities run first; equal priorities keep insertion order."""
        hooks = HookRegistry()
        calls: list[str] = []
        hooks.add_action("wp", lambda: calls.append("late"), priority=20)
        hooks.add_action("wp", lambda: calls.append("first"))
        hooks.add_action("wp", lambda: calls.append("second"))
        hooks.add_action("wp", lambda: calls.append("early"), priority=5)

        hooks.do_action("wp")

        assert calls == ["early", "first", "second", "late"]

    def test_extra_args_are_passed(self) -> None:
        """Actions and filters receive the extra arguments."""
        hooks = HookRegistry()
        callback = MagicMock(return_value="filtered")
        hooks.add_filter("the_posts", callback)

        result = hooks.apply_filters("the_posts", [], "query", "context")

        assert result == "filtered"
        callback.assert_called_once_with([], "query", "context")

    def test_remove_filter(self) -> None:
        """Removed callbacks no longer run."""
        hooks = HookRegistry()
        callback = MagicMock()
        hooks.add_action("save_post", callback)

        assert hooks.remove_action("save_post", callback) is True
        assert hooks.remove_action("save_post", callback) is False
        hooks.do_action("save_post", 1)
        callback.assert_not_called()

    def test_bound_methods_compare_equal(self) -> None:
        """A fresh bound method of the same object matches the registered one."""

        class Observer:
            def on_save(self, post_id: int) -> None:
                pass

        hooks = HookRegistry()
        observer = Observer()
        hooks.add_action("save_post", observer.on_save)

        assert hooks.has_hook("save_post", observer.on_save)
        assert not hooks.has_hook("save_post", Observer().on_save)

    def test_suspended_detaches_and_restores(self) -> None:
        """A suspended callback is skipped inside the block and restored after."""
        hooks = HookRegistry()
        hooks.add_filter("the_posts", lambda posts: posts + ["first"], priority=5)
        suspended = MagicMock(side_effect=lambda posts: posts + ["suspended"])
        hooks.add_filter("the_posts", suspended)
        hooks.add_filter("the_posts", lambda posts: posts + ["last"], priority=20)

        with hooks.suspended("the_posts", suspended):
            assert hooks.apply_filters("the_posts", []) == ["first", "last"]

        assert hooks.apply_filters("the_posts", []) == ["first", "suspended", "last"]

    def test_suspended_restores_after_exception(self) -> None:
        """The callback comes back even if the block raises."""
        hooks = HookRegistry()
        callback = MagicMock()
        hooks.add_action("wp", callback)

        try:
            with hooks.suspended("wp", callback):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert hooks.has_hook("wp", callback)

    def test_suspending_unregistered_callback_is_noop(self) -> None:
        """Suspending something never registered does not register it afterwards."""
        hooks = HookRegistry()
        callback = MagicMock()

        with hooks.suspended("wp", callback):
            pass

        assert not hooks.has_hook("wp")

    def test_suspension_is_local_to_the_current_context(self) -> None:
        """Dispatches from another thread still run a callback suspended here."""
        hooks = HookRegistry()
        callback = MagicMock(side_effect=lambda posts: posts + ["filtered"])
        hooks.add_filter("the_posts", callback)
        seen_elsewhere = []

        def other_request() -> None:
            seen_elsewhere.append(hooks.apply_filters("the_posts", []))

        with hooks.suspended("the_posts", callback):
            worker = threading.Thread(target=contextvars.Context().run, args=(other_request,))
            worker.start()
            worker.join()
            assert hooks.apply_filters("the_posts", []) == []

        assert seen_elsewhere == [["filtered"]]
        assert hooks.has_hook("the_posts", callback)
