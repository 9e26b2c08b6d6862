# ABOUTME: Action and filter registry used as the host's composition mechanism.
# ABOUTME: Callbacks run in priority order, then insertion order, and can be suspended per request.

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

log = structlog.get_logger()

DEFAULT_PRIORITY = 10


@dataclass(order=True)
class _Hook:
    priority: int
    sequence: int
    callback: Callable[..., Any] = field(compare=False)


class HookRegistry:
    """Ordered observer registry for actions and filters.

    Actions are notified for their side effects; filters pass a value through
    every callback and return the final value. Both share one table, so a
    name can only be used consistently as one or the other by convention.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[_Hook]] = {}
        self._sequence = 0
        # (hook name, callback) pairs skipped in the current context only
        self._suspended: ContextVar[frozenset[tuple[str, Callable[..., Any]]]] = ContextVar(
            f"suspended_hooks_{id(self)}", default=frozenset()
        )

    def _active(self, name: str) -> list[_Hook]:
        suspended = self._suspended.get()
        hooks = list(self._hooks.get(name, []))
        if not suspended:
            return hooks
        return [hook for hook in hooks if (name, hook.callback) not in suspended]

    def add_filter(
        self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        """Register a filter callback."""
        self._sequence += 1
        hooks = self._hooks.setdefault(name, [])
        hooks.append(_Hook(priority, self._sequence, callback))
        hooks.sort()

    def add_action(
        self, name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        """Register an action callback."""
        self.add_filter(name, callback, priority)

    def remove_filter(self, name: str, callback: Callable[..., Any]) -> bool:
        """Unregister a callback. Returns True if it was registered."""
        hooks = self._hooks.get(name, [])
        for hook in hooks:
            if hook.callback == callback:
                hooks.remove(hook)
                return True
        return False

    def remove_action(self, name: str, callback: Callable[..., Any]) -> bool:
        """Unregister an action callback. Returns True if it was registered."""
        return self.remove_filter(name, callback)

    def has_hook(self, name: str, callback: Callable[..., Any] | None = None) -> bool:
        """Check whether anything (or a given callback) is attached to a hook.

        Callbacks suspended in the current context count as detached.
        """
        hooks = self._active(name)
        if callback is None:
            return bool(hooks)
        return any(hook.callback == callback for hook in hooks)

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Pass a value through every filter registered on ``name``."""
        for hook in self._active(name):
            value = hook.callback(value, *args)
        return value

    def do_action(self, name: str, *args: Any) -> None:
        """Notify every action callback registered on ``name``."""
        for hook in self._active(name):
            hook.callback(*args)

    @contextmanager
    def suspended(self, name: str, callback: Callable[..., Any]) -> Iterator[None]:
        """Skip a callback for the duration of the block.

        Only dispatches made from the current context (thread or task) skip
        it; concurrent requests sharing this registry still run it. The
        registration itself is never touched.
        """
        token = self._suspended.set(self._suspended.get() | {(name, callback)})
        log.debug("hook_suspended", hook=name)
        try:
            yield
        finally:
            self._suspended.reset(token)
