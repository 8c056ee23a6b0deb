"""Hook registration and synchronous dispatch for resource lifecycle events"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Iterable


logger = logging.getLogger(__name__)


class HookEvent(str, Enum):
    post_init = "post_init"
    pre_read = "pre_read"
    post_read = "post_read"
    pre_transform = "pre_transform"
    post_transform = "post_transform"
    pre_write = "pre_write"
    post_write = "post_write"


# (phase, event) pairs a dispatcher can subscribe to, in lifecycle order
LIFECYCLE_EVENTS: tuple[tuple[str, HookEvent], ...] = (
    ("init", HookEvent.post_init),
    ("read", HookEvent.pre_read),
    ("read", HookEvent.post_read),
    ("transform", HookEvent.pre_transform),
    ("transform", HookEvent.post_transform),
    ("write", HookEvent.pre_write),
    ("write", HookEvent.post_write),
)

PRIORITIES = {"high": 0, "normal": 1, "low": 2}

Handler = Callable[..., Any]


class HookRegistry:
    """Handlers keyed by (owner, event); owners are collection labels or 'resources'."""

    def __init__(self):
        self._handlers: dict[tuple[str, str], list[tuple[int, int, Handler]]] = defaultdict(list)
        self._count = 0

    def register(
        self,
        owners: str | Iterable[str],
        event: str,
        handler: Handler,
        priority: str = "normal",
        ) -> Handler:
        """Register handler for event on one or more owners. Returns the handler."""
        if priority not in PRIORITIES:
            raise ValueError(f"Unknown hook priority '{priority}'")
        event = HookEvent(event).value
        if isinstance(owners, str):
            owners = [owners]
        for owner in owners:
            self._count += 1
            self._handlers[(owner, event)].append((PRIORITIES[priority], self._count, handler))
        return handler

    def handlers(self, owner: str, event: str) -> list[Handler]:
        """Handlers for (owner, event) in priority, then registration, order."""
        entries = self._handlers.get((owner, HookEvent(event).value), [])
        return [h for _, _, h in sorted(entries, key=lambda e: (e[0], e[1]))]

    def trigger(self, owner: str, event: str, obj: Any, *args) -> None:
        """Run every handler for (owner, event) with obj and args; blocks until all return."""
        for handler in self.handlers(owner, event):
            logger.debug("hook %s:%s -> %r", owner, event, handler)
            handler(obj, *args)

    def clear(self) -> None:
        self._handlers.clear()
