"""Explicit event subscription for wiring the resolver into a host."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

from .resolver import ImageResolver

logger = logging.getLogger("fwp_featured")

POST_SYNDICATED_ITEM = "post_syndicated_item"

Handler = Callable[..., Any]


class EventHub:
    """Named events with handlers called synchronously in subscription order."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: Handler) -> None:
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: Handler) -> bool:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def handlers(self, event_name: str) -> List[Handler]:
        return list(self._handlers.get(event_name, []))

    def dispatch(self, event_name: str, *args: Any) -> int:
        """Call every handler of ``event_name``; returns how many ran."""
        handlers = self.handlers(event_name)
        for handler in handlers:
            handler(*args)
        logger.debug("Dispatched %s to %d handler(s)", event_name, len(handlers))
        return len(handlers)


def connect(hub: EventHub, resolver: ImageResolver) -> Handler:
    """Run ``resolver.resolve`` whenever a post is syndicated."""
    handler = resolver.resolve
    hub.subscribe(POST_SYNDICATED_ITEM, handler)
    return handler
