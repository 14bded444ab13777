"""Typed, synchronous message channel.

Connects a publisher (e.g. the map-based coordinate picker) to its
subscribers (the BBox validator).  Delivery is synchronous and in
subscription order; nothing is queued, so the last message published is
the one that wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("worldgen_control.events.channel")

T = TypeVar("T")


class Channel(Generic[T]):
    """A named observer channel carrying messages of type ``T``.

    Example::

        channel: Channel[BBoxMessage] = Channel("bbox")
        channel.subscribe(validator.handle_message)
        channel.publish({"bboxText": "13.38 52.51 13.40 52.52"})
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._latest: T | None = None

    @property
    def latest(self) -> T | None:
        """The most recently published message, if any."""
        return self._latest

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def publish(self, message: T) -> None:
        """Deliver *message* to every subscriber before returning."""
        self._latest = message
        logger.debug("Publish | channel=%s | subscribers=%d", self.name, len(self._subscribers))
        for callback in list(self._subscribers):
            callback(message)
