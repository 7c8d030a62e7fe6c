# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fan-out of bus events to long-lived client connections.

Each connected client gets a bounded queue subscribed to a set of patterns.
When a slow client's queue is full the oldest event is dropped, so one
stalled browser never blocks publishers.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from school_portal.infrastructure.events.bus import EventBus, EventData

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class EventSubscription:
    """Queue of events delivered to one client."""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[EventData] = asyncio.Queue(maxsize=maxsize)

    async def handle(self, event: EventData) -> None:
        """Bus handler: enqueue the event, evicting the oldest when full."""
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(event)

    async def next_event(self, timeout: float) -> EventData | None:
        """Wait for the next event, or return None after ``timeout`` seconds."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None


@asynccontextmanager
async def subscribe_stream(
    bus: EventBus,
    patterns: Iterable[str],
    maxsize: int = DEFAULT_QUEUE_SIZE,
) -> AsyncIterator[EventSubscription]:
    """Subscribe a fresh queue to ``patterns`` for the duration of the block.

    Args:
        bus: Event bus to listen on.
        patterns: Event types or wildcard patterns.
        maxsize: Queue capacity.

    Yields:
        The subscription to read events from.
    """
    subscription = EventSubscription(maxsize=maxsize)
    patterns = list(patterns)
    for pattern in patterns:
        bus.subscribe(pattern, subscription.handle)
    logger.debug("Stream subscribed to %s", patterns)
    try:
        yield subscription
    finally:
        for pattern in patterns:
            bus.unsubscribe(pattern, subscription.handle)
        logger.debug("Stream unsubscribed from %s", patterns)
