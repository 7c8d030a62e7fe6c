# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-process event bus used for change notifications."""

from school_portal.infrastructure.events.bus import (
    EventBus,
    EventData,
    EventHandler,
    get_event_bus,
    reset_event_bus,
)
from school_portal.infrastructure.events.stream import EventSubscription, subscribe_stream
from school_portal.infrastructure.events.types import EventPatterns, EventTypes

__all__ = [
    "EventBus",
    "EventData",
    "EventHandler",
    "get_event_bus",
    "reset_event_bus",
    "EventSubscription",
    "subscribe_stream",
    "EventTypes",
    "EventPatterns",
]
