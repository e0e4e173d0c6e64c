"""
Event bus for dialogue lifecycle notifications.

Uses Enums for event types to prevent magic strings. Hosts that prefer
plain names can look members up by value: DialogueEvent("started").

Usage:
    bus = EventBus()
    bus.subscribe(DialogueEvent.STARTED, lambda event: hud.hide())
    bus.publish(DialogueEvent.STARTED)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DialogueEvent(Enum):
    """Dialogue lifecycle events."""
    STARTED = "started"
    FINISHED = "finished"


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """
    Ordered observer lists keyed by event type.

    Handlers run synchronously in registration order. A handler that
    raises is logged and the rest still run.
    """

    def __init__(self):
        self._handlers: dict[Enum, list[EventHandler]] = {}

    def subscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of a handler (compared with ==)."""
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [h for h in self._handlers[event_type] if h != handler]

    def publish(self, event_type: Enum, **data: Any) -> None:
        """
        Publish an event.

        Args:
            event_type: The event type
            **data: Event data as keyword arguments
        """
        event = Event(type=event_type, data=data)

        # Iterate over a snapshot so handlers may unsubscribe themselves
        for handler in list(self._handlers.get(event_type, ())):
            try:
                handler(event)
            except Exception:
                # Log but don't crash the dialogue
                logger.exception(f"Error in event handler for {event.type}")
