# rotate_towards/core/event_bus.py
"""
Event bus used to report rotation changes and per-tick errors to the host.
"""

import logging
from collections import deque

logger = logging.getLogger(__name__)

WILDCARD = "*"


class EventBus:
    """
    Simple event bus for loose coupling between systems and the host.

    Subscribing to ``"*"`` receives every event. With ``history > 0`` the
    most recent events are kept for inspection.
    """

    def __init__(self, history=0):
        self.subscribers = {}
        self.debug_mode = False
        self.history = deque(maxlen=history) if history > 0 else None

    def subscribe(self, event_type, callback):
        """Subscribe a callback to an event type (or ``"*"`` for all)."""
        self.subscribers.setdefault(event_type, []).append(callback)
        return callback

    def unsubscribe(self, event_type, callback):
        if callback in self.subscribers.get(event_type, []):
            self.subscribers[event_type].remove(callback)
            return True
        return False

    def publish(self, event_type, data=None, source=None):
        """Publish an event to all subscribers.

        Callbacks receive one dict: ``{"type", "data", "source"}``. A callback
        that raises is logged and does not stop delivery to the others.

        Returns:
            int: Number of subscribers that handled the event.
        """
        event_data = {"type": event_type, "data": data, "source": source}

        if self.debug_mode:
            logger.debug(f"Event published: {event_type} from {source or 'unknown'}: {data}")
        if self.history is not None:
            self.history.append(event_data)

        callbacks = self.subscribers.get(event_type, []) + self.subscribers.get(WILDCARD, [])
        count = 0
        for callback in callbacks:
            try:
                callback(event_data)
                count += 1
            except Exception as e:
                logger.error(f"Error in event handler for {event_type}: {e}")
        return count

    def recent(self, event_type=None):
        """Events kept in history, optionally filtered by type (oldest first)."""
        if self.history is None:
            return []
        return [e for e in self.history if event_type is None or e["type"] == event_type]

    def enable_debug(self, enabled=True):
        self.debug_mode = enabled
