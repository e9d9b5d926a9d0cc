"""
Event system for the editing workflow.

Provides a decoupled way for the editing core to notify UI components
about state changes without depending on specific UI frameworks.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur while editing."""

    # Document events
    DOCUMENT_CHANGED = "document_changed"
    POLYGON_CLOSED = "polygon_closed"
    DOCUMENT_CLEARED = "document_cleared"

    # Gesture events
    DRAG_STARTED = "drag_started"
    DRAG_FINISHED = "drag_finished"
    POINTER_MOVED = "pointer_moved"

    # Session events
    MODE_CHANGED = "mode_changed"
    SELECTION_CHANGED = "selection_changed"
    VIEW_CHANGED = "view_changed"
    INPUT_REJECTED = "input_rejected"

    # History events
    HISTORY_COMMITTED = "history_committed"
    UNDONE = "undone"
    REDONE = "redone"


@dataclass
class EditorEvent:
    """Event that occurs while editing."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[EditorEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def on_any(self, callback: Callable[[EditorEvent], None]):
        """Subscribe to every event type."""
        for event_type in EventType:
            self.on(event_type, callback)

    def off(self, event_type: EventType, callback: Callable[[EditorEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: EditorEvent):
        """Emit an event to all subscribers."""
        if event.event_type in self._listeners:
            for callback in self._listeners[event.event_type]:
                try:
                    callback(event)
                except Exception:
                    # Log but don't crash on listener errors
                    logger.exception(f"Error in listener for {event.event_type.value}")

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
