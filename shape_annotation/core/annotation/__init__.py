"""
Core editing module - UI-agnostic shape annotation logic.

This module provides the document model, hit-testing, the editing state
machine and undo history, usable with any UI framework (OpenCV, Qt, Web).
"""

from .session import EditSession
from .commands import EditMode
from .errors import UserInputRejected
from .events import EditorEvent, EventType, EventEmitter
from .history import HistoryManager
from .hit_test import HitTester
from .redraw import RedrawScheduler
from .selection import SelectionModel
from .state import (
    AngleProperty,
    Completed,
    Document,
    EdgeProperty,
    Group,
    IN_PROGRESS,
    InProgress,
    Point,
    Polygon,
    TextObject,
    Vertex,
)

__all__ = [
    "EditSession",
    "EditMode",
    "UserInputRejected",
    "EditorEvent",
    "EventType",
    "EventEmitter",
    "HistoryManager",
    "HitTester",
    "RedrawScheduler",
    "SelectionModel",
    "AngleProperty",
    "Completed",
    "Document",
    "EdgeProperty",
    "Group",
    "IN_PROGRESS",
    "InProgress",
    "Point",
    "Polygon",
    "TextObject",
    "Vertex",
]
