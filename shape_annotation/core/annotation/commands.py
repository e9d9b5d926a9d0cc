"""
Command values accepted by ``EditSession.apply``.

UI layers translate widgets and input devices into these values; the
session is the only place where they turn into document mutations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .state import PolygonRef


class EditMode(Enum):
    DRAW = "draw"
    EDIT = "edit"
    DELETE = "delete"
    TEXT = "text"


@dataclass(frozen=True)
class SetMode:
    mode: EditMode


@dataclass(frozen=True)
class PointerDown:
    """Pointer pressed at device coordinates."""

    x: float
    y: float
    additive: bool = False


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class Wheel:
    delta_y: float


@dataclass(frozen=True)
class ClosePolygon:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class GroupSelection:
    pass


@dataclass(frozen=True)
class UngroupSelection:
    pass


@dataclass(frozen=True)
class DuplicatePolygon:
    index: int


@dataclass(frozen=True)
class DuplicateText:
    index: int


@dataclass(frozen=True)
class EditEdgeProperty:
    """Set one field of the edge starting at ``vertex_index``."""

    ref: PolygonRef
    vertex_index: int
    field: str
    value: Any


@dataclass(frozen=True)
class EditAngleProperty:
    ref: PolygonRef
    vertex_index: int
    field: str
    value: Any


@dataclass(frozen=True)
class EditText:
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class SetViewOption:
    """Toggle snap_to_grid, show_grid, show_edge_length or show_angle."""

    name: str
    value: bool
