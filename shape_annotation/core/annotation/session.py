"""
Editing session management.

Core logic for an interactive shape-annotation session.
UI-agnostic - can be used with any interface (GUI, Web, CLI).
"""

import logging
from dataclasses import fields, replace
from gettext import gettext as _
from typing import Any, Dict, Optional

from easydict import EasyDict as edict

from ...config import default_config
from . import commands as cmd
from .commands import EditMode
from .drag import (
    DraggingEdgeControl,
    DraggingGroup,
    DraggingPolygon,
    DraggingScale,
    DraggingText,
    DraggingVertex,
)
from .errors import UserInputRejected
from .events import EditorEvent, EventEmitter, EventType
from .hit_test import (
    EdgeControlHit,
    GroupHit,
    HitTester,
    PolygonHit,
    ScaleHandleHit,
    TextHit,
    VertexHit,
)
from .history import HistoryManager
from .selection import SelectionModel
from .state import (
    UNIT_INTERVAL_FIELDS,
    AngleProperty,
    Completed,
    Document,
    EdgeProperty,
    Point,
    Polygon,
    TextObject,
    Vertex,
)
from .utils import clamp, measure_text_width
from .viewport import Viewport, ViewOptions

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("content", "x", "y", "font_size", "color")

MIN_CLOSED_VERTICES = 3


class EditSession:
    """
    Owns the document and turns commands into mutations.

    This class handles:
    - Mode switching (draw, edit, delete, text)
    - Pointer gestures and the drag sub-state of edit mode
    - Grouping, duplication and property edits
    - Undo/redo checkpoints
    - Event emission for UI updates

    All mutation goes through :meth:`apply`; the document, selection and
    viewport attributes are meant to be read, not written, from outside.
    """

    def __init__(self, cfg: Optional[edict] = None, measure_text=measure_text_width):
        """
        Initialize an editing session.

        Args:
            cfg: Configuration, see :func:`shape_annotation.config.default_config`
            measure_text: Callable returning the rendered width of a string at
                a font size, used for text hit boxes
        """
        self.cfg = cfg if cfg is not None else default_config()

        self.document = Document()
        self.selection = SelectionModel()
        self.history = HistoryManager(max_history=self.cfg.history_limit)
        self.hit_tester = HitTester(
            hit_radius=self.cfg.hit_radius,
            handle_size=self.cfg.handle_size,
            measure_text=measure_text,
        )
        self.viewport = Viewport(
            grid_size=self.cfg.grid_size,
            min_zoom=self.cfg.zoom.min,
            max_zoom=self.cfg.zoom.max,
            zoom_step=self.cfg.zoom.step,
        )
        self.view_options = ViewOptions()
        self.mode = EditMode.DRAW

        # Event emitter for UI notifications
        self.events = EventEmitter()

        # Active drag sub-state and the document as it was when it started
        self.drag = None
        self._drag_baseline: Optional[Document] = None
        self._drag_dirty = False

        # Last pointer position in draw/text mode, for the rubber band
        self.pointer: Optional[Point] = None

        self._handlers = {
            cmd.SetMode: self._set_mode,
            cmd.PointerDown: self._pointer_down,
            cmd.PointerMove: self._pointer_move,
            cmd.PointerUp: self._pointer_up,
            cmd.Wheel: self._wheel,
            cmd.ClosePolygon: self._close_polygon,
            cmd.ClearAll: self._clear_all,
            cmd.Undo: self._undo,
            cmd.Redo: self._redo,
            cmd.GroupSelection: self._group_selection,
            cmd.UngroupSelection: self._ungroup_selection,
            cmd.DuplicatePolygon: self._duplicate_polygon,
            cmd.DuplicateText: self._duplicate_text,
            cmd.EditEdgeProperty: self._edit_edge_property,
            cmd.EditAngleProperty: self._edit_angle_property,
            cmd.EditText: self._edit_text,
            cmd.SetViewOption: self._set_view_option,
        }

    def apply(self, command) -> Any:
        """
        Execute a command.

        Args:
            command: One of the values in :mod:`.commands`

        Returns:
            Command specific result (new index, success flag) or None

        Raises:
            UserInputRejected: If the request is refused (e.g. closing a
                polygon with fewer than three vertices)
            TypeError: If ``command`` is not a known command
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")

        # Anything but a move ends a drag the UI forgot to release
        if self.drag is not None and not isinstance(
            command, (cmd.PointerMove, cmd.Wheel, cmd.SetViewOption)
        ):
            self._finish_drag()

        return handler(command)

    def view(self) -> Dict[str, Any]:
        """
        Snapshot of the session for rendering and property panels.

        Collections come back as tuples and the selection and view options
        as copies, so editing the result never changes the session. The
        polygons and texts inside are the live objects and must be treated
        as read-only; change them through ``apply()``.

        Returns:
            Dictionary with the document collections and editor state
        """
        return {
            "polygons": tuple(self.document.polygons),
            "current_polygon": self.document.current_polygon,
            "texts": tuple(self.document.texts),
            "groups": tuple(self.document.groups),
            "selection": self.selection.copy(),
            "pointer": self.pointer,
            "mode": self.mode,
            "zoom": self.viewport.zoom,
            "view_options": replace(self.view_options),
            "dragging": self.drag is not None,
        }

    # Notifications

    def _emit(self, event_type: EventType, **data):
        self.events.emit(EditorEvent(event_type, data))

    def _document_changed(self, **data):
        self._emit(EventType.DOCUMENT_CHANGED, **data, **self.document.to_dict())

    def _selection_changed(self):
        self._emit(EventType.SELECTION_CHANGED, **self.selection.to_dict())

    def _checkpoint(self):
        """Store the pre-action document so the action can be undone."""
        self.history.commit(self.document)
        self._emit(EventType.HISTORY_COMMITTED, undo_depth=self.history.undo_depth)

    # Modes and pointer gestures

    def _set_mode(self, command: cmd.SetMode):
        self.mode = command.mode
        self.pointer = None
        if command.mode in (EditMode.DRAW, EditMode.TEXT):
            self.selection.clear()
            self._selection_changed()
        logger.debug(f"Mode changed to {command.mode.value}")
        self._emit(EventType.MODE_CHANGED, mode=command.mode.value)

    def _pointer_down(self, command: cmd.PointerDown):
        pos = self.viewport.to_model(command.x, command.y)

        if self.mode == EditMode.TEXT:
            self._add_text(pos)
        elif self.mode == EditMode.DELETE:
            self._delete_at(pos)
        elif self.mode == EditMode.DRAW:
            self._add_vertex(pos)
        else:
            self._begin_edit_gesture(pos, command.additive)

    def _add_text(self, pos: Point):
        self._checkpoint()
        defaults = self.cfg.text
        self.document.texts.append(
            TextObject(
                x=pos.x,
                y=pos.y,
                content=defaults.content,
                font_size=defaults.font_size,
                color=defaults.color,
            )
        )
        self._document_changed(action="text_added")

    def _add_vertex(self, pos: Point):
        self._checkpoint()
        self.pointer = None
        self.document.current_polygon.vertices.append(
            Vertex(
                pos.x,
                pos.y,
                edge_property=EdgeProperty(**self.cfg.edge),
                angle_property=AngleProperty(**self.cfg.angle),
            )
        )
        self._document_changed(action="vertex_added")

    def _delete_at(self, pos: Point):
        hit = self.hit_tester.find_polygon(self.document, pos, include_grouped=True)
        if hit is not None:
            self._checkpoint()
            self.document.remove_polygon(hit.polygon_index)
            action = "polygon_deleted"
        else:
            hit = self.hit_tester.find_text(self.document, pos, include_grouped=True)
            if hit is None:
                return
            self._checkpoint()
            self.document.remove_text(hit.text_index)
            action = "text_deleted"

        # Indices after the removed object shifted
        self.selection.clear()
        self._selection_changed()
        self._document_changed(action=action)

    def _begin_edit_gesture(self, pos: Point, additive: bool):
        doc = self.document
        hit = self.hit_tester.hit_test(doc, pos, self.selection)
        if hit is None:
            if not additive and not self.selection.is_empty:
                self.selection.clear()
                self._selection_changed()
            return

        baseline = doc.clone()
        if isinstance(hit, EdgeControlHit):
            self.drag = DraggingEdgeControl(hit.ref, hit.edge_index)
            self.selection.select_polygon(hit.ref, additive)
        elif isinstance(hit, VertexHit):
            self.drag = DraggingVertex(hit.ref, hit.vertex_index)
            self.selection.select_polygon(hit.ref, additive)
        elif isinstance(hit, GroupHit):
            self.drag = DraggingGroup.begin(doc, hit.group_id, pos)
            self.selection.select_group(doc.groups[hit.group_id], additive)
        elif isinstance(hit, ScaleHandleHit):
            ref = Completed(hit.polygon_index)
            self.drag = DraggingScale.begin(doc, ref, self.hit_tester.handle_size)
            self.selection.select_polygon(ref, additive)
        elif isinstance(hit, PolygonHit):
            ref = Completed(hit.polygon_index)
            self.drag = DraggingPolygon.begin(doc, ref, pos)
            self.selection.select_polygon(ref, additive)
        elif isinstance(hit, TextHit):
            self.drag = DraggingText.begin(doc, hit.text_index, pos)
            self.selection.select_text(hit.text_index, additive)

        self._drag_baseline = baseline
        self._drag_dirty = False
        self._emit(EventType.DRAG_STARTED, kind=type(self.drag).__name__)
        self._selection_changed()

    def _pointer_move(self, command: cmd.PointerMove):
        pos = self.viewport.to_model(command.x, command.y)
        if self.drag is not None:
            self.drag.apply(self.document, pos)
            self._drag_dirty = True
            self._document_changed(action="dragged")
        elif self.mode in (EditMode.DRAW, EditMode.TEXT):
            self.pointer = pos
            self._emit(EventType.POINTER_MOVED, x=pos.x, y=pos.y)

    def _pointer_up(self, command: cmd.PointerUp):
        # apply() already finished any active drag
        return None

    def _finish_drag(self):
        if self._drag_dirty:
            self.history.commit(self._drag_baseline)
            self._emit(
                EventType.HISTORY_COMMITTED, undo_depth=self.history.undo_depth
            )
        kind = type(self.drag).__name__
        self.drag = None
        self._drag_baseline = None
        self._drag_dirty = False
        self._emit(EventType.DRAG_FINISHED, kind=kind)

    def _wheel(self, command: cmd.Wheel):
        if self.viewport.wheel(command.delta_y):
            self._emit(EventType.VIEW_CHANGED, zoom=self.viewport.zoom)

    def _set_view_option(self, command: cmd.SetViewOption):
        if command.name == "snap_to_grid":
            self.viewport.snap_to_grid = bool(command.value)
        elif command.name in {f.name for f in fields(ViewOptions)}:
            setattr(self.view_options, command.name, bool(command.value))
        else:
            raise ValueError(f"Unknown view option: {command.name}")
        self._emit(EventType.VIEW_CHANGED, **{command.name: bool(command.value)})

    # Structural commands

    def _close_polygon(self, command: cmd.ClosePolygon) -> int:
        current = self.document.current_polygon
        if len(current.vertices) < MIN_CLOSED_VERTICES:
            message = _(
                "Closing a polygon needs at least {count} vertices"
            ).format(count=MIN_CLOSED_VERTICES)
            self._emit(EventType.INPUT_REJECTED, reason=message)
            raise UserInputRejected(message)

        self._checkpoint()
        current.is_closed = True
        self.document.polygons.append(current)
        self.document.current_polygon = Polygon()
        self.pointer = None
        self.selection.prune(self.document)

        index = len(self.document.polygons) - 1
        self._emit(EventType.POLYGON_CLOSED, index=index)
        self._document_changed(action="polygon_closed")
        return index

    def _clear_all(self, command: cmd.ClearAll):
        self._checkpoint()
        self.document = Document()
        self.selection.clear()
        self.pointer = None
        self._emit(EventType.DOCUMENT_CLEARED)
        self._selection_changed()
        self._document_changed(action="cleared")

    def _undo(self, command: cmd.Undo) -> bool:
        restored = self.history.undo(self.document)
        if restored is None:
            return False
        self._install(restored)
        self._emit(EventType.UNDONE, undo_depth=self.history.undo_depth)
        return True

    def _redo(self, command: cmd.Redo) -> bool:
        restored = self.history.redo(self.document)
        if restored is None:
            return False
        self._install(restored)
        self._emit(EventType.REDONE, redo_depth=self.history.redo_depth)
        return True

    def _install(self, document: Document):
        self.document = document
        self.selection.prune(document)
        self._selection_changed()
        self._document_changed(action="restored")

    def _group_selection(self, command: cmd.GroupSelection) -> Optional[int]:
        doc = self.document
        polygon_indices = self.selection.completed_polygon_indices()
        text_indices = sorted(self.selection.texts)
        members = [doc.polygons[i] for i in polygon_indices]
        members += [doc.texts[i] for i in text_indices]

        if len(members) < 2:
            logger.debug("Grouping needs at least two selected members")
            return None
        if any(member.group_id is not None for member in members):
            logger.debug("Grouping refused, a member already belongs to a group")
            return None

        self._checkpoint()
        group = doc.create_group(polygon_indices, text_indices)
        self.selection.select_group(group)
        self._selection_changed()
        self._document_changed(action="grouped", group_id=group.group_id)
        return group.group_id

    def _ungroup_selection(self, command: cmd.UngroupSelection) -> bool:
        doc = self.document
        group_ids = set()
        if self.selection.group_id is not None:
            group_ids.add(self.selection.group_id)
        for index in self.selection.completed_polygon_indices():
            group_ids.add(doc.polygons[index].group_id)
        for index in self.selection.texts:
            group_ids.add(doc.texts[index].group_id)
        group_ids = sorted(g for g in group_ids if doc.group(g) is not None)

        if not group_ids:
            logger.debug("Nothing to ungroup")
            return False

        self._checkpoint()
        for group_id in group_ids:
            doc.dissolve_group(group_id)
        self.selection.group_id = None
        self._selection_changed()
        self._document_changed(action="ungrouped", group_ids=group_ids)
        return True

    def _duplicate_polygon(self, command: cmd.DuplicatePolygon) -> Optional[int]:
        if not 0 <= command.index < len(self.document.polygons):
            logger.debug(f"No polygon {command.index} to duplicate")
            return None
        self._checkpoint()
        copy = self.document.polygons[command.index].clone()
        copy.group_id = None
        self.document.polygons.append(copy)
        self._document_changed(action="polygon_duplicated")
        return len(self.document.polygons) - 1

    def _duplicate_text(self, command: cmd.DuplicateText) -> Optional[int]:
        if not 0 <= command.index < len(self.document.texts):
            logger.debug(f"No text {command.index} to duplicate")
            return None
        self._checkpoint()
        copy = self.document.texts[command.index].clone()
        copy.group_id = None
        self.document.texts.append(copy)
        self._document_changed(action="text_duplicated")
        return len(self.document.texts) - 1

    # Property edits

    def _edit_edge_property(self, command: cmd.EditEdgeProperty) -> bool:
        vertex = self._vertex(command.ref, command.vertex_index)
        if vertex is None:
            return False
        return self._set_field(vertex.edge_property, command.field, command.value)

    def _edit_angle_property(self, command: cmd.EditAngleProperty) -> bool:
        vertex = self._vertex(command.ref, command.vertex_index)
        if vertex is None:
            return False
        return self._set_field(vertex.angle_property, command.field, command.value)

    def _edit_text(self, command: cmd.EditText) -> bool:
        if command.field not in TEXT_FIELDS:
            raise ValueError(f"Unknown text field: {command.field}")
        if not 0 <= command.index < len(self.document.texts):
            logger.debug(f"No text {command.index} to edit")
            return False
        return self._set_field(
            self.document.texts[command.index], command.field, command.value
        )

    def _vertex(self, ref, index) -> Optional[Vertex]:
        polygon = self.document.resolve(ref)
        if polygon is None or not 0 <= index < len(polygon.vertices):
            logger.debug(f"No vertex {index} on {ref}")
            return None
        return polygon.vertices[index]

    def _set_field(self, target, name: str, value) -> bool:
        if name not in {f.name for f in fields(target)} or name == "group_id":
            raise ValueError(f"Unknown field for {type(target).__name__}: {name}")
        if name in UNIT_INTERVAL_FIELDS:
            value = clamp(float(value), 0.0, 1.0)
        if getattr(target, name) == value:
            return False
        self._checkpoint()
        setattr(target, name, value)
        self._document_changed(action="property_edited", field=name)
        return True
