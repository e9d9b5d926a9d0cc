"""
GUI adapter for an editing session.

Bridges the EditSession with window toolkits that deliver raw mouse, wheel
and key events and display numpy images (OpenCV HighGUI, Tkinter, ...).
"""

import logging
from gettext import gettext as _
from typing import Callable, Optional, Tuple

import numpy as np

from ..core.annotation import EditSession, RedrawScheduler, UserInputRejected
from ..core.annotation import commands as cmd
from ..core.annotation.commands import EditMode
from ..core.annotation.events import EditorEvent, EventType
from .drawing import render_view

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    "d": "draw",
    "e": "edit",
    "x": "delete",
    "t": "text",
    "c": "close",
    "z": "undo",
    "y": "redo",
    "g": "group",
    "u": "ungroup",
    "p": "duplicate",
    "s": "snap",
    "r": "grid",
    "l": "edge_labels",
    "a": "angles",
    "n": "clear",
}


class GUIAnnotationAdapter:
    """
    Adapter connecting EditSession to an image based GUI.

    Provides a thin layer that:
    - Converts device events to session commands
    - Coalesces session events into one redraw per frame
    - Renders the session view to an image
    """

    def __init__(
        self,
        session: EditSession,
        update_image_callback: Optional[Callable[[np.ndarray], None]] = None,
        canvas_size: Tuple[int, int] = (600, 800),
        request_frame: Optional[Callable] = None,
    ):
        """
        Initialize adapter.

        Args:
            session: Core editing session
            update_image_callback: Receives each rendered frame
            canvas_size: (height, width) of the rendered image
            request_frame: Frame hook for the redraw scheduler; defaults to a
                queue drained by :meth:`pump`
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.canvas_size = canvas_size
        self.image: Optional[np.ndarray] = None
        self.last_message: Optional[str] = None

        self.scheduler = RedrawScheduler(self._render, request_frame)

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        self.session.events.on_any(self._on_session_event)
        self.session.events.on(EventType.INPUT_REJECTED, self._on_input_rejected)

    def _on_session_event(self, event: EditorEvent):
        self.scheduler.request()

    def _on_input_rejected(self, event: EditorEvent):
        self.last_message = event.data.get("reason")

    def _render(self):
        self.image = self.get_visualization()
        if self.update_image_callback:
            self.update_image_callback(self.image)

    def pump(self) -> int:
        """Run pending frames; call once per UI loop iteration."""
        return self.scheduler.pump()

    # Device events

    def on_mouse_down(self, x: float, y: float, additive: bool = False):
        self.session.apply(cmd.PointerDown(x, y, additive))

    def on_mouse_move(self, x: float, y: float):
        self.session.apply(cmd.PointerMove(x, y))

    def on_mouse_up(self):
        self.session.apply(cmd.PointerUp())

    def on_wheel(self, delta_y: float):
        self.session.apply(cmd.Wheel(delta_y))

    # Discrete commands

    def set_mode(self, mode: str):
        self.session.apply(cmd.SetMode(EditMode(mode)))

    def close_polygon(self) -> bool:
        """Close the in-progress polygon; False (with a message) if refused."""
        try:
            self.session.apply(cmd.ClosePolygon())
        except UserInputRejected as e:
            logger.info(str(e))
            return False
        self.last_message = None
        return True

    def duplicate_selection(self) -> bool:
        """Duplicate every selected completed polygon and text."""
        selection = self.session.selection
        if selection.is_empty:
            self.last_message = _("Nothing selected to duplicate")
            return False
        for index in selection.completed_polygon_indices():
            self.session.apply(cmd.DuplicatePolygon(index))
        for index in sorted(selection.texts):
            self.session.apply(cmd.DuplicateText(index))
        self.last_message = None
        return True

    def toggle_view_option(self, name: str):
        if name == "snap_to_grid":
            value = self.session.viewport.snap_to_grid
        else:
            value = getattr(self.session.view_options, name)
        self.session.apply(cmd.SetViewOption(name, not value))

    def handle_key(self, key: str) -> bool:
        """
        Run the action bound to ``key``.

        Returns:
            True if the key is bound
        """
        action = KEY_BINDINGS.get(key)
        if action is None:
            return False
        if action in ("draw", "edit", "delete", "text"):
            self.set_mode(action)
        elif action == "close":
            self.close_polygon()
        elif action == "undo":
            self.session.apply(cmd.Undo())
        elif action == "redo":
            self.session.apply(cmd.Redo())
        elif action == "group":
            self.session.apply(cmd.GroupSelection())
        elif action == "ungroup":
            self.session.apply(cmd.UngroupSelection())
        elif action == "duplicate":
            self.duplicate_selection()
        elif action == "clear":
            self.session.apply(cmd.ClearAll())
        elif action == "snap":
            self.toggle_view_option("snap_to_grid")
        elif action == "grid":
            self.toggle_view_option("show_grid")
        elif action == "edge_labels":
            self.toggle_view_option("show_edge_length")
        elif action == "angles":
            self.toggle_view_option("show_angle")
        return True

    def get_visualization(self) -> np.ndarray:
        """
        Get visualization for display.

        Returns:
            BGR image of the current session view
        """
        cfg = self.session.cfg
        return render_view(
            self.session.view(),
            self.session.hit_tester,
            self.canvas_size,
            grid_size=cfg.grid_size,
            samples=cfg.bezier_samples,
        )

    def status_line(self) -> str:
        session = self.session
        parts = [
            _("mode: {mode}").format(mode=session.mode.value),
            _("zoom: {zoom:.2f}").format(zoom=session.viewport.zoom),
        ]
        if self.last_message:
            parts.append(self.last_message)
        return " | ".join(parts)
