"""
Device to model coordinate mapping and display toggles.
"""

from dataclasses import dataclass

from .state import Point
from .utils import clamp, snap_to_grid


@dataclass
class Viewport:
    zoom: float = 1.0
    origin_x: float = 0.0
    origin_y: float = 0.0
    snap_to_grid: bool = False
    grid_size: float = 20
    min_zoom: float = 0.5
    max_zoom: float = 3.0
    zoom_step: float = 1.1

    def to_model(self, x: float, y: float) -> Point:
        """Map a device position to model space, snapping if enabled."""
        mx = (x - self.origin_x) / self.zoom
        my = (y - self.origin_y) / self.zoom
        if self.snap_to_grid:
            mx, my = snap_to_grid(mx, my, self.grid_size)
        return Point(mx, my)

    def wheel(self, delta_y: float) -> bool:
        """
        Zoom one step in (negative delta) or out.

        Returns:
            True if the zoom level changed
        """
        before = self.zoom
        if delta_y < 0:
            zoom = self.zoom * self.zoom_step
        else:
            zoom = self.zoom / self.zoom_step
        self.zoom = clamp(zoom, self.min_zoom, self.max_zoom)
        return self.zoom != before


@dataclass
class ViewOptions:
    show_grid: bool = False
    show_edge_length: bool = True
    show_angle: bool = True
