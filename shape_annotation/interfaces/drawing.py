"""
OpenCV rendering of a session view.

Draws into a BGR numpy image, scaling model coordinates by the zoom level.
"""

import math
from typing import Tuple

import cv2
import numpy as np

from ..core.annotation import geometry
from ..core.annotation.commands import EditMode
from ..core.annotation.curves import (
    angle_fan,
    edge_label,
    gap_intervals,
    sample_quadratic_bezier,
)
from ..core.annotation.state import Completed
from ..core.annotation.utils import TEXT_FONT, color_to_bgr, font_scale

BACKGROUND = (255, 255, 255)
GRID_COLOR = (224, 224, 224)
VERTEX_COLOR = (0, 255, 255)
CONTROL_COLOR = (255, 0, 0)
SELECTION_COLOR = (255, 0, 0)
FAN_COLOR = (0, 0, 255)
OUTLINE = (0, 0, 0)

VERTEX_RADIUS = 6
CONTROL_RADIUS = 5


def to_px(x: float, y: float, zoom: float) -> Tuple[int, int]:
    return (int(round(x * zoom)), int(round(y * zoom)))


def draw_grid(image: np.ndarray, zoom: float, grid_size: float):
    height, width = image.shape[:2]
    step = grid_size * zoom
    x = 0.0
    while x < width:
        cv2.line(image, (int(x), 0), (int(x), height), GRID_COLOR, 1)
        x += step
    y = 0.0
    while y < height:
        cv2.line(image, (0, int(y)), (width, int(y)), GRID_COLOR, 1)
        y += step


def draw_dashed_line(image, start, end, color, zoom: float, dash: float = 5.0):
    x0, y0 = start
    x1, y1 = end
    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0:
        return
    count = int(length // dash)
    for k in range(0, count + 1, 2):
        t0 = k * dash / length
        t1 = min((k + 1) * dash / length, 1.0)
        a = to_px(x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0, zoom)
        b = to_px(x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1, zoom)
        cv2.line(image, a, b, color, 1, cv2.LINE_AA)


def draw_text(image, content: str, x: float, y: float, font_size, color, zoom: float):
    """Draw ``content`` centered on (x, y)."""
    if not content:
        return
    scale = font_scale(font_size * zoom)
    (width, height), _baseline = cv2.getTextSize(content, TEXT_FONT, scale, 1)
    cx, cy = to_px(x, y, zoom)
    origin = (cx - width // 2, cy + height // 2)
    cv2.putText(image, content, origin, TEXT_FONT, scale, color, 1, cv2.LINE_AA)


def draw_edge(image, edge, show_label: bool, zoom: float, samples: int):
    prop = edge.start.edge_property
    cv2.line(
        image,
        to_px(edge.start.x, edge.start.y, zoom),
        to_px(edge.end.x, edge.end.y, zoom),
        color_to_bgr(prop.segment_color),
        2,
        cv2.LINE_AA,
    )
    if not (show_label and prop.show_edge_length):
        return

    curve_color = color_to_bgr(prop.bezier_color)
    for t0, t1 in gap_intervals(prop.bezier_gap):
        points = sample_quadratic_bezier(
            edge.start, edge.control, edge.end, t0, t1, samples
        )
        pts = np.round(points * zoom).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(image, [pts], False, curve_color, 2, cv2.LINE_AA)

    label = edge_label(edge.start, edge.control, edge.end, prop, samples)
    draw_text(
        image,
        label.text,
        label.anchor.x,
        label.anchor.y,
        prop.label_font_size,
        color_to_bgr(prop.label_color),
        zoom,
    )


def draw_angle(image, prev, vertex, nxt, zoom: float):
    prop = vertex.angle_property
    fan = angle_fan(prev, vertex, nxt, prop)
    center = to_px(vertex.x, vertex.y, zoom)
    radius = max(int(round(prop.radius * zoom)), 1)
    start, end = math.degrees(fan.start), math.degrees(fan.end)

    overlay = image.copy()
    cv2.ellipse(overlay, center, (radius, radius), 0, start, end, FAN_COLOR, -1)
    cv2.addWeighted(overlay, 0.3, image, 0.7, 0, dst=image)
    cv2.ellipse(image, center, (radius, radius), 0, start, end, FAN_COLOR, 1)
    draw_text(
        image,
        fan.label,
        fan.label_anchor.x,
        fan.label_anchor.y,
        prop.label_font_size,
        FAN_COLOR,
        zoom,
    )


def draw_polygon(image, polygon, view, zoom: float, samples: int):
    options = view["view_options"]
    for edge in geometry.edges(polygon):
        draw_edge(image, edge, options.show_edge_length, zoom, samples)

    if options.show_angle:
        for i in geometry.angle_indices(polygon):
            prev, vertex, nxt = geometry.angle_neighbors(polygon, i)
            if vertex.angle_property.show_angle:
                draw_angle(image, prev, vertex, nxt, zoom)

    if view["mode"] == EditMode.EDIT:
        for vertex in polygon.vertices:
            center = to_px(vertex.x, vertex.y, zoom)
            cv2.circle(image, center, VERTEX_RADIUS, VERTEX_COLOR, -1, cv2.LINE_AA)
            cv2.circle(image, center, VERTEX_RADIUS, OUTLINE, 1, cv2.LINE_AA)
        for edge in geometry.edges(polygon):
            center = to_px(edge.control.x, edge.control.y, zoom)
            cv2.circle(image, center, CONTROL_RADIUS, CONTROL_COLOR, -1, cv2.LINE_AA)
            cv2.circle(image, center, CONTROL_RADIUS, OUTLINE, 1, cv2.LINE_AA)


def render_view(
    view,
    hit_tester,
    canvas_size: Tuple[int, int],
    grid_size: float = 20,
    samples: int = 20,
) -> np.ndarray:
    """
    Rasterise a session view.

    Args:
        view: Result of ``EditSession.view()``
        hit_tester: Provides text bounds and scale handle geometry
        canvas_size: (height, width) of the output image
        grid_size: Grid spacing in model units
        samples: Polyline resolution of each curve

    Returns:
        BGR image
    """
    height, width = canvas_size
    zoom = view["zoom"]
    image = np.full((height, width, 3), BACKGROUND, dtype=np.uint8)

    if view["view_options"].show_grid:
        draw_grid(image, zoom, grid_size)

    for polygon in view["polygons"]:
        if len(polygon.vertices) > 1:
            draw_polygon(image, polygon, view, zoom, samples)

    selection = view["selection"]
    for index, text in enumerate(view["texts"]):
        draw_text(
            image, text.content, text.x, text.y, text.font_size,
            color_to_bgr(text.color), zoom,
        )
        if selection.is_text_selected(index):
            left, top, right, bottom = hit_tester.text_bounds(text)
            cv2.rectangle(
                image, to_px(left, top, zoom), to_px(right, bottom, zoom),
                SELECTION_COLOR, 1,
            )

    current = view["current_polygon"]
    if current.vertices:
        draw_polygon(image, current, view, zoom, samples)
        pointer = view["pointer"]
        if view["mode"] == EditMode.DRAW and pointer is not None:
            last = current.vertices[-1]
            draw_dashed_line(
                image, (last.x, last.y), pointer.as_tuple(), OUTLINE, zoom
            )

    if view["mode"] == EditMode.EDIT:
        for ref in selection.polygons:
            if not isinstance(ref, Completed):
                continue
            polygon = view["polygons"][ref.index]
            if not polygon.vertices:
                continue
            handle = hit_tester.scale_handle(polygon)
            half = handle.size / 2
            cv2.rectangle(
                image,
                to_px(handle.x - half, handle.y - half, zoom),
                to_px(handle.x + half, handle.y + half, zoom),
                SELECTION_COLOR,
                -1,
            )

    return image
