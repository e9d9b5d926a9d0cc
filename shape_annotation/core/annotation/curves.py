"""
Curve and angle math shared by hit-testing and rendering.

Edges are drawn as quadratic beziers through one control point; angles are
drawn as circular fans around the vertex bisector. All functions accept any
object exposing ``x`` and ``y``.
"""

import math
from typing import List, NamedTuple, Tuple

import numpy as np

from .state import AngleProperty, EdgeProperty, Point

DEFAULT_SAMPLES = 20

# Distance from the arc to the angle label
ANGLE_LABEL_DISTANCE = 10.0

EDGE_LABEL_NORMAL_OFFSET = 5.0
EDGE_LABEL_VERTICAL_SHIFT = -10.0


def quadratic_bezier_point(t: float, p0, cp, p1) -> Point:
    u = 1 - t
    return Point(
        u * u * p0.x + 2 * u * t * cp.x + t * t * p1.x,
        u * u * p0.y + 2 * u * t * cp.y + t * t * p1.y,
    )


def sample_quadratic_bezier(
    p0, cp, p1, t0: float = 0.0, t1: float = 1.0, samples: int = DEFAULT_SAMPLES
) -> np.ndarray:
    """
    Sample a bezier piece as a polyline.

    Returns:
        Array of shape (samples + 1, 2) with the points at t0..t1
    """
    t = np.linspace(t0, t1, samples + 1)[:, None]
    u = 1 - t
    a = np.array([p0.x, p0.y], dtype=np.float64)
    b = np.array([cp.x, cp.y], dtype=np.float64)
    c = np.array([p1.x, p1.y], dtype=np.float64)
    return u * u * a + 2 * u * t * b + t * t * c


def approximate_bezier_length(p0, cp, p1, samples: int = DEFAULT_SAMPLES) -> float:
    """Polyline length of the curve; good enough for a label, not exact."""
    points = sample_quadratic_bezier(p0, cp, p1, samples=samples)
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def gap_intervals(gap: float) -> List[Tuple[float, float]]:
    """Parameter intervals to draw, leaving a centered gap for the label."""
    if gap >= 1:
        return []
    if gap <= 0:
        return [(0.0, 1.0)]
    return [(0.0, 0.5 - gap / 2), (0.5 + gap / 2, 1.0)]


class EdgeLabel(NamedTuple):
    text: str
    anchor: Point
    length: float


def edge_label(p0, cp, p1, prop: EdgeProperty, samples: int = DEFAULT_SAMPLES):
    length = approximate_bezier_length(p0, cp, p1, samples)
    mid = quadratic_bezier_point(0.5, p0, cp, p1)
    before = quadratic_bezier_point(0.48, p0, cp, p1)
    after = quadratic_bezier_point(0.52, p0, cp, p1)
    dx, dy = after.x - before.x, after.y - before.y
    norm = math.hypot(dx, dy)
    if norm == 0:
        nx, ny = 0.0, 0.0
    else:
        nx, ny = -dy / norm, dx / norm
    anchor = Point(
        mid.x + nx * EDGE_LABEL_NORMAL_OFFSET + prop.label_offset_x,
        mid.y
        + ny * EDGE_LABEL_NORMAL_OFFSET
        + EDGE_LABEL_VERTICAL_SHIFT
        + prop.label_offset_y,
    )
    if prop.label_override.strip():
        text = prop.label_override
    else:
        text = f"{length:.1f}"
    return EdgeLabel(text, anchor, length)


def wrap_angle(angle: float) -> float:
    """Bring an angle difference into [-pi, pi]."""
    while angle < -math.pi:
        angle += 2 * math.pi
    while angle > math.pi:
        angle -= 2 * math.pi
    return angle


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate from ``a`` to ``b`` the short way around the circle."""
    return a + wrap_angle(b - a) * t


class AngleFan(NamedTuple):
    center: float
    half_angle: float
    interior_angle: float
    label: str
    label_anchor: Point

    @property
    def start(self) -> float:
        return self.center - self.half_angle

    @property
    def end(self) -> float:
        return self.center + self.half_angle

    @property
    def sweep(self) -> float:
        return 2 * self.half_angle


def angle_fan(prev, vertex, nxt, prop: AngleProperty) -> AngleFan:
    """
    Fan drawn at ``vertex`` between the directions to ``prev`` and ``nxt``.

    ``fan_position`` 0 draws the interior angle, 1 the exterior one.
    """
    angle1 = math.atan2(prev.y - vertex.y, prev.x - vertex.x)
    angle2 = math.atan2(nxt.y - vertex.y, nxt.x - vertex.x)
    interior = abs(wrap_angle(angle2 - angle1))

    # Bisector of the summed unit vectors is correct across the +-pi seam
    interior_center = math.atan2(
        math.sin(angle1) + math.sin(angle2), math.cos(angle1) + math.cos(angle2)
    )
    exterior_center = interior_center + math.pi
    interior_half = interior / 2
    exterior_half = (2 * math.pi - interior) / 2

    t = min(max(prop.fan_position, 0.0), 1.0)
    center = lerp_angle(interior_center, exterior_center, t)
    half_angle = interior_half * (1 - t) + exterior_half * t

    distance = prop.radius + ANGLE_LABEL_DISTANCE
    anchor = Point(
        vertex.x + distance * math.cos(center) + prop.label_offset_x,
        vertex.y + distance * math.sin(center) + prop.label_offset_y,
    )
    if prop.label_override.strip():
        label = prop.label_override
    else:
        label = f"{math.degrees(interior):.1f}°"
    return AngleFan(center, half_angle, interior, label, anchor)
