"""
Derived geometry of polygons.

Pure queries over the document model: edge enumeration, control point
resolution, angle indices and the scale handle. Nothing here mutates.
"""

import math
from typing import Iterator, List, NamedTuple, Sequence, Tuple

from .state import Point, Polygon, Vertex


class Edge(NamedTuple):
    index: int
    start: Vertex
    end: Vertex
    control: Point


class ScaleHandle(NamedTuple):
    """Square affordance at (max x, max y) used to scale about the centroid."""

    x: float
    y: float
    size: float
    centroid: Point

    def contains(self, point: Point) -> bool:
        half = self.size / 2
        return (
            self.x - half <= point.x <= self.x + half
            and self.y - half <= point.y <= self.y + half
        )


def edge_count(polygon: Polygon) -> int:
    n = len(polygon.vertices)
    if polygon.is_closed:
        return n
    return max(n - 1, 0)


def edge_endpoints(polygon: Polygon, i: int) -> Tuple[Vertex, Vertex]:
    vertices = polygon.vertices
    return vertices[i], vertices[(i + 1) % len(vertices)]


def default_edge_control(start: Vertex, end: Vertex, curvature: float) -> Point:
    """
    Midpoint of the segment pushed ``curvature`` units along its normal.

    The normal is always ``(-dy, dx) / |d|``, so recomputing the point
    (after undo, for example) bows the curve to the same side.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    mid_x = (start.x + end.x) / 2
    mid_y = (start.y + end.y) / 2
    dist = math.hypot(dx, dy)
    if dist == 0:
        return Point(mid_x, mid_y)
    return Point(mid_x - (dy / dist) * curvature, mid_y + (dx / dist) * curvature)


def edge_control_point(polygon: Polygon, i: int) -> Point:
    start, end = edge_endpoints(polygon, i)
    if start.edge_control is not None:
        return start.edge_control
    return default_edge_control(start, end, start.edge_property.curvature)


def edges(polygon: Polygon) -> Iterator[Edge]:
    for i in range(edge_count(polygon)):
        start, end = edge_endpoints(polygon, i)
        yield Edge(i, start, end, edge_control_point(polygon, i))


def angle_indices(polygon: Polygon) -> List[int]:
    n = len(polygon.vertices)
    if polygon.is_closed:
        return list(range(n))
    return list(range(1, n - 1))


def angle_neighbors(polygon: Polygon, i: int) -> Tuple[Vertex, Vertex, Vertex]:
    """(previous, vertex, next) around vertex ``i``, wrapping for closed polygons."""
    vertices = polygon.vertices
    n = len(vertices)
    return vertices[(i - 1) % n], vertices[i], vertices[(i + 1) % n]


def centroid(points: Sequence) -> Point:
    """Mean of the given points (anything with ``x`` and ``y``)."""
    n = len(points)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def scale_handle(polygon: Polygon, size: float = 10.0) -> ScaleHandle:
    vertices = polygon.vertices
    return ScaleHandle(
        x=max(v.x for v in vertices),
        y=max(v.y for v in vertices),
        size=size,
        centroid=centroid(vertices),
    )
