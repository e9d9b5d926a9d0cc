"""
Drag sub-states of edit mode.

Exactly one of these is active between pointer-down and pointer-up. The
translating and scaling drags snapshot their targets on entry and always
apply the pointer to that snapshot, never to already-moved live values, so
repeated moves cannot accumulate drift.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from . import geometry
from .state import Document, Point, Polygon, PolygonRef

# (x, y, edge_control) per vertex
VertexSnapshot = List[Tuple[float, float, Optional[Point]]]


def snapshot_vertices(polygon: Polygon) -> VertexSnapshot:
    return [
        (v.x, v.y, v.edge_control.clone() if v.edge_control else None)
        for v in polygon.vertices
    ]


def translate_vertices(polygon: Polygon, snapshot: VertexSnapshot, dx, dy):
    for vertex, (x, y, control) in zip(polygon.vertices, snapshot):
        vertex.x = x + dx
        vertex.y = y + dy
        if control is not None:
            vertex.edge_control = Point(control.x + dx, control.y + dy)


@dataclass
class DraggingEdgeControl:
    ref: PolygonRef
    edge_index: int

    def apply(self, doc: Document, pos: Point):
        polygon = doc.resolve(self.ref)
        polygon.vertices[self.edge_index].edge_control = Point(pos.x, pos.y)


@dataclass
class DraggingVertex:
    ref: PolygonRef
    vertex_index: int

    def apply(self, doc: Document, pos: Point):
        vertex = doc.resolve(self.ref).vertices[self.vertex_index]
        vertex.x = pos.x
        vertex.y = pos.y


@dataclass
class DraggingPolygon:
    ref: PolygonRef
    start: Point
    initial: VertexSnapshot

    @classmethod
    def begin(cls, doc: Document, ref: PolygonRef, start: Point):
        return cls(ref, start, snapshot_vertices(doc.resolve(ref)))

    def apply(self, doc: Document, pos: Point):
        dx, dy = pos.x - self.start.x, pos.y - self.start.y
        translate_vertices(doc.resolve(self.ref), self.initial, dx, dy)


@dataclass
class DraggingGroup:
    group_id: int
    start: Point
    polygons: Dict[int, VertexSnapshot] = field(default_factory=dict)
    texts: Dict[int, Point] = field(default_factory=dict)

    @classmethod
    def begin(cls, doc: Document, group_id: int, start: Point):
        group = doc.groups[group_id]
        return cls(
            group_id,
            start,
            polygons={
                i: snapshot_vertices(doc.polygons[i]) for i in group.polygon_indices
            },
            texts={i: Point(doc.texts[i].x, doc.texts[i].y) for i in group.text_indices},
        )

    def apply(self, doc: Document, pos: Point):
        dx, dy = pos.x - self.start.x, pos.y - self.start.y
        for index, snapshot in self.polygons.items():
            translate_vertices(doc.polygons[index], snapshot, dx, dy)
        for index, initial in self.texts.items():
            doc.texts[index].x = initial.x + dx
            doc.texts[index].y = initial.y + dy


@dataclass
class DraggingScale:
    """Uniform scale about the centroid, driven by distance to the pointer."""

    ref: PolygonRef
    centroid: Point
    initial_distance: float
    initial: VertexSnapshot

    @classmethod
    def begin(cls, doc: Document, ref: PolygonRef, handle_size: float):
        polygon = doc.resolve(ref)
        handle = geometry.scale_handle(polygon, handle_size)
        center = handle.centroid
        return cls(
            ref,
            center,
            math.hypot(handle.x - center.x, handle.y - center.y),
            snapshot_vertices(polygon),
        )

    def apply(self, doc: Document, pos: Point):
        if self.initial_distance == 0:
            return
        factor = (
            math.hypot(pos.x - self.centroid.x, pos.y - self.centroid.y)
            / self.initial_distance
        )
        scale_about(doc.resolve(self.ref), self.initial, self.centroid, factor)


def scale_about(polygon: Polygon, snapshot: VertexSnapshot, center: Point, factor):
    cx, cy = center.x, center.y
    for vertex, (x, y, control) in zip(polygon.vertices, snapshot):
        vertex.x = cx + (x - cx) * factor
        vertex.y = cy + (y - cy) * factor
        if control is not None:
            vertex.edge_control = Point(
                cx + (control.x - cx) * factor, cy + (control.y - cy) * factor
            )


@dataclass
class DraggingText:
    index: int
    start: Point
    initial: Point

    @classmethod
    def begin(cls, doc: Document, index: int, start: Point):
        text = doc.texts[index]
        return cls(index, start, Point(text.x, text.y))

    def apply(self, doc: Document, pos: Point):
        text = doc.texts[self.index]
        text.x = self.initial.x + (pos.x - self.start.x)
        text.y = self.initial.y + (pos.y - self.start.y)
