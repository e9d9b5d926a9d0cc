"""
Document model for an editing session.

Contains data classes representing polygons, vertices, texts and groups,
plus the document that owns them. Every class knows how to produce an
independent structural clone of itself; history snapshots rely on it.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class Point:
    x: float
    y: float

    def clone(self) -> "Point":
        return Point(self.x, self.y)

    def as_tuple(self):
        return (self.x, self.y)


@dataclass
class EdgeProperty:
    """Display properties of the edge that starts at a vertex."""

    show_edge_length: bool = True
    curvature: float = 30.0
    segment_color: str = "black"
    bezier_color: str = "black"
    label_color: str = "black"
    label_override: str = ""
    bezier_gap: float = 0.1
    label_offset_x: float = 0.0
    label_offset_y: float = 0.0
    label_font_size: int = 12

    def clone(self) -> "EdgeProperty":
        return EdgeProperty(**{f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class AngleProperty:
    """Display properties of the angle annotation drawn at a vertex."""

    show_angle: bool = True
    radius: float = 30.0
    label_override: str = ""
    fan_position: float = 0.0
    label_offset_x: float = 0.0
    label_offset_y: float = 0.0
    label_font_size: int = 12

    def clone(self) -> "AngleProperty":
        return AngleProperty(**{f.name: getattr(self, f.name) for f in fields(self)})


# Properties stored as numbers restricted to the unit interval
UNIT_INTERVAL_FIELDS = ("bezier_gap", "fan_position")


@dataclass
class Vertex:
    """A polygon corner with the properties of its outgoing edge and its angle."""

    x: float
    y: float
    edge_property: EdgeProperty = field(default_factory=EdgeProperty)
    angle_property: AngleProperty = field(default_factory=AngleProperty)
    edge_control: Optional[Point] = None

    def clone(self) -> "Vertex":
        return Vertex(
            x=self.x,
            y=self.y,
            edge_property=self.edge_property.clone(),
            angle_property=self.angle_property.clone(),
            edge_control=self.edge_control.clone() if self.edge_control else None,
        )


@dataclass
class Polygon:
    vertices: List[Vertex] = field(default_factory=list)
    is_closed: bool = False
    group_id: Optional[int] = None

    def clone(self) -> "Polygon":
        return Polygon(
            vertices=[v.clone() for v in self.vertices],
            is_closed=self.is_closed,
            group_id=self.group_id,
        )

    def __len__(self):
        return len(self.vertices)


@dataclass
class TextObject:
    x: float
    y: float
    content: str = "Text"
    font_size: float = 16
    color: str = "black"
    group_id: Optional[int] = None

    def clone(self) -> "TextObject":
        return TextObject(
            x=self.x,
            y=self.y,
            content=self.content,
            font_size=self.font_size,
            color=self.color,
            group_id=self.group_id,
        )


@dataclass
class Group:
    """
    Frozen set of polygons and texts moved together.

    Ungrouping tombstones the group instead of removing it, so group ids
    (positions in ``Document.groups``) stay stable.
    """

    group_id: int
    polygon_indices: List[int] = field(default_factory=list)
    text_indices: List[int] = field(default_factory=list)
    dissolved: bool = False

    @property
    def member_count(self) -> int:
        return len(self.polygon_indices) + len(self.text_indices)

    @property
    def is_live(self) -> bool:
        return not self.dissolved

    def clone(self) -> "Group":
        return Group(
            group_id=self.group_id,
            polygon_indices=list(self.polygon_indices),
            text_indices=list(self.text_indices),
            dissolved=self.dissolved,
        )


@dataclass(frozen=True)
class Completed:
    """Reference to ``Document.polygons[index]``."""

    index: int


@dataclass(frozen=True)
class InProgress:
    """Reference to ``Document.current_polygon``."""


PolygonRef = Union[Completed, InProgress]

IN_PROGRESS = InProgress()


@dataclass
class Document:
    """
    Complete editable state.

    The four collections always change together; history stores clones of
    the whole document so group references stay consistent across undo.
    """

    polygons: List[Polygon] = field(default_factory=list)
    current_polygon: Polygon = field(default_factory=Polygon)
    texts: List[TextObject] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)

    def clone(self) -> "Document":
        return Document(
            polygons=[p.clone() for p in self.polygons],
            current_polygon=self.current_polygon.clone(),
            texts=[t.clone() for t in self.texts],
            groups=[g.clone() for g in self.groups],
        )

    def resolve(self, ref: PolygonRef) -> Optional[Polygon]:
        """Polygon behind ``ref``, or None if the reference is stale."""
        if isinstance(ref, InProgress):
            return self.current_polygon
        if 0 <= ref.index < len(self.polygons):
            return self.polygons[ref.index]
        return None

    def polygon_refs(self) -> Iterator[PolygonRef]:
        """Completed polygons in creation order, then the in-progress one."""
        for index in range(len(self.polygons)):
            yield Completed(index)
        if self.current_polygon.vertices:
            yield IN_PROGRESS

    def live_groups(self) -> List[Group]:
        return [g for g in self.groups if g.is_live]

    def group(self, group_id: Optional[int]) -> Optional[Group]:
        if group_id is None or not (0 <= group_id < len(self.groups)):
            return None
        group = self.groups[group_id]
        return group if group.is_live else None

    def create_group(self, polygon_indices, text_indices) -> Group:
        group = Group(
            group_id=len(self.groups),
            polygon_indices=sorted(polygon_indices),
            text_indices=sorted(text_indices),
        )
        self.groups.append(group)
        for index in group.polygon_indices:
            self.polygons[index].group_id = group.group_id
        for index in group.text_indices:
            self.texts[index].group_id = group.group_id
        logger.debug(
            f"Created group {group.group_id} with {group.member_count} members"
        )
        return group

    def dissolve_group(self, group_id: int):
        group = self.group(group_id)
        if group is None:
            return
        for index in group.polygon_indices:
            self.polygons[index].group_id = None
        for index in group.text_indices:
            self.texts[index].group_id = None
        group.polygon_indices = []
        group.text_indices = []
        group.dissolved = True
        logger.debug(f"Dissolved group {group_id}")

    def remove_polygon(self, index: int) -> Polygon:
        """Remove a completed polygon, keeping group membership consistent."""
        polygon = self.polygons.pop(index)
        self._forget_member(polygon.group_id, "polygon_indices", index)
        for group in self.live_groups():
            group.polygon_indices = [
                i - 1 if i > index else i for i in group.polygon_indices
            ]
        self._dissolve_undersized(polygon.group_id)
        return polygon

    def remove_text(self, index: int) -> TextObject:
        """Remove a text, keeping group membership consistent."""
        text = self.texts.pop(index)
        self._forget_member(text.group_id, "text_indices", index)
        for group in self.live_groups():
            group.text_indices = [i - 1 if i > index else i for i in group.text_indices]
        self._dissolve_undersized(text.group_id)
        return text

    def _forget_member(self, group_id, attribute, index):
        group = self.group(group_id)
        if group is not None:
            members = getattr(group, attribute)
            if index in members:
                members.remove(index)

    def _dissolve_undersized(self, group_id):
        group = self.group(group_id)
        if group is not None and group.member_count < 2:
            self.dissolve_group(group_id)

    def to_dict(self):
        """Summary used in event payloads."""
        return {
            "num_polygons": len(self.polygons),
            "num_current_vertices": len(self.current_polygon.vertices),
            "num_texts": len(self.texts),
            "num_groups": len(self.live_groups()),
        }
