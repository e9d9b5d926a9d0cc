"""
Selection tracking.

Read by the property panel and the renderer; written only by the session.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .state import Completed, Document, Group, InProgress, PolygonRef


@dataclass
class SelectionModel:
    polygons: List[PolygonRef] = field(default_factory=list)
    texts: List[int] = field(default_factory=list)
    group_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.polygons and not self.texts

    def copy(self) -> "SelectionModel":
        return SelectionModel(list(self.polygons), list(self.texts), self.group_id)

    def clear(self):
        self.polygons = []
        self.texts = []
        self.group_id = None

    def _reset_unless(self, additive: bool):
        if not additive:
            self.clear()
        # Extending a selection breaks the "exactly this group" state
        self.group_id = None

    def select_polygon(self, ref: PolygonRef, additive: bool = False):
        self._reset_unless(additive)
        if ref not in self.polygons:
            self.polygons.append(ref)

    def select_text(self, index: int, additive: bool = False):
        self._reset_unless(additive)
        if index not in self.texts:
            self.texts.append(index)

    def select_group(self, group: Group, additive: bool = False):
        self._reset_unless(additive)
        for index in group.polygon_indices:
            ref = Completed(index)
            if ref not in self.polygons:
                self.polygons.append(ref)
        for index in group.text_indices:
            if index not in self.texts:
                self.texts.append(index)
        if not additive:
            self.group_id = group.group_id

    def is_polygon_selected(self, ref: PolygonRef) -> bool:
        return ref in self.polygons

    def is_text_selected(self, index: int) -> bool:
        return index in self.texts

    def completed_polygon_indices(self) -> List[int]:
        return sorted(r.index for r in self.polygons if isinstance(r, Completed))

    def prune(self, doc: Document):
        """Drop references that no longer point into ``doc``."""
        self.polygons = [
            ref
            for ref in self.polygons
            if (isinstance(ref, InProgress) and doc.current_polygon.vertices)
            or (isinstance(ref, Completed) and ref.index < len(doc.polygons))
        ]
        self.texts = [i for i in self.texts if i < len(doc.texts)]
        if doc.group(self.group_id) is None:
            self.group_id = None

    def to_dict(self):
        return {
            "polygons": [
                "current" if isinstance(r, InProgress) else r.index
                for r in self.polygons
            ],
            "texts": list(self.texts),
            "group_id": self.group_id,
        }
