"""
Tests for derived polygon geometry.
"""

import math

import pytest

from shape_annotation.core.annotation import Point, Polygon, Vertex
from shape_annotation.core.annotation import geometry
from shape_annotation.tests.conftest import SQUARE, make_polygon


class TestEdgeCount:
    @pytest.mark.parametrize("n", [0, 1, 2, 3, 5])
    def test_open_polygon(self, n):
        polygon = make_polygon([(i, i * i) for i in range(n)], closed=False)
        assert geometry.edge_count(polygon) == max(n - 1, 0)

    @pytest.mark.parametrize("n", [3, 4, 7])
    def test_closed_polygon(self, n):
        polygon = make_polygon([(i, i * i) for i in range(n)], closed=True)
        assert geometry.edge_count(polygon) == n

    def test_closed_polygon_wraps(self, square):
        start, end = geometry.edge_endpoints(square, 3)
        assert (start.x, start.y) == (0, 10)
        assert (end.x, end.y) == (0, 0)


class TestEdgeControlPoint:
    def test_default_is_perpendicular_offset(self):
        polygon = make_polygon([(0, 0), (100, 0)], closed=False)
        polygon.vertices[0].edge_property.curvature = 30

        cp = geometry.edge_control_point(polygon, 0)

        assert cp.x == pytest.approx(50)
        assert cp.y == pytest.approx(30)

    def test_default_distance_equals_curvature(self):
        polygon = make_polygon([(3, 7), (41, -12)], closed=False)
        polygon.vertices[0].edge_property.curvature = 17.5
        start, end = polygon.vertices

        cp = geometry.edge_control_point(polygon, 0)
        mid = Point((start.x + end.x) / 2, (start.y + end.y) / 2)

        assert math.hypot(cp.x - mid.x, cp.y - mid.y) == pytest.approx(17.5)
        # Perpendicular to the edge direction
        dot = (cp.x - mid.x) * (end.x - start.x) + (cp.y - mid.y) * (end.y - start.y)
        assert dot == pytest.approx(0, abs=1e-9)

    def test_side_is_reproducible(self):
        polygon = make_polygon([(0, 0), (0, 50)], closed=False)
        first = geometry.edge_control_point(polygon, 0)
        second = geometry.edge_control_point(polygon.clone(), 0)
        assert first == second
        # Direction (0, 1) bows towards negative x
        assert first.x < 0

    def test_reversed_edge_bows_to_other_side(self):
        forward = make_polygon([(0, 0), (100, 0)], closed=False)
        backward = make_polygon([(100, 0), (0, 0)], closed=False)
        assert geometry.edge_control_point(forward, 0).y > 0
        assert geometry.edge_control_point(backward, 0).y < 0

    def test_override_wins(self):
        polygon = make_polygon([(0, 0), (100, 0)], closed=False)
        polygon.vertices[0].edge_control = Point(12, -40)
        assert geometry.edge_control_point(polygon, 0) == Point(12, -40)

    def test_zero_length_edge_returns_midpoint(self):
        polygon = make_polygon([(5, 5), (5, 5)], closed=False)
        assert geometry.edge_control_point(polygon, 0) == Point(5, 5)

    def test_zero_curvature_is_midpoint(self):
        polygon = make_polygon([(0, 0), (10, 20)], closed=False)
        polygon.vertices[0].edge_property.curvature = 0
        assert geometry.edge_control_point(polygon, 0) == Point(5, 10)

    def test_edges_enumerates_controls(self, square):
        edges = list(geometry.edges(square))
        assert [e.index for e in edges] == [0, 1, 2, 3]
        assert edges[3].end is square.vertices[0]


class TestAngles:
    def test_closed_indices(self, square):
        assert geometry.angle_indices(square) == [0, 1, 2, 3]

    @pytest.mark.parametrize(
        "n, expected", [(0, []), (1, []), (2, []), (3, [1]), (5, [1, 2, 3])]
    )
    def test_open_indices(self, n, expected):
        polygon = make_polygon([(i, 0) for i in range(n)], closed=False)
        assert geometry.angle_indices(polygon) == expected

    def test_neighbors_wrap(self, square):
        prev, vertex, nxt = geometry.angle_neighbors(square, 0)
        assert (prev.x, prev.y) == (0, 10)
        assert (vertex.x, vertex.y) == (0, 0)
        assert (nxt.x, nxt.y) == (10, 0)


class TestScaleHandle:
    def test_handle_at_max_corner(self):
        polygon = make_polygon([(0, 0), (40, 10), (10, 30)])
        handle = geometry.scale_handle(polygon, 10)

        assert (handle.x, handle.y) == (40, 30)
        assert handle.centroid.x == pytest.approx(50 / 3)
        assert handle.centroid.y == pytest.approx(40 / 3)

    def test_contains(self):
        handle = geometry.scale_handle(make_polygon(SQUARE), 10)
        assert handle.contains(Point(14, 14))
        assert handle.contains(Point(4, 4)) is False

    def test_centroid_is_vertex_mean(self):
        vertices = [Vertex(0, 0), Vertex(6, 0), Vertex(0, 3)]
        assert geometry.centroid(vertices) == Point(2, 1)

    def test_polygon_len(self):
        assert len(Polygon()) == 0
