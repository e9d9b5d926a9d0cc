"""
End-to-end integration tests.

Tests complete workflows from start to finish.
"""

import cv2
import pytest

from shape_annotation.cli import build_parser, main
from shape_annotation.cli.demo.demo import build_demo
from shape_annotation.config import load_config
from shape_annotation.core.annotation import EditMode, EditSession
from shape_annotation.core.annotation import commands as cmd
from shape_annotation.interfaces import GUIAnnotationAdapter
from shape_annotation.tests.conftest import fixed_width

pytestmark = pytest.mark.integration


class TestDemoWorkflow:
    """Build the sample drawing through the command API."""

    def test_demo_document(self):
        session = EditSession(measure_text=fixed_width)
        build_demo(session)
        doc = session.document

        assert len(doc.polygons) == 2
        assert len(doc.current_polygon.vertices) == 3
        assert [t.content for t in doc.texts] == ["square"]

        group = doc.group(0)
        assert group.polygon_indices == [1]
        assert group.text_indices == [0]

        # The grouped square moved by (+20, -20) along with its caption
        square = doc.polygons[1]
        assert (square.vertices[0].x, square.vertices[0].y) == (440, 100)
        assert (doc.texts[0].x, doc.texts[0].y) == (540, 360)

        # The triangle's top edge got an explicit control point
        assert doc.polygons[0].vertices[0].edge_control is not None

    def test_demo_is_fully_undoable(self):
        session = EditSession(measure_text=fixed_width)
        build_demo(session)

        while session.apply(cmd.Undo()):
            pass

        assert session.document.polygons == []
        assert session.document.current_polygon.vertices == []
        assert session.document.texts == []

    def test_demo_renders(self):
        session = EditSession(measure_text=fixed_width)
        adapter = GUIAnnotationAdapter(session, canvas_size=(600, 800))
        build_demo(session)
        adapter.pump()

        assert adapter.image.shape == (600, 800, 3)
        assert (adapter.image != 255).any()


def test_integration_marker_is_registered(request):
    markers = request.config.getini("markers")
    assert any(line.startswith("integration:") for line in markers)


class TestCommandLine:
    def test_subcommands_are_discovered(self):
        parser = build_parser()
        args = parser.parse_args(["demo", "out.png", "--zoom", "2"])
        assert args.zoom_steps == 2
        assert callable(args.fn)

        args = parser.parse_args(["edit", "--snap"])
        assert args.snap

    def test_demo_writes_image(self, tmp_path):
        output = tmp_path / "demo.png"
        main(["demo", str(output), "--width", "400", "--height", "300", "--grid"])

        image = cv2.imread(str(output))
        assert image is not None
        assert image.shape == (300, 400, 3)

    def test_environment_overrides(self):
        cfg = load_config({"SHAPE_ANNOTATION_GRID_SIZE": "10"})
        session = EditSession(cfg, measure_text=fixed_width)
        session.apply(cmd.SetViewOption("snap_to_grid", True))
        session.apply(cmd.SetMode(EditMode.DRAW))
        session.apply(cmd.PointerDown(14, 26))

        vertex = session.document.current_polygon.vertices[0]
        assert (vertex.x, vertex.y) == (10, 30)
