"""
Tests for GUIAnnotationAdapter and rendering.
"""

from unittest.mock import Mock

import numpy as np
import pytest

from shape_annotation.core.annotation import EditMode
from shape_annotation.interfaces import GUIAnnotationAdapter
from shape_annotation.interfaces.gui_adapter import KEY_BINDINGS
from shape_annotation.tests.conftest import draw_polygon


@pytest.fixture
def adapter(session):
    return GUIAnnotationAdapter(session, canvas_size=(240, 320))


def click(adapter, x, y, additive=False):
    adapter.on_mouse_down(x, y, additive)
    adapter.on_mouse_up()


class TestRedraw:
    def test_many_events_render_once(self, session):
        frames = Mock()
        adapter = GUIAnnotationAdapter(session, frames, canvas_size=(120, 160))

        for x in range(5):
            click(adapter, 10 + x * 20, 10)
            adapter.on_mouse_move(x, x)

        assert adapter.pump() == 1
        frames.assert_called_once()
        image = frames.call_args.args[0]
        assert image.shape == (120, 160, 3)
        assert adapter.pump() == 0

    def test_next_event_schedules_new_frame(self, adapter):
        click(adapter, 10, 10)
        adapter.pump()
        click(adapter, 30, 10)
        assert adapter.pump() == 1
        assert adapter.image is not None


class TestRendering:
    def test_blank_canvas(self, adapter):
        image = adapter.get_visualization()
        assert image.shape == (240, 320, 3)
        assert image.dtype == np.uint8
        assert (image == 255).all()

    def test_polygon_is_drawn(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        image = adapter.get_visualization()
        assert (image != 255).any()

    def test_all_modes_render(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        draw_polygon(session, [(20, 200), (60, 210)], close=False)
        for mode in ("draw", "edit", "delete", "text"):
            adapter.set_mode(mode)
            assert adapter.get_visualization().shape == (240, 320, 3)

    def test_selection_renders_scale_handle(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        adapter.set_mode("edit")
        plain = adapter.get_visualization()

        click(adapter, 120, 100)
        selected = adapter.get_visualization()

        # Handle square at the (200, 180) corner
        assert not np.array_equal(plain[175:186, 195:206], selected[175:186, 195:206])

    def test_grid_toggle(self, adapter):
        adapter.toggle_view_option("show_grid")
        image = adapter.get_visualization()
        assert (image != 255).any()

    def test_hidden_curves_and_labels(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        for name in ("show_edge_length", "show_angle"):
            adapter.toggle_view_option(name)
        image = adapter.get_visualization()
        assert image.shape == (240, 320, 3)


class TestCommands:
    def test_close_polygon_reports_rejection(self, adapter, session):
        click(adapter, 10, 10)
        click(adapter, 50, 10)

        assert not adapter.close_polygon()
        assert adapter.last_message
        assert adapter.last_message in adapter.status_line()

        click(adapter, 30, 40)
        assert adapter.close_polygon()
        assert adapter.last_message is None
        assert len(session.document.polygons) == 1

    def test_duplicate_selection(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        adapter.set_mode("edit")
        click(adapter, 120, 100)

        assert adapter.duplicate_selection()

        assert len(session.document.polygons) == 2
        assert adapter.last_message is None

    def test_duplicate_empty_selection(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        depth = session.history.undo_depth

        assert not adapter.duplicate_selection()

        assert len(session.document.polygons) == 1
        assert session.history.undo_depth == depth
        assert adapter.last_message in adapter.status_line()

    def test_rubber_band_follows_pointer(self, adapter, session):
        click(adapter, 20, 20)
        adapter.on_mouse_move(20, 200)
        with_band = adapter.get_visualization()

        adapter.on_mouse_move(300, 20)
        moved = adapter.get_visualization()

        # Dashes run down the x=20 column only while the pointer is below
        assert (with_band[100:180, 18:23] != 255).any()
        assert (moved[100:180, 18:23] == 255).all()

    def test_wheel_zooms(self, adapter, session):
        adapter.on_wheel(-1)
        assert session.viewport.zoom == pytest.approx(1.1)
        assert "1.10" in adapter.status_line()

    def test_toggle_snap(self, adapter, session):
        adapter.toggle_view_option("snap_to_grid")
        assert session.viewport.snap_to_grid
        adapter.toggle_view_option("snap_to_grid")
        assert not session.viewport.snap_to_grid


class TestKeyBindings:
    @pytest.mark.parametrize(
        "key, mode",
        [("d", EditMode.DRAW), ("e", EditMode.EDIT), ("x", EditMode.DELETE), ("t", EditMode.TEXT)],
    )
    def test_mode_keys(self, adapter, session, key, mode):
        assert adapter.handle_key(key)
        assert session.mode == mode

    def test_unbound_key(self, adapter):
        assert not adapter.handle_key("?")

    def test_every_binding_runs(self, adapter, session):
        draw_polygon(session, [(40, 40), (200, 40), (120, 180)])
        for key in KEY_BINDINGS:
            assert adapter.handle_key(key)

    def test_undo_redo_keys(self, adapter, session):
        click(adapter, 10, 10)
        adapter.handle_key("z")
        assert session.document.current_polygon.vertices == []
        adapter.handle_key("y")
        assert len(session.document.current_polygon.vertices) == 1

    def test_group_keys(self, adapter, session):
        draw_polygon(session, [(20, 20), (100, 20), (100, 100), (20, 100)])
        draw_polygon(session, [(150, 20), (230, 20), (230, 100), (150, 100)])
        adapter.set_mode("edit")
        click(adapter, 30, 40)
        click(adapter, 220, 40, additive=True)

        adapter.handle_key("g")
        assert session.document.polygons[0].group_id == 0
        adapter.handle_key("u")
        assert session.document.polygons[0].group_id is None
