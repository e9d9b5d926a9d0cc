"""
Test fixtures and utilities for shape_annotation tests.

Provides reusable fixtures for sessions, documents and helpers that
drive a session through the command API.
"""

import pytest
from unittest.mock import Mock

from shape_annotation.config import default_config
from shape_annotation.core.annotation import (
    Document,
    EditMode,
    EditSession,
    Polygon,
    TextObject,
    Vertex,
)
from shape_annotation.core.annotation import commands as cmd

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: end-to-end workflows through the CLI and adapter"
    )


def fixed_width(content, font_size):
    """Deterministic text measurer: half the font size per character."""
    return len(content) * font_size * 0.5


def make_polygon(points, closed=True):
    return Polygon(vertices=[Vertex(x, y) for x, y in points], is_closed=closed)


def draw_polygon(session, points, close=True):
    """Click ``points`` in draw mode and optionally close the polygon."""
    session.apply(cmd.SetMode(EditMode.DRAW))
    for x, y in points:
        session.apply(cmd.PointerDown(x, y))
        session.apply(cmd.PointerUp())
    if close:
        return session.apply(cmd.ClosePolygon())
    return None


def place_text(session, x, y, content=None):
    session.apply(cmd.SetMode(EditMode.TEXT))
    session.apply(cmd.PointerDown(x, y))
    session.apply(cmd.PointerUp())
    index = len(session.document.texts) - 1
    if content is not None:
        session.apply(cmd.EditText(index, "content", content))
    return index


def drag(session, start, *moves, additive=False):
    """Pointer gesture in edit mode: down at ``start``, moves, up."""
    session.apply(cmd.SetMode(EditMode.EDIT))
    session.apply(cmd.PointerDown(*start, additive=additive))
    for x, y in moves:
        session.apply(cmd.PointerMove(x, y))
    session.apply(cmd.PointerUp())


@pytest.fixture
def cfg():
    return default_config()


@pytest.fixture
def session(cfg):
    """EditSession with a deterministic text measurer."""
    return EditSession(cfg, measure_text=fixed_width)


@pytest.fixture
def listener(session):
    """Mock subscribed to every session event."""
    callback = Mock()
    session.events.on_any(callback)
    return callback


@pytest.fixture
def square():
    return make_polygon(SQUARE)


@pytest.fixture
def big_square_session(session):
    """Session holding one closed 100x100 square at (100, 100)."""
    draw_polygon(session, [(100, 100), (200, 100), (200, 200), (100, 200)])
    return session


@pytest.fixture
def sample_document():
    """Two closed polygons, an open one and two texts."""
    doc = Document()
    doc.polygons.append(make_polygon(SQUARE))
    doc.polygons.append(make_polygon([(20, 0), (30, 0), (25, 10)]))
    doc.current_polygon = make_polygon([(50, 50), (60, 50)], closed=False)
    doc.texts.append(TextObject(100, 100, "hello"))
    doc.texts.append(TextObject(200, 200, "world"))
    return doc
