"""
Pure utility functions for the editing engine.

These functions have no side effects and can be tested in isolation.
"""

import math
from typing import Tuple

import cv2
import numpy as np

# Hershey simplex glyphs are about 22 px tall at scale 1
HERSHEY_BASE_HEIGHT = 22.0
TEXT_FONT = cv2.FONT_HERSHEY_SIMPLEX


def snap_to_grid(x: float, y: float, grid_size: float = 20) -> Tuple[float, float]:
    """
    Round a model-space position to the nearest grid intersection.

    Halfway positions always round up, so every grid cell snaps the same way.

    Args:
        x: X coordinate
        y: Y coordinate
        grid_size: Grid spacing

    Returns:
        Snapped (x, y)
    """
    return (
        float(math.floor(x / grid_size + 0.5) * grid_size),
        float(math.floor(y / grid_size + 0.5) * grid_size),
    )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def font_scale(font_size: float) -> float:
    """OpenCV font scale that renders glyphs ``font_size`` pixels tall."""
    return font_size / HERSHEY_BASE_HEIGHT


def measure_text_width(content: str, font_size: float) -> float:
    """
    Rendered width of ``content`` at ``font_size``.

    Args:
        content: Text to measure
        font_size: Declared font size in pixels

    Returns:
        Width in model units
    """
    if not content:
        return 0.0
    (width, _height), _baseline = cv2.getTextSize(
        content, TEXT_FONT, font_scale(font_size), 1
    )
    return float(width)


def text_bounds(text, measure=measure_text_width) -> Tuple[float, float, float, float]:
    """
    Bounding box of a text object, centered on its position.

    Returns:
        (left, top, right, bottom)
    """
    width = measure(text.content, text.font_size)
    height = text.font_size
    return (
        text.x - width / 2,
        text.y - height / 2,
        text.x + width / 2,
        text.y + height / 2,
    )


def color_to_bgr(color: str) -> Tuple[int, int, int]:
    """
    Convert a CSS-style color name or hex string to an OpenCV BGR tuple.

    Raises:
        ValueError: If the color cannot be parsed
    """
    from matplotlib.colors import to_rgb

    rgb = np.array(to_rgb(color)) * 255
    r, g, b = rgb.round().astype(int)
    return (int(b), int(g), int(r))
