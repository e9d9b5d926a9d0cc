"""
Default configuration for the editing engine.

Values can be overridden from the environment, e.g.
``SHAPE_ANNOTATION_GRID_SIZE=10`` or ``SHAPE_ANNOTATION_ZOOM__MAX=4``.
"""

import logging
import os
from typing import Dict, Optional

from easydict import EasyDict as edict

from .utils.env import load_cfg_from_env

logger = logging.getLogger(__name__)


def default_config() -> edict:
    cfg = edict()
    cfg.grid_size = 20
    cfg.hit_radius = 8.0
    cfg.handle_size = 10.0
    cfg.bezier_samples = 20
    cfg.history_limit = 100

    cfg.zoom = edict()
    cfg.zoom.min = 0.5
    cfg.zoom.max = 3.0
    cfg.zoom.step = 1.1

    cfg.text = edict()
    cfg.text.content = "Text"
    cfg.text.font_size = 16
    cfg.text.color = "black"

    cfg.edge = edict()
    cfg.edge.show_edge_length = True
    cfg.edge.curvature = 30.0
    cfg.edge.segment_color = "black"
    cfg.edge.bezier_color = "black"
    cfg.edge.label_color = "black"
    cfg.edge.bezier_gap = 0.1
    cfg.edge.label_font_size = 12

    cfg.angle = edict()
    cfg.angle.show_angle = True
    cfg.angle.radius = 30.0
    cfg.angle.fan_position = 0.0
    cfg.angle.label_font_size = 12
    return cfg


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Default configuration with environment overrides applied."""
    if env is None:
        env = dict(os.environ)
    return load_cfg_from_env(default_config(), env)
