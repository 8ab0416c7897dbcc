"""Coordinate math, configuration and error handling helpers."""

from .coordinate_transforms import (
    ContentPoint, to_content_space, to_device_space, to_content_space_many,
    visible_content_rect, points_in_view,
)
from .config import EngineConfig, load_config, save_config
from .logger import loggerRaise, set_main_window

__all__ = [
    'ContentPoint', 'to_content_space', 'to_device_space', 'to_content_space_many',
    'visible_content_rect', 'points_in_view',
    'EngineConfig', 'load_config', 'save_config',
    'loggerRaise', 'set_main_window',
]
