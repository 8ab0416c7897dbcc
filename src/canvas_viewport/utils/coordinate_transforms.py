"""Coordinate transformation utilities for the viewport.

Provides conversion between coordinate systems:
- Device space (pointer positions in logical pixels, Y-down)
- Physical space (device * device_pixel_ratio; offsets live here)
- Content space (the logical drawing plane)

    content = (device * device_pixel_ratio - offset) / scale
    device  = (content * scale + offset) / device_pixel_ratio

All functions are pure and cheap enough to call on every pointer move.
"""
from typing import NamedTuple

import numpy as np

from canvas_viewport.models.transform import Vec2


class ContentPoint(NamedTuple):
    """Content space point plus the hit test mode the caller asked for.

    hit_test=True means the point is meant for containment testing
    against stroked paths (callers widen their hit margins), False means
    exact fill geometry testing.
    """
    x: float
    y: float
    hit_test: bool = False


def to_content_space(device_x, device_y, state, device_pixel_ratio=1.0, hit_test=False):
    """Convert device pixel coordinates to content space.

    Args:
        device_x, device_y: Pointer position in device pixels
        state: TransformState (or Snapshot) with scale and offset
        device_pixel_ratio: Physical pixels per device pixel
        hit_test: Marks the point for stroke hit testing

    Returns:
        ContentPoint(x, y, hit_test)
    """
    offset = state.offset
    scale = state.scale
    return ContentPoint(
        (device_x * device_pixel_ratio - offset.x) / scale,
        (device_y * device_pixel_ratio - offset.y) / scale,
        hit_test,
    )


def to_device_space(content_x, content_y, state, device_pixel_ratio=1.0):
    """Convert content space coordinates to device pixels (inverse of to_content_space).

    Returns:
        Vec2 in device pixels
    """
    offset = state.offset
    scale = state.scale
    return Vec2(
        (content_x * scale + offset.x) / device_pixel_ratio,
        (content_y * scale + offset.y) / device_pixel_ratio,
    )


def to_content_space_many(device_points, state, device_pixel_ratio=1.0):
    """Vectorised to_content_space.

    Args:
        device_points: Array-like of shape (N, 2) in device pixels

    Returns:
        np.ndarray of shape (N, 2) in content space
    """
    points = np.asarray(device_points, dtype=float).reshape(-1, 2)
    offset = np.array([state.offset.x, state.offset.y])
    return (points * device_pixel_ratio - offset) / state.scale


def visible_content_rect(state, viewport):
    """Content space rectangle currently covered by the viewport.

    Args:
        state: TransformState or Snapshot
        viewport: Viewport

    Returns:
        (min_x, min_y, max_x, max_y) in content space
    """
    offset = state.offset
    scale = state.scale
    return (
        -offset.x / scale,
        -offset.y / scale,
        (viewport.pixel_width - offset.x) / scale,
        (viewport.pixel_height - offset.y) / scale,
    )


def points_in_view(content_points, state, viewport, margin=0.0):
    """Mask of content points that fall inside the viewport.

    Args:
        content_points: Array-like of shape (N, 2) in content space
        state: TransformState or Snapshot
        viewport: Viewport
        margin: Extra physical pixels around the viewport still counted as visible

    Returns:
        np.ndarray of bool, shape (N,)
    """
    points = np.asarray(content_points, dtype=float).reshape(-1, 2)
    offset = np.array([state.offset.x, state.offset.y])
    physical = points * state.scale + offset
    upper = np.array([viewport.pixel_width, viewport.pixel_height]) + margin
    return np.all((physical >= -margin) & (physical <= upper), axis=1)
