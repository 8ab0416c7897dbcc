"""
Tests for device <-> content coordinate mapping and visibility queries.
"""

import numpy as np
import pytest

from canvas_viewport.models.transform import TransformState, Vec2, Viewport, Snapshot
from canvas_viewport.utils.coordinate_transforms import (
    ContentPoint, to_content_space, to_device_space, to_content_space_many,
    visible_content_rect, points_in_view,
)


def test_identity_state_maps_device_to_content_unchanged():
    point = to_content_space(120, 45, TransformState(), 1.0)
    assert point == ContentPoint(120.0, 45.0, False)


def test_formula_with_scale_offset_and_pixel_ratio():
    state = TransformState(2.0, Vec2(100.0, -50.0))
    point = to_content_space(150, 75, state, 2.0)
    # (150 * 2 - 100) / 2, (75 * 2 + 50) / 2
    assert point.x == pytest.approx(100.0)
    assert point.y == pytest.approx(100.0)


def test_hit_test_flag_is_carried_on_result():
    point = to_content_space(10, 10, TransformState(), 1.0, hit_test=True)
    assert point.hit_test is True
    x, y, _ = point
    assert (x, y) == (10.0, 10.0)


def test_snapshot_can_stand_in_for_state():
    snapshot = Snapshot(0.5, Vec2(20.0, 30.0))
    assert to_content_space(20, 30, snapshot, 1.0)[:2] == (0.0, 0.0)


def test_device_space_inverts_content_space():
    state = TransformState(1.7, Vec2(-33.0, 12.5))
    content = to_content_space(311, 97, state, 1.5)
    device = to_device_space(content.x, content.y, state, 1.5)
    assert device.x == pytest.approx(311)
    assert device.y == pytest.approx(97)


def test_batched_conversion_matches_scalar():
    state = TransformState(3.0, Vec2(10.0, 20.0))
    device = [(0, 0), (10, 20), (55.5, -4)]
    batched = to_content_space_many(device, state, 1.25)
    for (dx, dy), row in zip(device, batched):
        single = to_content_space(dx, dy, state, 1.25)
        assert row[0] == pytest.approx(single.x)
        assert row[1] == pytest.approx(single.y)


def test_visible_rect_covers_viewport():
    state = TransformState(2.0, Vec2(100.0, 50.0))
    rect = visible_content_rect(state, Viewport(800, 600))
    assert rect == pytest.approx((-50.0, -25.0, 350.0, 275.0))


def test_points_in_view_mask():
    state = TransformState(1.0, Vec2(0.0, 0.0))
    mask = points_in_view([(10, 10), (799, 599), (801, 10), (-5, 300)], state, Viewport(800, 600))
    assert mask.tolist() == [True, True, False, False]


def test_points_in_view_margin_extends_visibility():
    state = TransformState(1.0, Vec2(0.0, 0.0))
    mask = points_in_view(np.array([[805.0, 10.0]]), state, Viewport(800, 600), margin=10)
    assert mask.tolist() == [True]
