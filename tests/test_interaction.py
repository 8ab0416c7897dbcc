"""
Tests for pointer interaction handlers wired through middleware chains.
"""

import pytest

from canvas_viewport.components.middleware_chain import EventMiddlewareChain
from canvas_viewport.components.interaction import (
    PointerEvent, PointerButtons, PanDragHandler, WheelZoomHandler, HoverTracker,
    PRESS, MOVE, RELEASE, WHEEL,
)
from canvas_viewport.models.transform import Viewport


@pytest.fixture
def chains():
    return {
        'press': EventMiddlewareChain('pointer_press'),
        'move': EventMiddlewareChain('pointer_move'),
        'release': EventMiddlewareChain('pointer_release'),
        'wheel': EventMiddlewareChain('wheel'),
    }


def press(x, y, button='left', modifiers=()):
    return PointerEvent(PRESS, x, y, PointerButtons.from_names(button), button, frozenset(modifiers))


def move(x, y, *held):
    return PointerEvent(MOVE, x, y, PointerButtons.from_names(*held))


def release(x, y, button='left'):
    return PointerEvent(RELEASE, x, y, PointerButtons(), button)


def wheel(x, y, delta, modifiers=('ctrl',)):
    return PointerEvent(WHEEL, x, y, modifiers=frozenset(modifiers), wheel_delta=delta)


# ── PointerButtons ─────────────────────────────────────────────────────

def test_pointer_buttons_flag_set():
    buttons = PointerButtons.from_names('left', 'right')
    assert 'left' in buttons
    assert 'right' in buttons
    assert 'middle' not in buttons
    assert buttons.any
    assert not PointerButtons().any


def test_pointer_buttons_rejects_unknown_names():
    with pytest.raises(ValueError):
        PointerButtons.from_names('thumb')


# ── Pan drag ───────────────────────────────────────────────────────────

def test_drag_pans_content_with_pointer(engine, viewport, chains):
    handler = PanDragHandler(engine, viewport)
    handler.install(chains['press'], chains['move'], chains['release'])

    chains['press'].handle_event(press(100, 100))
    assert chains['move'].handle_event(move(110, 95, 'left')) is False
    assert chains['move'].handle_event(move(130, 90, 'left')) is False

    assert tuple(engine.offset) == (30.0, -10.0)
    assert handler.is_panning
    # Releasing after a drag swallows the click
    assert chains['release'].handle_event(release(130, 90)) is False
    assert not handler.is_panning


def test_small_motion_stays_a_click(engine, viewport, chains):
    handler = PanDragHandler(engine, viewport, drag_threshold=5)
    handler.install(chains['press'], chains['move'], chains['release'])

    chains['press'].handle_event(press(10, 10))
    assert chains['move'].handle_event(move(12, 11, 'left')) is True
    assert chains['release'].handle_event(release(12, 11)) is True
    assert tuple(engine.offset) == (0.0, 0.0)


def test_drag_scales_by_device_pixel_ratio(engine, hidpi_viewport, chains):
    handler = PanDragHandler(engine, lambda: hidpi_viewport)
    handler.install(chains['press'], chains['move'], chains['release'])

    chains['press'].handle_event(press(0, 0))
    chains['move'].handle_event(move(10, 5, 'left'))
    assert tuple(engine.offset) == (20.0, 10.0)


def test_drag_requires_configured_button_and_modifiers(engine, viewport, chains):
    handler = PanDragHandler(engine, viewport, button='middle', required_modifiers=('shift',))
    handler.install(chains['press'], chains['move'], chains['release'])

    chains['press'].handle_event(press(0, 0, 'left', ('shift',)))
    chains['press'].handle_event(press(0, 0, 'middle'))
    chains['move'].handle_event(move(50, 50, 'middle'))
    assert tuple(engine.offset) == (0.0, 0.0)

    chains['press'].handle_event(press(0, 0, 'middle', ('shift',)))
    chains['move'].handle_event(move(50, 50, 'middle'))
    assert tuple(engine.offset) == (50.0, 50.0)


def test_drag_stops_hover_while_panning(engine, viewport, chains, make_rect):
    pan = PanDragHandler(engine, viewport)
    pan.install(chains['press'], chains['move'], chains['release'])
    changes = []
    hover = HoverTracker(engine, viewport, lambda old, new: changes.append((old, new)))
    hover.install(chains['move'])
    hover.add_shape(make_rect('r', 0, 0, 500, 500))

    chains['press'].handle_event(press(10, 10))
    chains['move'].handle_event(move(40, 40, 'left'))
    assert changes == []


def test_uninstall_removes_all_callbacks(engine, viewport, chains):
    handler = PanDragHandler(engine, viewport)
    uninstall = handler.install(chains['press'], chains['move'], chains['release'])
    uninstall()
    assert all(len(chain) == 0 for chain in chains.values())


def test_pan_without_viewport_does_nothing(engine, chains):
    handler = PanDragHandler(engine, None)
    handler.install(chains['press'], chains['move'], chains['release'])
    chains['press'].handle_event(press(0, 0))
    chains['move'].handle_event(move(50, 50, 'left'))
    assert tuple(engine.offset) == (0.0, 0.0)


# ── Wheel zoom ─────────────────────────────────────────────────────────

def test_wheel_zoom_anchored_at_pointer(engine, viewport, chains):
    WheelZoomHandler(engine, viewport).install(chains['wheel'])
    anchor_content = engine.to_content_space(viewport, 200, 100)

    assert chains['wheel'].handle_event(wheel(200, 100, 240)) is False

    assert engine.scale == pytest.approx(1.2)
    device = engine.to_device_space(viewport, anchor_content.x, anchor_content.y)
    assert (device.x, device.y) == pytest.approx((200, 100))


def test_wheel_without_modifier_passes_through(engine, viewport, chains):
    WheelZoomHandler(engine, viewport).install(chains['wheel'])
    assert chains['wheel'].handle_event(wheel(0, 0, 120, modifiers=())) is True
    assert engine.scale == 1.0


def test_wheel_zoom_without_modifier_requirement(engine, viewport, chains):
    WheelZoomHandler(engine, viewport, required_modifiers=()).install(chains['wheel'])
    chains['wheel'].handle_event(wheel(0, 0, -120, modifiers=()))
    assert engine.scale == pytest.approx(0.9)


# ── Hover ──────────────────────────────────────────────────────────────

def test_hover_reports_enter_and_leave(engine, viewport, chains, make_rect):
    changes = []
    hover = HoverTracker(engine, viewport, lambda old, new: changes.append((old, new)))
    hover.install(chains['move'])
    hover.add_shape(make_rect('a', 0, 0, 100, 100))
    hover.add_shape(make_rect('b', 50, 50, 100, 100))

    assert chains['move'].handle_event(move(10, 10)) is True
    chains['move'].handle_event(move(75, 75))
    chains['move'].handle_event(move(76, 76))
    chains['move'].handle_event(move(500, 500))

    assert changes == [(None, 'a'), ('a', 'b'), ('b', None)]
    assert hover.hovered_key is None


def test_hover_follows_view_transform(engine, viewport, make_rect):
    hover = HoverTracker(engine, viewport)
    hover.add_shape(make_rect('a', 0, 0, 10, 10))
    assert hover.shape_at(5, 5).tracking_key == 'a'

    engine.change_offset(100, 100)
    assert hover.shape_at(5, 5) is None
    assert hover.shape_at(105, 105).tracking_key == 'a'


def test_hover_uses_stroke_margin(engine, viewport, make_rect):
    hover = HoverTracker(engine, viewport)
    hover.add_shape(make_rect('a', 0, 0, 10, 10))
    margin = engine.config.hit_test_margin
    assert hover.shape_at(10 + margin - 0.5, 5) is not None
    assert hover.shape_at(10 + margin + 0.5, 5) is None


def test_hover_shapes_feed_content_bounds(engine, viewport, make_rect):
    hover = HoverTracker(engine, viewport)
    hover.add_shape(make_rect('a', 0, 0, 10, 10))
    hover.add_shape(make_rect('b', 40, 20, 10, 10))
    assert engine.get_content_bounds().as_tuple() == (0, 0, 50, 30)

    hover.hovered_key = 'b'
    assert hover.remove_shape('b')
    assert hover.hovered_key is None
    assert engine.get_content_bounds().as_tuple() == (0, 0, 10, 10)
    assert not hover.remove_shape('b')
