"""Interaction handlers - hover, drag-to-pan and wheel zoom as middleware.

Each handler is a consumer of the shared middleware chains: install()
adds its callbacks and returns a callable that removes them again when
the consumer goes away. Callbacks follow the chain contract: return
False to stop the event, True to let it through.

Handlers read viewport metrics from a viewport source, which may be a
Viewport, a Qt widget, or a zero-argument callable returning either.
"""

import logging
import math

from canvas_viewport.constants import WHEEL_SCALE_DELTA, WHEEL_NOTCH_ANGLE, DRAG_THRESHOLD
from canvas_viewport.models.transform import as_viewport
from canvas_viewport.utils.coordinate_transforms import to_content_space
from .pointer import PRESS, MOVE, RELEASE, WHEEL

logger = logging.getLogger(__name__)


def resolve_viewport(source):
    """Viewport from a Viewport, widget or callable source (None if unavailable)."""
    if callable(source):
        source = source()
    return as_viewport(source)


def _install(pairs):
    removers = [chain.add_handler(handler) for chain, handler in pairs if chain is not None]

    def uninstall():
        for remove in removers:
            remove()
    return uninstall


class PanDragHandler:
    """Drag with a pointer button to pan the view.

    Pointer motion is applied 1:1, so content follows the pointer
    (positive motion -> positive change_offset delta).
    """

    def __init__(self, engine, viewport_source, button='left', required_modifiers=(),
                 drag_threshold=DRAG_THRESHOLD):
        """
        Args:
            engine: TransformEngine to pan
            viewport_source: Viewport, widget or callable
            button: Button that starts a drag
            required_modifiers: Modifier names that must be held to start a drag
            drag_threshold: Device pixels before a press counts as a drag
        """
        self.engine = engine
        self.viewport_source = viewport_source
        self.button = button
        self.required_modifiers = frozenset(required_modifiers)
        self.drag_threshold = drag_threshold
        self._press_pos = None
        self._last_pos = None
        self._dragging = False

    @property
    def is_panning(self):
        return self._dragging

    @property
    def is_armed(self):
        """True between a qualifying press and its release."""
        return self._press_pos is not None

    def install(self, press_chain, move_chain, release_chain):
        """Register on the pointer chains. Returns an uninstall callable."""
        return _install([
            (press_chain, self.on_press),
            (move_chain, self.on_move),
            (release_chain, self.on_release),
        ])

    def on_press(self, event):
        if event.kind != PRESS or event.button != self.button:
            return True
        if not self.required_modifiers <= event.modifiers:
            return True
        self._press_pos = (event.x, event.y)
        self._last_pos = (event.x, event.y)
        self._dragging = False
        # Clicks still reach selection handlers until the pointer moves
        return True

    def on_move(self, event):
        if event.kind != MOVE or self._press_pos is None:
            return True

        if not self._dragging:
            moved = math.hypot(event.x - self._press_pos[0], event.y - self._press_pos[1])
            if moved < self.drag_threshold:
                return True
            self._dragging = True
            logger.debug("Pan drag started at (%s, %s)", *self._press_pos)

        viewport = resolve_viewport(self.viewport_source)
        if viewport is not None:
            ratio = viewport.device_pixel_ratio
            dx = (event.x - self._last_pos[0]) * ratio
            dy = (event.y - self._last_pos[1]) * ratio
            self.engine.change_offset(dx, dy)
        self._last_pos = (event.x, event.y)
        return False

    def on_release(self, event):
        if event.kind != RELEASE or event.button != self.button or self._press_pos is None:
            return True
        was_dragging = self._dragging
        self._press_pos = None
        self._last_pos = None
        self._dragging = False
        # A completed drag must not also count as a click
        return not was_dragging


class WheelZoomHandler:
    """Zoom with the wheel, anchored at the pointer."""

    def __init__(self, engine, viewport_source, required_modifiers=('ctrl',),
                 scale_per_notch=WHEEL_SCALE_DELTA):
        self.engine = engine
        self.viewport_source = viewport_source
        self.required_modifiers = frozenset(required_modifiers)
        self.scale_per_notch = scale_per_notch

    def install(self, wheel_chain):
        return _install([(wheel_chain, self.on_wheel)])

    def on_wheel(self, event):
        if event.kind != WHEEL or not event.wheel_delta:
            return True
        if not self.required_modifiers <= event.modifiers:
            return True
        delta = event.wheel_delta / WHEEL_NOTCH_ANGLE * self.scale_per_notch
        self.engine.change_scale(delta, resolve_viewport(self.viewport_source), event.x, event.y)
        return False


class HoverTracker:
    """Track which shape is under the pointer.

    Shapes meet the TrackableShape contract. Adding a shape also tracks it
    in the engine so content bounds include it. The topmost shape (last
    added) wins when several are hit.
    """

    def __init__(self, engine, viewport_source, on_hover_changed=None):
        """
        Args:
            engine: TransformEngine providing the current transform
            viewport_source: Viewport, widget or callable
            on_hover_changed: Called with (old_key, new_key) when the hovered shape changes
        """
        self.engine = engine
        self.viewport_source = viewport_source
        self.on_hover_changed = on_hover_changed
        self._shapes = {}
        self.hovered_key = None

    def install(self, move_chain):
        return _install([(move_chain, self.on_move)])

    def add_shape(self, shape):
        key = shape.tracking_key
        # Re-adding moves the shape to the top
        self._shapes.pop(key, None)
        self._shapes[key] = shape
        self.engine.track(shape)

    def remove_shape(self, key):
        if self._shapes.pop(key, None) is None:
            return False
        self.engine.untrack_shape(key)
        if self.hovered_key == key:
            self._set_hovered(None)
        return True

    def shape_at(self, x, y):
        """Topmost shape under device position (x, y), or None."""
        viewport = resolve_viewport(self.viewport_source)
        if viewport is None:
            return None
        state = self.engine.state
        point = to_content_space(x, y, state, viewport.device_pixel_ratio, hit_test=True)
        # Margin is given in device pixels; convert to content units
        margin = self.engine.config.hit_test_margin * viewport.device_pixel_ratio / state.scale
        for shape in reversed(list(self._shapes.values())):
            if shape.hit_test(point.x, point.y, point.hit_test, margin):
                return shape
        return None

    def on_move(self, event):
        if event.kind != MOVE:
            return True
        shape = self.shape_at(event.x, event.y)
        self._set_hovered(shape.tracking_key if shape is not None else None)
        return True

    def _set_hovered(self, key):
        if key == self.hovered_key:
            return
        old_key, self.hovered_key = self.hovered_key, key
        if self.on_hover_changed is not None:
            self.on_hover_changed(old_key, key)
