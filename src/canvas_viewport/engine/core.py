"""
Canvas Viewport - Transform Engine

Owns the view state of one drawing surface. This class handles:
- TransformState (scale + offset) with the scale > 0 invariant
- ContentTracker (tracked shapes and their bounds)
- RedrawScheduler (coalesced paint requests per layer)
- Subscriber notification on every committed change

The engine is INDEPENDENT of painting:
- No drawing
- Reads only width/height/device pixel ratio from the rendering context
- All state changes go through the public methods below and the mixins

Every mutating call is one atomic step:
    validate -> compute new state -> store -> notify subscribers -> request redraw

Usage:
    engine = TransformEngine()
    unsubscribe = engine.subscribe(on_view_changed)

    engine.change_scale(0.5, viewport, x=120, y=80)   # zoom at the cursor
    engine.change_offset(-40, 0)                       # pan
    engine.track_shape('rect-1', 10, 10)
    engine.recenter_on_content(viewport, scale_to_fit=True)

    snapshot = engine.get_snapshot()
    engine.load_from_snapshot(snapshot)
"""

import logging
from typing import Callable, List

from canvas_viewport.constants import DEFAULT_SCALE, DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y, LAYER_MAIN
from canvas_viewport.models.transform import TransformState, Vec2
from canvas_viewport.services.content_tracker import ContentTracker
from canvas_viewport.services.redraw_scheduler import RedrawScheduler
from canvas_viewport.utils.config import EngineConfig
from canvas_viewport.utils.logger import loggerRaise
from .zoom_pan_mixin import EngineZoomPanMixin
from .recenter_mixin import EngineRecenterMixin
from .snapshot_mixin import EngineSnapshotMixin
from .tracking_mixin import EngineTrackingMixin
from .coordinate_mixin import EngineCoordinateMixin


class TransformEngine(EngineZoomPanMixin, EngineRecenterMixin, EngineSnapshotMixin,
                      EngineTrackingMixin, EngineCoordinateMixin):
    """View transform and content tracking for one drawing surface.

    Properties:
        scale: Current scale (read-only, change through operations)
        offset: Current offset Vec2 in physical pixels (read-only)
        config: EngineConfig with scale limits and defaults
        tracking_enabled: True while any shape is tracked
    """

    def __init__(self, config: EngineConfig = None, frame_requester=None):
        """
        Args:
            config: Limits and defaults; EngineConfig() when omitted
            frame_requester: Passed to the RedrawScheduler (QTimer when omitted)
        """
        self._logger = logging.getLogger('TransformEngine')
        self._config = config if config is not None else EngineConfig()
        self._state = TransformState()
        self._tracker = ContentTracker()
        self._scheduler = RedrawScheduler(frame_requester, self._config.frame_interval_ms)
        self._listeners: List['_Subscription'] = []
        self._snapshot = None
        self._reset_generation = 0

    # ========================================
    # State access
    # ========================================

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def scale(self) -> float:
        return self._state.scale

    @property
    def offset(self) -> Vec2:
        return self._state.offset

    @property
    def state(self) -> TransformState:
        """Copy of the current state (mutating it does not affect the engine)."""
        return self._state.copy()

    # ========================================
    # Subscribers
    # ========================================

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a zero-argument listener called after every committed change.

        The same callable may be subscribed more than once; each
        registration gets its own unsubscribe.

        Returns:
            unsubscribe callable; removes exactly this registration and is
            safe to call more than once
        """
        if not callable(listener):
            raise TypeError("listener must be callable")
        subscription = _Subscription(listener)
        self._listeners.append(subscription)

        def unsubscribe():
            # Identity check: two registrations of one callable are distinct
            for i, existing in enumerate(self._listeners):
                if existing is subscription:
                    del self._listeners[i]
                    return
        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ========================================
    # Redraw
    # ========================================

    def register_painter(self, layer, callback):
        """Register a paint callback for 'main', 'top' or 'internal'.

        Returns:
            unregister callable
        """
        return self._scheduler.register_painter(layer, callback)

    def request_redraw(self, layer=LAYER_MAIN):
        self._scheduler.request_redraw(layer)

    def is_redraw_pending(self, layer=LAYER_MAIN) -> bool:
        return self._scheduler.is_pending(layer)

    def flush_redraws(self):
        """Fire pending paint callbacks now."""
        self._scheduler.flush()

    # ========================================
    # Lifecycle
    # ========================================

    def reset(self):
        """Reinitialize state, tracked shapes, listeners and painters.

        Equivalent to building a new engine with the same config, without
        changing identity.
        """
        self._reset_generation += 1
        self._state = TransformState(DEFAULT_SCALE, Vec2(DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y))
        self._snapshot = None
        self._tracker.clear_tracked_shapes()
        self._listeners.clear()
        self._scheduler.clear()
        self._logger.debug("Engine reset")

    # ========================================
    # Internals
    # ========================================

    def _commit(self, scale, offset, reason, layer=LAYER_MAIN):
        """Store a new state, notify and request a redraw.

        Args:
            scale: New scale (validated here, before anything is stored)
            offset: New offset as Vec2 or (x, y)

        Returns:
            True if the state changed, False if it was already equal
        """
        offset_x, offset_y = offset
        new_state = TransformState(scale, Vec2(float(offset_x), float(offset_y)))
        if new_state == self._state:
            return False
        self._state = new_state
        self._snapshot = None
        self._logger.debug("%s: scale=%.6g offset=(%.6g, %.6g)",
                           reason, new_state.scale, new_state.offset.x, new_state.offset.y)
        if self._notify():
            self._scheduler.request_redraw(layer)
        return True

    def _notify(self):
        """Call listeners in order.

        Returns:
            False if a listener reset the engine, which ends the notification
        """
        generation = self._reset_generation
        for subscription in list(self._listeners):
            if generation != self._reset_generation:
                return False
            try:
                subscription.listener()
            except Exception as e:
                loggerRaise(e, "View state listener failed")
        return generation == self._reset_generation


class _Subscription:
    __slots__ = ('listener',)

    def __init__(self, listener):
        self.listener = listener
