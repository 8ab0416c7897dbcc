"""Tracking mixin: the engine's front for its ContentTracker.

Tracking a shape only requests an 'internal' redraw (scrollbars depend on
content bounds). Shapes usually re-track themselves while painting, so
tracking does not notify subscribers. Removing content does notify, since
content-aware consumers have to refresh.
"""

from canvas_viewport.constants import LAYER_INTERNAL


class EngineTrackingMixin:
    """Mixin providing shape tracking.

    Requires from the engine:
    - self._tracker, self._scheduler, self._logger
    - self._notify() -> False if a listener reset the engine
    """

    @property
    def tracking_enabled(self) -> bool:
        return self._tracker.tracking_enabled

    def track_shape(self, key, x, y):
        """Upsert a tracking point for key (content space)."""
        self._tracker.track_shape(key, x, y)
        self._scheduler.request_redraw(LAYER_INTERNAL)

    def track_shape_content(self, key, top_left, bottom_right):
        """Upsert a tracked region for key (content space corners)."""
        self._tracker.track_shape_content(key, top_left, bottom_right)
        self._scheduler.request_redraw(LAYER_INTERNAL)

    def track(self, shape):
        """Track a TrackableShape."""
        self._tracker.track(shape)
        self._scheduler.request_redraw(LAYER_INTERNAL)

    def untrack_shape(self, key):
        """Stop tracking key. Unknown keys are a no-op.

        Returns:
            True if something was removed
        """
        if not self._tracker.untrack_shape(key):
            return False
        if self._notify():
            self._scheduler.request_redraw(LAYER_INTERNAL)
        return True

    def clear_tracked_shapes(self):
        """Forget all tracked shapes and notify subscribers."""
        count = len(self._tracker)
        self._tracker.clear_tracked_shapes()
        self._logger.debug("Cleared %d tracked shapes", count)
        if self._notify():
            self._scheduler.request_redraw(LAYER_INTERNAL)

    def get_content_bounds(self):
        """ContentBounds of tracked content, or None."""
        return self._tracker.get_content_bounds()

    def get_content_center(self):
        """Vec2 center of tracked content, or None when not tracking."""
        return self._tracker.get_content_center()

    def get_tracked(self, key):
        return self._tracker.get_tracked(key)

    def is_tracked(self, key) -> bool:
        return key in self._tracker

    def tracked_keys(self):
        return self._tracker.keys()
