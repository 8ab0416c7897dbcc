"""Mixin for zoom and pan on the TransformEngine.

Provides viewport navigation including:
- Additive scale change with zoom-to-anchor
- Discrete zoom in/out/reset and zoom percentage
- Pan by an offset delta

Anchor math: the physical point A under the anchor stays fixed when the
scale changes from s to s':
    offset' = A - (A - offset) * (s' / s)
"""

import math

from canvas_viewport.models.transform import Vec2, as_viewport


class EngineZoomPanMixin:
    """Mixin providing zoom and pan operations.

    Requires from the engine:
    - self._state, self._config, self._logger
    - self._commit(scale, offset, reason)
    """

    def change_scale(self, delta, viewport, x=None, y=None):
        """Add delta to the scale, keeping the anchor visually fixed.

        Args:
            delta: Scale delta (result clamped to [min_scale, max_scale])
            viewport: Rendering context (Viewport or widget)
            x, y: Anchor in device pixels, defaults to the viewport center

        Returns:
            True if the view changed; False for a no-op (no viewport, or
            already at the clamped scale)
        """
        if not math.isfinite(delta):
            raise ValueError(f"Scale delta must be finite, got {delta!r}")
        return self._zoom_to(self._state.scale + delta, viewport, x, y, "change_scale")

    def zoom_in(self, viewport, x=None, y=None):
        """Zoom in by one zoom step (25% by default)."""
        return self._zoom_to(self._state.scale * self._config.zoom_step, viewport, x, y, "zoom_in")

    def zoom_out(self, viewport, x=None, y=None):
        """Zoom out by one zoom step."""
        return self._zoom_to(self._state.scale / self._config.zoom_step, viewport, x, y, "zoom_out")

    def set_zoom_percent(self, zoom_percent, viewport, x=None, y=None):
        """Set zoom to a specific percentage, anchored like change_scale."""
        return self._zoom_to(zoom_percent / 100.0, viewport, x, y, "set_zoom_percent")

    def get_zoom_percent(self):
        """Get current zoom percentage."""
        return int(round(self._state.scale * 100))

    def zoom_reset(self):
        """Reset zoom to 100% and offset to the origin."""
        return self._commit(1.0, (0.0, 0.0), "zoom_reset")

    def change_offset(self, dx, dy):
        """Pan by (dx, dy) physical pixels.

        Positive dx moves content right on screen, positive dy moves it
        down; the visible window moves the opposite way.
        """
        if not (math.isfinite(dx) and math.isfinite(dy)):
            raise ValueError(f"Offset delta must be finite, got ({dx!r}, {dy!r})")
        offset = self._state.offset
        return self._commit(self._state.scale, (offset.x + dx, offset.y + dy), "change_offset")

    def _zoom_to(self, target_scale, viewport, x, y, reason):
        viewport = as_viewport(viewport)
        if viewport is None:
            self._logger.debug("%s skipped: no rendering context", reason)
            return False

        old_scale = self._state.scale
        new_scale = self._config.clamp_scale(target_scale)
        if new_scale == old_scale:
            return False
        anchor = self._anchor(viewport, x, y)
        offset = self._state.offset
        ratio = new_scale / old_scale
        new_offset = (
            anchor.x - (anchor.x - offset.x) * ratio,
            anchor.y - (anchor.y - offset.y) * ratio,
        )
        return self._commit(new_scale, new_offset, reason)

    @staticmethod
    def _anchor(viewport, x, y):
        """Anchor in physical pixels; missing coordinates use the viewport center."""
        center = viewport.center
        ratio = viewport.device_pixel_ratio
        return Vec2(
            x * ratio if x is not None else center.x,
            y * ratio if y is not None else center.y,
        )
