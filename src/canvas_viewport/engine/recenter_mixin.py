"""Mixin for recentering and scale-to-fit on the TransformEngine."""

from numbers import Number

from canvas_viewport.models.transform import Vec2, as_viewport


def _padding_pair(padding):
    """Accept a uniform number or an (x, y) pair of non-negative pixels."""
    if isinstance(padding, Number):
        pad_x = pad_y = padding
    else:
        pad_x, pad_y = padding
    if pad_x < 0 or pad_y < 0:
        raise ValueError(f"padding must be >= 0, got {padding!r}")
    return float(pad_x), float(pad_y)


class EngineRecenterMixin:
    """Mixin providing recenter operations.

    Requires from the engine:
    - self._state, self._config, self._tracker, self._logger
    - self._commit(scale, offset, reason)
    """

    def recenter(self, viewport, x=None, y=None):
        """Move content point (x, y) to the viewport's geometric center.

        Without a point, the content point currently at the center is
        used, which leaves the view unchanged.

        Returns:
            True if the view changed
        """
        viewport = as_viewport(viewport)
        if viewport is None:
            self._logger.debug("recenter skipped: no rendering context")
            return False
        scale = self._state.scale
        target = self._content_at_center(viewport, x, y)
        return self._commit(scale, self._centered_offset(viewport, target, scale), "recenter")

    def recenter_on_content(self, viewport, scale_to_fit=False, padding=None):
        """Center the view on tracked content, optionally scaling it to fit.

        Falls back to recenter(viewport) when nothing is tracked.

        Args:
            viewport: Rendering context
            scale_to_fit: Also choose the scale so content plus padding fills the viewport
            padding: Physical pixels per side, a number or an (x, y) pair;
                defaults to config.fit_padding

        Returns:
            True if the view changed
        """
        if scale_to_fit:
            pad_x, pad_y = _padding_pair(self._config.fit_padding if padding is None else padding)
        if not self._tracker.tracking_enabled:
            return self.recenter(viewport)

        viewport = as_viewport(viewport)
        if viewport is None:
            self._logger.debug("recenter_on_content skipped: no rendering context")
            return False

        bounds = self._tracker.get_content_bounds()
        scale = self._state.scale
        if scale_to_fit:
            scale = self._fit_scale(bounds, viewport, pad_x, pad_y)

        # Offset is computed once, for the final scale
        offset = self._centered_offset(viewport, bounds.center, scale)
        return self._commit(scale, offset, "recenter_on_content")

    def _fit_scale(self, bounds, viewport, pad_x, pad_y):
        candidates = []
        span_x = bounds.width + 2 * pad_x
        span_y = bounds.height + 2 * pad_y
        if span_x > 0:
            candidates.append(viewport.pixel_width / span_x)
        if span_y > 0:
            candidates.append(viewport.pixel_height / span_y)
        if not candidates:
            # A single point with no padding has nothing to fit
            return self._state.scale
        return self._config.clamp_scale(min(candidates))

    def _content_at_center(self, viewport, x, y):
        center = viewport.center
        offset = self._state.offset
        scale = self._state.scale
        return Vec2(
            x if x is not None else (center.x - offset.x) / scale,
            y if y is not None else (center.y - offset.y) / scale,
        )

    @staticmethod
    def _centered_offset(viewport, content_point, scale):
        center = viewport.center
        return (center.x - content_point.x * scale, center.y - content_point.y * scale)
