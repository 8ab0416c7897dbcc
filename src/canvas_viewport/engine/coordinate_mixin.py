"""Coordinate mixin: mapper helpers bound to the engine's current state."""

from canvas_viewport.models.transform import as_viewport
from canvas_viewport.utils import coordinate_transforms


class EngineCoordinateMixin:
    """Mixin providing coordinate conversion with the current state.

    Requires from the engine:
    - self._state
    """

    def to_content_space(self, viewport, x, y, hit_test=False):
        """Map a device pixel position to content space.

        Returns:
            ContentPoint, or None without a rendering context
        """
        viewport = as_viewport(viewport)
        if viewport is None:
            return None
        return coordinate_transforms.to_content_space(
            x, y, self._state, viewport.device_pixel_ratio, hit_test)

    def to_device_space(self, viewport, x, y):
        """Map a content point to device pixels, or None without a rendering context."""
        viewport = as_viewport(viewport)
        if viewport is None:
            return None
        return coordinate_transforms.to_device_space(x, y, self._state, viewport.device_pixel_ratio)

    def get_visible_content_rect(self, viewport):
        """(min_x, min_y, max_x, max_y) of content inside the viewport, or None."""
        viewport = as_viewport(viewport)
        if viewport is None:
            return None
        return coordinate_transforms.visible_content_rect(self._state, viewport)

    def points_in_view(self, viewport, content_points, margin=0.0):
        """Boolean mask of content points inside the viewport, or None."""
        viewport = as_viewport(viewport)
        if viewport is None:
            return None
        return coordinate_transforms.points_in_view(content_points, self._state, viewport, margin)
