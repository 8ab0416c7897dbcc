"""Content tracker - tracked shape keys and the bounding box of all content.

Bounds grow in O(1) as shapes are tracked. Shrinking is eager: when a
removed or moved entry touched a current extremum, the survivors are
rescanned immediately (O(n)). Queries never pay for a rescan.
"""

import logging
from typing import Dict, Optional

import numpy as np

from canvas_viewport.models.transform import Vec2
from canvas_viewport.models.tracked_shape import (
    TrackedPoint, TrackedRegion, ContentBounds, TrackableShape
)

logger = logging.getLogger(__name__)


class ContentTracker:
    """Mapping of shape key -> tracking point/region plus derived bounds."""

    def __init__(self):
        self._entries: Dict[str, object] = {}
        self._bounds: Optional[ContentBounds] = None
        self._rescan_count = 0

    # ========================================
    # Queries
    # ========================================

    @property
    def tracking_enabled(self) -> bool:
        """True once at least one shape is tracked."""
        return bool(self._entries)

    @property
    def rescan_count(self) -> int:
        """Number of full O(n) bounds rescans performed so far."""
        return self._rescan_count

    def get_content_bounds(self) -> Optional[ContentBounds]:
        """Bounds of all tracked content, or None when nothing is tracked."""
        return self._bounds

    def get_content_center(self) -> Optional[Vec2]:
        """Midpoint of the bounds, or None when nothing is tracked."""
        if self._bounds is None:
            return None
        return self._bounds.center

    def get_tracked(self, key):
        """TrackedPoint/TrackedRegion for key, or None if never tracked."""
        return self._entries.get(key)

    def keys(self):
        return list(self._entries.keys())

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    # ========================================
    # Mutations
    # ========================================

    def track_shape(self, key, x, y):
        """Upsert a single tracking point for key."""
        self._upsert(TrackedPoint(key, Vec2(float(x), float(y))))

    def track_shape_content(self, key, top_left, bottom_right):
        """Upsert a region for key. Corners may be given in any order."""
        self._upsert(TrackedRegion.from_corners(key, top_left, bottom_right))

    def track(self, shape: TrackableShape):
        """Track anything meeting the TrackableShape contract."""
        entry = shape.tracking_extent()
        if not isinstance(entry, (TrackedPoint, TrackedRegion)):
            raise TypeError(f"tracking_extent() must return TrackedPoint or TrackedRegion, got {type(entry).__name__}")
        if entry.key != shape.tracking_key:
            raise ValueError(f"Extent key {entry.key!r} does not match shape key {shape.tracking_key!r}")
        self._upsert(entry)

    def untrack_shape(self, key) -> bool:
        """Remove key. Unknown keys are a no-op.

        Returns:
            True if an entry was removed
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        if not self._entries:
            self._bounds = None
        elif self._touches_bounds(entry.extent):
            self._rescan()
        logger.debug("Untracked %s (%d remaining)", key, len(self._entries))
        return True

    def clear_tracked_shapes(self):
        self._entries.clear()
        self._bounds = None

    # ========================================
    # Internals
    # ========================================

    def _upsert(self, entry):
        previous = self._entries.get(entry.key)
        self._entries[entry.key] = entry

        if self._bounds is None:
            self._bounds = ContentBounds(*entry.extent)
            return

        if previous is not None and self._touches_bounds(previous.extent):
            # The old extent may have been the only one holding an extremum
            self._rescan()
        else:
            self._bounds = self._bounds.union(entry.extent)

    def _touches_bounds(self, extent):
        min_x, min_y, max_x, max_y = extent
        b = self._bounds
        return min_x <= b.min_x or min_y <= b.min_y or max_x >= b.max_x or max_y >= b.max_y

    def _rescan(self):
        self._rescan_count += 1
        extents = np.array([entry.extent for entry in self._entries.values()], dtype=float)
        mins = extents[:, :2].min(axis=0)
        maxs = extents[:, 2:].max(axis=0)
        self._bounds = ContentBounds(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))
