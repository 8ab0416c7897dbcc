"""Tracked shape records and the shape capability contract.

The tracker never sees concrete shape classes. Anything drawable supplies:
- a tracking key (opaque string)
- a tracking extent (TrackedPoint or TrackedRegion)
- hit test geometry

TrackedPoint and TrackedRegion are tagged variants: check `kind` or use
isinstance, never subclass them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from .transform import Vec2


POINT = 'point'
REGION = 'region'


@dataclass(frozen=True)
class TrackedPoint:
    """Single representative coordinate (often a shape's center)."""
    key: str
    point: Vec2
    kind: str = POINT

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y)"""
        return (self.point.x, self.point.y, self.point.x, self.point.y)


@dataclass(frozen=True)
class TrackedRegion:
    """Axis-aligned region given by two corners.

    Corners are normalized on construction through `from_corners`, so
    top_left always holds the minimum of each axis.
    """
    key: str
    top_left: Vec2
    bottom_right: Vec2
    kind: str = REGION

    @classmethod
    def from_corners(cls, key, corner_a, corner_b):
        ax, ay = corner_a
        bx, by = corner_b
        return cls(key, Vec2(min(ax, bx), min(ay, by)), Vec2(max(ax, bx), max(ay, by)))

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        return (self.top_left.x, self.top_left.y, self.bottom_right.x, self.bottom_right.y)


@dataclass(frozen=True)
class ContentBounds:
    """Axis-aligned bounding box of all tracked content (content space)."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y

    @property
    def center(self) -> Vec2:
        return Vec2((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def contains(self, x, y):
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def union(self, extent):
        """Return bounds expanded to include a (min_x, min_y, max_x, max_y) extent."""
        min_x, min_y, max_x, max_y = extent
        return ContentBounds(
            min(self.min_x, min_x), min(self.min_y, min_y),
            max(self.max_x, max_x), max(self.max_y, max_y),
        )

    def as_tuple(self):
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def to_dict(self):
        return {'min_x': self.min_x, 'min_y': self.min_y, 'max_x': self.max_x, 'max_y': self.max_y}


class TrackableShape(ABC):
    """Capability contract for shapes registered with a ContentTracker.

    Implementations are free to represent geometry however they like; the
    tracker only reads the extent and hover logic only calls hit_test.
    """

    @property
    @abstractmethod
    def tracking_key(self) -> str:
        """Opaque unique key for this shape."""
        pass

    @abstractmethod
    def tracking_extent(self):
        """Return the TrackedPoint or TrackedRegion describing this shape."""
        pass

    @abstractmethod
    def hit_test(self, x: float, y: float, hit_test: bool = False, margin: Optional[float] = None) -> bool:
        """Test a content-space point against this shape.

        Args:
            x, y: Content space coordinates
            hit_test: True for stroke containment (widen by margin),
                False for exact fill geometry
            margin: Stroke margin in content units when hit_test is True

        Returns:
            bool: True if the point hits the shape
        """
        pass
