"""
Canvas Viewport - Data Models

Plain data for view state and tracked content:
- Vec2, TransformState, Snapshot, Viewport
- TrackedPoint, TrackedRegion, ContentBounds
- TrackableShape capability contract
"""

from .transform import Vec2, TransformState, Snapshot, Viewport, as_viewport
from .tracked_shape import (
    TrackedPoint, TrackedRegion, ContentBounds, TrackableShape, POINT, REGION
)

__all__ = [
    'Vec2', 'TransformState', 'Snapshot', 'Viewport', 'as_viewport',
    'TrackedPoint', 'TrackedRegion', 'ContentBounds', 'TrackableShape',
    'POINT', 'REGION',
]
