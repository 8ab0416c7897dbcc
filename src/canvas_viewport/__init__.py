"""
Canvas Viewport

2D viewport transform and shape tracking for an interactive drawing
surface, plus ordered short-circuiting event middleware.

Public API:
    TransformEngine, EngineRegistry, get_engine
    EventMiddlewareChain, MiddlewareEventFilter
    Vec2, TransformState, Snapshot, Viewport, ContentBounds, TrackableShape
    to_content_space, to_device_space, EngineConfig
"""

from .models import (
    Vec2, TransformState, Snapshot, Viewport,
    TrackedPoint, TrackedRegion, ContentBounds, TrackableShape,
)
from .services import ContentTracker, RedrawScheduler
from .engine import TransformEngine, EngineRegistry, get_engine
from .components import EventMiddlewareChain, MiddlewareEventFilter
from .utils import (
    ContentPoint, to_content_space, to_device_space, EngineConfig, load_config, save_config,
)

__version__ = '1.0.0'

__all__ = [
    'Vec2', 'TransformState', 'Snapshot', 'Viewport',
    'TrackedPoint', 'TrackedRegion', 'ContentBounds', 'TrackableShape',
    'ContentTracker', 'RedrawScheduler',
    'TransformEngine', 'EngineRegistry', 'get_engine',
    'EventMiddlewareChain', 'MiddlewareEventFilter',
    'ContentPoint', 'to_content_space', 'to_device_space',
    'EngineConfig', 'load_config', 'save_config',
]
