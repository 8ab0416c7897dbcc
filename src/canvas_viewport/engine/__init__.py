"""Transform engine mixins package"""

from .zoom_pan_mixin import EngineZoomPanMixin
from .recenter_mixin import EngineRecenterMixin
from .snapshot_mixin import EngineSnapshotMixin
from .tracking_mixin import EngineTrackingMixin
from .coordinate_mixin import EngineCoordinateMixin
from .core import TransformEngine
from .registry import EngineRegistry, default_registry, get_engine

__all__ = [
    'TransformEngine',
    'EngineRegistry',
    'default_registry',
    'get_engine',
    'EngineZoomPanMixin',
    'EngineRecenterMixin',
    'EngineSnapshotMixin',
    'EngineTrackingMixin',
    'EngineCoordinateMixin',
]
