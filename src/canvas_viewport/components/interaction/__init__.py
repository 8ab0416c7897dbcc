"""
Canvas Viewport - Interaction Components

Application-level pointer logic built on the middleware chains:
- pointer.py: PointerEvent / PointerButtons and Qt adapters
- handlers.py: PanDragHandler, WheelZoomHandler, HoverTracker
"""

from .pointer import PointerEvent, PointerButtons, modifiers_from_qt, PRESS, MOVE, RELEASE, WHEEL
from .handlers import PanDragHandler, WheelZoomHandler, HoverTracker, resolve_viewport

__all__ = [
    'PointerEvent', 'PointerButtons', 'modifiers_from_qt',
    'PRESS', 'MOVE', 'RELEASE', 'WHEEL',
    'PanDragHandler', 'WheelZoomHandler', 'HoverTracker', 'resolve_viewport',
]
