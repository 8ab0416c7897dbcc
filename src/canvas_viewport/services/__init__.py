"""Stateful services owned by a TransformEngine."""

from .content_tracker import ContentTracker
from .redraw_scheduler import RedrawScheduler, qt_frame_requester

__all__ = ['ContentTracker', 'RedrawScheduler', 'qt_frame_requester']
