"""
Shared fixtures for canvas viewport tests.

Provides a manual frame requester, viewports, engines and a simple
rectangle shape meeting the TrackableShape contract.
"""
import sys
import os
import pytest

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from canvas_viewport.models.transform import Viewport
from canvas_viewport.models.tracked_shape import TrackedRegion, TrackableShape


class ManualFrames:
    """Frame requester that collects callbacks until tick() is called."""

    def __init__(self):
        self.pending = []
        self.requests = 0

    def __call__(self, callback):
        self.requests += 1
        self.pending.append(callback)

    def tick(self):
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback()


class RectShape(TrackableShape):
    """Axis-aligned rectangle in content space."""

    def __init__(self, key, x, y, width, height):
        self._key = key
        self.x, self.y, self.width, self.height = x, y, width, height

    @property
    def tracking_key(self):
        return self._key

    def tracking_extent(self):
        return TrackedRegion.from_corners(self._key, (self.x, self.y),
                                          (self.x + self.width, self.y + self.height))

    def hit_test(self, x, y, hit_test=False, margin=None):
        pad = (margin or 0.0) if hit_test else 0.0
        return (self.x - pad <= x <= self.x + self.width + pad and
                self.y - pad <= y <= self.y + self.height + pad)


@pytest.fixture
def frames():
    return ManualFrames()


@pytest.fixture
def viewport():
    """800x600 viewport at device pixel ratio 1"""
    return Viewport(800, 600, 1.0)


@pytest.fixture
def hidpi_viewport():
    """400x300 logical viewport at device pixel ratio 2"""
    return Viewport(400, 300, 2.0)


@pytest.fixture
def engine(frames):
    """Fresh engine driven by the manual frame requester"""
    from canvas_viewport.engine import TransformEngine
    return TransformEngine(frame_requester=frames)


@pytest.fixture
def make_rect():
    return RectShape
