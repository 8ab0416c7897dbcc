"""Transform data structures for coordinate and state representation."""
import json
import math
from dataclasses import dataclass

from canvas_viewport.constants import DEFAULT_SCALE, DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Device pixels (pointer positions, pre device-pixel-ratio)
    - Physical pixels (offsets, viewport centers)
    - Content space positions
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


def _check_scale(scale):
    if not isinstance(scale, (int, float)) or isinstance(scale, bool):
        raise TypeError(f"scale must be a number, got {type(scale).__name__}")
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"scale must be a positive finite number, got {scale!r}")
    return float(scale)


@dataclass(frozen=True)
class Snapshot:
    """Immutable point-in-time capture of scale and offset.

    The only externally persistable representation of a TransformState.
    Serialized form: {"scale": float, "offset": {"x": float, "y": float}}
    """
    scale: float
    offset: Vec2

    def __post_init__(self):
        _check_scale(self.scale)
        x, y = self.offset
        object.__setattr__(self, 'offset', Vec2(float(x), float(y)))

    def to_dict(self):
        return {
            'scale': float(self.scale),
            'offset': {'x': float(self.offset.x), 'y': float(self.offset.y)},
        }

    @classmethod
    def from_dict(cls, data):
        """Create a snapshot from its dict form.

        Raises:
            ValueError: If keys are missing or scale is not positive
        """
        try:
            offset = data['offset']
            return cls(float(data['scale']), Vec2(float(offset['x']), float(offset['y'])))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid snapshot data: {data!r}") from e

    def to_json(self):
        # repr-based float output keeps the round trip lossless
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text):
        return cls.from_dict(json.loads(text))


class TransformState:
    """Scale and offset of a view.

    scale: positive float, 1.0 = 100% (device pixel density already applied)
    offset: Vec2 content-to-device translation in physical pixels

    Invariant: scale > 0 at all times. Assigning a non-positive scale raises.
    """

    __slots__ = ('_scale', '_offset')

    def __init__(self, scale=DEFAULT_SCALE, offset=None):
        self._scale = _check_scale(scale)
        self._offset = offset if offset is not None else Vec2(DEFAULT_OFFSET_X, DEFAULT_OFFSET_Y)

    @property
    def scale(self):
        return self._scale

    @scale.setter
    def scale(self, value):
        self._scale = _check_scale(value)

    @property
    def offset(self):
        return self._offset

    @offset.setter
    def offset(self, value):
        x, y = value
        self._offset = Vec2(float(x), float(y))

    def copy(self):
        return TransformState(self._scale, self._offset)

    def to_snapshot(self):
        return Snapshot(self._scale, self._offset)

    @classmethod
    def from_snapshot(cls, snapshot):
        return cls(snapshot.scale, snapshot.offset)

    def __eq__(self, other):
        if not isinstance(other, TransformState):
            return NotImplemented
        return self._scale == other._scale and self._offset == other._offset

    def __repr__(self):
        return f"TransformState(scale={self._scale!r}, offset=({self._offset.x!r}, {self._offset.y!r}))"


@dataclass(frozen=True)
class Viewport:
    """Viewport metrics read from the drawing surface.

    width/height are in device (logical) pixels; physical dimensions are
    width * device_pixel_ratio. Offsets and viewport centers used by the
    engine are in physical pixels.
    """
    width: float
    height: float
    device_pixel_ratio: float = 1.0

    @property
    def is_available(self):
        return self.width > 0 and self.height > 0 and self.device_pixel_ratio > 0

    @property
    def pixel_width(self):
        return self.width * self.device_pixel_ratio

    @property
    def pixel_height(self):
        return self.height * self.device_pixel_ratio

    @property
    def center(self):
        """Geometric center in physical pixels."""
        return Vec2(self.pixel_width / 2.0, self.pixel_height / 2.0)

    @classmethod
    def from_widget(cls, widget):
        """Read metrics from a Qt widget (or anything with the same accessors).

        Returns None when no widget is given.
        """
        if widget is None:
            return None
        if hasattr(widget, 'devicePixelRatioF'):
            ratio = widget.devicePixelRatioF()
        elif hasattr(widget, 'devicePixelRatio'):
            ratio = widget.devicePixelRatio()
        else:
            ratio = 1.0
        return cls(float(widget.width()), float(widget.height()), float(ratio))


def as_viewport(context):
    """Coerce a rendering context into a usable Viewport.

    Args:
        context: Viewport, Qt widget, or None

    Returns:
        Viewport, or None if the context is missing or has no usable area
    """
    if context is None:
        return None
    viewport = context if isinstance(context, Viewport) else Viewport.from_widget(context)
    if not viewport.is_available:
        return None
    return viewport
