"""Pointer event data passed through the interaction middleware chains.

Unified pointer state to replace raw Qt bitmask checks:
- PointerButtons is an explicit flag struct
- modifiers is a set of names {'ctrl', 'alt', 'shift', 'meta'}

Qt events are converted once, at the adapter boundary.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

PRESS = 'press'
MOVE = 'move'
RELEASE = 'release'
WHEEL = 'wheel'


@dataclass(frozen=True)
class PointerButtons:
    """Which pointer buttons are held."""
    left: bool = False
    middle: bool = False
    right: bool = False

    def __contains__(self, name):
        return bool(getattr(self, name, False))

    @property
    def any(self):
        return self.left or self.middle or self.right

    @classmethod
    def from_names(cls, *names):
        unknown = set(names) - {'left', 'middle', 'right'}
        if unknown:
            raise ValueError(f"Unknown pointer buttons: {sorted(unknown)}")
        return cls(**{name: True for name in names})

    @classmethod
    def from_qt(cls, buttons):
        """Convert a Qt.MouseButtons value."""
        from PyQt5.QtCore import Qt
        return cls(
            left=bool(buttons & Qt.LeftButton),
            middle=bool(buttons & Qt.MiddleButton),
            right=bool(buttons & Qt.RightButton),
        )


@dataclass(frozen=True)
class PointerEvent:
    """Pointer input in device pixels.

    kind: 'press', 'move', 'release' or 'wheel'
    button: Button that changed state for press/release ('left', 'middle', 'right')
    wheel_delta: Vertical wheel rotation in Qt angle units (120 per notch)
    """
    kind: str
    x: float
    y: float
    buttons: PointerButtons = field(default_factory=PointerButtons)
    button: Optional[str] = None
    modifiers: FrozenSet[str] = frozenset()
    wheel_delta: float = 0.0

    @classmethod
    def from_qt_mouse_event(cls, event):
        """Convert a QMouseEvent (press, move or release)."""
        from PyQt5.QtCore import QEvent
        kinds = {
            QEvent.MouseButtonPress: PRESS,
            QEvent.MouseButtonDblClick: PRESS,
            QEvent.MouseMove: MOVE,
            QEvent.MouseButtonRelease: RELEASE,
        }
        pos = event.localPos()
        return cls(
            kind=kinds.get(event.type(), MOVE),
            x=pos.x(),
            y=pos.y(),
            buttons=PointerButtons.from_qt(event.buttons()),
            button=_button_name(event.button()),
            modifiers=modifiers_from_qt(event.modifiers()),
        )

    @classmethod
    def from_qt_wheel_event(cls, event):
        """Convert a QWheelEvent."""
        pos = event.position() if hasattr(event, 'position') else event.posF()
        return cls(
            kind=WHEEL,
            x=pos.x(),
            y=pos.y(),
            buttons=PointerButtons.from_qt(event.buttons()),
            modifiers=modifiers_from_qt(event.modifiers()),
            wheel_delta=float(event.angleDelta().y()),
        )


def modifiers_from_qt(modifiers):
    """Convert Qt.KeyboardModifiers to a frozenset of names."""
    from PyQt5.QtCore import Qt
    names = {
        'ctrl': Qt.ControlModifier,
        'alt': Qt.AltModifier,
        'shift': Qt.ShiftModifier,
        'meta': Qt.MetaModifier,
    }
    return frozenset(name for name, flag in names.items() if modifiers & flag)


def _button_name(button):
    from PyQt5.QtCore import Qt
    return {
        Qt.LeftButton: 'left',
        Qt.MiddleButton: 'middle',
        Qt.RightButton: 'right',
    }.get(button)
