"""Redraw scheduler - at most one paint per layer per animation frame.

Each layer has an in-flight flag. The first request in a frame sets the
flag and asks the frame requester for a callback; further requests for a
flagged layer are dropped. The flag is cleared only when the frame
callback fires, right before the layer's painters run.

The default frame requester is QTimer.singleShot, so requests made from
inside the Qt event loop paint on the next timer tick. Hosts with their
own animation loop (and tests) pass a different requester.
"""

import logging
from typing import Callable, Dict, List, Optional

from canvas_viewport.constants import (
    LAYER_MAIN, REDRAW_LAYERS, REDRAW_LAYER_IMPLIES, REDRAW_FRAME_INTERVAL_MS
)
from canvas_viewport.utils.logger import loggerRaise

logger = logging.getLogger(__name__)


def qt_frame_requester(interval_ms=REDRAW_FRAME_INTERVAL_MS):
    """Frame requester backed by QTimer.singleShot."""
    from PyQt5.QtCore import QTimer

    def request(callback):
        QTimer.singleShot(interval_ms, callback)
    return request


class RedrawScheduler:
    """Coalesces redraw requests into one paint callback per layer per frame."""

    def __init__(self, frame_requester: Optional[Callable[[Callable[[], None]], None]] = None,
                 frame_interval_ms=REDRAW_FRAME_INTERVAL_MS):
        """
        Args:
            frame_requester: Callable taking a zero-argument callback to run
                on the next frame. Defaults to QTimer.singleShot.
            frame_interval_ms: Interval for the default Qt requester
        """
        self._frame_requester = frame_requester or qt_frame_requester(frame_interval_ms)
        self._painters: Dict[str, List[Callable[[], None]]] = {layer: [] for layer in REDRAW_LAYERS}
        self._in_flight: Dict[str, bool] = {layer: False for layer in REDRAW_LAYERS}
        self._frame_requested = False
        # Bumped by clear() so frames requested before it do nothing
        self._generation = 0

    def register_painter(self, layer, callback):
        """Register a paint callback for a layer.

        Returns:
            Callable that unregisters this exact registration (idempotent)
        """
        self._check_layer(layer)
        registration = _PainterRegistration(callback)
        self._painters[layer].append(registration)

        def unregister():
            painters = self._painters[layer]
            if registration in painters:
                painters.remove(registration)
        return unregister

    def request_redraw(self, layer=LAYER_MAIN):
        """Request a repaint of layer (and the layers it implies)."""
        self._check_layer(layer)
        for name in (layer,) + REDRAW_LAYER_IMPLIES.get(layer, ()):
            if not self._in_flight[name]:
                self._in_flight[name] = True
                logger.debug("Redraw requested: %s", name)
        self._ensure_frame()

    def is_pending(self, layer) -> bool:
        self._check_layer(layer)
        return self._in_flight[layer]

    def has_pending(self) -> bool:
        return any(self._in_flight.values())

    def flush(self):
        """Run the pending frame now instead of waiting for the requester."""
        self._on_frame(self._generation)

    def clear(self):
        """Drop all painters and pending requests."""
        self._generation += 1
        self._frame_requested = False
        for layer in REDRAW_LAYERS:
            self._painters[layer] = []
            self._in_flight[layer] = False

    # ========================================
    # Internals
    # ========================================

    def _check_layer(self, layer):
        if layer not in self._in_flight:
            raise ValueError(f"Unknown redraw layer {layer!r}, expected one of {REDRAW_LAYERS}")

    def _ensure_frame(self):
        if self._frame_requested:
            return
        self._frame_requested = True
        generation = self._generation
        self._frame_requester(lambda: self._on_frame(generation))

    def _on_frame(self, generation):
        if generation != self._generation:
            return
        self._frame_requested = False
        due = [layer for layer in REDRAW_LAYERS if self._in_flight[layer]]
        for layer in due:
            self._in_flight[layer] = False
        # The frame always completes; the first painter fault is raised after it
        failure = None
        for layer in due:
            for registration in list(self._painters[layer]):
                try:
                    registration.callback()
                except Exception as e:
                    if failure is None:
                        failure = (layer, e)
                    else:
                        logger.error("Painter for layer '%s' also failed: %s", layer, e)
        if failure is not None:
            layer, error = failure
            loggerRaise(error, f"Painter for layer '{layer}' failed")


class _PainterRegistration:
    __slots__ = ('callback',)

    def __init__(self, callback):
        self.callback = callback
