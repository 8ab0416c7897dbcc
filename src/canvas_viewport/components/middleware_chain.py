"""Event middleware chain - ordered, short-circuiting dispatch for one event category.

Handlers are called in registration order with the event. Each returns
True (or None) to pass the event on, or False to stop: the remaining
handlers and the platform's default behavior are skipped for that dispatch.

Two ways to register:
- handlers given to the constructor, bound for the chain's lifetime
- add_handler(), returning a remove callable a consumer calls when it goes
  away, so many consumers can share one chain (and one event subscription)

Dispatch iterates a snapshot of the registrations; a handler that adds or
removes handlers affects the next dispatch, not the current one.
"""

import logging
from typing import Callable, Iterable, List, Optional

from PyQt5.QtCore import QObject

from canvas_viewport.utils.logger import loggerRaise

logger = logging.getLogger(__name__)

Handler = Callable[[object], Optional[bool]]


class _Registration:
    __slots__ = ('handler', 'permanent')

    def __init__(self, handler, permanent):
        self.handler = handler
        self.permanent = permanent


class EventMiddlewareChain:
    """Ordered handler chain for a single event category."""

    def __init__(self, category: str, handlers: Iterable[Handler] = ()):
        """
        Args:
            category: Event category name ('pointer_move', 'wheel', 'key_press', ...)
            handlers: Handlers bound for the lifetime of the chain, in order
        """
        self.category = category
        self._registrations: List[_Registration] = []
        self._dispatching = False
        for handler in handlers:
            self._append(handler, permanent=True)

    @property
    def handlers(self) -> List[Handler]:
        """Handlers in dispatch order."""
        return [r.handler for r in self._registrations]

    def __len__(self):
        return len(self._registrations)

    def add_handler(self, handler: Handler) -> Callable[[], None]:
        """Append a handler for the lifetime of a consumer.

        Returns:
            Callable removing exactly this registration (safe to call twice)
        """
        registration = self._append(handler, permanent=False)

        def remove():
            self._remove_registration(registration)
        return remove

    def remove_handler(self, handler: Handler) -> bool:
        """Remove the most recent registration of handler.

        Returns:
            True if a registration was removed
        """
        for registration in reversed(self._registrations):
            if registration.handler is handler or registration.handler == handler:
                return self._remove_registration(registration)
        return False

    def clear(self, include_permanent=False):
        """Drop consumer registrations (and lifetime handlers if asked)."""
        self._registrations = [r for r in self._registrations
                               if r.permanent and not include_permanent]

    def handle_event(self, event) -> bool:
        """Dispatch event through the chain.

        Returns:
            True if every handler let the event through (default behavior
            should run), False if a handler stopped it

        Raises:
            RuntimeError: If called from inside a handler of this chain
            Exception: Whatever a handler raised; the dispatch is aborted
        """
        if self._dispatching:
            raise RuntimeError(f"Re-entrant dispatch on '{self.category}' middleware chain")

        self._dispatching = True
        try:
            for registration in tuple(self._registrations):
                try:
                    result = registration.handler(event)
                except Exception as e:
                    loggerRaise(e, f"Handler {_name(registration.handler)} failed on '{self.category}' event")
                if result is False:
                    logger.debug("'%s' dispatch stopped by %s", self.category, _name(registration.handler))
                    return False
            return True
        finally:
            self._dispatching = False

    def __call__(self, event) -> bool:
        return self.handle_event(event)

    def _append(self, handler, permanent):
        if not callable(handler):
            raise TypeError(f"Middleware handler must be callable, got {type(handler).__name__}")
        registration = _Registration(handler, permanent)
        self._registrations.append(registration)
        return registration

    def _remove_registration(self, registration):
        # Rebuild instead of list.remove so identity is all that matters
        remaining = [r for r in self._registrations if r is not registration]
        if len(remaining) == len(self._registrations):
            return False
        self._registrations = remaining
        return True


def _name(handler):
    return getattr(handler, '__qualname__', None) or repr(handler)


class MiddlewareEventFilter(QObject):
    """Qt event filter routing event types to middleware chains.

    Install once on a widget; any number of consumers then share the
    chains. A chain reporting "stopped" consumes the Qt event.

    Usage:
        move_chain = EventMiddlewareChain('pointer_move')
        event_filter = MiddlewareEventFilter({QEvent.MouseMove: move_chain})
        canvas.installEventFilter(event_filter)
    """

    def __init__(self, chains=None, adapters=None, parent=None):
        """
        Args:
            chains: Dict of QEvent.Type -> EventMiddlewareChain
            adapters: Optional dict of QEvent.Type -> callable converting the
                Qt event before dispatch (e.g. PointerEvent.from_qt_mouse_event)
        """
        super().__init__(parent)
        self._chains = dict(chains or {})
        self._adapters = dict(adapters or {})

    def set_chain(self, event_type, chain, adapter=None):
        self._chains[event_type] = chain
        if adapter is not None:
            self._adapters[event_type] = adapter
        else:
            self._adapters.pop(event_type, None)

    def chain_for(self, event_type):
        return self._chains.get(event_type)

    def eventFilter(self, obj, event):
        """Return True to consume the event (a chain stopped it)."""
        chain = self._chains.get(event.type())
        if chain is None:
            return False
        adapter = self._adapters.get(event.type())
        payload = adapter(event) if adapter is not None else event
        return not chain.handle_event(payload)
