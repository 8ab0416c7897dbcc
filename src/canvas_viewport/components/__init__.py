"""Event dispatch and interaction components."""

from .middleware_chain import EventMiddlewareChain, MiddlewareEventFilter

__all__ = ['EventMiddlewareChain', 'MiddlewareEventFilter']
