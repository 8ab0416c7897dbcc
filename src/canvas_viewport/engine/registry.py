"""Keyed registry of independent TransformEngine instances.

One engine per canvas/session key, each with isolated state. Use a
registry of your own for scoped usage, or the module-level default one
through get_engine().
"""

import logging
from typing import Dict

from canvas_viewport.constants import DEFAULT_ENGINE_KEY
from .core import TransformEngine

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Map from canvas/session key to an owned TransformEngine."""

    def __init__(self, config=None, frame_requester=None):
        """
        Args:
            config: EngineConfig used for engines created on demand
            frame_requester: Frame requester used for engines created on demand
        """
        self._engines: Dict[str, TransformEngine] = {}
        self._config = config
        self._frame_requester = frame_requester

    def get(self, key=DEFAULT_ENGINE_KEY) -> TransformEngine:
        """Engine for key, created with the registry defaults if missing."""
        engine = self._engines.get(key)
        if engine is None:
            engine = self.create(key)
        return engine

    def create(self, key, config=None, frame_requester=None) -> TransformEngine:
        """Create and register a new engine for key.

        Raises:
            KeyError: If key already has an engine
        """
        if key in self._engines:
            raise KeyError(f"Engine already registered for {key!r}")
        engine = TransformEngine(
            config if config is not None else self._config,
            frame_requester if frame_requester is not None else self._frame_requester,
        )
        self._engines[key] = engine
        logger.debug("Created engine %r", key)
        return engine

    def remove(self, key) -> bool:
        """Reset and drop the engine for key. Unknown keys are a no-op."""
        engine = self._engines.pop(key, None)
        if engine is None:
            return False
        engine.reset()
        logger.debug("Removed engine %r", key)
        return True

    def clear(self):
        for key in list(self._engines):
            self.remove(key)

    def keys(self):
        return list(self._engines.keys())

    def __contains__(self, key):
        return key in self._engines

    def __len__(self):
        return len(self._engines)


_default_registry = EngineRegistry()


def default_registry() -> EngineRegistry:
    return _default_registry


def get_engine(key=DEFAULT_ENGINE_KEY) -> TransformEngine:
    """Engine for key from the process-wide default registry."""
    return _default_registry.get(key)
