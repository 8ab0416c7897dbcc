"""Engine configuration: per-engine overrides of the package constants."""

import os
import json
import logging
from dataclasses import dataclass, asdict, fields

from canvas_viewport.constants import (
    MIN_SCALE, MAX_SCALE,
    ZOOM_STEP_FACTOR,
    DEFAULT_FIT_PADDING,
    REDRAW_FRAME_INTERVAL_MS,
    HIT_TEST_MARGIN,
)
from canvas_viewport.utils.logger import loggerRaise

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Tunable limits for one TransformEngine."""
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    zoom_step: float = ZOOM_STEP_FACTOR
    fit_padding: float = DEFAULT_FIT_PADDING
    frame_interval_ms: int = REDRAW_FRAME_INTERVAL_MS
    hit_test_margin: float = HIT_TEST_MARGIN

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ValueError if the limits cannot keep scale positive."""
        if self.min_scale <= 0:
            raise ValueError(f"min_scale must be > 0, got {self.min_scale}")
        if self.max_scale < self.min_scale:
            raise ValueError(f"max_scale ({self.max_scale}) is below min_scale ({self.min_scale})")
        if self.zoom_step <= 1.0:
            raise ValueError(f"zoom_step must be > 1.0, got {self.zoom_step}")
        if self.fit_padding < 0:
            raise ValueError(f"fit_padding must be >= 0, got {self.fit_padding}")
        if self.frame_interval_ms < 0:
            raise ValueError(f"frame_interval_ms must be >= 0, got {self.frame_interval_ms}")

    def clamp_scale(self, scale):
        return max(self.min_scale, min(self.max_scale, scale))

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build from a dict, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", sorted(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path):
    """Load an EngineConfig from a JSON file.

    A missing file yields the defaults.
    """
    if not os.path.exists(path):
        logger.debug("No config at %s, using defaults", path)
        return EngineConfig()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return EngineConfig.from_dict(data)
    except Exception as e:
        loggerRaise(e, f"Error loading config from {path}")


def save_config(config, path):
    """Save an EngineConfig as JSON, creating the directory if needed."""
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
    except Exception as e:
        loggerRaise(e, f"Error saving config to {path}")
