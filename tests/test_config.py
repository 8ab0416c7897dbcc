"""
Tests for EngineConfig and its JSON persistence.
"""

import json

import pytest

from canvas_viewport import constants
from canvas_viewport.utils.config import EngineConfig, load_config, save_config


def test_defaults_follow_constants():
    config = EngineConfig()
    assert config.min_scale == constants.MIN_SCALE
    assert config.max_scale == constants.MAX_SCALE
    assert config.fit_padding == constants.DEFAULT_FIT_PADDING


@pytest.mark.parametrize("kwargs", [
    {'min_scale': 0},
    {'min_scale': -1},
    {'min_scale': 2.0, 'max_scale': 1.0},
    {'zoom_step': 1.0},
    {'frame_interval_ms': -5},
    {'fit_padding': -1},
])
def test_invalid_limits_rejected(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_clamp_scale():
    config = EngineConfig(min_scale=0.5, max_scale=3.0)
    assert config.clamp_scale(0.1) == 0.5
    assert config.clamp_scale(1.5) == 1.5
    assert config.clamp_scale(9.0) == 3.0


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / 'settings' / 'viewport.json'
    config = EngineConfig(min_scale=0.2, max_scale=8.0, fit_padding=50)
    save_config(config, str(path))

    assert json.loads(path.read_text(encoding='utf-8'))['max_scale'] == 8.0
    assert load_config(str(path)) == config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / 'nope.json')) == EngineConfig()


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / 'viewport.json'
    path.write_text(json.dumps({'max_scale': 4.0, 'theme': 'dark'}), encoding='utf-8')
    assert load_config(str(path)).max_scale == 4.0


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / 'viewport.json'
    path.write_text('{not json', encoding='utf-8')
    with pytest.raises(ValueError):
        load_config(str(path))
