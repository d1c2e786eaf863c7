"""
Tests for plugin settings, validation and persistence.
"""

import json
import logging

import pytest

from core.errors import ConfigError
from plugins.settings import PluginSettings


def test_defaults():
    settings = PluginSettings()
    enabled = [plugin.id for plugin in settings.plugins if settings.is_enabled(plugin.id)]
    assert enabled == ['cps', 'gap']
    assert settings.get_param('cps', 'max_cps') == 25
    assert settings.get_param('gap', 'min_gap') == 125
    assert settings.get_param('min_duration', 'min_duration') == 2000
    assert settings.get_param('long_lines', 'max_length') == 42
    assert settings.get_param('encoding', 'target_encoding') == 0
    assert settings.params('remove_ads') == {}


def test_set_param_accepts_values_within_bounds():
    settings = PluginSettings()
    settings.set_param('cps', 'max_cps', 17.5)
    settings.set_param('gap', 'min_gap', 0)
    assert settings.get_param('cps', 'max_cps') == 17.5
    assert settings.get_param('gap', 'min_gap') == 0


@pytest.mark.parametrize("plugin_id,key,value", [
    ('cps', 'max_cps', 0),
    ('cps', 'max_cps', -3),
    ('gap', 'min_gap', -1),
    ('cps', 'max_cps', float('nan')),
    ('cps', 'max_cps', float('inf')),
    ('cps', 'max_cps', "20"),
    ('cps', 'max_cps', True),
    ('encoding', 'target_encoding', 4),
])
def test_set_param_rejects_invalid_values(plugin_id, key, value):
    settings = PluginSettings()
    before = settings.get_param(plugin_id, key)
    with pytest.raises(ConfigError) as exc_info:
        settings.set_param(plugin_id, key, value)
    assert exc_info.value.plugin_id == plugin_id
    assert exc_info.value.key == key
    assert settings.get_param(plugin_id, key) == before


def test_unknown_plugin_and_key():
    settings = PluginSettings()
    with pytest.raises(ConfigError):
        settings.set_enabled('subtitle_magic', True)
    with pytest.raises(ConfigError):
        settings.set_param('cps', 'min_cps', 10)


def test_reset_single_plugin():
    settings = PluginSettings()
    settings.set_param('cps', 'max_cps', 12)
    settings.set_param('gap', 'min_gap', 80)
    settings.set_enabled('cps', False)

    settings.reset('cps')
    assert settings.is_enabled('cps')
    assert settings.get_param('cps', 'max_cps') == 25
    assert settings.get_param('gap', 'min_gap') == 80


def test_merge_ignores_unknown_and_invalid_entries(caplog):
    settings = PluginSettings()
    with caplog.at_level(logging.WARNING):
        settings.merge({
            'cps': {'enabled': False, 'params': {'max_cps': 18, 'speed': 3}},
            'gap': {'params': {'min_gap': -50}},
            'karaoke': {'enabled': True},
            'remove_ads': {'enabled': 'yes'},
            'long_lines': "broken",
        })

    assert not settings.is_enabled('cps')
    assert settings.get_param('cps', 'max_cps') == 18
    assert settings.get_param('gap', 'min_gap') == 125
    assert not settings.is_enabled('remove_ads')
    assert any("Min Gap" in record.getMessage() for record in caplog.records)


def test_load_missing_file_gives_defaults(settings_path):
    settings = PluginSettings.load(settings_path)
    assert settings.to_dict() == PluginSettings().to_dict()


def test_load_corrupt_file_gives_defaults(settings_path, caplog):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json", encoding='utf-8')
    with caplog.at_level(logging.WARNING):
        settings = PluginSettings.load(settings_path)
    assert settings.to_dict() == PluginSettings().to_dict()
    assert caplog.records


def test_save_and_load(settings_path):
    settings = PluginSettings()
    settings.set_enabled('cyrillization', True)
    settings.set_param('long_lines', 'max_length', 37)
    settings.save(settings_path)

    stored = json.loads(settings_path.read_text(encoding='utf-8'))
    assert stored['cyrillization'] == {'enabled': True, 'params': {}}
    assert stored['long_lines']['params'] == {'max_length': 37}

    loaded = PluginSettings.load(settings_path)
    assert loaded.to_dict() == settings.to_dict()


def test_snapshot_is_isolated_from_later_changes():
    settings = PluginSettings()
    snapshot = settings.snapshot()
    settings.set_param('cps', 'max_cps', 10)
    settings.set_enabled('cyrillization', True)

    assert snapshot.param('cps', 'max_cps', None) == 25
    assert not snapshot.is_active('cyrillization')
    assert snapshot.is_active('gap')
    with pytest.raises(TypeError):
        snapshot.configs['cps']['max_cps'] = 1
