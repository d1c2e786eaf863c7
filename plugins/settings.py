"""
Plugin configuration and its JSON persistence.

Settings are stored as {plugin_id: {"enabled": bool, "params": {key: number}}}
and merged against the built-in defaults on load, so that files written by
older or newer versions never break loading.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from core.errors import ConfigError
from utils.constants import DEFAULT_SETTINGS_PATH
from utils.logging_config import get_logger

from .base import Number, PipelineContext, PluginDescriptor
from .registry import ALL_PLUGINS

logger = get_logger(__name__)


class PluginSettings:
    """Enabled flags and parameter values for every plugin."""

    def __init__(self, plugins: Sequence[PluginDescriptor] = ALL_PLUGINS):
        """
        Initialize settings with each plugin's defaults.

        Args:
            plugins: Plugins in execution order
        """
        self.plugins = list(plugins)
        self._by_id = {plugin.id: plugin for plugin in self.plugins}
        self._enabled: Dict[str, bool] = {}
        self._params: Dict[str, Dict[str, Number]] = {}
        self.reset()

    def reset(self, plugin_id: Optional[str] = None) -> None:
        """Restore defaults for one plugin, or for all of them."""
        targets = [self.descriptor(plugin_id)] if plugin_id else self.plugins
        for plugin in targets:
            self._enabled[plugin.id] = plugin.enabled
            self._params[plugin.id] = plugin.defaults()

    def descriptor(self, plugin_id: str) -> PluginDescriptor:
        """
        Get a plugin's descriptor.

        Raises:
            ConfigError: If the plugin is unknown
        """
        try:
            return self._by_id[plugin_id]
        except KeyError:
            raise ConfigError(f"Unknown plugin: {plugin_id}", plugin_id=plugin_id) from None

    def is_enabled(self, plugin_id: str) -> bool:
        return self._enabled[self.descriptor(plugin_id).id]

    def set_enabled(self, plugin_id: str, enabled: bool) -> None:
        self._enabled[self.descriptor(plugin_id).id] = bool(enabled)
        logger.debug(f"{plugin_id} {'enabled' if enabled else 'disabled'}")

    def get_param(self, plugin_id: str, key: str) -> Number:
        return self._params[self.descriptor(plugin_id).id][key]

    def params(self, plugin_id: str) -> Dict[str, Number]:
        return dict(self._params[self.descriptor(plugin_id).id])

    def set_param(self, plugin_id: str, key: str, value: Number) -> None:
        """
        Set a parameter after validating it against its declared bounds.

        Args:
            plugin_id: Plugin identifier
            key: Parameter key
            value: New value

        Raises:
            ConfigError: If the plugin or key is unknown or the value is out
                of bounds; the previous value is kept
        """
        plugin = self.descriptor(plugin_id)
        param = plugin.param(key)
        if param is None:
            raise ConfigError(f"Unknown parameter for {plugin_id}: {key}",
                              plugin_id=plugin_id, key=key)
        try:
            self._params[plugin_id][key] = param.validate(value)
        except ConfigError as e:
            e.plugin_id = plugin_id
            raise

    def merge(self, stored: Mapping[str, Any]) -> None:
        """
        Merge persisted settings over the current values.

        Unknown plugins and keys are ignored; invalid values are skipped with
        a warning.

        Args:
            stored: Mapping of plugin id to {"enabled": bool, "params": {...}}
        """
        if not isinstance(stored, Mapping):
            logger.warning(f"Ignoring settings of type {type(stored).__name__}")
            return

        for plugin_id, entry in stored.items():
            if plugin_id not in self._by_id or not isinstance(entry, Mapping):
                logger.debug(f"Ignoring stored settings for {plugin_id!r}")
                continue

            enabled = entry.get('enabled')
            if isinstance(enabled, bool):
                self._enabled[plugin_id] = enabled

            params = entry.get('params')
            if not isinstance(params, Mapping):
                continue
            for key, value in params.items():
                if self._by_id[plugin_id].param(key) is None:
                    continue
                try:
                    self.set_param(plugin_id, key, value)
                except ConfigError as e:
                    logger.warning(f"Ignoring stored value: {e}")

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialize to the persisted layout."""
        return {
            plugin.id: {
                'enabled': self._enabled[plugin.id],
                'params': dict(self._params[plugin.id]),
            }
            for plugin in self.plugins
        }

    def snapshot(self) -> PipelineContext:
        """Take the read-only context for a pipeline run."""
        active = [plugin.id for plugin in self.plugins if self._enabled[plugin.id]]
        return PipelineContext.create(active, self._params)

    @classmethod
    def load(cls, path: Path = DEFAULT_SETTINGS_PATH,
             plugins: Sequence[PluginDescriptor] = ALL_PLUGINS) -> 'PluginSettings':
        """
        Load settings from a JSON file, falling back to defaults.

        A missing file gives the defaults; an unreadable or corrupt file gives
        the defaults with a warning.
        """
        settings = cls(plugins)
        if not path.exists():
            logger.debug(f"No settings file at {path}, using defaults")
            return settings

        try:
            with open(path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read settings from {path}: {e}")
            return settings

        settings.merge(stored)
        logger.debug(f"Loaded settings from {path}")
        return settings

    def save(self, path: Path = DEFAULT_SETTINGS_PATH) -> None:
        """
        Write settings to a JSON file.

        Raises:
            IOError: If the file cannot be written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2)
                f.write('\n')
        except OSError as e:
            logger.error(f"Failed to save settings to {path}: {e}")
            raise IOError(f"Cannot write settings file {path}: {e}")
        logger.info(f"Settings saved to {path}")
