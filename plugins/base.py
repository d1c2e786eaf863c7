"""
Plugin descriptors and the read-only context shared by a pipeline run.

Each plugin module exposes a PluginDescriptor: identity, default state, the
ordered parameters it accepts, and the transform function. Transforms are
called as run(entries, params, context) and return a new timeline.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from core.errors import ConfigError
from core.subtitle_formats import SubtitleEntry
from utils.constants import DEFAULT_MIN_GAP_MS, PLUGIN_GAP

Number = Union[int, float]


@dataclass(frozen=True)
class ParamOption:
    """A labelled choice for an enumerated parameter."""
    value: int
    label: str


@dataclass(frozen=True)
class PluginParam:
    """A numeric plugin parameter with its bounds or choices."""
    key: str
    label: str
    default: Number
    min: Optional[Number] = None
    max: Optional[Number] = None
    step: Optional[Number] = None
    options: Tuple[ParamOption, ...] = ()

    def validate(self, value) -> Number:
        """
        Check a value against the declared bounds or options.

        Args:
            value: Candidate value (int or float; bool is rejected)

        Returns:
            The value, unchanged

        Raises:
            ConfigError: If the value is not a finite number, is outside the
                bounds, or is not one of the options
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{self.label} must be a number, got {value!r}", key=self.key)
        if not math.isfinite(value):
            raise ConfigError(f"{self.label} must be finite, got {value!r}", key=self.key)

        if self.options:
            allowed = [option.value for option in self.options]
            if value not in allowed:
                raise ConfigError(f"{self.label} must be one of {allowed}, got {value!r}",
                                  key=self.key)
        if self.min is not None and value < self.min:
            raise ConfigError(f"{self.label} must be at least {self.min}, got {value!r}",
                              key=self.key)
        if self.max is not None and value > self.max:
            raise ConfigError(f"{self.label} must be at most {self.max}, got {value!r}",
                              key=self.key)
        return value

    def describe(self) -> str:
        """Short human-readable description of the accepted values."""
        if self.options:
            return ', '.join(f"{option.value}={option.label}" for option in self.options)
        bounds = []
        if self.min is not None:
            bounds.append(f"min {self.min}")
        if self.max is not None:
            bounds.append(f"max {self.max}")
        return ', '.join(bounds)


@dataclass(frozen=True)
class PipelineContext:
    """
    Read-only view of the plugin configuration for one run.

    Attributes:
        active: Identifiers of the enabled plugins
        configs: Plugin id -> parameter values, for every plugin
    """
    active: FrozenSet[str] = frozenset()
    configs: Mapping[str, Mapping[str, Number]] = field(
        default_factory=lambda: MappingProxyType({}))

    @classmethod
    def create(cls, active, configs: Mapping[str, Mapping[str, Number]]) -> 'PipelineContext':
        """Build a context from plain collections, copying them."""
        frozen = {plugin_id: MappingProxyType(dict(params))
                  for plugin_id, params in configs.items()}
        return cls(active=frozenset(active), configs=MappingProxyType(frozen))

    def is_active(self, plugin_id: str) -> bool:
        return plugin_id in self.active

    def params_for(self, plugin_id: str) -> Mapping[str, Number]:
        return self.configs.get(plugin_id, MappingProxyType({}))

    def param(self, plugin_id: str, key: str, default: Number) -> Number:
        return self.params_for(plugin_id).get(key, default)


Transform = Callable[[List[SubtitleEntry], Mapping[str, Number], PipelineContext],
                     List[SubtitleEntry]]


@dataclass(frozen=True)
class PluginDescriptor:
    """Identity, default state, parameters and transform of a plugin."""
    id: str
    name: str
    description: str
    enabled: bool
    run: Transform
    params: Tuple[PluginParam, ...] = ()

    def param(self, key: str) -> Optional[PluginParam]:
        for param in self.params:
            if param.key == key:
                return param
        return None

    def defaults(self) -> Dict[str, Number]:
        return {param.key: param.default for param in self.params}


def active_min_gap(context: PipelineContext) -> Optional[int]:
    """
    Get the minimum gap enforced later in the run, if the Gap plugin is on.

    Extension plugins cap their new end times with it so that the Gap
    plugin does not have to trim them back.
    """
    if not context.is_active(PLUGIN_GAP):
        return None
    return math.ceil(context.param(PLUGIN_GAP, 'min_gap', DEFAULT_MIN_GAP_MS))
