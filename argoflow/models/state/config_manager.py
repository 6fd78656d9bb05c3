"""Settings and layer-table loading.

Settings come from a YAML file, then ``ARGOFLOW_*`` environment variables
override individual fields. The layer table is either the built-in default or
a YAML mapping of ``key -> {order, dependsOn, label, description}``; it is
validated once and treated as read-only afterwards.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from argoflow.constants.defaults import DEFAULT_LAYERS
from argoflow.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    LayerConfigError,
)
from argoflow.models.topology.stage_info import LayerConfig

logger = logging.getLogger(__name__)

_ENV_OVERRIDES: dict[str, str] = {
    "ARGOFLOW_SERVER": "server_url",
    "ARGOFLOW_TOKEN": "auth_token",
    "ARGOFLOW_LAYERS": "layers_path",
}


class ConfigManager:
    """Loads ``AppSettings`` and the layer table."""

    DEFAULT_PATH = Path.home() / ".config" / "argoflow" / "settings.yaml"

    @staticmethod
    def _read_yaml(path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as handle:
                return yaml.safe_load(handle)
        except OSError as exc:
            raise ConfigLoadError(f"Cannot read {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"Invalid YAML in {path}: {exc}") from exc

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> AppSettings:
        """Load settings from ``path`` (or the default location) plus env overrides.

        A missing default file is not an error; a missing explicit path is.
        """
        config_path = path or cls.DEFAULT_PATH
        raw: dict[str, Any] = {}
        if config_path.exists():
            data = cls._read_yaml(config_path)
            if data is not None and not isinstance(data, dict):
                raise ConfigLoadError(f"{config_path} must contain a mapping")
            raw = dict(data or {})
        elif path is not None:
            raise ConfigLoadError(f"Settings file not found: {path}")

        env = os.environ if environ is None else environ
        for env_key, field_name in _ENV_OVERRIDES.items():
            value = env.get(env_key)
            if value:
                raw[field_name] = value

        try:
            return AppSettings(**raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings: {exc}") from exc

    @classmethod
    def load_layers(cls, path: Path | None = None) -> list[LayerConfig]:
        """Return the validated layer table, from ``path`` or the defaults."""
        if path is None:
            raw_layers: Any = DEFAULT_LAYERS
        else:
            raw_layers = cls._read_yaml(path)
            if isinstance(raw_layers, dict) and "layers" in raw_layers:
                raw_layers = raw_layers["layers"]
            if not isinstance(raw_layers, dict) or not raw_layers:
                raise ConfigLoadError(f"{path} must map layer keys to layer settings")

        layers: list[LayerConfig] = []
        for key, entry in raw_layers.items():
            if not isinstance(entry, dict):
                raise ConfigLoadError(f"Layer '{key}' must be a mapping")
            try:
                layers.append(LayerConfig(key=str(key), **entry))
            except (ValidationError, TypeError) as exc:
                raise ConfigLoadError(f"Invalid layer '{key}': {exc}") from exc

        validate_layers(layers)
        logger.debug("Loaded %d layers", len(layers))
        return layers


def validate_layers(layers: list[LayerConfig]) -> None:
    """Reject duplicate keys, unknown dependencies and dependency cycles."""
    by_key: dict[str, LayerConfig] = {}
    for layer in layers:
        if layer.key in by_key:
            raise LayerConfigError(f"Duplicate layer key '{layer.key}'")
        by_key[layer.key] = layer

    for layer in layers:
        for dependency in layer.depends_on:
            if dependency not in by_key:
                raise LayerConfigError(
                    f"Layer '{layer.key}' depends on unknown layer '{dependency}'"
                )

    # 0 = unvisited, 1 = on the current path, 2 = done
    marks: dict[str, int] = dict.fromkeys(by_key, 0)

    def _visit(key: str, path: list[str]) -> None:
        if marks[key] == 2:
            return
        if marks[key] == 1:
            cycle = " -> ".join([*path[path.index(key):], key])
            raise LayerConfigError(f"Layer dependency cycle: {cycle}")
        marks[key] = 1
        for dependency in by_key[key].depends_on:
            _visit(dependency, [*path, key])
        marks[key] = 2

    for key in by_key:
        _visit(key, [])


__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "LayerConfigError",
    "validate_layers",
]
