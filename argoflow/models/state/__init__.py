"""Settings models and loaders."""

from argoflow.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    LayerConfigError,
)
from argoflow.models.state.config_manager import ConfigManager, validate_layers

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "LayerConfigError",
    "validate_layers",
]
