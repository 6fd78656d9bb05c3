"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from argoflow.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    SERVER_URL_DEFAULT,
    USE_STREAM_DEFAULT,
    VERIFY_TLS_DEFAULT,
)
from argoflow.constants.timeouts import (
    API_REQUEST_TIMEOUT,
    APPLICATIONS_POLL_INTERVAL,
    STREAM_RECONNECT_BASE_DELAY,
    STREAM_RECONNECT_MAX_DELAY,
)
from argoflow.constants.values import CATEGORY_LABEL_KEY


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Argo CD API
    server_url: str = SERVER_URL_DEFAULT
    auth_token: str = ""
    verify_tls: bool = VERIFY_TLS_DEFAULT
    request_timeout: float = Field(default=API_REQUEST_TIMEOUT, gt=0)

    # Live updates
    use_stream: bool = USE_STREAM_DEFAULT
    reconnect_base_delay: float = Field(default=STREAM_RECONNECT_BASE_DELAY, gt=0)
    reconnect_max_delay: float = Field(default=STREAM_RECONNECT_MAX_DELAY, gt=0)
    poll_interval: float = Field(default=APPLICATIONS_POLL_INTERVAL, gt=0)

    # Layering
    category_label_key: str = CATEGORY_LABEL_KEY
    layers_path: str = ""

    # Logging
    log_file: str = ""
    log_level: str = LOG_LEVEL_DEFAULT


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings or layer files fail to load."""


class LayerConfigError(ConfigError):
    """Raised when the layer table does not form a valid dependency graph."""
