"""Constants module for argoflow.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (API paths, label keys, display tables)
- timeouts.py: Timeout, interval and backoff values (seconds)
- defaults.py: Default values for settings and the built-in layer table
"""

from argoflow.constants.defaults import (
    DEFAULT_LAYERS,
    LOG_FORMAT_DEFAULT,
    LOG_LEVEL_DEFAULT,
    SERVER_URL_DEFAULT,
    USE_STREAM_DEFAULT,
    VERIFY_TLS_DEFAULT,
)
from argoflow.constants.enums import (
    FetchState,
    HealthStatusCode,
    HookPhase,
    HookType,
    OperationPhase,
    StatusIcon,
    StatusTier,
    StreamEventType,
    StreamState,
    SyncPhase,
    SyncStatusCode,
)
from argoflow.constants.timeouts import (
    API_CONNECT_TIMEOUT,
    API_REQUEST_TIMEOUT,
    APPLICATIONS_POLL_INTERVAL,
    STREAM_RECONNECT_BASE_DELAY,
    STREAM_RECONNECT_MAX_DELAY,
)
from argoflow.constants.values import (
    APP_TITLE,
    APPLICATION_LINK_TEMPLATE,
    APPLICATIONS_PATH,
    APPLICATIONS_STREAM_PATH,
    CATEGORY_LABEL_KEY,
    EVENT_STREAM_CONTENT_TYPE,
    RESOURCE_KIND_PRIORITY,
    RESOURCE_TREE_PATH_TEMPLATE,
    STATUS_GLYPHS,
    STREAM_DATA_PREFIX,
    TIER_STYLES,
    UNCATEGORIZED,
)

__all__ = [
    # Defaults
    "DEFAULT_LAYERS",
    "LOG_FORMAT_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "SERVER_URL_DEFAULT",
    "USE_STREAM_DEFAULT",
    "VERIFY_TLS_DEFAULT",
    # Enums
    "FetchState",
    "HealthStatusCode",
    "HookPhase",
    "HookType",
    "OperationPhase",
    "StatusIcon",
    "StatusTier",
    "StreamEventType",
    "StreamState",
    "SyncPhase",
    "SyncStatusCode",
    # Timeouts
    "API_CONNECT_TIMEOUT",
    "API_REQUEST_TIMEOUT",
    "APPLICATIONS_POLL_INTERVAL",
    "STREAM_RECONNECT_BASE_DELAY",
    "STREAM_RECONNECT_MAX_DELAY",
    # Values
    "APPLICATIONS_PATH",
    "APPLICATIONS_STREAM_PATH",
    "APPLICATION_LINK_TEMPLATE",
    "APP_TITLE",
    "CATEGORY_LABEL_KEY",
    "EVENT_STREAM_CONTENT_TYPE",
    "RESOURCE_KIND_PRIORITY",
    "RESOURCE_TREE_PATH_TEMPLATE",
    "STATUS_GLYPHS",
    "STREAM_DATA_PREFIX",
    "TIER_STYLES",
    "UNCATEGORIZED",
]
