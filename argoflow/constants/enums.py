"""All enum definitions for argoflow.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Argo CD Status Enums
# =============================================================================

class SyncStatusCode(Enum):
    """Application sync status values from the Argo CD API."""

    SYNCED = "Synced"
    OUT_OF_SYNC = "OutOfSync"
    UNKNOWN = "Unknown"


class HealthStatusCode(Enum):
    """Application and resource health status values."""

    HEALTHY = "Healthy"
    PROGRESSING = "Progressing"
    DEGRADED = "Degraded"
    SUSPENDED = "Suspended"
    MISSING = "Missing"
    UNKNOWN = "Unknown"


class OperationPhase(Enum):
    """Phase of the most recent sync operation."""

    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ERROR = "Error"
    TERMINATING = "Terminating"


class HookType(Enum):
    """Sync hook roles that are tracked as hook results."""

    PRE_SYNC = "PreSync"
    POST_SYNC = "PostSync"


class HookPhase(Enum):
    """Outcome reported for a single hook resource."""

    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    ERROR = "Error"
    RUNNING = "Running"


class SyncPhase(Enum):
    """Sync wave phase a resource belongs to."""

    PRE_SYNC = "PreSync"
    SYNC = "Sync"
    POST_SYNC = "PostSync"


# =============================================================================
# Derived Status Enums
# =============================================================================

class StatusTier(Enum):
    """Rendering tier produced by the status classifier."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    RUNNING = "running"
    PENDING = "pending"


class StatusIcon(Enum):
    """Glyph shown next to a classified status."""

    CHECK = "check"
    CROSS = "cross"
    CIRCLE = "circle"
    DASH = "dash"


# =============================================================================
# Stream / Fetch State Enums
# =============================================================================

class StreamState(Enum):
    """Connection states of the live application stream."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    STOPPED = "stopped"


class StreamEventType(Enum):
    """Event types carried by stream frames."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


class FetchState(Enum):
    """Data fetch state values."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


__all__ = [
    # Argo CD status
    "HealthStatusCode",
    "HookPhase",
    "HookType",
    "OperationPhase",
    "SyncPhase",
    "SyncStatusCode",
    # Derived
    "StatusIcon",
    "StatusTier",
    # Stream / fetch
    "FetchState",
    "StreamEventType",
    "StreamState",
]
