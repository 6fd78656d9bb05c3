"""Scalar constants for argoflow.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "argoflow"

# ============================================================================
# Argo CD API paths
# ============================================================================

APPLICATIONS_PATH: Final = "/api/v1/applications"
APPLICATIONS_STREAM_PATH: Final = "/api/v1/stream/applications"
RESOURCE_TREE_PATH_TEMPLATE: Final = "/api/v1/applications/{name}/resource-tree"
APPLICATION_LINK_TEMPLATE: Final = "/applications/{namespace}/{name}"

EVENT_STREAM_CONTENT_TYPE: Final = "text/event-stream"
STREAM_DATA_PREFIX: Final = "data:"

# ============================================================================
# Categorisation
# ============================================================================

CATEGORY_LABEL_KEY: Final = "jeebon.ai/category"
UNCATEGORIZED: Final = "uncategorized"

# ============================================================================
# Resource kind display priority (lower sorts first)
# ============================================================================

RESOURCE_KIND_PRIORITY: Final[dict[str, int]] = {
    # Workloads
    "Deployment": 0,
    "StatefulSet": 1,
    "DaemonSet": 2,
    "ReplicaSet": 3,
    "Pod": 4,
    "Job": 5,
    "CronJob": 6,
    # Networking
    "Service": 10,
    "Ingress": 11,
    "Endpoints": 12,
    "EndpointSlice": 13,
    "NetworkPolicy": 14,
    # Config and secrets
    "ConfigMap": 20,
    "Secret": 21,
    "ServiceAccount": 22,
    "PersistentVolumeClaim": 23,
}

# ============================================================================
# Status glyphs (markup for rich text display)
# ============================================================================

STATUS_GLYPHS: Final[dict[str, str]] = {
    "check": "✔",
    "cross": "✘",
    "circle": "●",
    "dash": "–",
}

TIER_STYLES: Final[dict[str, str]] = {
    "ok": "green",
    "warning": "yellow",
    "error": "red",
    "running": "cyan",
    "pending": "grey50",
}

__all__ = [
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
