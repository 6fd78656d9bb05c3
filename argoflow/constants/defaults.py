"""Default values for settings.

All default values used in the AppSettings model and the built-in layer table.
"""

from typing import Any, Final

# ============================================================================
# Connection defaults
# ============================================================================

SERVER_URL_DEFAULT: Final = "http://localhost:8080"
VERIFY_TLS_DEFAULT: Final = True
USE_STREAM_DEFAULT: Final = True

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "INFO"
LOG_FORMAT_DEFAULT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ============================================================================
# Layer table
# ============================================================================

# key -> (order, depends_on, label). Insertion order is the display order
# for layers that share an order.
DEFAULT_LAYERS: Final[dict[str, dict[str, Any]]] = {
    "pipeline": {"order": -1, "depends_on": [], "label": "Pipeline"},
    "foundation": {"order": 0, "depends_on": ["pipeline"], "label": "Foundation"},
    "operators": {"order": 1, "depends_on": ["foundation"], "label": "Operators"},
    "monitoring": {"order": 1, "depends_on": ["foundation"], "label": "Monitoring"},
    "secrets": {"order": 2, "depends_on": ["operators"], "label": "Secrets"},
    "database": {"order": 3, "depends_on": ["secrets"], "label": "Database"},
    "auth": {"order": 4, "depends_on": ["database"], "label": "Auth"},
    "workflows": {"order": 5, "depends_on": ["database"], "label": "Workflows"},
    "content": {"order": 6, "depends_on": ["auth", "workflows"], "label": "Content"},
}

__all__ = [
    "DEFAULT_LAYERS",
    "LOG_FORMAT_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "SERVER_URL_DEFAULT",
    "USE_STREAM_DEFAULT",
    "VERIFY_TLS_DEFAULT",
]
