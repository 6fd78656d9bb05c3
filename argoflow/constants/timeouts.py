"""Timeout, interval and backoff constants.

All values are in seconds.
"""

from typing import Final

# ============================================================================
# HTTP request timeouts
# ============================================================================

API_REQUEST_TIMEOUT: Final = 30.0
API_CONNECT_TIMEOUT: Final = 10.0

# ============================================================================
# Stream reconnection backoff
# ============================================================================

STREAM_RECONNECT_BASE_DELAY: Final = 1.0
STREAM_RECONNECT_MAX_DELAY: Final = 30.0

# ============================================================================
# Polling fallback
# ============================================================================

APPLICATIONS_POLL_INTERVAL: Final = 10.0

__all__ = [
    "API_CONNECT_TIMEOUT",
    "API_REQUEST_TIMEOUT",
    "APPLICATIONS_POLL_INTERVAL",
    "STREAM_RECONNECT_BASE_DELAY",
    "STREAM_RECONNECT_MAX_DELAY",
]
