"""Utility functions for argoflow."""

from argoflow.utils.status_classifier import (
    StatusBadge,
    classify_health,
    classify_hook,
    classify_layer,
    classify_resource_rollup,
    classify_sync,
    classify_validation,
    is_application_active,
)
from argoflow.utils.time_format import format_relative_time

__all__ = [
    # Status classification
    "StatusBadge",
    "classify_health",
    "classify_hook",
    "classify_layer",
    "classify_resource_rollup",
    "classify_sync",
    "classify_validation",
    "is_application_active",
    # Formatting
    "format_relative_time",
]
