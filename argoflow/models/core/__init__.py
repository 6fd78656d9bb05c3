"""Core application and resource models."""

from argoflow.models.core.application_info import (
    ApplicationInfo,
    HookResultInfo,
    OperationInfo,
)
from argoflow.models.core.resource_info import (
    ResourceKindSummary,
    ResourceNodeInfo,
    ResourceRollup,
)

__all__ = [
    "ApplicationInfo",
    "HookResultInfo",
    "OperationInfo",
    "ResourceKindSummary",
    "ResourceNodeInfo",
    "ResourceRollup",
]
