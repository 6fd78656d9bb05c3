"""Application parser - turns raw Argo CD application JSON into models."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime
from typing import Any

from argoflow.constants.enums import (
    HealthStatusCode,
    HookType,
    OperationPhase,
    SyncPhase,
    SyncStatusCode,
)
from argoflow.constants.values import CATEGORY_LABEL_KEY, UNCATEGORIZED
from argoflow.models.core.application_info import (
    ApplicationInfo,
    HookResultInfo,
    OperationInfo,
)
from argoflow.models.core.resource_info import ResourceNodeInfo


class ApplicationParseError(ValueError):
    """Raised when a payload cannot be turned into an application."""


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


class ApplicationParser:
    """Parses application and resource tree payloads into structured models."""

    _HOOK_TYPES = {hook.value: hook for hook in HookType}

    def __init__(self, category_label_key: str = CATEGORY_LABEL_KEY) -> None:
        """Initialize application parser.

        Args:
            category_label_key: Metadata label holding the layer category.
        """
        self.category_label_key = category_label_key

    @staticmethod
    def parse_timestamp(timestamp: Any) -> datetime | None:
        """Parse RFC 3339 timestamps into aware datetimes."""
        if not isinstance(timestamp, str) or not timestamp:
            return None
        with suppress(ValueError, TypeError):
            return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return None

    @staticmethod
    def _enum_or_default(enum_cls: Any, value: Any, default: Any) -> Any:
        with suppress(ValueError, TypeError):
            return enum_cls(value)
        return default

    def parse_hooks(self, operation_state: dict[str, Any]) -> list[HookResultInfo]:
        """Extract PreSync/PostSync hook results from the last sync result."""
        resources = _as_dict(operation_state.get("syncResult")).get("resources")
        if not isinstance(resources, list):
            return []

        hooks: list[HookResultInfo] = []
        for resource in resources:
            if not isinstance(resource, dict):
                continue
            hook_type = self._HOOK_TYPES.get(_as_str(resource.get("hookType")))
            if hook_type is None:
                continue
            hooks.append(
                HookResultInfo(
                    kind=_as_str(resource.get("kind")),
                    name=_as_str(resource.get("name")),
                    namespace=_as_str(resource.get("namespace")),
                    hook_type=hook_type,
                    hook_phase=_as_str(resource.get("hookPhase")) or None,
                    sync_phase=self._enum_or_default(
                        SyncPhase, resource.get("syncPhase"), None
                    ),
                    message=_as_str(resource.get("message")),
                )
            )
        return hooks

    def parse_operation(self, operation_state: dict[str, Any]) -> OperationInfo | None:
        """Parse ``status.operationState``; None when no operation was recorded."""
        if not operation_state:
            return None
        return OperationInfo(
            phase=self._enum_or_default(OperationPhase, operation_state.get("phase"), None),
            message=_as_str(operation_state.get("message")),
            started_at=self.parse_timestamp(operation_state.get("startedAt")),
            finished_at=self.parse_timestamp(operation_state.get("finishedAt")),
        )

    def parse_application(self, raw: Any) -> ApplicationInfo:
        """Parse a single application.

        Args:
            raw: Raw application dictionary from the API.

        Returns:
            ApplicationInfo object.

        Raises:
            ApplicationParseError: If the payload has no ``metadata.name``.
        """
        if not isinstance(raw, dict):
            raise ApplicationParseError("application payload is not an object")
        metadata = _as_dict(raw.get("metadata"))
        name = metadata.get("name")
        if not isinstance(name, str) or not name:
            raise ApplicationParseError("application payload has no metadata.name")

        spec = _as_dict(raw.get("spec"))
        source = _as_dict(spec.get("source"))
        destination = _as_dict(spec.get("destination"))
        status = _as_dict(raw.get("status"))
        sync = _as_dict(status.get("sync"))
        health = _as_dict(status.get("health"))
        operation_state = _as_dict(status.get("operationState"))
        labels = _as_dict(metadata.get("labels"))

        return ApplicationInfo(
            name=name,
            namespace=_as_str(metadata.get("namespace")),
            category=_as_str(labels.get(self.category_label_key)) or UNCATEGORIZED,
            sync_status=self._enum_or_default(
                SyncStatusCode, sync.get("status"), SyncStatusCode.UNKNOWN
            ),
            health_status=self._enum_or_default(
                HealthStatusCode, health.get("status"), HealthStatusCode.UNKNOWN
            ),
            health_message=_as_str(health.get("message")),
            revision=_as_str(sync.get("revision")) or None,
            operation=self.parse_operation(operation_state),
            hooks=self.parse_hooks(operation_state),
            created_at=self.parse_timestamp(metadata.get("creationTimestamp")),
            project=_as_str(spec.get("project")),
            repo_url=_as_str(source.get("repoURL")),
            path=_as_str(source.get("path")),
            target_revision=_as_str(source.get("targetRevision")),
            destination_namespace=_as_str(destination.get("namespace")),
        )

    def parse_application_list(self, payload: Any) -> list[ApplicationInfo]:
        """Parse ``{items: [...]}``, skipping items without an identity."""
        items = _as_dict(payload).get("items")
        if not isinstance(items, list):
            return []
        applications: list[ApplicationInfo] = []
        for item in items:
            with suppress(ApplicationParseError):
                applications.append(self.parse_application(item))
        return applications

    def parse_resource_nodes(self, payload: Any) -> list[ResourceNodeInfo]:
        """Parse ``{nodes: [...]}`` from a resource tree response."""
        nodes = _as_dict(payload).get("nodes")
        if not isinstance(nodes, list):
            return []
        parsed: list[ResourceNodeInfo] = []
        for node in nodes:
            if not isinstance(node, dict) or not _as_str(node.get("kind")):
                continue
            health = _as_dict(node.get("health"))
            parsed.append(
                ResourceNodeInfo(
                    kind=_as_str(node.get("kind")),
                    name=_as_str(node.get("name")),
                    namespace=_as_str(node.get("namespace")),
                    uid=_as_str(node.get("uid")),
                    health_status=self._enum_or_default(
                        HealthStatusCode, health.get("status"), None
                    ),
                    created_at=self.parse_timestamp(node.get("createdAt")),
                )
            )
        return parsed
