"""Argo CD application models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from argoflow.constants.enums import (
    HealthStatusCode,
    HookType,
    OperationPhase,
    SyncPhase,
    SyncStatusCode,
)
from argoflow.constants.values import APPLICATION_LINK_TEMPLATE, UNCATEGORIZED


class HookResultInfo(BaseModel):
    """One PreSync/PostSync hook resource from the last sync result."""

    model_config = ConfigDict(frozen=True)

    kind: str
    name: str
    namespace: str = ""
    hook_type: HookType | None = None
    hook_phase: str | None = None  # Succeeded|Failed|Error|Running, raw
    sync_phase: SyncPhase | None = None
    message: str = ""

    @property
    def label(self) -> str:
        if self.hook_type is not None:
            return self.hook_type.value
        if self.sync_phase is not None:
            return self.sync_phase.value
        return ""


class OperationInfo(BaseModel):
    """State of the most recent sync operation."""

    model_config = ConfigDict(frozen=True)

    phase: OperationPhase | None = None
    message: str = ""
    started_at: datetime | None = None
    finished_at: datetime | None = None


class ApplicationInfo(BaseModel):
    """A deployed application tracked by the dashboard."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    category: str = UNCATEGORIZED
    sync_status: SyncStatusCode = SyncStatusCode.UNKNOWN
    health_status: HealthStatusCode = HealthStatusCode.UNKNOWN
    health_message: str = ""
    revision: str | None = None
    operation: OperationInfo | None = None
    hooks: list[HookResultInfo] = Field(default_factory=list)
    created_at: datetime | None = None
    project: str = ""
    repo_url: str = ""
    path: str = ""
    target_revision: str = ""
    destination_namespace: str = ""

    @property
    def operation_phase(self) -> OperationPhase | None:
        return self.operation.phase if self.operation is not None else None

    @property
    def last_synced_at(self) -> datetime | None:
        return self.operation.finished_at if self.operation is not None else None

    @property
    def post_sync_hooks(self) -> list[HookResultInfo]:
        return [hook for hook in self.hooks if hook.hook_type == HookType.POST_SYNC]

    @property
    def link(self) -> str:
        """Relative Argo CD UI link for this application."""
        return APPLICATION_LINK_TEMPLATE.format(namespace=self.namespace, name=self.name)
