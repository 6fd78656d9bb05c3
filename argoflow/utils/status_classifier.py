"""Status classification rules for applications, hooks and resources.

Maps raw Argo CD status values onto a small set of rendering tiers:
- Hooks: outcome -> icon + tier
- Applications: sync, health and PostSync validation badges
- Resources: per-kind health counts rolled up into one tier
- Layers: border tier and the "is doing something" activity flag

Every function is total. Unrecognised or missing values fall through to the
pending tier instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from argoflow.constants.enums import (
    HealthStatusCode,
    HookPhase,
    HookType,
    OperationPhase,
    StatusIcon,
    StatusTier,
    SyncStatusCode,
)
from argoflow.models.core.application_info import ApplicationInfo, HookResultInfo
from argoflow.models.core.resource_info import ResourceKindSummary, ResourceNodeInfo

_FAILED_HOOK_PHASES = frozenset({HookPhase.FAILED.value, HookPhase.ERROR.value})
_DEGRADED_HEALTH = frozenset(
    {HealthStatusCode.DEGRADED.value, HealthStatusCode.MISSING.value}
)


@dataclass(frozen=True)
class StatusBadge:
    """Classified status: glyph, tier and a short human title."""

    icon: StatusIcon
    tier: StatusTier
    title: str


def _raw(value: Any) -> str | None:
    """Normalise an enum member or raw string to its wire value."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def classify_hook(outcome: Any) -> StatusBadge:
    """Classify a single hook outcome."""
    raw = _raw(outcome)
    if raw == HookPhase.SUCCEEDED.value:
        return StatusBadge(StatusIcon.CHECK, StatusTier.OK, raw)
    if raw in _FAILED_HOOK_PHASES:
        return StatusBadge(StatusIcon.CROSS, StatusTier.ERROR, raw)
    if raw == HookPhase.RUNNING.value:
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.RUNNING, raw)
    return StatusBadge(StatusIcon.DASH, StatusTier.PENDING, raw or "Unknown")


def classify_sync(sync_state: Any, operation_phase: Any = None) -> StatusBadge:
    """Classify sync state; an in-flight operation always wins."""
    if _raw(operation_phase) == OperationPhase.RUNNING.value:
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.RUNNING, "Syncing")
    raw = _raw(sync_state) or SyncStatusCode.UNKNOWN.value
    if raw == SyncStatusCode.SYNCED.value:
        return StatusBadge(StatusIcon.CHECK, StatusTier.OK, raw)
    if raw == SyncStatusCode.OUT_OF_SYNC.value:
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.WARNING, raw)
    return StatusBadge(StatusIcon.DASH, StatusTier.PENDING, raw)


def classify_health(health_state: Any) -> StatusBadge:
    """Classify application or resource health."""
    raw = _raw(health_state) or HealthStatusCode.UNKNOWN.value
    if raw == HealthStatusCode.HEALTHY.value:
        return StatusBadge(StatusIcon.CHECK, StatusTier.OK, raw)
    if raw == HealthStatusCode.PROGRESSING.value:
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.RUNNING, raw)
    if raw in _DEGRADED_HEALTH:
        return StatusBadge(StatusIcon.CROSS, StatusTier.ERROR, raw)
    if raw == HealthStatusCode.SUSPENDED.value:
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.WARNING, raw)
    return StatusBadge(StatusIcon.DASH, StatusTier.PENDING, raw)


def classify_validation(hooks: Iterable[HookResultInfo]) -> StatusBadge:
    """Classify PostSync validation hooks.

    Precedence is fixed: error > running > ok > pending.
    """
    phases = [
        _raw(hook.hook_phase) for hook in hooks if hook.hook_type == HookType.POST_SYNC
    ]
    if not phases:
        return StatusBadge(StatusIcon.DASH, StatusTier.PENDING, "No validation")
    if any(phase in _FAILED_HOOK_PHASES for phase in phases):
        return StatusBadge(StatusIcon.CROSS, StatusTier.ERROR, "Validation failed")
    if any(phase == HookPhase.RUNNING.value for phase in phases):
        return StatusBadge(StatusIcon.CIRCLE, StatusTier.RUNNING, "Validating")
    if all(phase == HookPhase.SUCCEEDED.value for phase in phases):
        return StatusBadge(StatusIcon.CHECK, StatusTier.OK, "Validated")
    return StatusBadge(StatusIcon.DASH, StatusTier.PENDING, "Unknown")


def summarize_kind(kind: str, nodes: Iterable[ResourceNodeInfo]) -> ResourceKindSummary:
    """Count health states for the nodes of one kind and assign a tier."""
    total = healthy = progressing = degraded = 0
    for node in nodes:
        total += 1
        raw = _raw(node.health_status)
        if raw == HealthStatusCode.HEALTHY.value:
            healthy += 1
        elif raw == HealthStatusCode.PROGRESSING.value:
            progressing += 1
        elif raw in _DEGRADED_HEALTH:
            degraded += 1
    return ResourceKindSummary(
        kind=kind,
        total=total,
        healthy=healthy,
        progressing=progressing,
        degraded=degraded,
        tier=_rollup_tier(total, healthy, progressing, degraded),
    )


def _rollup_tier(total: int, healthy: int, progressing: int, degraded: int) -> StatusTier:
    if degraded:
        return StatusTier.ERROR
    if progressing:
        return StatusTier.RUNNING
    if total > 0 and healthy == total:
        return StatusTier.OK
    return StatusTier.PENDING


def classify_resource_rollup(
    nodes_by_kind: Mapping[str, Iterable[ResourceNodeInfo]],
) -> tuple[list[ResourceKindSummary], StatusTier]:
    """Summarise every kind and roll the counts up into one tier.

    Same precedence as validation: error > running > ok > pending.
    """
    summaries = [summarize_kind(kind, nodes) for kind, nodes in nodes_by_kind.items()]
    tier = _rollup_tier(
        sum(summary.total for summary in summaries),
        sum(summary.healthy for summary in summaries),
        sum(summary.progressing for summary in summaries),
        sum(summary.degraded for summary in summaries),
    )
    return summaries, tier


def classify_layer(applications: Iterable[ApplicationInfo]) -> StatusTier:
    """Border tier for a layer: ok, warning or error."""
    apps = list(applications)
    if any(_raw(app.health_status) in _DEGRADED_HEALTH for app in apps):
        return StatusTier.ERROR
    if any(
        app.health_status == HealthStatusCode.PROGRESSING
        or app.sync_status == SyncStatusCode.OUT_OF_SYNC
        for app in apps
    ):
        return StatusTier.WARNING
    return StatusTier.OK


def is_application_active(app: ApplicationInfo) -> bool:
    """Return True when the application is currently doing something."""
    if app.health_status == HealthStatusCode.PROGRESSING:
        return True
    if app.sync_status == SyncStatusCode.OUT_OF_SYNC:
        return True
    if app.operation_phase == OperationPhase.RUNNING:
        return True
    return any(
        _raw(hook.hook_phase) == HookPhase.RUNNING.value for hook in app.post_sync_hooks
    )


__all__ = [
    "StatusBadge",
    "classify_health",
    "classify_hook",
    "classify_layer",
    "classify_resource_rollup",
    "classify_sync",
    "classify_validation",
    "is_application_active",
    "summarize_kind",
]
