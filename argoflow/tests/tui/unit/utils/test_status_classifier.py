"""Tests for status classification rules."""

from __future__ import annotations

import pytest

from argoflow.constants.enums import (
    HealthStatusCode,
    HookType,
    OperationPhase,
    StatusIcon,
    StatusTier,
    SyncStatusCode,
)
from argoflow.models.core.application_info import (
    ApplicationInfo,
    HookResultInfo,
    OperationInfo,
)
from argoflow.models.core.resource_info import ResourceNodeInfo
from argoflow.utils.status_classifier import (
    classify_health,
    classify_hook,
    classify_layer,
    classify_resource_rollup,
    classify_sync,
    classify_validation,
    is_application_active,
    summarize_kind,
)


def _post_sync(phase: str | None) -> HookResultInfo:
    return HookResultInfo(
        kind="Job", name=f"check-{phase}", hook_type=HookType.POST_SYNC, hook_phase=phase
    )


def _node(kind: str, health: HealthStatusCode | None) -> ResourceNodeInfo:
    return ResourceNodeInfo(kind=kind, name=f"{kind}-x", health_status=health)


# =============================================================================
# Hooks
# =============================================================================


@pytest.mark.unit
class TestClassifyHook:
    """Tests for classify_hook."""

    @pytest.mark.parametrize(
        ("outcome", "icon", "tier"),
        [
            ("Succeeded", StatusIcon.CHECK, StatusTier.OK),
            ("Failed", StatusIcon.CROSS, StatusTier.ERROR),
            ("Error", StatusIcon.CROSS, StatusTier.ERROR),
            ("Running", StatusIcon.CIRCLE, StatusTier.RUNNING),
            ("Terminating", StatusIcon.DASH, StatusTier.PENDING),
            (None, StatusIcon.DASH, StatusTier.PENDING),
        ],
    )
    def test_outcomes(self, outcome: str | None, icon: StatusIcon, tier: StatusTier) -> None:
        """Each hook outcome maps to a fixed icon and tier."""
        badge = classify_hook(outcome)
        assert badge.icon == icon
        assert badge.tier == tier

    def test_missing_outcome_title(self) -> None:
        """A missing outcome is titled Unknown."""
        assert classify_hook(None).title == "Unknown"


# =============================================================================
# Sync / health
# =============================================================================


@pytest.mark.unit
class TestClassifySync:
    """Tests for classify_sync."""

    def test_synced(self) -> None:
        badge = classify_sync(SyncStatusCode.SYNCED)
        assert (badge.icon, badge.tier) == (StatusIcon.CHECK, StatusTier.OK)

    def test_out_of_sync_is_warning(self) -> None:
        badge = classify_sync("OutOfSync")
        assert (badge.icon, badge.tier) == (StatusIcon.CIRCLE, StatusTier.WARNING)

    def test_running_operation_wins_over_sync_state(self) -> None:
        """An in-flight operation is shown as Syncing even when Synced."""
        badge = classify_sync(SyncStatusCode.SYNCED, OperationPhase.RUNNING)
        assert badge.tier == StatusTier.RUNNING
        assert badge.title == "Syncing"

    def test_finished_operation_does_not_override(self) -> None:
        badge = classify_sync(SyncStatusCode.SYNCED, OperationPhase.SUCCEEDED)
        assert badge.tier == StatusTier.OK

    def test_unknown_values_are_pending(self) -> None:
        assert classify_sync(None).tier == StatusTier.PENDING
        assert classify_sync("Bogus").tier == StatusTier.PENDING


@pytest.mark.unit
class TestClassifyHealth:
    """Tests for classify_health."""

    @pytest.mark.parametrize(
        ("health", "tier"),
        [
            (HealthStatusCode.HEALTHY, StatusTier.OK),
            (HealthStatusCode.PROGRESSING, StatusTier.RUNNING),
            (HealthStatusCode.DEGRADED, StatusTier.ERROR),
            (HealthStatusCode.MISSING, StatusTier.ERROR),
            (HealthStatusCode.SUSPENDED, StatusTier.WARNING),
            (HealthStatusCode.UNKNOWN, StatusTier.PENDING),
            (None, StatusTier.PENDING),
        ],
    )
    def test_health_tiers(self, health: HealthStatusCode | None, tier: StatusTier) -> None:
        assert classify_health(health).tier == tier


# =============================================================================
# Validation precedence
# =============================================================================


@pytest.mark.unit
class TestClassifyValidation:
    """Tests for PostSync validation precedence."""

    def test_no_hooks(self) -> None:
        badge = classify_validation([])
        assert badge.tier == StatusTier.PENDING
        assert badge.title == "No validation"

    def test_pre_sync_hooks_are_ignored(self) -> None:
        pre_sync = HookResultInfo(
            kind="Job", name="migrate", hook_type=HookType.PRE_SYNC, hook_phase="Failed"
        )
        assert classify_validation([pre_sync]).title == "No validation"

    def test_failure_beats_running(self) -> None:
        """error > running regardless of order."""
        badge = classify_validation([_post_sync("Running"), _post_sync("Failed")])
        assert badge.tier == StatusTier.ERROR
        assert badge.icon == StatusIcon.CROSS

    def test_running_beats_success(self) -> None:
        badge = classify_validation([_post_sync("Succeeded"), _post_sync("Running")])
        assert badge.tier == StatusTier.RUNNING
        assert badge.title == "Validating"

    def test_all_succeeded(self) -> None:
        badge = classify_validation([_post_sync("Succeeded"), _post_sync("Succeeded")])
        assert badge.tier == StatusTier.OK
        assert badge.title == "Validated"

    def test_partial_unknown_phase_is_pending(self) -> None:
        badge = classify_validation([_post_sync("Succeeded"), _post_sync(None)])
        assert badge.tier == StatusTier.PENDING


# =============================================================================
# Resources
# =============================================================================


@pytest.mark.unit
class TestResourceRollup:
    """Tests for per-kind summaries and the overall rollup."""

    def test_summarize_kind_counts(self) -> None:
        summary = summarize_kind(
            "Pod",
            [
                _node("Pod", HealthStatusCode.HEALTHY),
                _node("Pod", HealthStatusCode.PROGRESSING),
                _node("Pod", HealthStatusCode.DEGRADED),
                _node("Pod", None),
            ],
        )
        assert (summary.total, summary.healthy, summary.progressing, summary.degraded) == (
            4,
            1,
            1,
            1,
        )
        assert summary.tier == StatusTier.ERROR

    def test_all_healthy_is_ok(self) -> None:
        summaries, tier = classify_resource_rollup(
            {"Deployment": [_node("Deployment", HealthStatusCode.HEALTHY)]}
        )
        assert summaries[0].tier == StatusTier.OK
        assert tier == StatusTier.OK

    def test_progressing_rolls_up_to_running(self) -> None:
        _, tier = classify_resource_rollup(
            {
                "Deployment": [_node("Deployment", HealthStatusCode.HEALTHY)],
                "Pod": [_node("Pod", HealthStatusCode.PROGRESSING)],
            }
        )
        assert tier == StatusTier.RUNNING

    def test_degraded_wins_over_progressing(self) -> None:
        _, tier = classify_resource_rollup(
            {
                "Pod": [_node("Pod", HealthStatusCode.PROGRESSING)],
                "Service": [_node("Service", HealthStatusCode.MISSING)],
            }
        )
        assert tier == StatusTier.ERROR

    def test_nodes_without_health_are_pending(self) -> None:
        _, tier = classify_resource_rollup({"ConfigMap": [_node("ConfigMap", None)]})
        assert tier == StatusTier.PENDING

    def test_empty_rollup_is_pending(self) -> None:
        summaries, tier = classify_resource_rollup({})
        assert summaries == []
        assert tier == StatusTier.PENDING


# =============================================================================
# Layers / activity
# =============================================================================


@pytest.mark.unit
class TestLayerClassification:
    """Tests for classify_layer and is_application_active."""

    def test_empty_layer_is_ok(self) -> None:
        assert classify_layer([]) == StatusTier.OK

    def test_degraded_app_makes_layer_error(self) -> None:
        apps = [
            ApplicationInfo(name="a", health_status=HealthStatusCode.PROGRESSING),
            ApplicationInfo(name="b", health_status=HealthStatusCode.DEGRADED),
        ]
        assert classify_layer(apps) == StatusTier.ERROR

    def test_out_of_sync_makes_layer_warning(self) -> None:
        apps = [ApplicationInfo(name="a", sync_status=SyncStatusCode.OUT_OF_SYNC)]
        assert classify_layer(apps) == StatusTier.WARNING

    def test_idle_synced_app_is_inactive(self) -> None:
        app = ApplicationInfo(
            name="a",
            sync_status=SyncStatusCode.SYNCED,
            health_status=HealthStatusCode.HEALTHY,
        )
        assert is_application_active(app) is False

    @pytest.mark.parametrize(
        "app",
        [
            ApplicationInfo(name="a", health_status=HealthStatusCode.PROGRESSING),
            ApplicationInfo(name="a", sync_status=SyncStatusCode.OUT_OF_SYNC),
            ApplicationInfo(name="a", operation=OperationInfo(phase=OperationPhase.RUNNING)),
            ApplicationInfo(name="a", hooks=[_post_sync("Running")]),
        ],
    )
    def test_active_conditions(self, app: ApplicationInfo) -> None:
        assert is_application_active(app) is True

    def test_running_pre_sync_hook_is_not_activity(self) -> None:
        hook = HookResultInfo(
            kind="Job", name="migrate", hook_type=HookType.PRE_SYNC, hook_phase="Running"
        )
        app = ApplicationInfo(
            name="a",
            sync_status=SyncStatusCode.SYNCED,
            health_status=HealthStatusCode.HEALTHY,
            hooks=[hook],
        )
        assert is_application_active(app) is False
