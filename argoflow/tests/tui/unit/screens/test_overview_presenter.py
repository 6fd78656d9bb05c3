"""Tests for the overview presenter."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from argoflow.constants.enums import (
    FetchState,
    HealthStatusCode,
    HookType,
    OperationPhase,
    StatusTier,
    SyncStatusCode,
)
from argoflow.controllers.resources import ResourceAggregator, ResourceLoadState
from argoflow.controllers.topology import StageTopologyBuilder
from argoflow.models.core.application_info import (
    ApplicationInfo,
    HookResultInfo,
    OperationInfo,
)
from argoflow.models.core.resource_info import ResourceNodeInfo
from argoflow.models.topology.stage_info import LayerConfig
from argoflow.screens.overview.presenter import OverviewPresenter, badge_markup

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def presenter() -> OverviewPresenter:
    builder = StageTopologyBuilder(
        [
            LayerConfig(key="database", label="Database", order=0),
            LayerConfig(key="auth", label="Auth", order=1, depends_on=("database",)),
        ]
    )
    return OverviewPresenter(builder)


def _app(**kwargs) -> ApplicationInfo:
    defaults = {
        "name": "pg",
        "namespace": "argocd",
        "category": "database",
        "sync_status": SyncStatusCode.SYNCED,
        "health_status": HealthStatusCode.HEALTHY,
    }
    defaults.update(kwargs)
    return ApplicationInfo(**defaults)


@pytest.mark.unit
class TestOverviewPresenterBanner:
    """Tests for the connection banner."""

    def test_loading_before_any_data(self, presenter: OverviewPresenter) -> None:
        assert presenter.banner_text() == "Loading applications..."

    def test_error_before_any_data(self, presenter: OverviewPresenter) -> None:
        presenter.set_connection(False, "HTTP 401 Unauthorized", False)
        assert "HTTP 401 Unauthorized" in presenter.banner_text()
        assert "Error" in presenter.banner_text()

    def test_connected_hides_banner(self, presenter: OverviewPresenter) -> None:
        presenter.set_connection(True, None, True)
        assert presenter.banner_text() == ""

    def test_reconnecting_with_data(self, presenter: OverviewPresenter) -> None:
        presenter.update({"database": [_app()]})
        presenter.set_connection(False, "Stream closed by server", True)

        text = presenter.banner_text()

        assert "reconnecting" in text
        assert "Stream closed by server" in text

    def test_error_text_is_escaped(self, presenter: OverviewPresenter) -> None:
        presenter.set_connection(False, "bad [red]markup", False)
        assert "\\[red]" in presenter.banner_text()


@pytest.mark.unit
class TestOverviewPresenterRows:
    """Tests for row and stage formatting."""

    def test_format_application(self, presenter: OverviewPresenter) -> None:
        app = _app(
            operation=OperationInfo(
                phase=OperationPhase.SUCCEEDED, finished_at=NOW - timedelta(minutes=5)
            ),
            hooks=[
                HookResultInfo(
                    kind="Job", name="smoke", hook_type=HookType.POST_SYNC, hook_phase="Succeeded"
                )
            ],
        )

        row = presenter.format_application(app, NOW)

        assert row.sync.tier == StatusTier.OK
        assert row.health.tier == StatusTier.OK
        assert row.validation.title == "Validated"
        assert row.last_synced == "5m ago"
        assert row.link == "/applications/argocd/pg"
        assert [label for label, _, _ in row.hooks] == ["PostSync"]

    def test_badge_markup(self, presenter: OverviewPresenter) -> None:
        row = presenter.format_application(_app(health_status=HealthStatusCode.DEGRADED))
        assert badge_markup(row.health) == "[red]✘[/red]"

    def test_update_returns_topology(self, presenter: OverviewPresenter) -> None:
        topology = presenter.update({"database": [_app()], "extra": [_app(name="x", category="extra")]})

        assert presenter.topology is topology
        assert [stage.order for stage in topology.stages] == [0, 1, 2]

    def test_stage_text_lists_apps_and_empty_layers(self, presenter: OverviewPresenter) -> None:
        topology = presenter.update({"database": [_app()]})

        database = presenter.stage_text(topology.stages[0], NOW)
        auth = presenter.stage_text(topology.stages[1], NOW)

        assert "Database" in database
        assert "pg" in database
        assert "No apps" in auth

    def test_active_stage_marked(self, presenter: OverviewPresenter) -> None:
        topology = presenter.update({"database": [_app(sync_status=SyncStatusCode.OUT_OF_SYNC)]})
        assert "(active)" in presenter.stage_text(topology.stages[0])
        assert "⇣" in presenter.transition_text(0)

    def test_idle_transition(self, presenter: OverviewPresenter) -> None:
        presenter.update({"database": [_app()]})
        assert "⇣" not in presenter.transition_text(0)
        assert "⇣" not in presenter.transition_text(5)

    def test_expanded_app_shows_hooks(self, presenter: OverviewPresenter) -> None:
        hook = HookResultInfo(
            kind="Job",
            name="migrate",
            hook_type=HookType.PRE_SYNC,
            hook_phase="Failed",
            message="boom",
        )
        topology = presenter.update({"database": [_app(hooks=[hook])]})
        layer = topology.stages[0].layers[0]

        assert not any("boom" in line for line in presenter.layer_lines(layer))
        assert presenter.toggle_expanded("pg") is True
        assert any("PreSync" in line and "boom" in line for line in presenter.layer_lines(layer))
        assert presenter.toggle_expanded("pg") is False
        assert presenter.expanded == set()


@pytest.mark.unit
class TestOverviewPresenterResources:
    """Tests for resource detail text."""

    def test_loading(self) -> None:
        text = OverviewPresenter.resource_text("pg", ResourceLoadState(state=FetchState.LOADING))
        assert "Loading" in text

    def test_error(self) -> None:
        state = ResourceLoadState(state=FetchState.ERROR, error="HTTP 404 Not Found")
        assert "HTTP 404 Not Found" in OverviewPresenter.resource_text("pg", state)

    def test_idle(self) -> None:
        assert "Not loaded" in OverviewPresenter.resource_text("pg", ResourceLoadState())

    def test_rollup(self) -> None:
        rollup = ResourceAggregator().summarize(
            "pg",
            [
                ResourceNodeInfo(kind="Pod", name="a", health_status=HealthStatusCode.HEALTHY),
                ResourceNodeInfo(kind="Pod", name="b", health_status=HealthStatusCode.DEGRADED),
            ],
        )
        state = ResourceLoadState(state=FetchState.SUCCESS, rollup=rollup)

        text = OverviewPresenter.resource_text("pg", state)

        assert "Pod: 2 total, 1 healthy, 0 progressing, 1 degraded" in text
        assert "error" in text
