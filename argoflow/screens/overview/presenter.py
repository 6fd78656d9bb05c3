"""Overview presenter - stage topology state and row formatting.

Keeps the latest ``TopologyInfo`` plus connection state and turns them into
rich-markup lines for the overview screen. Holds no widgets, so everything
here is testable without a running app.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from rich.markup import escape
from textual.message import Message

from argoflow.constants.enums import FetchState
from argoflow.constants.values import STATUS_GLYPHS, TIER_STYLES
from argoflow.controllers.resources.loader import ResourceLoadState
from argoflow.controllers.topology import StageTopologyBuilder
from argoflow.models.core.application_info import ApplicationInfo
from argoflow.models.topology.stage_info import LayerInfo, StageInfo, TopologyInfo
from argoflow.utils.status_classifier import (
    StatusBadge,
    classify_health,
    classify_hook,
    classify_sync,
    classify_validation,
)
from argoflow.utils.time_format import format_relative_time

logger = logging.getLogger(__name__)


# =============================================================================
# Messages
# =============================================================================


class ApplicationsChanged(Message):
    """The application store changed; the topology must be rebuilt."""


class ConnectionChanged(Message):
    """The stream connection state changed."""


class ResourcesChanged(Message):
    """The resource rollup of one application changed."""

    def __init__(self, app_name: str) -> None:
        super().__init__()
        self.app_name = app_name


# =============================================================================
# Rows
# =============================================================================


@dataclass(frozen=True)
class ApplicationRow:
    """Display data for one application."""

    name: str
    sync: StatusBadge
    health: StatusBadge
    validation: StatusBadge
    last_synced: str
    link: str
    hooks: tuple[tuple[str, StatusBadge, str], ...] = ()


def badge_markup(badge: StatusBadge) -> str:
    glyph = STATUS_GLYPHS.get(badge.icon.value, "?")
    style = TIER_STYLES.get(badge.tier.value, "white")
    return f"[{style}]{glyph}[/{style}]"


class OverviewPresenter:
    """Presenter for OverviewScreen."""

    _LOADING_MESSAGE = "Loading applications..."
    _RECONNECTING_MESSAGE = "Live updates disconnected, reconnecting"

    def __init__(self, builder: StageTopologyBuilder) -> None:
        self._builder = builder
        self._topology = builder.build({})
        self._connected = False
        self._last_error: str | None = None
        self._has_data = False
        self._expanded: set[str] = set()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def topology(self) -> TopologyInfo:
        return self._topology

    @property
    def expanded(self) -> set[str]:
        return set(self._expanded)

    # =========================================================================
    # State updates
    # =========================================================================

    def update(self, snapshot: Mapping[str, Sequence[ApplicationInfo]]) -> TopologyInfo:
        """Rebuild the topology from a fresh snapshot."""
        self._topology = self._builder.build(snapshot)
        self._has_data = self._has_data or bool(snapshot)
        return self._topology

    def set_connection(self, connected: bool, last_error: str | None, has_data: bool) -> None:
        self._connected = connected
        self._last_error = last_error
        self._has_data = self._has_data or has_data

    def toggle_expanded(self, app_name: str) -> bool:
        """Flip the detail view of ``app_name``; returns True when now expanded."""
        if app_name in self._expanded:
            self._expanded.discard(app_name)
            return False
        self._expanded.add(app_name)
        return True

    # =========================================================================
    # Formatting
    # =========================================================================

    def banner_text(self) -> str:
        """Status banner: empty while connected, otherwise loading/reconnecting."""
        if self._connected:
            return ""
        if not self._has_data:
            if self._last_error:
                return f"[red]Error:[/red] {escape(self._last_error)}"
            return self._LOADING_MESSAGE
        if self._last_error:
            return f"[yellow]{self._RECONNECTING_MESSAGE}:[/yellow] {escape(self._last_error)}"
        return f"[yellow]{self._RECONNECTING_MESSAGE}[/yellow]"

    @staticmethod
    def format_application(app: ApplicationInfo, now: datetime | None = None) -> ApplicationRow:
        return ApplicationRow(
            name=app.name,
            sync=classify_sync(app.sync_status, app.operation_phase),
            health=classify_health(app.health_status),
            validation=classify_validation(app.hooks),
            last_synced=format_relative_time(app.last_synced_at, now),
            link=app.link,
            hooks=tuple(
                (hook.label, classify_hook(hook.hook_phase), hook.message) for hook in app.hooks
            ),
        )

    def layer_lines(self, layer: LayerInfo, now: datetime | None = None) -> list[str]:
        border = TIER_STYLES.get(layer.status_tier.value, "white")
        marker = " [cyan]»[/cyan]" if layer.active else ""
        lines = [f"[bold {border}]{escape(layer.label)}[/bold {border}]{marker}"]
        if not layer.applications:
            lines.append("    [dim]No apps[/dim]")
            return lines
        for app in layer.applications:
            row = self.format_application(app, now)
            dots = " ".join(badge_markup(b) for b in (row.sync, row.health, row.validation))
            suffix = f" [dim]{row.last_synced}[/dim]" if row.last_synced else ""
            lines.append(f"  {dots} {escape(row.name)}{suffix}")
            if app.name in self._expanded:
                lines.extend(
                    f"      {escape(label)}: {badge_markup(badge)} [dim]{escape(message)}[/dim]"
                    for label, badge, message in row.hooks
                )
        return lines

    def stage_text(self, stage: StageInfo, now: datetime | None = None) -> str:
        header = f"[b]Stage {stage.order}[/b]" + (" [cyan](active)[/cyan]" if stage.active else "")
        lines = [header]
        for layer in stage.layers:
            lines.extend(self.layer_lines(layer, now))
        return "\n".join(lines)

    def transition_text(self, index: int) -> str:
        lit = index < len(self._topology.transitions) and self._topology.transitions[index]
        return "[cyan]  ⇣ ⇣ ⇣[/cyan]" if lit else "[dim]  ↓[/dim]"

    @staticmethod
    def resource_text(app_name: str, state: ResourceLoadState) -> str:
        """Detail panel text for one application's resources."""
        title = f"[b]{escape(app_name)}[/b] resources"
        if state.state == FetchState.LOADING and state.rollup is None:
            return f"{title}\n  Loading..."
        if state.state == FetchState.ERROR:
            return f"{title}\n  [red]Failed to load:[/red] {escape(state.error or 'unknown error')}"
        if state.rollup is None:
            return f"{title}\n  [dim]Not loaded[/dim]"
        style = TIER_STYLES.get(state.rollup.tier.value, "white")
        lines = [f"{title} [{style}]{state.rollup.tier.value}[/{style}]"]
        for summary in state.rollup.kinds:
            lines.append(
                f"  {escape(summary.kind)}: {summary.total} total, "
                f"{summary.healthy} healthy, {summary.progressing} progressing, "
                f"{summary.degraded} degraded"
            )
        return "\n".join(lines)
