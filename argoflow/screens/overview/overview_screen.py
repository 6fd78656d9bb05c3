"""Overview screen - live stage topology of Argo CD applications."""

from __future__ import annotations

import logging
from contextlib import suppress

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from argoflow.constants.enums import StreamState
from argoflow.controllers.applications import ApplicationsController
from argoflow.controllers.resources import ResourceAggregator, ResourceTreeLoader
from argoflow.controllers.topology import StageTopologyBuilder
from argoflow.screens.overview.presenter import (
    ApplicationsChanged,
    ConnectionChanged,
    OverviewPresenter,
    ResourcesChanged,
    badge_markup,
)

logger = logging.getLogger(__name__)


class OverviewScreen(Screen[None]):
    """Stages on the left, application list and resource detail on the right."""

    DEFAULT_CSS = """
    OverviewScreen {
        layout: horizontal;
    }

    #overview-banner {
        dock: top;
        height: auto;
        padding: 0 1;
    }

    #overview-stages {
        width: 2fr;
        padding: 0 1;
    }

    .overview-stage {
        border: round $primary;
        padding: 0 1;
        height: auto;
    }

    .overview-stage.active {
        border: round $accent;
    }

    .overview-transition {
        height: 1;
    }

    #overview-side {
        width: 1fr;
    }

    #overview-apps {
        height: 1fr;
    }

    #overview-detail {
        height: auto;
        min-height: 3;
        border: round $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
        Binding("escape", "collapse", "Collapse"),
    ]

    def __init__(
        self,
        controller: ApplicationsController,
        builder: StageTopologyBuilder,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.presenter = OverviewPresenter(builder)
        self.loader = ResourceTreeLoader(
            controller.fetch_resource_nodes,
            ResourceAggregator(),
            on_update=self._on_resources_updated,
        )
        self._selected: str | None = None
        self._stage_widgets: list[Static] = []
        self._transition_widgets: list[Static] = []
        self._option_ids: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self.presenter.banner_text(), id="overview-banner")
        yield VerticalScroll(id="overview-stages")
        with Vertical(id="overview-side"):
            yield OptionList(id="overview-apps")
            yield Static("[dim]Select an application[/dim]", id="overview-detail")
        yield Footer()

    def on_mount(self) -> None:
        self.controller.set_callbacks(
            on_change=lambda: self.post_message(ApplicationsChanged()),
            on_state_change=self._on_stream_state,
        )
        self._refresh_view()
        self.controller.start()

    async def on_unmount(self) -> None:
        await self.loader.cancel_all()
        await self.controller.stop()

    # =========================================================================
    # Controller callbacks
    # =========================================================================

    def _on_stream_state(self, state: StreamState) -> None:
        logger.debug("Stream state: %s", state.value)
        self.post_message(ConnectionChanged())

    def _on_resources_updated(self, app_name: str) -> None:
        self.post_message(ResourcesChanged(app_name))

    # =========================================================================
    # Message handlers
    # =========================================================================

    def on_applications_changed(self, _: ApplicationsChanged) -> None:
        self._refresh_view()

    def on_connection_changed(self, _: ConnectionChanged) -> None:
        self._refresh_banner()

    def on_resources_changed(self, event: ResourcesChanged) -> None:
        if event.app_name == self._selected:
            self._refresh_detail()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        app_name = event.option.id
        if app_name is None:
            return
        app = self.controller.store.get(app_name)
        if self.presenter.toggle_expanded(app_name):
            if self._selected and self._selected != app_name:
                self._collapse(self._selected)
            self._selected = app_name
            if app is not None:
                self.loader.load(app.name, app.namespace)
        else:
            self._collapse(app_name)
        self._refresh_view()

    # =========================================================================
    # Actions
    # =========================================================================

    async def action_refresh(self) -> None:
        result = await self.controller.refresh()
        if not result.success:
            self.notify(result.error or "Refresh failed", severity="error")

    def action_collapse(self) -> None:
        if self._selected is not None:
            self._collapse(self._selected)
            self._refresh_view()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _collapse(self, app_name: str) -> None:
        if app_name in self.presenter.expanded:
            self.presenter.toggle_expanded(app_name)
        self.loader.cancel(app_name)
        if self._selected == app_name:
            self._selected = None

    def _refresh_banner(self) -> None:
        self.presenter.set_connection(
            self.controller.connected,
            self.controller.last_error,
            self.controller.has_data,
        )
        with suppress(NoMatches):
            banner = self.query_one("#overview-banner", Static)
            text = self.presenter.banner_text()
            banner.update(text)
            banner.display = bool(text)

    def _refresh_view(self) -> None:
        self.presenter.update(self.controller.snapshot())
        self._refresh_banner()
        try:
            container = self.query_one("#overview-stages", VerticalScroll)
            options = self.query_one("#overview-apps", OptionList)
        except NoMatches:
            return

        self._render_stages(container)
        self._render_options(options)
        self._refresh_detail()

    def _render_stages(self, container: VerticalScroll) -> None:
        stages = self.presenter.topology.stages
        if len(stages) == len(self._stage_widgets):
            for stage, widget in zip(stages, self._stage_widgets):
                widget.update(self.presenter.stage_text(stage))
                widget.set_class(stage.active, "active")
            for index, widget in enumerate(self._transition_widgets):
                widget.update(self.presenter.transition_text(index))
            return

        container.remove_children()
        self._stage_widgets = []
        self._transition_widgets = []
        widgets: list[Static] = []
        for index, stage in enumerate(stages):
            if index:
                transition = Static(
                    self.presenter.transition_text(index - 1),
                    classes="overview-transition",
                )
                self._transition_widgets.append(transition)
                widgets.append(transition)
            widget = Static(self.presenter.stage_text(stage), classes="overview-stage")
            widget.set_class(stage.active, "active")
            self._stage_widgets.append(widget)
            widgets.append(widget)
        container.mount_all(widgets)

    def _render_options(self, options: OptionList) -> None:
        rows: list[tuple[str, str]] = []
        for stage in self.presenter.topology.stages:
            for layer in stage.layers:
                for app in layer.applications:
                    row = self.presenter.format_application(app)
                    prompt = (
                        f"{badge_markup(row.sync)} {badge_markup(row.health)} "
                        f"{escape(row.name)} [dim]{escape(layer.label)}[/dim]"
                    )
                    rows.append((app.name, prompt))

        option_ids = [app_name for app_name, _ in rows]
        if option_ids == self._option_ids:
            for app_name, prompt in rows:
                options.replace_option_prompt(app_name, prompt)
            return

        highlighted = options.highlighted
        highlighted_id: str | None = None
        if highlighted is not None and highlighted < len(self._option_ids):
            highlighted_id = self._option_ids[highlighted]
        options.clear_options()
        options.add_options([Option(prompt, id=app_name) for app_name, prompt in rows])
        self._option_ids = option_ids
        if highlighted_id in option_ids:
            options.highlighted = option_ids.index(highlighted_id)
        elif highlighted is not None and rows:
            options.highlighted = min(highlighted, len(rows) - 1)

    def _refresh_detail(self) -> None:
        with suppress(NoMatches):
            detail = self.query_one("#overview-detail", Static)
            if self._selected is None:
                detail.update("[dim]Select an application[/dim]")
                return
            app = self.controller.store.get(self._selected)
            lines = [self.presenter.resource_text(self._selected, self.loader.get_state(self._selected))]
            if app is not None:
                row = self.presenter.format_application(app)
                lines.append(
                    f"Sync {badge_markup(row.sync)} {escape(row.sync.title)}  "
                    f"Health {badge_markup(row.health)} {escape(row.health.title)}  "
                    f"Validation {badge_markup(row.validation)} {escape(row.validation.title)}"
                )
                if app.health_message:
                    lines.append(f"[dim]{escape(app.health_message)}[/dim]")
                lines.append(f"[dim]{escape(row.link)}[/dim]")
            detail.update("\n".join(lines))
