"""Screens for the argoflow TUI."""

from argoflow.screens.overview import OverviewPresenter, OverviewScreen

__all__ = ["OverviewPresenter", "OverviewScreen"]
