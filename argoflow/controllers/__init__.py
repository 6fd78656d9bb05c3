"""Controllers module for argoflow.

This module provides domain-driven controllers for tracking Argo CD
applications, building the stage topology and aggregating resources.
"""

from __future__ import annotations

# Base classes
from argoflow.controllers.base import BaseController, WorkerResult

# Applications domain
from argoflow.controllers.applications import (
    ApplicationsController,
    ApplicationStore,
    ApplicationStream,
    backoff_delay,
)

# Resources domain
from argoflow.controllers.resources import (
    ResourceAggregator,
    ResourceLoadState,
    ResourceTreeLoader,
)

# Topology domain
from argoflow.controllers.topology import StageTopologyBuilder

__all__ = [
    # Base
    "BaseController",
    "WorkerResult",
    # Applications
    "ApplicationStore",
    "ApplicationStream",
    "ApplicationsController",
    "backoff_delay",
    # Resources
    "ResourceAggregator",
    "ResourceLoadState",
    "ResourceTreeLoader",
    # Topology
    "StageTopologyBuilder",
]
