"""Resource aggregation domain."""

from argoflow.controllers.resources.aggregator import ResourceAggregator
from argoflow.controllers.resources.loader import ResourceLoadState, ResourceTreeLoader

__all__ = ["ResourceAggregator", "ResourceLoadState", "ResourceTreeLoader"]
