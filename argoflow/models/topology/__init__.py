"""Layer configuration and stage topology models."""

from argoflow.models.topology.stage_info import (
    LayerConfig,
    LayerInfo,
    StageInfo,
    TopologyInfo,
)

__all__ = ["LayerConfig", "LayerInfo", "StageInfo", "TopologyInfo"]
