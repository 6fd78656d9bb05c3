"""Stage topology domain."""

from argoflow.controllers.topology.stage_builder import StageTopologyBuilder

__all__ = ["StageTopologyBuilder"]
