"""Resource aggregator - per-kind health counts for one application."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from argoflow.constants.values import RESOURCE_KIND_PRIORITY
from argoflow.models.core.resource_info import ResourceNodeInfo, ResourceRollup
from argoflow.utils.status_classifier import classify_resource_rollup


class ResourceAggregator:
    """Groups resource nodes by kind and rolls their health up.

    Kinds are ordered by a display priority table (workloads, networking,
    then config), with unranked kinds after them in arrival order.
    """

    _UNRANKED = 1_000_000

    def __init__(self, kind_priority: Mapping[str, int] | None = None) -> None:
        self._kind_priority = dict(
            RESOURCE_KIND_PRIORITY if kind_priority is None else kind_priority
        )

    def group_by_kind(
        self, nodes: Iterable[ResourceNodeInfo]
    ) -> dict[str, list[ResourceNodeInfo]]:
        """Return ``kind -> nodes`` in display order."""
        arrival: dict[str, list[ResourceNodeInfo]] = {}
        for node in nodes:
            arrival.setdefault(node.kind, []).append(node)
        ordered = sorted(
            enumerate(arrival),
            key=lambda item: (self._kind_priority.get(item[1], self._UNRANKED), item[0]),
        )
        return {kind: arrival[kind] for _, kind in ordered}

    def summarize(self, app_name: str, nodes: Iterable[ResourceNodeInfo]) -> ResourceRollup:
        summaries, tier = classify_resource_rollup(self.group_by_kind(nodes))
        return ResourceRollup(app_name=app_name, kinds=summaries, tier=tier)
