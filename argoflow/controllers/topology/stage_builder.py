"""Stage topology builder.

Groups the current application snapshot into dependency-ordered stages:

- Layers sharing an ``order`` form one stage; stages sort by order.
- Inside a stage, layers keep the configuration's insertion order.
- Categories seen in the snapshot but missing from the configuration go to
  one extra stage ranked just above the highest configured order.
- A layer is active when any of its applications is active; a stage is
  active when any of its layers is; a transition between two neighbouring
  stages is lit when either side is active.

The result is rebuilt from scratch on every call and never patched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from argoflow.models.core.application_info import ApplicationInfo
from argoflow.models.topology.stage_info import (
    LayerConfig,
    LayerInfo,
    StageInfo,
    TopologyInfo,
)
from argoflow.utils.status_classifier import classify_layer, is_application_active

logger = logging.getLogger(__name__)


def _capitalize(key: str) -> str:
    return key[:1].upper() + key[1:]


class StageTopologyBuilder:
    """Builds ``TopologyInfo`` from a static layer table and a snapshot."""

    def __init__(self, layers: Iterable[LayerConfig]) -> None:
        self._layers: tuple[LayerConfig, ...] = tuple(layers)
        self._configured_keys = frozenset(layer.key for layer in self._layers)

    @property
    def layers(self) -> tuple[LayerConfig, ...]:
        return self._layers

    @staticmethod
    def _build_layer(
        key: str,
        label: str,
        depends_on: tuple[str, ...],
        applications: Sequence[ApplicationInfo],
        *,
        configured: bool,
    ) -> LayerInfo:
        apps = tuple(applications)
        return LayerInfo(
            key=key,
            label=label,
            depends_on=depends_on,
            applications=apps,
            active=any(is_application_active(app) for app in apps),
            status_tier=classify_layer(apps),
            configured=configured,
        )

    @staticmethod
    def _build_stage(order: int, layers: list[LayerInfo]) -> StageInfo:
        return StageInfo(
            order=order,
            layers=tuple(layers),
            active=any(layer.active for layer in layers),
        )

    def build(self, snapshot: Mapping[str, Sequence[ApplicationInfo]]) -> TopologyInfo:
        """Build the ordered stages for ``snapshot`` (category -> applications)."""
        buckets: dict[int, list[LayerConfig]] = {}
        for layer in self._layers:
            buckets.setdefault(layer.order, []).append(layer)

        stages: list[StageInfo] = []
        for order in sorted(buckets):
            stages.append(
                self._build_stage(
                    order,
                    [
                        self._build_layer(
                            config.key,
                            config.label,
                            config.depends_on,
                            snapshot.get(config.key, ()),
                            configured=True,
                        )
                        for config in buckets[order]
                    ],
                )
            )

        unconfigured = [key for key in snapshot if key not in self._configured_keys]
        if unconfigured:
            extra_order = max(buckets) + 1 if buckets else 0
            logger.debug("Unconfigured categories placed last: %s", unconfigured)
            stages.append(
                self._build_stage(
                    extra_order,
                    [
                        self._build_layer(
                            key,
                            _capitalize(key),
                            (),
                            snapshot[key],
                            configured=False,
                        )
                        for key in unconfigured
                    ],
                )
            )

        transitions = tuple(
            stages[index].active or stages[index + 1].active
            for index in range(len(stages) - 1)
        )
        edges = tuple(
            (dependency, layer.key)
            for layer in self._layers
            for dependency in layer.depends_on
        )
        return TopologyInfo(stages=tuple(stages), transitions=transitions, edges=edges)
