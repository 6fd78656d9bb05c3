"""Layer configuration and derived stage topology models."""

from pydantic import BaseModel, ConfigDict, Field

from argoflow.constants.enums import StatusTier
from argoflow.models.core.application_info import ApplicationInfo


class LayerConfig(BaseModel):
    """Static configuration for one delivery layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    label: str
    order: int
    depends_on: tuple[str, ...] = Field(default=(), alias="dependsOn")
    description: str = ""


class LayerInfo(BaseModel):
    """One layer of a stage together with its applications."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    depends_on: tuple[str, ...] = ()
    applications: tuple[ApplicationInfo, ...] = ()
    active: bool = False
    status_tier: StatusTier = StatusTier.OK
    configured: bool = True


class StageInfo(BaseModel):
    """Layers sharing one dependency rank."""

    model_config = ConfigDict(frozen=True)

    order: int
    layers: tuple[LayerInfo, ...] = ()
    active: bool = False

    @property
    def layer_keys(self) -> list[str]:
        return [layer.key for layer in self.layers]


class TopologyInfo(BaseModel):
    """Ordered stages plus the lit state of each inter-stage transition.

    ``transitions[i]`` describes the hand-off into ``stages[i + 1]``.
    """

    model_config = ConfigDict(frozen=True)

    stages: tuple[StageInfo, ...] = ()
    transitions: tuple[bool, ...] = ()
    edges: tuple[tuple[str, str], ...] = ()

    def layer(self, key: str) -> LayerInfo | None:
        for stage in self.stages:
            for layer in stage.layers:
                if layer.key == key:
                    return layer
        return None
