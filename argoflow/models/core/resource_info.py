"""Resource tree node and aggregate models."""

from datetime import datetime

from pydantic import BaseModel, Field

from argoflow.constants.enums import HealthStatusCode, StatusTier


class ResourceNodeInfo(BaseModel):
    """A Kubernetes resource owned by an application."""

    kind: str
    name: str
    namespace: str = ""
    uid: str = ""
    health_status: HealthStatusCode | None = None
    created_at: datetime | None = None


class ResourceKindSummary(BaseModel):
    """Health counts for one resource kind."""

    kind: str
    total: int = 0
    healthy: int = 0
    progressing: int = 0
    degraded: int = 0
    tier: StatusTier = StatusTier.PENDING


class ResourceRollup(BaseModel):
    """Per-kind summaries plus the overall rollup for one application."""

    app_name: str
    kinds: list[ResourceKindSummary] = Field(default_factory=list)
    tier: StatusTier = StatusTier.PENDING

    @property
    def total(self) -> int:
        return sum(summary.total for summary in self.kinds)
