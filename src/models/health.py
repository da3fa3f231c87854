"""Health check models for inference services"""

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(BaseModel):
    """Healthy, or unhealthy with a reason"""
    model_config = ConfigDict(frozen=True)

    state: Literal["healthy", "unhealthy"]
    reason: Optional[str] = None

    @classmethod
    def healthy(cls) -> "HealthStatus":
        return cls(state="healthy")

    @classmethod
    def unhealthy(cls, reason: str) -> "HealthStatus":
        return cls(state="unhealthy", reason=reason)

    @property
    def is_healthy(self) -> bool:
        return self.state == "healthy"


class HealthCheckResult(BaseModel):
    """Result of a single health probe"""
    model_config = ConfigDict(frozen=True)

    status: HealthStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def with_metadata(self, key: str, value: Any) -> "HealthCheckResult":
        return self.model_copy(update={"metadata": {**self.metadata, key: value}})
