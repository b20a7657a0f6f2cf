from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health body (plain JSON, not JSON:API)."""

    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    database_latency_ms: Optional[float] = Field(
        default=None, description="Round trip of the probe query; null when it failed"
    )
    api_prefix: str = Field(description="Mount point of the JSON:API routes")
    uptime_seconds: float
