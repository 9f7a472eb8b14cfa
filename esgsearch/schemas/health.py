"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    recent_search_backend: str = Field(
        default="memory", description="Where recent searches are kept: redis | memory"
    )
