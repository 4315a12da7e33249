"""Health check API schemas."""

from pydantic import BaseModel, Field

from orgfinder.domain.enums import IndexState


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class StoreStatusResponse(BaseModel):
    """Response for GET /health/store."""

    has_data: bool = Field(..., description="False when empty or unreachable")


class IndexStatusResponse(BaseModel):
    """Response for GET /health/index."""

    state: IndexState
    documents: int = Field(..., description="Records in the built index")
