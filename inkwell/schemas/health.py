"""Health check schemas."""

from pydantic import BaseModel, Field


class StoreHealth(BaseModel):
    """Blog store status (nested in HealthCheckResponse)."""

    backend: str = Field(description="Active blog store backend")
    status: str = Field(description="Store reachability")
    total_blogs: int | None = Field(default=None, description="Blogs held by the store")


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    store: StoreHealth = Field(description="Blog store information")
