"""Pydantic schemas for metrics endpoints."""

from pydantic import BaseModel, Field


class AccountMetricsResponse(BaseModel):
    """Count of accounts matching a balance condition."""

    count: int = Field(..., description="Number of matching accounts")
    condition: str = Field(..., description="The condition that was applied")

    model_config = {"from_attributes": True}
