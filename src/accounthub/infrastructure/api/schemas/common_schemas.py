"""Shared response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error payload returned for domain errors."""

    status: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable error message")


class ValidationErrorResponse(ErrorResponse):
    """Error payload for field validation failures."""

    errors: dict[str, str] = Field(
        default_factory=dict, description="One message per offending field"
    )


class MessageResponse(BaseModel):
    """Success payload for operations without a resource body."""

    message: str = Field(..., description="Outcome of the operation")
    timestamp: datetime = Field(..., description="When the operation completed")
