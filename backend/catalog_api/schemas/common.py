"""
Catalog API — Shared Response Schemas
=======================================

What:  Envelope, error and health models used by more than one route module.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class StatusMessage(BaseModel):
    """
    What:  Minimal `{status, message}` body.
    Who:   GET /ping and a successful DELETE /product/{id}.
    """
    status: Literal["success", "error"] = Field(default="success")
    message: str


class FieldError(BaseModel):
    """
    One failed field inside a 400 response.

    `field` is the location path of the offending value, e.g.
    ["body", "categories", 0, "id"].
    """
    field: List[Union[str, int]] = Field(description="Path to the invalid value")
    message: str = Field(description="Why the value was rejected")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every non-2xx response.

    Example:
        {
            "status": "error",
            "message": "Validation failed",
            "errors": [{"field": ["body", "price"], "message": "Input should be ..."}]
        }
    """
    status: Literal["error"] = Field(default="error")
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(
        default=None,
        description="Field-level details (validation and batched reference errors)",
    )


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
