"""
Malls API Backend — Shared Pydantic Schema Pieces
===================================================

What:  The camelCase base model used by every request/response schema, plus
       the error and health response models.
How:   ApiModel generates camelCase aliases (postal_code → postalCode) and
       accepts either spelling on input. FastAPI serializes response models
       by alias, so the wire format is camelCase with `_id` identifiers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all API schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        status: Classification label (Bad Request, Unauthorized, Forbidden, Not Found, Error)
        statusCode: Numeric HTTP status
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(description="Status classification")
    status_code: int = Field(alias="statusCode", description="HTTP status code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
