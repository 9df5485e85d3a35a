"""
BrandAgent Backend - Shared Response Schemas
==============================================

ErrorResponse documents the body every exception handler in main.py emits;
HealthResponse is returned by GET /health.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Example:
        {"error": "wrong password", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
