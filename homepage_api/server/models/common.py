"""Common Pydantic models for API requests and responses.

This module contains shared response models used across the API.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ServiceStatus(BaseModel):
    """Availability of external services.

    Attributes:
        alpha_vantage: Alpha Vantage market data availability
    """

    alpha_vantage: Literal["available", "unavailable", "not_configured"] = Field(
        ..., description="Alpha Vantage market data availability"
    )


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service health status
        timestamp: Current server timestamp
        version: Application version
        environment: Deployment environment label
        services: External service availability
    """

    status: Literal["healthy", "unhealthy"] = Field(
        default="healthy", description="Service health status"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Current server timestamp"
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    services: ServiceStatus = Field(..., description="External service availability")


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type or code
        message: Human-readable error message
        detail: Additional error details
        timestamp: When the error occurred
    """

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(
        default=None, description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Error timestamp"
    )
