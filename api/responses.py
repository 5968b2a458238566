"""
Standardized API response models and utilities.
Every error leaves the service in the same envelope.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field
from datetime import datetime, timezone


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[List[Any]] = Field(
        None, description="Per-field violations for validation errors"
    )


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(..., description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")


def error_response(error: dict) -> dict:
    """Wrap an ``{"code", "message", "details"?}`` dict in the error envelope"""
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# OpenAPI documentation for the errors every authenticated route can return
AUTH_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    401: {"model": ErrorResponse, "description": "Missing credentials"},
    403: {"model": ErrorResponse, "description": "Invalid or expired token"},
    404: {"model": ErrorResponse, "description": "Not found or not owned"},
}
