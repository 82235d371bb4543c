"""Common schemas for API responses"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response schema"""

    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "message": "Invalid game duration",
                "error_code": "INVALID_DURATION",
                "details": {"duration": 0},
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response schema"""

    status: str = "OK"
    timestamp: str
    version: str

    class Config:
        json_schema_extra = {
            "example": {
                "status": "OK",
                "timestamp": "2024-01-01T12:00:00.000Z",
                "version": "1.0.0",
            }
        }


class RootResponse(BaseModel):
    """Service banner"""

    message: str
    version: str
    docs: str
