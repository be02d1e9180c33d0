"""
Shared response schemas
"""

from pydantic import BaseModel
from typing import Any, Dict, Optional


class ErrorResponse(BaseModel):
    """Error envelope returned by every endpoint"""
    error: str
    message: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    ok: bool = True


# OpenAPI documentation for error statuses shared by authenticated routes
AUTH_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "missing_bearer_token, invalid_token or authentication_error"},
}
