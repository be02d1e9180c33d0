"""
Exception handlers rendering the JSON error envelope
"""

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.validation import flatten_errors
from core.exceptions import ApiError, InvalidBodyError

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """{"error": code, "message"?: ..., "details"?: ...} with the error's status"""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body/schema validation failures → 400 invalid_body with per-field details"""
    error = InvalidBodyError(details=flatten_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
