"""
Error handling for the booking reconciliation API
"""

from datetime import datetime
from typing import Any, Dict, Optional

import structlog
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .types import AuthExhausted, BatchInputError, ReconciliationError

logger = structlog.get_logger()


class ErrorCode:
    """Standard error codes for the reconciliation service"""

    # Client errors (4xx)
    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    AUTH_EXHAUSTED = "AUTH_EXHAUSTED"
    BATCH_INPUT_ERROR = "BATCH_INPUT_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class ErrorHandler:
    """Centralized error response formatting"""

    @staticmethod
    def create_error_response(
        status_code: int,
        message: str,
        error_code: str,
        details: Optional[Any] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create standardized error response"""

        error_response = {
            "status": "error",
            "error": "Internal Server Error" if status_code >= 500 else "Request Error",
            "message": message,
            "error_code": error_code,
            "timestamp": datetime.now().isoformat()
        }

        if details:
            error_response["details"] = details

        if request_id:
            error_response["request_id"] = request_id

        return error_response


class ExceptionMapper:
    """Map exceptions to appropriate HTTP responses"""

    @staticmethod
    def map_exception(exception: Exception, request_id: str = None) -> HTTPException:
        """Map batch-level exceptions to HTTP exceptions"""

        if isinstance(exception, HTTPException):
            return exception

        if isinstance(exception, AuthExhausted):
            error_code = ErrorCode.AUTH_EXHAUSTED
            message = "Unable to obtain an authorization key from the reservation API"
        elif isinstance(exception, BatchInputError):
            error_code = ErrorCode.BATCH_INPUT_ERROR
            message = str(exception)
        else:
            error_code = ErrorCode.INTERNAL_ERROR
            message = "We're experiencing technical difficulties. Please try again later."

        details = str(exception) if isinstance(exception, ReconciliationError) else {
            "exception_type": type(exception).__name__
        }

        return HTTPException(
            status_code=500,
            detail=ErrorHandler.create_error_response(
                status_code=500,
                message=message,
                error_code=error_code,
                details=details,
                request_id=request_id
            )
        )


async def reconciliation_exception_handler(request: Request, exc: ReconciliationError) -> JSONResponse:
    """Handler for batch-level reconciliation failures"""

    request_id = getattr(request.state, 'request_id', None)

    logger.error(
        "Batch reconciliation failed",
        error_type=type(exc).__name__,
        error=str(exc),
        url=str(request.url),
        request_id=request_id
    )

    http_exception = ExceptionMapper.map_exception(exc, request_id)
    return JSONResponse(status_code=http_exception.status_code, content=http_exception.detail)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions"""

    request_id = getattr(request.state, 'request_id', None)

    logger.critical(
        "Critical error occurred",
        error_type=type(exc).__name__,
        error=str(exc),
        url=str(request.url),
        method=request.method,
        request_id=request_id,
        exc_info=exc
    )

    http_exception = ExceptionMapper.map_exception(exc, request_id)
    return JSONResponse(status_code=http_exception.status_code, content=http_exception.detail)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for HTTP exceptions"""

    request_id = getattr(request.state, 'request_id', None)

    if request_id and isinstance(exc.detail, dict):
        exc.detail["request_id"] = request_id

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail if isinstance(exc.detail, dict) else {"detail": exc.detail}
    )


async def validation_exception_handler(request: Request, exc) -> JSONResponse:
    """Handler for request validation exceptions"""

    request_id = getattr(request.state, 'request_id', None)

    logger.warning(
        "Request validation failed",
        error=str(exc),
        url=str(request.url),
        request_id=request_id
    )

    return JSONResponse(
        status_code=422,
        content=ErrorHandler.create_error_response(
            status_code=422,
            message="Request validation failed. Please check your input and try again.",
            error_code=ErrorCode.VALIDATION_ERROR,
            details=jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc),
            request_id=request_id
        )
    )
