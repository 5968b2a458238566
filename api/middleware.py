"""
Consolidated middleware for the NutritionTracker API
"""

import time
import logging
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from api.responses import error_response
from app.exceptions import AppError, InternalError, ServiceValidationError
from services.validation import format_errors

logger = logging.getLogger("nutrition_tracker.middleware")

_HTTP_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            f"request_started request_id={request_id} method={request.method} "
            f"path={request.url.path}"
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                f"request_failed request_id={request_id} method={request.method} "
                f"path={request.url.path} error={exc} process_time={process_time:.4f}s",
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"request_completed request_id={request_id} method={request.method} "
            f"path={request.url.path} status={response.status_code} "
            f"process_time={process_time:.4f}s"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def app_error_handler(request: Request, exc: AppError):
    """Handle every AppError subclass with its own status and code"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.http_status,
        content=error_response(exc.to_dict()),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer schema violations with 400 and one entry per offending field"""
    details = format_errors(exc.errors())
    logger.warning(f"Validation error on {request.url.path}: {details}")

    error = ServiceValidationError(details=details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(error.to_dict()),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, wrong methods)"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            {
                "code": _HTTP_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
                "message": str(exc.detail),
            }
        ),
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Persistence failures that escaped a unit of work"""
    logger.exception(f"Database error on {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(InternalError().to_dict()),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(InternalError().to_dict()),
    )
