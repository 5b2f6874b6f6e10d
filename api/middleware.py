"""
Consolidated middleware for the SmartPantry API
"""

import time
import logging
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import ExternalServiceError, NotFoundError, ServiceValidationError

logger = logging.getLogger("smartpantry.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def error_body(code: str, message, details=None) -> dict:
    """``{success: false, error{code, message}, timestamp}`` envelope"""
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with an id and timing headers"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started %s %s",
            request.method,
            request.url.path,
            extra={"request_id": request_id},
        )
        start_time = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed %s %s: %s",
                request.method,
                request.url.path,
                exc,
                extra={"request_id": request_id},
                exc_info=True,
            )
            raise

        process_time = time.perf_counter() - start_time
        logger.info(
            "Request completed %s %s -> %d in %.4fs",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            extra={"request_id": request_id},
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            # ctx may carry exception objects
            [{k: v for k, v in e.items() if k != "ctx"} for e in exc.errors()],
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning("HTTP %d on %s: %s", exc.status_code, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP_{exc.status_code}", exc.detail),
    )


async def service_validation_exception_handler(
    request: Request, exc: ServiceValidationError
):
    logger.warning("Service validation error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.code or "SERVICE_VALIDATION_ERROR", exc.message, exc.details),
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError):
    logger.warning("Resource not found on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.code or "NOT_FOUND", exc.message),
    )


async def external_service_exception_handler(request: Request, exc: ExternalServiceError):
    """Upstream recipe API failures surface as 502 Bad Gateway"""
    logger.error(
        "External service error on %s (provider=%s, status=%s): %s",
        request.url.path,
        exc.provider,
        exc.status_code,
        exc,
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(
            exc.code or "EXTERNAL_SERVICE_ERROR",
            exc.message,
            {"provider": exc.provider, "status_code": exc.status_code},
        ),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception("Unexpected error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )
