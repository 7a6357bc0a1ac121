"""
Centralized Error Handling and Logging
Maps exceptions to consistent JSON error bodies and logs them with a trace ID.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from contextvars import ContextVar

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)

class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    LOG_REQUEST_BODIES = True
    MAX_BODY_LOG_SIZE = 5000  # Truncate large bodies

    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def truncate(cls, data: Optional[str]) -> Optional[str]:
        if data is not None and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        return data

def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()

def _new_trace_id() -> str:
    return str(uuid.uuid4())[:8]

def _captured_body(request: Request) -> Optional[str]:
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return ErrorHandlingConfig.truncate(body.decode('utf-8'))
    except UnicodeDecodeError:
        return "DECODE_ERROR"

class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log a structured error entry and return its trace ID"""

        trace_id = None
        if request is not None:
            trace_id = getattr(request.state, 'trace_id', None)
        trace_id = trace_id or request_id_var.get('') or _new_trace_id()

        log_entry: Dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None
            }
            if ErrorHandlingConfig.LOG_REQUEST_BODIES:
                log_entry["request"]["body"] = _captured_body(request)

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception)
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = extra_context

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request context and add request IDs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = _new_trace_id()
        request_id_var.set(trace_id)

        # Keep the raw body so error handlers can log it
        body = await request.body() if ErrorHandlingConfig.LOG_REQUEST_BODIES else None
        request.state.captured_body = body
        request.state.trace_id = trace_id

        # Unhandled exceptions propagate to general_exception_handler, which logs them
        response = await call_next(request)

        response.headers["X-Trace-ID"] = trace_id
        return response

def _error_body(error: str, message: Any, trace_id: Optional[str] = None, **extra) -> Dict[str, Any]:
    content: Dict[str, Any] = {"error": error, "message": message}
    content.update(extra)
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = _utc_timestamp()
    return content

def summarize_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten Pydantic validation errors into field/message/type entries"""
    details = []
    for error in errors:
        # Drop the leading "body"/"query" location segment
        loc = [str(part) for part in error.get("loc", [])]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        message = error.get("msg", "Unknown validation error")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({
            "field": field,
            "message": message,
            "type": error.get("type", "unknown")
        })
    return details

# Global Exception Handlers
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with logging"""

    trace_id = StructuredLogger.log_error(
        f"http_{exc.status_code}",
        f"HTTP {exc.status_code}: {exc.detail}",
        request=request,
        exception=exc if exc.status_code >= 500 else None,
        include_traceback=False
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(f"HTTP {exc.status_code}", exc.detail, trace_id),
        headers=getattr(exc, "headers", None)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400 Bad Request"""

    details = summarize_validation_errors(exc.errors())
    message = "; ".join(f"{d['field']}: {d['message']}" if d['field'] else d['message'] for d in details)

    trace_id = StructuredLogger.log_error(
        "validation_error_400",
        f"Request validation failed: {len(details)} validation errors",
        request=request,
        extra_context={"validation_errors": details},
        include_traceback=False
    )

    return JSONResponse(
        status_code=400,
        content=_error_body(
            "Validation Error",
            message or "Request validation failed",
            trace_id,
            detail=details,
            error_count=len(details)
        )
    )

async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""

    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {exc}",
        request=request,
        exception=exc
    )

    # Don't expose internal details
    return JSONResponse(
        status_code=500,
        content=_error_body("Internal Server Error", "An unexpected error occurred", trace_id)
    )

def setup_error_handling(app):
    """Setup centralized error handling for the FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    # Most specific first
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
