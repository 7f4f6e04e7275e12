"""
oipverify.middleware — Request logging, CORS and error handlers for the API.
"""

import logging
import time
import uuid
from typing import Optional

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import PlainTextResponse

from .logging_config import request_id_var

logger = logging.getLogger(__name__)


# ─── Request ID + Logging Middleware ──────────────────────────────

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Inject request ID, log requests."""

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])
        request_id_var.set(rid)

        t0 = time.time()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error", extra={"path": request.url.path})
            raise

        elapsed_ms = round((time.time() - t0) * 1000, 1)
        logger.info(
            "request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": elapsed_ms,
                "client": request.client.host if request.client else "",
            },
        )

        response.headers["X-Request-ID"] = rid
        return response


# ─── CORS configuration ──────────────────────────────────────────

def configure_cors(app, allowed_origins: Optional[list[str]] = None):
    """Add CORS middleware; all origins when none are given."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["GET", "HEAD", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


# ─── Error handlers ──────────────────────────────────────────────

async def not_found_handler(request: Request, exc: Exception):
    logger.info(
        "404",
        extra={
            "url": str(request.url),
            "httpMethod": request.method,
            "remoteAddr": request.client.host if request.client else "",
            "contentLength": request.headers.get("content-length", ""),
            "userAgent": request.headers.get("user-agent", ""),
        },
    )
    return PlainTextResponse("404 not found", status_code=404)


async def generic_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s: %s", request.url.path, type(exc).__name__)
    return PlainTextResponse("Internal server error", status_code=500)


def apply_middleware(app, allowed_origins: Optional[list[str]] = None):
    """One-call setup: CORS, logging middleware, error handlers."""
    configure_cors(app, allowed_origins)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(404, not_found_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
