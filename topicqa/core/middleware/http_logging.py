"""HTTP access logging middleware.

Every request produces one structured record on the `topicqa.http` logger with
method, route, status, duration and the caller as reported by `X-Forwarded-For`.
Bodies are never logged: they carry user questions and model answers.
A correlation id is taken from `X-Request-ID` when it looks safe, otherwise generated.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from topicqa.core.logging import SERVER_CLIENT

logger = logging.getLogger("topicqa.http")

_REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_HEADER = "X-Forwarded-For"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _request_id_for(request: Request) -> str:
    candidate = request.headers.get(_REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def client_label(request: Request) -> str:
    """Caller identifier used in logs: the forwarded-for header or SERVER."""

    value = request.headers.get(_CLIENT_HEADER)
    return value if value is not None else SERVER_CLIENT


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _request_id_for(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "client_ip": client_label(request),
                    "http_method": request.method,
                    "request_path": _route_label(request),
                    "status_code": 500,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )
            raise

        response.headers[_REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "client_ip": client_label(request),
                "http_method": request.method,
                "request_path": _route_label(request),
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
            },
        )
        return response
