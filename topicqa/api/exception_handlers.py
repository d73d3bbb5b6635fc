from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from topicqa.api.schemas import DataFileErrorOut, ErrorOut
from topicqa.core.llm.ollama_client import OllamaError
from topicqa.core.middleware.http_logging import client_label
from topicqa.domain.exceptions import (
    GatewayRequestError,
    MissingClientHeaderError,
    ReferenceDataUnavailableError,
)

logger = logging.getLogger("topicqa.errors")


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "malformed request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _error_response(*, request: Request, status_code: int, message: str) -> JSONResponse:
    body = ErrorOut.build(status=status_code, message=message, path=request.url.path)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(GatewayRequestError)
    async def handle_gateway_request_error(
        request: Request,
        exc: GatewayRequestError,
    ) -> JSONResponse:
        logger.info(
            exc.message,
            extra={
                "client_ip": client_label(request),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": status.HTTP_400_BAD_REQUEST,
            },
        )
        return _error_response(
            request=request, status_code=status.HTTP_400_BAD_REQUEST, message=exc.message
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # The body is decoded before dependencies run, so the header rule is re-checked here.
        if request.headers.get("X-Forwarded-For") is None:
            message = MissingClientHeaderError().message
        else:
            message = f"Invalid request: {_describe_validation_error(exc)}"
        logger.info(
            message,
            extra={
                "client_ip": client_label(request),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": status.HTTP_400_BAD_REQUEST,
            },
        )
        return _error_response(
            request=request, status_code=status.HTTP_400_BAD_REQUEST, message=message
        )

    @app.exception_handler(ReferenceDataUnavailableError)
    async def handle_reference_data_unavailable(
        request: Request,
        exc: ReferenceDataUnavailableError,
    ) -> JSONResponse:
        # The read failure itself is logged where it happens (with client SERVER).
        # NOTE: this body intentionally differs from ErrorOut; existing clients match on it.
        body = DataFileErrorOut(error=exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())

    @app.exception_handler(OllamaError)
    async def handle_inference_error(request: Request, exc: OllamaError) -> JSONResponse:
        logger.warning(
            "Inference call failed: %s",
            exc,
            extra={
                "client_ip": client_label(request),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            },
        )
        return _error_response(
            request=request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=str(exc),
        )
