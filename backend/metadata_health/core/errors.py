"""Structured error responses: consistent JSON format for all errors."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from metadata_health.services.snapshot_loader import DatasetLoadError

logger = logging.getLogger("metadata_health")

DATASET_LOAD_FAILED = "Failed to initialize data cache"


def _error_response(request: Request, status_code: int, detail, **extra) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "status_code": status_code,
            "detail": detail,
            **extra,
            "request_id": request_id,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(request, exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Validation error",
            errors=exc.errors(),
        )

    @app.exception_handler(DatasetLoadError)
    async def dataset_load_exception_handler(request: Request, exc: DatasetLoadError):
        # Cause is logged by the dataset service; the client only sees a generic message
        return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, DATASET_LOAD_FAILED)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
