"""Translate service errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from services.errors import ErrorKind, ServiceError

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UPSTREAM: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INVARIANT: status.HTTP_500_INTERNAL_SERVER_ERROR,
}
UPSTREAM_DETAIL = "Service temporarily unavailable"
logger = logging.getLogger(__name__)


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, ServiceError):  # pragma: no cover - registered for ServiceError only
        raise exc

    detail = exc.detail
    if exc.kind is ErrorKind.UPSTREAM:
        # Upstream failures stay opaque to clients.
        detail = UPSTREAM_DETAIL
    if exc.kind in (ErrorKind.UPSTREAM, ErrorKind.INVARIANT):
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "code": exc.code},
            exc_info=exc,
        )

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content={"detail": detail, "kind": exc.kind.value, "code": exc.code},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
