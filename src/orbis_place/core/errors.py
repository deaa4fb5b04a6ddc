"""Domain exceptions and their HTTP mapping.

Services raise the exceptions defined here; the handlers registered by
:func:`register_exception_handlers` translate them into JSON responses so
that endpoint code never builds error payloads by hand.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

UPSTREAM_FAILURE_DETAIL = "Internal server error"


class OrbisError(RuntimeError):
    """Base exception for failures surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(OrbisError):
    """Raised when a user, team or other entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str) -> NotFoundError:
        return cls(f"{entity} not found")


class UnauthorizedError(OrbisError):
    """Raised when a request carries no valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Could not validate credentials") -> None:
        super().__init__(detail)


class ProfileValidationError(OrbisError):
    """Raised when a profile patch or uploaded file is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedMediaError(ProfileValidationError):
    """Raised when an uploaded file is not an accepted image type."""


class UpstreamFailure(OrbisError):
    """Raised when the database or object storage fails.

    The original error is kept as ``__cause__`` for logging; clients only
    ever see an opaque message.
    """

    def __init__(self, detail: str = UPSTREAM_FAILURE_DETAIL) -> None:
        super().__init__(detail)


async def _orbis_error_handler(request: Request, exc: OrbisError) -> JSONResponse:
    headers: dict[str, str] | None = None
    detail = exc.detail
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    elif isinstance(exc, UpstreamFailure):
        logger.error(
            "Upstream failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.detail,
            exc_info=exc.__cause__ or exc,
        )
        detail = UPSTREAM_FAILURE_DETAIL
    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=headers)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to ``app``."""
    app.add_exception_handler(OrbisError, _orbis_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, _request_validation_handler  # type: ignore[arg-type]
    )
