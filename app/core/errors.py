"""Error types and JSON envelopes returned to callers.

Two envelope kinds exist:

- ``validation_error``: the request failed a local check and never reached
  Mailgun.
- ``mailgun_error``: Mailgun rejected the call, or something failed while
  talking to it (configuration, transport, unexpected exceptions).
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger

logger = get_logger(__name__)

VALIDATION_ERROR = "validation_error"
MAILGUN_ERROR = "mailgun_error"


class RelayError(Exception):
    """Base class for errors rendered as a JSON envelope."""

    error: str = MAILGUN_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {"message": self.message}

    def to_envelope(self) -> dict[str, Any]:
        return {"error": self.error, "details": self.details()}


class EmailValidationError(RelayError):
    """A request field failed validation."""

    error = VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        field: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        if status_code is not None:
            self.status_code = status_code

    def details(self) -> dict[str, Any]:
        details: dict[str, Any] = {}
        if self.field is not None:
            details["field"] = self.field
        details["message"] = self.message
        return details


class MailgunError(RelayError):
    """Internal, configuration or transport failure around a Mailgun call."""


class ConfigurationError(MailgunError):
    """A required setting is missing."""


class MailgunAPIError(MailgunError):
    """Mailgun answered with a non-2xx status."""

    def __init__(self, provider_status: int, message: str) -> None:
        super().__init__(message)
        self.provider_status = provider_status
        self.status_code = provider_status_to_http(provider_status)

    def details(self) -> dict[str, Any]:
        return {"status": self.provider_status, "message": self.message}


def provider_status_to_http(provider_status: int) -> int:
    """Map a failed Mailgun status to the status reported to our caller.

    Upstream server errors become 502 Bad Gateway, everything else is
    reported as a 400 since the request itself was rejected.
    """
    if provider_status >= 500:
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


def error_response(exc: RelayError) -> JSONResponse:
    """Render an error envelope."""
    return JSONResponse(content=exc.to_envelope(), status_code=exc.status_code)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """FastAPI exception handler for RelayError subclasses."""
    if isinstance(exc, EmailValidationError):
        logger.bind(
            path=request.url.path,
            field=exc.field,
            reason=exc.message,
        ).info("request_validation_failed")
    else:
        logger.bind(
            path=request.url.path,
            status=exc.status_code,
            error=exc.message[:500],
        ).error("mailgun_request_failed")
    return error_response(exc)


def _allowed_methods(request: Request) -> list[str]:
    """Methods routed for the request path, without HEAD and OPTIONS."""
    methods: set[str] = set()
    for route in request.app.router.routes:
        if getattr(route, "path", None) == request.url.path:
            methods.update(getattr(route, "methods", None) or ())
    return sorted(methods - {"HEAD", "OPTIONS"})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render 405s as validation errors; other HTTP errors keep FastAPI's format."""
    if exc.status_code != status.HTTP_405_METHOD_NOT_ALLOWED:
        return await http_exception_handler(request, exc)

    allowed = _allowed_methods(request)
    message = "Method not allowed"
    if allowed:
        message = f"Method not allowed. Use {' or '.join(allowed)}"

    logger.bind(path=request.url.path, method=request.method).info("method_not_allowed")
    response = error_response(EmailValidationError(message, status_code=exc.status_code))
    response.headers["Allow"] = ", ".join(allowed + ["OPTIONS"])
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope handlers on the application."""
    app.add_exception_handler(RelayError, relay_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
