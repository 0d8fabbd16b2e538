from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.cors import preflight_response
from app.core.errors import EmailValidationError, MailgunError, RelayError
from app.core.logging import get_logger
from app.dependencies import AppSettings, HTTPTransport
from app.schemas.email import ErrorResponse, SendEmailResponse, ValidateEmailResponse
from app.services.mailgun import (
    MailgunClient,
    MailgunConfig,
    extract_email,
    map_validation_response,
    queued_message_id,
    validate_rich_send,
    validate_simple_send,
)

logger = get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _as_mailgun_error(exc: Exception, operation: str) -> MailgunError:
    """Wrap an unexpected exception so it is reported as a mailgun_error."""
    logger.bind(operation=operation, error=repr(exc)).error("unexpected_error")
    return MailgunError(str(exc) or exc.__class__.__name__)


def _json(content: Any, status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code)


@router.options("/send-mailgun-email", include_in_schema=False)
@router.options("/send-email", include_in_schema=False)
@router.options("/validate-mailgun-email", include_in_schema=False)
async def preflight() -> PlainTextResponse:
    """CORS preflight."""
    return preflight_response()


@router.post(
    "/send-mailgun-email",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=SendEmailResponse,
    responses=ERROR_RESPONSES,
)
async def send_mailgun_email(
    request: Request,
    settings: AppSettings,
    transport: HTTPTransport,
) -> JSONResponse:
    """
    Send a single plain-text email.

    Body: ``{to, subject, text, from?}``. When ``from`` is omitted the
    configured MAILGUN_DEFAULT_FROM is used.
    """
    try:
        body = await request.json()
        email = validate_simple_send(body)

        config = MailgunConfig.from_settings(settings, require_domain=True)

        sender = email.sender or config.default_from
        if not sender:
            raise EmailValidationError(
                "From address is required. Provide in request or set MAILGUN_DEFAULT_FROM",
                field="from",
            )

        client = MailgunClient(config, transport=transport)
        data = await client.send_message(email.to_message(sender))
    except RelayError:
        raise
    except Exception as e:
        raise _as_mailgun_error(e, "send_mailgun_email") from e

    response = SendEmailResponse(id=queued_message_id(data))
    return _json(response.model_dump(), status.HTTP_202_ACCEPTED)


@router.post(
    "/send-email",
    status_code=status.HTTP_202_ACCEPTED,
    responses=ERROR_RESPONSES,
)
async def send_email(
    request: Request,
    settings: AppSettings,
    transport: HTTPTransport,
) -> JSONResponse:
    """
    Send an email to one or more recipients.

    Body: ``{from, to, subject, text?, html?, cc?, bcc?, replyTo?}`` where
    ``to``, ``cc`` and ``bcc`` are comma-separated lists. The Mailgun
    response body is returned unchanged.
    """
    try:
        body = await request.json()
        email = validate_rich_send(body)

        config = MailgunConfig.from_settings(settings, require_domain=True)
        client = MailgunClient(config, transport=transport)
        data = await client.send_message(email.to_message())
    except RelayError:
        raise
    except Exception as e:
        raise _as_mailgun_error(e, "send_email") from e

    return _json(data, status.HTTP_202_ACCEPTED)


@router.get(
    "/validate-mailgun-email",
    response_model=ValidateEmailResponse,
    responses=ERROR_RESPONSES,
)
async def validate_email_query(
    request: Request,
    settings: AppSettings,
    transport: HTTPTransport,
) -> JSONResponse:
    """Validate the address given in the ``email`` query parameter."""
    return await _validate_email(request.query_params.get("email"), settings, transport)


@router.post(
    "/validate-mailgun-email",
    response_model=ValidateEmailResponse,
    responses=ERROR_RESPONSES,
)
async def validate_email_body(
    request: Request,
    settings: AppSettings,
    transport: HTTPTransport,
) -> JSONResponse:
    """Validate the address given as ``{"email": ...}`` in the request body."""
    try:
        body = await request.json()
    except Exception as e:
        raise _as_mailgun_error(e, "validate_email") from e

    email = body.get("email") if isinstance(body, dict) else None
    return await _validate_email(email, settings, transport)


async def _validate_email(
    value: Any,
    settings: AppSettings,
    transport: HTTPTransport,
) -> JSONResponse:
    try:
        email = extract_email(value)

        config = MailgunConfig.from_settings(settings)
        client = MailgunClient(config, transport=transport)
        data = await client.validate_address(email)
        result = map_validation_response(data)
    except RelayError:
        raise
    except Exception as e:
        raise _as_mailgun_error(e, "validate_email") from e

    return _json(result.model_dump(), status.HTTP_200_OK)
