"""Translate Mailgun response bodies into the relay's public shapes."""

from typing import Any

from app.schemas.email import ValidateEmailResponse, ValidationDetails

from .models import MailgunValidationResponse

UNKNOWN_MESSAGE_ID = "<unknown>"


def queued_message_id(data: Any) -> str:
    """Pick the message id out of a send response.

    Mailgun returns it at the top level; some proxies nest it under
    ``message``.
    """
    if not isinstance(data, dict):
        return UNKNOWN_MESSAGE_ID

    if data.get("id"):
        return str(data["id"])

    message = data.get("message")
    if isinstance(message, dict) and message.get("id"):
        return str(message["id"])

    return UNKNOWN_MESSAGE_ID


def map_validation_response(data: dict[str, Any]) -> ValidateEmailResponse:
    """Reshape a /v4/address/validate body into ValidateEmailResponse."""
    mailgun = MailgunValidationResponse.model_validate(data)

    parts = mailgun.parts
    syntax_valid = (
        parts is not None and parts.local_part is not None and parts.domain is not None
    )
    dns_valid = mailgun.result != "unknown" and mailgun.is_valid

    return ValidateEmailResponse(
        email=mailgun.address,
        valid=mailgun.is_valid,
        result=mailgun.result,
        risk=mailgun.risk,
        details=ValidationDetails(
            syntax_valid=syntax_valid,
            dns_valid=dns_valid,
            mailbox_verification=mailgun.mailbox_verification,
            is_disposable=mailgun.is_disposable_address,
            is_role=mailgun.is_role_address,
        ),
    )
