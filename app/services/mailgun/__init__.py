"""Mailgun integration: request validation, payload building and API client."""

from .client import MailgunClient, MailgunConfig, base_url_for_region
from .mapping import map_validation_response, queued_message_id
from .models import (
    MailgunValidationResponse,
    ProviderMessage,
    RichSendRequest,
    SimpleSendRequest,
)
from .validators import (
    extract_email,
    is_valid_email,
    validate_rich_send,
    validate_simple_send,
)

__all__ = [
    "MailgunClient",
    "MailgunConfig",
    "MailgunValidationResponse",
    "ProviderMessage",
    "RichSendRequest",
    "SimpleSendRequest",
    "base_url_for_region",
    "extract_email",
    "is_valid_email",
    "map_validation_response",
    "queued_message_id",
    "validate_rich_send",
    "validate_simple_send",
]
