"""Request validation for the send and validate endpoints.

Validators take the decoded JSON body as-is and either return a normalized
request or raise ``EmailValidationError`` naming the first field that
failed. Rules run in a fixed order so the reported field is deterministic.
"""

import re
from typing import Any

from app.core.errors import EmailValidationError

from .models import RichSendRequest, SimpleSendRequest

# Deliberately loose: local@domain.tld with no whitespace, not RFC 5322.
# Always applied with fullmatch so a trailing newline is rejected.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(email: Any) -> bool:
    """Check that a value looks like an email address."""
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def _as_object(body: Any) -> dict[str, Any]:
    return body if isinstance(body, dict) else {}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def split_addresses(value: Any, field: str) -> list[str]:
    """Split a comma-separated address list (or list of strings).

    Entries are trimmed and empty entries dropped. Order and duplicates are
    preserved.
    """
    if isinstance(value, str):
        entries = value.split(",")
    elif isinstance(value, list) and all(isinstance(entry, str) for entry in value):
        entries = value
    else:
        raise EmailValidationError(
            "Must be a comma-separated list of email addresses",
            field=field,
        )
    return [entry.strip() for entry in entries if entry.strip()]


def _validate_address_list(value: Any, field: str, required: bool) -> list[str]:
    if value is None or value == "":
        if required:
            raise EmailValidationError("At least one recipient is required", field=field)
        return []

    addresses = split_addresses(value, field)
    if required and not addresses:
        raise EmailValidationError("At least one recipient is required", field=field)

    for address in addresses:
        if not is_valid_email(address):
            raise EmailValidationError(f"Invalid email address: {address}", field=field)
    return addresses


def _validate_subject(body: dict[str, Any]) -> str:
    subject = body.get("subject")
    if _is_blank(subject):
        raise EmailValidationError(
            "Subject is required and cannot be empty",
            field="subject",
        )
    return subject


def validate_simple_send(body: Any) -> SimpleSendRequest:
    """Validate a single-recipient plain-text send request.

    A missing ``from`` is allowed here; the caller substitutes the
    configured default sender.
    """
    body = _as_object(body)

    to = body.get("to")
    if not is_valid_email(to):
        raise EmailValidationError("Invalid email address", field="to")

    subject = _validate_subject(body)

    text = body.get("text")
    if _is_blank(text):
        raise EmailValidationError(
            "Text content is required and cannot be empty",
            field="text",
        )

    sender = body.get("from") or None
    if sender is not None and not is_valid_email(sender):
        raise EmailValidationError("Invalid from address", field="from")

    return SimpleSendRequest(to=to, subject=subject, text=text, sender=sender)


def validate_rich_send(body: Any) -> RichSendRequest:
    """Validate a multi-recipient send request with optional HTML, cc and bcc."""
    body = _as_object(body)

    sender = body.get("from")
    if not is_valid_email(sender):
        raise EmailValidationError("A valid from address is required", field="from")

    to = _validate_address_list(body.get("to"), "to", required=True)
    subject = _validate_subject(body)

    content: dict[str, str | None] = {}
    for field in ("text", "html"):
        value = body.get(field)
        if value is not None and not isinstance(value, str):
            raise EmailValidationError(f"{field} must be a string", field=field)
        content[field] = value if value and value.strip() else None

    if content["text"] is None and content["html"] is None:
        raise EmailValidationError(
            "Either text or html content is required",
            field="text",
        )

    cc = _validate_address_list(body.get("cc"), "cc", required=False)
    bcc = _validate_address_list(body.get("bcc"), "bcc", required=False)

    reply_to = body.get("replyTo")
    if reply_to is not None and reply_to != "" and not is_valid_email(reply_to):
        raise EmailValidationError("Invalid reply-to address", field="replyTo")

    return RichSendRequest(
        sender=sender,
        to=to,
        subject=subject,
        text=content["text"],
        html=content["html"],
        cc=cc,
        bcc=bcc,
        reply_to=reply_to or None,
    )


def extract_email(value: Any) -> str:
    """Check an address submitted for validation.

    Only presence and an ``@`` are checked; the provider does the rest.
    """
    if not isinstance(value, str) or "@" not in value:
        raise EmailValidationError(
            "Email is required and must contain @",
            field="email",
        )
    return value
