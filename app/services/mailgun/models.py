"""Mailgun request and response models."""

from pydantic import BaseModel, Field


class ProviderMessage(BaseModel):
    """Outbound message as submitted to Mailgun's messages endpoint."""

    sender: str
    to: list[str]
    subject: str
    text: str | None = None
    html: str | None = None
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    reply_to: str | None = None

    def to_form_data(self) -> dict[str, str]:
        """Project the message onto Mailgun's form fields."""
        data = {
            "from": self.sender,
            "to": ", ".join(self.to),
            "subject": self.subject,
        }
        if self.text:
            data["text"] = self.text
        if self.html:
            data["html"] = self.html
        if self.cc:
            data["cc"] = ", ".join(self.cc)
        if self.bcc:
            data["bcc"] = ", ".join(self.bcc)
        if self.reply_to:
            data["h:Reply-To"] = self.reply_to
        return data


class SimpleSendRequest(BaseModel):
    """Validated single-recipient plain-text send."""

    to: str
    subject: str
    text: str
    sender: str | None = None

    def to_message(self, sender: str) -> ProviderMessage:
        return ProviderMessage(
            sender=sender,
            to=[self.to],
            subject=self.subject,
            text=self.text,
        )


class RichSendRequest(BaseModel):
    """Validated multi-recipient send with optional HTML and copies."""

    sender: str
    to: list[str]
    subject: str
    text: str | None = None
    html: str | None = None
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    reply_to: str | None = None

    def to_message(self) -> ProviderMessage:
        return ProviderMessage(
            sender=self.sender,
            to=self.to,
            subject=self.subject,
            text=self.text,
            html=self.html,
            cc=self.cc,
            bcc=self.bcc,
            reply_to=self.reply_to,
        )


class AddressParts(BaseModel):
    """Parsed components of a validated address."""

    local_part: str | None = None
    domain: str | None = None
    display_name: str | None = None


class MailgunValidationResponse(BaseModel):
    """Body of Mailgun's /v4/address/validate response.

    ``result`` is usually one of deliverable, undeliverable, risky or
    unknown and ``risk`` one of low, medium, high or unknown. Both are kept
    as plain strings so newer provider values pass through untouched.
    """

    address: str = ""
    is_valid: bool = False
    result: str = "unknown"
    risk: str = "unknown"
    mailbox_verification: str = "unknown"
    is_disposable_address: bool = False
    is_role_address: bool = False
    parts: AddressParts | None = None
