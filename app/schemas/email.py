from pydantic import BaseModel


class SendEmailResponse(BaseModel):
    """Response after a message was accepted by Mailgun."""

    id: str
    message: str = "queued"


class ValidationDetails(BaseModel):
    """Derived checks for a validated address."""

    syntax_valid: bool
    dns_valid: bool
    mailbox_verification: str
    is_disposable: bool
    is_role: bool


class ValidateEmailResponse(BaseModel):
    """Normalized address validation result."""

    email: str
    valid: bool
    result: str
    risk: str
    details: ValidationDetails


class ErrorDetails(BaseModel):
    field: str | None = None
    status: int | None = None
    message: str


class ErrorResponse(BaseModel):
    """Error envelope, tagged by ``error``."""

    error: str
    details: ErrorDetails
