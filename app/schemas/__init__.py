from app.schemas.email import (
    ErrorDetails,
    ErrorResponse,
    SendEmailResponse,
    ValidateEmailResponse,
    ValidationDetails,
)

__all__ = [
    "ErrorDetails",
    "ErrorResponse",
    "SendEmailResponse",
    "ValidateEmailResponse",
    "ValidationDetails",
]
