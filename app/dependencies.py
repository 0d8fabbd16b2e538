from typing import Annotated

import httpx
from fastapi import Depends

from app.config import Settings, get_settings


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Outbound transport for Mailgun calls; None means the default network transport."""
    return None


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
HTTPTransport = Annotated[httpx.AsyncBaseTransport | None, Depends(get_http_transport)]
