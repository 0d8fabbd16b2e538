"""
Pytest configuration and fixtures for the Mailgun relay tests.

Provides:
- Test settings with Mailgun credentials
- A recording fake of the Mailgun API built on httpx.MockTransport
- Test client for API testing
"""

from collections.abc import AsyncGenerator, Callable
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.dependencies import get_http_transport
from app.main import app


# Override settings for testing
class TestSettings(Settings):
    mailgun_api_key: str = "key-test"
    mailgun_domain: str = "mg.example.com"
    mailgun_region: str = "us"
    mailgun_default_from: str = "noreply@mg.example.com"
    debug: bool = True


class MailgunMock:
    """Fake Mailgun API that records every outbound request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200,
            json={"id": "<20260101.1@mg.example.com>", "message": "Queued. Thank you."},
        )

    def respond(self, status_code: int = 200, **kwargs) -> None:
        """Make every call return the given response."""
        self.handler = lambda request: httpx.Response(status_code, **kwargs)

    def raise_error(self, exc: Exception) -> None:
        """Make every call fail at the transport level."""

        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = _raise

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent to Mailgun"
        return self.requests[-1]

    def last_form(self) -> dict[str, str]:
        """Decode the form body of the last request."""
        body = parse_qs(self.last_request.content.decode(), keep_blank_values=True)
        return {key: values[0] for key, values in body.items()}


@pytest.fixture
def settings() -> TestSettings:
    return TestSettings()


@pytest.fixture
def mailgun() -> MailgunMock:
    return MailgunMock()


@pytest_asyncio.fixture
async def client(
    settings: TestSettings, mailgun: MailgunMock
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with settings and Mailgun overrides."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_transport] = lambda: mailgun.transport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
