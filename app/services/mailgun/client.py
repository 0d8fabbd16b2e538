"""Mailgun REST API client."""

from dataclasses import dataclass
from typing import Any

import httpx

from app.config import Settings
from app.core.errors import ConfigurationError, MailgunAPIError
from app.core.logging import get_logger

from .models import ProviderMessage

logger = get_logger(__name__)

REGION_HOSTS = {
    "us": "https://api.mailgun.net",
    "eu": "https://api.eu.mailgun.net",
}
DEFAULT_REGION = "us"


def base_url_for_region(region: str | None) -> str:
    """Return the API host for a region; anything but an exact "eu" uses the US host."""
    return REGION_HOSTS.get(region or DEFAULT_REGION, REGION_HOSTS[DEFAULT_REGION])


@dataclass(frozen=True)
class MailgunConfig:
    """Credentials resolved for a single request."""

    api_key: str
    region: str = DEFAULT_REGION
    domain: str | None = None
    default_from: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings, require_domain: bool = False) -> "MailgunConfig":
        """
        Resolve Mailgun credentials from settings.

        Raises:
            ConfigurationError: if the API key (or, for sends, the domain)
                is not configured
        """
        if not settings.mailgun_api_key:
            raise ConfigurationError("MAILGUN_API_KEY not configured")
        if require_domain and not settings.mailgun_domain:
            raise ConfigurationError("MAILGUN_DOMAIN not configured")

        return cls(
            api_key=settings.mailgun_api_key,
            region=settings.mailgun_region or DEFAULT_REGION,
            domain=settings.mailgun_domain or None,
            default_from=settings.mailgun_default_from or None,
            timeout=settings.mailgun_timeout,
        )

    @property
    def base_url(self) -> str:
        return base_url_for_region(self.region)


class MailgunClient:
    """
    Thin async client for the two Mailgun endpoints the relay uses.

    Each call issues exactly one request. Successful responses return the
    decoded JSON body, non-2xx responses raise MailgunAPIError, and
    transport errors propagate as httpx exceptions.
    """

    def __init__(
        self,
        config: MailgunConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Resolved credentials and region
            transport: Optional httpx transport, used by tests
        """
        self.config = config
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=self.transport,
        )

    async def send_message(self, message: ProviderMessage) -> Any:
        """Submit a message to /v3/{domain}/messages.

        Returns the decoded JSON body as Mailgun sent it.
        """
        if not self.config.domain:
            raise ConfigurationError("MAILGUN_DOMAIN not configured")

        async with self._client() as client:
            resp = await client.post(
                f"/v3/{self.config.domain}/messages",
                data=message.to_form_data(),
                auth=("api", self.config.api_key),
            )

        data = self._handle_response(resp, "mailgun_send")
        logger.bind(
            domain=self.config.domain,
            recipients=len(message.to),
            message_id=data.get("id") if isinstance(data, dict) else None,
        ).info("mailgun_message_queued")
        return data

    async def validate_address(self, email: str) -> dict[str, Any]:
        """Look up an address with /v4/address/validate."""
        async with self._client() as client:
            resp = await client.get(
                "/v4/address/validate",
                params={"address": email},
                headers={"Authorization": f"Bearer {self.config.api_key}"},
            )

        data = self._handle_response(resp, "mailgun_validate")
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected Mailgun validation response: {data!r}")
        logger.bind(result=data.get("result"), risk=data.get("risk")).debug(
            "mailgun_address_validated"
        )
        return data

    def _handle_response(self, resp: httpx.Response, operation: str) -> Any:
        if not resp.is_success:
            logger.bind(
                operation=operation,
                status=resp.status_code,
                body=resp.text[:500],
            ).warning("mailgun_request_rejected")
            raise MailgunAPIError(resp.status_code, resp.text or resp.reason_phrase)

        return resp.json()
