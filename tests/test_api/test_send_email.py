"""Tests for the multi-recipient send endpoint."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

URL = "/api/send-email"


@pytest.fixture
def payload() -> dict:
    return {
        "from": "sender@corp.io",
        "to": "a@b.com, c@d.com",
        "subject": "Quarterly report",
        "text": "See attached.",
    }


class TestSendEmail:
    """Tests for POST /api/send-email."""

    async def test_send_multiple_recipients(self, client: AsyncClient, mailgun, payload):
        """Should join recipients and pass the Mailgun body through."""
        mailgun.respond(200, json={"id": "<abc@mg.example.com>", "message": "Queued. Thank you."})

        response = await client.post(URL, json=payload)

        assert response.status_code == 202
        assert response.json() == {"id": "<abc@mg.example.com>", "message": "Queued. Thank you."}
        form = mailgun.last_form()
        assert form["to"] == "a@b.com, c@d.com"
        assert form["from"] == "sender@corp.io"
        assert form["subject"] == "Quarterly report"
        assert form["text"] == "See attached."
        assert "html" not in form

    async def test_html_cc_bcc_reply_to(self, client: AsyncClient, mailgun, payload):
        """Should forward html, copies and the Reply-To header."""
        payload.update(
            {
                "text": "",
                "html": "<p>Hello</p>",
                "cc": "cc1@x.com,cc2@x.com",
                "bcc": "hidden@x.com",
                "replyTo": "replies@corp.io",
            }
        )

        response = await client.post(URL, json=payload)

        assert response.status_code == 202
        form = mailgun.last_form()
        assert form["html"] == "<p>Hello</p>"
        assert "text" not in form
        assert form["cc"] == "cc1@x.com, cc2@x.com"
        assert form["bcc"] == "hidden@x.com"
        assert form["h:Reply-To"] == "replies@corp.io"

    async def test_recipient_list_as_array(self, client: AsyncClient, mailgun, payload):
        """Should accept to as a JSON list."""
        payload["to"] = ["a@b.com", "a@b.com"]

        response = await client.post(URL, json=payload)

        assert response.status_code == 202
        assert mailgun.last_form()["to"] == "a@b.com, a@b.com"

    async def test_passes_through_non_object_body(self, client: AsyncClient, mailgun, payload):
        """Should return any JSON body Mailgun sends back unchanged."""
        mailgun.respond(200, json=["queued", 1])

        response = await client.post(URL, json=payload)

        assert response.status_code == 202
        assert response.json() == ["queued", 1]

    async def test_missing_body_content(self, client: AsyncClient, mailgun, payload):
        """Should reject a message without text or html."""
        payload["text"] = "   "
        payload["html"] = ""

        response = await client.post(URL, json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert mailgun.requests == []

    async def test_missing_from(self, client: AsyncClient, mailgun, payload):
        """Should require a from address, ignoring MAILGUN_DEFAULT_FROM."""
        del payload["from"]

        response = await client.post(URL, json=payload)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "from"
        assert mailgun.requests == []

    async def test_invalid_recipient_in_list(self, client: AsyncClient, mailgun, payload):
        """Should name the field when one recipient is invalid."""
        payload["to"] = "a@b.com, nope"

        response = await client.post(URL, json=payload)

        assert response.status_code == 400
        details = response.json()["details"]
        assert details["field"] == "to"
        assert "nope" in details["message"]

    async def test_invalid_cc(self, client: AsyncClient, mailgun, payload):
        """Should validate every cc entry."""
        payload["cc"] = "ok@x.com, broken"

        response = await client.post(URL, json=payload)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "cc"

    async def test_invalid_reply_to(self, client: AsyncClient, mailgun, payload):
        """Should validate replyTo."""
        payload["replyTo"] = "not-an-address"

        response = await client.post(URL, json=payload)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "replyTo"

    async def test_provider_error(self, client: AsyncClient, mailgun, payload):
        """Should map Mailgun 503 to 502."""
        mailgun.respond(503, text="Service Unavailable")

        response = await client.post(URL, json=payload)

        assert response.status_code == 502
        assert response.json()["details"]["status"] == 503

    async def test_missing_api_key(self, client: AsyncClient, mailgun, payload, settings):
        """Should fail with 500 before calling Mailgun."""
        settings.mailgun_api_key = ""

        response = await client.post(URL, json=payload)

        assert response.status_code == 500
        assert response.json()["error"] == "mailgun_error"
        assert mailgun.requests == []

    async def test_preflight(self, client: AsyncClient):
        """Should answer OPTIONS with CORS headers."""
        response = await client.options(URL)

        assert response.status_code == 200
        assert response.headers["access-control-allow-headers"].startswith("authorization")
