"""Tests for Mailgun response mapping."""

import pytest

from app.services.mailgun import map_validation_response, queued_message_id


class TestQueuedMessageId:
    """Tests for queued_message_id."""

    def test_top_level_id(self):
        assert queued_message_id({"id": "<1@mg>", "message": "Queued"}) == "<1@mg>"

    def test_nested_id(self):
        assert queued_message_id({"message": {"id": "<2@mg>"}}) == "<2@mg>"

    def test_unknown(self):
        assert queued_message_id({}) == "<unknown>"
        assert queued_message_id({"id": "", "message": "Queued"}) == "<unknown>"

    def test_non_object_body(self):
        assert queued_message_id(["queued"]) == "<unknown>"
        assert queued_message_id(None) == "<unknown>"


class TestMapValidationResponse:
    """Tests for map_validation_response."""

    @pytest.fixture
    def risky(self) -> dict:
        return {
            "address": "info@mailinator.com",
            "is_valid": True,
            "result": "risky",
            "risk": "high",
            "mailbox_verification": "unknown",
            "is_disposable_address": True,
            "is_role_address": True,
            "parts": {"local_part": "info", "domain": "mailinator.com"},
        }

    def test_maps_flags(self, risky):
        result = map_validation_response(risky)

        assert result.email == "info@mailinator.com"
        assert result.valid is True
        assert result.result == "risky"
        assert result.risk == "high"
        assert result.details.is_disposable is True
        assert result.details.is_role is True
        assert result.details.syntax_valid is True
        assert result.details.dns_valid is True

    def test_syntax_requires_both_parts(self, risky):
        risky["parts"] = {"domain": "mailinator.com"}

        assert map_validation_response(risky).details.syntax_valid is False

    def test_no_parts(self, risky):
        del risky["parts"]

        assert map_validation_response(risky).details.syntax_valid is False

    def test_unknown_result_is_not_dns_valid(self, risky):
        risky["result"] = "unknown"

        assert map_validation_response(risky).details.dns_valid is False

    def test_invalid_address_is_not_dns_valid(self, risky):
        risky["is_valid"] = False
        risky["result"] = "undeliverable"

        result = map_validation_response(risky)

        assert result.valid is False
        assert result.details.dns_valid is False
