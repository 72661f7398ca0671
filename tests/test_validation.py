"""Tests for parameter validation."""

import pytest  # type: ignore

from docusign_node.exceptions.docusign_exceptions import FieldValidationError
from docusign_node.sources.external.docusign.validation import (
    FieldKind,
    is_valid_date,
    is_valid_url,
    validate_field,
)


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_values_are_rejected(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_field("Email Subject", value)
        assert str(exc_info.value) == "Email Subject is required"
        assert exc_info.value.details == {"field": "Email Subject", "constraint": "is required"}

    def test_non_empty_value_passes(self):
        validate_field("Email Subject", "Please sign")

    def test_returns_trimmed_text(self):
        assert validate_field("Envelope ID", " aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee\n", "uuid") == "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"
        assert validate_field("Document ID", 2) == "2"

    def test_empty_value_fails_before_format_check(self):
        with pytest.raises(FieldValidationError, match="Signer Email is required"):
            validate_field("Signer Email", "", FieldKind.EMAIL)


class TestEmail:
    def test_valid_email(self, faker_instance):
        validate_field("Signer Email", faker_instance.email(), "email")

    @pytest.mark.parametrize("value", ["plainaddress", "a@b", "a b@c.com", "@example.com"])
    def test_invalid_email_names_the_field(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_field("Signer Email", value, "email")
        assert "Signer Email" in str(exc_info.value)
        assert exc_info.value.label == "Signer Email"


class TestUuid:
    def test_valid_uuid_any_case(self):
        validate_field("Envelope ID", "AAAAAAAA-bbbb-CCCC-dddd-eeeeeeeeeeee", "uuid")

    @pytest.mark.parametrize("value", ["not-a-uuid", "aaaaaaaa-bbbb-cccc-dddd", "gggggggg-bbbb-cccc-dddd-eeeeeeeeeeee"])
    def test_invalid_uuid(self, value):
        with pytest.raises(FieldValidationError, match="Envelope ID must be a valid UUID"):
            validate_field("Envelope ID", value, "uuid")


class TestUrlAndDate:
    def test_url_requires_http_scheme_and_host(self):
        assert is_valid_url("https://example.com/return")
        assert not is_valid_url("ftp://example.com")
        assert not is_valid_url("example.com")

    def test_invalid_url_raises(self):
        with pytest.raises(FieldValidationError, match="Return URL"):
            validate_field("Return URL", "not a url", "url")

    @pytest.mark.parametrize("value", ["2024-01-31", "2024-01-31T10:00:00", "2024-01-31T10:00:00Z"])
    def test_valid_dates(self, value):
        assert is_valid_date(value)

    def test_invalid_date_raises(self):
        with pytest.raises(FieldValidationError, match="From Date"):
            validate_field("From Date", "31/01/2024", "date")
