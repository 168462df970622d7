"""
Test suite for user-facing error mapping.

Covers the identity provider message table, the error page catalogue,
HTTP status descriptions and error reference IDs.

System role: Verification of error presentation helpers
"""

import re

import pytest
from botocore.exceptions import ClientError

from voicecraft.core.auth_errors import DEFAULT_AUTH_MESSAGE, error_code, friendly_error
from voicecraft.core.error_catalog import (
    ERROR_TYPES,
    generate_error_id,
    get_error_type,
    status_message,
)
from voicecraft.core.exceptions import AuthenticationError


def _client_error(code: str, message: str = "provider says no") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, "InitiateAuth")


class TestFriendlyError:
    """Test suite for identity error messages."""

    @pytest.mark.parametrize("code", ["NotAuthorizedException", "UserNotFoundException"])
    def test_credential_errors_share_one_message(self, code):
        assert friendly_error(_client_error(code)) == "Invalid email or password. Please try again."

    def test_unconfirmed_user(self):
        message = friendly_error(_client_error("UserNotConfirmedException"))

        assert message == "Please verify your email address before signing in."

    def test_unknown_code_uses_provider_message(self):
        assert friendly_error(_client_error("SomethingNew", "Nope")) == "Nope"

    def test_unknown_code_without_message_uses_default(self):
        assert friendly_error(_client_error("SomethingNew", "")) == DEFAULT_AUTH_MESSAGE

    def test_code_attribute_on_plain_exception(self):
        exc = AuthenticationError("x", code="CodeMismatchException")

        assert error_code(exc) == "CodeMismatchException"
        assert friendly_error(exc).startswith("Incorrect verification code")


class TestErrorCatalog:
    """Test suite for error page data."""

    def test_known_type(self):
        assert get_error_type(404) is ERROR_TYPES["404"]

    def test_unknown_type_falls_back_to_generic(self):
        assert get_error_type("teapot") is ERROR_TYPES["generic"]
        assert get_error_type(None) is ERROR_TYPES["generic"]

    @pytest.mark.parametrize(
        "status, expected",
        [
            (404, "Requested resource not found"),
            (401, "Authentication required"),
            (403, "Access forbidden"),
            (500, "Internal server error"),
            (503, "Server error"),
            (418, "Server returned 418"),
        ],
    )
    def test_status_message(self, status, expected):
        assert status_message(status) == expected

    def test_error_id_format(self):
        error_id = generate_error_id()

        assert re.fullmatch(r"ERR-[0-9A-Z]+-[0-9A-Z]{9}", error_id)

    def test_error_ids_are_unique(self):
        assert generate_error_id() != generate_error_id()
