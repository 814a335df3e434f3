"""Unit tests for identity normalization and the Annotated request types."""

import pytest
from pydantic import TypeAdapter, ValidationError

from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.types import Email, NewPassword, OtpCode, ResetTokenValue
from otp_guard.domain.value_objects import (
    normalize_identity,
    validate_email,
    validate_otp_code,
)


@pytest.mark.unit
class TestNormalizeIdentity:
    def test_trims_and_lowercases(self):
        assert normalize_identity("  Alice@Example.COM ") == "alice@example.com"

    def test_already_normalized_is_unchanged(self):
        assert normalize_identity("a@x.com") == "a@x.com"


@pytest.mark.unit
class TestValidators:
    def test_validate_email_trims_and_keeps_case(self):
        assert validate_email(" User@Example.COM ") == "User@Example.COM"

    @pytest.mark.parametrize("value", ["", "not-an-email", "a@", "@x.com", "a b@x.com"])
    def test_validate_email_rejects_malformed(self, value):
        with pytest.raises(ValueError, match="Invalid email"):
            validate_email(value)

    def test_validate_otp_code_strips_whitespace(self):
        assert validate_otp_code(" 004271 ") == "004271"

    @pytest.mark.parametrize("value", ["12345", "1234567", "12a456", "", "      "])
    def test_validate_otp_code_rejects_non_six_digits(self, value):
        with pytest.raises(ValueError, match="6 digits"):
            validate_otp_code(value)


@pytest.mark.unit
class TestAnnotatedTypes:
    def test_email_type_trims_and_keeps_case(self):
        assert TypeAdapter(Email).validate_python(" Ada@Example.com ") == "Ada@Example.com"

    def test_email_type_rejects_invalid(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Email).validate_python("nope")

    def test_otp_code_type(self):
        assert TypeAdapter(OtpCode).validate_python("012345") == "012345"
        with pytest.raises(ValidationError):
            TypeAdapter(OtpCode).validate_python("01234x")

    def test_reset_token_type_rejects_non_urlsafe(self):
        adapter = TypeAdapter(ResetTokenValue)

        assert adapter.validate_python("A" * 43) == "A" * 43
        with pytest.raises(ValidationError):
            adapter.validate_python("short")
        with pytest.raises(ValidationError):
            adapter.validate_python("a/b+c=" * 5)

    def test_new_password_length(self):
        adapter = TypeAdapter(NewPassword)

        with pytest.raises(ValidationError):
            adapter.validate_python("short")
        assert adapter.validate_python("LongEnough1!") == "LongEnough1!"


@pytest.mark.unit
def test_otp_purpose_values():
    assert OtpPurpose.values() == ["email_verification", "password_reset"]
    assert OtpPurpose("password_reset") is OtpPurpose.PASSWORD_RESET
