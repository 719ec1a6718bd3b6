"""Tests for Cognita error kinds and wrapping."""

import pytest
from botocore.exceptions import ClientError

from cognita.errors import (
    CognitaError,
    ConfigurationError,
    ErrorCode,
    FilterTargetsInvalidError,
    TagInvalidError,
    wrap_error,
)


class TestCognitaError:
    """Tests for the base error."""

    def test_message_and_details(self):
        """Test details are appended to the message."""
        error = CognitaError("failed", details={"resource_type": "aws_instance"})

        assert str(error) == "failed (Details: {'resource_type': 'aws_instance'})"
        assert CognitaError("failed").details == {}
        assert str(CognitaError("failed")) == "failed"

    def test_to_dict(self):
        """Test the dictionary form carries the kind."""
        assert FilterTargetsInvalidError("bad").to_dict() == {
            "error_type": "FilterTargetsInvalidError",
            "code": "filter_targets_invalid",
            "message": "the Target 'bad' has an invalid format. "
            "The expected format is 'aws_instance.ID'",
            "details": {},
        }

    @pytest.mark.parametrize(
        "error, code",
        [
            (CognitaError("x"), ErrorCode.INTERNAL),
            (FilterTargetsInvalidError("x"), ErrorCode.FILTER_TARGETS_INVALID),
            (TagInvalidError("x"), ErrorCode.TAG_INVALID),
            (ConfigurationError("x"), ErrorCode.CONFIGURATION_INVALID),
        ],
    )
    def test_codes_and_locality(self, error, code):
        """Test every error reports its kind and is local."""
        assert error.code == code
        assert error.is_local() is True

    def test_code_override(self):
        """Test the code can be given per instance."""
        error = CognitaError("x", code=ErrorCode.RETRY_POLICY_INVALID)
        assert error.code == ErrorCode.RETRY_POLICY_INVALID
        assert CognitaError.code == ErrorCode.INTERNAL

    def test_configuration_error_lists_errors(self):
        """Test ConfigurationError keeps the individual errors."""
        error = ConfigurationError("invalid", errors=["a", "b"])
        assert error.errors == ["a", "b"]
        assert ConfigurationError("invalid").errors == []


class TestWrapError:
    """Tests for wrap_error."""

    def test_wraps_remote_error(self, throttling_error):
        """Test a remote error becomes a local one and keeps its cause."""
        wrapped = wrap_error(throttling_error, "listing instances")

        assert isinstance(wrapped, CognitaError)
        assert wrapped.is_local() is True
        assert wrapped.__cause__ is throttling_error
        assert wrapped.message.startswith("listing instances: ")
        assert "Throttling" in wrapped.message
        assert wrapped.details == {"cause": "ClientError"}

    def test_wrap_with_code(self):
        """Test the kind of the wrapped error can be chosen."""
        wrapped = wrap_error(ValueError("nope"), "reading", ErrorCode.CONFIGURATION_INVALID)
        assert wrapped.code == ErrorCode.CONFIGURATION_INVALID

    def test_raise_keeps_cause(self, throttling_error):
        """Test raising the wrapped error without `from` keeps the original cause."""
        with pytest.raises(CognitaError) as exc_info:
            try:
                raise throttling_error
            except ClientError as e:
                raise wrap_error(e, "listing instances")

        assert exc_info.value.__cause__ is throttling_error
