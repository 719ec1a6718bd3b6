"""Error kinds raised by Cognita itself.

Every error constructed here reports itself as local through ``is_local()``.
The retry layer checks that capability before asking botocore whether a
failure is worth retrying, so validation and wrapping errors are never
retried.

Exception Hierarchy
-------------------
::

    CognitaError (base)
    ├── FilterTargetsInvalidError
    ├── TagInvalidError
    └── ConfigurationError
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Discoverable kinds of local errors."""

    INTERNAL = "internal"
    FILTER_TARGETS_INVALID = "filter_targets_invalid"
    TAG_INVALID = "tag_invalid"
    CONFIGURATION_INVALID = "configuration_invalid"
    RETRY_POLICY_INVALID = "retry_policy_invalid"


class CognitaError(Exception):
    """Base exception for all errors produced by Cognita.

    Args:
        message: Human-readable error message.
        details: Additional context about the error.
        code: Error kind; defaults to the class level ``code``.
    """

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[ErrorCode] = None,
    ):
        self.message = message
        self.details = details or {}
        if code is not None:
            self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def is_local(self) -> bool:
        """Errors built by Cognita never come from a remote service."""
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class FilterTargetsInvalidError(CognitaError):
    """Raised when a filter target is not in the '<type>.<id>' format."""

    code = ErrorCode.FILTER_TARGETS_INVALID

    def __init__(self, target: str):
        self.target = target
        super().__init__(
            f"the Target {target!r} has an invalid format. "
            "The expected format is 'aws_instance.ID'"
        )


class TagInvalidError(CognitaError):
    """Raised when a tag string is not in the 'NAME:VALUE' format."""

    code = ErrorCode.TAG_INVALID

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(
            f"the Tag {tag!r} has an invalid format. The expected format is 'NAME:VALUE'"
        )


class ConfigurationError(CognitaError):
    """Exception raised for configuration validation errors."""

    code = ErrorCode.CONFIGURATION_INVALID

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        super().__init__(message)


def wrap_error(
    error: BaseException,
    message: str,
    code: ErrorCode = ErrorCode.INTERNAL,
) -> CognitaError:
    """Wrap an arbitrary exception into a local CognitaError.

    The original exception is already set as ``__cause__``, so raise the
    result directly: ``raise wrap_error(exc, "loading targets")``.
    """
    wrapped = CognitaError(
        f"{message}: {error}",
        details={"cause": type(error).__name__},
        code=code,
    )
    wrapped.__cause__ = error
    return wrapped
