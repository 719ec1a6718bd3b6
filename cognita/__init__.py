"""Cognita - resource filtering and remote-call retry for cloud collectors."""

__version__ = "1.0.0"

from cognita.errors import (
    CognitaError,
    ConfigurationError,
    ErrorCode,
    FilterTargetsInvalidError,
    TagInvalidError,
)
from cognita.filters import Filter
from cognita.models import Tag
from cognita.utils.retry import RetryPolicy, retry, retry_default

__all__ = [
    "CognitaError",
    "ConfigurationError",
    "ErrorCode",
    "Filter",
    "FilterTargetsInvalidError",
    "RetryPolicy",
    "Tag",
    "TagInvalidError",
    "retry",
    "retry_default",
]
