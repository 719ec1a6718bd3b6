"""Utility modules for retrying remote calls, configuration and log sanitizing."""

from cognita.utils.aws_client import AWSClientManager
from cognita.utils.config import CognitaConfig, configure_logging
from cognita.utils.retry import (
    RetryFn,
    RetryPolicy,
    is_local_error,
    is_transient_error,
    retry,
    retry_default,
    retry_with_policy,
)
from cognita.utils.security import LogSanitizer

__all__ = [
    "AWSClientManager",
    "CognitaConfig",
    "LogSanitizer",
    "RetryFn",
    "RetryPolicy",
    "configure_logging",
    "is_local_error",
    "is_transient_error",
    "retry",
    "retry_default",
    "retry_with_policy",
]
