"""Retry of remote calls that fail with transient AWS errors.

Errors are sorted into two buckets before anything is retried:

- Local errors report ``is_local()`` and come from Cognita's own validation
  or wrapping. They are raised straight away, retrying them can never work.
- Transient errors are botocore failures that signal throttling, expired
  credentials or a retryable fault (5xx, timeouts, dropped connections).

Anything else is raised straight away as well. The local check runs first so
that our own errors never reach the remote classification.
"""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import List, Protocol, TypeVar, runtime_checkable

from botocore.exceptions import ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from cognita.utils.security import LogSanitizer

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Type of the function wrapped by retry and retry_default
RetryFn = Callable[[], T]

ATTEMPTS_DEFAULT = 3
INTERVAL_DEFAULT = 30.0

THROTTLING_ERROR_CODES = {
    "Throttling",
    "ThrottlingException",
    "ThrottledException",
    "RequestThrottledException",
    "TooManyRequestsException",
    "ProvisionedThroughputExceededException",
    "TransactionInProgressException",
    "RequestLimitExceeded",
    "BandwidthLimitExceeded",
    "LimitExceededException",
    "RequestThrottled",
    "SlowDown",
    "PriorRequestNotComplete",
    "EC2ThrottledException",
}

EXPIRED_CREDENTIALS_ERROR_CODES = {
    "ExpiredToken",
    "ExpiredTokenException",
    "RequestExpired",
    "TokenRefreshRequired",
}

RETRYABLE_ERROR_CODES = {
    "RequestError",
    "RequestTimeout",
    "RequestTimeoutException",
    "ResponseTimeout",
    "ServiceUnavailable",
    "InternalError",
    "InternalFailure",
}

THROTTLING_STATUS_CODES = {429}
RETRYABLE_STATUS_CODES = {500, 502, 503, 504}


@runtime_checkable
class LocalError(Protocol):
    """An error that can tell whether it was produced locally."""

    def is_local(self) -> bool: ...


@dataclass
class RetryPolicy:
    """Bounded fixed-interval retry parameters.

    Attributes:
        attempts: Total number of calls allowed, including the first one.
        interval: Seconds to wait between two calls.
    """

    attempts: int = ATTEMPTS_DEFAULT
    interval: float = INTERVAL_DEFAULT

    def validate(self) -> List[str]:
        """Validate the policy and return a list of errors."""
        errors = []
        if self.attempts < 1:
            errors.append("RETRY_ATTEMPTS must be a positive integer (at least 1)")
        if not math.isfinite(self.interval) or self.interval < 0:
            errors.append("RETRY_INTERVAL_SECONDS must be a finite, non-negative number")
        return errors


def is_local_error(error: BaseException) -> bool:
    """Check if the error was produced by our own validation or wrapping."""
    return isinstance(error, LocalError) and bool(error.is_local())


def _client_error_info(error: ClientError) -> tuple[str, int | None]:
    code = error.response.get("Error", {}).get("Code", "")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code, status


def is_throttle_error(error: BaseException) -> bool:
    """Check if the remote service throttled the request."""
    if not isinstance(error, ClientError):
        return False
    code, status = _client_error_info(error)
    return code in THROTTLING_ERROR_CODES or status in THROTTLING_STATUS_CODES


def is_expired_credentials_error(error: BaseException) -> bool:
    """Check if the request failed because the credentials expired."""
    if not isinstance(error, ClientError):
        return False
    code, _ = _client_error_info(error)
    return code in EXPIRED_CREDENTIALS_ERROR_CODES


def is_retryable_error(error: BaseException) -> bool:
    """Check if the remote failure is a generic retryable fault."""
    if isinstance(error, (BotoConnectionError, HTTPClientError)):
        return True
    if not isinstance(error, ClientError):
        return False
    code, status = _client_error_info(error)
    return code in RETRYABLE_ERROR_CODES or status in RETRYABLE_STATUS_CODES


def is_transient_error(error: BaseException) -> bool:
    """Check if the error is a remote failure worth retrying.

    Local errors are never transient, even when botocore would retry them.
    """
    if is_local_error(error):
        return False
    return (
        is_retryable_error(error)
        or is_throttle_error(error)
        or is_expired_credentials_error(error)
    )


def retry(
    fn: RetryFn[T],
    attempts: int = ATTEMPTS_DEFAULT,
    interval: float = INTERVAL_DEFAULT,
) -> T:
    """Call fn, retrying it on transient errors.

    The calling thread sleeps ``interval`` seconds between attempts. Once
    the attempts are spent the error of the last call is raised as is.

    Args:
        fn: Zero-argument operation to call.
        attempts: Total number of calls allowed, must be positive.
        interval: Seconds to wait before each new call.

    Returns:
        The result of the first successful call.

    Raises:
        ValueError: If attempts is lower than 1, or interval is negative
            or not finite.
        Exception: The error of the last call when it is local, not
            retryable, or when no attempts are left.
    """
    if attempts < 1:
        raise ValueError("attempts must be a positive integer")
    if not math.isfinite(interval) or interval < 0:
        raise ValueError("interval must be a finite, non-negative number of seconds")

    times_left = attempts
    while True:
        try:
            return fn()
        except Exception as e:
            times_left -= 1
            if not is_transient_error(e) or times_left == 0:
                raise

            error_detail = LogSanitizer.sanitize(str(e))
            logger.warning(
                f"Waiting for transient error: {error_detail}, "
                f"{times_left} attempt(s) left, retrying in {interval}s",
                extra={
                    "func": "retry",
                    "error": error_detail,
                    "attempts_left": times_left,
                },
            )
            time.sleep(interval)


def retry_default(fn: RetryFn[T]) -> T:
    """Call retry with the default attempts and interval."""
    return retry(fn, ATTEMPTS_DEFAULT, INTERVAL_DEFAULT)


def retry_with_policy(fn: RetryFn[T], policy: RetryPolicy) -> T:
    """Call retry with the values of a RetryPolicy."""
    return retry(fn, policy.attempts, policy.interval)
