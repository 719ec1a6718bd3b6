"""Log sanitization for Cognita.

Remote errors can echo request parameters back, including access keys,
session tokens and SigV4 signatures, so error detail is passed through
LogSanitizer before it reaches the logs.
"""

import re
from typing import Any, Dict


class LogSanitizer:
    """Sanitizes log output to prevent sensitive data exposure."""

    SENSITIVE_PATTERNS = [
        (re.compile(r"(?:AKIA|ASIA)[0-9A-Z]{16}"), "[REDACTED_ACCESS_KEY]"),
        # SigV4 presigned URL parameters and headers echoed back by botocore
        (
            re.compile(
                r"(?i)(X-Amz-(?:Security-Token|Signature|Credential))\s*[=:]\s*[^&\s\"',]+"
            ),
            r"\1=[REDACTED]",
        ),
        (
            re.compile(r"(?i)(aws_session_token|aws_secret_access_key)\s*[=:]\s*\S+"),
            r"\1=[REDACTED]",
        ),
        (re.compile(r"(?i)password\s*[=:]\s*(?!\[REDACTED)\S+"), "password=[REDACTED]"),
        (re.compile(r"(?i)secret\s*[=:]\s*(?!\[REDACTED)\S+"), "secret=[REDACTED]"),
        (re.compile(r"(?i)token\s*[=:]\s*(?!\[REDACTED)\S+"), "token=[REDACTED]"),
        (re.compile(r"(?i)api[_-]?key\s*[=:]\s*(?!\[REDACTED)\S+"), "api_key=[REDACTED]"),
        (re.compile(r"[a-zA-Z0-9+/]{40}"), "[REDACTED_SECRET]"),
    ]

    SENSITIVE_KEYS = {"password", "secret", "token", "key", "credential", "auth"}

    @classmethod
    def sanitize(cls, message: str) -> str:
        """
        Sanitize a log message to remove sensitive data.

        Args:
            message: The message to sanitize

        Returns:
            Sanitized message
        """
        sanitized = message
        for pattern, replacement in cls.SENSITIVE_PATTERNS:
            sanitized = pattern.sub(replacement, sanitized)
        return sanitized

    @classmethod
    def sanitize_dict(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Sanitize a dictionary of structured log fields."""
        sanitized: Dict[str, Any] = {}

        for key, value in data.items():
            if any(s in key.lower() for s in cls.SENSITIVE_KEYS):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, str):
                sanitized[key] = cls.sanitize(value)
            elif isinstance(value, dict):
                sanitized[key] = cls.sanitize_dict(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    cls.sanitize(v) if isinstance(v, str) else v for v in value
                ]
            else:
                sanitized[key] = value

        return sanitized
