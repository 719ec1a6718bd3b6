"""Configuration management for Cognita.

Configuration is read from environment variables:
- COGNITA_INCLUDE: Comma separated resource types to process
- COGNITA_EXCLUDE: Comma separated resource types to skip
- COGNITA_TARGETS: Comma separated '<type>.<id>' resources to process
- COGNITA_TAGS: Comma separated 'NAME:VALUE' tags
- RETRY_ATTEMPTS: Attempts for remote calls (default 3)
- RETRY_INTERVAL_SECONDS: Wait between attempts (default 30)
- LOG_LEVEL: Log level for output (default INFO)
- AWS_REGION, AWS_PROFILE: Where remote calls are sent
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from cognita.errors import (
    ConfigurationError,
    FilterTargetsInvalidError,
    TagInvalidError,
)
from cognita.filters import Filter
from cognita.models import Tag
from cognita.utils.aws_client import AWSClientManager
from cognita.utils.retry import ATTEMPTS_DEFAULT, INTERVAL_DEFAULT, RetryPolicy
from cognita.utils.security import LogSanitizer

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_config_logger = logging.getLogger(__name__)


def _split_list(value: Optional[str]) -> List[str]:
    """Split a comma separated environment value, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class CognitaConfig:
    """Configuration for a collection run.

    Attributes:
        include: Resource types to process, empty for all.
        exclude: Resource types to skip.
        targets: Specific '<type>.<id>' resources to process.
        tags: 'NAME:VALUE' tags used to match resources.
        retry_attempts: Attempts allowed for each remote call.
        retry_interval_seconds: Wait between two attempts.
        log_level: Log level for output.
        region: AWS region for remote calls.
        profile: AWS profile name, None for the default credentials.
    """

    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    retry_attempts: int = ATTEMPTS_DEFAULT
    retry_interval_seconds: float = INTERVAL_DEFAULT
    log_level: str = "INFO"
    region: str = "us-east-1"
    profile: Optional[str] = None

    @classmethod
    def from_environment(cls, validate: bool = True) -> "CognitaConfig":
        """Create configuration from environment variables.

        Args:
            validate: If True, validates the configuration and raises
                ConfigurationError if invalid.

        Raises:
            ConfigurationError: If a number cannot be parsed, or if validation
                is enabled and the configuration is invalid.
        """
        config = cls()

        config.include = _split_list(os.environ.get("COGNITA_INCLUDE"))
        config.exclude = _split_list(os.environ.get("COGNITA_EXCLUDE"))
        config.targets = _split_list(os.environ.get("COGNITA_TARGETS"))
        config.tags = _split_list(os.environ.get("COGNITA_TAGS"))

        attempts = os.environ.get("RETRY_ATTEMPTS")
        if attempts:
            try:
                config.retry_attempts = int(attempts)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid RETRY_ATTEMPTS: '{attempts}' is not a valid integer"
                )

        interval = os.environ.get("RETRY_INTERVAL_SECONDS")
        if interval:
            try:
                config.retry_interval_seconds = float(interval)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid RETRY_INTERVAL_SECONDS: '{interval}' is not a valid number"
                )

        log_level_value = os.environ.get("LOG_LEVEL", "INFO").upper().strip()
        if log_level_value in VALID_LOG_LEVELS:
            config.log_level = log_level_value
        else:
            _config_logger.warning(
                f"Invalid LOG_LEVEL '{log_level_value}', defaulting to INFO"
            )
            config.log_level = "INFO"

        config.region = os.environ.get("AWS_REGION", "us-east-1")
        config.profile = os.environ.get("AWS_PROFILE") or None

        if validate:
            errors = config.validate()
            if errors:
                raise ConfigurationError(
                    f"Configuration validation failed: {errors}", errors=errors
                )

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages. Empty list if configuration is valid.
        """
        errors = self.retry_policy().validate()

        for raw in self.tags:
            try:
                Tag.from_string(raw)
            except TagInvalidError as e:
                errors.append(e.message)

        try:
            Filter(targets=self.targets).validate()
        except FilterTargetsInvalidError as e:
            errors.append(e.message)

        return errors

    def build_filter(self) -> Filter:
        """Build the Filter for this configuration.

        Raises:
            TagInvalidError: If a tag is not 'NAME:VALUE'.
            FilterTargetsInvalidError: If a target is not '<type>.<id>'.
        """
        resource_filter = Filter(
            tags=[Tag.from_string(raw) for raw in self.tags],
            include=self.include,
            exclude=self.exclude,
            targets=self.targets,
        )
        resource_filter.validate()
        return resource_filter

    def retry_policy(self) -> RetryPolicy:
        """Get the retry policy for remote calls."""
        return RetryPolicy(
            attempts=self.retry_attempts, interval=self.retry_interval_seconds
        )

    def client_manager(self) -> AWSClientManager:
        """Get an AWS client manager retrying with this configuration."""
        return AWSClientManager(
            region=self.region, profile=self.profile, retry_policy=self.retry_policy()
        )

    def get_numeric_log_level(self) -> int:
        """Get the numeric log level for use with logging module."""
        return getattr(logging, self.log_level, logging.INFO)

    def to_dict(self) -> Dict[str, Any]:
        """Sanitized dictionary of the configuration, for logging."""
        return LogSanitizer.sanitize_dict(asdict(self))


def configure_logging(config: Optional[CognitaConfig] = None) -> logging.Logger:
    """Configure logging based on LOG_LEVEL environment variable or config.

    Args:
        config: Optional CognitaConfig instance. If not provided, reads from environment.

    Returns:
        Configured logger instance for cognita.
    """
    if config is None:
        log_level_str = os.environ.get("LOG_LEVEL", "INFO").upper().strip()
        if log_level_str not in VALID_LOG_LEVELS:
            logging.warning(f"Invalid LOG_LEVEL '{log_level_str}', defaulting to INFO")
            log_level_str = "INFO"
    else:
        log_level_str = config.log_level

    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )

    # Keep botocore request logging out of DEBUG runs
    logging.getLogger("botocore").setLevel(max(log_level, logging.WARNING))

    cognita_logger = logging.getLogger("cognita")
    cognita_logger.setLevel(log_level)

    if config is not None:
        cognita_logger.debug(f"Configuration loaded: {config.to_dict()}")

    return cognita_logger
