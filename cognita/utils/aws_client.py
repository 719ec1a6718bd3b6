"""AWS client management for Cognita."""

import logging
from typing import Any

import boto3
from botocore.config import Config

from cognita.utils.retry import RetryPolicy, retry_with_policy

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Manages boto3 clients whose API calls go through the retry policy."""

    def __init__(
        self,
        region: str = "us-east-1",
        profile: str | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self.region = region
        self.profile = profile
        self.retry_policy = retry_policy or RetryPolicy()
        self._session: boto3.Session | None = None
        self._clients: dict[str, Any] = {}

    def _get_session(self) -> boto3.Session:
        """Get or create boto3 session."""
        if self._session is None:
            self._session = boto3.Session(
                profile_name=self.profile, region_name=self.region
            )
        return self._session

    def get_client(self, service_name: str) -> Any:
        """Get boto3 client for specified service."""
        if service_name not in self._clients:
            session = self._get_session()
            config = Config(retries={"max_attempts": 0})  # We handle retries ourselves
            self._clients[service_name] = session.client(
                service_name,
                config=config,
                region_name=self.region,  # type: ignore[call-overload]
            )
        return self._clients[service_name]

    def call(self, service_name: str, operation: str, **kwargs: Any) -> Any:
        """Call a client operation, retrying it on transient errors.

        Args:
            service_name: boto3 service, ex: ec2.
            operation: Client method name, ex: describe_instances.
            **kwargs: Parameters of the operation.
        """
        client = self.get_client(service_name)
        method = getattr(client, operation)
        logger.debug(f"Calling {service_name}.{operation} in {self.region}")
        return retry_with_policy(lambda: method(**kwargs), self.retry_policy)
