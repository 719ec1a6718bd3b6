"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from cognita.filters import Filter
from cognita.models import Tag

# Set AWS region for tests
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_REGION", "us-east-1")


@pytest.fixture
def throttling_error() -> ClientError:
    """ClientError returned when AWS throttles a request."""
    return ClientError(
        {
            "Error": {"Code": "Throttling", "Message": "Rate exceeded"},
            "ResponseMetadata": {"HTTPStatusCode": 400},
        },
        "DescribeInstances",
    )


@pytest.fixture
def no_sleep():
    """Replace the retry wait so tests do not block."""
    with patch("cognita.utils.retry.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def sample_filter() -> Filter:
    """Filter with every rule set populated."""
    return Filter(
        tags=[Tag(name="env", value="prod")],
        include=["aws_instance", "aws_vpc"],
        exclude=["aws_iam_user"],
        targets=["aws_instance.i-1234567890abcdef0", "aws_vpc.vpc-12345678"],
    )
