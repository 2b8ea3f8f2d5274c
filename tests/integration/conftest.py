"""Shared fixtures for integration tests."""

import os

import pytest

from suitrail.data.core import RPCConfig
from suitrail.data.utils import RetryPolicy

# Skip all integration tests unless RUN_SUITRAIL_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_SUITRAIL_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_SUITRAIL_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def rpc_config() -> RPCConfig:
    return RPCConfig.from_env(timeout=30.0)


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(max_retries=3, backoff=1.0, inter_batch_delay=0.2)
