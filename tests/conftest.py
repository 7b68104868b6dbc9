from __future__ import annotations

import pytest

from metasync.config import GatewayConfig, ResilienceConfig, RetryPolicy
from tests.support.reconciliation import DirtySet, RecordingStore

GATEWAY_URL = "https://gateway.test/"


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(
        base_url=GATEWAY_URL,
        ban_threshold=5,
        resilience=ResilienceConfig(
            name="gateway", timeout_seconds=5.0, retry=RetryPolicy(total=0)
        ),
    )


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def dirty() -> DirtySet:
    return DirtySet()
