from __future__ import annotations

import pytest

from metasync.config import (
    ConfigurationError,
    ReconciliationConfig,
    ResilienceConfig,
    get_gateway_config,
    get_reconciliation_config,
)

_ENV_VARS = (
    "METASYNC_GATEWAY_URL",
    "METASYNC_GATEWAY_TIMEOUT",
    "METASYNC_GATEWAY_BAN_THRESHOLD",
    "METASYNC_GATEWAY_RATE_LIMIT",
    "METASYNC_CONTRACT_BATCH_SIZE",
    "METASYNC_IPFS_BATCH_SIZE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_gateway_defaults() -> None:
    config = get_gateway_config()

    assert config.base_url == "https://moonsama.mypinata.cloud/"
    assert config.ban_threshold == 5
    assert config.resilience.timeout_seconds == 5.0
    assert config.resilience.ratelimit is None
    assert config.resilience.retry.total == 0
    assert config.resilience.follow_redirects is True


def test_gateway_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METASYNC_GATEWAY_URL", "https://ipfs.io")
    monkeypatch.setenv("METASYNC_GATEWAY_TIMEOUT", "12")
    monkeypatch.setenv("METASYNC_GATEWAY_BAN_THRESHOLD", "2")
    monkeypatch.setenv("METASYNC_GATEWAY_RATE_LIMIT", "10")

    config = get_gateway_config()

    assert config.base_url == "https://ipfs.io"
    assert config.ban_threshold == 2
    assert config.resilience.timeout_seconds == 12.0
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 10


def test_explicit_resilience_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METASYNC_GATEWAY_TIMEOUT", "12")
    resilience = ResilienceConfig(name="custom", timeout_seconds=1.0)

    assert get_gateway_config(resilience=resilience).resilience is resilience


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("METASYNC_GATEWAY_TIMEOUT", "soon"),
        ("METASYNC_GATEWAY_TIMEOUT", "0"),
        ("METASYNC_GATEWAY_BAN_THRESHOLD", "-1"),
        ("METASYNC_GATEWAY_RATE_LIMIT", "fast"),
        ("METASYNC_GATEWAY_RATE_LIMIT", "0"),
    ],
)
def test_invalid_gateway_values_raise(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError) as exc:
        get_gateway_config()

    assert name in str(exc.value)


def test_reconciliation_defaults_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_reconciliation_config() == ReconciliationConfig()

    monkeypatch.setenv("METASYNC_CONTRACT_BATCH_SIZE", "8")
    monkeypatch.setenv("METASYNC_IPFS_BATCH_SIZE", " 3 ")

    assert get_reconciliation_config() == ReconciliationConfig(
        contract_batch_size=8, ipfs_batch_size=3
    )


def test_blank_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METASYNC_IPFS_BATCH_SIZE", "   ")

    assert get_reconciliation_config().ipfs_batch_size == 20


def test_batch_sizes_must_be_positive() -> None:
    with pytest.raises(ConfigurationError, match="positive"):
        ReconciliationConfig(contract_batch_size=0)
