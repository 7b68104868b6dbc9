"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, optional_env_int, optional_env_str
from .errors import ConfigurationError
from .gateway import GatewayConfig, get_gateway_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .reconciliation import ReconciliationConfig, get_reconciliation_config

__all__ = [
    "ConfigurationError",
    "GatewayConfig",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "get_gateway_config",
    "get_reconciliation_config",
    "optional_env_float",
    "optional_env_int",
    "optional_env_str",
]
