"""Content gateway configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_float, optional_env_int, optional_env_str
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GATEWAY_URL = "https://moonsama.mypinata.cloud/"
DEFAULT_GATEWAY_TIMEOUT_SECONDS = 5
DEFAULT_BAN_THRESHOLD = 5


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    base_url: str
    ban_threshold: int
    resilience: ResilienceConfig


def get_gateway_config(*, resilience: ResilienceConfig | None = None) -> GatewayConfig:
    base_url = optional_env_str("METASYNC_GATEWAY_URL", DEFAULT_GATEWAY_URL)
    timeout = optional_env_int(
        "METASYNC_GATEWAY_TIMEOUT", DEFAULT_GATEWAY_TIMEOUT_SECONDS, minimum=1
    )
    ban_threshold = optional_env_int(
        "METASYNC_GATEWAY_BAN_THRESHOLD", DEFAULT_BAN_THRESHOLD, minimum=0
    )
    calls_per_second = optional_env_float("METASYNC_GATEWAY_RATE_LIMIT", None)
    ratelimit = (
        RateLimit(max_calls=max(1, int(calls_per_second)), per_seconds=1.0)
        if calls_per_second is not None
        else None
    )

    return GatewayConfig(
        base_url=base_url,
        ban_threshold=ban_threshold,
        resilience=resilience
        or ResilienceConfig(
            name="gateway",
            timeout_seconds=float(timeout),
            retry=RetryPolicy(total=0),
            ratelimit=ratelimit,
            default_headers={"Content-Type": "application/json"},
        ),
    )
