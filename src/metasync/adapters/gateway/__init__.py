"""Content gateway adapter: pointer normalization, circuit breaker, fetcher."""

from __future__ import annotations

from .circuit import DEFAULT_BAN_THRESHOLD, FailureTracker
from .client import GatewayDocumentFetcher, MalformedDocumentError
from .schema import RawAttribute, RawContractMetadata, RawTokenMetadata
from .translator import translate_contract_metadata, translate_token_metadata
from .urls import gateway_root, normalize_pointer

__all__ = [
    "DEFAULT_BAN_THRESHOLD",
    "FailureTracker",
    "GatewayDocumentFetcher",
    "MalformedDocumentError",
    "RawAttribute",
    "RawContractMetadata",
    "RawTokenMetadata",
    "gateway_root",
    "normalize_pointer",
    "translate_contract_metadata",
    "translate_token_metadata",
]
