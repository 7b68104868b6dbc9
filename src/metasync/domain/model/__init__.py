"""Public domain model surface."""

from __future__ import annotations

from metasync.domain.model.entities import (
    Attribute,
    Contract,
    ContractMetadata,
    ManagedEntity,
    Token,
    TokenMetadata,
    token_id,
)

__all__ = [
    "Attribute",
    "Contract",
    "ContractMetadata",
    "ManagedEntity",
    "Token",
    "TokenMetadata",
    "token_id",
]
