"""Ports for reading entity pointers from their authoritative on-chain source."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class PointerReadError(RuntimeError):
    """Raised by pointer readers when the on-chain call cannot be completed."""

    def __init__(self, message: str, *, entity_id: str | None = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


@runtime_checkable
class PointerReader(Protocol):
    """Reads ``contractURI`` / ``tokenURI`` values for managed entities."""

    async def read_contract_pointer(self, contract_id: str) -> str: ...

    async def read_token_pointer(self, contract_id: str, token_index: int) -> str: ...


__all__ = ["PointerReadError", "PointerReader"]
