"""Ports for fetching off-chain metadata documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from metasync.domain.model import ContractMetadata, TokenMetadata


@runtime_checkable
class DocumentFetcher(Protocol):
    """Fetches and parses the document a pointer refers to.

    Implementations never raise for fetch problems; they return ``None``.
    """

    async def fetch_token_metadata(
        self, pointer: str, *, metadata_id: str
    ) -> TokenMetadata | None: ...

    async def fetch_contract_metadata(self, pointer: str) -> ContractMetadata | None: ...


__all__ = ["DocumentFetcher"]
