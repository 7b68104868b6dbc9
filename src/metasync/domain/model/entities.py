"""Managed NFT entities and the metadata documents merged into them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class ManagedEntity(Protocol):
    """Capability shared by every entity the reconciliation pipeline refreshes."""

    @property
    def id(self) -> str: ...

    pointer_uri: str | None
    last_updated_at: int | None

    @property
    def has_document(self) -> bool: ...


@dataclass(slots=True, frozen=True)
class Attribute:
    trait_type: str
    value: str
    display_type: str | None = None


@dataclass(slots=True)
class TokenMetadata:
    """Token-level document, mapped one to one from the raw JSON."""

    id: str
    name: str | None = None
    description: str | None = None
    image: str | None = None
    external_url: str | None = None
    artist: str | None = None
    artist_url: str | None = None
    layers: list[str] | None = None
    type: str | None = None
    composite: bool = False
    attributes: list[Attribute] = field(default_factory=list[Attribute])


@dataclass(slots=True, frozen=True)
class ContractMetadata:
    """Contract-level projection of a collection document."""

    name: str | None = None
    description: str | None = None
    image: str | None = None
    external_link: str | None = None
    artist: str | None = None
    artist_url: str | None = None


@dataclass(eq=False, kw_only=True)
class Contract:
    id: str
    pointer_uri: str | None = None
    last_updated_at: int | None = None

    metadata_name: str | None = None
    description: str | None = None
    image: str | None = None
    external_link: str | None = None
    artist: str | None = None
    artist_url: str | None = None

    @property
    def document(self) -> ContractMetadata | None:
        if not self.has_document:
            return None
        return ContractMetadata(
            name=self.metadata_name,
            description=self.description,
            image=self.image,
            external_link=self.external_link,
            artist=self.artist,
            artist_url=self.artist_url,
        )

    @property
    def has_document(self) -> bool:
        return any(
            value is not None
            for value in (
                self.metadata_name,
                self.description,
                self.image,
                self.external_link,
                self.artist,
                self.artist_url,
            )
        )

    def apply_metadata(self, metadata: ContractMetadata) -> None:
        """Overwrite the projection fields field by field."""

        self.metadata_name = metadata.name
        self.description = metadata.description
        self.image = metadata.image
        self.external_link = metadata.external_link
        self.artist = metadata.artist
        self.artist_url = metadata.artist_url


@dataclass(eq=False, kw_only=True)
class Token:
    id: str
    contract: Contract
    numeric_id: int
    pointer_uri: str | None = None
    last_updated_at: int | None = None
    metadata: TokenMetadata | None = None

    @property
    def has_document(self) -> bool:
        return self.metadata is not None


def token_id(contract_id: str, numeric_id: int) -> str:
    return f"{contract_id}-{numeric_id}"
