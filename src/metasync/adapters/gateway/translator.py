"""Translate validated gateway payloads into domain metadata records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metasync.domain.model import Attribute, ContractMetadata, TokenMetadata

if TYPE_CHECKING:
    from .schema import RawAttribute, RawContractMetadata, RawTokenMetadata


def translate_token_metadata(raw: RawTokenMetadata, *, metadata_id: str) -> TokenMetadata:
    return TokenMetadata(
        id=metadata_id,
        name=raw.name,
        description=raw.description,
        image=raw.image,
        external_url=raw.external_url,
        artist=raw.artist,
        artist_url=raw.artist_url,
        layers=list(raw.layers) if raw.layers is not None else None,
        type=raw.type,
        composite=raw.composite,
        attributes=[_translate_attribute(attr) for attr in raw.attributes or ()],
    )


def translate_contract_metadata(raw: RawContractMetadata) -> ContractMetadata:
    return ContractMetadata(
        name=raw.name,
        description=raw.description,
        image=raw.image,
        external_link=raw.external_link,
        artist=raw.artist,
        artist_url=raw.artist_url,
    )


def _translate_attribute(raw: RawAttribute) -> Attribute:
    return Attribute(
        trait_type=raw.trait_type,
        value=raw.value,
        display_type=raw.display_type,
    )
