from __future__ import annotations

import pytest
from pydantic import ValidationError

from metasync.adapters.gateway import (
    RawAttribute,
    RawContractMetadata,
    RawTokenMetadata,
    translate_contract_metadata,
    translate_token_metadata,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Blue", "Blue"),
        (5, "5"),
        (1.5, "1.5"),
        (True, "true"),
        (None, "null"),
        (["a", "b"], '["a","b"]'),
    ],
)
def test_attribute_values_are_stringified(raw: object, expected: str) -> None:
    attribute = RawAttribute.model_validate({"trait_type": "Trait", "value": raw})

    assert attribute.value == expected


def test_attribute_trait_type_and_display_type() -> None:
    attribute = RawAttribute.model_validate({"trait_type": 7, "value": 1, "display_type": 3})
    missing = RawAttribute.model_validate({"value": "x"})

    assert attribute.trait_type == "7"
    assert attribute.display_type == "3"
    assert missing.trait_type == ""
    assert missing.display_type is None


def test_composite_follows_truthiness() -> None:
    assert RawTokenMetadata.model_validate({"composite": "yes"}).composite is True
    assert RawTokenMetadata.model_validate({"composite": 0}).composite is False
    assert RawTokenMetadata.model_validate({}).composite is False


def test_numeric_name_is_accepted_as_text() -> None:
    assert RawTokenMetadata.model_validate({"name": 42}).name == "42"


def test_layers_must_be_a_list() -> None:
    with pytest.raises(ValidationError):
        RawTokenMetadata.model_validate({"layers": {"a": 1}})


def test_token_translation_keeps_attribute_order() -> None:
    raw = RawTokenMetadata.model_validate(
        {
            "name": "Token",
            "attributes": [
                {"trait_type": "b", "value": 2},
                {"trait_type": "a", "value": 1},
            ],
        }
    )

    metadata = translate_token_metadata(raw, metadata_id="c-1")

    assert metadata.id == "c-1"
    assert [attr.trait_type for attr in metadata.attributes] == ["b", "a"]
    assert metadata.layers is None


def test_contract_translation_reads_external_link() -> None:
    raw = RawContractMetadata.model_validate(
        {"name": "C", "external_link": "https://c.example", "external_url": "ignored"}
    )

    metadata = translate_contract_metadata(raw)

    assert metadata.external_link == "https://c.example"
    assert metadata.name == "C"
