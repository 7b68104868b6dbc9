"""Pydantic models describing raw NFT metadata documents."""

from __future__ import annotations

import json
import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

log = logging.getLogger(__name__)


def stringify(value: object) -> str:
    """Render a raw JSON value as text; strings pass through untouched."""

    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class GatewayBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Metadata %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class RawAttribute(GatewayBaseModel):
    trait_type: str = ""
    value: str = ""
    display_type: str | None = None

    @field_validator("trait_type", "value", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> str:
        return stringify(value)

    @field_validator("display_type", mode="before")
    @classmethod
    def _stringify_optional(cls, value: object) -> str | None:
        if value is None or value == "":
            return None
        return stringify(value)


class RawTokenMetadata(GatewayBaseModel):
    name: str | None = None
    description: str | None = None
    image: str | None = None
    external_url: str | None = None
    artist: str | None = None
    artist_url: str | None = None
    layers: list[str] | None = None
    type: str | None = None
    composite: bool = False
    attributes: list[RawAttribute] | None = None

    @field_validator("composite", mode="before")
    @classmethod
    def _truthy(cls, value: object) -> bool:
        return bool(value)


class RawContractMetadata(GatewayBaseModel):
    name: str | None = None
    description: str | None = None
    image: str | None = None
    external_link: str | None = None
    artist: str | None = None
    artist_url: str | None = None
