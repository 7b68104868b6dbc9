"""Fetch metadata documents through a content gateway."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from metasync.adapters.http_resilience import ResilientClient

from .circuit import FailureTracker
from .schema import RawContractMetadata, RawTokenMetadata
from .translator import translate_contract_metadata, translate_token_metadata
from .urls import gateway_root, normalize_pointer

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from metasync.config.gateway import GatewayConfig
    from metasync.config.http_resilience import ResilienceConfig
    from metasync.domain.model import ContractMetadata, TokenMetadata

log = getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


class MalformedDocumentError(ValueError):
    """Raised internally when a gateway body is not the expected JSON document."""


class GatewayDocumentFetcher:
    """Document fetcher backed by one persistent HTTP client.

    Every failure is soft: the address is charged in the ``FailureTracker`` and the
    caller receives ``None``. Addresses the tracker has banned are skipped without
    a request.
    """

    def __init__(
        self,
        *,
        config: GatewayConfig,
        tracker: FailureTracker | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._gateway_base = gateway_root(config.base_url)
        self.tracker = tracker or FailureTracker(threshold=config.ban_threshold)
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> GatewayDocumentFetcher:
        self._active_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()

    @property
    def gateway_base(self) -> str:
        return self._gateway_base

    def normalize(self, pointer: str) -> str:
        return normalize_pointer(pointer, gateway_base=self._gateway_base)

    async def fetch_token_metadata(
        self, pointer: str, *, metadata_id: str
    ) -> TokenMetadata | None:
        raw = await self._fetch_model(pointer, RawTokenMetadata)
        if raw is None:
            return None
        return translate_token_metadata(raw, metadata_id=metadata_id)

    async def fetch_contract_metadata(self, pointer: str) -> ContractMetadata | None:
        raw = await self._fetch_model(pointer, RawContractMetadata)
        if raw is None:
            return None
        return translate_contract_metadata(raw)

    async def fetch_document(self, pointer: str) -> dict[str, object] | None:
        """Return the JSON object behind ``pointer`` or ``None`` on any failure."""

        address = self.normalize(pointer)
        if self.tracker.is_banned(address):
            log.warning("[IPFS] SKIP DUE TO TRIES LIMIT %s", address)
            return None

        try:
            response = await self._active_client().get(address)
            log.info("[IPFS] %s %s", response.status_code, address)
            return _document_payload(response)
        except (httpx.HTTPError, MalformedDocumentError) as exc:
            self._charge(address, exc)
        return None

    async def _fetch_model(
        self, pointer: str, model: type[TModel]
    ) -> TModel | None:
        payload = await self.fetch_document(pointer)
        if payload is None:
            return None
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            self._charge(self.normalize(pointer), exc)
        return None

    def _charge(self, address: str, exc: Exception) -> None:
        tries = self.tracker.record_failure(address)
        log.warning("[IPFS] ERROR %s %s TRY %s", address, tries, exc)

    def _active_client(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client


def _document_payload(response: httpx.Response) -> dict[str, object]:
    if response.status_code >= 400:
        raise httpx.HTTPStatusError(
            f"Gateway responded with {response.status_code}",
            request=response.request,
            response=response,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise MalformedDocumentError("Response body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise MalformedDocumentError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    return payload
