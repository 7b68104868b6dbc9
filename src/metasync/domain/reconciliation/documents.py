"""Document refresh stage: fetch pointed-to documents and merge them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from metasync.domain.model import Contract, ManagedEntity, Token

from .batching import run_in_batches
from .context import Outcome, StageReport

if TYPE_CHECKING:
    from metasync.domain.ports import DocumentFetcher

    from .cache import EntityCache
    from .context import CycleContext

log = getLogger(__name__)

TEntity = TypeVar("TEntity", bound=ManagedEntity)


class DocumentRefreshStage(ABC, Generic[TEntity]):
    """Fetch the document of every entity whose pointer was confirmed this cycle."""

    name: ClassVar[str]
    kind: ClassVar[str]
    pointer_label: ClassVar[str]

    def __init__(self, *, cache: EntityCache[TEntity], fetcher: DocumentFetcher) -> None:
        self.cache = cache
        self.fetcher = fetcher

    async def run(self, context: CycleContext, *, batch_size: int) -> StageReport:
        entities = self.cache.document_queue_entities()

        async def refresh(entity: TEntity) -> Outcome:
            return await self.refresh(entity, context=context)

        report = await run_in_batches(entities, refresh, batch_size=batch_size)
        return StageReport.from_batch(self.name, report)

    async def refresh(self, entity: TEntity, *, context: CycleContext) -> Outcome:
        pointer = entity.pointer_uri
        if not pointer:
            log.warning(
                "Tried to update metadata of %s with null %s", entity.id, self.pointer_label
            )
            return Outcome.SKIPPED

        if not await self._fetch_and_merge(entity, pointer):
            # stays queued; the next cycle re-reads its pointer and retries
            return Outcome.FAILED

        entity.last_updated_at = context.timestamp
        self.cache.save(entity)
        self.cache.complete_document(entity)
        log.info("Metadata updated for %s - %s", self.kind, entity.id)
        return Outcome.UPDATED

    @abstractmethod
    async def _fetch_and_merge(self, entity: TEntity, pointer: str) -> bool: ...


class ContractDocumentStage(DocumentRefreshStage[Contract]):
    name = "contract-document"
    kind = "contract"
    pointer_label = "contractURI"

    async def _fetch_and_merge(self, entity: Contract, pointer: str) -> bool:
        metadata = await self.fetcher.fetch_contract_metadata(pointer)
        if metadata is None:
            return False
        entity.apply_metadata(metadata)
        return True


class TokenDocumentStage(DocumentRefreshStage[Token]):
    name = "token-document"
    kind = "token"
    pointer_label = "tokenURI"

    async def _fetch_and_merge(self, entity: Token, pointer: str) -> bool:
        metadata = await self.fetcher.fetch_token_metadata(pointer, metadata_id=entity.id)
        if metadata is None:
            return False
        entity.metadata = metadata
        return True
