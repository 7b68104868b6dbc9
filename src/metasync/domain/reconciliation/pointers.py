"""Pointer refresh stage: re-read ``contractURI`` / ``tokenURI`` values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from metasync.domain.model import Contract, ManagedEntity, Token
from metasync.domain.ports import PointerReadError

from .batching import run_in_batches
from .context import Outcome, StageReport

if TYPE_CHECKING:
    from metasync.domain.ports import PointerReader

    from .cache import EntityCache
    from .context import CycleContext

log = getLogger(__name__)

TEntity = TypeVar("TEntity", bound=ManagedEntity)


class PointerRefreshStage(ABC, Generic[TEntity]):
    """Read the authoritative pointer of every queued entity.

    The stored pointer is replaced (and the entity stamped and marked for
    persistence) when the value changed or the entity must be refreshed anyway.
    Any successful read confirms the pointer for the document stage; a failed
    read leaves the entity in the pointer queue for the next cycle.
    """

    name: ClassVar[str]
    pointer_label: ClassVar[str]

    def __init__(self, *, cache: EntityCache[TEntity], reader: PointerReader) -> None:
        self.cache = cache
        self.reader = reader

    async def run(self, context: CycleContext, *, batch_size: int) -> StageReport:
        entities = self.cache.pointer_queue_entities()

        async def refresh(entity: TEntity) -> Outcome:
            return await self.refresh(entity, context=context)

        report = await run_in_batches(entities, refresh, batch_size=batch_size)
        return StageReport.from_batch(self.name, report)

    async def refresh(self, entity: TEntity, *, context: CycleContext) -> Outcome:
        try:
            pointer = await self._read_pointer(entity)
        except PointerReadError as exc:
            log.warning("[API] Error during fetch %s of %s: %s", self.pointer_label, entity.id, exc)
            return Outcome.FAILED
        log.info("[API] Fetched %s of %s", self.pointer_label, entity.id)

        outcome = Outcome.CONFIRMED
        if self._needs_update(entity, pointer):
            entity.pointer_uri = pointer
            entity.last_updated_at = context.timestamp
            self.cache.mark_modified(entity)
            outcome = Outcome.UPDATED
        self.cache.confirm_pointer(entity)
        return outcome

    def _needs_update(self, entity: TEntity, pointer: str) -> bool:
        return pointer != entity.pointer_uri or self.cache.has_to_update(entity)

    @abstractmethod
    async def _read_pointer(self, entity: TEntity) -> str: ...


class ContractPointerStage(PointerRefreshStage[Contract]):
    name = "contract-pointer"
    pointer_label = "contractURI"

    async def _read_pointer(self, entity: Contract) -> str:
        return await self.reader.read_contract_pointer(entity.id)


class TokenPointerStage(PointerRefreshStage[Token]):
    name = "token-pointer"
    pointer_label = "tokenURI"

    async def _read_pointer(self, entity: Token) -> str:
        return await self.reader.read_token_pointer(entity.contract.id, entity.numeric_id)

    def _needs_update(self, entity: Token, pointer: str) -> bool:
        # tokens without a document are re-stamped so their fetch is retried
        return not entity.has_document or super()._needs_update(entity, pointer)
