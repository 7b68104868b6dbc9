"""Sequence pointer and document refreshes for contracts and tokens."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from metasync.config.reconciliation import ReconciliationConfig

from .context import CycleContext
from .documents import ContractDocumentStage, TokenDocumentStage
from .pointers import ContractPointerStage, TokenPointerStage

if TYPE_CHECKING:
    from collections.abc import Callable

    from metasync.domain.model import Contract, Token
    from metasync.domain.ports import DocumentFetcher, PointerReader

    from .cache import EntityCache
    from .context import StageReport

log = getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True, frozen=True)
class CycleReport:
    context: CycleContext
    forced_contracts: int
    forced_tokens: int
    contract_pointers: StageReport
    contract_documents: StageReport
    token_pointers: StageReport
    token_documents: StageReport
    flushed: int

    @property
    def stages(self) -> tuple[StageReport, ...]:
        return (
            self.contract_pointers,
            self.contract_documents,
            self.token_pointers,
            self.token_documents,
        )


class Reconciler:
    """Drive one reconciliation cycle over the contract and token caches.

    Order per cycle:

    1. every entity flagged dirty is forced into its pointer queue;
    2. contract pointers are refreshed;
    3. contract documents and token pointers are refreshed concurrently;
    4. token documents are refreshed;
    5. entities stamped by a pointer refresh but not saved by a document
       refresh are persisted.
    """

    def __init__(
        self,
        *,
        contracts: EntityCache[Contract],
        tokens: EntityCache[Token],
        reader: PointerReader,
        fetcher: DocumentFetcher,
        config: ReconciliationConfig | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.contracts = contracts
        self.tokens = tokens
        self.config = config or ReconciliationConfig()
        self._clock = clock
        self._cycle = 0

        self._contract_pointers = ContractPointerStage(cache=contracts, reader=reader)
        self._token_pointers = TokenPointerStage(cache=tokens, reader=reader)
        self._contract_documents = ContractDocumentStage(cache=contracts, fetcher=fetcher)
        self._token_documents = TokenDocumentStage(cache=tokens, fetcher=fetcher)

    @property
    def cycles_run(self) -> int:
        return self._cycle

    async def reconcile_cycle(self, *, timestamp: int | None = None) -> CycleReport:
        """Run every stage once; failures only leave entities stale until next time."""

        self._cycle += 1
        context = CycleContext(
            timestamp=timestamp if timestamp is not None else int(self._clock().timestamp()),
            cycle=self._cycle,
        )
        contract_batch = self.config.contract_batch_size
        ipfs_batch = self.config.ipfs_batch_size

        self.contracts.begin_cycle()
        self.tokens.begin_cycle()
        forced_contracts = self.contracts.force_dirty_into_pointer_queue()
        forced_tokens = self.tokens.force_dirty_into_pointer_queue()
        log.info(
            "Cycle %s: %s contracts and %s tokens queued for pointer refresh",
            context.cycle,
            len(self.contracts.pointer_refresh_queue),
            len(self.tokens.pointer_refresh_queue),
        )

        contract_pointers = await self._contract_pointers.run(context, batch_size=contract_batch)
        contract_documents, token_pointers = await asyncio.gather(
            self._contract_documents.run(context, batch_size=ipfs_batch),
            self._token_pointers.run(context, batch_size=contract_batch),
        )
        token_documents = await self._token_documents.run(context, batch_size=ipfs_batch)

        flushed = self.contracts.flush() + self.tokens.flush()

        report = CycleReport(
            context=context,
            forced_contracts=forced_contracts,
            forced_tokens=forced_tokens,
            contract_pointers=contract_pointers,
            contract_documents=contract_documents,
            token_pointers=token_pointers,
            token_documents=token_documents,
            flushed=flushed,
        )
        log.info(
            "Cycle %s finished: %s; flushed=%s",
            context.cycle,
            "; ".join(stage.summary() for stage in report.stages),
            flushed,
        )
        return report
