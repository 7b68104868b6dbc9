"""Application wiring for the metadata reconciliation pipeline."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from metasync.adapters.gateway import FailureTracker, GatewayDocumentFetcher
from metasync.config import get_gateway_config, get_reconciliation_config
from metasync.domain.model import Contract, Token
from metasync.domain.reconciliation import EntityCache, Reconciler, never_dirty

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from metasync.adapters.http_resilience import ResilientClient
    from metasync.config import GatewayConfig, ReconciliationConfig, ResilienceConfig
    from metasync.domain.ports import DirtyFlagSource, EntityStore, PointerReader


log = getLogger(__name__)


@asynccontextmanager
async def open_reconciler(
    *,
    pointer_reader: PointerReader,
    store: EntityStore,
    dirty_flags: DirtyFlagSource = never_dirty,
    gateway_config: GatewayConfig | None = None,
    reconciliation_config: ReconciliationConfig | None = None,
    tracker: FailureTracker | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> AsyncIterator[Reconciler]:
    """Build a ``Reconciler`` whose gateway client lives as long as the context.

    Ingestion registers entities through ``reconciler.contracts.add`` and
    ``reconciler.tokens.add`` and calls ``reconcile_cycle`` once per processed
    block range. The failure tracker survives across cycles; pass one in to share
    it with other fetchers in the process.
    """

    gateway = gateway_config or get_gateway_config()
    settings = reconciliation_config or get_reconciliation_config()
    contracts = EntityCache[Contract](name="contracts", store=store, is_dirty=dirty_flags)
    tokens = EntityCache[Token](name="tokens", store=store, is_dirty=dirty_flags)

    log.info(
        "Starting reconciler: gateway=%s, contract_batch=%s, ipfs_batch=%s",
        gateway.base_url,
        settings.contract_batch_size,
        settings.ipfs_batch_size,
    )
    async with GatewayDocumentFetcher(
        config=gateway,
        tracker=tracker,
        client_factory=client_factory,
    ) as fetcher:
        yield Reconciler(
            contracts=contracts,
            tokens=tokens,
            reader=pointer_reader,
            fetcher=fetcher,
            config=settings,
        )
    log.info("Reconciler closed; %s addresses banned", len(fetcher.tracker.banned_addresses()))
