from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from metasync.domain.model import Attribute, ContractMetadata, TokenMetadata
from metasync.domain.reconciliation import (
    ContractDocumentStage,
    CycleContext,
    Outcome,
    TokenDocumentStage,
)
from tests.support.reconciliation import (
    StubDocumentFetcher,
    contract_cache,
    make_contract,
    make_token,
    token_cache,
)

if TYPE_CHECKING:
    from tests.support.reconciliation import RecordingStore

CONTEXT = CycleContext(timestamp=1_700_000_000)
POINTER = "ipfs://ipfs/QmContract"


def test_contract_document_is_merged_and_persisted(store: RecordingStore) -> None:
    cache = contract_cache(store)
    contract = cache.add(make_contract("0x1", pointer=POINTER))
    cache.confirm_pointer(contract)
    expected = ContractMetadata(
        name="Exosama",
        description="desc",
        image="ipfs://ipfs/QmLogo",
        external_link="https://exosama.com",
        artist="moonsama",
        artist_url="https://moonsama.com",
    )
    fetcher = StubDocumentFetcher(contracts={POINTER: expected})
    stage = ContractDocumentStage(cache=cache, fetcher=fetcher)

    outcome = asyncio.run(stage.refresh(contract, context=CONTEXT))

    assert outcome is Outcome.UPDATED
    assert contract.document == expected
    assert contract.metadata_name == "Exosama"
    assert contract.last_updated_at == CONTEXT.timestamp
    assert cache.document_refresh_queue == set()
    assert store.persisted == [contract]


def test_contract_fields_are_overwritten_one_by_one(store: RecordingStore) -> None:
    cache = contract_cache(store)
    contract = cache.add(make_contract("0x1", pointer=POINTER))
    contract.apply_metadata(ContractMetadata(name="Old", artist="someone"))
    fetcher = StubDocumentFetcher(contracts={POINTER: ContractMetadata(name="New")})
    stage = ContractDocumentStage(cache=cache, fetcher=fetcher)

    asyncio.run(stage.refresh(contract, context=CONTEXT))

    assert contract.metadata_name == "New"
    assert contract.artist is None


def test_failed_fetch_leaves_entity_queued(store: RecordingStore) -> None:
    cache = contract_cache(store)
    contract = cache.add(make_contract("0x1", pointer=POINTER))
    contract.apply_metadata(ContractMetadata(name="Before"))
    cache.confirm_pointer(contract)
    fetcher = StubDocumentFetcher()
    stage = ContractDocumentStage(cache=cache, fetcher=fetcher)

    outcome = asyncio.run(stage.refresh(contract, context=CONTEXT))

    assert outcome is Outcome.FAILED
    assert contract.metadata_name == "Before"
    assert cache.document_refresh_queue == {"0x1"}
    assert store.persisted == []
    assert fetcher.calls == [POINTER]


def test_missing_pointer_is_skipped_without_fetch(store: RecordingStore) -> None:
    cache = contract_cache(store)
    contract = cache.add(make_contract("0x1"))
    cache.confirm_pointer(contract)
    fetcher = StubDocumentFetcher()
    stage = ContractDocumentStage(cache=cache, fetcher=fetcher)

    outcome = asyncio.run(stage.refresh(contract, context=CONTEXT))

    assert outcome is Outcome.SKIPPED
    assert fetcher.calls == []
    assert cache.document_refresh_queue == {"0x1"}


def test_token_document_replaces_metadata(store: RecordingStore) -> None:
    contract = make_contract("0x1")
    cache = token_cache(store)
    token = cache.add(make_token(contract, 3, pointer="ipfs://QmToken/3"))
    token.metadata = TokenMetadata(
        id=token.id, name="Stale", attributes=[Attribute(trait_type="Old", value="1")]
    )
    cache.confirm_pointer(token)
    fresh = TokenMetadata(
        id="template",
        name="Fresh",
        attributes=[Attribute(trait_type="Level", value="5", display_type="number")],
    )
    stage = TokenDocumentStage(
        cache=cache, fetcher=StubDocumentFetcher(tokens={"ipfs://QmToken/3": fresh})
    )

    outcome = asyncio.run(stage.refresh(token, context=CONTEXT))

    assert outcome is Outcome.UPDATED
    assert token.metadata is not None
    assert token.metadata.id == "0x1-3"
    assert token.metadata.name == "Fresh"
    assert token.metadata.attributes == [
        Attribute(trait_type="Level", value="5", display_type="number")
    ]
    assert store.persisted == [token]
    assert cache.document_refresh_queue == set()


def test_run_walks_the_document_queue(store: RecordingStore) -> None:
    cache = contract_cache(store)
    ok = cache.add(make_contract("0x1", pointer=POINTER))
    broken = cache.add(make_contract("0x2", pointer="ipfs://QmMissing"))
    cache.add(make_contract("0x3", pointer=POINTER))
    cache.confirm_pointer(ok)
    cache.confirm_pointer(broken)
    fetcher = StubDocumentFetcher(contracts={POINTER: ContractMetadata(name="C")})
    stage = ContractDocumentStage(cache=cache, fetcher=fetcher)

    report = asyncio.run(stage.run(CONTEXT, batch_size=1))

    assert report.count(Outcome.UPDATED) == 1
    assert report.count(Outcome.FAILED) == 1
    assert sorted(fetcher.calls) == sorted([POINTER, "ipfs://QmMissing"])
    assert cache.document_refresh_queue == {"0x2"}
