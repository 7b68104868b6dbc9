"""Run an async per-entity operation over a sequence in fixed-size waves."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Generic, TypeVar

from metasync.domain.model import ManagedEntity

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

log = getLogger(__name__)

TEntity = TypeVar("TEntity", bound=ManagedEntity)
TResult = TypeVar("TResult")


@dataclass(slots=True, frozen=True)
class BatchFailure:
    entity_id: str
    error: Exception


@dataclass(slots=True)
class BatchReport(Generic[TResult]):
    results: list[TResult] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list[BatchFailure])

    @property
    def processed(self) -> int:
        return len(self.results) + len(self.failures)


async def run_in_batches(
    entities: Sequence[TEntity],
    operation: Callable[[TEntity], Awaitable[TResult]],
    *,
    batch_size: int,
) -> BatchReport[TResult]:
    """Await ``operation`` for every entity, at most ``batch_size`` at a time.

    Chunks are contiguous and strictly sequential; inside a chunk all operations
    run concurrently. An exception raised by one operation is logged and reported
    without cancelling its siblings or later chunks.
    """

    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    report = BatchReport[TResult]()
    for start in range(0, len(entities), batch_size):
        chunk = entities[start : start + batch_size]
        outcomes = await asyncio.gather(
            *(operation(entity) for entity in chunk),
            return_exceptions=True,
        )
        for entity, outcome in zip(chunk, outcomes, strict=True):
            if isinstance(outcome, Exception):
                log.error("Unexpected error while processing %s: %r", entity.id, outcome)
                report.failures.append(BatchFailure(entity_id=entity.id, error=outcome))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                report.results.append(outcome)
    return report
