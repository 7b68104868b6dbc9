"""Ports for persisting reconciled entities and reading ingestion-side flags."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from metasync.domain.model import ManagedEntity


@runtime_checkable
class EntityStore(Protocol):
    """Storage collaborator; ``persist`` is fire-and-forget from the pipeline's view."""

    def persist(self, entity: ManagedEntity) -> None: ...


@runtime_checkable
class DirtyFlagSource(Protocol):
    """Answers whether ingestion marked an entity stale since the last cycle."""

    def __call__(self, entity: ManagedEntity) -> bool: ...


__all__ = ["DirtyFlagSource", "EntityStore"]
