"""Per-kind entity buffer tracking refresh queues and pending writes."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Generic, TypeVar

from metasync.domain.model import ManagedEntity

if TYPE_CHECKING:
    from metasync.domain.ports import DirtyFlagSource, EntityStore

log = getLogger(__name__)

TEntity = TypeVar("TEntity", bound=ManagedEntity)


def never_dirty(entity: ManagedEntity) -> bool:
    del entity
    return False


@dataclass(slots=True)
class EntityCache(Generic[TEntity]):
    """Authoritative in-memory set of one entity kind for the running process.

    ``pointer_refresh_queue`` holds ids due for a pointer read. An id moves to
    ``document_refresh_queue`` only once its pointer has been confirmed in the
    current cycle, and leaves it once the document has been merged. Ids still
    waiting for a document when a new cycle begins go back to the pointer queue,
    so failed fetches are retried every cycle without a retry counter.
    """

    name: str
    store: EntityStore
    is_dirty: DirtyFlagSource = never_dirty
    entities: dict[str, TEntity] = field(default_factory=dict)
    pointer_refresh_queue: set[str] = field(default_factory=set[str])
    document_refresh_queue: set[str] = field(default_factory=set[str])
    _dirty: set[str] = field(default_factory=set[str], init=False)
    _pending_persist: set[str] = field(default_factory=set[str], init=False)

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.entities

    def add(self, entity: TEntity, *, refresh: bool = True) -> TEntity:
        """Register ``entity``; by default it is queued for a pointer read."""

        self.entities[entity.id] = entity
        if refresh:
            self.pointer_refresh_queue.add(entity.id)
        return entity

    def get(self, entity_id: str) -> TEntity | None:
        return self.entities.get(entity_id)

    def buffer(self) -> list[TEntity]:
        return list(self.entities.values())

    def begin_cycle(self) -> None:
        """Reset per-cycle state and take one dirty-flag reading per entity."""

        if self.document_refresh_queue:
            log.debug(
                "%s: %s entities still waiting for documents, re-queueing",
                self.name,
                len(self.document_refresh_queue),
            )
        self.pointer_refresh_queue.update(self.document_refresh_queue)
        self.document_refresh_queue.clear()
        self._dirty = {entity.id for entity in self.entities.values() if self.is_dirty(entity)}

    def has_to_update(self, entity: TEntity) -> bool:
        return entity.id in self._dirty

    def force_dirty_into_pointer_queue(self) -> int:
        forced = self._dirty.difference(self.pointer_refresh_queue)
        self.pointer_refresh_queue.update(self._dirty)
        return len(forced)

    def pointer_queue_entities(self) -> list[TEntity]:
        return self._queued(self.pointer_refresh_queue)

    def document_queue_entities(self) -> list[TEntity]:
        return self._queued(self.document_refresh_queue)

    def confirm_pointer(self, entity: TEntity) -> None:
        self.pointer_refresh_queue.discard(entity.id)
        self.document_refresh_queue.add(entity.id)

    def complete_document(self, entity: TEntity) -> None:
        self.document_refresh_queue.discard(entity.id)

    def mark_modified(self, entity: TEntity) -> None:
        self._pending_persist.add(entity.id)

    def is_modified(self, entity: TEntity) -> bool:
        return entity.id in self._pending_persist

    def save(self, entity: TEntity) -> None:
        self._pending_persist.discard(entity.id)
        self.store.persist(entity)

    def flush(self) -> int:
        """Persist entities modified this cycle that were not saved yet."""

        pending = self._queued(self._pending_persist)
        for entity in pending:
            self.save(entity)
        self._pending_persist.clear()
        return len(pending)

    def _queued(self, ids: set[str]) -> list[TEntity]:
        # insertion order of ``entities`` keeps batches deterministic
        return [entity for entity_id, entity in self.entities.items() if entity_id in ids]
