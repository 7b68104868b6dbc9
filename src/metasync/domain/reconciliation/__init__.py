"""Metadata reconciliation pipeline."""

from __future__ import annotations

from .batching import BatchFailure, BatchReport, run_in_batches
from .cache import EntityCache, never_dirty
from .context import CycleContext, Outcome, StageReport
from .documents import ContractDocumentStage, DocumentRefreshStage, TokenDocumentStage
from .orchestrator import CycleReport, Reconciler
from .pointers import ContractPointerStage, PointerRefreshStage, TokenPointerStage

__all__ = [
    "BatchFailure",
    "BatchReport",
    "ContractDocumentStage",
    "ContractPointerStage",
    "CycleContext",
    "CycleReport",
    "DocumentRefreshStage",
    "EntityCache",
    "Outcome",
    "PointerRefreshStage",
    "Reconciler",
    "StageReport",
    "TokenDocumentStage",
    "TokenPointerStage",
    "never_dirty",
    "run_in_batches",
]
