"""Per-cycle values shared by every reconciliation stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .batching import BatchReport


@dataclass(slots=True, frozen=True)
class CycleContext:
    timestamp: int
    cycle: int = 1


class Outcome(StrEnum):
    UPDATED = "updated"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(slots=True, frozen=True)
class StageReport:
    stage: str
    counts: dict[Outcome, int] = field(default_factory=dict[Outcome, int])
    errors: int = 0

    @classmethod
    def from_batch(cls, stage: str, report: BatchReport[Outcome]) -> StageReport:
        counts: dict[Outcome, int] = {}
        for outcome in report.results:
            counts[outcome] = counts.get(outcome, 0) + 1
        return cls(stage=stage, counts=counts, errors=len(report.failures))

    def count(self, outcome: Outcome) -> int:
        return self.counts.get(outcome, 0)

    @property
    def attempted(self) -> int:
        return sum(self.counts.values()) + self.errors

    def summary(self) -> str:
        parts = [f"{outcome.value}={count}" for outcome, count in sorted(self.counts.items())]
        if self.errors:
            parts.append(f"errors={self.errors}")
        return f"{self.stage}: " + (", ".join(parts) if parts else "idle")
