"""Per-address failure counting used to stop hammering broken documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from threading import Lock

log = getLogger(__name__)

DEFAULT_BAN_THRESHOLD = 5


@dataclass(slots=True)
class FailureTracker:
    """Counts fetch failures per normalized address.

    An address is banned once its count exceeds ``threshold``. Counts only grow:
    a successful fetch does not clear them, and banned addresses stay banned for
    the lifetime of the tracker.
    """

    threshold: int = DEFAULT_BAN_THRESHOLD
    _failures: dict[str, int] = field(default_factory=dict[str, int], init=False)
    _lock: Lock = field(default_factory=Lock, init=False)

    def is_banned(self, address: str) -> bool:
        with self._lock:
            tries = self._failures.get(address)
        if not tries:
            return False
        return tries > self.threshold

    def record_failure(self, address: str) -> int:
        with self._lock:
            tries = self._failures.get(address, 0) + 1
            self._failures[address] = tries
        if tries == self.threshold + 1:
            log.warning("[IPFS] BANNED %s after %s failed tries", address, tries)
        return tries

    def failure_count(self, address: str) -> int:
        with self._lock:
            return self._failures.get(address, 0)

    def banned_addresses(self) -> list[str]:
        with self._lock:
            return sorted(
                address for address, tries in self._failures.items() if tries > self.threshold
            )
