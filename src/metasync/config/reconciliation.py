"""Batch sizing for the reconciliation cycle."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_int
from .errors import ConfigurationError

DEFAULT_CONTRACT_BATCH_SIZE = 50
DEFAULT_IPFS_BATCH_SIZE = 20


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    contract_batch_size: int = DEFAULT_CONTRACT_BATCH_SIZE
    ipfs_batch_size: int = DEFAULT_IPFS_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.contract_batch_size < 1 or self.ipfs_batch_size < 1:
            raise ConfigurationError("batch sizes must be positive")


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        contract_batch_size=optional_env_int(
            "METASYNC_CONTRACT_BATCH_SIZE", DEFAULT_CONTRACT_BATCH_SIZE, minimum=1
        ),
        ipfs_batch_size=optional_env_int(
            "METASYNC_IPFS_BATCH_SIZE", DEFAULT_IPFS_BATCH_SIZE, minimum=1
        ),
    )
