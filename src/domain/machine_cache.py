"""
MachineCache port: last-known machine records, to spare store reads.
"""

from abc import ABC, abstractmethod

from src.domain.machine import MachineRecord


class MachineCache(ABC):
    """
    Port: cache machine records keyed by machine_id.

    Whole-record writes only. An entry is replaced on every successful
    mutation and never invalidated otherwise; adapters may still evict.
    """

    @abstractmethod
    def get(self, machine_id: str) -> MachineRecord | None:
        """Return the cached record, or None if not stored."""
        ...

    @abstractmethod
    def put(self, machine_id: str, record: MachineRecord) -> None:
        """Store a copy of the record, replacing any previous entry."""
        ...
