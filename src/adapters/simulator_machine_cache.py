"""
In-memory MachineCache: no database required.

max_entries=0 means unbounded; otherwise least-recently-used entries are
evicted once the bound is reached.
"""

from collections import OrderedDict
from dataclasses import replace

from src.domain.machine import MachineRecord
from src.domain.machine_cache import MachineCache


class InMemoryMachineCache(MachineCache):

    def __init__(self, max_entries: int = 0):
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self._store: OrderedDict[str, MachineRecord] = OrderedDict()
        self._max_entries = max_entries

    def get(self, machine_id: str) -> MachineRecord | None:
        record = self._store.get(machine_id)
        if record is None:
            return None
        self._store.move_to_end(machine_id)
        return replace(record)

    def put(self, machine_id: str, record: MachineRecord) -> None:
        self._store[machine_id] = replace(record)
        self._store.move_to_end(machine_id)
        if self._max_entries and len(self._store) > self._max_entries:
            self._store.popitem(last=False)

    def __len__(self) -> int:
        return len(self._store)
