"""
In-memory MachineStore: no database required.
"""

from dataclasses import replace

from src.domain.machine import MachineRecord, MachineStatus
from src.domain.machine_store import MachineStore


class InMemoryMachineStore(MachineStore):
    """
    In-memory fake for testing. No mocking framework needed.

    Test helpers:
        inject_machine()  : provision a machine (insertion order is list order)
        fail_next()       : make the next call to a named method raise
        calls             : list of (method, machine_or_location_id) tuples
    """

    def __init__(self):
        self._machines: dict[str, MachineRecord] = {}
        self._failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def inject_machine(self, record: MachineRecord) -> None:
        """Test helper: provision a machine."""
        self._machines[record.machine_id] = replace(record)

    def fail_next(self, method: str, exc: Exception | None = None) -> None:
        """Test helper: the next call to `method` raises `exc` (RuntimeError by default)."""
        self._failures[method] = exc or RuntimeError(f"simulated {method} failure")

    def _record_call(self, method: str, key: str) -> None:
        self.calls.append((method, key))
        exc = self._failures.pop(method, None)
        if exc is not None:
            raise exc

    async def list_machines_at_location(self, location_id: str) -> list[MachineRecord]:
        self._record_call("list_machines_at_location", location_id)
        return [replace(m) for m in self._machines.values() if m.location_id == location_id]

    async def get_machine(self, machine_id: str) -> MachineRecord | None:
        self._record_call("get_machine", machine_id)
        machine = self._machines.get(machine_id)
        return replace(machine) if machine else None

    async def update_machine_status(self, machine_id: str, status: MachineStatus) -> None:
        self._record_call("update_machine_status", machine_id)
        if machine_id in self._machines:
            self._machines[machine_id].status = status

    async def update_machine_job_id(self, machine_id: str, job_id: str) -> None:
        self._record_call("update_machine_job_id", machine_id)
        if machine_id in self._machines:
            self._machines[machine_id].job_id = job_id

    @property
    def mutations(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0].startswith("update_")]
