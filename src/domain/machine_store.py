"""
MachineStore port: the source of truth for machine records.
"""

from abc import ABC, abstractmethod

from src.domain.machine import MachineRecord, MachineStatus


class MachineStore(ABC):
    """
    Port: durable machine records keyed by machine_id.

    Updates are narrow, one field at a time. Nothing here is transactional:
    two consecutive updates can be observed half-applied by another reader.
    """

    @abstractmethod
    async def list_machines_at_location(self, location_id: str) -> list[MachineRecord]:
        """Return every machine at a location, in the store's own order."""
        ...

    @abstractmethod
    async def get_machine(self, machine_id: str) -> MachineRecord | None:
        """Return the machine, or None if unknown."""
        ...

    @abstractmethod
    async def update_machine_status(self, machine_id: str, status: MachineStatus) -> None:
        """Overwrite the status field."""
        ...

    @abstractmethod
    async def update_machine_job_id(self, machine_id: str, job_id: str) -> None:
        """Overwrite the job_id field."""
        ...
