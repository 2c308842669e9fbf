"""
Machine records as held by the store and mirrored by the cache.

A record is created in status AVAILABLE by device provisioning, outside
this service. The workflow only ever moves it forward:

    AVAILABLE → AWAITING_DROPOFF → RUNNING
                        ↘ ERROR
"""

from dataclasses import dataclass
from enum import Enum


class MachineStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    AWAITING_DROPOFF = "AWAITING_DROPOFF"
    RUNNING = "RUNNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, value: str) -> "MachineStatus | str":
        """Return the enum member, or the raw string for statuses we don't produce."""
        try:
            return cls(value)
        except ValueError:
            return value


@dataclass
class MachineRecord:
    """One physical machine at a location."""

    machine_id: str
    location_id: str
    status: MachineStatus | str
    job_id: str | None = None  # only meaningful once reserved

    def to_dict(self) -> dict:
        status = self.status.value if isinstance(self.status, MachineStatus) else self.status
        return {
            "machineId": self.machine_id,
            "locationId": self.location_id,
            "status": status,
            "jobId": self.job_id,
        }
