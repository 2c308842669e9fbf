"""
SQLite adapter for MachineStore.

Use ":memory:" for tests, a file path for production.
"""

import sqlite3
from datetime import datetime, timezone

from src.domain.machine import MachineRecord, MachineStatus
from src.domain.machine_store import MachineStore

_SCHEMA = """
CREATE TABLE IF NOT EXISTS machines (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    machine_id  TEXT NOT NULL UNIQUE,
    location_id TEXT NOT NULL,
    status      TEXT NOT NULL DEFAULT 'AVAILABLE',
    job_id      TEXT,
    updated_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS machines_by_location ON machines (location_id, id);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteMachineStore(MachineStore):

    def __init__(self, db_path: str = "machines.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)

    def add_machine(self, record: MachineRecord) -> None:
        """Provision a machine. Not part of the port: provisioning lives outside the workflow."""
        self._conn.execute(
            "INSERT INTO machines (machine_id, location_id, status, job_id, updated_at)"
            " VALUES (?, ?, ?, ?, ?)",
            (record.machine_id, record.location_id, _status_value(record.status),
             record.job_id, _now()),
        )
        self._conn.commit()

    def count_by_location(self) -> list[tuple[str, int]]:
        """(location_id, machine count) pairs, sorted by location."""
        rows = self._conn.execute(
            "SELECT location_id, COUNT(*) AS n FROM machines"
            " GROUP BY location_id ORDER BY location_id"
        ).fetchall()
        return [(r["location_id"], r["n"]) for r in rows]

    async def list_machines_at_location(self, location_id: str) -> list[MachineRecord]:
        # Provisioning order is the listing order
        rows = self._conn.execute(
            "SELECT * FROM machines WHERE location_id = ? ORDER BY id",
            (location_id,),
        ).fetchall()
        return [self._row_to_machine(r) for r in rows]

    async def get_machine(self, machine_id: str) -> MachineRecord | None:
        row = self._conn.execute(
            "SELECT * FROM machines WHERE machine_id = ?", (machine_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_machine(row)

    async def update_machine_status(self, machine_id: str, status: MachineStatus) -> None:
        self._conn.execute(
            "UPDATE machines SET status = ?, updated_at = ? WHERE machine_id = ?",
            (_status_value(status), _now(), machine_id),
        )
        self._conn.commit()

    async def update_machine_job_id(self, machine_id: str, job_id: str) -> None:
        self._conn.execute(
            "UPDATE machines SET job_id = ?, updated_at = ? WHERE machine_id = ?",
            (job_id, _now(), machine_id),
        )
        self._conn.commit()

    @staticmethod
    def _row_to_machine(row) -> MachineRecord:
        return MachineRecord(
            machine_id=row["machine_id"],
            location_id=row["location_id"],
            status=MachineStatus.parse(row["status"]),
            job_id=row["job_id"],
        )


def _status_value(status: MachineStatus | str) -> str:
    return status.value if isinstance(status, MachineStatus) else status
