"""
SQLite adapter for MachineCache.

Lets several worker processes on one host share last-known machine state.
Use ":memory:" for tests, a file path for production.
"""

import sqlite3
from datetime import datetime, timezone

from src.domain.machine import MachineRecord, MachineStatus
from src.domain.machine_cache import MachineCache

_SCHEMA = """
CREATE TABLE IF NOT EXISTS machine_cache (
    machine_id  TEXT PRIMARY KEY,
    location_id TEXT NOT NULL,
    status      TEXT NOT NULL,
    job_id      TEXT,
    cached_at   TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteMachineCache(MachineCache):

    def __init__(self, db_path: str = "machines.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)

    def get(self, machine_id: str) -> MachineRecord | None:
        row = self._conn.execute(
            "SELECT * FROM machine_cache WHERE machine_id = ?",
            (machine_id,),
        ).fetchone()
        if not row:
            return None
        return MachineRecord(
            machine_id=row["machine_id"],
            location_id=row["location_id"],
            status=MachineStatus.parse(row["status"]),
            job_id=row["job_id"],
        )

    def put(self, machine_id: str, record: MachineRecord) -> None:
        status = record.status.value if isinstance(record.status, MachineStatus) else record.status
        self._conn.execute(
            "INSERT OR REPLACE INTO machine_cache"
            " (machine_id, location_id, status, job_id, cached_at)"
            " VALUES (?, ?, ?, ?, ?)",
            (machine_id, record.location_id, status, record.job_id, _now()),
        )
        self._conn.commit()
