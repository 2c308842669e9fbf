#!/usr/bin/env python3
"""
Provision machines into the SQLite store, or list what is there.

Usage (from project root):
    python scripts/seed_machines.py                      # list every location
    python scripts/seed_machines.py list L1              # list machines at L1
    python scripts/seed_machines.py add L1 m1 m2 m3      # provision m1..m3 at L1

Environment variables:
    DB_PATH  - SQLite database path (default: data/machines.db)
"""

import asyncio
import os
import sqlite3
import sys

# Allow running as `python scripts/seed_machines.py` from project root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.adapters.sqlite_machine_store import SqliteMachineStore
from src.domain.machine import MachineRecord, MachineStatus
from src.factory import DEFAULT_DB_PATH


async def list_location(store: SqliteMachineStore, location_id: str) -> None:
    machines = await store.list_machines_at_location(location_id)
    if not machines:
        print(f"No machines at {location_id}.")
        return

    print(f"\n{'Machine':<20}  {'Status':<18}  Job")
    print("-" * 60)
    for m in machines:
        print(f"{m.machine_id:<20}  {m.to_dict()['status']:<18}  {m.job_id or '-'}")
    print()


def add_machines(store: SqliteMachineStore, location_id: str, machine_ids: list[str]) -> None:
    for machine_id in machine_ids:
        try:
            store.add_machine(MachineRecord(machine_id, location_id, MachineStatus.AVAILABLE))
        except sqlite3.IntegrityError:
            print(f"Machine {machine_id} already provisioned, skipped.")
            continue
        print(f"Provisioned {machine_id} at {location_id}.")


def list_locations(store: SqliteMachineStore) -> None:
    counts = store.count_by_location()
    if not counts:
        print("No machines provisioned.")
    for location_id, count in counts:
        print(f"{location_id:<20}  {count} machine(s)")


async def main() -> None:
    db_path = os.environ.get("DB_PATH", DEFAULT_DB_PATH)
    if os.path.dirname(db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
    store = SqliteMachineStore(db_path)

    if len(sys.argv) < 2:
        list_locations(store)
        return

    cmd = sys.argv[1]

    if cmd == "list" and len(sys.argv) >= 3:
        await list_location(store, sys.argv[2])
    elif cmd == "add" and len(sys.argv) >= 4:
        add_machines(store, sys.argv[2], sys.argv[3:])
    else:
        print(__doc__)


if __name__ == "__main__":
    asyncio.run(main())
