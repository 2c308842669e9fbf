"""
Machine reservation workflow.

Wires together the store, the cache and the device gateway:

  request → pick first AVAILABLE machine at location → AWAITING_DROPOFF + job id
  get     → cache-aside read
  start   → authoritative store read → device start → RUNNING

Every operation returns a MachineResult; no exception leaves an operation.
Writes that succeeded before a fault are kept: there is no rollback.

Known gaps, kept as-is:
  - No lock or compare-and-swap around reservation. Two concurrent requests
    at one location can reserve the same machine; the last writer wins.
  - Status and job id are two separate store writes, so a reader can see
    AWAITING_DROPOFF with the previous job id.
  - A reserved machine stays AWAITING_DROPOFF until started; nothing
    returns an unclaimed machine to AVAILABLE.
"""

import logging
from dataclasses import dataclass

from src.adapters.ports import DeviceGateway
from src.domain.machine import MachineRecord, MachineStatus
from src.domain.machine_cache import MachineCache
from src.domain.machine_store import MachineStore
from src.domain.result import MachineResult

log = logging.getLogger(__name__)


@dataclass
class WorkflowConfig:
    store: MachineStore
    cache: MachineCache
    device: DeviceGateway


class ReservationWorkflow:
    """
    Stateless: all state lives in the store and the cache.

    One call handles one request, awaiting each collaborator in turn.
    """

    def __init__(self, config: WorkflowConfig):
        self._cfg = config

    async def request_machine(self, location_id: str, job_id: str) -> MachineResult:
        """Reserve the first AVAILABLE machine at a location for a job."""
        try:
            machines = await self._cfg.store.list_machines_at_location(location_id)

            # First match in store order. Not load-balanced on purpose: the
            # store decides the order, which keeps selection predictable.
            candidate = next(
                (m for m in machines if m.status == MachineStatus.AVAILABLE), None
            )
            if candidate is None:
                log.info("location=%s job=%s no machine available", location_id, job_id)
                return MachineResult.not_found()

            machine_id = candidate.machine_id
            await self._cfg.store.update_machine_status(machine_id, MachineStatus.AWAITING_DROPOFF)
            await self._cfg.store.update_machine_job_id(machine_id, job_id)

            updated = await self._cfg.store.get_machine(machine_id)
            if updated is None:
                log.error("machine=%s vanished from store after reservation", machine_id)
                return MachineResult.server_error()

            self._cfg.cache.put(machine_id, updated)
            log.info(
                "machine=%s location=%s reserved → job=%s status=%s",
                machine_id, location_id, job_id, updated.status,
            )
            return MachineResult.ok(updated)
        except Exception as exc:
            log.error("location=%s job=%s reservation failed: %s", location_id, job_id, exc)
            return MachineResult.server_error()

    async def get_machine(self, machine_id: str) -> MachineResult:
        """Cache first; on a miss read the store and populate the cache."""
        try:
            cached = self._cfg.cache.get(machine_id)
            if cached is not None:
                log.debug("machine=%s cache hit", machine_id)
                return MachineResult.ok(cached)

            machine = await self._cfg.store.get_machine(machine_id)
            if machine is None:
                return MachineResult.not_found()

            self._cfg.cache.put(machine_id, machine)
            return MachineResult.ok(machine)
        except Exception as exc:
            log.error("machine=%s lookup failed: %s", machine_id, exc)
            return MachineResult.server_error()

    async def start_machine(self, machine_id: str) -> MachineResult:
        """Start the cycle of a machine awaiting drop-off."""
        try:
            # Store, not cache: the status must be authoritative before we
            # command hardware.
            machine = await self._cfg.store.get_machine(machine_id)
            if machine is None:
                return MachineResult.not_found()

            if machine.status != MachineStatus.AWAITING_DROPOFF:
                log.warning(
                    "machine=%s start rejected: status=%s", machine_id, machine.status
                )
                return MachineResult.bad_request(machine)
        except Exception as exc:
            log.error("machine=%s start lookup failed: %s", machine_id, exc)
            return MachineResult.server_error()

        try:
            await self._cfg.device.start_cycle(machine_id)
            await self._cfg.store.update_machine_status(machine_id, MachineStatus.RUNNING)
        except Exception as exc:
            log.error("machine=%s start failed: %s", machine_id, exc)
            return await self._classify_start_failure(machine_id)

        try:
            updated = await self._cfg.store.get_machine(machine_id)
            if updated is None:
                log.error("machine=%s vanished from store after start", machine_id)
                return MachineResult.server_error()

            self._cfg.cache.put(machine_id, updated)
            log.info("machine=%s started → status=%s", machine_id, updated.status)
            return MachineResult.ok(updated)
        except Exception as exc:
            log.error("machine=%s start failed: %s", machine_id, exc)
            return await self._classify_start_failure(machine_id)

    async def _classify_start_failure(self, machine_id: str) -> MachineResult:
        """
        Only the store can confirm a hardware fault.

        The device error alone can't tell a dropped connection from a broken
        machine, so HARDWARE_ERROR is returned only when a fresh store read
        shows ERROR. Everything else is a generic server error.
        """
        machine = await self._read_fault_status(machine_id)
        if machine is None or machine.status != MachineStatus.ERROR:
            return MachineResult.server_error()

        try:
            await self._cfg.store.update_machine_status(machine_id, MachineStatus.ERROR)
            self._cfg.cache.put(machine_id, machine)
        except Exception as exc:
            log.error("machine=%s could not record hardware fault: %s", machine_id, exc)
            return MachineResult.server_error()

        log.warning("machine=%s hardware fault confirmed", machine_id)
        return MachineResult.hardware_error(machine)

    async def _read_fault_status(self, machine_id: str) -> MachineRecord | None:
        """Secondary lookup while classifying a fault. A failure here is logged and dropped."""
        try:
            return await self._cfg.store.get_machine(machine_id)
        except Exception as exc:
            log.warning("machine=%s fault re-read failed: %s", machine_id, exc)
            return None
