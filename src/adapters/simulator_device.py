from src.domain.machine import MachineStatus
from src.domain.machine_store import MachineStore

from .ports import DeviceGateway, DeviceGatewayError, HardwareFaultError


class SimulatorDeviceGateway(DeviceGateway):
    """
    In-memory fake for testing. No mocking framework needed.

    When built with a store, a hardware fault also flips the machine to ERROR
    in that store, the way a real appliance reports its own fault upstream.

    Test helpers:
        inject_hardware_fault()  : next start on this machine reports a device fault
        inject_transient_fault() : next start on this machine fails without a status change
        started                  : machine ids whose cycle was started
        attempts                 : every machine id start_cycle() was called with
    """

    def __init__(self, store: MachineStore | None = None):
        self._store = store
        self._faults: dict[str, DeviceGatewayError] = {}
        self.started: list[str] = []
        self.attempts: list[str] = []

    def inject_hardware_fault(self, machine_id: str) -> None:
        self._faults[machine_id] = HardwareFaultError(f"machine {machine_id} reported a fault")

    def inject_transient_fault(self, machine_id: str) -> None:
        self._faults[machine_id] = DeviceGatewayError(f"machine {machine_id} did not answer")

    async def start_cycle(self, machine_id: str) -> None:
        self.attempts.append(machine_id)
        fault = self._faults.pop(machine_id, None)
        if fault is None:
            self.started.append(machine_id)
            return
        if isinstance(fault, HardwareFaultError) and self._store is not None:
            await self._store.update_machine_status(machine_id, MachineStatus.ERROR)
        raise fault
