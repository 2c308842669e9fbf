"""
Response vocabulary shared by the workflow and the router.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

from src.domain.machine import MachineRecord


class HttpResponseCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    HARDWARE_ERROR = 520  # non-standard: device fault confirmed by the store


class FaultKind(str, Enum):
    AUTH_FAILURE = "auth_failure"
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    INVALID_STATE = "invalid_state"
    HARDWARE_FAULT = "hardware_fault"
    TRANSIENT_FAULT = "transient_fault"


@dataclass
class MachineResult:
    status_code: HttpResponseCode
    machine: MachineRecord | None = None
    fault: FaultKind | None = None

    @classmethod
    def ok(cls, machine: MachineRecord) -> "MachineResult":
        return cls(HttpResponseCode.OK, machine)

    @classmethod
    def not_found(cls) -> "MachineResult":
        return cls(HttpResponseCode.NOT_FOUND, fault=FaultKind.NOT_FOUND)

    @classmethod
    def bad_request(
        cls,
        machine: MachineRecord | None = None,
        fault: FaultKind = FaultKind.INVALID_STATE,
    ) -> "MachineResult":
        return cls(HttpResponseCode.BAD_REQUEST, machine, fault)

    @classmethod
    def unauthorized(cls) -> "MachineResult":
        return cls(HttpResponseCode.UNAUTHORIZED, fault=FaultKind.AUTH_FAILURE)

    @classmethod
    def hardware_error(cls, machine: MachineRecord) -> "MachineResult":
        return cls(HttpResponseCode.HARDWARE_ERROR, machine, FaultKind.HARDWARE_FAULT)

    @classmethod
    def server_error(cls) -> "MachineResult":
        return cls(HttpResponseCode.INTERNAL_SERVER_ERROR, fault=FaultKind.TRANSIENT_FAULT)

    def to_dict(self) -> dict:
        """Wire shape: {"statusCode": int, "machine": {...}}, machine omitted when absent."""
        body: dict = {"statusCode": int(self.status_code)}
        if self.machine is not None:
            body["machine"] = self.machine.to_dict()
        return body
