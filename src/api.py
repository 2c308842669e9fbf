"""
Request router: token check, then dispatch on method + path.

The transport layer (HTTP server, Lambda event, ...) turns a wire request
into an ApiRequest and renders MachineResult.to_dict() back.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from src.adapters.ports import IdentityGateway
from src.domain.result import FaultKind, MachineResult
from src.workflow import ReservationWorkflow

log = logging.getLogger(__name__)

_MACHINE_ID = r"(?P<machine_id>[a-zA-Z0-9-]+)"


@dataclass
class ApiRequest:
    method: str
    path: str
    token: str
    body: dict = field(default_factory=dict)


Handler = Callable[[ApiRequest, dict[str, str]], Awaitable[MachineResult]]


class ApiHandler:
    """
    Entry point for every machine API call.

    Routes are tried in order and must match the whole path. A request
    that matches none gets a generic server error.
    """

    def __init__(self, workflow: ReservationWorkflow, identity: IdentityGateway):
        self._workflow = workflow
        self._identity = identity
        self._routes: list[tuple[str, re.Pattern, Handler]] = [
            ("POST", re.compile(r"/machine/request"), self._request_machine),
            ("GET", re.compile(rf"/machine/{_MACHINE_ID}"), self._get_machine),
            ("POST", re.compile(rf"/machine/{_MACHINE_ID}/start"), self._start_machine),
        ]

    async def handle(self, request: ApiRequest) -> MachineResult:
        if not self._check_token(request.token):
            log.warning("%s %s rejected: invalid token", request.method, request.path)
            return MachineResult.unauthorized()

        for method, pattern, handler in self._routes:
            if (request.method or "").upper() != method:
                continue
            match = pattern.fullmatch(request.path)
            if match:
                return await handler(request, match.groupdict())

        log.warning("%s %s: no matching route", request.method, request.path)
        return MachineResult.server_error()

    def _check_token(self, token: str) -> bool:
        # Fail closed: an unreachable identity provider rejects the call.
        try:
            return self._identity.validate_token(token)
        except Exception as exc:
            log.error("token validation failed: %s", exc)
            return False

    async def _request_machine(self, request: ApiRequest, params: dict[str, str]) -> MachineResult:
        body = request.body if isinstance(request.body, dict) else {}
        location_id = body.get("locationId")
        job_id = body.get("jobId")
        if not location_id or not job_id:
            log.warning("machine request missing locationId or jobId: %.80r", request.body)
            return MachineResult.bad_request(fault=FaultKind.INVALID_REQUEST)
        return await self._workflow.request_machine(str(location_id), str(job_id))

    async def _get_machine(self, request: ApiRequest, params: dict[str, str]) -> MachineResult:
        return await self._workflow.get_machine(params["machine_id"])

    async def _start_machine(self, request: ApiRequest, params: dict[str, str]) -> MachineResult:
        return await self._workflow.start_machine(params["machine_id"])
