"""
Router tests: token check, path matching, and the JSON response shape.
"""

import pytest

from src.adapters.simulator_device import SimulatorDeviceGateway
from src.adapters.simulator_identity import SimulatorIdentityGateway
from src.adapters.simulator_machine_cache import InMemoryMachineCache
from src.adapters.simulator_machine_store import InMemoryMachineStore
from src.api import ApiHandler, ApiRequest
from src.domain.machine import MachineRecord, MachineStatus
from src.domain.result import FaultKind, HttpResponseCode
from src.workflow import ReservationWorkflow, WorkflowConfig

TOKEN = "valid-token"


@pytest.fixture
def store():
    store = InMemoryMachineStore()
    store.inject_machine(MachineRecord("m1", "L1", MachineStatus.AVAILABLE))
    return store


@pytest.fixture
def cache():
    return InMemoryMachineCache()


@pytest.fixture
def device(store):
    return SimulatorDeviceGateway(store=store)


@pytest.fixture
def identity():
    return SimulatorIdentityGateway(valid_tokens=[TOKEN])


@pytest.fixture
def api(store, cache, device, identity):
    workflow = ReservationWorkflow(WorkflowConfig(store=store, cache=cache, device=device))
    return ApiHandler(workflow, identity)


def _req(method: str, path: str, token: str = TOKEN, body: dict | None = None) -> ApiRequest:
    return ApiRequest(method=method, path=path, token=token, body=body or {})


# ---------------------------------------------------------------------------
# Token check
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("POST", "/machine/request"),
        ("GET", "/machine/m1"),
        ("POST", "/machine/m1/start"),
        ("DELETE", "/nowhere"),
    ],
)
async def test_invalid_token_is_unauthorized_without_side_effects(
    api, store, cache, device, method, path
):
    result = await api.handle(
        _req(method, path, token="bad", body={"locationId": "L1", "jobId": "J1"})
    )

    assert result.status_code == HttpResponseCode.UNAUTHORIZED
    assert result.fault == FaultKind.AUTH_FAILURE
    assert result.machine is None
    assert store.calls == []
    assert len(cache) == 0
    assert device.attempts == []


@pytest.mark.asyncio
async def test_identity_outage_is_unauthorized(api, identity, store):
    identity.set_unavailable()

    result = await api.handle(_req("GET", "/machine/m1"))

    assert result.status_code == HttpResponseCode.UNAUTHORIZED
    assert store.calls == []


@pytest.mark.asyncio
async def test_token_checked_before_routing(api, identity):
    await api.handle(_req("GET", "/machine/m1"))
    assert identity.checked == [TOKEN]


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_post_request_reserves_machine(api):
    result = await api.handle(
        _req("POST", "/machine/request", body={"locationId": "L1", "jobId": "J1"})
    )

    assert result.status_code == HttpResponseCode.OK
    assert result.machine.machine_id == "m1"
    assert result.machine.job_id == "J1"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {},
        {"locationId": "L1"},
        {"jobId": "J1"},
        {"locationId": "", "jobId": "J1"},
        None,
        ["L1", "J1"],
        "x",
    ],
)
async def test_post_request_missing_fields_is_bad_request(api, store, body):
    result = await api.handle(ApiRequest("POST", "/machine/request", TOKEN, body))

    assert result.status_code == HttpResponseCode.BAD_REQUEST
    assert result.fault == FaultKind.INVALID_REQUEST
    assert store.calls == []


@pytest.mark.asyncio
async def test_get_machine_by_id(api):
    result = await api.handle(_req("GET", "/machine/m1"))

    assert result.status_code == HttpResponseCode.OK
    assert result.machine.machine_id == "m1"


@pytest.mark.asyncio
async def test_hyphenated_ids_are_captured(api, store):
    store.inject_machine(MachineRecord("wash-01", "L1", MachineStatus.AVAILABLE))

    result = await api.handle(_req("GET", "/machine/wash-01"))

    assert result.machine.machine_id == "wash-01"


@pytest.mark.asyncio
async def test_post_start_runs_start(api, store):
    await store.update_machine_status("m1", MachineStatus.AWAITING_DROPOFF)

    result = await api.handle(_req("POST", "/machine/m1/start"))

    assert result.status_code == HttpResponseCode.OK
    assert result.machine.status == MachineStatus.RUNNING


@pytest.mark.asyncio
async def test_method_is_case_insensitive(api):
    result = await api.handle(_req("get", "/machine/m1"))
    assert result.status_code == HttpResponseCode.OK


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/machine/m1/start"),    # wrong method
        ("POST", "/machine/m1"),         # wrong method
        ("DELETE", "/machine/m1"),
        ("GET", "/machine/m1/extra"),    # not a prefix match
        ("GET", "/machine/m_1"),         # underscore not allowed in ids
        ("GET", "/machines/m1"),
        ("POST", "/machine/request/"),
        ("GET", "/api/machine/m1"),
    ],
)
async def test_unmatched_route_is_server_error(api, store, method, path):
    result = await api.handle(_req(method, path))

    assert result.status_code == HttpResponseCode.INTERNAL_SERVER_ERROR
    assert result.machine is None
    assert store.calls == []


# ---------------------------------------------------------------------------
# Response shape
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_ok_response_dict(api):
    result = await api.handle(
        _req("POST", "/machine/request", body={"locationId": "L1", "jobId": "J1"})
    )

    assert result.to_dict() == {
        "statusCode": 200,
        "machine": {
            "machineId": "m1",
            "locationId": "L1",
            "status": "AWAITING_DROPOFF",
            "jobId": "J1",
        },
    }


@pytest.mark.asyncio
async def test_hardware_error_response_dict(api, store, device):
    await store.update_machine_status("m1", MachineStatus.AWAITING_DROPOFF)
    await store.update_machine_job_id("m1", "J1")
    device.inject_hardware_fault("m1")

    result = await api.handle(_req("POST", "/machine/m1/start"))

    body = result.to_dict()
    assert body["statusCode"] == 520
    assert body["machine"]["status"] == "ERROR"


@pytest.mark.asyncio
async def test_error_response_dict_has_no_machine(api):
    result = await api.handle(_req("GET", "/machine/unknown"))
    assert result.to_dict() == {"statusCode": 404}


@pytest.mark.asyncio
async def test_missing_method_is_server_error(api, store):
    result = await api.handle(ApiRequest(None, "/machine/m1", TOKEN))  # type: ignore[arg-type]

    assert result.status_code == HttpResponseCode.INTERNAL_SERVER_ERROR
    assert store.calls == []
