import os

from src.adapters.ports import DeviceGateway, IdentityGateway
from src.api import ApiHandler
from src.domain.machine_cache import MachineCache
from src.domain.machine_store import MachineStore
from src.workflow import ReservationWorkflow, WorkflowConfig

DEFAULT_DB_PATH = "data/machines.db"


def _db_path() -> str:
    db_path = os.environ.get("DB_PATH", DEFAULT_DB_PATH)
    if db_path != ":memory:" and os.path.dirname(db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return db_path


def _timeout() -> float:
    return float(os.environ.get("HTTP_TIMEOUT", "10"))


def create_machine_store(backend: str | None = None) -> MachineStore:
    """
    Factory: create the store adapter based on config.

    The backend can be passed explicitly or read from the
    MACHINE_STORE_BACKEND env var. Defaults to "sqlite".
    """
    backend = backend or os.environ.get("MACHINE_STORE_BACKEND", "sqlite")

    if backend == "sqlite":
        from src.adapters.sqlite_machine_store import SqliteMachineStore

        return SqliteMachineStore(db_path=_db_path())

    if backend == "memory":
        from src.adapters.simulator_machine_store import InMemoryMachineStore

        return InMemoryMachineStore()

    raise ValueError(f"Unknown machine store backend: {backend!r}")


def create_machine_cache(backend: str | None = None) -> MachineCache:
    backend = backend or os.environ.get("MACHINE_CACHE_BACKEND", "memory")

    if backend == "memory":
        from src.adapters.simulator_machine_cache import InMemoryMachineCache

        return InMemoryMachineCache(
            max_entries=int(os.environ.get("MACHINE_CACHE_MAX_ENTRIES", "0")),
        )

    if backend == "sqlite":
        from src.adapters.sqlite_machine_cache import SqliteMachineCache

        return SqliteMachineCache(db_path=_db_path())

    raise ValueError(f"Unknown machine cache backend: {backend!r}")


def create_device_gateway(
    channel: str | None = None,
    store: MachineStore | None = None,
) -> DeviceGateway:
    """
    The simulator is handed the store so injected hardware faults show up
    as ERROR status, like a real appliance would report them.
    """
    channel = channel or os.environ.get("DEVICE_CHANNEL", "simulator")

    if channel == "http":
        from src.adapters.smart_machine_client import SmartMachineClient

        return SmartMachineClient(
            base_url=os.environ["SMART_MACHINE_API_URL"],
            api_key=os.environ["SMART_MACHINE_API_KEY"],
            timeout=_timeout(),
        )

    if channel == "simulator":
        from src.adapters.simulator_device import SimulatorDeviceGateway

        return SimulatorDeviceGateway(store=store)

    raise ValueError(f"Unknown device channel: {channel!r}")


def create_identity_gateway(channel: str | None = None) -> IdentityGateway:
    channel = channel or os.environ.get("IDENTITY_CHANNEL", "simulator")

    if channel == "http":
        from src.adapters.identity_client import IdentityProviderClient

        return IdentityProviderClient(base_url=os.environ["IDP_URL"], timeout=_timeout())

    if channel == "simulator":
        from src.adapters.simulator_identity import SimulatorIdentityGateway

        tokens = [t.strip() for t in os.environ.get("VALID_TOKENS", "").split(",") if t.strip()]
        return SimulatorIdentityGateway(valid_tokens=tokens)

    raise ValueError(f"Unknown identity channel: {channel!r}")


def build_api(store: MachineStore | None = None) -> ApiHandler:
    """Assemble the full handler from environment config."""
    store = store or create_machine_store()
    workflow = ReservationWorkflow(
        WorkflowConfig(
            store=store,
            cache=create_machine_cache(),
            device=create_device_gateway(store=store),
        )
    )
    return ApiHandler(workflow, create_identity_gateway())
