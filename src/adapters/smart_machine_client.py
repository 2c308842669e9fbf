import logging

import requests

from .ports import DeviceGateway, DeviceGatewayError, HardwareFaultError

log = logging.getLogger(__name__)


class SmartMachineClient(DeviceGateway):
    """
    Adapter: real smart-machine HTTP control API.

    POST {base_url}/machines/{machine_id}/start
      2xx  → cycle started
      409  → the device reports a hardware fault
      else → DeviceGatewayError
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 10):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )

    async def start_cycle(self, machine_id: str) -> None:
        url = f"{self._base_url}/machines/{machine_id}/start"
        try:
            resp = self.session.post(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise DeviceGatewayError(f"start {machine_id}: {exc}") from exc

        if resp.status_code == 409:
            log.warning("machine=%s device reported fault: %.120s", machine_id, resp.text)
            raise HardwareFaultError(f"machine {machine_id} reported a fault")
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise DeviceGatewayError(f"start {machine_id}: HTTP {resp.status_code}") from exc
