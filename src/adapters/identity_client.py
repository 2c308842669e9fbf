import requests

from .ports import IdentityGateway, IdentityGatewayError


class IdentityProviderClient(IdentityGateway):
    """
    Adapter: real identity provider over HTTP.

    POST {base_url}/tokens/validate {"token": ...}
      200 → {"valid": bool}
      401 → invalid
    """

    def __init__(self, base_url: str, timeout: float = 10):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def validate_token(self, token: str) -> bool:
        if not token:
            return False
        try:
            resp = self.session.post(
                f"{self._base_url}/tokens/validate",
                json={"token": token},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise IdentityGatewayError(str(exc)) from exc

        if resp.status_code == 401:
            return False
        try:
            resp.raise_for_status()
            return bool(resp.json().get("valid", False))
        except (requests.HTTPError, ValueError) as exc:
            raise IdentityGatewayError(f"HTTP {resp.status_code}") from exc
