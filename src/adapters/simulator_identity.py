from .ports import IdentityGateway, IdentityGatewayError


class SimulatorIdentityGateway(IdentityGateway):
    """
    Adapter: accept a fixed set of tokens. For dev/testing.

    Test helpers:
        add_token() / revoke_token()
        set_unavailable() : every validation raises IdentityGatewayError
        checked           : tokens seen, in order
    """

    def __init__(self, valid_tokens: list[str] | None = None):
        self._valid = set(valid_tokens or [])
        self._unavailable = False
        self.checked: list[str] = []

    def add_token(self, token: str) -> None:
        self._valid.add(token)

    def revoke_token(self, token: str) -> None:
        self._valid.discard(token)

    def set_unavailable(self, unavailable: bool = True) -> None:
        self._unavailable = unavailable

    def validate_token(self, token: str) -> bool:
        self.checked.append(token)
        if self._unavailable:
            raise IdentityGatewayError("identity provider unavailable")
        return bool(token) and token in self._valid
