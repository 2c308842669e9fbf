from abc import ABC, abstractmethod


class DeviceGatewayError(Exception):
    """The device control channel could not carry out a command."""


class HardwareFaultError(DeviceGatewayError):
    """The device itself reported a fault while executing a command."""


class IdentityGatewayError(Exception):
    """The identity provider could not be reached or answered nonsense."""


class DeviceGateway(ABC):
    """
    Port: how we command physical machines.

    The workflow depends ONLY on this interface. It doesn't know or care
    whether the command reaches a real appliance or an in-memory simulator.
    """

    @abstractmethod
    async def start_cycle(self, machine_id: str) -> None:
        """Start the operating cycle. Raises DeviceGatewayError on any device-side problem."""
        ...


class IdentityGateway(ABC):
    """Port: validate an opaque caller token."""

    @abstractmethod
    def validate_token(self, token: str) -> bool:
        """True if the token is valid. May raise IdentityGatewayError."""
        ...
