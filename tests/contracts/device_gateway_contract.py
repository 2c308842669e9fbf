"""
Adapter contract for DeviceGateway.

Subclass this and provide create_gateway() and get_test_machine_id() to
run the contract against your adapter.
"""

from abc import ABC, abstractmethod

import pytest

from src.adapters.ports import DeviceGateway


class DeviceGatewayContract(ABC):

    @abstractmethod
    def create_gateway(self) -> DeviceGateway:
        ...

    @abstractmethod
    def get_test_machine_id(self) -> str:
        """Return the id of a machine that accepts a start command."""
        ...

    @pytest.mark.asyncio
    async def test_start_cycle_returns_none(self):
        gw = self.create_gateway()
        assert await gw.start_cycle(self.get_test_machine_id()) is None
